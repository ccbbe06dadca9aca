from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING
from uuid import uuid4

from .timestamps import timestamp_field

if TYPE_CHECKING:
    from .task import Task
    from .user import User


class Folder(SQLModel, table=True):
    """A named group of tasks.

    Membership is not stored on the folder: ``tasks`` is loaded from
    ``Task.folder_id``, oldest first, so it always agrees with the tasks
    themselves.
    """
    __tablename__ = "folders"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str
    user_id: str = Field(index=True, foreign_key="users.id")
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()

    tasks: List["Task"] = Relationship(
        back_populates="folder",
        sa_relationship_kwargs={"order_by": "Task.created_at"},
    )
    user: Optional["User"] = Relationship(back_populates="folders")

    @property
    def task_ids(self) -> List[str]:
        return [task.id for task in self.tasks]
