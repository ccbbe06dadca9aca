from sqlmodel import SQLModel, Field, Relationship
from datetime import date, datetime
from typing import Optional, TYPE_CHECKING
from uuid import uuid4
import enum

from .timestamps import timestamp_field

if TYPE_CHECKING:
    from .folder import Folder
    from .user import User


class TaskStatus(str, enum.Enum):
    PENDING = "Pending"
    WORKING = "Working"
    COMPLETED = "Completed"


class Task(SQLModel, table=True):
    """A to-do item owned by one user and filed in at most one folder."""
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str
    due_date: Optional[date] = None
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    folder_id: Optional[str] = Field(default=None, index=True, foreign_key="folders.id")
    user_id: str = Field(index=True, foreign_key="users.id")
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()

    folder: Optional["Folder"] = Relationship(back_populates="tasks")
    user: Optional["User"] = Relationship(back_populates="tasks")
