from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime
from typing import List, TYPE_CHECKING
from uuid import uuid4

from .timestamps import timestamp_field

if TYPE_CHECKING:
    from .folder import Folder
    from .task import Task


class User(SQLModel, table=True):
    """User model for authentication and ownership of tasks and folders."""
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    username: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()

    tasks: List["Task"] = Relationship(back_populates="user")
    folders: List["Folder"] = Relationship(back_populates="user")
