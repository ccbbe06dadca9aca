from pydantic import AliasChoices, BaseModel, Field
from datetime import date, datetime
from typing import Optional

from ..models import TaskStatus


class TaskRead(BaseModel):
    """Task as returned by the API (camelCase on the wire)."""
    id: str
    title: str
    status: TaskStatus
    due_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("due_date", "dueDate"),
        serialization_alias="dueDate",
    )
    folder_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("folder_id", "folder"),
        serialization_alias="folder",
    )
    user_id: str = Field(
        validation_alias=AliasChoices("user_id", "user"),
        serialization_alias="user",
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )

    class Config:
        from_attributes = True


class TaskOrFolderCreate(BaseModel):
    """Body of ``POST /task``.

    Everything is optional here; the task service owns the field rules so
    that error messages stay the same for every entry point.
    """
    type: Optional[str] = None
    title: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    folder: Optional[str] = None

    class Config:
        populate_by_name = True


class TaskPatch(BaseModel):
    """Partial update of a task. Only the fields sent are applied."""
    title: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")

    class Config:
        populate_by_name = True


class FolderTaskCreate(BaseModel):
    title: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")

    class Config:
        populate_by_name = True


class StatusUpdate(BaseModel):
    status: Optional[str] = None
