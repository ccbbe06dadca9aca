from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
from typing import List, Optional

from .task import TaskRead


class FolderCreate(BaseModel):
    name: Optional[str] = None


class FolderRead(BaseModel):
    """Folder with its membership as a list of task ids."""
    id: str
    name: str
    user_id: str = Field(
        validation_alias=AliasChoices("user_id", "user"),
        serialization_alias="user",
    )
    task_ids: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("task_ids", "tasks"),
        serialization_alias="tasks",
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


class FolderDetail(BaseModel):
    """Folder with its tasks populated."""
    id: str
    name: str
    user_id: str = Field(
        validation_alias=AliasChoices("user_id", "user"),
        serialization_alias="user",
    )
    tasks: List[TaskRead] = Field(default_factory=list)
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
