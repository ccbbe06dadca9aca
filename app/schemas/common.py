from pydantic import BaseModel
from typing import List, Union

from .folder import FolderDetail, FolderRead
from .task import TaskRead


class MessageResponse(BaseModel):
    message: str


class TaskOrFolderEnvelope(BaseModel):
    message: str
    data: Union[TaskRead, FolderRead]


class TaskListing(BaseModel):
    tasks: List[TaskRead]
    folders: List[FolderRead]


# Polymorphic read: a task, or a folder with its tasks populated.
TaskOrFolder = Union[TaskRead, FolderDetail]
