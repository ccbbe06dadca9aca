from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.common import MessageResponse, TaskListing, TaskOrFolder, TaskOrFolderEnvelope
from ..schemas.folder import FolderDetail, FolderRead
from ..schemas.task import TaskOrFolderCreate, TaskPatch, TaskRead
from ..services import tasks as task_service
from ..services.tasks import ItemKind
from .auth import get_current_user

router = APIRouter()

_DELETED_MESSAGES = {
    ItemKind.TASK: "Task deleted",
    ItemKind.FOLDER: "Folder and tasks deleted",
}


def _render(resolved, folder_schema):
    """Folders go out through their schema so membership is always included."""
    if resolved.kind is ItemKind.FOLDER:
        return folder_schema.model_validate(resolved.item)
    return resolved.item


@router.get("/task", response_model=TaskListing)
def get_all_tasks_and_folders(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """All of the caller's tasks (newest first) and folders (by name)."""
    tasks, folders = task_service.list_all(db, current_user.id)
    return {"tasks": tasks, "folders": [FolderRead.model_validate(folder) for folder in folders]}


@router.post("/task", response_model=TaskOrFolderEnvelope, status_code=status.HTTP_201_CREATED)
def create_task_or_folder(
    payload: TaskOrFolderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a task, or a folder when ``type`` is ``folder``."""
    created = task_service.create_task_or_folder(db, current_user.id, payload.model_dump())
    message = "Folder created" if created.kind is ItemKind.FOLDER else "Task created"
    return {"message": message, "data": _render(created, FolderRead)}


@router.get("/task/folder/{folder_id}", response_model=List[TaskRead])
def get_tasks_by_folder(
    folder_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_service.list_by_folder(db, current_user.id, folder_id)


@router.get("/task/nofolder", response_model=List[TaskRead])
def get_tasks_without_folder(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_service.list_unfiled(db, current_user.id)


@router.get("/task/{task_id}", response_model=TaskOrFolder)
def get_task_or_folder(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """A task by id, or else a folder with its tasks populated."""
    return _render(task_service.get_by_id(db, current_user.id, task_id), FolderDetail)


@router.patch("/task/{task_id}", response_model=TaskOrFolderEnvelope)
def update_task_or_folder(
    task_id: str,
    patch: TaskPatch,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a task's title, status or due date, or rename a folder."""
    updated = task_service.update_by_id(db, current_user.id, task_id, patch.model_dump(exclude_unset=True))
    return {"message": "Updated", "data": _render(updated, FolderRead)}


@router.delete("/task/{item_type}/{item_id}", response_model=MessageResponse)
def delete_typed(
    item_type: str,
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    deleted = task_service.delete_by_id_or_type(db, current_user.id, item_id, item_type=item_type)
    return {"message": _DELETED_MESSAGES[deleted]}


@router.delete("/task/{item_id}", response_model=MessageResponse)
def delete_untyped(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a task, or a folder and its tasks; the task wins on a shared id."""
    deleted = task_service.delete_by_id_or_type(db, current_user.id, item_id)
    return {"message": _DELETED_MESSAGES[deleted]}
