from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.common import MessageResponse
from ..schemas.folder import FolderCreate, FolderDetail
from ..schemas.task import FolderTaskCreate, StatusUpdate, TaskPatch, TaskRead
from ..services import folders as folder_service
from .auth import get_current_user

router = APIRouter()


@router.post("/folders", response_model=FolderDetail, status_code=status.HTTP_201_CREATED)
def create_folder(
    folder: FolderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FolderDetail.model_validate(folder_service.create_folder(db, current_user.id, folder.name))


@router.get("/folders/{folder_id}", response_model=FolderDetail)
def get_folder(
    folder_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Folder details, including its tasks."""
    return FolderDetail.model_validate(folder_service.get_folder(db, current_user.id, folder_id))


@router.get("/folders/{folder_id}/tasks", response_model=List[TaskRead])
def get_tasks_in_folder(
    folder_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return folder_service.list_tasks_in_folder(db, current_user.id, folder_id)


@router.post("/folders/{folder_id}/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def add_task_to_folder(
    folder_id: str,
    task: FolderTaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return folder_service.add_task_to_folder(
        db, current_user.id, folder_id, task.title, due_date=task.due_date
    )


@router.patch("/folders/{folder_id}/tasks/{task_id}", response_model=TaskRead)
def update_task_in_folder(
    folder_id: str,
    task_id: str,
    patch: TaskPatch,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return folder_service.update_task_in_folder(
        db, current_user.id, folder_id, task_id, patch.model_dump(exclude_unset=True)
    )


@router.delete("/folders/{folder_id}/tasks/{task_id}", response_model=MessageResponse)
def delete_task_in_folder(
    folder_id: str,
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    folder_service.delete_task_in_folder(db, current_user.id, folder_id, task_id)
    return {"message": "Task deleted"}


@router.patch("/folders/{folder_id}/tasks/{task_id}/status", response_model=TaskRead)
def update_task_status(
    folder_id: str,
    task_id: str,
    update: StatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return folder_service.update_task_status_in_folder(
        db, current_user.id, folder_id, task_id, update.status
    )


@router.patch("/folders/{folder_id}/progress/reset", response_model=MessageResponse)
def reset_progress(
    folder_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Set every task in the folder back to Pending."""
    folder_service.reset_progress(db, current_user.id, folder_id)
    return {"message": "Folder progress reset"}


@router.delete("/folders/{folder_id}/progress", response_model=MessageResponse)
def clear_progress(
    folder_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete every task in the folder; the folder itself stays."""
    folder_service.clear_progress(db, current_user.id, folder_id)
    return {"message": "Folder progress cleared"}
