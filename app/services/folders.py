"""Folder lifecycle and folder/task membership.

Membership is derived from ``Task.folder_id`` (see ``Folder.tasks``), so
every operation here that touches tasks writes one side only, inside one
transaction, and the folder's task list follows.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlmodel import Session

from ..database import transaction
from ..exceptions import NotFoundError, ValidationError
from ..models import Folder, Task, TaskStatus, utcnow
from .fields import apply_task_values, parse_due_date, parse_status, require_id, require_text, validate_task_patch

logger = logging.getLogger(__name__)


def find_folder(db: Session, user_id: str, folder_id: str) -> Optional[Folder]:
    """Owner-scoped lookup; ``None`` when absent or owned by someone else."""
    return db.query(Folder).filter(Folder.id == folder_id, Folder.user_id == user_id).first()


def _require_folder(db: Session, user_id: str, folder_id: str) -> Folder:
    folder = find_folder(db, user_id, folder_id)
    if folder is None:
        raise NotFoundError("Folder not found")
    return folder


def _find_member_task(db: Session, user_id: str, folder_id: str, task_id: str) -> Task:
    task = (
        db.query(Task)
        .filter(Task.id == task_id, Task.folder_id == folder_id, Task.user_id == user_id)
        .first()
    )
    if task is None:
        raise NotFoundError("Task not found")
    return task


def _require_ids(folder_id: Any, task_id: Any):
    try:
        return require_id(folder_id), require_id(task_id)
    except ValidationError:
        raise ValidationError("Invalid id(s)")


def create_folder(db: Session, user_id: str, name: Any) -> Folder:
    name = require_text(name, "Folder name required")
    folder = Folder(name=name, user_id=user_id)
    with transaction(db, "create folder"):
        db.add(folder)
    db.refresh(folder)
    logger.info("Created folder %s for user %s", folder.id, user_id)
    return folder


def get_folder(db: Session, user_id: str, folder_id: Any) -> Folder:
    """Return the folder; its ``tasks`` load on access."""
    folder_id = require_id(folder_id, "Invalid folder id")
    return _require_folder(db, user_id, folder_id)


def list_tasks_in_folder(db: Session, user_id: str, folder_id: Any) -> List[Task]:
    folder_id = require_id(folder_id, "Invalid folder id")
    return (
        db.query(Task)
        .filter(Task.folder_id == folder_id, Task.user_id == user_id)
        .order_by(Task.created_at.desc())
        .all()
    )


def add_task_to_folder(
    db: Session,
    user_id: str,
    folder_id: Any,
    title: Any,
    due_date: Any = None,
) -> Task:
    folder_id = require_id(folder_id, "Invalid folder id")
    title = require_text(title, "Title required")
    due = parse_due_date(due_date)
    folder = _require_folder(db, user_id, folder_id)

    task = Task(title=title, due_date=due, folder_id=folder.id, user_id=user_id)
    with transaction(db, "add task to folder"):
        db.add(task)
    db.refresh(task)
    logger.info("Added task %s to folder %s", task.id, folder.id)
    return task


def update_task_in_folder(
    db: Session,
    user_id: str,
    folder_id: Any,
    task_id: Any,
    patch: Dict[str, Any],
) -> Task:
    """Apply ``patch`` (any of title, status, due_date) to a folder's task.

    The task must match the folder, the task id and the owner at once.
    """
    folder_id, task_id = _require_ids(folder_id, task_id)
    values = validate_task_patch(patch)
    task = _find_member_task(db, user_id, folder_id, task_id)
    with transaction(db, "update task in folder"):
        apply_task_values(task, values)
    db.refresh(task)
    return task


def update_task_status_in_folder(
    db: Session,
    user_id: str,
    folder_id: Any,
    task_id: Any,
    status: Any,
) -> Task:
    folder_id, task_id = _require_ids(folder_id, task_id)
    new_status = parse_status(status)
    task = _find_member_task(db, user_id, folder_id, task_id)
    with transaction(db, "update task status"):
        apply_task_values(task, {"status": new_status})
    db.refresh(task)
    return task


def delete_task_in_folder(db: Session, user_id: str, folder_id: Any, task_id: Any) -> None:
    folder_id, task_id = _require_ids(folder_id, task_id)
    task = _find_member_task(db, user_id, folder_id, task_id)
    with transaction(db, "delete task in folder"):
        db.delete(task)
    logger.info("Deleted task %s from folder %s", task_id, folder_id)


def reset_progress(db: Session, user_id: str, folder_id: Any) -> int:
    """Set every task of the folder back to Pending. Returns the task count."""
    folder_id = require_id(folder_id, "Invalid folder id")
    _require_folder(db, user_id, folder_id)
    with transaction(db, "reset folder progress"):
        count = (
            db.query(Task)
            .filter(Task.folder_id == folder_id, Task.user_id == user_id)
            .update(
                {Task.status: TaskStatus.PENDING, Task.updated_at: utcnow()},
                synchronize_session=False,
            )
        )
    logger.debug("Reset %d task(s) in folder %s", count, folder_id)
    return count


def _delete_member_tasks(db: Session, user_id: str, folder_id: str) -> int:
    return (
        db.query(Task)
        .filter(Task.folder_id == folder_id, Task.user_id == user_id)
        .delete(synchronize_session=False)
    )


def clear_progress(db: Session, user_id: str, folder_id: Any) -> int:
    """Delete every task of the folder. Returns how many were deleted."""
    folder_id = require_id(folder_id, "Invalid folder id")
    folder = _require_folder(db, user_id, folder_id)
    with transaction(db, "clear folder progress"):
        count = _delete_member_tasks(db, user_id, folder_id)
        folder.updated_at = utcnow()
    logger.info("Cleared %d task(s) from folder %s", count, folder_id)
    return count


def rename_folder(db: Session, user_id: str, folder_id: str, name: Any) -> Optional[Folder]:
    folder = find_folder(db, user_id, folder_id)
    if folder is None:
        return None
    folder.name = require_text(name, "Folder name required")
    folder.updated_at = utcnow()
    with transaction(db, "rename folder"):
        db.add(folder)
    db.refresh(folder)
    return folder


def delete_folder(db: Session, user_id: str, folder_id: str) -> bool:
    """Delete the folder and all of its tasks together.

    Returns ``False`` when the user owns no such folder; nothing is touched.
    """
    folder = find_folder(db, user_id, folder_id)
    if folder is None:
        return False
    with transaction(db, "delete folder"):
        count = _delete_member_tasks(db, user_id, folder_id)
        db.delete(folder)
    logger.info("Deleted folder %s and %d task(s)", folder_id, count)
    return True
