"""Task lifecycle and polymorphic task/folder identifiers.

An id handed to this module may name a task or a folder. Resolution is
always task first, then folder, and is expressed as a ``ResolvedItem`` so
callers branch on ``kind`` instead of chaining fallible lookups.
"""
import enum
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from sqlmodel import Session

from ..database import transaction
from ..exceptions import NotFoundError, ValidationError
from ..models import Folder, Task, TaskStatus
from . import folders
from .fields import (
    apply_task_values,
    is_valid_id,
    parse_due_date,
    parse_status,
    require_id,
    require_text,
    sanitize,
    validate_task_patch,
)

logger = logging.getLogger(__name__)


class ItemKind(str, enum.Enum):
    TASK = "task"
    FOLDER = "folder"
    NOT_FOUND = "not_found"


class ResolvedItem(NamedTuple):
    kind: ItemKind
    item: Optional[Union[Task, Folder]] = None


NOT_FOUND = ResolvedItem(ItemKind.NOT_FOUND)


def find_task(db: Session, user_id: str, task_id: str) -> Optional[Task]:
    return db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()


def resolve_item(db: Session, user_id: str, item_id: str) -> ResolvedItem:
    """Look ``item_id`` up as the user's task, then as the user's folder."""
    task = find_task(db, user_id, item_id)
    if task is not None:
        return ResolvedItem(ItemKind.TASK, task)
    folder = folders.find_folder(db, user_id, item_id)
    if folder is not None:
        return ResolvedItem(ItemKind.FOLDER, folder)
    return NOT_FOUND


def create_task(
    db: Session,
    user_id: str,
    title: Any,
    status: Any = None,
    due_date: Any = None,
    folder_id: Any = None,
) -> Task:
    """Create a task, optionally filed in one of the user's folders.

    ``status`` defaults to Pending. The task row carries the membership, so
    the folder's task list includes the new task as soon as this commits.
    """
    title = require_text(title, "Title required")
    new_status = TaskStatus.PENDING if status in (None, "") else parse_status(status)
    due = parse_due_date(due_date)

    folder = None
    if folder_id not in (None, ""):
        if not is_valid_id(folder_id):
            raise ValidationError("Invalid folder id")
        folder = folders.find_folder(db, user_id, sanitize(folder_id).lower())
        if folder is None:
            raise ValidationError("Folder not found / not yours")

    task = Task(
        title=title,
        status=new_status,
        due_date=due,
        folder_id=folder.id if folder else None,
        user_id=user_id,
    )
    with transaction(db, "create task"):
        db.add(task)
    db.refresh(task)
    logger.info("Created task %s for user %s", task.id, user_id)
    return task


def create_task_or_folder(db: Session, user_id: str, payload: Dict[str, Any]) -> ResolvedItem:
    """Create a folder or a task depending on ``payload["type"]``.

    For folders only ``title`` is used, as the folder name.
    """
    item_type = payload.get("type")
    title = payload.get("title")
    if not item_type or title is None or not str(title).strip():
        raise ValidationError("type and title required")

    if item_type == ItemKind.FOLDER.value:
        return ResolvedItem(ItemKind.FOLDER, folders.create_folder(db, user_id, title))
    if item_type != ItemKind.TASK.value:
        raise ValidationError("Invalid type")

    task = create_task(
        db,
        user_id,
        title,
        status=payload.get("status"),
        due_date=payload.get("due_date"),
        folder_id=payload.get("folder"),
    )
    return ResolvedItem(ItemKind.TASK, task)


def list_all(db: Session, user_id: str) -> Tuple[List[Task], List[Folder]]:
    tasks = db.query(Task).filter(Task.user_id == user_id).order_by(Task.created_at.desc()).all()
    user_folders = db.query(Folder).filter(Folder.user_id == user_id).order_by(Folder.name.asc()).all()
    return tasks, user_folders


def list_by_folder(db: Session, user_id: str, folder_id: Any) -> List[Task]:
    return folders.list_tasks_in_folder(db, user_id, folder_id)


def list_unfiled(db: Session, user_id: str) -> List[Task]:
    return (
        db.query(Task)
        .filter(Task.user_id == user_id, Task.folder_id.is_(None))
        .order_by(Task.created_at.desc())
        .all()
    )


def get_by_id(db: Session, user_id: str, item_id: Any) -> ResolvedItem:
    resolved = resolve_item(db, user_id, require_id(item_id))
    if resolved.kind is ItemKind.NOT_FOUND:
        raise NotFoundError("Not found")
    return resolved


def update_by_id(db: Session, user_id: str, item_id: Any, patch: Dict[str, Any]) -> ResolvedItem:
    """Update a task, or rename a folder when no task has this id.

    ``patch`` holds only the fields the caller sent (title, status,
    due_date). The folder fallback needs a title; status and due date mean
    nothing for a folder and are dropped there.
    """
    item_id = require_id(item_id)
    if not patch:
        raise ValidationError("Provide at least one field to update")
    values = validate_task_patch(patch)

    task = find_task(db, user_id, item_id)
    if task is not None:
        with transaction(db, "update task"):
            apply_task_values(task, values)
        db.refresh(task)
        return ResolvedItem(ItemKind.TASK, task)

    if "title" in values:
        folder = folders.rename_folder(db, user_id, item_id, values["title"])
        if folder is not None:
            return ResolvedItem(ItemKind.FOLDER, folder)

    raise NotFoundError("Not found")


def _delete_task(db: Session, user_id: str, item_id: str) -> bool:
    task = find_task(db, user_id, item_id)
    if task is None:
        return False
    with transaction(db, "delete task"):
        db.delete(task)
    logger.info("Deleted task %s", item_id)
    return True


def delete_by_id_or_type(db: Session, user_id: str, item_id: Any, item_type: Optional[str] = None) -> ItemKind:
    """Delete a task or a folder (with its tasks). Returns what was deleted.

    With ``item_type`` the id is only looked up as that kind. Without it the
    task wins over the folder.
    """
    if item_type is not None and item_type not in (ItemKind.TASK.value, ItemKind.FOLDER.value):
        raise ValidationError("Invalid type")
    if sanitize(item_id) in (None, ""):
        raise ValidationError("Missing id")
    item_id = require_id(item_id)

    if item_type == ItemKind.TASK.value:
        if not _delete_task(db, user_id, item_id):
            raise NotFoundError("Task not found")
        return ItemKind.TASK

    if item_type == ItemKind.FOLDER.value:
        if not folders.delete_folder(db, user_id, item_id):
            raise NotFoundError("Folder not found")
        return ItemKind.FOLDER

    if _delete_task(db, user_id, item_id):
        return ItemKind.TASK
    if folders.delete_folder(db, user_id, item_id):
        return ItemKind.FOLDER
    raise NotFoundError("Not found")
