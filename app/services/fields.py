"""Field rules shared by the task and folder services."""
from datetime import date, datetime
from typing import Any, Dict, Optional
from uuid import UUID

from ..exceptions import ValidationError
from ..models import Task, TaskStatus, utcnow


def sanitize(value: Any) -> Optional[str]:
    return None if value is None else str(value).strip()


def is_valid_id(value: Any) -> bool:
    value = sanitize(value)
    if not value:
        return False
    try:
        return str(UUID(value)) == value.lower()
    except ValueError:
        return False


def require_id(value: Any, message: str = "Invalid id") -> str:
    """Return the canonical form of ``value`` or raise ``ValidationError``."""
    if not is_valid_id(value):
        raise ValidationError(message)
    return sanitize(value).lower()


def require_text(value: Any, message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def parse_status(value: Any) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


def parse_due_date(value: Any) -> Optional[date]:
    """Parse a due date given as ``YYYY-MM-DD`` or an ISO datetime.

    Datetimes keep only their calendar date. Empty values mean no due date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid dueDate")


def validate_task_patch(patch: Dict[str, Any]) -> Dict[str, Any]:
    """Turn a raw ``{title, status, due_date}`` patch into column values."""
    values = {}
    if "title" in patch:
        values["title"] = require_text(patch["title"], "Title cannot be empty")
    if "status" in patch:
        values["status"] = parse_status(patch["status"])
    if "due_date" in patch:
        values["due_date"] = parse_due_date(patch["due_date"])
    return values


def apply_task_values(task: Task, values: Dict[str, Any]) -> Task:
    for field, value in values.items():
        setattr(task, field, value)
    task.updated_at = utcnow()
    return task
