from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field


def utcnow() -> datetime:
    """Current time as an aware UTC datetime; every stored timestamp uses this."""
    return datetime.now(timezone.utc)


def timestamp_field():
    return Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
