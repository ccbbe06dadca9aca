from .task import Task, TaskStatus
from .folder import Folder
from .user import User
from .timestamps import utcnow

# Export all models for easy importing
__all__ = ["Task", "TaskStatus", "Folder", "User", "utcnow"]
