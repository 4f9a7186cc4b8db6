"""Terminal task board: columns, filters, search and local persistence."""
from taskboard.models import Task, TaskDraft
from taskboard.storage import Storage
from taskboard.store import BoardView, TaskStore

__all__ = ["Task", "TaskDraft", "Storage", "TaskStore", "BoardView"]
__version__ = "0.1.0"
