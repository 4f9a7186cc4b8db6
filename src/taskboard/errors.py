"""Exception types raised by the task board."""


class TaskBoardError(Exception):
    """Base class for task board errors."""


class TaskValidationError(TaskBoardError, ValueError):
    """A task draft failed validation (missing title, unknown priority/status)."""


class StorageError(TaskBoardError):
    """The key-value store could not be read or written."""
