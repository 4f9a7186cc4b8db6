"""Data models for the task board.

Exposes the Task dataclass, the TaskDraft submitted by the add/edit form,
and the status / priority / filter vocabularies. Persisted records use the
camelCase layout of the stored ``tasks`` array (dueDate, createdAt) while
attributes stay snake_case.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Dict, Mapping, Optional, Tuple

from taskboard.errors import TaskValidationError

STATUSES: Tuple[str, ...] = ("todo", "in-progress", "done")
PRIORITIES: Tuple[str, ...] = ("low", "medium", "high")
FILTERS: Tuple[str, ...] = ("all", "today", "overdue", "high")

DEFAULT_PRIORITY = "medium"
DEFAULT_STATUS = "todo"


def parse_due_date(value: Any) -> Optional[date]:
    """Return the calendar date of a stored due date, or None.

    Accepts ``YYYY-MM-DD`` as well as a full ISO timestamp (only the date
    part is used). Empty or unparseable values count as no due date.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.split("T")[0])
    except ValueError:
        return None


@dataclass
class TaskDraft:
    """Fields submitted from the add/edit form.

    ``status`` is the column the form was opened from (todo unless the
    user added from another column).
    """
    title: str
    description: str = ""
    priority: str = DEFAULT_PRIORITY
    due_date: Optional[str] = None
    status: str = DEFAULT_STATUS

    def validated(self) -> "TaskDraft":
        """Return a normalized copy or raise TaskValidationError."""
        title = (self.title or "").strip()
        if not title:
            raise TaskValidationError("Title required.")
        if self.priority not in PRIORITIES:
            raise TaskValidationError(f"Invalid priority: {self.priority}")
        if self.status not in STATUSES:
            raise TaskValidationError(f"Invalid status: {self.status}")
        due = (self.due_date or "").strip() or None
        if due is not None and parse_due_date(due) is None:
            raise TaskValidationError(f"Invalid due date: {due}")
        return TaskDraft(
            title=title,
            description=self.description or "",
            priority=self.priority,
            due_date=due,
            status=self.status,
        )


@dataclass
class Task:
    """A single task on the board.

    Fields:
        id: Creation time in milliseconds (unique within the board).
        title: Non-empty title.
        description: Free text, may be empty.
        priority: One of: "low", "medium", "high".
        due_date: ISO calendar date (YYYY-MM-DD) or None.
        status: One of: "todo", "in-progress", "done".
        created_at: ISO timestamp stamped on creation, never changed.
    """
    id: int
    title: str
    description: str = ""
    priority: str = DEFAULT_PRIORITY
    due_date: Optional[str] = None
    status: str = DEFAULT_STATUS
    created_at: Optional[str] = None

    @property
    def due(self) -> Optional[date]:
        return parse_due_date(self.due_date)

    def is_due_on(self, day: date) -> bool:
        return self.due is not None and self.due == day

    def is_overdue(self, now: datetime) -> bool:
        """Due date (taken as midnight) strictly before ``now`` and not done."""
        due = self.due
        return (due is not None
                and datetime.combine(due, time.min) < now
                and self.status != "done")

    def apply(self, draft: TaskDraft) -> None:
        """Overwrite every editable field from a validated draft."""
        self.title = draft.title
        self.description = draft.description
        self.priority = draft.priority
        self.due_date = draft.due_date
        self.status = draft.status

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            title=self.title,
            description=self.description,
            priority=self.priority,
            due_date=self.due_date,
            status=self.status,
        )

    # -------------------- serialization --------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "createdAt": self.created_at,
        }
        if self.due_date:
            data["dueDate"] = self.due_date
        return data

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        return cls(
            id=raw["id"],
            title=str(raw["title"]),
            description=str(raw.get("description") or ""),
            priority=raw.get("priority") or DEFAULT_PRIORITY,
            due_date=raw.get("dueDate") or None,
            status=raw.get("status") or DEFAULT_STATUS,
            created_at=raw.get("createdAt"),
        )

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, title={self.title}, status={self.status})"
