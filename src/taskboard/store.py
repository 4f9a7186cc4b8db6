"""TaskStore: the task collection plus filter, search and derived views.

All mutation goes through the store so validation, id assignment and
timestamping happen in one place. Every successful mutation persists the
full collection; no-ops (unknown id, unchanged status) do not touch
storage. Unknown ids are ignored: a stale id coming from the UI is not
an error.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import structlog

from taskboard.errors import TaskValidationError
from taskboard.models import FILTERS, PRIORITIES, STATUSES, DEFAULT_PRIORITY, Task, TaskDraft
from taskboard.storage import Storage

Clock = Callable[[], datetime]

log = structlog.get_logger(__name__)

SEED_TASKS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Design database schema",
        "description": "Create ER diagram for e-commerce platform",
        "priority": "high",
        "dueDate": "2025-12-28",
        "status": "todo",
    },
    {
        "id": 2,
        "title": "User authentication",
        "description": "JWT login with role-based access",
        "priority": "high",
        "status": "in-progress",
    },
    {
        "id": 3,
        "title": "Unit tests",
        "description": "Jest coverage >85% for core logic",
        "priority": "medium",
        "status": "done",
    },
]


@dataclass
class BoardView:
    """Snapshot handed to the renderer."""
    tasks: List[Task]
    counts: Dict[str, int]
    total: int
    progress: int
    filter_name: str = "all"
    query: str = ""
    dark_mode: bool = False
    now: Optional[datetime] = None

    def column(self, status: str) -> List[Task]:
        return [t for t in self.tasks if t.status == status]


def percentage(done: int, total: int) -> int:
    """Round-half-up percentage; 0 for an empty set."""
    if total <= 0:
        return 0
    return int(100 * done / total + 0.5)


class TaskStore:
    def __init__(self, storage: Storage, clock: Clock = datetime.now):
        self.storage = storage
        self.clock = clock
        self.tasks: List[Task] = []
        self.filter_name: str = "all"
        self.query: str = ""
        self.dark_mode: bool = False

    # -------------------- loading / migration --------------------
    def load(self) -> "TaskStore":
        """Read tasks and the dark-mode flag from storage.

        Nothing stored yet -> the sample tasks are used (not persisted until
        the first mutation).
        """
        records = self.storage.load_tasks()
        if records is None:
            stamp = self.clock().isoformat()
            records = [dict(r, createdAt=stamp) for r in SEED_TASKS]
            log.info("store_seeded", count=len(records))
        self.tasks = list(self._normalize(records))
        self.dark_mode = self.storage.load_dark_mode()
        log.info("store_loaded", count=len(self.tasks), dark_mode=self.dark_mode)
        return self

    def _normalize(self, records: Iterable[Any]) -> Iterable[Task]:
        seen = set()
        for raw in records:
            if not isinstance(raw, Mapping):
                log.warning("record_skipped", reason="not an object")
                continue
            title = raw.get("title")
            tid = raw.get("id")
            status = raw.get("status") or "todo"
            if status == "doing":  # legacy migration
                status = "in-progress"
            if not title or not str(title).strip():
                log.warning("record_skipped", reason="missing title", id=tid)
                continue
            if not isinstance(tid, int) or isinstance(tid, bool) or tid in seen:
                log.warning("record_skipped", reason="bad or duplicate id", id=tid)
                continue
            if status not in STATUSES:
                log.warning("record_skipped", reason="unknown status", id=tid, status=status)
                continue
            due = raw.get("dueDate")
            if due is not None and not isinstance(due, str):
                log.warning("due_date_dropped", id=tid, due_date=due)
                due = None
            task = Task.from_dict(dict(raw, status=status, dueDate=due))
            if task.priority not in PRIORITIES:
                task.priority = DEFAULT_PRIORITY
            seen.add(tid)
            yield task

    def save(self) -> None:
        self.storage.save_tasks([t.to_dict() for t in self.tasks])

    # -------------------- id management --------------------
    def _allocate_id(self, now: datetime) -> int:
        nid = int(now.timestamp() * 1000)
        if any(t.id == nid for t in self.tasks):
            nid = max(t.id for t in self.tasks) + 1
        return nid

    # -------------------- queries --------------------
    def all_tasks(self) -> List[Task]:
        return list(self.tasks)

    def get_task(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    # -------------------- task operations --------------------
    def add_task(self, draft: TaskDraft) -> Task:
        clean = draft.validated()
        now = self.clock()
        task = Task(
            id=self._allocate_id(now),
            title=clean.title,
            description=clean.description,
            priority=clean.priority,
            due_date=clean.due_date,
            status=clean.status,
            created_at=now.isoformat(),
        )
        self.tasks.append(task)
        self.save()
        log.info("task_added", id=task.id, status=task.status, priority=task.priority)
        return task

    def update_task(self, task_id: int, draft: TaskDraft) -> Optional[Task]:
        task = self.get_task(task_id)
        if task is None:
            log.debug("task_update_ignored", id=task_id)
            return None
        task.apply(draft.validated())
        self.save()
        log.info("task_updated", id=task_id)
        return task

    def move_task(self, task_id: int, new_status: str) -> bool:
        if new_status not in STATUSES:
            raise TaskValidationError(f"Invalid status: {new_status}")
        task = self.get_task(task_id)
        if task is None or task.status == new_status:
            return False
        old = task.status
        task.status = new_status
        self.save()
        log.info("task_moved", id=task_id, from_status=old, to_status=new_status)
        return True

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        self.storage.save_dark_mode(self.dark_mode)
        log.info("dark_mode_toggled", enabled=self.dark_mode)
        return self.dark_mode

    # -------------------- filter / search --------------------
    def set_filter(self, name: str) -> None:
        if name not in FILTERS:
            raise ValueError(f"Invalid filter: {name}")
        self.filter_name = name

    def set_search(self, text: str) -> None:
        self.query = (text or "").lower()

    def matches_filter(self, task: Task, now: datetime) -> bool:
        if self.filter_name == "today":
            return task.is_due_on(now.date())
        if self.filter_name == "overdue":
            return task.is_overdue(now)
        if self.filter_name == "high":
            return task.priority == "high"
        return True

    def matches_search(self, task: Task) -> bool:
        q = self.query
        return (not q
                or q in task.title.lower()
                or q in (task.description or "").lower())

    # -------------------- derived views --------------------
    def visible_tasks(self, now: Optional[datetime] = None) -> List[Task]:
        now = self.clock() if now is None else now
        return [t for t in self.tasks if self.matches_filter(t, now) and self.matches_search(t)]

    def counts(self, visible: Optional[List[Task]] = None) -> Dict[str, int]:
        tasks = self.visible_tasks() if visible is None else visible
        return {s: sum(1 for t in tasks if t.status == s) for s in STATUSES}

    def total_count(self) -> int:
        return len(self.tasks)

    def progress(self, visible: Optional[List[Task]] = None) -> int:
        tasks = self.visible_tasks() if visible is None else visible
        done = sum(1 for t in tasks if t.status == "done")
        return percentage(done, len(tasks))

    def view(self) -> BoardView:
        now = self.clock()
        visible = self.visible_tasks(now)
        return BoardView(
            tasks=visible,
            counts=self.counts(visible),
            total=self.total_count(),
            progress=self.progress(visible),
            filter_name=self.filter_name,
            query=self.query,
            dark_mode=self.dark_mode,
            now=now,
        )

