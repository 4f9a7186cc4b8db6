from datetime import date, datetime

import pytest

from taskboard.errors import TaskValidationError
from taskboard.models import Task, TaskDraft, parse_due_date


def test_parse_due_date_accepts_date_and_timestamp():
    assert parse_due_date("2025-12-28") == date(2025, 12, 28)
    assert parse_due_date("2025-12-28T09:00:00") == date(2025, 12, 28)


@pytest.mark.parametrize("value", [None, "", "tomorrow", "2025-13-40"])
def test_parse_due_date_rejects_missing_or_garbage(value):
    assert parse_due_date(value) is None


def test_draft_validated_strips_and_normalizes():
    clean = TaskDraft(title="  Write report  ", description=None, due_date="  ").validated()
    assert clean.title == "Write report"
    assert clean.description == ""
    assert clean.due_date is None
    assert clean.priority == "medium"
    assert clean.status == "todo"


@pytest.mark.parametrize("draft", [
    TaskDraft(title=""),
    TaskDraft(title="   "),
    TaskDraft(title="x", priority="urgent"),
    TaskDraft(title="x", status="blocked"),
    TaskDraft(title="x", due_date="someday"),
])
def test_draft_validation_failures(draft):
    with pytest.raises(TaskValidationError):
        draft.validated()


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError, match="Title required"):
        TaskDraft(title="").validated()


def test_to_dict_uses_persisted_layout():
    task = Task(id=7, title="Ship", priority="high", due_date="2025-12-31",
                created_at="2025-12-01T08:00:00")
    assert task.to_dict() == {
        "id": 7,
        "title": "Ship",
        "description": "",
        "priority": "high",
        "status": "todo",
        "createdAt": "2025-12-01T08:00:00",
        "dueDate": "2025-12-31",
    }
    assert "dueDate" not in Task(id=8, title="No due").to_dict()


def test_from_dict_treats_empty_due_date_as_absent():
    task = Task.from_dict({"id": 1, "title": "A", "dueDate": "", "priority": "low"})
    assert task.due_date is None
    assert task.due is None
    assert task.priority == "low"
    assert task.status == "todo"


def test_apply_overwrites_editable_fields_only():
    task = Task(id=5, title="Old", created_at="2025-01-01T00:00:00")
    task.apply(TaskDraft(title="New", description="d", priority="low",
                         due_date="2025-02-02", status="done"))
    assert (task.id, task.created_at) == (5, "2025-01-01T00:00:00")
    assert task.to_draft() == TaskDraft(title="New", description="d", priority="low",
                                        due_date="2025-02-02", status="done")


def test_is_overdue_compares_midnight_of_due_date_with_now():
    now = datetime(2025, 12, 28, 10, 30)
    assert Task(id=1, title="a", due_date="2025-12-27").is_overdue(now)
    assert Task(id=2, title="b", due_date="2025-12-28").is_overdue(now)
    assert not Task(id=3, title="c", due_date="2025-12-29").is_overdue(now)
    assert not Task(id=4, title="d", due_date="2025-12-01", status="done").is_overdue(now)
    assert not Task(id=5, title="e").is_overdue(now)


def test_is_due_on():
    task = Task(id=1, title="a", due_date="2025-12-28")
    assert task.is_due_on(date(2025, 12, 28))
    assert not task.is_due_on(date(2025, 12, 29))
    assert not Task(id=2, title="b").is_due_on(date(2025, 12, 28))


def test_parse_due_date_ignores_non_strings():
    assert parse_due_date(20251228) is None
    assert Task(id=1, title="a", due_date=20251228).due is None
