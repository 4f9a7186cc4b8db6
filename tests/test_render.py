# tests/test_render.py

from __future__ import annotations

from taskboard.models import TaskDraft
from taskboard.render import (
    ANSI_RE,
    Renderer,
    progress_bar,
    progress_glyph,
    visible_len,
    wrap_words,
)


def plain(lines):
    return [ANSI_RE.sub("", line) for line in lines]


def test_progress_glyph_steps():
    assert progress_glyph(0) == "○"
    assert progress_glyph(10) == "◔"
    assert progress_glyph(50) == "◑"
    assert progress_glyph(80) == "◕"
    assert progress_glyph(99) == "◕"
    assert progress_glyph(100) == "●"


def test_progress_bar_fill():
    assert progress_bar(0, 10) == "░" * 10
    assert progress_bar(50, 10) == "█" * 5 + "░" * 5
    assert progress_bar(100, 10) == "█" * 10


def test_wrap_words_splits_long_words():
    assert wrap_words("alpha beta gamma", 10) == ["alpha beta", "gamma"]
    assert wrap_words("abcdefghij", 4) == ["abcd", "efgh", "ij"]
    assert wrap_words("", 5) == []
    assert wrap_words("alpha beta", 10, first_limit=5) == ["alpha", "beta"]
    assert wrap_words("abcdefgh ij", 6, first_limit=3) == ["abc", "defgh", "ij"]


def test_render_shows_headers_counts_and_progress(store):
    lines = plain(Renderer().render_lines(store.view(), 100))
    assert lines[0].startswith("Task Board")
    assert "3 tasks" in lines[0]
    assert "filter: all" in lines[0]
    assert lines[1].endswith("33%")
    header = next(line for line in lines if "TO DO" in line)
    assert "TO DO (1)" in header
    assert "IN-PROGRESS (1)" in header
    assert "DONE (1)" in header
    body = "\n".join(lines)
    assert "1. Design database schema [HIGH]" in body
    assert "3. Unit tests [MED]" in body


def test_render_marks_overdue_and_empty_columns(store):
    store.set_filter("overdue")
    lines = plain(Renderer().render_lines(store.view(), 100))
    body = "\n".join(lines)
    assert "due 2025-12-28 !" in body
    assert body.count("(empty)") == 2
    assert lines[1].endswith(" 0%")


def test_render_mentions_search_and_dark_mode(store):
    store.set_search("schema")
    store.toggle_dark_mode()
    summary = plain(Renderer().render_lines(store.view(), 100))[0]
    assert "search: 'schema'" in summary
    assert "dark" in summary


def test_rows_fit_terminal_width(empty_store):
    empty_store.add_task(TaskDraft(
        title="A very long task title that cannot possibly fit into one narrow column " * 2,
        description="and an equally wordy description to wrap underneath it",
        due_date="2026-03-01",
    ))
    width = 80
    lines = Renderer().render_lines(empty_store.view(), width)
    board_rows = lines[3:]
    assert all(visible_len(line) <= width for line in board_rows)
    assert len(board_rows) > 4


def test_display_prints_lines(store, capsys):
    Renderer().display(store.view())
    out = capsys.readouterr().out
    assert "TO DO (1)" in out


def test_timestamp_ids_keep_title_words_whole(empty_store):
    empty_store.add_task(TaskDraft(title="User authentication", status="todo"))
    empty_store.add_task(TaskDraft(title="Implementation review", status="in-progress", priority="low"))
    empty_store.add_task(TaskDraft(title="Documentation pass", status="done", priority="low"))
    ids = [t.id for t in empty_store.tasks]
    assert all(len(str(i)) == 13 for i in ids)
    lines = plain(Renderer().render_lines(empty_store.view(), 80))
    cells = [cell.strip() for line in lines[3:] for cell in line.split(" | ")]
    for tid in ids:
        assert f"{tid}." in cells
    assert "User authentication" in cells
    assert "Implementation review" in cells
    assert "Documentation pass" in cells
    assert all(visible_len(line) <= 80 for line in lines[3:])
