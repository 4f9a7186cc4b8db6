"""Terminal renderer: three status columns plus a progress indicator.

Status keys stay "todo" / "in-progress" / "done"; headers read "TO DO",
"IN-PROGRESS", "DONE" followed by the visible count of the column.
Only reads BoardView snapshots; never touches the store.
"""
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple
import re, shutil

from taskboard.models import STATUSES, Task
from taskboard.store import BoardView
from taskboard.theme import Palette, color, palette, DIM

HEADER_TITLES: Dict[str, str] = {"todo": "TO DO", "in-progress": "IN-PROGRESS", "done": "DONE"}
PRIORITY_BADGES: Dict[str, str] = {"high": "HIGH", "medium": "MED", "low": "LOW"}
PROGRESS_GLYPHS: Tuple[str, ...] = ("○", "◔", "◑", "◕", "●")
BAR_WIDTH = 20
MIN_COL_WIDTH = 18
SEP = " | "
INDENT = "   "
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))


def progress_glyph(pct: int) -> str:
    """Quarter-circle glyph approximating a progress ring."""
    if pct <= 0:
        return PROGRESS_GLYPHS[0]
    if pct >= 100:
        return PROGRESS_GLYPHS[-1]
    return PROGRESS_GLYPHS[min(3, max(1, int(pct / 25 + 0.5)))]


def progress_bar(pct: int, width: int = BAR_WIDTH) -> str:
    pct = max(0, min(100, pct))
    filled = int(width * pct / 100 + 0.5)
    return "█" * filled + "░" * (width - filled)


def wrap_words(text: str, limit: int, first_limit: Optional[int] = None) -> List[str]:
    """Greedy word wrap; words longer than the line limit are split.

    ``first_limit`` applies to the first line only (it shares the line
    with a prefix); later lines use ``limit``.
    """
    limit = max(1, limit)
    line_limit = limit if first_limit is None else max(1, first_limit)
    lines: List[str] = []
    current = ''
    for w in text.split():
        candidate = w if not current else current + ' ' + w
        if len(candidate) <= line_limit:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ''
            line_limit = limit
        while len(w) > line_limit:
            lines.append(w[:line_limit])
            w = w[line_limit:]
            line_limit = limit
        current = w
    if current:
        lines.append(current)
    return lines


class Renderer:
    def __init__(self, colors: Optional[Mapping[str, str]] = None):
        self.colors = dict(colors or {})

    def display(self, view: BoardView) -> None:
        term_width = shutil.get_terminal_size((120, 30)).columns
        for line in self.render_lines(view, term_width):
            print(line)

    def render_lines(self, view: BoardView, width: int) -> List[str]:
        pal = palette(view.dark_mode, self.colors)
        now = view.now or datetime.now()
        lines = self._summary(view, pal)
        lines.append('')
        widths = self._compute_column_widths(view, width)
        wrapped = {s: self._wrap_column(view.column(s), widths[s], pal, now) for s in STATUSES}
        lines.extend(self._columns(view, widths, wrapped, pal))
        return lines

    # ---- summary ----
    def _summary(self, view: BoardView, pal: Palette) -> List[str]:
        title = color("Task Board", pal.header)
        parts = [f"{view.total} tasks", f"filter: {view.filter_name}"]
        if view.query:
            parts.append(f"search: '{view.query}'")
        if view.dark_mode:
            parts.append("dark")
        ring = color(progress_glyph(view.progress), pal.progress)
        bar = color(progress_bar(view.progress), pal.progress)
        return [
            title + '  ' + '  ·  '.join(parts),
            f"{ring} {bar} {view.progress}%",
        ]

    # ---- width calculation ----
    def _compute_column_widths(self, view: BoardView, term_width: int) -> Dict[str, int]:
        sep_total = len(SEP) * (len(STATUSES) - 1)
        desired: Dict[str, int] = {}
        for status in STATUSES:
            longest = len(self._header_text(view, status))
            for t in view.column(status):
                candidate = len(self._title_text(t))
                if candidate > longest:
                    longest = candidate
            desired[status] = max(MIN_COL_WIDTH, longest)
        widths = {s: desired[s] for s in STATUSES}
        total = sum(widths.values()) + sep_total
        if total > term_width:
            target_space = max(term_width - sep_total, len(STATUSES) * MIN_COL_WIDTH)
            while sum(widths.values()) > target_space:
                widest = max(STATUSES, key=lambda s: widths[s])
                if widths[widest] <= MIN_COL_WIDTH:
                    break
                widths[widest] -= 1
        else:
            extra = term_width - total
            i = 0
            while extra > 0:
                widths[STATUSES[i % len(STATUSES)]] += 1
                extra -= 1
                i += 1
        return widths

    @staticmethod
    def _header_text(view: BoardView, status: str) -> str:
        return f"{HEADER_TITLES[status]} ({view.counts.get(status, 0)})"

    @staticmethod
    def _title_text(task: Task) -> str:
        return f"{task.id}. {task.title} [{PRIORITY_BADGES.get(task.priority, task.priority)}]"

    # ---- wrapping ----
    def _wrap_column(self, tasks: List[Task], col_width: int, pal: Palette, now: datetime) -> List[str]:
        if not tasks:
            return [color('(empty)', pal.empty)]
        acc: List[str] = []
        for t in tasks:
            acc.extend(self._wrap_task(t, col_width, pal, now))
        return acc

    def _wrap_task(self, task: Task, col_width: int, pal: Palette, now: datetime) -> List[str]:
        prefix = f"{task.id}. "
        indent = INDENT
        limit = max(1, col_width - len(indent))
        badge = f"[{PRIORITY_BADGES.get(task.priority, task.priority)}]"
        status_col = pal.status.get(task.status, '')
        badge_col = pal.priority.get(task.priority, '')

        # ids are millisecond timestamps; when the prefix would leave less
        # than half the column for the title, the id gets its own line
        first_limit = col_width - len(prefix)
        if first_limit * 2 < col_width:
            lines = [color(prefix.rstrip(), pal.id)]
            lines.extend(indent + color(r, status_col)
                         for r in wrap_words(task.title, limit) or ['<untitled>'])
        else:
            wrapped = wrap_words(task.title, limit, first_limit=first_limit) or ['<untitled>']
            lines = [color(prefix.rstrip(), pal.id) + ' ' + color(wrapped[0], status_col)]
            lines.extend(indent + color(r, status_col) for r in wrapped[1:])
        last_plain = ANSI_RE.sub('', lines[-1])
        if len(last_plain) + 1 + len(badge) <= col_width:
            lines[-1] += ' ' + color(badge, badge_col)
        else:
            lines.append(indent + color(badge, badge_col))

        if task.due_date:
            overdue = task.is_overdue(now)
            due_text = f"due {task.due_date}" + (" !" if overdue else "")
            due_style = pal.overdue if overdue else DIM
            lines.extend(indent + color(d, due_style) for d in wrap_words(due_text, limit))
        if task.description:
            lines.extend(indent + color(d, DIM) for d in wrap_words(task.description, limit))
        return lines

    # ---- rendering ----
    def _columns(self, view: BoardView, widths: Mapping[str, int],
                 wrapped_lines: Mapping[str, List[str]], pal: Palette) -> List[str]:
        out: List[str] = []
        rows = max(len(wrapped_lines[s]) for s in STATUSES)
        header_cells = [self._pad(color(self._header_text(view, s), pal.header), widths[s])
                        for s in STATUSES]
        out.append(SEP.join(header_cells))
        out.append(SEP.join(color('-' * widths[s], pal.header) for s in STATUSES))
        for r in range(rows):
            row_cells: List[str] = []
            for s in STATUSES:
                col_lines = wrapped_lines[s]
                if r < len(col_lines):
                    row_cells.append(self._pad(col_lines[r], widths[s]))
                else:
                    row_cells.append(' ' * widths[s])
            out.append(SEP.join(row_cells).rstrip())
        return out

    @staticmethod
    def _pad(line: str, width: int) -> str:
        pad = width - visible_len(line)
        return line + ' ' * pad if pad > 0 else line
