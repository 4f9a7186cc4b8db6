"""Command-line interface loop for the task board.

The board is cleared and redrawn every cycle; the last command's message
is shown under it. Searches are debounced: the query is applied once
typing pauses, then the board repaints on its own.
"""
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from taskboard.debounce import Debouncer
from taskboard.errors import TaskValidationError
from taskboard.models import FILTERS, PRIORITIES, TaskDraft
from taskboard.render import Renderer
from taskboard.store import TaskStore

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home).
# Order (3J first) improves reliability in some terminals.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


PROMPT = "\n: "

STATUS_ALIASES = {
    't': 'todo',
    'todo': 'todo',
    'ip': 'in-progress',
    'in-progress': 'in-progress',
    'doing': 'in-progress',
    'd': 'done',
    'done': 'done'
}

PRIORITY_ALIASES = {
    'l': 'low',
    'm': 'medium',
    'h': 'high',
    **{p: p for p in PRIORITIES},
}

CLEAR = '-'


class CLI:
    def __init__(
        self,
        store: TaskStore,
        renderer: Optional[Renderer] = None,
        search_delay: float = 0.3,
        alt_screen: bool = True,
        debouncer: Optional[Debouncer] = None,
    ):
        self.store: TaskStore = store
        self.renderer: Renderer = renderer or Renderer()
        self.alt_screen: bool = alt_screen
        self.message: Optional[str] = None
        self._screen_lock = threading.Lock()
        self._prompting = False
        self.search: Debouncer = debouncer or Debouncer(search_delay, self._apply_search)

    def run(self) -> None:
        """Main REPL loop; board is always cleared/redrawn each cycle."""
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                self.redraw()
                line = input(PROMPT).strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    with self._prompt_flow():
                        _clear_screen()
                        self._help()
                        input("\nPress Enter to return to the board...")
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            self.search.cancel()
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def redraw(self) -> None:
        with self._screen_lock:
            self._draw()

    def _draw(self) -> None:
        _clear_screen()
        self.renderer.display(self.store.view())
        if self.message:
            print("\n" + self.message)
            self.message = None

    @contextmanager
    def _prompt_flow(self) -> Iterator[None]:
        """While active, debounced searches update the query without repainting."""
        with self._screen_lock:
            self._prompting = True
        try:
            yield
        finally:
            with self._screen_lock:
                self._prompting = False

    def _apply_search(self, text: str) -> None:
        """Debounced: runs on the timer thread once typing pauses."""
        self.store.set_search(text)
        with self._screen_lock:
            if self._prompting:
                return
            self._draw()
            print(PROMPT, end="", flush=True)

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        cmd = tokens[0].lower()
        try:
            if cmd == 'add' or cmd.startswith('add@'):
                self._cmd_add(cmd, tokens)
            elif cmd == 'edit':
                self._cmd_edit(tokens)
            elif cmd == 'mv':
                self._cmd_mv(tokens)
            elif cmd == 'filter':
                self._cmd_filter(tokens)
            elif cmd == 'search':
                self.search(' '.join(tokens[1:]))
            elif cmd == 'dark':
                enabled = self.store.toggle_dark_mode()
                self.message = "Dark mode on." if enabled else "Dark mode off."
            else:
                self.message = "Unknown command. Type 'help' for instructions."
        except TaskValidationError as exc:
            self.message = str(exc)

    # ---- individual command helpers ----
    def _cmd_add(self, cmd: str, tokens: list) -> None:
        status = 'todo'
        if cmd.startswith('add@'):
            status = STATUS_ALIASES.get(cmd[4:])
            if not status:
                self.message = "Invalid status."
                return
        if len(tokens) > 1:  # inline shorthand
            draft = TaskDraft(title=' '.join(tokens[1:]), status=status)
        else:
            draft = self._prompt_draft(TaskDraft(title='', status=status))
        self.store.add_task(draft)

    def _cmd_edit(self, tokens: list) -> None:
        if len(tokens) != 2 or not tokens[1].isdigit():
            self.message = "Usage: edit <id>"
            return
        task = self.store.get_task(int(tokens[1]))
        if task is None:
            return
        self.store.update_task(task.id, self._prompt_draft(task.to_draft()))

    def _cmd_mv(self, tokens: list) -> None:
        if len(tokens) != 3:
            self.message = "Usage: mv <id> <status>; statuses: t/ip/d"
            return
        id_part, status_part = tokens[1], tokens[2].lower()
        if not id_part.isdigit():
            self.message = "Invalid id."
            return
        new_status = STATUS_ALIASES.get(status_part)
        if not new_status:
            self.message = "Invalid status."
            return
        self.store.move_task(int(id_part), new_status)

    def _cmd_filter(self, tokens: list) -> None:
        name = tokens[1].lower() if len(tokens) == 2 else ''
        if name not in FILTERS:
            self.message = f"Usage: filter <{'|'.join(FILTERS)}>"
            return
        self.store.set_filter(name)

    # -------------------- user-interactive flows --------------------
    def _prompt_draft(self, current: TaskDraft) -> TaskDraft:
        """Prompt for each form field; Enter keeps the shown value, '-' clears."""
        with self._prompt_flow():
            title = _ask("Title", current.title)
            description = _ask("Description", current.description)
            raw_priority = _ask("Priority (low/medium/high)", current.priority).lower()
            due_date = _ask("Due date (YYYY-MM-DD)", current.due_date or '')
        return TaskDraft(
            title=title,
            description=description,
            priority=PRIORITY_ALIASES.get(raw_priority, raw_priority),
            due_date=due_date or None,
            status=current.status,
        )

    def _help(self) -> None:
        print("Commands:")
        print("  add                 Add a task to TO DO (prompts for each field)")
        print("  add <title...>      Shorthand add with inline title (e.g., add write report)")
        print("  add@<status> ...    Add to another column (e.g., add@ip fix login)")
        print("  edit <id>           Edit a task; Enter keeps a value, '-' clears it")
        print("  mv <id> <status>    Move a task; status aliases: t (todo), ip (in-progress), d (done)")
        print("  filter <name>       Show all, today, overdue or high priority tasks")
        print("  search [text...]    Filter by title/description text; no text clears")
        print("  dark                Toggle dark mode")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Exit (changes are saved as you go)")


def _ask(label: str, current: str) -> str:
    suffix = f" [{current}]" if current else ''
    answer = input(f"{label}{suffix}: ").strip()
    if answer == CLEAR:
        return ''
    return answer or current
