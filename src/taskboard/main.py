"""Main entry point for the task board."""
import sys

import structlog

from taskboard.cli import CLI
from taskboard.config import load_settings
from taskboard.errors import StorageError
from taskboard.logging_setup import setup_logging
from taskboard.render import Renderer
from taskboard.storage import Storage
from taskboard.store import TaskStore


def main() -> int:
    settings = load_settings()
    setup_logging(settings.log_path, settings.log_level, settings.log_format)
    log = structlog.get_logger(__name__)
    try:
        store = TaskStore(Storage(settings.storage_path)).load()
        cli = CLI(
            store,
            renderer=Renderer(settings.colors),
            search_delay=settings.search_delay,
            alt_screen=settings.alt_screen,
        )
        cli.run()
    except StorageError as exc:
        log.error("storage_failed", error=str(exc))
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
