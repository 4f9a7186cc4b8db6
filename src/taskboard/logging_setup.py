"""structlog configuration.

dev mode: readable key=value lines; json mode: one JSON object per line.
Records go to a file because the REPL repaints the whole terminal.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import List

import structlog


def setup_logging(log_file: Path, level: str = "INFO", log_format: str = "dev") -> None:
    """Route structlog and stdlib logging into ``log_file``.

    Call this once, before the first log call.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    shared_processors: List[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.FileHandler(str(log_file), encoding="utf-8")
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
