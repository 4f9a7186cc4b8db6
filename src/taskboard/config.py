"""Settings loaded from environment variables and an optional .env file.

Decisions:
- Priority: real env var > .env entry > default.
- The .env file is read from the working directory; malformed lines are
  skipped, as are malformed numeric values (default used instead).
- Colour overrides (TASKBOARD_PRIMARY etc.) are also resolved here so the
  theme module never touches the filesystem.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = "TASKBOARD"
ENV_FILE = Path(".env")

COLOR_KEYS = ("PRIMARY", "TODO", "INPROGRESS", "DONE")


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines; comments and lines without '=' are ignored."""
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        values[k.strip()] = v.strip().strip('"').strip("'")
    return values


def _truthy(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _int(value: Optional[str], default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _hex(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    h = value.lstrip("#")
    if len(h) == 6 and all(c in "0123456789abcdefABCDEF" for c in h):
        return "#" + h
    return None


@dataclass
class Settings:
    data_dir: Path = Path("data")
    search_delay_ms: int = 300
    alt_screen: bool = True
    log_level: str = "INFO"
    log_format: str = "dev"
    log_file: Optional[Path] = None
    colors: Dict[str, str] = field(default_factory=dict)

    @property
    def storage_path(self) -> Path:
        return self.data_dir / "storage.json"

    @property
    def log_path(self) -> Path:
        return self.log_file or self.data_dir / "taskboard.log"

    @property
    def search_delay(self) -> float:
        """Debounce delay for search input, in seconds."""
        return max(self.search_delay_ms, 0) / 1000.0


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
) -> Settings:
    """Build Settings from the process environment (plus .env overrides)."""
    env = dict(read_env_file(env_file or ENV_FILE))
    env.update(os.environ if environ is None else environ)

    colors: Dict[str, str] = {}
    for key in COLOR_KEYS:
        value = _hex(env.get(_k(key)))
        if value:
            colors[key] = value

    log_file = env.get(_k("LOG_FILE"))
    return Settings(
        data_dir=Path(env.get(_k("DATA_DIR")) or "data").expanduser(),
        search_delay_ms=_int(env.get(_k("SEARCH_DELAY_MS")), 300),
        alt_screen=_truthy(env.get(_k("ALT_SCREEN")), True),
        log_level=(env.get(_k("LOG_LEVEL")) or "INFO").upper(),
        log_format=(env.get(_k("LOG_FORMAT")) or "dev").lower(),
        log_file=Path(log_file).expanduser() if log_file else None,
        colors=colors,
    )
