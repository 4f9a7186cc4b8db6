"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Two palettes: light (default) and dark; the dark-mode preference picks one.
- Hex overrides (TASKBOARD_PRIMARY, ...) come from Settings.colors and
  apply to both palettes.
"""
from __future__ import annotations
import os, sys
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"

def from_hex(hex_code: str) -> str:
    """Convert a hex color code to an ANSI foreground sequence."""
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

LIGHT_HEX: Dict[str, str] = {
    'PRIMARY': '#3B82F6',
    'TODO': '#0F766E',
    'INPROGRESS': '#B45309',
    'DONE': '#15803D',
    'HIGH': '#DC2626',
    'MEDIUM': '#D97706',
    'LOW': '#6B7280',
}

DARK_HEX: Dict[str, str] = {
    'PRIMARY': '#60A5FA',
    'TODO': '#48B3AF',
    'INPROGRESS': '#F6FF99',
    'DONE': '#A7E399',
    'HIGH': '#F87171',
    'MEDIUM': '#FBBF24',
    'LOW': '#9CA3AF',
}


@dataclass
class Palette:
    header: str
    id: str
    empty: str
    status: Dict[str, str]
    priority: Dict[str, str]
    overdue: str
    progress: str


def palette(dark: bool = False, overrides: Optional[Mapping[str, str]] = None) -> Palette:
    hexes = dict(DARK_HEX if dark else LIGHT_HEX)
    hexes.update(overrides or {})
    primary = from_hex(hexes['PRIMARY'])
    return Palette(
        header=primary,
        id=primary + BOLD,
        empty=DIM + primary,
        status={
            'todo': from_hex(hexes['TODO']),
            'in-progress': from_hex(hexes['INPROGRESS']),
            'done': from_hex(hexes['DONE']),
        },
        priority={
            'high': from_hex(hexes['HIGH']) + BOLD,
            'medium': from_hex(hexes['MEDIUM']),
            'low': from_hex(hexes['LOW']),
        },
        overdue=from_hex(hexes['HIGH']) + BOLD,
        progress=primary,
    )

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET

__all__ = ['color', 'palette', 'Palette', 'from_hex', 'RESET', 'BOLD', 'DIM']
