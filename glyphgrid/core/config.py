"""Canvas configuration: default glyphs and layout tunables."""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Callable, Optional

import yaml

from .brush import DEFAULT_GLYPHS, normalize_glyph
from .errors import InvalidPlotSize
from .themes import get_theme_registry

logger = logging.getLogger(__name__)

DEFAULT_GAMMA = "  ..oo00#@"


@dataclass
class CanvasConfig:
    """Per-canvas defaults. Passed at construction, never shared as global state."""
    brushes: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_GLYPHS))
    theme: Optional[str] = None

    # Number formatting for bar labels
    bar_value_precision: int = 0

    # Auto-limit margins, as a fraction of the data range
    xlim_margin: float = 0.01
    ylim_margin: float = 0.02

    # Layout
    legend_padding: int = 6
    height_resize: float = 0.8

    # Image rendering
    gamma: str = DEFAULT_GAMMA
    zero_threshold: int = 128

    def __post_init__(self):
        self.brushes = {name: normalize_glyph(value) for name, value in self.brushes.items()}

    def glyph(self, name: str) -> str:
        return self.brushes.get(name, self.brushes.get("Blank", " "))

    def to_dict(self) -> dict:
        d = {
            "brushes": dict(self.brushes),
            "bar_value_precision": self.bar_value_precision,
            "xlim_margin": self.xlim_margin,
            "ylim_margin": self.ylim_margin,
            "legend_padding": self.legend_padding,
            "height_resize": self.height_resize,
            "gamma": self.gamma,
            "zero_threshold": self.zero_threshold,
        }
        if self.theme:
            d["theme"] = self.theme
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "CanvasConfig":
        """Build a config; a named theme is the base and explicit brushes override it."""
        if not isinstance(d, dict):
            return cls()

        brushes = dict(DEFAULT_GLYPHS)
        theme = d.get("theme")
        if theme:
            theme_glyphs = get_theme_registry().get(theme)
            if theme_glyphs is None:
                logger.debug("Unknown theme %r, using defaults", theme)
            else:
                brushes.update(theme_glyphs)
        brushes.update(d.get("brushes") or {})

        known = {f.name for f in fields(cls)} - {"brushes", "theme"}
        kwargs = {k: v for k, v in d.items() if k in known}
        return cls(brushes=brushes, theme=theme, **kwargs)

    @classmethod
    def load(cls, path: Path) -> "CanvasConfig":
        """Load from a .yaml/.yml or .json file; unreadable files yield defaults."""
        path = Path(path)
        try:
            if path.exists():
                text = path.read_text(encoding="utf-8")
                if path.suffix in (".yaml", ".yml"):
                    raw = yaml.safe_load(text)
                else:
                    raw = json.loads(text)
                return cls.from_dict(raw or {})
        except (json.JSONDecodeError, yaml.YAMLError, IOError) as e:
            logger.debug("Failed to load config %s: %s", path, e)
        return cls()

    def save(self, path: Path) -> None:
        path = Path(path)
        temp = path.with_suffix(path.suffix + ".tmp")
        if path.suffix in (".yaml", ".yml"):
            temp.write_text(yaml.safe_dump(self.to_dict(), allow_unicode=True, sort_keys=False), encoding="utf-8")
        else:
            temp.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        temp.replace(path)


TerminalSize = Callable[[], tuple[int, int]]


def _probe_terminal() -> tuple[int, int]:
    size = shutil.get_terminal_size()
    return size.columns, size.lines


def resolve_canvas_size(
    width: int,
    height: int,
    terminal_size: Optional[TerminalSize] = None,
) -> tuple[int, int]:
    """
    Validate a requested canvas size.

    A zero dimension is taken from the terminal: all of its columns, and one
    line fewer than its height so the prompt stays visible.
    """
    if width < 0 or height < 0:
        raise InvalidPlotSize()
    if width == 0 or height == 0:
        columns, lines = (terminal_size or _probe_terminal)()
        if width == 0:
            width = columns
        if height == 0:
            height = max(1, lines - 1)
    return int(width), int(height)
