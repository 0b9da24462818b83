"""
Theme registry - discovers and loads YAML brush themes.

A theme file maps well-known brush names to glyphs:

    name: blocks
    brushes:
      Main: "█"
      Area: "▓"

Usage:
    registry = ThemeRegistry()
    registry.load_all()
    glyphs = registry.get("blocks")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

# Bundled themes live next to the package
THEMES_DIR = Path(__file__).parent.parent / "themes"
DEFAULT_THEME = "classic"


class ThemeRegistry:
    """Registry of brush themes loaded from YAML files."""

    def __init__(self, paths: Optional[list[str]] = None):
        """
        Initialize registry with theme directory paths.

        Args:
            paths: Directories searched for *.yaml / *.yml themes.
                   Defaults to the bundled glyphgrid/themes directory.
        """
        if paths is None:
            paths = [str(THEMES_DIR)]
        self.paths = [Path(p) for p in paths]
        self._themes: dict[str, dict[str, str]] = {}
        self._loaded = False

    def load_all(self) -> None:
        """Discover and load every theme file from the theme paths."""
        self._themes.clear()
        for base_path in self.paths:
            if not base_path.exists():
                continue
            for yaml_file in sorted(base_path.glob("*.yaml")):
                self._load_file(yaml_file)
            for yaml_file in sorted(base_path.glob("*.yml")):
                self._load_file(yaml_file)
        self._loaded = True

    def _load_file(self, file_path: Path) -> Optional[dict[str, str]]:
        """Load a single YAML theme and register it under its name."""
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, IOError) as e:
            logger.debug("Failed to load theme %s: %s", file_path, e)
            return None

        if not isinstance(data, dict):
            return None

        brushes = data.get("brushes") or {}
        if not isinstance(brushes, dict):
            logger.debug("Theme %s has no brushes mapping", file_path)
            return None

        name = str(data.get("name") or file_path.stem)
        self._themes[name] = {str(k): str(v) for k, v in brushes.items()}
        return self._themes[name]

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load_all()

    def get(self, name: str) -> Optional[dict[str, str]]:
        """Glyph mapping of a theme, or None if unknown."""
        self._ensure_loaded()
        theme = self._themes.get(name)
        return dict(theme) if theme is not None else None

    def list_names(self) -> list[str]:
        """List all available theme names."""
        self._ensure_loaded()
        return sorted(self._themes)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None


_registry: Optional[ThemeRegistry] = None


def get_theme_registry() -> ThemeRegistry:
    """Shared registry of the bundled themes."""
    global _registry
    if _registry is None:
        _registry = ThemeRegistry()
    return _registry
