"""Tests for canvas configuration and brush themes."""

import json

import pytest

from glyphgrid import Canvas
from glyphgrid.core.brush import AREA, DEFAULT_GLYPHS, MAIN
from glyphgrid.core.config import DEFAULT_GAMMA, CanvasConfig, resolve_canvas_size
from glyphgrid.core.errors import InvalidBrushValue, InvalidPlotSize
from glyphgrid.core.themes import ThemeRegistry, get_theme_registry


class TestCanvasConfig:
    """Tests for CanvasConfig dataclass."""

    def test_default_values(self):
        """Should have the documented defaults."""
        config = CanvasConfig()
        assert config.brushes == DEFAULT_GLYPHS
        assert config.bar_value_precision == 0
        assert config.xlim_margin == 0.01
        assert config.ylim_margin == 0.02
        assert config.legend_padding == 6
        assert config.height_resize == 0.8
        assert config.gamma == DEFAULT_GAMMA
        assert config.zero_threshold == 128

    def test_brushes_are_validated(self):
        with pytest.raises(InvalidBrushValue):
            CanvasConfig(brushes={MAIN: ""})

    def test_to_dict_omits_missing_theme(self):
        assert "theme" not in CanvasConfig().to_dict()

    def test_from_dict_ignores_unknown_keys(self):
        config = CanvasConfig.from_dict({"legend_padding": 4, "bogus": True})
        assert config.legend_padding == 4

    def test_from_dict_non_dict_gives_defaults(self):
        assert CanvasConfig.from_dict(["nope"]) == CanvasConfig()

    def test_theme_is_base_for_brush_overrides(self):
        config = CanvasConfig.from_dict({"theme": "dots", "brushes": {AREA: "%"}})
        assert config.brushes[MAIN] == "o"
        assert config.brushes[AREA] == "%"

    def test_unknown_theme_falls_back_to_defaults(self):
        config = CanvasConfig.from_dict({"theme": "no-such-theme"})
        assert config.brushes == DEFAULT_GLYPHS

    def test_roundtrip_yaml(self, tmp_path):
        path = tmp_path / "glyphs.yaml"
        config = CanvasConfig(brushes={**DEFAULT_GLYPHS, MAIN: "*"}, bar_value_precision=2)
        config.save(path)
        loaded = CanvasConfig.load(path)
        assert loaded == config

    def test_roundtrip_json(self, tmp_path):
        path = tmp_path / "glyphs.json"
        config = CanvasConfig(gamma=" .:#")
        config.save(path)
        assert json.loads(path.read_text())["gamma"] == " .:#"
        assert CanvasConfig.load(path) == config

    def test_load_missing_file_gives_defaults(self, tmp_path):
        assert CanvasConfig.load(tmp_path / "missing.yaml") == CanvasConfig()

    def test_load_malformed_file_gives_defaults(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert CanvasConfig.load(path) == CanvasConfig()

    def test_canvas_uses_config_glyphs(self):
        config = CanvasConfig(brushes={**DEFAULT_GLYPHS, AREA: "%"})
        canvas = Canvas(3, 1, config=config).draw_box((0, 0), (2, 0))
        assert canvas.serialize() == "%%%"


class TestResolveCanvasSize:
    """Tests for size validation and terminal fallback."""

    def test_explicit_size(self):
        assert resolve_canvas_size(10, 4) == (10, 4)

    def test_negative_size_raises(self):
        with pytest.raises(InvalidPlotSize):
            resolve_canvas_size(-1, 4)
        with pytest.raises(InvalidPlotSize):
            Canvas(4, -1)

    def test_zero_width_uses_terminal(self, fixed_terminal):
        assert resolve_canvas_size(0, 5, fixed_terminal) == (80, 5)

    def test_zero_height_leaves_prompt_line(self, fixed_terminal):
        assert resolve_canvas_size(10, 0, fixed_terminal) == (10, 24)

    def test_canvas_accepts_terminal_provider(self, fixed_terminal):
        canvas = Canvas(terminal_size=fixed_terminal)
        assert (canvas.width, canvas.height) == (80, 24)


class TestThemeRegistry:
    """Tests for YAML theme discovery."""

    def test_bundled_themes(self):
        names = get_theme_registry().list_names()
        assert {"classic", "blocks", "dots"} <= set(names)

    def test_classic_matches_defaults(self):
        assert get_theme_registry().get("classic") == DEFAULT_GLYPHS

    def test_unknown_theme(self):
        registry = get_theme_registry()
        assert registry.get("missing") is None
        assert "missing" not in registry

    def test_custom_directory(self, tmp_path):
        (tmp_path / "mine.yml").write_text('name: mine\nbrushes:\n  Main: "+"\n')
        registry = ThemeRegistry([str(tmp_path)])
        assert registry.get("mine") == {"Main": "+"}

    def test_name_defaults_to_file_stem(self, tmp_path):
        (tmp_path / "stemmed.yaml").write_text('brushes:\n  Area: "="\n')
        assert ThemeRegistry([str(tmp_path)]).get("stemmed") == {"Area": "="}

    def test_invalid_files_skipped(self, tmp_path):
        (tmp_path / "bad.yaml").write_text("brushes: [unclosed")
        (tmp_path / "list.yaml").write_text("- just\n- a list\n")
        registry = ThemeRegistry([str(tmp_path)])
        assert registry.list_names() == []

    def test_missing_directory(self, tmp_path):
        assert ThemeRegistry([str(tmp_path / "nowhere")]).list_names() == []
