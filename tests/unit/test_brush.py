"""Tests for brushes and palettes."""

import pytest

from glyphgrid.core.brush import (
    AREA,
    BLANK,
    BORDER_TOP,
    DEFAULT_GLYPHS,
    MAIN,
    SYMBOL_BRUSHES,
    Brush,
    Palette,
    normalize_glyph,
    string_to_brushes,
)
from glyphgrid.core.errors import GlyphGridError, InvalidBrushValue


class TestNormalizeGlyph:
    """Glyph validation rules."""

    def test_printable_ascii_keeps_first_char(self):
        assert normalize_glyph("abc") == "a"

    @pytest.mark.parametrize("value", ["\t", "\n", "\r"])
    def test_lone_whitespace_becomes_space(self, value):
        assert normalize_glyph(value) == " "

    def test_unicode_glyph_kept(self):
        assert normalize_glyph("█") == "█"

    def test_multi_char_non_ascii_keeps_two(self):
        assert normalize_glyph("▓▒░") == "▓▒"

    @pytest.mark.parametrize("value", ["", "\x01", "\x00x"])
    def test_invalid_values_raise(self, value):
        with pytest.raises(InvalidBrushValue):
            normalize_glyph(value)

    def test_non_string_raises(self):
        with pytest.raises(InvalidBrushValue):
            normalize_glyph(5)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            normalize_glyph("")
        assert issubclass(InvalidBrushValue, GlyphGridError)


class TestBrush:
    """Tests for the Brush value type."""

    def test_anonymous_brush_is_general(self):
        brush = Brush("x")
        assert brush.is_general
        assert brush.name is None

    def test_empty_name_is_anonymous(self):
        assert Brush("x", "").is_general

    def test_named_brush(self):
        brush = Brush.named(AREA, "#")
        assert brush.name == AREA
        assert not brush.is_general

    def test_value_is_normalised(self):
        assert Brush("xyz").value == "x"

    def test_brushes_are_hashable_values(self):
        assert Brush("a", MAIN) == Brush("a", MAIN)
        assert len({Brush("a"), Brush("a")}) == 1

    def test_renamed(self):
        assert Brush("a").renamed(MAIN) == Brush("a", MAIN)

    def test_string_to_brushes(self):
        assert [b.value for b in string_to_brushes("ab")] == ["a", "b"]

    def test_symbol_brushes(self):
        assert SYMBOL_BRUSHES[0].value == "@"
        assert all(b.is_general for b in SYMBOL_BRUSHES)


class TestPalette:
    """Tests for palette lookups."""

    def test_defaults(self):
        palette = Palette()
        for name, glyph in DEFAULT_GLYPHS.items():
            assert palette.glyph(name) == glyph

    def test_unknown_name_resolves_to_blank(self):
        palette = Palette()
        brush = palette.get("Nope")
        assert brush.is_blank
        assert brush.value == " "

    def test_set_and_get(self):
        palette = Palette().set(MAIN, "*")
        assert palette.get(MAIN) == Brush("*", MAIN)

    def test_set_rejects_invalid(self):
        with pytest.raises(InvalidBrushValue):
            Palette().set(MAIN, "")

    def test_set_brush_requires_name(self):
        with pytest.raises(InvalidBrushValue):
            Palette().set_brush(Brush("x"))

    def test_set_many(self):
        palette = Palette().set_many([MAIN, AREA], "o")
        assert palette.glyph(MAIN) == palette.glyph(AREA) == "o"

    def test_reset_restores_defaults(self):
        palette = Palette().set(MAIN, "*").reset()
        assert palette.glyph(MAIN) == DEFAULT_GLYPHS[MAIN]

    def test_default_ignores_overrides(self):
        palette = Palette().set(BORDER_TOP, "=")
        assert palette.default(BORDER_TOP).value == "_"

    def test_custom_defaults(self):
        palette = Palette({BLANK: "."})
        assert palette.blank.value == "."

    def test_copy_is_independent(self):
        palette = Palette()
        clone = palette.copy()
        clone.set(MAIN, "*")
        assert palette.glyph(MAIN) == "_"
        assert MAIN in clone
        assert clone[MAIN] == "*"
