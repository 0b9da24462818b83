"""Tests for the canvas drawing primitives."""

import numpy as np
import pytest

from glyphgrid import Anchor, Borders, Brush, Canvas, Image, Offset
from glyphgrid.canvas.canvas import Cell, PlotMetadata
from glyphgrid.core.brush import AREA, BLANK, MAIN
from glyphgrid.core.errors import InconsistentData


def glyph_count(canvas, glyph):
    return canvas.serialize().count(glyph)


class TestCellAccess:
    """Tests for reading and writing single cells."""

    def test_new_canvas_is_blank(self, canvas):
        assert canvas.at(0, 0) == Cell(BLANK, " ")
        assert canvas.at(0, 0).is_blank

    def test_put_and_at(self, canvas):
        canvas.put(3, 2, Brush("x"))
        assert canvas.at(3, 2) == Cell(None, "x")

    def test_item_access(self, canvas):
        canvas[1, 1] = Brush("*", MAIN)
        assert canvas[1, 1].brush == Brush("*", MAIN)

    def test_out_of_range_read_is_blank(self, canvas):
        assert canvas.at(-1, 0).is_blank
        assert canvas.at(10, 0).is_blank
        assert canvas.at(0, 5).is_blank

    def test_out_of_range_write_ignored(self, canvas):
        canvas.put(10, 0, Brush("x"))
        canvas.put(0, -1, Brush("x"))
        assert glyph_count(canvas, "x") == 0


class TestSerialize:
    """Tests for text output."""

    def test_shape(self, canvas):
        lines = canvas.serialize().split("\n")
        assert len(lines) == 5
        assert all(len(line) == 10 for line in lines)

    def test_top_row_first(self):
        canvas = Canvas(2, 2)
        canvas.put(0, 1, Brush("t"))
        canvas.put(1, 0, Brush("b"))
        assert canvas.serialize() == "t \n b"

    def test_str_is_serialize(self, canvas):
        assert str(canvas.fill()) == canvas.serialize()


class TestFillAndBorders:
    """Tests for fill, clear and borders."""

    def test_fill_default_main(self):
        assert Canvas(3, 2).fill().serialize() == "___\n___"

    def test_fill_with_brush(self):
        assert Canvas(2, 1).fill(Brush("o")).serialize() == "oo"

    def test_clear(self):
        assert Canvas(2, 1).fill().clear().serialize() == "  "

    def test_all_borders(self):
        assert Canvas(4, 3).draw_borders().serialize() == "____\n|  |\n____"

    def test_selected_borders(self):
        canvas = Canvas(3, 2).draw_borders(Borders.LEFT + Borders.RIGHT)
        assert canvas.serialize() == "| |\n| |"

    def test_border_styles(self):
        canvas = Canvas(4, 3).draw_borders()
        assert canvas.at(0, 1).style == "BorderLeft"
        assert canvas.at(3, 1).style == "BorderRight"
        assert canvas.at(1, 2).style == "BorderTop"


class TestLines:
    """Tests for grid and data-space lines."""

    def test_horizontal_at_row(self):
        canvas = Canvas(3, 3).draw_line_horizontal_at_row(1)
        assert canvas.serialize() == "   \n---\n   "

    def test_vertical_at_col(self):
        canvas = Canvas(3, 2).draw_line_vertical_at_col(2)
        assert canvas.serialize() == "  |\n  |"

    def test_ratio_row(self):
        canvas = Canvas(2, 4).draw_line_horizontal_at_row(0.5)
        assert canvas.at(0, 2).glyph == "-"

    def test_ratio_clamped_low(self):
        canvas = Canvas(2, 4).draw_line_horizontal_at_row(-0.5)
        assert canvas.at(0, 0).glyph == "-"

    def test_ratio_col(self):
        canvas = Canvas(4, 1).draw_line_vertical_at_col(0.25)
        assert canvas.serialize() == " |  "

    def test_off_canvas_index_is_noop(self):
        canvas = Canvas(3, 3)
        canvas.draw_line_horizontal_at_row(-1).draw_line_horizontal_at_row(3)
        canvas.draw_line_vertical_at_col(7)
        assert canvas.serialize() == Canvas(3, 3).serialize()

    def test_line_at_y(self):
        canvas = Canvas(4, 4).set_ylimits(0, 4).draw_line_horizontal_at_y(2.5)
        assert canvas.at(0, 2).glyph == "-"

    def test_line_at_x_outside_limits(self):
        canvas = Canvas(4, 4).draw_line_vertical_at_x(1.5)
        assert glyph_count(canvas, "|") == 0

    def test_draw_line_horizontal(self):
        canvas = Canvas(5, 5).draw_line(0.0, 0.5, 0.99, 0.5)
        assert [canvas.at(c, 2).glyph for c in range(5)] == ["_"] * 5
        assert glyph_count(canvas, "_") == 5

    def test_draw_line_steep_has_no_gaps(self):
        canvas = Canvas(5, 5).draw_line(0.5, 0.0, 0.5, 0.99)
        assert all(canvas.at(2, r).style == MAIN for r in range(5))

    def test_draw_line_reversed(self):
        canvas = Canvas(5, 5).draw_line(0.5, 0.99, 0.5, 0.0)
        assert all(canvas.at(2, r).style == MAIN for r in range(5))

    def test_draw_line_between_positions(self):
        canvas = Canvas(5, 3).draw_line_between(Anchor.WEST, Anchor.EAST)
        assert [canvas.at(c, 1).glyph for c in range(5)] == ["_"] * 5


class TestPointsAndData:
    """Tests for scatter plotting and auto limits."""

    def test_draw_point(self):
        canvas = Canvas(5, 5).draw_point(0.5, 0.5)
        assert canvas.at(2, 2).style == MAIN

    def test_point_outside_limits_skipped(self):
        canvas = Canvas(5, 5).draw_point(1.5, 0.5).draw_point(0.0, 0.5)
        assert glyph_count(canvas, "_") == 0

    def test_mismatched_lengths_raise(self):
        with pytest.raises(InconsistentData):
            Canvas(5, 5).draw_points([1, 2, 3], [1, 2])

    def test_auto_limits_with_margins(self):
        canvas = Canvas(10, 10).set_auto_limits([1, 2, 3], [10, 20])
        assert canvas.xlim_left == pytest.approx(0.98)
        assert canvas.xlim_right == pytest.approx(3.02)
        assert canvas.ylim_bottom == pytest.approx(9.8)
        assert canvas.ylim_top == pytest.approx(20.2)

    def test_auto_limit_bottom_only_moves_down(self):
        canvas = Canvas(10, 10).auto_limit(Borders.BOTTOM)
        canvas.set_ylimits(0, 100).set_auto_limits([], [50, 60])
        assert canvas.ylim_bottom < 50
        assert canvas.ylim_top == 100

    def test_auto_limit_disabled(self):
        canvas = Canvas(10, 10).auto_limit(Borders.NONE).set_auto_limits([5, 6], [5, 6])
        assert (canvas.xlim_left, canvas.xlim_right) == (0.0, 1.0)

    def test_plot_data_registers_metadata(self):
        canvas = Canvas(10, 10).plot_data([1, 2, 3], [1, 4, 9], label="squares")
        assert canvas.metadata == [PlotMetadata(Brush("_", MAIN), "squares", 3)]
        assert glyph_count(canvas, "_") == 3

    def test_how_many_limits_points(self):
        canvas = Canvas(20, 20).draw_points([1, 2, 3], [1, 2, 3], how_many=1)
        assert glyph_count(canvas, "_") == 1


class TestLimitSetters:
    """Limit setters only accept ordered values."""

    def test_unordered_xlimits_ignored(self):
        canvas = Canvas(4, 4).set_xlimits(3, 1)
        assert (canvas.xlim_left, canvas.xlim_right) == (0.0, 1.0)

    def test_single_setters(self):
        canvas = Canvas(4, 4).set_xlim_right(10).set_xlim_left(5).set_ylim_top(3).set_ylim_bottom(-1)
        assert (canvas.xlim_left, canvas.xlim_right) == (5, 10)
        assert (canvas.ylim_bottom, canvas.ylim_top) == (-1, 3)

    def test_single_setter_rejects_crossing(self):
        canvas = Canvas(4, 4).set_xlim_left(2).set_ylim_top(-1)
        assert canvas.xlim_left == 0.0
        assert canvas.ylim_top == 1.0


class TestText:
    """Tests for text drawing."""

    def test_draw_text(self):
        assert Canvas(5, 1).draw_text("hi", (1, 0)).serialize() == " hi  "

    def test_long_text_pulled_onto_canvas(self):
        assert Canvas(5, 1).draw_text("abcdefg", (2, 0)).serialize() == "abcde"

    def test_text_clipped_without_adjust(self):
        assert Canvas(5, 1).draw_text("abcdefg", (3, 0), adjust=False).serialize() == "   ab"

    def test_text_cells_are_anonymous(self):
        canvas = Canvas(3, 1).draw_text("a b", (0, 0))
        assert canvas.at(1, 0) == Cell(None, " ")

    def test_centered(self):
        assert Canvas(7, 1).draw_text_centered("abc", Anchor.CENTER).serialize() == "  abc  "

    def test_vertical(self):
        canvas = Canvas(2, 3).draw_text_vertical("ab", Anchor.NORTH_WEST)
        assert canvas.serialize() == "a \nb \n  "

    def test_vertical_centered(self):
        canvas = Canvas(1, 5).draw_text_vertical_centered("abc", Anchor.CENTER)
        assert canvas.serialize() == " \na\nb\nc\n "

    def test_title(self):
        canvas = Canvas(9, 2).set_title("abc").draw_title()
        assert canvas.serialize() == "   abc   \n         "


class TestBoxesAndRegions:
    """Tests for boxes, extraction and shifting."""

    def test_box_corner_order_irrelevant(self):
        a = Canvas(4, 3).draw_box((2, 2), (1, 0))
        b = Canvas(4, 3).draw_box((1, 0), (2, 2))
        assert a.serialize() == b.serialize() == " ## \n ## \n ## "

    def test_box_default_brush_is_area(self):
        assert Canvas(2, 1).draw_box((0, 0), (1, 0)).at(0, 0).style == AREA

    def test_box_clipped(self):
        canvas = Canvas(3, 2).draw_box((-5, -5), (1, 0), Brush("o"))
        assert canvas.serialize() == "   \noo "

    def test_extract(self):
        canvas = Canvas(4, 3)
        canvas.put(1, 1, Brush("x"))
        part = canvas.extract((1, 1), (2, 2))
        assert (part.width, part.height) == (2, 2)
        assert part.at(0, 0).glyph == "x"

    def test_extract_beyond_source_is_blank(self):
        canvas = Canvas(4, 3).fill()
        part = canvas.extract((3, 2), (5, 3))
        assert (part.width, part.height) == (3, 2)
        assert part.at(0, 0) == canvas.at(3, 2)
        assert part.at(2, 1).is_blank

    def test_extract_copies_limits(self):
        canvas = Canvas(4, 3).set_xlimits(-5, 5)
        assert canvas.extract((0, 0), (1, 1)).xlim_left == -5

    def test_shift(self):
        canvas = Canvas(3, 1)
        canvas.put(0, 0, Brush("a"))
        assert canvas.shift(Offset(1, 0)).serialize() == " a "

    def test_shift_discards_content(self):
        canvas = Canvas(3, 2).fill()
        assert canvas.shift((5, 0)).serialize() == "   \n   "

    def test_blank_like(self):
        canvas = Canvas(3, 2).fill()
        other = canvas.blank_like()
        assert other.is_like(canvas)
        assert other.serialize() == "   \n   "


class TestPaletteOnCanvas:
    """Tests for brush changes and redraw."""

    def test_set_main_brush(self):
        assert Canvas(2, 1).set_main_brush("*").fill().serialize() == "**"

    def test_redraw_reresolves_named_cells(self):
        canvas = Canvas(3, 1).fill()
        canvas.put(2, 0, Brush("x"))
        canvas.set_main_brush("*").redraw()
        assert canvas.serialize() == "**x"

    def test_names(self):
        canvas = Canvas(1, 1).set_name("left").set_title("Title")
        assert (canvas.name, canvas.title) == ("left", "Title")


class TestLegend:
    """Tests for legend layout."""

    def test_empty_legend_noop(self):
        assert Canvas(5, 5).draw_legend().serialize() == Canvas(5, 5).serialize()

    def test_legend_north_east(self):
        canvas = Canvas(20, 6)
        canvas.metadata.append(PlotMetadata(Brush("*", MAIN), "ab"))
        lines = canvas.draw_legend().serialize().split("\n")
        assert lines[1] == " " * 11 + "________" + " "
        assert lines[2] == " " * 11 + "| * ab |" + " "
        assert lines[3] == " " * 11 + "|______|" + " "

    def test_legend_latest_entry_lowest(self):
        canvas = Canvas(20, 6)
        canvas.metadata.append(PlotMetadata(Brush("*", MAIN), "one"))
        canvas.metadata.append(PlotMetadata(Brush("o", MAIN), "two"))
        text = canvas.draw_legend().serialize()
        assert text.index("* one") < text.index("o two")


class TestDrawImage:
    """Tests for rasterizing images."""

    def test_white_image(self, white_bmp):
        canvas = Canvas(2, 2).draw_image(Image.from_bytes(white_bmp))
        assert canvas.serialize() == "@@\n@@"

    def test_inverted_image(self, white_bmp):
        canvas = Canvas(2, 2).fill().draw_image(Image.from_bytes(white_bmp).invert())
        assert canvas.serialize() == "  \n  "

    def test_image_resized_to_bounds(self):
        image = Image.from_array(np.full((4, 4), 255))
        canvas = Canvas(10, 10).draw_image(image, max_width=2, max_height=2)
        assert glyph_count(canvas, "@") == 4
        assert canvas.at(1, 1).glyph == "@"
        assert image.width == 4

    def test_image_at_position(self):
        image = Image.from_array(np.full((1, 1), 255))
        canvas = Canvas(3, 3).draw_image(image, position=Anchor.CENTER)
        assert canvas.at(1, 1).glyph == "@"
