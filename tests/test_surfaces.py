"""
Tests for the SVG and terminal render surfaces and the character canvas.
"""

import io

import pytest
from rich.console import Console

from mindnode import AsciiSurface, ConfigurationError, LayoutOverflowError, MindMap, SvgSurface
from mindnode.diagram_components.canvas import Canvas


@pytest.fixture
def svg_map(kidney_payload, clock):
    return MindMap(kidney_payload, surface=SvgSurface(), clock=clock)


@pytest.fixture
def ascii_map(kidney_payload, clock):
    return MindMap(kidney_payload, surface=AsciiSurface(), clock=clock)


class TestSvgSurface:
    def test_document_structure(self, svg_map):
        svg = svg_map.render()
        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="900" height="600"')
        assert '<g transform="translate(100,300) scale(0.9)">' in svg
        assert svg.count("<rect") == 3
        assert svg.count('class="link"') == 2
        for label in ("腎臟病", "飲食", "症狀"):
            assert f">{label}</tspan>" in svg

    def test_links_are_painted_under_boxes(self, svg_map):
        svg = svg_map.render()
        assert svg.rindex('class="link"') < svg.index("<rect")

    def test_link_is_a_cubic_curve(self, svg_map):
        assert 'd="M 0 0 C 120 0, 120 -45, 240 -45"' in svg_map.render()

    def test_collapsed_children_disappear(self, svg_map):
        svg_map.activate(svg_map.root.identity)
        svg = svg_map.render()
        assert "飲食" not in svg
        assert 'class="link"' not in svg
        assert 'fill="#fef3c7"' in svg

    def test_hidden_shapes_are_skipped_mid_animation(self, svg_map):
        surface = svg_map.surface
        assert "<rect" not in surface.to_svg()
        assert surface.to_svg(include_hidden=True).count("<rect") == 3

    def test_labels_are_escaped(self, clock):
        mind_map = MindMap({"name": "<b>&"}, surface=SvgSurface(), clock=clock)
        assert "&lt;b&gt;&amp;" in mind_map.render()

    def test_multi_line_labels(self, clock):
        mind_map = MindMap({"name": "長期追蹤與定期檢驗"}, surface=SvgSurface(), clock=clock, max_chars_per_line=5)
        svg = mind_map.render()
        assert svg.count("<tspan") == 2

    def test_save(self, svg_map, tmp_path):
        svg_map.settle()
        target = tmp_path / "map.svg"
        svg_map.surface.save(target)
        assert target.read_text(encoding="utf-8") == svg_map.surface.to_svg()


class TestAsciiSurface:
    def test_boxes_labels_and_connectors(self, ascii_map):
        text = ascii_map.render()
        for label in ("腎臟病", "飲食", "症狀"):
            assert label in text
        assert "╭" in text and "╯" in text

    def test_branch_junctions(self, ascii_map):
        lines = ascii_map.render().splitlines()
        root_line = next(line for line in lines if "腎臟病" in line)
        upper = next(line for line in lines if "飲食" in line)
        lower = next(line for line in lines if "症狀" in line)

        # The trunk leaves the root, turns up into one child and down into the other.
        assert "┤" in root_line and "┼" not in root_line
        assert "╭" in upper and "├" not in upper
        assert "╰" in lower and "├" not in lower
        assert not any(glyph in "\n".join(lines) for glyph in "┼┴┬")

    def test_single_child_link_is_straight(self, clock):
        mind_map = MindMap({"name": "root", "children": [{"name": "only"}]}, surface=AsciiSurface(), clock=clock)
        root_line = next(line for line in mind_map.render().splitlines() if "root" in line)
        assert "only" in root_line
        assert not any(glyph in root_line for glyph in "┤├┼╭╰")

    def test_children_are_right_of_root(self, ascii_map):
        lines = ascii_map.render().splitlines()
        root_line = next(line for line in lines if "腎臟病" in line)
        child_line = next(line for line in lines if "飲食" in line)
        assert root_line.index("腎臟病") < child_line.index("飲食")

    def test_collapsed_marker(self, ascii_map):
        ascii_map.activate(ascii_map.root.identity)
        text = ascii_map.render()
        assert "▸" in text
        assert "飲食" not in text

    def test_markup_colours_borders_by_depth(self, ascii_map):
        text = ascii_map.render(include_markup=True)
        assert "[#1e3a8a]" in text
        assert "[#2563eb]" in text

    def test_label_brackets_are_escaped_in_markup(self, clock):
        mind_map = MindMap({"name": "[x]"}, surface=AsciiSurface(), clock=clock)
        assert "\\[x]" in mind_map.render(include_markup=True)
        assert "[x]" in mind_map.render()

    def test_print_through_rich(self, ascii_map):
        ascii_map.settle()
        buffer = io.StringIO()
        ascii_map.surface.print(Console(file=buffer, width=200, color_system=None))
        assert "症狀" in buffer.getvalue()

    def test_plain_ascii_style(self, kidney_payload, clock):
        mind_map = MindMap(kidney_payload, surface=AsciiSurface(box_style="ascii"), clock=clock)
        text = mind_map.render()
        assert "+" in text and "|" in text
        assert "╭" not in text

    def test_unknown_style(self):
        with pytest.raises(ConfigurationError):
            AsciiSurface(box_style="dotted")

    def test_empty_surface(self):
        assert AsciiSurface().render() == ""


class TestCanvas:
    def test_wide_glyphs_take_two_cells(self):
        canvas = Canvas(10, 2)
        assert canvas.write_text(0, 0, "腎a") == 3
        assert canvas.get(1, 0) == " "
        assert canvas.render() == "腎a"

    def test_overwriting_half_a_wide_glyph_clears_it(self):
        canvas = Canvas(10, 1)
        canvas.write_text(0, 0, "腎a")
        canvas.set(1, 0, "x")
        assert canvas.render() == " xa"

    def test_out_of_bounds(self):
        canvas = Canvas(10, 1)
        with pytest.raises(LayoutOverflowError):
            canvas.set(10, 0, "x")
        with pytest.raises(LayoutOverflowError):
            canvas.write_text(9, 0, "腎")

    def test_markup_wraps_cells(self):
        canvas = Canvas(3, 1)
        canvas.write_text(0, 0, "abc")
        canvas.insert_markup(1, 0, "[red]")
        canvas.insert_markup(1, 0, "[/]", position="suffix")
        assert canvas.render(include_markup=True) == "a[red]b[/]c"
        assert canvas.render() == "abc"
