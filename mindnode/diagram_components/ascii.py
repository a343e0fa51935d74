from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple, Union

from rich.console import Console

from ..errors import ConfigurationError
from .canvas import Canvas
from .core import COLLAPSED_FILL, BoxChars, Point
from .shapes import CurvePath, RoundedRect, TextBlock
from .surface import SceneSurface, cell_width
from .svg import MIN_VISIBLE_OPACITY

Cell = Tuple[int, int]


@dataclass
class _Box:
    left: int
    top: int
    width: int
    height: int
    lines: Tuple[str, ...]
    stroke: str
    collapsed: bool

    @property
    def right(self) -> int:
        return self.left + self.width - 1

    @property
    def bottom(self) -> int:
        return self.top + self.height - 1

    @property
    def middle(self) -> int:
        return self.top + self.height // 2


class AsciiSurface(SceneSurface):
    """Draws the scene as box-drawing characters for a terminal.

    Surface units are mapped to cells by ``cell_width`` and ``cell_height``
    (defaults match a 14px font: half an em per column, one line per row).
    Boxes grow to fit their label in cells; links become elbow connectors.
    """

    def __init__(
        self,
        *,
        cell_width: float = 7.0,
        cell_height: float = 17.0,
        box_style: Union[str, BoxChars] = "rounded",
        use_transform: bool = False,
        line_height: float = 1.2,
    ) -> None:
        super().__init__(line_height=line_height)
        if cell_width <= 0 or cell_height <= 0:
            raise ConfigurationError("cell_width and cell_height must be positive.")
        if isinstance(box_style, BoxChars):
            self.chars = box_style
        else:
            try:
                self.chars = BoxChars.for_style(box_style)
            except ValueError as exc:
                raise ConfigurationError(str(exc)) from exc
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.use_transform = use_transform

    # -- geometry ----------------------------------------------------------

    def _project(self, point: Point) -> Point:
        if self.use_transform:
            point = self.transform.apply(point)
        return Point(point.x / self.cell_width, point.y / self.cell_height)

    def _scale(self) -> float:
        return self.transform.k if self.use_transform else 1.0

    def _cell(self, point: Point) -> Cell:
        projected = self._project(point)
        return round(projected.x), round(projected.y)

    def _boxes(self) -> List[_Box]:
        boxes: List[_Box] = []
        for key, shape in self.shapes.items():
            if not isinstance(shape, RoundedRect) or shape.width <= 0 or shape.height <= 0:
                continue
            label = self.shapes.get(key[: -len(":box")] + ":label") if key.endswith(":box") else None
            lines: Tuple[str, ...] = ()
            if isinstance(label, TextBlock) and label.opacity >= MIN_VISIBLE_OPACITY:
                lines = label.lines

            scale = self._scale()
            text_cells = max((cell_width(line) for line in lines), default=0)
            width = max(round(shape.width * scale / self.cell_width), text_cells + 4, 3)
            height = max(round(shape.height * scale / self.cell_height), len(lines) + 2, 3)
            cx, cy = self._cell(Point(shape.cx, shape.cy))
            boxes.append(
                _Box(
                    left=cx - width // 2,
                    top=cy - height // 2,
                    width=width,
                    height=height,
                    lines=lines,
                    stroke=shape.stroke,
                    collapsed=shape.fill == COLLAPSED_FILL,
                )
            )
        return boxes

    def _links(self, boxes: List[_Box]) -> List[Tuple[Cell, Cell]]:
        by_center: Dict[Cell, _Box] = {}
        for box in boxes:
            by_center[(box.left + box.width // 2, box.middle)] = box

        links: List[Tuple[Cell, Cell]] = []
        for shape in self.shapes.values():
            if not isinstance(shape, CurvePath):
                continue
            start = self._cell(shape.start)
            end = self._cell(shape.end)
            if start == end:
                continue
            source = by_center.get(start)
            target = by_center.get(end)
            if source is not None:
                start = (source.right + 1, source.middle)
            if target is not None:
                end = (target.left - 1, target.middle)
            links.append((start, end))
        return links

    # -- connectors --------------------------------------------------------

    def _dirs_to_char(self, dirs: Set[str]) -> str:
        mapping = {
            frozenset({"up", "down"}): self.chars.vertical,
            frozenset({"left", "right"}): self.chars.horizontal,
            frozenset({"down", "right"}): self.chars.top_left,
            frozenset({"down", "left"}): self.chars.top_right,
            frozenset({"up", "right"}): self.chars.bottom_left,
            frozenset({"up", "left"}): self.chars.bottom_right,
            frozenset({"up", "down", "left", "right"}): self.chars.cross,
            frozenset({"up", "left", "right"}): self.chars.tee_up,
            frozenset({"down", "left", "right"}): self.chars.tee_down,
            frozenset({"up", "down", "left"}): self.chars.tee_left,
            frozenset({"up", "down", "right"}): self.chars.tee_right,
            frozenset({"up"}): self.chars.vertical,
            frozenset({"down"}): self.chars.vertical,
            frozenset({"left"}): self.chars.horizontal,
            frozenset({"right"}): self.chars.horizontal,
        }
        return mapping.get(frozenset(dirs), self.chars.cross)

    def _segment(self, connectors: Dict[Cell, Set[str]], start: Cell, end: Cell) -> None:
        (x0, y0), (x1, y1) = start, end
        if y0 == y1:
            step = 1 if x1 >= x0 else -1
            forward, backward = ("right", "left") if step > 0 else ("left", "right")
            cells = [(x, y0) for x in range(x0, x1 + step, step)]
        else:
            step = 1 if y1 >= y0 else -1
            forward, backward = ("down", "up") if step > 0 else ("up", "down")
            cells = [(x0, y) for y in range(y0, y1 + step, step)]

        for cell in cells:
            dirs = connectors.setdefault(cell, set())
            if cell != end:
                dirs.add(forward)
            if cell != start:
                dirs.add(backward)
            if start == end:
                dirs.add(forward)

    def _route(self, connectors: Dict[Cell, Set[str]], start: Cell, end: Cell) -> None:
        (x0, y0), (x1, y1) = start, end
        if y0 == y1:
            self._segment(connectors, start, end)
            return
        bend = x0 + max((x1 - x0) // 2, 0)
        self._segment(connectors, start, (bend, y0))
        self._segment(connectors, (bend, y0), (bend, y1))
        self._segment(connectors, (bend, y1), end)

    def _draw_connectors(self, canvas: Canvas, connectors: Dict[Cell, Set[str]]) -> None:
        # Every cell is written once, from the union of the links through it.
        for (x, y), dirs in connectors.items():
            canvas.set(x, y, self._dirs_to_char(dirs))

    # -- boxes -------------------------------------------------------------

    def _draw_box(self, canvas: Canvas, box: _Box, include_markup: bool) -> None:
        chars = self.chars
        for y in range(box.top, box.bottom + 1):
            for x in range(box.left, box.right + 1):
                canvas.set(x, y, " ")

        canvas.set(box.left, box.top, chars.top_left)
        canvas.set(box.right, box.top, chars.top_right)
        canvas.set(box.left, box.bottom, chars.bottom_left)
        canvas.set(box.right, box.bottom, chars.bottom_right)
        for x in range(box.left + 1, box.right):
            canvas.set(x, box.top, chars.horizontal)
            canvas.set(x, box.bottom, chars.horizontal)
        for y in range(box.top + 1, box.bottom):
            canvas.set(box.left, y, chars.vertical)
            canvas.set(box.right, y, chars.vertical)

        first_row = box.top + 1 + (box.height - 2 - len(box.lines)) // 2
        for index, line in enumerate(box.lines):
            start = box.left + (box.width - cell_width(line)) // 2
            canvas.write_text(start, first_row + index, line)

        if box.collapsed:
            canvas.set(box.right + 1, box.middle, chars.collapsed_marker)

        if include_markup:
            for y in range(box.top, box.bottom + 1):
                if y in (box.top, box.bottom):
                    canvas.insert_markup(box.left, y, f"[{box.stroke}]")
                    canvas.insert_markup(box.right, y, "[/]", position="suffix")
                else:
                    for x in (box.left, box.right):
                        canvas.insert_markup(x, y, f"[{box.stroke}]")
                        canvas.insert_markup(x, y, "[/]", position="suffix")

    # -- output ------------------------------------------------------------

    def render(self, include_markup: bool = False) -> str:
        boxes = self._boxes()
        links = self._links(boxes)
        if not boxes and not links:
            return ""

        xs: List[int] = []
        ys: List[int] = []
        for box in boxes:
            xs.extend((box.left, box.right + 1))
            ys.extend((box.top, box.bottom))
        for start, end in links:
            xs.extend((start[0], end[0]))
            ys.extend((start[1], end[1]))
        dx, dy = -min(xs), -min(ys)

        canvas = Canvas(width=max(xs) + dx + 1, height=max(ys) + dy + 1)
        connectors: Dict[Cell, Set[str]] = {}
        for start, end in links:
            self._route(connectors, (start[0] + dx, start[1] + dy), (end[0] + dx, end[1] + dy))
        self._draw_connectors(canvas, connectors)
        for box in boxes:
            box.left += dx
            box.top += dy
            self._draw_box(canvas, box, include_markup)
        return canvas.render(include_markup=include_markup)

    def print(self, console: Optional[Console] = None) -> None:
        (console or Console()).print(self.render(include_markup=True))
