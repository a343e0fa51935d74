from typing import Dict, List, Tuple

from rich.markup import escape
from wcwidth import wcwidth

from ..errors import LayoutOverflowError


class Canvas:
    """Character grid that knows about double-width glyphs.

    A wide glyph occupies its own cell plus a zero-width continuation cell to
    its right. Markup (rich tags) is stored beside the grid and only emitted
    by :meth:`render` when asked for.
    """

    def __init__(self, width: int = 200, height: int = 100):
        self.width = width
        self.height = height
        self.grid = [[" " for _ in range(width)] for _ in range(height)]
        self.cell_widths = [[1 for _ in range(width)] for _ in range(height)]
        self.markup: Dict[Tuple[int, int], Dict[str, List[str]]] = {}

    def _check(self, x: int, y: int) -> None:
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise LayoutOverflowError(
                f"Mind map content exceeds canvas bounds at ({x}, {y})."
            )

    def _clear_glyph_at(self, x: int, y: int) -> None:
        base_x = x
        while base_x > 0 and self.cell_widths[y][base_x] == 0:
            base_x -= 1
        for i in range(max(self.cell_widths[y][base_x], 1)):
            xi = base_x + i
            if xi < self.width:
                self.grid[y][xi] = " "
                self.cell_widths[y][xi] = 1
                self.markup.pop((xi, y), None)

    def set(self, x: int, y: int, char: str, width: int = 1) -> None:
        self._check(x, y)
        width = max(width, 1)
        self._check(x + width - 1, y)

        for i in range(width):
            self._clear_glyph_at(x + i, y)

        self.grid[y][x] = char
        self.cell_widths[y][x] = width
        for i in range(1, width):
            self.grid[y][x + i] = ""
            self.cell_widths[y][x + i] = 0

    def get(self, x: int, y: int) -> str:
        if 0 <= y < self.height and 0 <= x < self.width:
            if self.cell_widths[y][x] == 0:
                return " "
            return self.grid[y][x]
        return " "

    def write_text(self, x: int, y: int, text: str) -> int:
        """Write ``text`` starting at ``x``; return the number of cells used."""
        cursor = x
        for char in text:
            width = max(wcwidth(char), 1)
            self.set(cursor, y, char, width)
            cursor += width
        return cursor - x

    def insert_markup(self, x: int, y: int, markup: str, *, position: str = "prefix") -> None:
        if not markup:
            return
        if position not in {"prefix", "suffix"}:
            position = "prefix"
        cell = self.markup.setdefault((x, y), {"prefix": [], "suffix": []})
        cell[position].append(markup)

    def _row(self, y: int, include_markup: bool) -> str:
        if not include_markup:
            return "".join(self.grid[y])

        parts: List[str] = []
        plain: List[str] = []

        def flush() -> None:
            # Label text must not be read as rich tags.
            if plain:
                parts.append(escape("".join(plain)))
                plain.clear()

        for x in range(self.width):
            if self.cell_widths[y][x] == 0:
                continue
            cell = self.markup.get((x, y))
            if cell:
                flush()
                parts.extend(cell["prefix"])
                parts.append(escape(self.grid[y][x]))
                parts.extend(cell["suffix"])
            else:
                plain.append(self.grid[y][x])
        flush()
        return "".join(parts)

    def render(self, include_markup: bool = False) -> str:
        lines = [self._row(y, include_markup).rstrip() for y in range(self.height)]
        while lines and not lines[-1]:
            lines.pop()
        return "\n".join(lines)
