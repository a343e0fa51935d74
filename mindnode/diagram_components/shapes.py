from dataclasses import dataclass, field
from typing import ClassVar, Tuple, Union

from .core import FontSpec, Point, TEXT_FILL


@dataclass(frozen=True)
class RoundedRect:

    layer: ClassVar[int] = 1

    cx: float
    cy: float
    width: float
    height: float
    rx: float = 12
    fill: str = "#ffffff"
    stroke: str = "#1e3a8a"
    stroke_width: float = 2.5
    opacity: float = 1.0

    @property
    def left(self) -> float:
        return self.cx - self.width / 2

    @property
    def top(self) -> float:
        return self.cy - self.height / 2

    def contains(self, x: float, y: float) -> bool:
        return abs(x - self.cx) <= self.width / 2 and abs(y - self.cy) <= self.height / 2


@dataclass(frozen=True)
class TextBlock:

    layer: ClassVar[int] = 2

    cx: float
    cy: float
    lines: Tuple[str, ...] = ()
    font: FontSpec = field(default_factory=FontSpec)
    line_height: float = 1.2
    fill: str = TEXT_FILL
    opacity: float = 1.0

    def baselines(self) -> Tuple[float, ...]:
        """Vertical centre of each line, the block being centred on ``cy``."""
        step = self.font.size * self.line_height
        first = self.cy - (len(self.lines) - 1) * step / 2
        return tuple(first + index * step for index in range(len(self.lines)))


@dataclass(frozen=True)
class CurvePath:

    layer: ClassVar[int] = 0

    start: Point
    control_1: Point
    control_2: Point
    end: Point
    stroke: str = "#1e3a8a"
    stroke_width: float = 2
    opacity: float = 0.4

    @property
    def d(self) -> str:
        return (
            f"M {self.start.x:g} {self.start.y:g} "
            f"C {self.control_1.x:g} {self.control_1.y:g}, "
            f"{self.control_2.x:g} {self.control_2.y:g}, "
            f"{self.end.x:g} {self.end.y:g}"
        )


Shape = Union[RoundedRect, TextBlock, CurvePath]


def to_screen(point: Point) -> Point:
    """Layout frame (x along siblings, y along depth) to drawing frame."""
    return Point(point.y, point.x)


def diagonal(source: Point, target: Point, **style) -> CurvePath:
    """Cubic link between two layout points, bending halfway along the depth axis."""
    start = to_screen(source)
    end = to_screen(target)
    middle = (start.x + end.x) / 2
    return CurvePath(
        start=start,
        control_1=Point(middle, start.y),
        control_2=Point(middle, end.y),
        end=end,
        **style,
    )
