from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from .core import Point


@dataclass(frozen=True)
class Transform:
    """``translate(x, y) scale(k)`` applied to the whole diagram group."""

    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    def apply(self, point: Point) -> Point:
        return Point(point.x * self.k + self.x, point.y * self.k + self.y)

    def invert(self, point: Point) -> Point:
        return Point((point.x - self.x) / self.k, (point.y - self.y) / self.k)

    def translate(self, dx: float, dy: float) -> "Transform":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def scale_about(self, k: float, anchor: Point) -> "Transform":
        # Keep the diagram point under ``anchor`` fixed on screen.
        origin = self.invert(anchor)
        return Transform(anchor.x - origin.x * k, anchor.y - origin.y * k, k)

    def to_svg(self) -> str:
        return f"translate({self.x:g},{self.y:g}) scale({self.k:g})"


@dataclass(frozen=True)
class GestureDelta:
    """One pan/zoom step reported by the gesture source.

    ``scale`` is multiplicative; ``anchor`` is the screen point the zoom is
    centred on (the pointer for wheel or pinch).
    """

    dx: float = 0.0
    dy: float = 0.0
    scale: float = 1.0
    anchor: Optional[Point] = None


Listener = Callable[[Transform], None]


class Viewport:
    def __init__(
        self,
        *,
        scale_extent: Tuple[float, float] = (0.1, 3.0),
        initial_scale: float = 0.9,
        initial_offset_x: float = 100,
        width: float = 900,
        height: float = 600,
    ) -> None:
        low, high = scale_extent
        if low <= 0 or high < low:
            raise ValueError("scale_extent must satisfy 0 < min <= max.")
        self.scale_extent = (low, high)
        self.initial_scale = initial_scale
        self.initial_offset_x = initial_offset_x
        self.width = width
        self.height = height
        self._listeners: List[Listener] = []
        self.transform = self.initial_transform()

    @classmethod
    def from_config(cls, config) -> "Viewport":
        return cls(
            scale_extent=config.scale_extent,
            initial_scale=config.initial_scale,
            initial_offset_x=config.initial_offset_x,
            width=config.viewport_width,
            height=config.viewport_height,
        )

    def initial_transform(self) -> Transform:
        return Transform(self.initial_offset_x, self.height / 2, self.clamp(self.initial_scale))

    def clamp(self, k: float) -> float:
        low, high = self.scale_extent
        return min(max(k, low), high)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _set(self, transform: Transform) -> Transform:
        self.transform = transform
        for listener in self._listeners:
            listener(transform)
        return transform

    def reset(self) -> Transform:
        return self._set(self.initial_transform())

    def pan(self, dx: float, dy: float) -> Transform:
        return self._set(self.transform.translate(dx, dy))

    def zoom(self, factor: float, anchor: Optional[Point] = None) -> Transform:
        if factor <= 0:
            raise ValueError("zoom factor must be positive.")
        if anchor is None:
            anchor = Point(self.width / 2, self.height / 2)
        k = self.clamp(self.transform.k * factor)
        return self._set(self.transform.scale_about(k, anchor))

    def apply_gesture(self, delta: GestureDelta) -> Transform:
        transform = self.transform.translate(delta.dx, delta.dy)
        if delta.scale != 1.0:
            if delta.scale <= 0:
                raise ValueError("gesture scale must be positive.")
            anchor = delta.anchor or Point(self.width / 2, self.height / 2)
            transform = transform.scale_about(self.clamp(transform.k * delta.scale), anchor)
        return self._set(transform)

    def to_diagram(self, screen: Point) -> Point:
        return self.transform.invert(screen)
