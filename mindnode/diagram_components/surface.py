from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Tuple

from wcwidth import wcwidth

from ..errors import MeasurementError
from .core import FontSpec
from .shapes import Shape
from .viewport import Transform


def cell_width(text: str) -> int:
    return sum(max(wcwidth(char), 1) for char in text)


class Surface(ABC):
    """What the engine needs from a drawing toolkit.

    Shapes are addressed by string keys. ``measure_text`` may be called only
    after the shapes it measures for have been attached.
    """

    @abstractmethod
    def add(self, key: str, shape: Shape) -> None:
        ...

    @abstractmethod
    def restyle(self, key: str, shape: Shape) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...

    @abstractmethod
    def has(self, key: str) -> bool:
        ...

    @abstractmethod
    def measure_text(self, text: str, font: FontSpec) -> Tuple[float, float]:
        ...

    @abstractmethod
    def set_transform(self, transform: Transform) -> None:
        ...


class SceneSurface(Surface):
    """Retained in-memory scene.

    Text is measured in display cells: every cell is half an em wide, so a
    CJK glyph spans a full em and a Latin glyph half of one.
    """

    em_per_cell = 0.5

    def __init__(self, line_height: float = 1.2) -> None:
        self.shapes: Dict[str, Shape] = {}
        self.transform = Transform()
        self.line_height = line_height
        self.attached = True

    def add(self, key: str, shape: Shape) -> None:
        if key in self.shapes:
            raise KeyError(f"Shape {key!r} is already attached.")
        self.shapes[key] = shape

    def restyle(self, key: str, shape: Shape) -> None:
        if key not in self.shapes:
            raise KeyError(f"Shape {key!r} is not attached.")
        self.shapes[key] = shape

    def remove(self, key: str) -> None:
        self.shapes.pop(key, None)

    def has(self, key: str) -> bool:
        return key in self.shapes

    def keys(self) -> Iterator[str]:
        return iter(list(self.shapes))

    def get(self, key: str) -> Optional[Shape]:
        return self.shapes.get(key)

    def measure_text(self, text: str, font: FontSpec) -> Tuple[float, float]:
        if not self.attached:
            raise MeasurementError("Surface is detached; text cannot be measured.")
        return cell_width(text) * font.size * self.em_per_cell, font.size * self.line_height

    def set_transform(self, transform: Transform) -> None:
        self.transform = transform

    def detach(self) -> None:
        self.attached = False

    def attach(self) -> None:
        self.attached = True

    def ordered(self) -> List[Tuple[str, Shape]]:
        """Shapes in paint order: links under boxes under labels."""
        return sorted(self.shapes.items(), key=lambda item: item[1].layer)
