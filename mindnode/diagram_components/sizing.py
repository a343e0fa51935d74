from numbers import Real
from typing import Callable, Sequence, Tuple

from ..errors import MeasurementError
from .core import BoxSize, FontSpec

Measure = Callable[[str, FontSpec], Tuple[float, float]]


class BoxSizer:
    """Rectangle that contains a node's wrapped label.

    ``width = max(min_width, widest line + padding_x)`` and
    ``height = max(min_height, lines * line_height + padding_y)``.
    """

    def __init__(
        self,
        measure: Measure,
        *,
        font: FontSpec,
        line_height: float,
        min_width: float = 80,
        min_height: float = 40,
        padding_x: float = 30,
        padding_y: float = 20,
    ) -> None:
        self._measure = measure
        self.font = font
        self.line_height = line_height
        self.min_width = min_width
        self.min_height = min_height
        self.padding_x = padding_x
        self.padding_y = padding_y

    @classmethod
    def from_config(cls, measure: Measure, config) -> "BoxSizer":
        return cls(
            measure,
            font=config.font,
            line_height=config.line_height_px,
            min_width=config.min_box_width,
            min_height=config.min_box_height,
            padding_x=config.padding_x,
            padding_y=config.padding_y,
        )

    def line_width(self, line: str) -> float:
        result = self._measure(line, self.font)
        try:
            width, _ = result
        except (TypeError, ValueError) as exc:
            raise MeasurementError(f"Text measurement returned {result!r}.") from exc
        if not isinstance(width, Real) or width < 0:
            raise MeasurementError(f"Text measurement returned an invalid width {width!r}.")
        return float(width)

    def size(self, lines: Sequence[str]) -> BoxSize:
        widest = max((self.line_width(line) for line in lines), default=0.0)
        return BoxSize(
            max(self.min_width, widest + self.padding_x),
            max(self.min_height, len(lines) * self.line_height + self.padding_y),
        )
