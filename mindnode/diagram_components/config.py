from dataclasses import dataclass, field
from numbers import Real
from typing import Tuple

from ..errors import ConfigurationError
from .core import DEPTH_PALETTE, FontSpec


WRAP_MODES = ("balanced", "words")


@dataclass(frozen=True)
class MindMapConfig:
    """Tunables of a mind map.

    Spacing, sizes and offsets are in surface units (pixels for the SVG
    surface). ``horizontal_spacing`` separates depth columns and
    ``vertical_spacing`` separates sibling slots.
    """

    horizontal_spacing: float = 240
    vertical_spacing: float = 90

    max_chars_per_line: int = 10
    wrap_mode: str = "balanced"

    min_box_width: float = 80
    min_box_height: float = 40
    padding_x: float = 30
    padding_y: float = 20
    line_height: float = 1.2
    corner_radius: float = 12
    font: FontSpec = field(default_factory=FontSpec)
    palette: Tuple[str, ...] = DEPTH_PALETTE

    duration: float = 0.5

    scale_extent: Tuple[float, float] = (0.1, 3.0)
    initial_scale: float = 0.9
    initial_offset_x: float = 100
    viewport_width: float = 900
    viewport_height: float = 600

    max_depth: int = 64
    max_nodes: int = 5000

    @property
    def line_height_px(self) -> float:
        return self.font.size * self.line_height

    def validate(self) -> "MindMapConfig":
        for name in (
            "horizontal_spacing",
            "vertical_spacing",
            "line_height",
            "viewport_width",
            "viewport_height",
        ):
            value = getattr(self, name)
            if not isinstance(value, Real) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number.")

        for name in (
            "min_box_width",
            "min_box_height",
            "padding_x",
            "padding_y",
            "corner_radius",
            "duration",
        ):
            value = getattr(self, name)
            if not isinstance(value, Real) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative number.")

        for name in ("max_chars_per_line", "max_depth", "max_nodes"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer.")

        if self.wrap_mode not in WRAP_MODES:
            raise ConfigurationError(
                f"wrap_mode must be one of {', '.join(WRAP_MODES)}, got {self.wrap_mode!r}."
            )

        if not isinstance(self.font, FontSpec) or self.font.size <= 0:
            raise ConfigurationError("font must be a FontSpec with a positive size.")

        if not self.palette:
            raise ConfigurationError("palette must contain at least one colour.")

        try:
            low, high = self.scale_extent
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("scale_extent must be a (min, max) pair.") from exc
        if low <= 0 or high < low:
            raise ConfigurationError("scale_extent must satisfy 0 < min <= max.")
        if not low <= self.initial_scale <= high:
            raise ConfigurationError("initial_scale must lie inside scale_extent.")

        return self
