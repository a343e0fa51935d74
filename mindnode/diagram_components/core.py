from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class Point:

    x: float = 0.0
    y: float = 0.0

    def lerp(self, other: "Point", t: float) -> "Point":
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)


@dataclass(frozen=True)
class BoxSize:

    width: float = 0.0
    height: float = 0.0

    def lerp(self, other: "BoxSize", t: float) -> "BoxSize":
        return BoxSize(
            self.width + (other.width - self.width) * t,
            self.height + (other.height - self.height) * t,
        )


ZERO_SIZE = BoxSize(0.0, 0.0)


@dataclass(frozen=True)
class FontSpec:

    family: str = "'Noto Sans TC', sans-serif"
    size: float = 14.0
    weight: str = "600"


class NodeState(Enum):

    EXPANDED = "expanded"
    COLLAPSED = "collapsed"


DEPTH_PALETTE: Tuple[str, ...] = ("#1e3a8a", "#2563eb", "#3b82f6", "#60a5fa", "#93c5fd")
COLLAPSED_FILL = "#fef3c7"
EXPANDED_FILL = "#e0f2fe"
TEXT_FILL = "#1e293b"
BACKGROUND = "#f8fafc"


def depth_color(depth: int, palette: Tuple[str, ...] = DEPTH_PALETTE) -> str:
    return palette[depth % len(palette)]


@dataclass
class BoxChars:

    top_left: str = "╭"
    top_right: str = "╮"
    bottom_left: str = "╰"
    bottom_right: str = "╯"

    horizontal: str = "─"
    vertical: str = "│"

    tee_down: str = "┬"
    tee_up: str = "┴"
    tee_right: str = "├"
    tee_left: str = "┤"
    cross: str = "┼"

    collapsed_marker: str = "▸"

    @classmethod
    def for_style(cls, style: str) -> "BoxChars":
        key = style.lower().strip()
        if key in {"rounded", "round", "modern"}:
            return cls()
        if key in {"square", "line", "box"}:
            return cls(
                top_left="┌",
                top_right="┐",
                bottom_left="└",
                bottom_right="┘",
            )
        if key in {"ascii", "plain"}:
            return cls(
                top_left="+",
                top_right="+",
                bottom_left="+",
                bottom_right="+",
                horizontal="-",
                vertical="|",
                tee_down="+",
                tee_up="+",
                tee_right="+",
                tee_left="+",
                cross="+",
                collapsed_marker=">",
            )
        raise ValueError(f"Unknown box style: {style}")
