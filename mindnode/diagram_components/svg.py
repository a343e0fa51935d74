from typing import List
from xml.sax.saxutils import escape, quoteattr

from .core import BACKGROUND
from .shapes import CurvePath, RoundedRect, TextBlock
from .surface import SceneSurface

# Labels whose opacity is this low are still entering or already leaving.
MIN_VISIBLE_OPACITY = 0.01


class SvgSurface(SceneSurface):
    def __init__(
        self,
        width: float = 900,
        height: float = 600,
        *,
        background: str = BACKGROUND,
        line_height: float = 1.2,
    ) -> None:
        super().__init__(line_height=line_height)
        self.width = width
        self.height = height
        self.background = background

    def _rect(self, shape: RoundedRect) -> str:
        return (
            f'<rect x="{shape.left:g}" y="{shape.top:g}" width="{shape.width:g}" '
            f'height="{shape.height:g}" rx="{shape.rx:g}" ry="{shape.rx:g}" '
            f'fill="{shape.fill}" stroke="{shape.stroke}" stroke-width="{shape.stroke_width:g}"/>'
        )

    def _text(self, shape: TextBlock) -> str:
        font = shape.font
        spans = "".join(
            f'<tspan x="{shape.cx:g}" y="{baseline:g}" dy="0.35em">{escape(line)}</tspan>'
            for line, baseline in zip(shape.lines, shape.baselines())
        )
        return (
            f'<text text-anchor="middle" font-family={quoteattr(font.family)} '
            f'font-size="{font.size:g}px" font-weight="{font.weight}" fill="{shape.fill}" '
            f'fill-opacity="{shape.opacity:g}" pointer-events="none">{spans}</text>'
        )

    def _path(self, shape: CurvePath) -> str:
        return (
            f'<path class="link" d="{shape.d}" fill="none" stroke="{shape.stroke}" '
            f'stroke-width="{shape.stroke_width:g}" stroke-opacity="{shape.opacity:g}"/>'
        )

    def to_svg(self, *, include_hidden: bool = False) -> str:
        body: List[str] = []
        for _, shape in self.ordered():
            if isinstance(shape, RoundedRect):
                if not include_hidden and (shape.width <= 0 or shape.height <= 0):
                    continue
                body.append(self._rect(shape))
            elif isinstance(shape, TextBlock):
                if not include_hidden and shape.opacity < MIN_VISIBLE_OPACITY:
                    continue
                body.append(self._text(shape))
            elif isinstance(shape, CurvePath):
                body.append(self._path(shape))

        return "\n".join(
            [
                f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width:g}" '
                f'height="{self.height:g}" style="background-color: {self.background}">',
                f'<g transform="{self.transform.to_svg()}">',
                *body,
                "</g>",
                "</svg>",
            ]
        )

    def render(self, include_hidden: bool = False) -> str:
        return self.to_svg(include_hidden=include_hidden)

    def save(self, path, *, include_hidden: bool = False) -> None:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(self.to_svg(include_hidden=include_hidden))
