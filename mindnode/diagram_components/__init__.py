from .core import BoxChars, BoxSize, FontSpec, NodeState, Point
from .config import MindMapConfig
from .tree import TreeModel, TreeNode
from .node import VisualNode
from .edge import Edge
from .layout import TidyLayout
from .wrap import get_wrapper, wrap_balanced, wrap_words
from .sizing import BoxSizer
from .diff import diff, DiffResult
from .transition import EdgeFrame, NodeFrame, Timeline, Transition
from .shapes import CurvePath, RoundedRect, TextBlock
from .viewport import GestureDelta, Transform, Viewport
from .surface import SceneSurface, Surface
from .svg import SvgSurface
from .canvas import Canvas
from .ascii import AsciiSurface
from .render import Renderer
from .diagram import MindMap

__all__ = [
    "BoxChars",
    "BoxSize",
    "FontSpec",
    "NodeState",
    "Point",
    "MindMapConfig",
    "TreeModel",
    "TreeNode",
    "VisualNode",
    "Edge",
    "TidyLayout",
    "get_wrapper",
    "wrap_balanced",
    "wrap_words",
    "BoxSizer",
    "diff",
    "DiffResult",
    "EdgeFrame",
    "NodeFrame",
    "Timeline",
    "Transition",
    "CurvePath",
    "RoundedRect",
    "TextBlock",
    "GestureDelta",
    "Transform",
    "Viewport",
    "SceneSurface",
    "Surface",
    "SvgSurface",
    "Canvas",
    "AsciiSurface",
    "Renderer",
    "MindMap",
]
