from .agent import generate_tree
from .diagram_components import (
    AsciiSurface,
    GestureDelta,
    MindMap,
    MindMapConfig,
    NodeState,
    Point,
    SceneSurface,
    Surface,
    SvgSurface,
    TreeNode,
)

__all__ = [
    "MindMap",
    "MindMapConfig",
    "TreeNode",
    "NodeState",
    "Point",
    "GestureDelta",
    "Surface",
    "SceneSurface",
    "SvgSurface",
    "AsciiSurface",
    "generate_tree",
]
