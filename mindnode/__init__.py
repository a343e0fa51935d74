from .mind_map import *
from .errors import *

__version__ = "0.1.0"
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
    "DiagramError",
    "ConfigurationError",
    "InvalidTreeError",
    "MeasurementError",
    "LayoutOverflowError",
]
