from typing import List, Optional, TYPE_CHECKING

from .core import ZERO_SIZE, BoxSize, NodeState, Point

if TYPE_CHECKING:
    from .tree import TreeNode


class VisualNode:
    def __init__(
        self,
        identity: int,
        tree_node: "TreeNode",
        parent: Optional["VisualNode"] = None,
    ) -> None:
        self.identity = identity
        self.tree_node = tree_node
        self.parent = parent
        self.depth = parent.depth + 1 if parent else 0

        # None until the children have been materialised for the first time.
        self.children: Optional[List["VisualNode"]] = None
        self.collapsed_children: Optional[List["VisualNode"]] = None
        self.is_collapsed = False

        self.x = 0.0
        self.y = 0.0
        self.prev_x = 0.0
        self.prev_y = 0.0

        self.lines: List[str] = []
        self.box: BoxSize = ZERO_SIZE

    @property
    def label(self) -> str:
        return self.tree_node.label

    @property
    def state(self) -> NodeState:
        return NodeState.COLLAPSED if self.is_collapsed else NodeState.EXPANDED

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def previous_position(self) -> Point:
        return Point(self.prev_x, self.prev_y)

    @property
    def has_hidden_children(self) -> bool:
        return bool(self.collapsed_children)

    def commit_position(self) -> None:
        self.prev_x = self.x
        self.prev_y = self.y

    def ancestors(self):
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def __repr__(self) -> str:
        return (
            f"VisualNode(identity={self.identity}, label={self.label!r}, depth={self.depth}, "
            f"x={self.x}, y={self.y}, collapsed={self.is_collapsed})"
        )
