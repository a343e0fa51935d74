import itertools
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Sequence

from ..errors import InvalidTreeError
from .core import NodeState
from .node import VisualNode

_LEAVE = object()


class TreeNode:
    """Read-only input value: a label and an ordered list of children."""

    def __init__(self, label: str = "", children: Optional[Sequence["TreeNode"]] = None) -> None:
        self.label = label
        self.children: List["TreeNode"] = list(children or [])

    @classmethod
    def from_dict(cls, payload: Optional[Mapping], *, max_depth: int = 64) -> "TreeNode":
        """Build a tree from the ``{"name": ..., "children": [...]}`` JSON shape.

        ``label`` is accepted in place of ``name``. ``None`` or an empty mapping
        yields a single node with an empty label. The payload is walked with an
        explicit stack, so ``max_depth`` is the only bound on nesting.
        """
        if payload is None:
            return cls("")

        root: Optional[TreeNode] = None
        active: set = set()
        # Work items are (payload, depth, parent); _LEAVE items close a node.
        stack: List[Any] = [(payload, 0, None)]
        while stack:
            item = stack.pop()
            if item[0] is _LEAVE:
                active.discard(item[1])
                continue

            current, depth, parent = item
            if not isinstance(current, Mapping):
                raise InvalidTreeError(f"Tree node must be a mapping, got {type(current).__name__}.")
            if depth >= max_depth:
                raise InvalidTreeError(f"Tree is deeper than the allowed {max_depth} levels.")
            if id(current) in active:
                raise InvalidTreeError("Tree contains a reference cycle.")

            label = current.get("name", current.get("label", ""))
            label = "" if label is None else str(label)

            children_payload = current.get("children") or []
            if not isinstance(children_payload, (list, tuple)):
                raise InvalidTreeError("Tree node 'children' must be a list.")

            node = cls(label)
            if parent is None:
                root = node
            else:
                parent.children.append(node)

            active.add(id(current))
            stack.append((_LEAVE, id(current), None))
            stack.extend((child, depth + 1, node) for child in reversed(children_payload))
        return root

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.label}
        if self.children:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload

    def walk(self) -> Iterator["TreeNode"]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        return f"TreeNode({self.label!r}, children={len(self.children)})"


def validate_tree(root: TreeNode, *, max_depth: int, max_nodes: int) -> int:
    """Check that ``root`` is a finite tree within the guards; return its node count."""
    if not isinstance(root, TreeNode):
        raise InvalidTreeError(f"Expected a TreeNode, got {type(root).__name__}.")

    seen = set()
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if id(node) in seen:
            raise InvalidTreeError(
                f"Node {node.label!r} is reachable twice; the input must be a tree without cycles."
            )
        seen.add(id(node))
        if len(seen) > max_nodes:
            raise InvalidTreeError(f"Tree has more than the allowed {max_nodes} nodes.")
        if depth >= max_depth:
            raise InvalidTreeError(f"Tree is deeper than the allowed {max_depth} levels.")
        for child in node.children:
            if not isinstance(child, TreeNode):
                raise InvalidTreeError(
                    f"Children of {node.label!r} must be TreeNode values, got {type(child).__name__}."
                )
            stack.append((child, depth + 1))
    return len(seen)


class TreeModel:
    """Collapse state over a validated input tree.

    VisualNodes are kept in an arena keyed by identity. Children are
    materialised the first time their parent is traversed while expanded.
    """

    def __init__(self, tree: TreeNode, *, max_depth: int = 64, max_nodes: int = 5000) -> None:
        self.size = validate_tree(tree, max_depth=max_depth, max_nodes=max_nodes)
        self.tree = tree
        self._ids = itertools.count(1)
        self._arena: Dict[int, VisualNode] = {}
        self._root = self._create(tree, None)

    def _create(self, tree_node: TreeNode, parent: Optional[VisualNode]) -> VisualNode:
        node = VisualNode(next(self._ids), tree_node, parent)
        self._arena[node.identity] = node
        return node

    def _materialize(self, node: VisualNode) -> None:
        if node.children is None and node.collapsed_children is None:
            node.children = [self._create(child, node) for child in node.tree_node.children]

    def root(self) -> VisualNode:
        return self._root

    def get(self, identity: int) -> VisualNode:
        try:
            return self._arena[identity]
        except KeyError:
            raise KeyError(f"No node with identity {identity!r} in this diagram.") from None

    def children_of(self, node: VisualNode) -> List[VisualNode]:
        if node.is_collapsed:
            return []
        self._materialize(node)
        return node.children or []

    def is_leaf(self, node: VisualNode) -> bool:
        return not node.tree_node.children

    def toggle_collapse(self, node: VisualNode) -> NodeState:
        self._materialize(node)
        node.children, node.collapsed_children = node.collapsed_children, node.children
        node.is_collapsed = not node.is_collapsed
        return node.state

    def visible_nodes(self) -> List[VisualNode]:
        ordered: List[VisualNode] = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            ordered.append(node)
            stack.extend(reversed(self.children_of(node)))
        return ordered

    def __len__(self) -> int:
        return len(self._arena)

    def __contains__(self, identity: object) -> bool:
        return identity in self._arena
