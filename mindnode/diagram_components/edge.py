from dataclasses import dataclass
from typing import Iterable, List

from .node import VisualNode


@dataclass(frozen=True)
class Edge:
    parent: VisualNode
    child: VisualNode

    @property
    def key(self) -> int:
        # A child has exactly one parent, so it names the edge.
        return self.child.identity


def edges_of(nodes: Iterable[VisualNode]) -> List[Edge]:
    return [Edge(node.parent, node) for node in nodes if node.parent is not None]
