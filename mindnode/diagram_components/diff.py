from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from .edge import Edge
from .node import VisualNode


@dataclass
class DiffResult:
    enter_nodes: List[VisualNode] = field(default_factory=list)
    update_nodes: List[VisualNode] = field(default_factory=list)
    exit_nodes: List[VisualNode] = field(default_factory=list)
    enter_edges: List[Edge] = field(default_factory=list)
    update_edges: List[Edge] = field(default_factory=list)
    exit_edges: List[Edge] = field(default_factory=list)

    def has_changes(self) -> bool:
        return any(
            [
                self.enter_nodes,
                self.exit_nodes,
                self.enter_edges,
                self.exit_edges,
            ]
        )

    def summary(self) -> str:
        return (
            f"nodes +{len(self.enter_nodes)} ~{len(self.update_nodes)} -{len(self.exit_nodes)}, "
            f"edges +{len(self.enter_edges)} ~{len(self.update_edges)} -{len(self.exit_edges)}"
        )


def diff(
    previous_nodes: Mapping[int, VisualNode],
    current_nodes: Sequence[VisualNode],
    previous_edges: Mapping[int, Edge],
    current_edges: Sequence[Edge],
) -> DiffResult:
    """Match two renders by identity.

    Nodes are keyed by ``identity`` and edges by their child's identity.
    Enter and update lists follow ``current`` order; exit lists follow
    ``previous`` order.
    """
    result = DiffResult()

    current_ids: Dict[int, VisualNode] = {node.identity: node for node in current_nodes}
    for node in current_nodes:
        if node.identity in previous_nodes:
            result.update_nodes.append(node)
        else:
            result.enter_nodes.append(node)
    result.exit_nodes = [
        node for identity, node in previous_nodes.items() if identity not in current_ids
    ]

    current_keys = {edge.key for edge in current_edges}
    for edge in current_edges:
        if edge.key in previous_edges:
            result.update_edges.append(edge)
        else:
            result.enter_edges.append(edge)
    result.exit_edges = [
        edge for key, edge in previous_edges.items() if key not in current_keys
    ]

    return result
