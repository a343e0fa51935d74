import logging
from typing import Dict, Iterable, List, Optional

from ..errors import MeasurementError
from .config import MindMapConfig
from .core import COLLAPSED_FILL, EXPANDED_FILL, ZERO_SIZE, Point, depth_color
from .diff import DiffResult
from .edge import Edge
from .node import VisualNode
from .shapes import RoundedRect, TextBlock, diagonal, to_screen
from .sizing import BoxSizer
from .surface import Surface
from .transition import EdgeFrame, Frame, NodeFrame, Timeline
from .wrap import Wrapper

logger = logging.getLogger(__name__)

# Faded-out labels keep a tiny opacity so surfaces never drop them as empty.
HIDDEN = 1e-6


def node_key(identity: int) -> str:
    return f"node:{identity}"


def edge_key(identity: int) -> str:
    return f"link:{identity}"


class Renderer:
    """Turns a :class:`DiffResult` into shapes and transitions on a surface.

    A pass runs in two phases. Entering nodes are first attached invisibly and
    measured; then every node and link gets a transition from
    where it is drawn now to where the new layout puts it.
    """

    def __init__(
        self,
        surface: Surface,
        sizer: BoxSizer,
        wrapper: Wrapper,
        config: MindMapConfig,
        timeline: Optional[Timeline] = None,
    ) -> None:
        self.surface = surface
        self.sizer = sizer
        self.wrapper = wrapper
        self.config = config
        self.timeline = timeline if timeline is not None else Timeline()
        self._nodes: Dict[str, VisualNode] = {}
        self._edges: Dict[str, Edge] = {}

    # -- phase 1 -----------------------------------------------------------

    def _attach(self, node: VisualNode, origin: Point) -> bool:
        """Put ``node`` on the surface invisibly; return whether shapes were added."""
        key = node_key(node.identity)
        self._nodes[key] = node
        if not node.lines:
            node.lines = self.wrapper(node.label, self.config.max_chars_per_line)
        if self.surface.has(f"{key}:box"):
            # Still on the surface from an exit that has not finished.
            return False
        screen = to_screen(origin)
        self.surface.add(f"{key}:box", self._box_shape(node, screen, ZERO_SIZE))
        self.surface.add(f"{key}:label", self._label_shape(node, screen, HIDDEN))
        return True

    def _measure(self, node: VisualNode) -> None:
        if node.box == ZERO_SIZE:
            node.box = self.sizer.size(node.lines)

    def _attach_and_measure(self, nodes: List[VisualNode], origins: Dict[int, Point]) -> None:
        added = [node for node in nodes if self._attach(node, origins[node.identity])]
        try:
            for node in nodes:
                self._measure(node)
        except MeasurementError:
            for node in added:
                self._detach(node_key(node.identity))
            raise

    # -- phase 2 -----------------------------------------------------------

    def render_pass(self, changes: DiffResult, source: VisualNode, *, now: float) -> None:
        timeline = self.timeline
        duration = self.config.duration
        entering = {node.identity for node in changes.enter_nodes}
        origins = {node.identity: self._enter_origin(node, entering, source) for node in changes.enter_nodes}

        # Nothing is scheduled unless every entering label could be measured.
        self._attach_and_measure(changes.enter_nodes, origins)

        for node in changes.enter_nodes:
            key = node_key(node.identity)
            start = timeline.current(key, now) or NodeFrame(origins[node.identity], ZERO_SIZE, HIDDEN)
            timeline.schedule(key, start, NodeFrame(node.position, node.box), now=now, duration=duration)

        for node in changes.update_nodes:
            key = node_key(node.identity)
            start = timeline.current(key, now) or NodeFrame(node.previous_position, node.box)
            timeline.schedule(key, start, NodeFrame(node.position, node.box), now=now, duration=duration)

        for node in changes.exit_nodes:
            key = node_key(node.identity)
            start = timeline.current(key, now) or NodeFrame(node.position, node.box)
            end = NodeFrame(source.position, ZERO_SIZE, HIDDEN)
            timeline.schedule(key, start, end, now=now, duration=duration, remove=True)

        for edge in changes.enter_edges:
            key = edge_key(edge.key)
            self._edges[key] = edge
            origin = origins.get(edge.child.identity, source.previous_position)
            if not self.surface.has(key):
                self.surface.add(key, self._link_shape(edge, EdgeFrame(origin, origin)))
            start = timeline.current(key, now) or EdgeFrame(origin, origin)
            end = EdgeFrame(edge.parent.position, edge.child.position)
            timeline.schedule(key, start, end, now=now, duration=duration)

        for edge in changes.update_edges:
            key = edge_key(edge.key)
            self._edges[key] = edge
            start = timeline.current(key, now) or EdgeFrame(
                edge.parent.previous_position, edge.child.previous_position
            )
            end = EdgeFrame(edge.parent.position, edge.child.position)
            timeline.schedule(key, start, end, now=now, duration=duration)

        for edge in changes.exit_edges:
            key = edge_key(edge.key)
            start = timeline.current(key, now) or EdgeFrame(edge.parent.position, edge.child.position)
            end = EdgeFrame(source.position, source.position)
            timeline.schedule(key, start, end, now=now, duration=duration, remove=True)

        logger.debug("Scheduled pass from node %s: %s", source.identity, changes.summary())
        self.advance(now)

    def _enter_origin(self, node: VisualNode, entering: set, source: VisualNode) -> Point:
        for ancestor in node.ancestors():
            if ancestor.identity not in entering:
                return ancestor.previous_position
        return source.previous_position

    # -- drawing -----------------------------------------------------------

    def advance(self, now: float) -> List[str]:
        return self._apply(*self.timeline.advance(now))

    def settle(self) -> List[str]:
        return self._apply(*self.timeline.settle())

    def _apply(self, frames: Dict[str, Frame], removed: List[str]) -> List[str]:
        for key, frame in frames.items():
            self._draw(key, frame)
        for key in removed:
            self._detach(key)
        return removed

    def _draw(self, key: str, frame: Frame) -> None:
        if isinstance(frame, NodeFrame):
            node = self._nodes.get(key)
            if node is None:
                return
            screen = to_screen(frame.center)
            self.surface.restyle(f"{key}:box", self._box_shape(node, screen, frame.size))
            self.surface.restyle(f"{key}:label", self._label_shape(node, screen, frame.opacity))
        else:
            edge = self._edges.get(key)
            if edge is not None:
                self.surface.restyle(key, self._link_shape(edge, frame))

    def _detach(self, key: str) -> None:
        if key in self._nodes:
            del self._nodes[key]
            self.surface.remove(f"{key}:box")
            self.surface.remove(f"{key}:label")
        else:
            self._edges.pop(key, None)
            self.surface.remove(key)

    def _box_shape(self, node: VisualNode, screen: Point, size) -> RoundedRect:
        return RoundedRect(
            screen.x,
            screen.y,
            size.width,
            size.height,
            rx=self.config.corner_radius,
            fill=COLLAPSED_FILL if node.has_hidden_children else EXPANDED_FILL,
            stroke=depth_color(node.depth, self.config.palette),
        )

    def _label_shape(self, node: VisualNode, screen: Point, opacity: float) -> TextBlock:
        return TextBlock(
            screen.x,
            screen.y,
            tuple(node.lines),
            font=self.config.font,
            line_height=self.config.line_height,
            opacity=opacity,
        )

    def _link_shape(self, edge: Edge, frame: EdgeFrame):
        return diagonal(
            frame.source,
            frame.target,
            stroke=depth_color(edge.child.depth, self.config.palette),
        )

    def reset(self) -> None:
        self.timeline.clear()
        for key in list(self._nodes):
            self.surface.remove(f"{key}:box")
            self.surface.remove(f"{key}:label")
        for key in list(self._edges):
            self.surface.remove(key)
        self._nodes.clear()
        self._edges.clear()

    def redraw(self, nodes: Iterable[VisualNode], edges: Iterable[Edge]) -> None:
        """Put a previously rendered diagram back on the surface at rest."""
        for node in nodes:
            key = node_key(node.identity)
            self._nodes[key] = node
            screen = to_screen(node.position)
            self.surface.add(f"{key}:box", self._box_shape(node, screen, node.box))
            self.surface.add(f"{key}:label", self._label_shape(node, screen, 1.0))
        for edge in edges:
            key = edge_key(edge.key)
            self._edges[key] = edge
            self.surface.add(key, self._link_shape(edge, EdgeFrame(edge.parent.position, edge.child.position)))
