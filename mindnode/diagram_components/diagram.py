import logging
import time
from collections import deque
from collections.abc import Mapping
from dataclasses import replace
from functools import partial
from typing import Callable, Deque, Dict, List, Optional, Union

from ..errors import ConfigurationError, DiagramError, InvalidTreeError, MeasurementError
from .config import MindMapConfig
from .core import NodeState, Point
from .diff import DiffResult, diff
from .edge import Edge, edges_of
from .layout import TidyLayout
from .node import VisualNode
from .render import Renderer
from .shapes import RoundedRect, to_screen
from .sizing import BoxSizer
from .surface import SceneSurface, Surface
from .tree import TreeModel, TreeNode
from .viewport import GestureDelta, Transform, Viewport
from .wrap import get_wrapper

logger = logging.getLogger(__name__)

TreeInput = Union[TreeNode, Mapping, None]


class MindMap:
    """An explorable, collapsible mind map drawn on a :class:`Surface`.

    Every change (a new tree, a node toggled) runs one pass: layout, keyed
    diff against the previous pass, two-phase attach/measure then animate.
    Passes never interleave; a request made while one is running is queued
    and served right after it.
    """

    def __init__(
        self,
        tree: TreeInput = None,
        *,
        surface: Optional[Surface] = None,
        config: Optional[MindMapConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        **overrides,
    ) -> None:
        if config is not None and not isinstance(config, MindMapConfig):
            raise ConfigurationError("config must be a MindMapConfig instance.")
        try:
            config = replace(config or MindMapConfig(), **overrides)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc
        self.config = config.validate()

        self.surface = surface if surface is not None else SceneSurface(line_height=config.line_height)
        self.clock = clock
        self.viewport = Viewport.from_config(config)
        self.viewport.subscribe(self.surface.set_transform)
        self.renderer = Renderer(
            self.surface,
            BoxSizer.from_config(self.surface.measure_text, config),
            get_wrapper(config.wrap_mode),
            config,
        )

        self.model: Optional[TreeModel] = None
        self._layout: Optional[TidyLayout] = None
        self._visible: Dict[int, VisualNode] = {}
        self._edges: Dict[int, Edge] = {}
        self._pending: Deque[Callable[[], None]] = deque()
        self._in_pass = False
        self.last_changes: Optional[DiffResult] = None

        self.surface.set_transform(self.viewport.transform)
        if tree is not None:
            self.set_tree(tree)

    # -- tree --------------------------------------------------------------

    def set_tree(self, tree: TreeInput) -> VisualNode:
        """Replace the diagram with ``tree`` and draw it fully expanded.

        The input is validated first; on :class:`InvalidTreeError` the current
        diagram stays as it was.
        """
        try:
            if tree is None or isinstance(tree, Mapping):
                tree = TreeNode.from_dict(tree, max_depth=self.config.max_depth)
            model = TreeModel(tree, max_depth=self.config.max_depth, max_nodes=self.config.max_nodes)
        except InvalidTreeError as exc:
            logger.warning("Rejected mind map tree: %s", exc)
            raise

        self._schedule(partial(self._replace_model, model))
        return model.root()

    def _replace_model(self, model: TreeModel) -> None:
        previous = (self.model, self._layout, self._visible, self._edges)
        self.renderer.reset()
        self._visible = {}
        self._edges = {}
        self.model = model
        self._layout = TidyLayout(
            model,
            horizontal_spacing=self.config.horizontal_spacing,
            vertical_spacing=self.config.vertical_spacing,
        )
        try:
            self._run_pass(model.root())
        except MeasurementError:
            # Put the last complete diagram back, at rest.
            self.model, self._layout, self._visible, self._edges = previous
            self.renderer.redraw(self._visible.values(), self._edges.values())
            raise
        self.viewport.reset()
        logger.debug("Loaded tree with %d nodes", model.size)

    def _require_model(self) -> TreeModel:
        if self.model is None:
            raise DiagramError("No tree has been set on this mind map.")
        return self.model

    # -- passes ------------------------------------------------------------

    def _schedule(self, action: Callable[[], None]) -> None:
        self._pending.append(action)
        if self._in_pass:
            return
        self._in_pass = True
        try:
            while self._pending:
                self._pending.popleft()()
        except Exception:
            self._pending.clear()
            raise
        finally:
            self._in_pass = False

    def _run_pass(self, source: VisualNode) -> DiffResult:
        visible = self._layout.apply()
        edges = edges_of(visible)
        changes = diff(self._visible, visible, self._edges, edges)

        self.renderer.render_pass(changes, source, now=self.clock())

        for node in visible:
            node.commit_position()
        self._visible = {node.identity: node for node in visible}
        self._edges = {edge.key: edge for edge in edges}
        self.last_changes = changes
        return changes

    # -- interaction -------------------------------------------------------

    def activate(self, identity: int) -> Optional[NodeState]:
        """Toggle a node between expanded and collapsed; return its new state.

        Leaves have nothing to hide, so activating one changes nothing. A call
        made while a pass is running is queued behind it and returns ``None``,
        since the toggle has not happened yet.
        """
        node = self._require_model().get(identity)
        if self.model.is_leaf(node):
            logger.debug("Ignoring activation of leaf %s", identity)
            return node.state
        queued = self._in_pass
        self._schedule(partial(self._toggle, node))
        return None if queued else node.state

    def expand(self, identity: int) -> Optional[NodeState]:
        node = self._require_model().get(identity)
        if node.is_collapsed:
            return self.activate(identity)
        return node.state

    def collapse(self, identity: int) -> Optional[NodeState]:
        node = self._require_model().get(identity)
        if not node.is_collapsed:
            return self.activate(identity)
        return node.state

    def _toggle(self, node: VisualNode) -> None:
        state = self.model.toggle_collapse(node)
        logger.debug("Node %s (%r) is now %s", node.identity, node.label, state.value)
        self._run_pass(node)

    def node_at(self, screen_x: float, screen_y: float) -> Optional[VisualNode]:
        point = self.viewport.to_diagram(Point(screen_x, screen_y))
        # Later nodes are painted on top.
        for node in reversed(list(self._visible.values())):
            center = to_screen(node.position)
            box = RoundedRect(center.x, center.y, node.box.width, node.box.height)
            if box.contains(point.x, point.y):
                return node
        return None

    def activate_at(self, screen_x: float, screen_y: float) -> Optional[int]:
        node = self.node_at(screen_x, screen_y)
        if node is None:
            return None
        self.activate(node.identity)
        return node.identity

    # -- viewport ----------------------------------------------------------

    def pan(self, dx: float, dy: float) -> Transform:
        return self.viewport.pan(dx, dy)

    def zoom(self, factor: float, anchor: Optional[Point] = None) -> Transform:
        return self.viewport.zoom(factor, anchor)

    def apply_gesture(self, delta: GestureDelta) -> Transform:
        return self.viewport.apply_gesture(delta)

    def reset_view(self) -> Transform:
        return self.viewport.reset()

    # -- animation ---------------------------------------------------------

    def tick(self, now: Optional[float] = None) -> bool:
        """Draw the current animation frame; return whether any is still running."""
        self.renderer.advance(self.clock() if now is None else now)
        return self.renderer.timeline.active

    def settle(self) -> None:
        self.renderer.settle()

    # -- queries -----------------------------------------------------------

    @property
    def root(self) -> VisualNode:
        return self._require_model().root()

    @property
    def visible_nodes(self) -> List[VisualNode]:
        return list(self._visible.values())

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    def node(self, identity: int) -> VisualNode:
        return self._require_model().get(identity)

    def find(self, label: str) -> Optional[VisualNode]:
        for node in self._visible.values():
            if node.label == label:
                return node
        return None

    def positions(self) -> Dict[int, Point]:
        return {identity: node.position for identity, node in self._visible.items()}

    def render(self, **kwargs) -> str:
        """Settle all animations and return the surface's text rendering."""
        render = getattr(self.surface, "render", None)
        if render is None:
            raise DiagramError(f"{type(self.surface).__name__} cannot render to text.")
        self.settle()
        return render(**kwargs)

    def __len__(self) -> int:
        return len(self._visible)
