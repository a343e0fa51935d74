from typing import List

from .node import VisualNode
from .tree import TreeModel


class TidyLayout:
    """Left-to-right tidy tree on a fixed grid.

    ``y`` is the depth axis (``depth * horizontal_spacing``) and ``x`` the
    sibling axis: leaves take consecutive slots ``vertical_spacing`` apart and
    every parent sits at the midpoint of its first and last visible child.
    The result is shifted so the root lies at ``x == 0``.
    """

    def __init__(
        self,
        model: TreeModel,
        *,
        horizontal_spacing: float,
        vertical_spacing: float,
    ) -> None:
        if not isinstance(model, TreeModel):
            raise TypeError("model must be a TreeModel instance")
        if horizontal_spacing <= 0 or vertical_spacing <= 0:
            raise ValueError("Tidy layout spacing must be positive.")

        self._model = model
        self._horizontal_spacing = horizontal_spacing
        self._vertical_spacing = vertical_spacing

    def apply(self) -> List[VisualNode]:
        model = self._model
        visible = model.visible_nodes()

        next_slot = 0
        for node in visible:
            node.y = node.depth * self._horizontal_spacing
            if not model.children_of(node):
                node.x = next_slot * self._vertical_spacing
                next_slot += 1

        # Reversed pre-order visits every child before its parent.
        for node in reversed(visible):
            children = model.children_of(node)
            if children:
                node.x = (children[0].x + children[-1].x) / 2

        offset = visible[0].x
        if offset:
            for node in visible:
                node.x -= offset
        return visible
