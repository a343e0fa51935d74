"""
Tests for the left-to-right tidy layout.
"""

import pytest

from mindnode import TreeNode
from mindnode.diagram_components.layout import TidyLayout
from mindnode.diagram_components.tree import TreeModel


def layout(tree, horizontal=240, vertical=90):
    model = TreeModel(tree)
    engine = TidyLayout(model, horizontal_spacing=horizontal, vertical_spacing=vertical)
    return model, engine


def by_label(nodes):
    return {node.label: node for node in nodes}


def wide_tree(fanout=3, depth=3, prefix="n"):
    node = TreeNode(prefix)
    if depth:
        node.children = [wide_tree(fanout, depth - 1, f"{prefix}.{i}") for i in range(fanout)]
    return node


class TestTidyLayout:
    def test_kidney_example(self, kidney_payload):
        _, engine = layout(TreeNode.from_dict(kidney_payload))
        nodes = by_label(engine.apply())

        assert len(nodes) == 3
        root, diet, symptoms = nodes["腎臟病"], nodes["飲食"], nodes["症狀"]
        assert (root.depth, diet.depth, symptoms.depth) == (0, 1, 1)
        assert (root.x, root.y) == (0, 0)
        assert (diet.x, diet.y) == (-45, 240)
        assert (symptoms.x, symptoms.y) == (45, 240)

    def test_parents_centre_over_children(self, deep_tree):
        _, engine = layout(deep_tree)
        nodes = by_label(engine.apply())

        assert nodes["R"].x == 0
        assert nodes["A1"].x == pytest.approx(-157.5)
        assert nodes["A2"].x == pytest.approx(-67.5)
        assert nodes["A"].x == pytest.approx(-112.5)
        assert nodes["B"].x == pytest.approx(22.5)
        assert nodes["C"].x == pytest.approx(112.5)

    def test_single_child_sits_on_parent_axis(self, deep_tree):
        _, engine = layout(deep_tree)
        nodes = by_label(engine.apply())
        assert nodes["C1"].x == nodes["C"].x

    def test_depth_axis_uses_fixed_spacing(self, deep_tree):
        _, engine = layout(deep_tree, horizontal=100)
        for node in engine.apply():
            assert node.y == node.depth * 100

    def test_every_node_positioned_without_slot_collisions(self):
        tree = wide_tree()
        _, engine = layout(tree)
        nodes = engine.apply()

        assert len(nodes) == sum(1 for _ in tree.walk())
        slots = {(node.depth, node.x) for node in nodes}
        assert len(slots) == len(nodes)

    def test_sibling_order_follows_children_order(self, deep_tree):
        _, engine = layout(deep_tree)
        nodes = by_label(engine.apply())
        assert nodes["A"].x < nodes["B"].x < nodes["C"].x
        assert nodes["A1"].x < nodes["A2"].x

    def test_collapsed_node_takes_a_leaf_slot(self, deep_tree):
        model, engine = layout(deep_tree)
        engine.apply()
        a = model.children_of(model.root())[0]
        model.toggle_collapse(a)

        nodes = by_label(engine.apply())
        assert set(nodes) == {"R", "A", "B", "C", "C1"}
        assert nodes["A"].x == -90
        assert nodes["B"].x == 0
        assert nodes["C"].x == 90

    def test_relayout_is_deterministic(self, deep_tree):
        model, engine = layout(deep_tree)
        first = {node.identity: (node.x, node.y) for node in engine.apply()}
        second = {node.identity: (node.x, node.y) for node in engine.apply()}
        assert first == second

    def test_single_node(self):
        _, engine = layout(TreeNode("alone"))
        (node,) = engine.apply()
        assert (node.x, node.y) == (0, 0)

    def test_rejects_bad_arguments(self, deep_tree):
        with pytest.raises(TypeError):
            TidyLayout(deep_tree, horizontal_spacing=1, vertical_spacing=1)
        with pytest.raises(ValueError):
            TidyLayout(TreeModel(deep_tree), horizontal_spacing=0, vertical_spacing=1)
