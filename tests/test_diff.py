"""
Tests for keyed diffing and the animation timeline.
"""

import pytest

from mindnode.diagram_components.core import BoxSize, Point
from mindnode.diagram_components.diff import diff
from mindnode.diagram_components.edge import edges_of
from mindnode.diagram_components.transition import (
    EdgeFrame,
    NodeFrame,
    Timeline,
    Transition,
    ease_cubic_in_out,
)
from mindnode.diagram_components.tree import TreeModel


def snapshot(nodes):
    return {node.identity: node for node in nodes}, {edge.key: edge for edge in edges_of(nodes)}


class TestDiff:
    def test_first_render_enters_everything(self, deep_tree):
        model = TreeModel(deep_tree)
        visible = model.visible_nodes()
        result = diff({}, visible, {}, edges_of(visible))

        assert [node.label for node in result.enter_nodes] == [node.label for node in visible]
        assert len(result.enter_edges) == 6
        assert not result.update_nodes and not result.exit_nodes
        assert result.has_changes()

    def test_collapse_exits_descendants_and_their_edges(self, deep_tree):
        model = TreeModel(deep_tree)
        before = model.visible_nodes()
        previous_nodes, previous_edges = snapshot(before)

        a = model.children_of(model.root())[0]
        model.toggle_collapse(a)
        after = model.visible_nodes()
        result = diff(previous_nodes, after, previous_edges, edges_of(after))

        assert [node.label for node in result.exit_nodes] == ["A1", "A2"]
        assert sorted(edge.child.label for edge in result.exit_edges) == ["A1", "A2"]
        assert not result.enter_nodes
        assert len(result.update_nodes) == 5
        assert len(result.update_edges) == 4

    def test_expand_enters_the_same_identities(self, deep_tree):
        model = TreeModel(deep_tree)
        model.visible_nodes()
        a = model.children_of(model.root())[0]
        original = [child.identity for child in model.children_of(a)]

        model.toggle_collapse(a)
        collapsed = model.visible_nodes()
        previous_nodes, previous_edges = snapshot(collapsed)
        model.toggle_collapse(a)
        expanded = model.visible_nodes()
        result = diff(previous_nodes, expanded, previous_edges, edges_of(expanded))

        assert [node.identity for node in result.enter_nodes] == original
        assert [edge.key for edge in result.enter_edges] == original

    def test_no_changes(self, deep_tree):
        model = TreeModel(deep_tree)
        visible = model.visible_nodes()
        previous_nodes, previous_edges = snapshot(visible)
        result = diff(previous_nodes, visible, previous_edges, edges_of(visible))
        assert not result.has_changes()
        assert "nodes +0 ~7 -0" in result.summary()


class TestTimeline:
    def test_easing_end_points(self):
        assert ease_cubic_in_out(0) == 0
        assert ease_cubic_in_out(0.5) == pytest.approx(0.5)
        assert ease_cubic_in_out(1) == 1
        assert ease_cubic_in_out(0.25) < 0.25

    def test_transition_samples_between_frames(self):
        start = NodeFrame(Point(0, 0), BoxSize(0, 0), 0.0)
        end = NodeFrame(Point(10, 20), BoxSize(80, 40), 1.0)
        transition = Transition("node:1", start, end, started_at=1.0, duration=1.0)

        assert transition.sample(1.0) == start
        middle = transition.sample(1.5)
        assert middle.center == Point(5, 10)
        assert middle.size == BoxSize(40, 20)
        assert transition.sample(2.0) == end
        assert transition.finished(2.0)

    def test_zero_duration_jumps_to_end(self):
        end = EdgeFrame(Point(1, 1), Point(2, 2))
        transition = Transition("link:2", EdgeFrame(Point(), Point()), end, 0.0, 0.0)
        assert transition.sample(0.0) == end

    def test_advance_reports_finished_exits(self):
        timeline = Timeline()
        frame = NodeFrame(Point(), BoxSize())
        timeline.schedule("node:1", frame, frame, now=0, duration=1)
        timeline.schedule("node:2", frame, frame, now=0, duration=1, remove=True)

        frames, removed = timeline.advance(0.5)
        assert set(frames) == {"node:1", "node:2"}
        assert removed == []
        assert timeline.is_exiting("node:2")

        _, removed = timeline.advance(1.0)
        assert removed == ["node:2"]
        assert not timeline.active

    def test_rescheduling_interrupts(self):
        timeline = Timeline()
        a = NodeFrame(Point(0, 0), BoxSize())
        b = NodeFrame(Point(100, 0), BoxSize())
        timeline.schedule("node:1", a, b, now=0, duration=1, remove=True)
        current = timeline.current("node:1", 0.5)
        timeline.schedule("node:1", current, a, now=0.5, duration=1)

        assert len(timeline) == 1
        assert not timeline.is_exiting("node:1")
        assert timeline.current("node:1", 0.5) == current
