"""
Shared fixtures for the mind map engine tests.

Provides:
- A controllable clock so animations can be stepped deterministically
- Sample trees (the kidney-disease example and a deeper mixed tree)
- Mind maps drawn on an in-memory scene surface
"""

import pytest

from mindnode import MindMap, SceneSurface, TreeNode


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


# ============================================================
# TREES
# ============================================================

@pytest.fixture
def kidney_payload():
    """The JSON shape an external generator hands the engine."""
    return {"name": "腎臟病", "children": [{"name": "飲食"}, {"name": "症狀"}]}


@pytest.fixture
def deep_tree():
    """R -> A(A1, A2), B, C(C1)."""
    return TreeNode(
        "R",
        [
            TreeNode("A", [TreeNode("A1"), TreeNode("A2")]),
            TreeNode("B"),
            TreeNode("C", [TreeNode("C1")]),
        ],
    )


# ============================================================
# MIND MAPS
# ============================================================

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def surface():
    return SceneSurface()


@pytest.fixture
def kidney_map(kidney_payload, surface, clock):
    """Kidney mind map with its first animation already finished."""
    mind_map = MindMap(kidney_payload, surface=surface, clock=clock)
    mind_map.settle()
    return mind_map


@pytest.fixture
def deep_map(deep_tree, surface, clock):
    mind_map = MindMap(deep_tree, surface=surface, clock=clock)
    mind_map.settle()
    return mind_map
