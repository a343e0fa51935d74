from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from .core import BoxSize, Point


def ease_cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


@dataclass(frozen=True)
class NodeFrame:
    """A node's animated state in layout coordinates."""

    center: Point
    size: BoxSize
    opacity: float = 1.0

    def lerp(self, other: "NodeFrame", t: float) -> "NodeFrame":
        return NodeFrame(
            self.center.lerp(other.center, t),
            self.size.lerp(other.size, t),
            self.opacity + (other.opacity - self.opacity) * t,
        )


@dataclass(frozen=True)
class EdgeFrame:
    source: Point
    target: Point

    def lerp(self, other: "EdgeFrame", t: float) -> "EdgeFrame":
        return EdgeFrame(self.source.lerp(other.source, t), self.target.lerp(other.target, t))


Frame = Union[NodeFrame, EdgeFrame]


@dataclass(frozen=True)
class Transition:
    key: str
    start: Frame
    end: Frame
    started_at: float
    duration: float
    remove: bool = False

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return min(max((now - self.started_at) / self.duration, 0.0), 1.0)

    def sample(self, now: float) -> Frame:
        t = self.progress(now)
        if t >= 1.0:
            return self.end
        return self.start.lerp(self.end, ease_cubic_in_out(t))

    def finished(self, now: float) -> bool:
        return self.progress(now) >= 1.0


class Timeline:
    """In-flight transitions keyed by shape key.

    Scheduling on a key that is still animating replaces the old transition;
    callers start the new one from :meth:`current` so motion stays continuous.
    """

    def __init__(self) -> None:
        self._transitions: Dict[str, Transition] = {}

    def schedule(
        self,
        key: str,
        start: Frame,
        end: Frame,
        *,
        now: float,
        duration: float,
        remove: bool = False,
    ) -> Transition:
        transition = Transition(key, start, end, now, duration, remove)
        self._transitions[key] = transition
        return transition

    def current(self, key: str, now: float) -> Optional[Frame]:
        transition = self._transitions.get(key)
        return transition.sample(now) if transition else None

    def is_exiting(self, key: str) -> bool:
        transition = self._transitions.get(key)
        return bool(transition and transition.remove)

    def advance(self, now: float) -> Tuple[Dict[str, Frame], List[str]]:
        """Sample every transition at ``now``.

        Returns the frames to draw and the keys whose exit has completed.
        Finished transitions are dropped.
        """
        frames: Dict[str, Frame] = {}
        removed: List[str] = []
        for key, transition in list(self._transitions.items()):
            frames[key] = transition.sample(now)
            if transition.finished(now):
                del self._transitions[key]
                if transition.remove:
                    removed.append(key)
        return frames, removed

    def settle(self) -> Tuple[Dict[str, Frame], List[str]]:
        return self.advance(float("inf"))

    def clear(self) -> None:
        self._transitions.clear()

    @property
    def active(self) -> bool:
        return bool(self._transitions)

    def __len__(self) -> int:
        return len(self._transitions)

    def __contains__(self, key: object) -> bool:
        return key in self._transitions
