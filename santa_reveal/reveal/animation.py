from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


# cubic-bezier(0.3, 0.7, 0.6, 1)
BEZIER = (0.3, 0.7, 0.6, 1.0)


def _bezier(t: float, p1: float, p2: float) -> float:
    u = 1 - t
    return 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t


def cubic_bezier(progress: float, x1: float, y1: float, x2: float, y2: float) -> float:
    """CSS-style timing function: maps elapsed fraction to travelled fraction."""
    if progress <= 0:
        return 0.0
    if progress >= 1:
        return 1.0
    lo, hi = 0.0, 1.0
    for _ in range(40):
        mid = (lo + hi) / 2
        if _bezier(mid, x1, x2) < progress:
            lo = mid
        else:
            hi = mid
    return _bezier((lo + hi) / 2, y1, y2)


@dataclass(frozen=True)
class AnimationConfig:
    item_width: float = 97.0
    duration: float = 30.0
    settle_delay: float = 0.5
    repeats: int = 3
    offset_from_end: int = 3
    visible_items: int = 3

    @classmethod
    def from_mapping(cls, config: Mapping) -> "AnimationConfig":
        return cls(
            item_width=float(config.get("REVEAL_ITEM_WIDTH", cls.item_width)),
            duration=float(config.get("REVEAL_DURATION", cls.duration)),
            settle_delay=float(config.get("REVEAL_SETTLE_DELAY", cls.settle_delay)),
            repeats=int(config.get("REVEAL_REPEATS", cls.repeats)),
            offset_from_end=int(config.get("REVEAL_OFFSET_FROM_END", cls.offset_from_end)),
            visible_items=int(config.get("REVEAL_VISIBLE_ITEMS", cls.visible_items)),
        )

    @property
    def spin_seconds(self) -> float:
        # the result shows only once the strip has come to rest
        return self.duration + self.settle_delay

    @property
    def marker_slot(self) -> int:
        return self.visible_items // 2

    def distance_for(self, target_index: int) -> float:
        """Travel distance that leaves ``target_index`` under the centre marker.

        Negative for tracks too short to scroll: the strip then moves right.
        """
        return (target_index - self.marker_slot) * self.item_width

    def resting_index(self, distance: float) -> int:
        return int(round(distance / self.item_width)) + self.marker_slot

    def ease(self, progress: float) -> float:
        return cubic_bezier(progress, *BEZIER)

    def offset_at(self, elapsed: float, distance: float) -> float:
        if self.duration <= 0:
            return distance
        return distance * self.ease(elapsed / self.duration)

    def to_dict(self) -> dict:
        return {
            "item_width": self.item_width,
            "duration": self.duration,
            "settle_delay": self.settle_delay,
            "repeats": self.repeats,
            "offset_from_end": self.offset_from_end,
            "visible_items": self.visible_items,
        }
