from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class Track:
    items: tuple
    target_index: int

    def __len__(self) -> int:
        return len(self.items)

    @property
    def target(self):
        return self.items[self.target_index]


def _id_of(item: Any):
    if isinstance(item, dict):
        return item["id"]
    return getattr(item, "id", item)


def build_track(
    viewer_id,
    receiver,
    participants: Sequence,
    rng: random.Random | None = None,
    repeats: int = 3,
    offset_from_end: int = 3,
) -> Track:
    """
    Sequence of participants the reveal strip scrolls through.

    The viewer never appears; the receiver sits ``offset_from_end`` from the
    end of every block, the rest of the block is shuffled, and the block is
    repeated ``repeats`` times. ``target_index`` is the receiver's slot in the
    last block, where the strip comes to rest.
    """
    rng = rng or random.Random()
    receiver_id = _id_of(receiver)

    pool = [p for p in participants if _id_of(p) != viewer_id]
    match = next((p for p in pool if _id_of(p) == receiver_id), receiver)
    others = [p for p in pool if _id_of(p) != receiver_id]
    rng.shuffle(others)

    insert_at = max(0, len(others) + 1 - offset_from_end)
    block = others[:insert_at] + [match] + others[insert_at:]

    repeats = max(1, repeats)
    items = tuple(block * repeats)
    return Track(items=items, target_index=(repeats - 1) * len(block) + insert_at)
