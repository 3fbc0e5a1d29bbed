from __future__ import annotations

import random
from typing import Hashable, Iterable

from .errors import InsufficientParticipants


MAX_REPAIR_PASSES = 8


def _shuffle(items: list, rng: random.Random) -> None:
    # Fisher-Yates, backward pass
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def _fixed_points(givers: list, receivers: list) -> list[int]:
    return [i for i, (g, r) in enumerate(zip(givers, receivers)) if g == r]


def _repair(givers: list, receivers: list) -> None:
    n = len(receivers)
    for i in range(n):
        if givers[i] == receivers[i]:
            j = (i + 1) % n
            receivers[i], receivers[j] = receivers[j], receivers[i]


def _rotate_swap(givers: list, receivers: list, i: int) -> None:
    """Swap a residual fixed point with the next index that is not fixed."""
    n = len(receivers)
    for step in range(1, n):
        j = (i + step) % n
        if givers[j] != receivers[j]:
            receivers[i], receivers[j] = receivers[j], receivers[i]
            return
    # every position is fixed: any other index works
    j = (i + 1) % n
    receivers[i], receivers[j] = receivers[j], receivers[i]


def is_derangement(assignment: dict) -> bool:
    return (
        set(assignment.keys()) == set(assignment.values())
        and all(giver != receiver for giver, receiver in assignment.items())
    )


def draw(participants: Iterable[Hashable], rng: random.Random | None = None) -> dict:
    """
    Assign every participant exactly one other participant.

    Returns a giver -> receiver mapping that is a bijection over the
    participants with no giver mapped to itself. Givers keep the order they
    were given in; pass a seeded ``random.Random`` for reproducible draws.
    """
    rng = rng or random.Random()
    givers = list(dict.fromkeys(participants))
    n = len(givers)

    if n < 2:
        raise InsufficientParticipants("Need at least 2 participants to run the draw.")

    if n == 2:
        return {givers[0]: givers[1], givers[1]: givers[0]}

    if n == 3:
        a, b, c = givers
        if rng.random() < 0.5:
            return {a: b, b: c, c: a}
        return {a: c, b: a, c: b}

    receivers = givers[:]
    _shuffle(receivers, rng)
    _repair(givers, receivers)

    passes = 0
    fixed = _fixed_points(givers, receivers)
    while fixed and passes < MAX_REPAIR_PASSES:
        for i in fixed:
            if givers[i] == receivers[i]:
                _rotate_swap(givers, receivers, i)
        passes += 1
        fixed = _fixed_points(givers, receivers)

    # rejection sampling as the last resort
    while fixed:
        _shuffle(receivers, rng)
        fixed = _fixed_points(givers, receivers)

    assignment = dict(zip(givers, receivers))
    if not is_derangement(assignment):
        raise RuntimeError("draw produced an invalid assignment")
    return assignment
