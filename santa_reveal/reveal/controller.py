from __future__ import annotations

import asyncio
import enum
import inspect
import logging
import random
from typing import Callable, Sequence

from .animation import AnimationConfig
from .clock import Scheduler, TimerHandle
from .track import Track, build_track


logger = logging.getLogger(__name__)


class Stage(str, enum.Enum):
    IDLE = "idle"
    SPINNING = "spinning"
    RESULT = "result"


class RevealController:
    """
    Drives one participant's reveal: idle -> spinning -> result.

    A participant who has already revealed starts in ``result`` and never
    spins or commits again. Otherwise ``start()`` begins the spin, and the
    scheduler moves the controller to ``result`` once the strip has settled;
    that transition sends the single commit for this session. A committer may
    return an awaitable, in which case ``saving`` stays set until it completes
    on the running loop. A failed commit only raises ``save_failed``; the
    result stays on screen.
    """

    def __init__(
        self,
        participant,
        receiver,
        participants: Sequence,
        scheduler: Scheduler,
        committer: Callable[[], object],
        config: AnimationConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.participant = participant
        self.receiver = receiver
        self.scheduler = scheduler
        self.committer = committer
        self.config = config or AnimationConfig()

        self.already_revealed = bool(getattr(participant, "has_revealed", False))
        self.stage = Stage.RESULT if self.already_revealed else Stage.IDLE
        self.saving = False
        self.save_failed = False
        self.commit_count = 0
        self.timer: TimerHandle | None = None
        self.pending_commit: asyncio.Future | None = None

        # built once per session; re-rendering reads the same track
        self.track: Track = build_track(
            participant.id,
            receiver,
            participants,
            rng=rng,
            repeats=self.config.repeats,
            offset_from_end=self.config.offset_from_end,
        )

    @property
    def target_index(self) -> int:
        return self.track.target_index

    @property
    def distance(self) -> float:
        return self.config.distance_for(self.track.target_index)

    def offset_at(self, elapsed: float) -> float:
        if self.stage is Stage.IDLE:
            return 0.0
        if self.stage is Stage.RESULT:
            return self.distance
        return self.config.offset_at(elapsed, self.distance)

    def start(self) -> bool:
        if self.stage is not Stage.IDLE:
            return False
        self.stage = Stage.SPINNING
        self.timer = self.scheduler.call_later(self.config.spin_seconds, self._finish_spin)
        return True

    def _finish_spin(self) -> None:
        if self.stage is not Stage.SPINNING:
            return
        self.stage = Stage.RESULT
        self.timer = None
        if not self.already_revealed:
            self._commit()

    def _commit(self) -> None:
        self.commit_count += 1
        self.saving = True
        try:
            result = self.committer()
        except Exception:
            self._commit_failed()
            return

        if inspect.isawaitable(result):
            # stays "saving" until the loop finishes the commit
            self.pending_commit = asyncio.ensure_future(result)
            self.pending_commit.add_done_callback(self._commit_done)
            return
        self._commit_succeeded()

    def _commit_done(self, future: asyncio.Future) -> None:
        self.pending_commit = None
        if future.cancelled():
            self.save_failed = True
            self.saving = False
            return
        exc = future.exception()
        if exc is not None:
            self._commit_failed(exc)
        else:
            self._commit_succeeded()

    def _commit_succeeded(self) -> None:
        self.save_failed = False
        self.saving = False

    def _commit_failed(self, exc: BaseException | None = None) -> None:
        self.save_failed = True
        self.saving = False
        logger.warning(
            "Saving reveal of participant %s failed", self.participant.id,
            exc_info=exc if exc is not None else True,
        )
