from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass

import requests

from .animation import AnimationConfig
from .clock import Scheduler
from .controller import RevealController


@dataclass(frozen=True)
class Person:
    id: int
    name: str
    photo_url: str | None = None
    has_revealed: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Person":
        return cls(
            id=data["id"],
            name=data["name"],
            photo_url=data.get("photo_url"),
            has_revealed=bool(data.get("has_revealed")),
        )


class HttpRevealCommitter:
    """POSTs the reveal commit; raises ``requests.HTTPError`` on a non-2xx answer."""

    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self) -> dict:
        resp = self.session.post(f"{self.base_url}/api/reveal", timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()


class ExecutorCommitter:
    """
    Runs a blocking committer on the loop's default executor.

    Returns an awaitable so the controller keeps ``saving`` set while the
    request is in flight and the event loop keeps running.
    """

    def __init__(self, committer, loop: asyncio.AbstractEventLoop | None = None):
        self.committer = committer
        self.loop = loop

    def __call__(self) -> asyncio.Future:
        loop = self.loop or asyncio.get_running_loop()
        return loop.run_in_executor(None, self.committer)


def fetch_state(base_url: str, session: requests.Session, timeout: float = 10.0) -> dict:
    resp = session.get(f"{base_url.rstrip('/')}/api/state", timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def controller_from_state(
    state: dict,
    scheduler: Scheduler,
    committer,
    rng: random.Random | None = None,
) -> RevealController | None:
    """Build a controller from ``GET /api/state``; None until there is a match to reveal."""
    if not state.get("receiver") or not state["event"]["is_drawn"]:
        return None

    anim = state.get("animation") or {}
    config = AnimationConfig.from_mapping({f"REVEAL_{k.upper()}": v for k, v in anim.items()})
    return RevealController(
        participant=Person.from_dict(state["participant"]),
        receiver=Person.from_dict(state["receiver"]),
        participants=[Person.from_dict(p) for p in state["participants"]],
        scheduler=scheduler,
        committer=committer,
        config=config,
        rng=rng,
    )
