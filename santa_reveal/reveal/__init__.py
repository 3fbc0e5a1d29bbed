from .animation import AnimationConfig
from .clock import AsyncioScheduler, VirtualClock
from .controller import RevealController, Stage
from .track import Track, build_track

__all__ = [
    "AnimationConfig",
    "AsyncioScheduler",
    "VirtualClock",
    "RevealController",
    "Stage",
    "Track",
    "build_track",
]
