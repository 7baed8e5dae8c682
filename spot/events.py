"""
Spot Events - Notifications produced by the reducer for UI and audio consumers.
"""
from dataclasses import dataclass, field


class AppEvent:
    """Base class for all application events."""


@dataclass(frozen=True)
class TrackResumed(AppEvent):
    pass


@dataclass(frozen=True)
class TrackPaused(AppEvent):
    pass


@dataclass(frozen=True)
class TrackChanged(AppEvent):
    uri: str


@dataclass(frozen=True)
class PlaylistChanged(AppEvent):
    pass


@dataclass(frozen=True)
class LoginCompleted(AppEvent):
    pass


@dataclass(frozen=True)
class TrackSeeked(AppEvent):
    position: int


@dataclass(frozen=True)
class SeekSynced(AppEvent):
    position: int


@dataclass(frozen=True)
class Started(AppEvent):
    pass


@dataclass(frozen=True)
class LoginStarted(AppEvent):
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class BrowserEvent(AppEvent):
    """Wraps an event produced by the nested browser state."""
    event: object
