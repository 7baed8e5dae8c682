"""
Spot Actions - Intents submitted to the reducer.

The set is closed: every subclass of AppAction must have a handler in
AppModel (enforced by tests/test_reducer.py).
"""
from dataclasses import dataclass, field
from typing import Tuple

from .models import TrackDescription, Credentials


class AppAction:
    """Base class for all application actions."""


@dataclass(frozen=True)
class Play(AppAction):
    pass


@dataclass(frozen=True)
class Pause(AppAction):
    pass


@dataclass(frozen=True)
class Next(AppAction):
    pass


@dataclass(frozen=True)
class Previous(AppAction):
    pass


@dataclass(frozen=True)
class Load(AppAction):
    """Play a single track by uri."""
    uri: str


@dataclass(frozen=True)
class LoadPlaylist(AppAction):
    """Replace the playlist."""
    tracks: Tuple[TrackDescription, ...]


@dataclass(frozen=True)
class LoginSuccess(AppAction):
    credentials: Credentials


@dataclass(frozen=True)
class Seek(AppAction):
    """User seek, position in milliseconds."""
    position: int


@dataclass(frozen=True)
class SyncSeek(AppAction):
    """Position reported by the playback backend, in milliseconds."""
    position: int


@dataclass(frozen=True)
class Start(AppAction):
    pass


@dataclass(frozen=True)
class TryLogin(AppAction):
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class BrowserAction(AppAction):
    """Wraps an action for the nested browser state."""
    action: object
