"""
Console Commands - Maps typed commands to actions and console requests.

Actions go straight to the dispatcher. Console requests need a
collaborator call first (API fetch, credential removal) and are
handled by the console loop in main.py.
"""
from dataclasses import dataclass
from typing import Optional, Union

from .actions import (
    AppAction, Play, Pause, Next, Previous, Load, Seek, Start, TryLogin,
)

HELP = """Commands:
   play | pause            Resume / pause
   next | prev             Next / previous track
   load <uri>              Play a track uri
   seek <ms>               Seek to position
   album <id>              Load an album as the playlist
   playlist <id>           Load a playlist
   more                    Load the next page of saved albums
   login <user> <pass>     Log in
   logout                  Forget stored credentials
   status                  Check the API connection
   start                   Re-send the start event
   quit                    Exit"""


@dataclass(frozen=True)
class FetchAlbum:
    album_id: str


@dataclass(frozen=True)
class FetchPlaylist:
    playlist_id: str


@dataclass(frozen=True)
class MoreAlbums:
    pass


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class CheckConnection:
    pass


ConsoleRequest = Union[FetchAlbum, FetchPlaylist, MoreAlbums, Logout, CheckConnection]

_SIMPLE = {
    'play': Play,
    'pause': Pause,
    'next': Next,
    'prev': Previous,
    'previous': Previous,
    'start': Start,
    'more': MoreAlbums,
    'logout': Logout,
    'status': CheckConnection,
}


def parse_command(line: str) -> Optional[Union[AppAction, ConsoleRequest]]:
    """Parse one input line. Returns None for blank, unknown or malformed input."""
    parts = line.split()
    if not parts:
        return None

    name, args = parts[0].lower(), parts[1:]

    if name in _SIMPLE and not args:
        return _SIMPLE[name]()
    if name == 'load' and len(args) == 1:
        return Load(args[0])
    if name == 'album' and len(args) == 1:
        return FetchAlbum(args[0])
    if name == 'playlist' and len(args) == 1:
        return FetchPlaylist(args[0])
    if name == 'seek' and len(args) == 1:
        try:
            return Seek(int(args[0]))
        except ValueError:
            return None
    if name == 'login' and len(args) == 2:
        return TryLogin(args[0], args[1])
    return None
