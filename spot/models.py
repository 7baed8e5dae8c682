"""
Spot Data Models - Core data structures.
"""
import time
from dataclasses import dataclass, field
from typing import Optional, List, Tuple

from .browser import BrowserState


@dataclass(frozen=True)
class TrackDescription:
    """A playable track. The uri is the playlist navigation key."""
    title: str
    artist: str
    uri: str
    duration: int = 0  # Milliseconds
    art: Optional[str] = None
    
    @classmethod
    def from_api(cls, data: dict, art: Optional[str] = None) -> 'TrackDescription':
        """Build from a Spotify Web API track object."""
        artists = data.get('artists') or []
        images = (data.get('album') or {}).get('images') or []
        return cls(
            title=data.get('name', ''),
            artist=', '.join(a.get('name', '') for a in artists),
            uri=data.get('uri', ''),
            duration=data.get('duration_ms', 0),
            art=art or (images[0].get('url') if images else None),
        )


@dataclass(frozen=True)
class AlbumDescription:
    """An album with its tracks, as shown by the browser."""
    title: str
    artist: str
    uri: str
    art: Optional[str] = None
    tracks: Tuple[TrackDescription, ...] = ()


@dataclass
class Credentials:
    """Login result: access token plus identity fields."""
    username: str
    token: str = field(repr=False)
    password: Optional[str] = field(default=None, repr=False)
    token_expiry_time: Optional[float] = None  # Unix seconds
    
    def is_token_expired(self, now: Optional[float] = None) -> bool:
        """True if an expiry is known and has passed."""
        if self.token_expiry_time is None:
            return False
        return (now if now is not None else time.time()) >= self.token_expiry_time
    
    def to_dict(self) -> dict:
        return {
            'username': self.username,
            'token': self.token,
            'password': self.password,
            'tokenExpiryTime': self.token_expiry_time,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'Credentials':
        """Parse stored credentials. Raises ValueError if required fields are missing."""
        if not isinstance(data, dict):
            raise ValueError('Credentials must be a JSON object')
        username = data.get('username')
        token = data.get('token')
        if not username or not token:
            raise ValueError('Credentials need a username and a token')
        expiry = data.get('tokenExpiryTime')
        if expiry is not None and (isinstance(expiry, bool) or not isinstance(expiry, (int, float))):
            raise ValueError(f'Invalid tokenExpiryTime: {expiry!r}')
        return cls(
            username=username,
            token=token,
            password=data.get('password'),
            token_expiry_time=expiry,
        )


@dataclass
class AppState:
    """
    Application state owned by the reducer.
    
    Created once at startup (empty playlist, not playing) and mutated
    only through AppModel.apply().
    """
    is_playing: bool = False
    current_track_id: Optional[str] = None
    playlist: List[TrackDescription] = field(default_factory=list)
    browser_state: BrowserState = field(default_factory=BrowserState)
    
    @property
    def current_track(self) -> Optional[TrackDescription]:
        """The playlist entry for current_track_id, if any."""
        return next((t for t in self.playlist if t.uri == self.current_track_id), None)
