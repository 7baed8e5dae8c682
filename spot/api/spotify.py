"""
Spotify API Client - Web API access with a replaceable bearer token.
"""
import logging
from typing import Optional, List

import requests

from ..models import TrackDescription, AlbumDescription
from ..config import API_TIMEOUT

logger = logging.getLogger(__name__)


def _album_from_api(data: dict) -> AlbumDescription:
    """Build an AlbumDescription from a Web API album object."""
    images = data.get('images') or []
    art = images[0].get('url') if images else None
    items = (data.get('tracks') or {}).get('items') or []
    return AlbumDescription(
        title=data.get('name', ''),
        artist=', '.join(a.get('name', '') for a in data.get('artists') or []),
        uri=data.get('uri', ''),
        art=art,
        tracks=tuple(TrackDescription.from_api(t, art=art) for t in items),
    )


class SpotifyApiClient:
    """
    REST client for the Spotify Web API.
    
    The session is shared by the whole app; update_token() swaps the
    bearer token in place after a login. Request failures are logged
    and returned as None / [] / False.
    """
    
    def __init__(self, base_url: str, token: Optional[str] = None):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()
        self.session.headers['Content-Type'] = 'application/json'
        self._token: Optional[str] = None
        if token:
            self.update_token(token)
    
    @property
    def token(self) -> Optional[str]:
        return self._token
    
    def update_token(self, token: str):
        """Use a new access token for all following requests."""
        self._token = token
        self.session.headers['Authorization'] = f'Bearer {token}'
        logger.debug('API token updated')
    
    def _get(self, path: str, params: dict = None) -> Optional[dict]:
        if not self._token:
            logger.debug(f'Skipping GET {path}: no token')
            return None
        try:
            resp = self.session.get(f'{self.base_url}{path}', params=params, timeout=API_TIMEOUT)
            if not resp.ok:
                logger.warning(f'GET {path} failed: {resp.status_code} {resp.text[:200]}')
                return None
            return resp.json()
        except requests.RequestException as e:
            logger.error(f'GET {path} error: {e}', exc_info=True)
            return None
        except ValueError as e:
            logger.warning(f'GET {path} returned invalid JSON: {e}')
            return None
    
    def get_album(self, album_id: str) -> Optional[AlbumDescription]:
        """Fetch an album with its tracks."""
        data = self._get(f'/albums/{album_id}')
        if not data:
            return None
        return _album_from_api(data)
    
    def get_playlist_tracks(self, playlist_id: str) -> List[TrackDescription]:
        """Fetch the tracks of a playlist, in playlist order."""
        data = self._get(f'/playlists/{playlist_id}/tracks')
        if not data:
            return []
        return [
            TrackDescription.from_api(item['track'])
            for item in data.get('items', [])
            if isinstance(item, dict) and item.get('track')
        ]
    
    def get_saved_albums(self, offset: int = 0, limit: int = 20) -> List[AlbumDescription]:
        """Fetch a page of the user's saved albums."""
        data = self._get('/me/albums', params={'offset': offset, 'limit': limit})
        if not data:
            return []
        return [
            _album_from_api(item['album'])
            for item in data.get('items', [])
            if isinstance(item, dict) and item.get('album')
        ]
    
    def is_connected(self) -> bool:
        """Check if the API is reachable with the current token."""
        if not self._token:
            return False
        try:
            resp = self.session.get(f'{self.base_url}/me', timeout=1)
            return resp.ok
        except requests.RequestException:
            return False


class NullSpotifyApiClient:
    """Offline stand-in for --mock mode. Serves a fixed album."""
    
    MOCK_ALBUM = AlbumDescription(
        title='Abbey Road',
        artist='The Beatles',
        uri='spotify:album:mock1',
        tracks=(
            TrackDescription('Come Together', 'The Beatles', 'spotify:track:mock1', 259000),
            TrackDescription('Something', 'The Beatles', 'spotify:track:mock2', 182000),
            TrackDescription("Maxwell's Silver Hammer", 'The Beatles', 'spotify:track:mock3', 207000),
        ),
    )
    
    def __init__(self):
        self.token: Optional[str] = None
    
    def update_token(self, token: str):
        self.token = token
    
    def get_album(self, album_id: str) -> Optional[AlbumDescription]:
        return self.MOCK_ALBUM
    
    def get_playlist_tracks(self, playlist_id: str) -> List[TrackDescription]:
        return list(self.MOCK_ALBUM.tracks)
    
    def get_saved_albums(self, offset: int = 0, limit: int = 20) -> List[AlbumDescription]:
        return [self.MOCK_ALBUM] if offset == 0 else []
    
    def is_connected(self) -> bool:
        return True
