"""
App Model - Single entry point for state changes.

apply() takes an action, mutates AppState in place and returns the
events it produced, in order. Collaborators (API client, credential
store, browser state) are only touched where an action requires it.
"""
import logging
from dataclasses import dataclass
from typing import List

from .models import AppState
from .playlist import next_track, previous_track
from .actions import (
    AppAction, Play, Pause, Next, Previous, Load, LoadPlaylist,
    LoginSuccess, Seek, SyncSeek, Start, TryLogin, BrowserAction,
)
from .events import (
    AppEvent, TrackResumed, TrackPaused, TrackChanged, PlaylistChanged,
    LoginCompleted, TrackSeeked, SeekSynced, Started, LoginStarted, BrowserEvent,
)

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    """
    Collaborators used by the reducer.
    
    api: anything with update_token(token), shared with the rest of the app.
    credential_store: anything with save(credentials) -> bool. The result
        is best-effort and never affects the reducer's outcome.
    """
    api: object
    credential_store: object


class AppModel:
    """Owns AppState and turns actions into events."""
    
    def __init__(self, state: AppState, services: AppServices):
        self.state = state
        self.services = services
        self._handlers = {
            Play: self._play,
            Pause: self._pause,
            Next: self._next,
            Previous: self._previous,
            Load: self._load,
            LoadPlaylist: self._load_playlist,
            LoginSuccess: self._login_success,
            Seek: lambda a: [TrackSeeked(a.position)],
            SyncSeek: lambda a: [SeekSynced(a.position)],
            Start: lambda a: [Started()],
            TryLogin: lambda a: [LoginStarted(a.username, a.password)],
            BrowserAction: self._browser_action,
        }
    
    @property
    def handled_actions(self) -> frozenset:
        """Action types this model has a branch for."""
        return frozenset(self._handlers)
    
    def apply(self, action: AppAction) -> List[AppEvent]:
        """Apply one action. Raises TypeError for objects that are not known actions."""
        handler = self._handlers.get(type(action))
        if handler is None:
            raise TypeError(f'Unhandled action: {action!r}')
        events = handler(action)
        logger.debug(f'{type(action).__name__} -> {[type(e).__name__ for e in events]}')
        return events
    
    # ============================================
    # PLAYBACK
    # ============================================
    
    def _play(self, action: Play) -> List[AppEvent]:
        self.state.is_playing = True
        return [TrackResumed()]
    
    def _pause(self, action: Pause) -> List[AppEvent]:
        self.state.is_playing = False
        return [TrackPaused()]
    
    def _next(self, action: Next) -> List[AppEvent]:
        track = next_track(self.state.playlist, self.state.current_track_id)
        if track is None:
            return []
        return self._change_track(track.uri)
    
    def _previous(self, action: Previous) -> List[AppEvent]:
        track = previous_track(self.state.playlist, self.state.current_track_id)
        if track is None:
            return []
        return self._change_track(track.uri)
    
    def _load(self, action: Load) -> List[AppEvent]:
        return self._change_track(action.uri)
    
    def _change_track(self, uri: str) -> List[AppEvent]:
        self.state.is_playing = True
        self.state.current_track_id = uri
        return [TrackChanged(uri)]
    
    def _load_playlist(self, action: LoadPlaylist) -> List[AppEvent]:
        self.state.playlist = list(action.tracks)
        logger.info(f'Playlist loaded: {len(self.state.playlist)} tracks')
        return [PlaylistChanged()]
    
    # ============================================
    # LOGIN
    # ============================================
    
    def _login_success(self, action: LoginSuccess) -> List[AppEvent]:
        credentials = action.credentials
        self._save_credentials(credentials)
        self.services.api.update_token(credentials.token)
        logger.info(f'Logged in as {credentials.username}')
        return [LoginCompleted()]
    
    def _save_credentials(self, credentials):
        """Best-effort persistence; the session continues with the in-memory token."""
        try:
            saved = self.services.credential_store.save(credentials)
        except (OSError, ValueError) as e:
            logger.warning(f'Could not save credentials: {e}', exc_info=True)
            return
        if not saved:
            logger.warning('Credentials not saved, continuing with in-memory token')
    
    # ============================================
    # BROWSER
    # ============================================
    
    def _browser_action(self, action: BrowserAction) -> List[AppEvent]:
        events = self.state.browser_state.update_with(action.action)
        return [BrowserEvent(e) for e in events]
