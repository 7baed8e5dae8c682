#!/usr/bin/env python3
"""
Spot - Console front-end for the application state core

Usage:
    python -m spot           # Talk to the Spotify Web API
    python -m spot --mock    # Offline mock data
"""
import os
import sys
import queue
import logging
import threading
from logging.handlers import RotatingFileHandler

from .config import (
    SPOTIFY_API_URL, SPOT_EVENTS_WS, MOCK_MODE, CREDENTIALS_PATH, BROWSER_PAGE_SIZE,
    LOG_DIR, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUP_COUNT,
)
from .models import AppState, Credentials
from .actions import Start, LoginSuccess, LoadPlaylist, BrowserAction
from .browser import SetContent, AppendContent, ClearContent
from .events import AppEvent, LoginCompleted, LoginStarted
from .commands import (
    HELP, parse_command, FetchAlbum, FetchPlaylist, MoreAlbums, Logout, CheckConnection,
)
from .reducer import AppModel, AppServices
from .dispatcher import Dispatcher
from .api import SpotifyApiClient, NullSpotifyApiClient, CredentialStore
from .handlers import PlayerEventListener

logger = logging.getLogger(__name__)

QUIT = object()


def setup_logging():
    """Configure logging with console and rotating file handler."""
    # Console level from environment, default INFO
    level_name = os.environ.get('SPOT_LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    console.setLevel(level)

    # Root passes everything, handlers filter
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(console)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)  # File always gets DEBUG
        root.addHandler(file_handler)
        root.info(f'Logging to: {LOG_FILE}')
    except OSError as e:
        root.warning(f'Could not create log file: {e}')

    for name in ('urllib3', 'requests', 'websocket'):
        logging.getLogger(name).setLevel(logging.WARNING)


def log_event(event: AppEvent):
    logger.info(f'Event: {event}')


def read_commands(actions: queue.Queue, stream=None):
    """Read input lines into the action queue until EOF or 'quit'."""
    stream = stream or sys.stdin
    for line in stream:
        parts = line.split()
        if not parts:
            continue
        if parts[0].lower() in ('quit', 'exit', 'q'):
            break
        item = parse_command(line)
        if item is None:
            print(HELP)
            continue
        actions.put(item)
    actions.put(QUIT)


def build_app(mock_mode: bool = False) -> Dispatcher:
    """Create the model, its services and a dispatcher around it."""
    api = NullSpotifyApiClient() if mock_mode else SpotifyApiClient(SPOTIFY_API_URL)
    store = CredentialStore(CREDENTIALS_PATH)
    model = AppModel(AppState(), AppServices(api=api, credential_store=store))
    return Dispatcher(model)


def restore_login(dispatcher: Dispatcher) -> bool:
    """Log in with stored credentials if they are still valid."""
    store = dispatcher.model.services.credential_store
    credentials = store.load()
    if credentials is None:
        logger.info('No stored credentials, use: login <user> <pass>')
        return False
    if credentials.is_token_expired():
        logger.info(f'Stored token for {credentials.username} expired, please log in again')
        return False
    dispatcher.dispatch(LoginSuccess(credentials))
    return True


# ============================================
# CONSOLE REQUESTS
# ============================================

def load_album(dispatcher: Dispatcher, album_id: str) -> bool:
    """Fetch an album and make its tracks the playlist."""
    album = dispatcher.model.services.api.get_album(album_id)
    if album is None:
        logger.warning(f'Album not found: {album_id}')
        return False
    dispatcher.dispatch(LoadPlaylist(album.tracks))
    return True


def load_playlist(dispatcher: Dispatcher, playlist_id: str) -> bool:
    """Fetch a playlist's tracks and make them the playlist."""
    tracks = dispatcher.model.services.api.get_playlist_tracks(playlist_id)
    if not tracks:
        logger.warning(f'Playlist empty or not found: {playlist_id}')
        return False
    dispatcher.dispatch(LoadPlaylist(tuple(tracks)))
    return True


def load_more_albums(dispatcher: Dispatcher) -> int:
    """Append the next page of saved albums to the browser. Returns albums added."""
    browser = dispatcher.model.state.browser_state
    albums = dispatcher.model.services.api.get_saved_albums(
        offset=len(browser.albums), limit=BROWSER_PAGE_SIZE)
    dispatcher.dispatch(BrowserAction(AppendContent(tuple(albums))))
    if not albums:
        logger.info('No more saved albums')
    return len(albums)


def logout(dispatcher: Dispatcher) -> bool:
    """Forget stored credentials and empty the browser."""
    cleared = dispatcher.model.services.credential_store.clear()
    dispatcher.dispatch(BrowserAction(ClearContent()))
    logger.info('Logged out' if cleared else 'Logged out, but stored credentials could not be removed')
    return cleared


def check_connection(dispatcher: Dispatcher) -> bool:
    connected = dispatcher.model.services.api.is_connected()
    logger.info(f'API connection: {"ok" if connected else "unavailable"}')
    return connected


def make_session_listener(dispatcher: Dispatcher, actions: queue.Queue, mock_mode: bool):
    """
    Listener that reacts to login events.

    LoginStarted: completes the login. The Web API has no password grant,
    so outside mock mode the token comes from SPOTIFY_ACCESS_TOKEN.
    LoginCompleted: loads the first page of saved albums into the browser.
    """
    def on_event(event: AppEvent):
        if isinstance(event, LoginStarted):
            token = 'mock-token' if mock_mode else os.environ.get('SPOTIFY_ACCESS_TOKEN')
            if not token:
                logger.warning('Set SPOTIFY_ACCESS_TOKEN to log in')
                return
            credentials = Credentials(username=event.username, token=token, password=event.password)
            actions.put(LoginSuccess(credentials))
        elif isinstance(event, LoginCompleted):
            albums = dispatcher.model.services.api.get_saved_albums(limit=BROWSER_PAGE_SIZE)
            actions.put(BrowserAction(SetContent(tuple(albums))))

    return on_event


def handle_request(dispatcher: Dispatcher, request):
    """Run a console request that needs a collaborator before dispatching."""
    if isinstance(request, FetchAlbum):
        load_album(dispatcher, request.album_id)
    elif isinstance(request, FetchPlaylist):
        load_playlist(dispatcher, request.playlist_id)
    elif isinstance(request, MoreAlbums):
        load_more_albums(dispatcher)
    elif isinstance(request, Logout):
        logout(dispatcher)
    elif isinstance(request, CheckConnection):
        check_connection(dispatcher)
    else:
        dispatcher.dispatch(request)


def run(dispatcher: Dispatcher, actions: queue.Queue):
    """Handle queued items on the calling thread until QUIT."""
    while True:
        item = actions.get()
        if item is QUIT:
            return
        handle_request(dispatcher, item)


def main():
    """Entry point for Spot."""
    setup_logging()

    logger.info('Spot console')
    if MOCK_MODE:
        logger.info('Mode: MOCK (offline)')
    else:
        logger.info(f'API: {SPOTIFY_API_URL}')

    actions: queue.Queue = queue.Queue()
    dispatcher = build_app(mock_mode=MOCK_MODE)
    dispatcher.subscribe(log_event)
    dispatcher.subscribe(make_session_listener(dispatcher, actions, MOCK_MODE))

    dispatcher.dispatch(Start())
    restore_login(dispatcher)
    dispatcher.drain(actions)  # Browser refresh queued by the restored login

    listener = None
    if SPOT_EVENTS_WS:
        listener = PlayerEventListener(SPOT_EVENTS_WS, actions.put)
        listener.start()

    print()
    print(HELP)
    print()

    threading.Thread(target=read_commands, args=(actions,), daemon=True).start()

    try:
        run(dispatcher, actions)
    except KeyboardInterrupt:
        pass
    finally:
        if listener:
            listener.stop()
        logger.info('Bye')


if __name__ == '__main__':
    main()
