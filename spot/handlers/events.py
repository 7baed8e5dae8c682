"""
Event Listener - WebSocket connection to the playback backend.
"""
import json
import time
import logging
import threading
from typing import Callable, Optional

import websocket

from ..actions import AppAction, SyncSeek
from ..config import RECONNECT_DELAY

logger = logging.getLogger(__name__)

POSITION_EVENTS = ('seek', 'position')


def parse_message(message: str) -> Optional[AppAction]:
    """Turn a backend message into an action, or None if it carries no position."""
    data = json.loads(message)
    if not isinstance(data, dict) or data.get('type') not in POSITION_EVENTS:
        return None
    payload = data.get('data')
    if not isinstance(payload, dict):
        return None
    position = payload.get('position')
    if position is None:
        return None
    return SyncSeek(int(position))


class PlayerEventListener:
    """Listens to backend WebSocket events and forwards SyncSeek actions."""
    
    def __init__(self, url: str, on_action: Callable[[AppAction], None]):
        """
        Initialize event listener.
        
        Args:
            url: WebSocket URL (e.g., ws://localhost:3678/events)
            on_action: Receives each action; runs on the listener thread,
                so this is normally a queue.Queue.put
        """
        self.url = url
        self.on_action = on_action
        self.ws: Optional[websocket.WebSocketApp] = None
        self.thread: Optional[threading.Thread] = None
        self.running = False
    
    def start(self):
        """Start listening for events in background thread."""
        self.running = True
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.start()
        logger.info(f'Started WebSocket listener: {self.url}')
    
    def stop(self):
        """Stop listening for events."""
        self.running = False
        if self.ws:
            self.ws.close()
        logger.info('Stopped WebSocket listener')
    
    def _run(self):
        """Main loop - connects and reconnects as needed."""
        while self.running:
            try:
                self.ws = websocket.WebSocketApp(
                    self.url,
                    on_message=self._on_message,
                    on_error=self._on_error,
                )
                self.ws.run_forever()
            except Exception as e:
                logger.warning(f'WebSocket error: {e}')
            
            if self.running:
                time.sleep(RECONNECT_DELAY)
    
    def _on_message(self, ws, message: str):
        """Handle incoming WebSocket message."""
        try:
            action = parse_message(message)
        except (ValueError, TypeError) as e:
            logger.warning(f'Error parsing event: {e}')
            return
        if action is not None:
            self.on_action(action)
    
    def _on_error(self, ws, error):
        if error:
            logger.debug(f'WebSocket error: {error}')
