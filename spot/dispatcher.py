"""
Dispatcher - Applies actions and fans the resulting events out to listeners.

dispatch() must be called from a single thread. Other threads hand
their actions over through a queue.Queue that the owner drains.
"""
import queue
import logging
from typing import Callable, List

from .actions import AppAction
from .events import AppEvent
from .reducer import AppModel

logger = logging.getLogger(__name__)

Listener = Callable[[AppEvent], None]


class Dispatcher:
    """Routes actions to the AppModel and events to subscribers."""
    
    def __init__(self, model: AppModel):
        self.model = model
        self._listeners: List[Listener] = []
    
    def subscribe(self, listener: Listener):
        """Register a listener. Listeners are called in subscription order."""
        self._listeners.append(listener)
    
    def unsubscribe(self, listener: Listener):
        """Remove a listener (no-op if not registered)."""
        if listener in self._listeners:
            self._listeners.remove(listener)
    
    def dispatch(self, action: AppAction) -> List[AppEvent]:
        """Apply an action and notify listeners of each event."""
        events = self.model.apply(action)
        for event in events:
            self._notify(event)
        return events
    
    def drain(self, actions: queue.Queue) -> int:
        """Dispatch every action currently queued. Returns the number dispatched."""
        count = 0
        while True:
            try:
                action = actions.get_nowait()
            except queue.Empty:
                return count
            self.dispatch(action)
            count += 1
    
    def _notify(self, event: AppEvent):
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                name = getattr(listener, '__name__', repr(listener))
                logger.warning(f'Listener {name} failed on {event!r}: {e}', exc_info=True)
