"""
Browser State - Nested sub-state for the album browser.

The application reducer only relies on update_with(action) -> events.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

logger = logging.getLogger(__name__)


# ============================================
# ACTIONS
# ============================================

@dataclass(frozen=True)
class SetContent:
    """Replace the browsed albums (first page)."""
    albums: Tuple = ()


@dataclass(frozen=True)
class AppendContent:
    """Append the next page of albums."""
    albums: Tuple = ()


@dataclass(frozen=True)
class ClearContent:
    pass


# ============================================
# EVENTS
# ============================================

@dataclass(frozen=True)
class ContentSet:
    pass


@dataclass(frozen=True)
class ContentAppended:
    albums: Tuple = ()


@dataclass
class BrowserState:
    """Albums loaded in the browser and how many pages were fetched."""
    albums: List = field(default_factory=list)
    page: int = 0
    
    def update_with(self, action) -> list:
        """Apply a browser action and return the resulting browser events."""
        if isinstance(action, SetContent):
            self.albums = list(action.albums)
            self.page = 1
            return [ContentSet()]
        
        if isinstance(action, AppendContent):
            if not action.albums:
                logger.debug('Nothing to append, browser unchanged')
                return []
            self.albums.extend(action.albums)
            self.page += 1
            return [ContentAppended(tuple(action.albums))]
        
        if isinstance(action, ClearContent):
            self.albums = []
            self.page = 0
            return [ContentSet()]
        
        raise TypeError(f'Unknown browser action: {action!r}')
