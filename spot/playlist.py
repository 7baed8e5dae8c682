"""
Playlist Navigator - Predecessor/successor lookup by track uri.

Both lookups resolve against the first track matching the uri, so a
playlist with duplicate uris always navigates from the first copy.
"""
from typing import Optional, Sequence

from .models import TrackDescription


def next_track(playlist: Sequence[TrackDescription],
               current_uri: Optional[str]) -> Optional[TrackDescription]:
    """Track right after current_uri, or None if unset, unknown or last."""
    if current_uri is None:
        return None
    
    found = False
    for track in playlist:
        if found:
            return track
        if track.uri == current_uri:
            found = True
    return None


def previous_track(playlist: Sequence[TrackDescription],
                   current_uri: Optional[str]) -> Optional[TrackDescription]:
    """Track right before current_uri, or None if unset, unknown or first."""
    if current_uri is None:
        return None
    
    previous = None
    for track in playlist:
        if track.uri == current_uri:
            return previous
        previous = track
    return None
