"""
Spot Handlers - Backend event handling.
"""
from .events import PlayerEventListener

__all__ = ['PlayerEventListener']
