"""
Spot API modules - External service integrations.
"""
from .spotify import SpotifyApiClient, NullSpotifyApiClient
from .credentials import CredentialStore

__all__ = ['SpotifyApiClient', 'NullSpotifyApiClient', 'CredentialStore']
