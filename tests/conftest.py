"""
Pytest configuration and shared fixtures for Spot tests.
"""
import sys
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

from spot.models import AppState, TrackDescription, Credentials
from spot.reducer import AppModel, AppServices


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after each test."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def credentials_path(temp_dir):
    """Provide path for a temporary credentials.json file."""
    return temp_dir / 'credentials.json'


@pytest.fixture
def tracks():
    """Three tracks A, B, C in playback order."""
    return [
        TrackDescription('Track A', 'Artist', 'spotify:track:a', 180000),
        TrackDescription('Track B', 'Artist', 'spotify:track:b', 200000),
        TrackDescription('Track C', 'Artist', 'spotify:track:c', 220000),
    ]


@pytest.fixture
def credentials():
    return Credentials(username='alice', token='token-123', password='secret')


@pytest.fixture
def services():
    """Mocked API client and credential store."""
    store = MagicMock()
    store.save.return_value = True
    return AppServices(api=MagicMock(), credential_store=store)


@pytest.fixture
def model(services):
    """AppModel over a fresh state."""
    return AppModel(AppState(), services)


@pytest.fixture
def model_with_playlist(model, tracks):
    """AppModel whose playlist is [A, B, C]."""
    model.state.playlist = list(tracks)
    return model
