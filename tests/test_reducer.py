"""
Tests for AppModel - action handling, state mutation and produced events.
"""
import pytest
from unittest.mock import MagicMock

from spot import actions
from spot.actions import (
    AppAction, Play, Pause, Next, Previous, Load, LoadPlaylist,
    LoginSuccess, Seek, SyncSeek, Start, TryLogin, BrowserAction,
)
from spot.events import (
    TrackResumed, TrackPaused, TrackChanged, PlaylistChanged, LoginCompleted,
    TrackSeeked, SeekSynced, Started, LoginStarted, BrowserEvent,
)
from spot.browser import SetContent, ContentSet
from spot.models import TrackDescription
from spot.api.credentials import CredentialStore


class TestDispatchTable:
    """Every action type has exactly one branch."""

    def test_all_actions_handled(self, model):
        """No AppAction subclass is missing from the handler table."""
        declared = {
            cls for cls in vars(actions).values()
            if isinstance(cls, type) and issubclass(cls, AppAction) and cls is not AppAction
        }
        assert declared == set(AppAction.__subclasses__())
        assert model.handled_actions == declared

    def test_unknown_action_raises(self, model):
        with pytest.raises(TypeError):
            model.apply('play')


class TestPlayPause:
    """Tests for the playing flag."""

    @pytest.mark.parametrize('was_playing', [True, False])
    def test_play(self, model, was_playing):
        """Play always sets is_playing and emits TrackResumed."""
        model.state.is_playing = was_playing
        assert model.apply(Play()) == [TrackResumed()]
        assert model.state.is_playing is True

    @pytest.mark.parametrize('was_playing', [True, False])
    def test_pause(self, model, was_playing):
        """Pause always clears is_playing and emits TrackPaused."""
        model.state.is_playing = was_playing
        assert model.apply(Pause()) == [TrackPaused()]
        assert model.state.is_playing is False


class TestNavigation:
    """Tests for Next/Previous over playlist [A, B, C]."""

    def test_next_from_middle(self, model_with_playlist):
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:b'

        events = model.apply(Next())

        assert events == [TrackChanged('spotify:track:c')]
        assert model.state.current_track_id == 'spotify:track:c'
        assert model.state.is_playing is True

    def test_previous_from_middle(self, model_with_playlist):
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:b'

        events = model.apply(Previous())

        assert events == [TrackChanged('spotify:track:a')]
        assert model.state.current_track_id == 'spotify:track:a'
        assert model.state.is_playing is True

    def test_next_at_end_is_noop(self, model_with_playlist):
        """Next on the last track leaves state untouched."""
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:c'

        assert model.apply(Next()) == []
        assert model.state.current_track_id == 'spotify:track:c'
        assert model.state.is_playing is False

    def test_previous_at_start_is_noop(self, model_with_playlist):
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:a'

        assert model.apply(Previous()) == []
        assert model.state.current_track_id == 'spotify:track:a'
        assert model.state.is_playing is False

    def test_no_current_track(self, model_with_playlist):
        """Without a current track neither direction does anything."""
        model = model_with_playlist

        assert model.apply(Next()) == []
        assert model.apply(Previous()) == []
        assert model.state.current_track_id is None
        assert model.state.is_playing is False

    def test_current_track_not_in_playlist(self, model_with_playlist):
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:elsewhere'

        assert model.apply(Next()) == []
        assert model.apply(Previous()) == []
        assert model.state.current_track_id == 'spotify:track:elsewhere'


class TestLoad:
    """Tests for Load and LoadPlaylist."""

    def test_load_sets_track(self, model):
        """Load works even when the uri is not in the playlist."""
        events = model.apply(Load('spotify:track:u'))

        assert events == [TrackChanged('spotify:track:u')]
        assert model.state.current_track_id == 'spotify:track:u'
        assert model.state.is_playing is True

    def test_load_playlist_replaces(self, model_with_playlist):
        """Prior playlist contents are discarded."""
        model = model_with_playlist
        x = TrackDescription('X', 'Artist', 'spotify:track:x')
        y = TrackDescription('Y', 'Artist', 'spotify:track:y')

        events = model.apply(LoadPlaylist((x, y)))

        assert events == [PlaylistChanged()]
        assert model.state.playlist == [x, y]

    def test_load_playlist_keeps_current_track(self, model_with_playlist):
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:b'

        model.apply(LoadPlaylist(()))

        assert model.state.playlist == []
        assert model.state.current_track_id == 'spotify:track:b'

    def test_navigation_after_load_playlist(self, model, tracks):
        model.apply(LoadPlaylist(tuple(tracks)))
        model.apply(Load('spotify:track:a'))

        assert model.apply(Next()) == [TrackChanged('spotify:track:b')]
        assert model.state.current_track.title == 'Track B'


class TestLogin:
    """Tests for LoginSuccess and TryLogin."""

    def test_login_success(self, model, services, credentials):
        """Credentials are saved, the token is propagated and LoginCompleted emitted."""
        events = model.apply(LoginSuccess(credentials))

        assert events == [LoginCompleted()]
        services.credential_store.save.assert_called_once_with(credentials)
        services.api.update_token.assert_called_once_with('token-123')

    def test_login_success_when_save_fails(self, model, services, credentials):
        services.credential_store.save.return_value = False

        assert model.apply(LoginSuccess(credentials)) == [LoginCompleted()]
        services.api.update_token.assert_called_once_with('token-123')

    def test_login_success_when_save_raises(self, model, services, credentials):
        services.credential_store.save.side_effect = OSError('disk full')

        assert model.apply(LoginSuccess(credentials)) == [LoginCompleted()]
        services.api.update_token.assert_called_once_with('token-123')

    def test_login_success_with_unwritable_store(self, model, services, credentials, temp_dir):
        """A real store that cannot write does not block the login."""
        blocker = temp_dir / 'not_a_dir'
        blocker.write_text('x')
        services.credential_store = CredentialStore(blocker / 'credentials.json')

        assert model.apply(LoginSuccess(credentials)) == [LoginCompleted()]
        services.api.update_token.assert_called_once_with('token-123')

    def test_login_does_not_touch_playback(self, model_with_playlist, credentials):
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:a'

        model.apply(LoginSuccess(credentials))

        assert model.state.current_track_id == 'spotify:track:a'
        assert model.state.is_playing is False
        assert len(model.state.playlist) == 3

    def test_try_login(self, model, services):
        assert model.apply(TryLogin('alice', 'pw')) == [LoginStarted('alice', 'pw')]
        services.api.update_token.assert_not_called()


class TestPassthroughActions:
    """Actions that only produce an event."""

    def test_seek(self, model):
        assert model.apply(Seek(42000)) == [TrackSeeked(42000)]

    def test_sync_seek(self, model):
        assert model.apply(SyncSeek(1500)) == [SeekSynced(1500)]

    def test_start(self, model):
        assert model.apply(Start()) == [Started()]

    def test_state_unchanged(self, model_with_playlist):
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:b'
        model.state.is_playing = True

        model.apply(Seek(10))
        model.apply(SyncSeek(20))
        model.apply(Start())

        assert model.state.current_track_id == 'spotify:track:b'
        assert model.state.is_playing is True


class TestBrowserAction:
    """Tests for delegation to the nested browser state."""

    def test_events_wrapped_in_order(self, model_with_playlist):
        """Each nested event becomes one BrowserEvent, order preserved."""
        model = model_with_playlist
        model.state.current_track_id = 'spotify:track:a'
        nested = MagicMock()
        nested.update_with.return_value = ['first', 'second', 'third']
        model.state.browser_state = nested

        events = model.apply(BrowserAction('nested-action'))

        nested.update_with.assert_called_once_with('nested-action')
        assert events == [BrowserEvent('first'), BrowserEvent('second'), BrowserEvent('third')]
        assert model.state.current_track_id == 'spotify:track:a'
        assert model.state.is_playing is False
        assert len(model.state.playlist) == 3

    def test_no_nested_events(self, model):
        nested = MagicMock()
        nested.update_with.return_value = []
        model.state.browser_state = nested

        assert model.apply(BrowserAction('noop')) == []

    def test_real_browser_state(self, model):
        events = model.apply(BrowserAction(SetContent(('album',))))

        assert events == [BrowserEvent(ContentSet())]
        assert model.state.browser_state.albums == ['album']
