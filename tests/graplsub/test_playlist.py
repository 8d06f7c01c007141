"""Tests for recreating the target playlist."""

import httpx
import pytest
from pytest_mock import MockerFixture

from src.graplsub.client import SubsonicClient
from src.graplsub.exceptions import (
    GraplsubError,
    MalformedResponseError,
    MissingPayloadError,
    NetworkError,
    OrchestrationError,
    ResponseNotOkError,
)
from src.graplsub.models import PipelineStep, Playlist
from src.graplsub.playlist import find_playlist_by_name, recreate_playlist

NAME = "graplsub_random_albums"


@pytest.fixture
def mock_client(mocker: MockerFixture):
    """A SubsonicClient stand-in whose endpoint methods are mocks."""
    client = mocker.MagicMock(spec=SubsonicClient)
    client.create_playlist.return_value = Playlist(id="99", name=NAME)
    return client


class TestFindPlaylistByName:
    def test_first_match_wins(self):
        playlists = [
            Playlist(id="7", name="Road trip"),
            Playlist(id="42", name=NAME),
            Playlist(id="43", name=NAME),
        ]

        assert find_playlist_by_name(playlists, NAME).id == "42"

    def test_no_match(self):
        assert find_playlist_by_name([Playlist(id="7", name="Road trip")], NAME) is None

    def test_empty_list(self):
        assert find_playlist_by_name([], NAME) is None

    def test_match_is_exact(self):
        playlists = [Playlist(id="1", name=NAME.upper()), Playlist(id="2", name=f" {NAME}")]

        assert find_playlist_by_name(playlists, NAME) is None


class TestRecreatePlaylist:
    def test_existing_playlist_deleted_before_create(self, mock_client):
        mock_client.get_playlists.return_value = [Playlist(id="42", name=NAME)]

        playlist_id = recreate_playlist(mock_client, NAME)

        assert playlist_id == "99"
        assert [c[0] for c in mock_client.mock_calls] == [
            "get_playlists",
            "delete_playlist",
            "create_playlist",
        ]
        mock_client.delete_playlist.assert_called_once_with("42")
        mock_client.create_playlist.assert_called_once_with(NAME)

    def test_no_match_creates_without_delete(self, mock_client):
        mock_client.get_playlists.return_value = [Playlist(id="7", name="Road trip")]

        playlist_id = recreate_playlist(mock_client, NAME)

        assert playlist_id == "99"
        mock_client.delete_playlist.assert_not_called()
        mock_client.create_playlist.assert_called_once_with(NAME)

    def test_empty_playlist_list_creates_without_delete(self, mock_client):
        mock_client.get_playlists.return_value = []

        recreate_playlist(mock_client, NAME)

        mock_client.delete_playlist.assert_not_called()

    def test_only_first_duplicate_deleted(self, mock_client):
        mock_client.get_playlists.return_value = [
            Playlist(id="42", name=NAME),
            Playlist(id="43", name=NAME),
        ]

        recreate_playlist(mock_client, NAME)

        mock_client.delete_playlist.assert_called_once_with("42")

    def test_list_failure_is_fatal(self, mock_client):
        cause = NetworkError("getPlaylists: Connection refused")
        mock_client.get_playlists.side_effect = cause

        with pytest.raises(OrchestrationError) as exc_info:
            recreate_playlist(mock_client, NAME)

        assert exc_info.value.step is PipelineStep.LIST_PLAYLISTS
        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        mock_client.delete_playlist.assert_not_called()
        mock_client.create_playlist.assert_not_called()

    def test_delete_failure_is_fatal(self, mock_client):
        mock_client.get_playlists.return_value = [Playlist(id="42", name=NAME)]
        mock_client.delete_playlist.side_effect = ResponseNotOkError("{}", 50, "nope")

        with pytest.raises(OrchestrationError) as exc_info:
            recreate_playlist(mock_client, NAME)

        assert exc_info.value.step is PipelineStep.DELETE_PLAYLIST
        assert exc_info.value.item_id == "42"
        mock_client.create_playlist.assert_not_called()

    def test_create_failure_after_delete_is_not_rolled_back(self, mock_client):
        mock_client.get_playlists.return_value = [Playlist(id="42", name=NAME)]
        mock_client.create_playlist.side_effect = MissingPayloadError("playlist", "{}")

        with pytest.raises(OrchestrationError) as exc_info:
            recreate_playlist(mock_client, NAME)

        assert exc_info.value.step is PipelineStep.CREATE_PLAYLIST
        mock_client.delete_playlist.assert_called_once_with("42")
        assert mock_client.create_playlist.call_count == 1

    def test_error_message_names_step(self, mock_client):
        mock_client.get_playlists.side_effect = NetworkError("getPlaylists: refused")

        with pytest.raises(OrchestrationError, match="Failed to list playlists: Network error"):
            recreate_playlist(mock_client, NAME)


class TestRecreatePlaylistOverHttp:
    """The same sequence driven through SubsonicClient with mocked HTTP."""

    def test_delete_then_create(self, client, fixtures, make_response, mocker):
        client.client.get = mocker.MagicMock(
            side_effect=[
                make_response(200, fixtures["playlists_with_match"]),
                make_response(200, fixtures["empty_ok"]),
                make_response(200, fixtures["playlist_created"]),
            ]
        )

        assert recreate_playlist(client, NAME) == "99"

        calls = client.client.get.call_args_list
        assert [c.args[0].rsplit("/", 1)[1] for c in calls] == [
            "getPlaylists",
            "deletePlaylist",
            "createPlaylist",
        ]
        assert calls[1].kwargs["params"]["id"] == "42"
        assert calls[2].kwargs["params"]["name"] == NAME

    def test_not_found_on_create(self, client, fixtures, make_response, mocker):
        client.client.get = mocker.MagicMock(
            side_effect=[
                make_response(200, fixtures["playlists_empty"]),
                make_response(404, text="", endpoint="createPlaylist"),
            ]
        )

        with pytest.raises(OrchestrationError) as exc_info:
            recreate_playlist(client, NAME)

        assert exc_info.value.step is PipelineStep.CREATE_PLAYLIST
        assert "t=" not in str(exc_info.value)

    def test_timeout_on_list(self, client, mocker):
        client.client.get = mocker.MagicMock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(OrchestrationError) as exc_info:
            recreate_playlist(client, NAME)

        assert isinstance(exc_info.value.cause, NetworkError)

    def test_undecodable_body_on_list(self, client, mocker):
        client.client.get = mocker.MagicMock(side_effect=httpx.DecodingError("bad gzip"))

        with pytest.raises(GraplsubError) as exc_info:
            recreate_playlist(client, NAME)

        assert isinstance(exc_info.value, OrchestrationError)
        assert exc_info.value.step is PipelineStep.LIST_PLAYLISTS
        assert isinstance(exc_info.value.cause, MalformedResponseError)
