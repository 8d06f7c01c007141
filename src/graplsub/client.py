"""HTTP client for the Subsonic REST API."""

import logging
from typing import Dict, List, Optional, Tuple

import httpx

from . import __version__
from .auth import create_auth_params, derive_credentials
from .exceptions import (
    MalformedResponseError,
    NetworkError,
    ResourceNotFoundError,
    UnexpectedStatusError,
)
from .models import (
    Album,
    ExpectedPayload,
    Playlist,
    SessionCredentials,
    SubsonicConfig,
    SubsonicEnvelope,
)
from .validation import validate_response

logger = logging.getLogger(__name__)

# Client-wide settings, applied once when the client is built
CONNECT_TIMEOUT = 5.0
TOTAL_TIMEOUT = 30.0
POOL_IDLE_TIMEOUT = 90.0
MAX_IDLE_CONNECTIONS = 10

# Applied to every individual request on top of the client settings
REQUEST_TIMEOUT = 5.0

# getAlbumList refuses sizes above this
MAX_ALBUM_LIST_SIZE = 500


def strip_query(url) -> str:
    """Return ``url`` without its query string.

    The query string carries the username, token and salt, so it must be
    removed before a URL appears in an error message or log line.
    """
    return str(url).split("?", 1)[0]


class SubsonicClient:
    """Synchronous HTTP client for the Subsonic API.

    Every call is a single GET with token authentication in the query string.
    There are no retries: the first outcome of each request is final.

    Attributes:
        config: SubsonicConfig with server connection details
        credentials: Per-run SessionCredentials
        client: httpx.Client for HTTP requests

    Example:
        >>> config = SubsonicConfig(
        ...     url="http://localhost:4533",
        ...     username="john",
        ...     password="secret"
        ... )
        >>> with SubsonicClient(config) as client:
        ...     playlists = client.get_playlists()
    """

    def __init__(
        self, config: SubsonicConfig, credentials: Optional[SessionCredentials] = None
    ):
        """Initialize Subsonic API client.

        Args:
            config: SubsonicConfig with server URL and credentials
            credentials: Pre-derived credentials. Derived from config if None.
        """
        self.config = config
        self.credentials = credentials or derive_credentials(
            config.username, config.password
        )
        self._base_url = config.url.rstrip("/")

        transport = httpx.HTTPTransport(
            limits=httpx.Limits(
                max_keepalive_connections=MAX_IDLE_CONNECTIONS,
                keepalive_expiry=POOL_IDLE_TIMEOUT,
            ),
            retries=0,
        )

        self.client = httpx.Client(
            timeout=httpx.Timeout(TOTAL_TIMEOUT, connect=CONNECT_TIMEOUT),
            transport=transport,
            headers={"User-Agent": f"graplsub/{__version__}"},
        )

        logger.info(f"Initialized Subsonic client for {self._base_url}")

    def _build_url(self, endpoint: str) -> str:
        """Build full URL for API endpoint.

        Args:
            endpoint: API endpoint name (e.g., "getAlbum")

        Returns:
            Full URL with /rest/ prefix
        """
        return f"{self._base_url}/rest/{endpoint}"

    def _build_params(self, **kwargs) -> Dict[str, str]:
        """Build query parameters: authentication first, then the call's own.

        Args:
            **kwargs: Endpoint-specific parameters, in the order they are sent

        Returns:
            Complete parameter dictionary for API request
        """
        params = create_auth_params(
            self.credentials,
            api_version=self.config.api_version,
            client_name=self.config.client_name,
        )

        for key, value in kwargs.items():
            if value is not None:
                params[key] = str(value)

        return params

    def _handle_response(self, response: httpx.Response) -> Tuple[SubsonicEnvelope, str]:
        """Classify the HTTP outcome and decode the envelope.

        Args:
            response: HTTP response from Subsonic server

        Returns:
            Tuple of decoded envelope and raw response body

        Raises:
            ResourceNotFoundError: For HTTP 404
            UnexpectedStatusError: For any status other than 200 and 404
            MalformedResponseError: If the body is not a Subsonic JSON envelope
        """
        if response.status_code == 404:
            raise ResourceNotFoundError(strip_query(response.request.url))

        if response.status_code != 200:
            raise UnexpectedStatusError(
                response.status_code, strip_query(response.request.url)
            )

        raw_body = response.text
        try:
            envelope = SubsonicEnvelope.from_json(response.json())
        except ValueError as e:
            raise MalformedResponseError(raw_body, f"invalid JSON ({e})") from e
        except KeyError as e:
            raise MalformedResponseError(raw_body, f"missing field {e}") from e
        except (TypeError, AttributeError) as e:
            raise MalformedResponseError(raw_body, f"unexpected structure ({e})") from e

        return envelope, raw_body

    def request(self, endpoint: str, **params) -> Tuple[SubsonicEnvelope, str]:
        """Issue one authenticated GET request.

        Args:
            endpoint: API endpoint name (e.g., "getPlaylists")
            **params: Endpoint-specific query parameters

        Returns:
            Tuple of decoded envelope and raw response body

        Raises:
            NetworkError: For DNS, connection, timeout and other request failures
            ResourceNotFoundError: For HTTP 404
            UnexpectedStatusError: For other non-200 statuses
            MalformedResponseError: If the body cannot be decompressed or decoded
        """
        url = self._build_url(endpoint)
        query = self._build_params(**params)

        logger.debug(f"Requesting {endpoint} {params}")
        try:
            response = self.client.get(url, params=query, timeout=REQUEST_TIMEOUT)
        except httpx.DecodingError as e:
            raise MalformedResponseError("", f"{endpoint}: undecodable body ({e})") from e
        except httpx.RequestError as e:
            raise NetworkError(f"{endpoint}: {str(e) or e.__class__.__name__}") from e

        return self._handle_response(response)

    def get_playlists(self) -> List[Playlist]:
        """List the user's playlists (getPlaylists endpoint).

        Returns:
            Playlists in the order the server returned them (possibly empty)
        """
        envelope, raw_body = self.request("getPlaylists")
        validate_response(envelope, raw_body, ExpectedPayload.PLAYLISTS)

        playlists = envelope.playlists.playlists or []
        logger.debug(f"Retrieved {len(playlists)} playlists")
        return playlists

    def delete_playlist(self, playlist_id: str) -> None:
        """Delete a playlist (deletePlaylist endpoint)."""
        envelope, raw_body = self.request("deletePlaylist", id=playlist_id)
        validate_response(envelope, raw_body, ExpectedPayload.NONE)

    def create_playlist(self, name: str) -> Playlist:
        """Create an empty playlist (createPlaylist endpoint).

        Args:
            name: Playlist name

        Returns:
            The created Playlist
        """
        envelope, raw_body = self.request("createPlaylist", name=name)
        validate_response(envelope, raw_body, ExpectedPayload.PLAYLIST)
        return envelope.playlist

    def get_random_album_list(self, size: int) -> List[Album]:
        """Fetch a random sample of albums (getAlbumList endpoint).

        Args:
            size: Number of albums wanted; clamped to 500

        Returns:
            Albums without song lists (possibly empty)
        """
        envelope, raw_body = self.request(
            "getAlbumList", type="random", size=min(size, MAX_ALBUM_LIST_SIZE)
        )
        validate_response(envelope, raw_body, ExpectedPayload.ALBUM_LIST)

        albums = envelope.album_list.albums or []
        logger.info(f"Retrieved {len(albums)} random albums")
        return albums

    def get_album(self, album_id: str) -> Album:
        """Fetch one album including its songs (getAlbum endpoint).

        Args:
            album_id: Album ID from getAlbumList

        Returns:
            Album; ``songs`` is None if the server listed none
        """
        envelope, raw_body = self.request("getAlbum", id=album_id)
        validate_response(envelope, raw_body, ExpectedPayload.ALBUM)
        return envelope.album

    def update_playlist(self, playlist_id: str, song_id: str) -> None:
        """Append one song to a playlist (updatePlaylist endpoint)."""
        envelope, raw_body = self.request(
            "updatePlaylist", playlistId=playlist_id, songIdToAdd=song_id
        )
        validate_response(envelope, raw_body, ExpectedPayload.NONE)

    def close(self):
        """Close HTTP client and release pooled connections."""
        self.client.close()
        logger.debug("Closed Subsonic client")

    def __enter__(self):
        """Context manager entry.

        Example:
            >>> with SubsonicClient(config) as client:
            ...     client.get_playlists()
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - closes the HTTP client."""
        self.close()
