"""Data models for the graplsub Subsonic client."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ExpectedPayload(Enum):
    """Payload field a call expects in an "ok" envelope.

    Values are the wire names of the envelope keys.
    """

    ALBUM = "album"
    ALBUM_LIST = "albumList"
    PLAYLIST = "playlist"
    PLAYLISTS = "playlists"
    NONE = "none"


class PipelineStep(Enum):
    """Steps of the recreate-and-populate workflow, phrased for error messages."""

    LIST_PLAYLISTS = "list playlists"
    DELETE_PLAYLIST = "delete playlist"
    CREATE_PLAYLIST = "create playlist"
    RANDOM_ALBUM_LIST = "fetch random album list"
    GET_ALBUM = "fetch album"
    UPDATE_PLAYLIST = "add song to playlist"


@dataclass
class SubsonicConfig:
    """Configuration for connecting to a Subsonic-compatible server.

    Attributes:
        url: Base server URL (e.g., "http://localhost:4533")
        username: Subsonic username
        password: Subsonic password (hashed before transmission)
        client_name: Client identifier for API requests
        api_version: Subsonic API version
    """

    url: str
    username: str
    password: str = field(repr=False)
    client_name: str = "graplsub"
    api_version: str = "1.14.0"

    def __post_init__(self):
        """Validate configuration on initialization."""
        if not self.url or not self.url.startswith(("http://", "https://")):
            raise ValueError("url must be a valid HTTP/HTTPS URL")
        if not self.username:
            raise ValueError("username is required")
        if not self.password:
            raise ValueError("password is required")


@dataclass(frozen=True)
class SessionCredentials:
    """Per-run authentication values for the MD5 salt+hash scheme.

    Attributes:
        username: Username sent as ``u``
        salt: 6 lowercase hex characters sent as ``s``
        token: MD5(password + salt) sent as ``t``
    """

    username: str
    salt: str = field(repr=False)
    token: str = field(repr=False)

    def to_auth_params(self) -> Dict[str, str]:
        """Convert to authentication query parameters.

        Returns:
            Dict with u (username), t (token), s (salt)
        """
        return {"u": self.username, "t": self.token, "s": self.salt}


@dataclass
class Song:
    """A song; only its id is needed to add it to a playlist."""

    id: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Song":
        return cls(id=str(data["id"]))


@dataclass
class Album:
    """An album from getAlbum or getAlbumList.

    Attributes:
        id: Unique album identifier
        songs: Songs on the album; only present when fetched via getAlbum
    """

    id: str
    songs: Optional[List[Song]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Album":
        songs = data.get("song")
        return cls(
            id=str(data["id"]),
            songs=[Song.from_dict(s) for s in songs] if songs is not None else None,
        )


@dataclass
class Playlist:
    """A playlist; identity is ``id``, ``name`` is only used for lookup."""

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Playlist":
        return cls(id=str(data["id"]), name=str(data["name"]))


@dataclass
class AlbumList:
    """The ``albumList`` wrapper. ``albums`` is None when the server sent ``{}``."""

    albums: Optional[List[Album]] = None


@dataclass
class Playlists:
    """The ``playlists`` wrapper. ``playlists`` is None when the server sent ``{}``."""

    playlists: Optional[List[Playlist]] = None


@dataclass
class SubsonicError:
    """Error detail carried by a failed envelope."""

    code: Optional[int] = None
    message: Optional[str] = None


@dataclass
class SubsonicEnvelope:
    """The ``subsonic-response`` object returned by every call.

    Usually only one payload field is present, depending on the endpoint.
    Payload fields are left unset on envelopes whose status is not "ok".

    Attributes:
        status: "ok" on success, "failed" (or anything else) otherwise
        album: Present after getAlbum
        album_list: Present after getAlbumList
        playlist: Present after createPlaylist
        playlists: Present after getPlaylists
        error: Server error detail on failed responses
    """

    status: str
    album: Optional[Album] = None
    album_list: Optional[AlbumList] = None
    playlist: Optional[Playlist] = None
    playlists: Optional[Playlists] = None
    error: Optional[SubsonicError] = None

    @classmethod
    def from_json(cls, data: Any) -> "SubsonicEnvelope":
        """Build an envelope from the decoded JSON document.

        Args:
            data: Decoded response body, ``{"subsonic-response": {...}}``

        Returns:
            SubsonicEnvelope

        Raises:
            KeyError: If a required key is missing
            TypeError: If a value has the wrong JSON type
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        response = data["subsonic-response"]
        if not isinstance(response, dict):
            raise TypeError("'subsonic-response' is not an object")

        status = response["status"]
        if not isinstance(status, str):
            raise TypeError("'status' is not a string")

        error = None
        if isinstance(response.get("error"), dict):
            error = SubsonicError(
                code=response["error"].get("code"),
                message=response["error"].get("message"),
            )

        envelope = cls(status=status, error=error)
        if status != "ok":
            return envelope

        if response.get("album") is not None:
            envelope.album = Album.from_dict(response["album"])
        if response.get("albumList") is not None:
            albums = response["albumList"].get("album")
            envelope.album_list = AlbumList(
                albums=[Album.from_dict(a) for a in albums] if albums is not None else None
            )
        if response.get("playlist") is not None:
            envelope.playlist = Playlist.from_dict(response["playlist"])
        if response.get("playlists") is not None:
            playlists = response["playlists"].get("playlist")
            envelope.playlists = Playlists(
                playlists=[Playlist.from_dict(p) for p in playlists]
                if playlists is not None
                else None
            )
        return envelope
