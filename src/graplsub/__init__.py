"""Rebuild a Subsonic playlist from a random sample of albums."""

__version__ = "0.1.0"

from .album import populate_playlist
from .auth import create_auth_params, derive_credentials, verify_token
from .client import SubsonicClient
from .config import GraplsubConfig
from .exceptions import (
    GraplsubError,
    MalformedResponseError,
    MissingPayloadError,
    NetworkError,
    OrchestrationError,
    ResourceNotFoundError,
    ResponseNotOkError,
    SubsonicAuthenticationError,
    SubsonicAuthorizationError,
    SubsonicNotFoundError,
    SubsonicParameterError,
    SubsonicTrialError,
    SubsonicVersionError,
    TokenAuthenticationNotSupportedError,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
)
from .models import (
    Album,
    ExpectedPayload,
    PipelineStep,
    Playlist,
    SessionCredentials,
    Song,
    SubsonicConfig,
    SubsonicEnvelope,
)
from .playlist import recreate_playlist
from .validation import validate_response

__all__ = [
    # Client
    "SubsonicClient",
    # Workflow
    "recreate_playlist",
    "populate_playlist",
    "validate_response",
    # Configuration
    "GraplsubConfig",
    "SubsonicConfig",
    # Models
    "SessionCredentials",
    "SubsonicEnvelope",
    "ExpectedPayload",
    "PipelineStep",
    "Playlist",
    "Album",
    "Song",
    # Authentication
    "derive_credentials",
    "verify_token",
    "create_auth_params",
    # Exceptions
    "GraplsubError",
    "TransportError",
    "NetworkError",
    "ResourceNotFoundError",
    "UnexpectedStatusError",
    "MalformedResponseError",
    "ValidationError",
    "ResponseNotOkError",
    "MissingPayloadError",
    "OrchestrationError",
    "SubsonicParameterError",
    "SubsonicVersionError",
    "SubsonicAuthenticationError",
    "TokenAuthenticationNotSupportedError",
    "SubsonicAuthorizationError",
    "SubsonicTrialError",
    "SubsonicNotFoundError",
]
