"""Response contract checks for Subsonic envelopes."""

import logging

from .exceptions import (
    MissingPayloadError,
    ResponseNotOkError,
    SubsonicAuthenticationError,
    SubsonicAuthorizationError,
    SubsonicNotFoundError,
    SubsonicParameterError,
    SubsonicTrialError,
    SubsonicVersionError,
    TokenAuthenticationNotSupportedError,
)
from .models import ExpectedPayload, SubsonicEnvelope

logger = logging.getLogger(__name__)

# Subsonic error codes mapped to specific exception types
ERROR_CODE_EXCEPTIONS = {
    10: SubsonicParameterError,
    20: SubsonicVersionError,
    30: SubsonicVersionError,
    40: SubsonicAuthenticationError,
    41: SubsonicAuthenticationError,
    42: TokenAuthenticationNotSupportedError,
    50: SubsonicAuthorizationError,
    60: SubsonicTrialError,
    70: SubsonicNotFoundError,
}


def check_generic_response(envelope: SubsonicEnvelope, raw_body: str) -> None:
    """Checks common to every API response.

    Raises:
        ResponseNotOkError: (or a code-specific subclass) if status is not "ok"
    """
    if envelope.status == "ok":
        return

    code = envelope.error.code if envelope.error else None
    message = envelope.error.message if envelope.error else None
    logger.debug(f"Subsonic API error {code}: {message}")

    exc_class = ERROR_CODE_EXCEPTIONS.get(code, ResponseNotOkError)
    raise exc_class(raw_body, code, message)


def validate_response(
    envelope: SubsonicEnvelope, raw_body: str, expected: ExpectedPayload
) -> None:
    """Assert that an envelope satisfies the contract of the call that produced it.

    Only the presence of the payload wrapper is checked. An empty sequence
    inside a present wrapper is valid; looking at the sequence contents is
    left to the caller.

    Args:
        envelope: Decoded response envelope
        raw_body: Response body, quoted in error messages
        expected: Payload the call expects, or ExpectedPayload.NONE for calls
                  that only return the generic envelope (delete, update)

    Raises:
        ResponseNotOkError: If the status is not "ok"
        MissingPayloadError: If the expected payload is absent
    """
    check_generic_response(envelope, raw_body)

    if expected is ExpectedPayload.NONE:
        return

    present = {
        ExpectedPayload.ALBUM: envelope.album,
        ExpectedPayload.ALBUM_LIST: envelope.album_list,
        ExpectedPayload.PLAYLIST: envelope.playlist,
        ExpectedPayload.PLAYLISTS: envelope.playlists,
    }[expected]

    if present is None:
        raise MissingPayloadError(expected.value, raw_body)
