"""Exception classes for the graplsub Subsonic client."""

from typing import Optional

from .models import PipelineStep


class GraplsubError(Exception):
    """Base exception for all graplsub errors."""

    pass


# ---------------------------------------------------------------------------
# Transport errors: the request did not yield a usable JSON envelope
# ---------------------------------------------------------------------------


class TransportError(GraplsubError):
    """Base class for failures while issuing a request or decoding its body."""

    pass


class NetworkError(TransportError):
    """DNS, connection, or timeout failure.

    Attributes:
        detail: Description of the underlying httpx error
    """

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class ResourceNotFoundError(TransportError):
    """HTTP 404 from the server.

    The URL never carries a query string, since that holds the user, token
    and salt.

    Attributes:
        url: Requested URL without its query string
    """

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Resource not found: {url}")


class UnexpectedStatusError(TransportError):
    """Any HTTP status other than 200 or 404.

    Attributes:
        status_code: HTTP status returned by the server
        url: Requested URL without its query string
    """

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error {status_code} for {url}")


class MalformedResponseError(TransportError):
    """Response body was not the expected JSON envelope.

    Attributes:
        raw_body: Response body as received
        detail: Parser error description
    """

    def __init__(self, raw_body: str, detail: str):
        self.raw_body = raw_body
        self.detail = detail
        super().__init__(f"Response parsing error: {detail}: {raw_body}")


# ---------------------------------------------------------------------------
# Validation errors: the envelope decoded but breaks the call's contract
# ---------------------------------------------------------------------------


class ValidationError(GraplsubError):
    """Base class for envelopes that fail a call's response contract."""

    pass


class ResponseNotOkError(ValidationError):
    """Envelope status was anything other than "ok".

    Attributes:
        raw_body: Response body as received
        code: Subsonic error code, when the server supplied one
        message: Subsonic error message, when the server supplied one
    """

    def __init__(
        self, raw_body: str, code: Optional[int] = None, message: Optional[str] = None
    ):
        self.raw_body = raw_body
        self.code = code
        self.message = message
        if code is not None:
            text = f"Subsonic response did not have 'ok' status (error {code}: {message}): {raw_body}"
        else:
            text = f"Subsonic response did not have 'ok' status: {raw_body}"
        super().__init__(text)


class SubsonicParameterError(ResponseNotOkError):
    """Required parameter missing (error code 10)."""

    pass


class SubsonicVersionError(ResponseNotOkError):
    """Client or server API version incompatible (error codes 20, 30)."""

    pass


class SubsonicAuthenticationError(ResponseNotOkError):
    """Wrong username or password (error codes 40, 41)."""

    pass


class TokenAuthenticationNotSupportedError(ResponseNotOkError):
    """Server does not accept salted token authentication (error code 42)."""

    pass


class SubsonicAuthorizationError(ResponseNotOkError):
    """User is not allowed to perform the action (error code 50)."""

    pass


class SubsonicTrialError(ResponseNotOkError):
    """Server trial period has ended (error code 60)."""

    pass


class SubsonicNotFoundError(ResponseNotOkError):
    """Requested album, playlist or song does not exist (error code 70)."""

    pass


class MissingPayloadError(ValidationError):
    """Envelope was "ok" but lacked the payload the call expects.

    Attributes:
        kind: Name of the missing payload field (e.g. "albumList")
        raw_body: Response body as received
    """

    def __init__(self, kind: str, raw_body: str):
        self.kind = kind
        self.raw_body = raw_body
        super().__init__(f"Subsonic response was missing '{kind}': {raw_body}")


# ---------------------------------------------------------------------------
# Orchestration errors
# ---------------------------------------------------------------------------


class OrchestrationError(GraplsubError):
    """A pipeline step failed; wraps the transport or validation error.

    Attributes:
        step: PipelineStep that failed
        cause: The TransportError or ValidationError raised by the step
        item_id: Album, playlist or song id the step was working on, if any
    """

    def __init__(
        self, step: PipelineStep, cause: GraplsubError, item_id: Optional[str] = None
    ):
        self.step = step
        self.cause = cause
        self.item_id = item_id
        where = f" ({item_id})" if item_id is not None else ""
        super().__init__(f"Failed to {step.value}{where}: {cause}")
