"""Subsonic API authentication.

Subsonic token authentication works as follows:
    1. Generate 3 random bytes and encode them as 6 hex characters (the salt)
    2. Append the salt to the password
    3. MD5 the result and send it as the token

Example:
    >>> from graplsub.auth import derive_credentials, create_auth_params
    >>>
    >>> credentials = derive_credentials("admin", "sesame", salt="c19b2d")
    >>> credentials.token
    '26719a1196d2a940705a59634eb18eab'
    >>> create_auth_params(credentials, "1.14.0", "graplsub")
    {'u': 'admin', 't': '26719a...', 's': 'c19b2d', 'f': 'json', 'v': '1.14.0', 'c': 'graplsub'}

Security Notes:
    - The plaintext password is never sent over the network
    - The salt only has to differ between runs so a captured token cannot be
      replayed on the next run; it does not need to be secret
    - MD5 is used because the Subsonic API requires it, not for security
"""

import hashlib
import secrets
from typing import Dict, Optional

from .models import SessionCredentials

SALT_BYTES = 3


def generate_salt() -> str:
    """Return a fresh salt of 6 lowercase hex characters."""
    return secrets.token_hex(SALT_BYTES)


def derive_token(password: str, salt: str) -> str:
    """Compute the Subsonic token MD5(password + salt) as lowercase hex."""
    return hashlib.md5(f"{password}{salt}".encode("utf-8")).hexdigest()


def derive_credentials(
    username: str, password: str, salt: Optional[str] = None
) -> SessionCredentials:
    """Derive the per-run credentials sent with every request.

    Args:
        username: Subsonic username
        password: Plaintext password
        salt: Optional pre-generated salt. If None, a new one is generated.
              Primarily for testing - production should use a generated salt.

    Returns:
        SessionCredentials with username, salt and token

    Example:
        >>> creds = derive_credentials("admin", "sesame")
        >>> len(creds.salt), len(creds.token)
        (6, 32)
    """
    if salt is None:
        salt = generate_salt()

    return SessionCredentials(
        username=username,
        salt=salt,
        token=derive_token(password, salt),
    )


def verify_token(password: str, token: str, salt: str) -> bool:
    """Check that a token matches MD5(password + salt).

    The server does this for real; the client only uses it in tests.

    Example:
        >>> creds = derive_credentials("admin", "sesame", salt="c19b2d")
        >>> verify_token("sesame", creds.token, creds.salt)
        True
        >>> verify_token("sesame", "invalid", creds.salt)
        False
    """
    return secrets.compare_digest(token, derive_token(password, salt))


def create_auth_params(
    credentials: SessionCredentials,
    api_version: str,
    client_name: str,
    response_format: str = "json",
) -> Dict[str, str]:
    """Create the common query parameters sent on every request.

    The order is always u, t, s, f, v, c so that generated URLs are stable.

    Args:
        credentials: Credentials from derive_credentials()
        api_version: Subsonic API version (e.g. "1.14.0")
        client_name: Client application identifier
        response_format: Response format, "json" unless testing

    Returns:
        Dictionary of query parameters
    """
    return {
        **credentials.to_auth_params(),
        "f": response_format,
        "v": api_version,
        "c": client_name,
    }
