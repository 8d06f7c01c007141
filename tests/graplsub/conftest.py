"""Shared fixtures for graplsub tests.

All HTTP calls are mocked - no real server requests are made.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import httpx
import pytest
from pytest_mock import MockerFixture

from src.graplsub.auth import derive_credentials
from src.graplsub.client import SubsonicClient
from src.graplsub.models import SessionCredentials, SubsonicConfig

BASE_URL = "http://music.example.com"


@pytest.fixture
def fixtures() -> Dict[str, Any]:
    """Load Subsonic API response fixtures from JSON file.

    Returns:
        Dictionary containing all fixture responses
    """
    fixtures_path = Path(__file__).parent / "fixtures" / "subsonic_responses.json"
    with open(fixtures_path, "r") as f:
        return json.load(f)


@pytest.fixture
def subsonic_config() -> SubsonicConfig:
    """Create test Subsonic configuration."""
    return SubsonicConfig(
        url=BASE_URL,
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def credentials() -> SessionCredentials:
    """Credentials with a fixed salt so URLs are predictable."""
    return derive_credentials("testuser", "testpass", salt="a1b2c3")


@pytest.fixture
def client(
    mocker: MockerFixture, subsonic_config: SubsonicConfig, credentials: SessionCredentials
) -> SubsonicClient:
    """Create a SubsonicClient with httpx.Client mocked out.

    Tests replace ``client.client.get`` with their own MagicMock.
    """
    mock_client = mocker.MagicMock(spec=httpx.Client)
    mocker.patch("httpx.Client", return_value=mock_client)

    return SubsonicClient(subsonic_config, credentials)


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Factory for httpx.Response objects tied to a request URL."""

    def _make(
        status_code: int = 200,
        json_data: Optional[Dict[str, Any]] = None,
        text: Optional[str] = None,
        endpoint: str = "ping",
    ) -> httpx.Response:
        request = httpx.Request(
            "GET",
            f"{BASE_URL}/rest/{endpoint}?u=testuser&t=deadbeef&s=a1b2c3&f=json&v=1.14.0&c=graplsub",
        )
        if json_data is not None:
            return httpx.Response(status_code=status_code, json=json_data, request=request)
        return httpx.Response(status_code=status_code, text=text or "", request=request)

    return _make
