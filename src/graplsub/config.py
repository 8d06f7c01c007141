"""Configuration management for graplsub.

All configuration is read from ``GRAPLSUB_*`` environment variables.
"""
import logging
import os
from dataclasses import dataclass, field

from .client import MAX_ALBUM_LIST_SIZE
from .models import SubsonicConfig

logger = logging.getLogger(__name__)

API_VERSION = "1.14.0"
CLIENT_NAME = "graplsub"

DEFAULT_BASE_URL = "http://localhost:4533"
DEFAULT_PLAYLIST_NAME = "graplsub_random_albums"
DEFAULT_NUM_ALBUMS = 100


@dataclass
class GraplsubConfig:
    """Configuration for one run (reads from environment)."""

    user: str
    password: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    playlist_name: str = DEFAULT_PLAYLIST_NAME
    num_albums: int = DEFAULT_NUM_ALBUMS

    @classmethod
    def from_environment(cls) -> 'GraplsubConfig':
        """Load configuration from environment variables.

        Returns:
            GraplsubConfig: Loaded configuration object

        Raises:
            EnvironmentError: If GRAPLSUB_USER or GRAPLSUB_PASS is missing
            ValueError: If GRAPLSUB_NUM_ALBUMS is not a non-negative integer
        """
        required = {
            'GRAPLSUB_USER': os.getenv('GRAPLSUB_USER'),
            'GRAPLSUB_PASS': os.getenv('GRAPLSUB_PASS'),
        }

        missing = [var for var, value in required.items() if not value]
        if missing:
            raise EnvironmentError(
                f"Required environment variables missing: {', '.join(missing)}\n"
                f"See also GRAPLSUB_BASE_URL, GRAPLSUB_NUM_ALBUMS and GRAPLSUB_PLAYLIST_NAME."
            )

        raw_num_albums = os.getenv('GRAPLSUB_NUM_ALBUMS', str(DEFAULT_NUM_ALBUMS))
        try:
            num_albums = int(raw_num_albums)
        except ValueError:
            raise ValueError(
                f"Invalid GRAPLSUB_NUM_ALBUMS: {raw_num_albums!r}. Must be an integer"
            ) from None
        if num_albums < 0:
            raise ValueError(
                f"Invalid GRAPLSUB_NUM_ALBUMS: {num_albums}. Must be >= 0"
            )

        base_url = os.getenv('GRAPLSUB_BASE_URL', DEFAULT_BASE_URL).rstrip('/')
        if not base_url.startswith(('http://', 'https://')):
            raise ValueError(
                f"Invalid GRAPLSUB_BASE_URL: {base_url!r}. Must be an HTTP/HTTPS URL"
            )

        config = cls(
            user=required['GRAPLSUB_USER'],
            password=required['GRAPLSUB_PASS'],
            base_url=base_url,
            playlist_name=os.getenv('GRAPLSUB_PLAYLIST_NAME', DEFAULT_PLAYLIST_NAME),
            num_albums=num_albums,
        )
        config.clamp_num_albums()
        return config

    def clamp_num_albums(self) -> None:
        """Cap num_albums at the largest size getAlbumList accepts."""
        if self.num_albums > MAX_ALBUM_LIST_SIZE:
            logger.warning(
                f"GRAPLSUB_NUM_ALBUMS too big ({self.num_albums}). "
                f"Setting to {MAX_ALBUM_LIST_SIZE}."
            )
            self.num_albums = MAX_ALBUM_LIST_SIZE

    def to_subsonic_config(self) -> SubsonicConfig:
        """Convert to SubsonicConfig for Subsonic client.

        Returns:
            SubsonicConfig: Configuration object for SubsonicClient
        """
        return SubsonicConfig(
            url=self.base_url,
            username=self.user,
            password=self.password,
            client_name=CLIENT_NAME,
            api_version=API_VERSION,
        )
