"""
graplsub entry point.

Rebuilds a Subsonic playlist from every song on a random sample of albums.

Environment Variables:
- GRAPLSUB_USER: Subsonic username (required)
- GRAPLSUB_PASS: Subsonic password (required)
- GRAPLSUB_BASE_URL: Server URL (default http://localhost:4533)
- GRAPLSUB_PLAYLIST_NAME: Playlist to recreate (default graplsub_random_albums)
- GRAPLSUB_NUM_ALBUMS: Albums to sample (default 100, max 500)
- GRAPLSUB_LOG_LEVEL: Log level (default INFO)
- GRAPLSUB_LOG_FILE: Optional rotating log file

A .env file in the working directory is read too; real environment
variables take precedence.

Usage:
$ GRAPLSUB_USER=me GRAPLSUB_PASS=secret graplsub
$ python -m graplsub
"""

import logging
import signal
import sys

from dotenv import load_dotenv

from . import __version__
from .album import populate_playlist
from .auth import derive_credentials
from .client import SubsonicClient
from .config import GraplsubConfig
from .exceptions import GraplsubError
from .logger import setup_logging
from .playlist import recreate_playlist

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def handle_exception(exc_type, exc_value, exc_traceback):
    """Handle uncaught exceptions"""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))


def handle_signal(signum, frame):
    """Handle termination signals"""
    logger.critical(f"Received signal {signum}. Exiting.")
    sys.exit(EXIT_FAILURE)


def run(config: GraplsubConfig) -> int:
    """
    Recreate the playlist and fill it from random albums.

    Args:
        config: Loaded configuration

    Returns:
        Process exit code: 0 on success, 1 on the first fatal error
    """
    subsonic_config = config.to_subsonic_config()
    credentials = derive_credentials(subsonic_config.username, subsonic_config.password)

    with SubsonicClient(subsonic_config, credentials) as client:
        try:
            playlist_id = recreate_playlist(client, config.playlist_name)
            added = populate_playlist(client, playlist_id, config.num_albums)
        except GraplsubError as e:
            logger.error(str(e))
            return EXIT_FAILURE

    logger.info(f"Playlist '{config.playlist_name}' rebuilt with {added} songs")
    return EXIT_SUCCESS


def main() -> None:
    """Console script entry point."""
    load_dotenv()
    setup_logging()

    sys.excepthook = handle_exception
    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, handle_signal)

    logger.debug(f"graplsub version {__version__}")

    try:
        config = GraplsubConfig.from_environment()
    except (EnvironmentError, ValueError) as e:
        logger.error(str(e))
        sys.exit(EXIT_FAILURE)

    sys.exit(run(config))


if __name__ == "__main__":
    main()
