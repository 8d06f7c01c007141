"""Recreate the target playlist from scratch."""

import logging
from typing import List, Optional

from .client import SubsonicClient
from .exceptions import OrchestrationError, TransportError, ValidationError
from .models import PipelineStep, Playlist

logger = logging.getLogger(__name__)


def find_playlist_by_name(playlists: List[Playlist], name: str) -> Optional[Playlist]:
    """Return the first playlist called ``name``, in server order, or None."""
    for playlist in playlists:
        if playlist.name == name:
            return playlist
    return None


def recreate_playlist(client: SubsonicClient, name: str) -> str:
    """Delete any playlist called ``name`` and create an empty one.

    Steps, each fatal on failure:
        1. List the user's playlists
        2. Find the first one called ``name``
        3. Delete it, if found
        4. Create a new playlist called ``name``

    There is no rollback. If the delete succeeds and the create fails, the
    old playlist is gone and nothing replaces it.

    Args:
        client: Connected SubsonicClient
        name: Playlist name to recreate

    Returns:
        ID of the newly created playlist

    Raises:
        OrchestrationError: Wrapping the first transport or validation error
    """
    try:
        playlists = client.get_playlists()
    except (TransportError, ValidationError) as e:
        raise OrchestrationError(PipelineStep.LIST_PLAYLISTS, e) from e

    existing = find_playlist_by_name(playlists, name)
    if existing is not None:
        logger.info(f"Deleting existing playlist '{name}' ({existing.id})")
        try:
            client.delete_playlist(existing.id)
        except (TransportError, ValidationError) as e:
            raise OrchestrationError(PipelineStep.DELETE_PLAYLIST, e, existing.id) from e
    else:
        logger.debug(f"No existing playlist named '{name}'")

    try:
        created = client.create_playlist(name)
    except (TransportError, ValidationError) as e:
        raise OrchestrationError(PipelineStep.CREATE_PLAYLIST, e, name) from e

    logger.info(f"Created playlist '{name}' ({created.id})")
    return created.id
