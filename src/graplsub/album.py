"""Fill a playlist with every song from a random sample of albums."""

import logging

from .client import SubsonicClient
from .exceptions import OrchestrationError, TransportError, ValidationError
from .models import PipelineStep

logger = logging.getLogger(__name__)


def populate_playlist(client: SubsonicClient, playlist_id: str, sample_size: int) -> int:
    """Append the songs of ``sample_size`` random albums to a playlist.

    Albums and songs are processed one at a time, in server order. The first
    failure anywhere aborts the whole run: later albums are never fetched and
    songs already added stay in the playlist.

    Args:
        client: Connected SubsonicClient
        playlist_id: ID returned by recreate_playlist()
        sample_size: Number of random albums to request (clamped to 500)

    Returns:
        Number of songs appended

    Raises:
        OrchestrationError: Wrapping the first transport or validation error
    """
    try:
        albums = client.get_random_album_list(sample_size)
    except (TransportError, ValidationError) as e:
        raise OrchestrationError(PipelineStep.RANDOM_ALBUM_LIST, e) from e

    added = 0
    for index, listed in enumerate(albums, start=1):
        try:
            album = client.get_album(listed.id)
        except (TransportError, ValidationError) as e:
            raise OrchestrationError(PipelineStep.GET_ALBUM, e, listed.id) from e

        songs = album.songs or []
        logger.debug(f"Album {index}/{len(albums)} ({album.id}): {len(songs)} songs")

        for song in songs:
            try:
                client.update_playlist(playlist_id, song.id)
            except (TransportError, ValidationError) as e:
                raise OrchestrationError(PipelineStep.UPDATE_PLAYLIST, e, song.id) from e
            added += 1

    logger.info(f"Added {added} songs from {len(albums)} albums to playlist {playlist_id}")
    return added
