from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional

from .library import LibraryError
from .models import Item, Location, Playlist
from .plex_client import DEFAULT_TIMEOUT, PlexApiError, PlexClient

LOGGER = logging.getLogger(__name__)

APPLICATION_NAME = "Plex Media Server"


def _part_file(entry: Dict[str, Any]) -> Optional[str]:
    for media in entry.get("Media") or []:
        for part in media.get("Part") or []:
            path = part.get("file")
            if path:
                return str(path)
    return None


def item_from_metadata(entry: Dict[str, Any]) -> Item:
    """Build an item from a Plex playlist entry; the first media part gives the location."""
    path = _part_file(entry)
    return Item(
        title=str(entry.get("title", "")),
        kind=entry.get("type"),
        location=Location.from_path(path) if path else None,
    )


class PlexMusicLibrary:
    """Audio playlists of a Plex Media Server."""

    application_name = APPLICATION_NAME

    def __init__(self, client: PlexClient, *, version: str) -> None:
        self.client = client
        self._version = version

    @classmethod
    def open(cls, base_url: str, token: str, *, timeout: float = DEFAULT_TIMEOUT) -> "PlexMusicLibrary":
        try:
            client = PlexClient(base_url, token, timeout=timeout)
            identity = client.identity()
        except PlexApiError as exc:
            raise LibraryError(f"Unable to open Plex library: {exc}") from exc
        LOGGER.debug("Connected to Plex %s (%s)", identity.version, identity.machine_identifier)
        return cls(client, version=identity.version)

    @property
    def api_version(self) -> str:
        return self._version

    @property
    def application_version(self) -> str:
        return self._version

    def playlists(self) -> Iterator[Playlist]:
        try:
            remote = self.client.list_playlists()
        except PlexApiError as exc:
            raise LibraryError(f"Unable to list Plex playlists: {exc}") from exc
        for playlist in remote:
            LOGGER.debug(
                "Plex playlist %s '%s': type=%s smart=%s items=%d",
                playlist.rating_key,
                playlist.title,
                playlist.playlist_type,
                playlist.smart,
                playlist.leaf_count,
            )
            yield Playlist(name=playlist.title, key=playlist.rating_key)

    def playlist_items(self, playlist: Playlist) -> Iterator[Item]:
        try:
            entries = self.client.list_playlist_items(playlist.key)
        except PlexApiError as exc:
            raise LibraryError(f"Unable to list items of Plex playlist '{playlist.name}': {exc}") from exc
        for entry in entries:
            yield item_from_metadata(entry)
