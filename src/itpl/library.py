"""Read-only media library interface and source factory.

The formatter only needs two things from a library: the playlists in
enumeration order, and the items of one playlist. Every source (the iTunes
XML export, a Plex server, or the in-memory ``StaticLibrary`` used by tests)
implements ``MediaLibrary``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, Protocol, Sequence

from .models import Item, Playlist

if TYPE_CHECKING:
    from .config import LibrarySettings

LOGGER = logging.getLogger(__name__)


class LibraryError(RuntimeError):
    """Raised when a media library cannot be opened or read."""


class MediaLibrary(Protocol):
    application_name: str

    @property
    def api_version(self) -> str: ...

    @property
    def application_version(self) -> str: ...

    def playlists(self) -> Iterable[Playlist]: ...

    def playlist_items(self, playlist: Playlist) -> Iterable[Item]: ...


class StaticLibrary:
    """Library backed by playlists held in memory."""

    def __init__(
        self,
        playlists: Sequence[Playlist] = (),
        *,
        api_version: str = "1.0",
        application_version: str = "static",
        application_name: str = "Library",
    ) -> None:
        self.application_name = application_name
        self._playlists = tuple(playlists)
        self._api_version = api_version
        self._application_version = application_version

    @property
    def api_version(self) -> str:
        return self._api_version

    @property
    def application_version(self) -> str:
        return self._application_version

    def playlists(self) -> Iterator[Playlist]:
        return iter(self._playlists)

    def playlist_items(self, playlist: Playlist) -> Iterator[Item]:
        return iter(playlist.items)


def open_library(settings: "LibrarySettings") -> MediaLibrary:
    """Open the library source selected by ``settings``.

    Raises:
        LibraryError: If the source cannot be opened.
    """
    if settings.source == "plex":
        from .plex_library import PlexMusicLibrary

        LOGGER.debug("Opening Plex library at %s", settings.plex_url)
        return PlexMusicLibrary.open(
            settings.plex_url or "",
            settings.plex_token or "",
            timeout=settings.plex_timeout,
        )

    if settings.source == "xml":
        from .itunes_xml import ITunesXmlLibrary

        LOGGER.debug("Opening library export %s", settings.xml_path)
        return ITunesXmlLibrary.load(settings.xml_path)

    raise LibraryError(f"Unsupported library source: {settings.source}")
