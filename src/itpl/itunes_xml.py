from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List

from lxml import etree

from .library import LibraryError
from .models import Item, Location, Playlist

LOGGER = logging.getLogger(__name__)

DEFAULT_LIBRARY_PATH = Path("~/Music/iTunes/iTunes Music Library.xml")


def _plist_value(element: etree._Element) -> Any:
    """Convert a property-list element into the matching Python value."""
    tag = element.tag
    if tag == "dict":
        result: Dict[str, Any] = {}
        children = [child for child in element if isinstance(child.tag, str)]
        for key_el, value_el in zip(children[::2], children[1::2]):
            if key_el.tag != "key":
                raise LibraryError(f"Expected <key> in plist dict, found <{key_el.tag}>")
            result[key_el.text or ""] = _plist_value(value_el)
        return result
    if tag == "array":
        return [_plist_value(child) for child in element if isinstance(child.tag, str)]
    if tag == "integer":
        return int(element.text or 0)
    if tag == "real":
        return float(element.text or 0)
    if tag == "true":
        return True
    if tag == "false":
        return False
    # string, date and data stay as text
    return element.text or ""


def parse_library_xml(source: bytes) -> Dict[str, Any]:
    """Parse a Library.xml document into its top-level dict."""
    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
    try:
        root = etree.fromstring(source, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise LibraryError(f"Library XML is malformed: {exc}") from exc

    if root.tag != "plist":
        raise LibraryError(f"Library XML root must be <plist>, found <{root.tag}>")
    top = next((child for child in root if isinstance(child.tag, str)), None)
    if top is None or top.tag != "dict":
        raise LibraryError("Library XML does not contain a top-level dict")
    try:
        return _plist_value(top)
    except ValueError as exc:
        raise LibraryError(f"Library XML has an invalid value: {exc}") from exc


def _build_item(track: Dict[str, Any]) -> Item:
    uri = track.get("Location")
    return Item(
        title=str(track.get("Name", "")),
        kind=str(track["Kind"]) if track.get("Kind") is not None else None,
        location=Location.from_uri(uri) if isinstance(uri, str) and uri else None,
    )


def _container(data: Dict[str, Any], key: str, expected: type) -> Any:
    value = data.get(key)
    if value is None:
        return expected()
    if not isinstance(value, expected):
        raise LibraryError(f"Library XML '{key}' must be a <{'dict' if expected is dict else 'array'}>")
    return value


class ITunesXmlLibrary:
    """Library read from an iTunes / Music ``Library.xml`` export."""

    application_name = "iTunes"

    def __init__(self, data: Dict[str, Any]) -> None:
        self._data = data
        self._playlists: List[Dict[str, Any]] = _container(data, "Playlists", list)
        if not all(isinstance(entry, dict) for entry in self._playlists):
            raise LibraryError("Library XML 'Playlists' must hold only <dict> entries")
        self._tracks: Dict[str, Item] = {}
        for key, value in _container(data, "Tracks", dict).items():
            if not isinstance(value, dict):
                LOGGER.debug("Skipping track %s: not a dict", key)
                continue
            self._tracks[str(key)] = _build_item(value)

    @classmethod
    def load(cls, path: Path) -> "ITunesXmlLibrary":
        resolved = Path(path).expanduser()
        try:
            payload = resolved.read_bytes()
        except OSError as exc:
            raise LibraryError(f"Unable to read library file {resolved}: {exc}") from exc
        library = cls(parse_library_xml(payload))
        LOGGER.debug(
            "Loaded %d track(s) and %d playlist(s) from %s",
            len(library._tracks),
            len(library._playlists),
            resolved,
        )
        return library

    @property
    def api_version(self) -> str:
        major = self._data.get("Major Version", 0)
        minor = self._data.get("Minor Version", 0)
        return f"{major}.{minor}"

    @property
    def application_version(self) -> str:
        return str(self._data.get("Application Version", ""))

    def playlists(self) -> Iterator[Playlist]:
        for entry in self._playlists:
            yield Playlist(
                name=str(entry.get("Name", "")),
                key=str(entry.get("Playlist Persistent ID", entry.get("Playlist ID", ""))),
                items=tuple(self._resolve_items(entry.get("Playlist Items"))),
            )

    def playlist_items(self, playlist: Playlist) -> Iterator[Item]:
        return iter(playlist.items)

    def _resolve_items(self, entries: Any) -> Iterator[Item]:
        if not isinstance(entries, list):
            if entries is not None:
                LOGGER.debug("Ignoring playlist items: not an array")
            return
        for entry in entries:
            if not isinstance(entry, dict):
                LOGGER.debug("Skipping playlist item: not a dict")
                continue
            track_id = str(entry.get("Track ID", ""))
            item = self._tracks.get(track_id)
            if item is None:
                LOGGER.debug("Skipping unknown track id %s", track_id)
                continue
            yield item
