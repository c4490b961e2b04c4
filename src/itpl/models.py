from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional, Tuple
from urllib.parse import unquote, urlparse

FILE_SCHEME = "file"


def _path_components(path: str) -> Tuple[str, ...]:
    if not path:
        return ()
    return PurePosixPath(path).parts


@dataclass(frozen=True, slots=True)
class Location:
    """Where an item's underlying media resides."""

    scheme: Optional[str]
    path: str
    absolute_string: str
    path_components: Tuple[str, ...] = ()

    @classmethod
    def from_uri(cls, uri: str) -> "Location":
        """Build a location from a URI such as ``file://localhost/Music/a%20b.mp3``."""
        parsed = urlparse(uri)
        path = unquote(parsed.path)
        return cls(
            scheme=parsed.scheme or None,
            path=path,
            absolute_string=uri,
            path_components=_path_components(path),
        )

    @classmethod
    def from_path(cls, path: str) -> "Location":
        """Build a ``file`` location from a plain filesystem path."""
        uri = PurePosixPath(path).as_uri() if path.startswith("/") else f"{FILE_SCHEME}:{path}"
        return cls(
            scheme=FILE_SCHEME,
            path=path,
            absolute_string=uri,
            path_components=_path_components(path),
        )

    @property
    def is_file(self) -> bool:
        return self.scheme == FILE_SCHEME


@dataclass(frozen=True, slots=True)
class Item:
    title: str
    kind: Optional[str] = None
    location: Optional[Location] = None


@dataclass(frozen=True, slots=True)
class Playlist:
    name: str
    key: str = ""
    items: Tuple[Item, ...] = field(default_factory=tuple)
