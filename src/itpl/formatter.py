"""Playlist listing and item path formatting.

Item paths go through a fixed pipeline, each step switched on by a flag in
``FormatOptions``:

1. NFC normalization
2. base path removal
3. shell character escaping
4. double quotes
5. single quotes

and the configured prefix is prepended to the result.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Callable, Iterator, List, Optional, Sequence

from .config import FormatOptions
from .library import MediaLibrary
from .logging_utils import comment_line, render_comment_fields, render_comment_section
from .models import Item

LOGGER = logging.getLogger(__name__)

ESCAPE_CHARS = frozenset("\"`'()[]<>&?$*|\\ ")

DiagnosticSink = Callable[[str], None]


def normalize_nfc(path: str) -> str:
    return unicodedata.normalize("NFC", path)


def strip_base_path(path: str, base_path: Optional[str]) -> str:
    """Remove ``base_path`` from the start of ``path``.

    The path is returned unchanged when it does not start with the base path.
    """
    if base_path and path.startswith(base_path):
        return path[len(base_path) :]
    return path


def escape_shell_chars(path: str) -> str:
    return "".join(f"\\{char}" if char in ESCAPE_CHARS else char for char in path)


def quote_double(path: str) -> str:
    return f'"{path}"'


def quote_single(path: str) -> str:
    return f"'{path}'"


def format_path(path: str, options: FormatOptions) -> str:
    """Run ``path`` through the transformation pipeline and add the prefix."""
    if options.nfc:
        path = normalize_nfc(path)
    if options.base_path:
        path = strip_base_path(path, options.base_path)
    if options.escape:
        path = escape_shell_chars(path)
    if options.quote_double:
        path = quote_double(path)
    if options.quote_single:
        path = quote_single(path)
    return options.prefix + path


def library_header_lines(library: MediaLibrary, argv: Sequence[str]) -> List[str]:
    """Diagnostic lines describing the library and the raw arguments."""
    lines = render_comment_fields(
        [
            (f"{library.application_name} API ver", library.api_version),
            (f"{library.application_name} version", library.application_version),
        ],
        label_width=0,
    )
    lines.extend(render_comment_section("ARGS", argv))
    return lines


def item_debug_lines(item: Item) -> List[str]:
    """Diagnostic lines with an item's raw metadata."""
    fields: list[tuple[str, object]] = [("Title", item.title), ("Kind", item.kind)]
    location = item.location
    if location is not None:
        components = "".join(f"|{part}" for part in location.path_components) + "|"
        fields.extend(
            [
                ("Scheme", location.scheme),
                ("Loc(STR)", location.absolute_string),
                ("Path", location.path),
                ("PathComp", components),
            ]
        )
    return [comment_line("---"), *render_comment_fields(fields)]


class PlaylistFormatter:
    """Lists playlists of a library and formats the paths of their items.

    Debug diagnostics are handed to ``diagnostics`` as they are produced so a
    caller printing lines as they come gets them interleaved with the output.
    """

    def __init__(
        self,
        library: MediaLibrary,
        options: FormatOptions,
        *,
        diagnostics: Optional[DiagnosticSink] = None,
    ) -> None:
        self.library = library
        self.options = options
        self._diagnostics = diagnostics

    def _emit_debug(self, lines: Sequence[str]) -> None:
        if not self.options.debug or self._diagnostics is None:
            return
        for line in lines:
            self._diagnostics(line)

    def debug_header(self, argv: Sequence[str]) -> None:
        self._emit_debug(library_header_lines(self.library, argv))

    def list_playlists(self) -> List[str]:
        return [playlist.name for playlist in self.library.playlists()]

    def iter_item_paths(self, name: str) -> Iterator[str]:
        matched = 0
        for playlist in self.library.playlists():
            if playlist.name != name:
                continue
            matched += 1
            for item in self.library.playlist_items(playlist):
                self._emit_debug(item_debug_lines(item))
                location = item.location
                if location is None:
                    LOGGER.debug("Skipping '%s': no location", item.title)
                    continue
                if not location.is_file:
                    LOGGER.debug("Skipping '%s': scheme %s", item.title, location.scheme)
                    continue
                yield format_path(location.path, self.options)
        if not matched:
            LOGGER.info("No playlist named '%s'", name)

    def list_item_paths(self, name: str) -> List[str]:
        return list(self.iter_item_paths(name))
