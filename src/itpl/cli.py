from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import AppConfig, ConfigError, build_config
from .formatter import PlaylistFormatter
from .help_formatter import help_formatter_factory
from .library import LibraryError, open_library
from .logging_utils import configure_logging
from .version import __version__

LOGGER = logging.getLogger(__name__)

PROG = "itpl"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="List media library playlists, or the file paths of the items in one playlist.",
        formatter_class=help_formatter_factory(),
    )
    parser.add_argument(
        "-r",
        dest="base_path",
        metavar="BASE_PATH",
        default=None,
        help="Remove base path from item path output. "
        "Path output in full if it does not start with the provided base path.",
    )
    parser.add_argument(
        "-p",
        dest="prefix",
        metavar="PREFIX",
        default="",
        help="Add prefix string to each line, e.g. 'put '.",
    )
    parser.add_argument("-e", dest="escape", action="store_true", help="Escape shell characters.")
    parser.add_argument("-n", dest="nfc", action="store_true", help="Encode path in NFC (Linux) form.")
    parser.add_argument("--qd", dest="quote_double", action="store_true", help="Path in double quotes.")
    parser.add_argument("--qs", dest="quote_single", action="store_true", help="Path in single quotes.")
    parser.add_argument("-d", dest="debug", action="store_true", help="Debug mode.")

    source = parser.add_argument_group("library source")
    source.add_argument(
        "-l",
        "--library",
        type=Path,
        default=None,
        help="Path to the exported Library.xml (default: ~/Music/iTunes/iTunes Music Library.xml).",
    )
    source.add_argument("--plex-url", default=None, help="Read playlists from this Plex server.")
    source.add_argument("--plex-token", default=None, help="Plex authentication token.")
    source.add_argument(
        "--plex-timeout",
        type=float,
        default=None,
        help="Plex request timeout in seconds (default: 15).",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        metavar="NAME",
        help="Playlist name. List all playlists if no name is provided.",
    )
    return parser


def parse_args(argv: Sequence[str]) -> tuple[argparse.Namespace, AppConfig]:
    parser = build_parser()
    args = parser.parse_args(list(argv))
    try:
        config = build_config(args)
    except ConfigError as exc:
        parser.error(str(exc))
    return args, config


def run(config: AppConfig, raw_argv: Sequence[str]) -> int:
    library = open_library(config.library)
    formatter = PlaylistFormatter(library, config.options, diagnostics=print)
    formatter.debug_header(raw_argv)

    if config.playlist_name is None:
        for name in formatter.list_playlists():
            print(name)
    else:
        for line in formatter.iter_item_paths(config.playlist_name):
            print(line)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    raw_argv: List[str] = list(sys.argv) if argv is None else [PROG, *argv]
    _, config = parse_args(raw_argv[1:])
    configure_logging(config.verbose)

    try:
        return run(config, raw_argv)
    except LibraryError as exc:
        LOGGER.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.warning("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
