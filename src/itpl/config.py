from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .itunes_xml import DEFAULT_LIBRARY_PATH
from .plex_client import DEFAULT_TIMEOUT, validate_plex_url


class ConfigError(ValueError):
    """Raised when command-line options do not form a valid configuration."""


@dataclass(frozen=True)
class FormatOptions:
    base_path: Optional[str] = None
    prefix: str = ""
    escape: bool = False
    nfc: bool = False
    quote_double: bool = False
    quote_single: bool = False
    debug: bool = False


@dataclass(frozen=True)
class LibrarySettings:
    source: str = "xml"  # xml | plex
    xml_path: Path = DEFAULT_LIBRARY_PATH
    plex_url: Optional[str] = None
    plex_token: Optional[str] = None
    plex_timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class AppConfig:
    options: FormatOptions = field(default_factory=FormatOptions)
    library: LibrarySettings = field(default_factory=LibrarySettings)
    playlist_name: Optional[str] = None
    verbose: bool = False


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build_format_options(args: argparse.Namespace) -> FormatOptions:
    # Base path and prefix are literal strings; whitespace is significant.
    base_path = getattr(args, "base_path", None) or None
    return FormatOptions(
        base_path=base_path,
        prefix=getattr(args, "prefix", None) or "",
        escape=bool(getattr(args, "escape", False)),
        nfc=bool(getattr(args, "nfc", False)),
        quote_double=bool(getattr(args, "quote_double", False)),
        quote_single=bool(getattr(args, "quote_single", False)),
        debug=bool(getattr(args, "debug", False)),
    )


def _build_library_settings(args: argparse.Namespace) -> LibrarySettings:
    plex_url = _clean_str(getattr(args, "plex_url", None))
    plex_token = _clean_str(getattr(args, "plex_token", None))
    library_path = getattr(args, "library", None)

    timeout_raw = getattr(args, "plex_timeout", None)
    if timeout_raw is None:
        timeout = DEFAULT_TIMEOUT
    else:
        try:
            timeout = float(timeout_raw)
        except (TypeError, ValueError) as exc:
            raise ConfigError("'--plex-timeout' must be a number") from exc
        if timeout <= 0:
            raise ConfigError("'--plex-timeout' must be greater than zero")

    if plex_url is None and plex_token is None:
        return LibrarySettings(
            source="xml",
            xml_path=Path(library_path) if library_path else DEFAULT_LIBRARY_PATH,
            plex_timeout=timeout,
        )

    if library_path:
        raise ConfigError("'--library' cannot be combined with '--plex-url'/'--plex-token'")
    if plex_url is None or plex_token is None:
        raise ConfigError("'--plex-url' and '--plex-token' must be provided together")
    if not validate_plex_url(plex_url):
        raise ConfigError(f"'--plex-url' must be a valid http/https URL, got: {plex_url}")

    return LibrarySettings(
        source="plex",
        plex_url=plex_url,
        plex_token=plex_token,
        plex_timeout=timeout,
    )


def build_config(args: argparse.Namespace) -> AppConfig:
    """Turn parsed command-line arguments into an explicit configuration.

    Raises:
        ConfigError: If the options are inconsistent or out of range.
    """
    return AppConfig(
        options=_build_format_options(args),
        library=_build_library_settings(args),
        playlist_name=getattr(args, "name", None),
        verbose=bool(getattr(args, "verbose", False)),
    )
