"""Installed version lookup."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "itpl"

# Fallback version when running from an uninstalled checkout
_FALLBACK_VERSION = "unknown"


def get_version() -> str:
    """Return the installed distribution version, or ``"unknown"``."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return _FALLBACK_VERSION


__version__ = get_version()
