from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin, urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

LOGGER = logging.getLogger(__name__)

PLAYLIST_TYPE_AUDIO = "audio"

DEFAULT_TIMEOUT = 15.0
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF_FACTOR = 0.5
RETRY_STATUS_CODES = frozenset({500, 502, 503, 504, 429})


class PlexApiError(RuntimeError):
    """Raised when Plex API requests fail."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PlexRateLimitError(PlexApiError):
    """Raised when Plex returns 429 Too Many Requests."""


def _build_url(base_url: str, path: str) -> str:
    normalized = base_url.rstrip("/") + "/"
    return urljoin(normalized, path.lstrip("/"))


def _sanitize_url_for_logging(url: str) -> str:
    """Remove the X-Plex-Token query parameter from a URL before logging it."""
    return re.sub(r"[?&]X-Plex-Token=[^&]*", "", url)


def _parse_json_response(response: requests.Response) -> Dict[str, Any]:
    try:
        return response.json()
    except ValueError as exc:
        snippet = response.text[:500]
        raise PlexApiError(
            f"Failed to parse Plex response as JSON ({response.status_code}): {snippet}",
            status_code=response.status_code,
        ) from exc


def _container_metadata(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    return list(payload.get("MediaContainer", {}).get("Metadata") or [])


def validate_plex_url(url: Optional[str]) -> bool:
    """Validate that URL is a valid http/https URL."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except ValueError:
        return False


@dataclass(slots=True)
class PlexServerIdentity:
    machine_identifier: Optional[str]
    version: str


@dataclass(slots=True)
class PlexPlaylist:
    rating_key: str
    title: str
    playlist_type: Optional[str]
    smart: bool = False
    leaf_count: int = 0


class PlexClient:
    """Read-only wrapper around the Plex playlist endpoints.

    Token is passed via the X-Plex-Token header (not query params).
    Includes automatic retries with exponential backoff for transient failures.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        max_retries: int = DEFAULT_RETRIES,
        backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    ) -> None:
        if not validate_plex_url(base_url):
            raise PlexApiError(f"Invalid Plex URL: {base_url}")

        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

        self.session = session or requests.Session()
        if session is None:
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=backoff_factor,
                status_forcelist=list(RETRY_STATUS_CODES),
                allowed_methods=["GET"],
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _get(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = _build_url(self.base_url, path)
        headers = {
            "Accept": "application/json",
            "X-Plex-Token": self.token,
        }

        LOGGER.debug("Plex GET %s", _sanitize_url_for_logging(url))

        try:
            response = self.session.request(
                "GET",
                url,
                params=dict(params or {}),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise PlexApiError(f"Plex request failed: {exc}") from exc

        if response.status_code == 429:
            raise PlexRateLimitError("Plex rate limit exceeded (429)", status_code=429)

        if response.status_code >= 400:
            snippet = response.text[:200]
            raise PlexApiError(
                f"Plex request failed ({response.status_code}): {snippet}",
                status_code=response.status_code,
            )

        return _parse_json_response(response)

    def identity(self) -> PlexServerIdentity:
        """Return the server's machine identifier and version."""
        container = self._get("/identity").get("MediaContainer", {})
        return PlexServerIdentity(
            machine_identifier=container.get("machineIdentifier"),
            version=str(container.get("version", "")),
        )

    def list_playlists(self, *, playlist_type: Optional[str] = PLAYLIST_TYPE_AUDIO) -> List[PlexPlaylist]:
        """List playlists in server order, optionally filtered by type."""
        params = {"playlistType": playlist_type} if playlist_type else None
        playlists: List[PlexPlaylist] = []
        for entry in _container_metadata(self._get("/playlists", params=params)):
            rating_key = entry.get("ratingKey")
            title = entry.get("title")
            if rating_key is None or title is None:
                continue
            playlists.append(
                PlexPlaylist(
                    rating_key=str(rating_key),
                    title=str(title),
                    playlist_type=entry.get("playlistType"),
                    smart=bool(entry.get("smart", False)),
                    leaf_count=int(entry.get("leafCount", 0) or 0),
                )
            )
        return playlists

    def list_playlist_items(self, rating_key: str) -> List[Dict[str, Any]]:
        """List the raw metadata entries of a playlist, in playlist order."""
        return _container_metadata(self._get(f"/playlists/{rating_key}/items"))
