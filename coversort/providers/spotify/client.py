"""Spotify pathfinder client.

Handles all HTTP requests made during a sort run: the persisted-query POSTs to
the pathfinder endpoint and the cover art downloads.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Sequence
import math
import time
import logging

import requests
from requests.adapters import HTTPAdapter
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_random_exponential

from ...errors import AuthError, NetworkError, ParseError
from .queries import FetchPlaylistVariables, MoveType, build_query, move_items

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api-partner.spotify.com/pathfinder/v1/query"
DEFAULT_RETRY_AFTER = 1.0


def normalize_authorization(token: str) -> str:
    """Return an Authorization header value, adding the Bearer scheme if absent."""
    token = token.strip()
    if not token:
        raise AuthError("Empty authorization token")
    if " " in token:
        return token
    return f"Bearer {token}"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings shared by every request of a run."""
    headers: Dict[str, str] = field(default_factory=dict)
    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = 30

    @classmethod
    def from_settings(cls, token: str, spotify_config: Dict[str, Any]) -> ClientConfig:
        """Build client settings from an auth token and the ``spotify`` config section.

        Args:
            token: Access token, with or without the ``Bearer`` prefix
            spotify_config: Dict with endpoint, app_platform, user_agent,
                client_token and timeout_seconds keys

        Returns:
            ClientConfig instance
        """
        headers = {
            "App-Platform": spotify_config.get("app_platform", "WebPlayer"),
            "Authorization": normalize_authorization(token),
        }
        if spotify_config.get("user_agent"):
            headers["User-Agent"] = spotify_config["user_agent"]
        if spotify_config.get("client_token"):
            headers["Client-Token"] = spotify_config["client_token"]
        return cls(
            headers=headers,
            endpoint=spotify_config.get("endpoint") or DEFAULT_ENDPOINT,
            timeout_seconds=float(spotify_config.get("timeout_seconds", 30)),
        )


def retry_after_seconds(value: str | None) -> float:
    """Seconds to wait for a ``Retry-After`` header value.

    Accepts delay-seconds (integer or fractional) and HTTP-dates. Missing or
    unparseable values fall back to ``DEFAULT_RETRY_AFTER``; dates in the past
    give 0.
    """
    if not value:
        return DEFAULT_RETRY_AFTER
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(0.0, seconds) if math.isfinite(seconds) else DEFAULT_RETRY_AFTER
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.debug(f"Unparseable Retry-After header: {value!r}")
        return DEFAULT_RETRY_AFTER
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


def _check_response(r: requests.Response) -> None:
    if r.status_code in (401, 403):
        raise AuthError(f"Request rejected with HTTP {r.status_code}; check the access token")
    if r.status_code == 429:
        ra = retry_after_seconds(r.headers.get("Retry-After"))
        time.sleep(ra)
        raise NetworkError("rate limit retry", status_code=429)
    if r.status_code >= 400:
        raise NetworkError(f"HTTP {r.status_code} from {r.url}", status_code=r.status_code)


class PathfinderClient:
    """Client for the Spotify web player's pathfinder API.

    One ``requests.Session`` carries the default headers built from
    :class:`ClientConfig`; the headers never change after construction.
    The session is shared by the profiling threads. Its connection pool is
    sized with ``pool_size`` so concurrent downloads each get a connection.
    Cookies the server sets land in the session jar; nothing here reads them.
    """

    def __init__(self, config: ClientConfig, session: requests.Session | None = None, pool_size: int = 10):
        self.config = config
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.session = session
        self.session.headers.update(config.headers)

    @retry(
        retry=retry_if_exception_type(NetworkError),
        stop=stop_after_attempt(5),
        wait=wait_random_exponential(multiplier=1, max=30),
        reraise=True,
    )
    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Send one persisted query and return the decoded JSON body.

        Raises:
            NetworkError: Transport failure, timeout or unexpected status (retried)
            AuthError: Credentials rejected
            ParseError: Body is not JSON or carries only GraphQL errors
        """
        try:
            r = self.session.post(self.config.endpoint, json=body, timeout=self.config.timeout_seconds)
        except requests.RequestException as e:
            raise NetworkError(f"{body.get('operationName')} request failed: {e}") from e
        _check_response(r)
        try:
            payload = r.json()
        except ValueError as e:
            raise ParseError(f"{body.get('operationName')} response is not JSON") from e
        if not isinstance(payload, dict):
            raise ParseError(f"{body.get('operationName')} response is not a JSON object")
        if payload.get("errors") and not payload.get("data"):
            messages = "; ".join(str(err.get("message", err)) for err in payload["errors"] if isinstance(err, dict))
            raise ParseError(f"{body.get('operationName')} returned errors: {messages or payload['errors']}")
        return payload

    @retry(
        retry=retry_if_exception_type(NetworkError),
        stop=stop_after_attempt(5),
        wait=wait_random_exponential(multiplier=1, max=30),
        reraise=True,
    )
    def download(self, url: str) -> bytes:
        """Download a cover art image.

        Args:
            url: Absolute image URL from the playlist response

        Returns:
            Raw image bytes
        """
        try:
            r = self.session.get(url, timeout=self.config.timeout_seconds)
        except requests.RequestException as e:
            raise NetworkError(f"Cover download failed for {url}: {e}") from e
        _check_response(r)
        return r.content

    def fetch_playlist_window(self, playlist_id: str, offset: int, limit: int) -> Dict[str, Any]:
        """Fetch ``limit`` playlist items starting at ``offset``.

        Returns:
            Raw response payload (see :mod:`coversort.providers.spotify.playlist`)
        """
        body = build_query(FetchPlaylistVariables(playlist_id, offset, limit))
        logger.debug(f"Fetching playlist {playlist_id} (offset={offset}, limit={limit})")
        return self._post(body)

    def move_items(self, playlist_id: str, uids: Sequence[str], anchor_uid: str,
                   move_type: MoveType = MoveType.AFTER) -> Dict[str, Any]:
        """Move playlist entries next to the anchor's current position."""
        body = build_query(move_items(playlist_id, uids, anchor_uid, move_type))
        return self._post(body)


__all__ = ["PathfinderClient", "ClientConfig", "normalize_authorization", "retry_after_seconds", "DEFAULT_ENDPOINT"]
