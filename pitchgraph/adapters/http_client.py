"""Shared HTTP transport utilities for the player statistics API.

This module wraps ``requests.Session`` so the network caller and the
connectivity check share timeout policy, static header construction, URL
validation and the mapping of transport failures into typed errors.

Dependencies:
    - ``requests`` for request preparation and network I/O.
    - ``pitchgraph.adapters.api_errors`` for typed failures.

Call context:
    - Constructed once by the composition root (``pitchgraph/app/main.py``)
      and injected into ``NetworkCaller`` and ``NetworkService``.
    - Blocking calls are moved off the event loop by the callers with
      ``asyncio.to_thread``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
from urllib.parse import urlsplit

import requests
from requests import exceptions as req_exc

from pitchgraph.adapters.api_errors import InvalidInputsError, UnableToCompleteError

API_HOST = "football-manager-api.p.rapidapi.com"
BASE_URL = f"https://{API_HOST}"
BASE_URL_PLAYER_SEARCH = f"{BASE_URL}/players"

_SUPPORTED_SCHEMES = ("http", "https")
_INVALID_URL_ERRORS = (
    req_exc.MissingSchema,
    req_exc.InvalidSchema,
    req_exc.InvalidURL,
    req_exc.URLRequired,
)


@dataclass
class HttpConfig:
    """Timeout and static header configuration for API calls.

    Attributes:
        api_key: Value sent as ``X-RapidAPI-Key``.
        api_host: Value sent as ``X-RapidAPI-Host``.
        request_timeout_s: Timeout in seconds for every request.
    """
    api_key: str = ""
    api_host: str = API_HOST
    request_timeout_s: float = 10.0

    def headers(self) -> Dict[str, str]:
        return {
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.api_host,
        }


@dataclass(frozen=True)
class RequestSpec:
    """Ephemeral description of one outbound request."""

    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    method: str = "GET"
    timeout_s: float = 10.0

    @property
    def context(self) -> str:
        return f"{self.method} {self.url}"


class ApiSession:
    """Thin ``requests`` wrapper: prepare, validate and send one request.

    No retries and no caching; callers decide how to map non-200 responses.
    """

    def __init__(self, cfg: HttpConfig, session: Optional[requests.Session] = None) -> None:
        self.cfg = cfg
        self.session = session or requests.Session()
        self._log = logging.getLogger(__name__)

    def spec_for(self, url: str, *, with_headers: bool = True) -> RequestSpec:
        return RequestSpec(
            url=url,
            headers=self.cfg.headers() if with_headers else {},
            method="GET",
            timeout_s=self.cfg.request_timeout_s,
        )

    def prepare(self, spec: RequestSpec) -> requests.PreparedRequest:
        """Build a prepared request, rejecting URLs that do not parse.

        Raises:
            InvalidInputsError: If the URL is empty, relative, has an
                unsupported scheme or no host.
        """
        if not isinstance(spec.url, str) or not spec.url.strip() or any(ch.isspace() for ch in spec.url):
            raise InvalidInputsError(context=spec.context)
        try:
            scheme = urlsplit(spec.url).scheme.lower()
        except ValueError as exc:
            raise InvalidInputsError(context=spec.context) from exc
        if scheme not in _SUPPORTED_SCHEMES:
            raise InvalidInputsError(context=spec.context)
        try:
            return requests.Request(spec.method, spec.url, headers=dict(spec.headers)).prepare()
        except _INVALID_URL_ERRORS as exc:
            raise InvalidInputsError(context=spec.context) from exc

    def send(self, prepared: requests.PreparedRequest, spec: RequestSpec) -> requests.Response:
        """Send once, mapping transport failures to ``UnableToCompleteError``."""
        self._log.debug("%s", spec.context)
        try:
            return self.session.send(prepared, timeout=spec.timeout_s)
        except req_exc.Timeout as exc:
            raise UnableToCompleteError(reason="timed_out", context=spec.context) from exc
        except req_exc.ConnectionError as exc:
            raise UnableToCompleteError(reason=_connection_reason(exc), context=spec.context) from exc
        except req_exc.RequestException as exc:
            raise UnableToCompleteError(reason="other", context=spec.context) from exc


def _connection_reason(exc: req_exc.ConnectionError) -> str:
    text = str(exc).lower()
    if "network is unreachable" in text or "no route to host" in text:
        return "not_connected"
    return "cannot_connect"


__all__ = [
    "API_HOST",
    "ApiSession",
    "BASE_URL",
    "BASE_URL_PLAYER_SEARCH",
    "HttpConfig",
    "RequestSpec",
]
