"""Connectivity probe used by the cloud/network status screen."""

from __future__ import annotations

import asyncio

from pitchgraph.adapters.api_errors import InvalidResponseError
from pitchgraph.adapters.http_client import ApiSession

NETWORK_CHECK_URL = "https://www.google.com/generate_204"
EMPTY_RESPONSE_STATUS_CODE = 204


class NetworkService:
    """Perform a bare GET and report the status code."""

    def __init__(self, http: ApiSession) -> None:
        self.http = http

    async def perform_network_check(self, url: str = NETWORK_CHECK_URL) -> int:
        """Return the HTTP status code for ``url``.

        Raises:
            InvalidInputsError: ``url`` does not parse.
            UnableToCompleteError: Transport failure; ``reason`` tells why.
            InvalidResponseError: The response carried no status code.
        """
        # Probe requests carry no API headers.
        spec = self.http.spec_for(url, with_headers=False)
        prepared = self.http.prepare(spec)
        response = await asyncio.to_thread(self.http.send, prepared, spec)
        status = getattr(response, "status_code", None)
        if not isinstance(status, int):
            raise InvalidResponseError(context=spec.context)
        return status


__all__ = ["EMPTY_RESPONSE_STATUS_CODE", "NETWORK_CHECK_URL", "NetworkService"]
