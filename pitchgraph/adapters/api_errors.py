from __future__ import annotations

from typing import Any, Optional


class NetworkError(RuntimeError):
    """Base class for network caller failures.

    ``str(exc)`` is the user-facing message; ``context`` names the request
    (for example ``"GET https://..."``) for logging.
    """

    default_message = "Network request failed."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        context: Optional[str] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.context = context
        self.payload = payload


class InvalidInputsError(NetworkError):
    """The URL or its composition could not form a valid request."""

    default_message = "The inputs created an invalid request. Please retry."


class UnableToCompleteError(NetworkError):
    """Transport level failure: DNS, refused connection, timeout."""

    default_message = "Unable to complete your request. Please check your internet connection."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        reason: str = "other",
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.reason = reason


class InvalidResponseError(NetworkError):
    """Response was not HTTP or its status code was not 200."""

    default_message = "Invalid response from server. Please retry."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status: Optional[int] = None,
        context: Optional[str] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message, context=context, payload=payload)
        self.status = status


class InvalidDataError(NetworkError):
    """Body could not be decoded into the requested shape."""

    default_message = "Invalid data received from server. Please retry."


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of an error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def describe(exc: BaseException) -> str:
    """Compact log line for an adapter error."""
    context = getattr(exc, "context", None)
    status = getattr(exc, "status", None)
    parts = [type(exc).__name__]
    if context:
        parts.append(context)
    if status is not None:
        parts.append(f"HTTP {status}")
    return " ".join(parts)


__all__ = [
    "InvalidDataError",
    "InvalidInputsError",
    "InvalidResponseError",
    "NetworkError",
    "UnableToCompleteError",
    "describe",
    "parse_error_payload",
]
