"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from pitchgraph.adapters.api_errors import (
    InvalidDataError,
    InvalidInputsError,
    InvalidResponseError,
    NetworkError,
    UnableToCompleteError,
)
from pitchgraph.domain.ports import UseCaseError


def map_network_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map network caller exceptions to stable UseCaseError codes.

    The message of each network error is already user-presentable, so it is
    passed through unchanged.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, InvalidInputsError):
        return UseCaseError("INVALID_INPUTS", str(exc))
    if isinstance(exc, UnableToCompleteError):
        return UseCaseError("UNABLE_TO_COMPLETE", str(exc))
    if isinstance(exc, InvalidResponseError):
        return UseCaseError("INVALID_RESPONSE", str(exc))
    if isinstance(exc, InvalidDataError):
        return UseCaseError("INVALID_DATA", str(exc))
    if isinstance(exc, NetworkError):
        return UseCaseError("NETWORK_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


__all__ = ["map_network_error"]
