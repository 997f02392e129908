"""Availability screen state: network reachability and cloud account status."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from pitchgraph.adapters.api_errors import InvalidInputsError, NetworkError, UnableToCompleteError, describe
from pitchgraph.adapters.network_service import EMPTY_RESPONSE_STATUS_CODE, NETWORK_CHECK_URL
from pitchgraph.domain.ports import NetworkServicePort


class AccountStatus(str, Enum):
    AVAILABLE = "available"
    NO_ACCOUNT = "no_account"
    RESTRICTED = "restricted"
    COULD_NOT_DETERMINE = "could_not_determine"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"


class CloudStatusError(str, Enum):
    NETWORK_UNAVAILABLE = "network_unavailable"
    ACCOUNT_UNAVAILABLE = "account_unavailable"
    RESTRICTED_NETWORK = "restricted_network"
    UNKNOWN_ERROR = "unknown_error"


@dataclass
class CloudStatusDetails:
    image_name: str
    name: str
    status: str
    account_status: Optional[AccountStatus] = None


@dataclass
class CloudStatus:
    name: str
    details: List[CloudStatusDetails] = field(default_factory=list)


_NETWORK_FAILURE_MESSAGES = {
    "not_connected": "Not connected to the internet",
    "timed_out": "Network request timed out",
    "cannot_connect": "Cannot connect to server",
}

_ACCOUNT_MESSAGES = {
    AccountStatus.AVAILABLE: "Signed into a cloud account",
    AccountStatus.NO_ACCOUNT: "Not signed into a cloud account",
    AccountStatus.RESTRICTED: "Your cloud account is restricted",
    AccountStatus.COULD_NOT_DETERMINE: "Your cloud account status could not be determined",
    AccountStatus.TEMPORARILY_UNAVAILABLE: "Your cloud account is temporarily unavailable.",
}

AccountStatusProvider = Callable[[], Awaitable[AccountStatus]]


def _initial_rows() -> List[CloudStatus]:
    return [
        CloudStatus(
            name="Availability",
            details=[
                CloudStatusDetails(image_name="network", name="Network", status="Checking..."),
                CloudStatusDetails(image_name="icloud.fill", name="Cloud Account", status="Checking..."),
            ],
        )
    ]


class CloudStatusVM:
    NETWORK_INDEX = 0
    ACCOUNT_INDEX = 1

    def __init__(
        self,
        network_service: NetworkServicePort,
        *,
        check_url: str = NETWORK_CHECK_URL,
        account_status_provider: Optional[AccountStatusProvider] = None,
    ) -> None:
        self.network_service = network_service
        self.check_url = check_url
        self.account_status_provider = account_status_provider
        self.cloud_data: List[CloudStatus] = _initial_rows()
        self.cloud_error: Optional[CloudStatusError] = None
        self.is_network_check_in_progress = False
        self._log = logging.getLogger(__name__)

    async def make_network_calls(self) -> None:
        await self.check_network_status()
        await self.check_account_status()

    async def check_network_status(self) -> None:
        self.is_network_check_in_progress = True
        try:
            status_code = await self.network_service.perform_network_check(self.check_url)
        except InvalidInputsError:
            self._update(self.NETWORK_INDEX, "Invalid URL for network check", AccountStatus.TEMPORARILY_UNAVAILABLE)
        except NetworkError as exc:
            self._handle_network_error(exc)
        else:
            self._handle_network_response(status_code)
        finally:
            self.is_network_check_in_progress = False

    def _handle_network_response(self, status_code: int) -> None:
        if status_code == EMPTY_RESPONSE_STATUS_CODE:
            self._update(self.NETWORK_INDEX, "Connected to the internet", AccountStatus.AVAILABLE)
        else:
            self._update(self.NETWORK_INDEX, "Internet connection might be limited", AccountStatus.RESTRICTED)

    def _handle_network_error(self, exc: NetworkError) -> None:
        self._log.info("Network check failed: %s", describe(exc))
        if isinstance(exc, UnableToCompleteError):
            message = _NETWORK_FAILURE_MESSAGES.get(exc.reason, f"Network error: {exc}")
        else:
            message = f"Unknown network error: {exc}"
        self._update(self.NETWORK_INDEX, message, AccountStatus.RESTRICTED)
        self.cloud_error = CloudStatusError.NETWORK_UNAVAILABLE

    async def check_account_status(self) -> None:
        if self.account_status_provider is None:
            status = AccountStatus.COULD_NOT_DETERMINE
        else:
            try:
                status = await self.account_status_provider()
            except Exception as exc:
                self._log.warning("Account status check failed: %r", exc)
                self._update(self.ACCOUNT_INDEX, f"Error checking cloud account: {exc}", None)
                self.cloud_error = CloudStatusError.UNKNOWN_ERROR
                return
        self._update(self.ACCOUNT_INDEX, _ACCOUNT_MESSAGES[status], status)
        if status is not AccountStatus.AVAILABLE:
            self.cloud_error = self.cloud_error or CloudStatusError.ACCOUNT_UNAVAILABLE

    def _update(self, index: int, status: str, account_status: Optional[AccountStatus]) -> None:
        if not self.cloud_data or not 0 <= index < len(self.cloud_data[0].details):
            return
        row = self.cloud_data[0].details[index]
        row.status = status
        row.account_status = account_status
