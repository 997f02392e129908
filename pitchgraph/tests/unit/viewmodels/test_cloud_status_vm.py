from __future__ import annotations

import asyncio

import pytest

from pitchgraph.adapters.api_errors import InvalidInputsError, InvalidResponseError, UnableToCompleteError
from pitchgraph.viewmodels.cloud_status_vm import AccountStatus, CloudStatusError, CloudStatusVM


class NetworkServiceStub:
    def __init__(self, status: int = 204, exc: Exception = None) -> None:
        self.status = status
        self.exc = exc
        self.urls = []

    async def perform_network_check(self, url: str) -> int:
        self.urls.append(url)
        if self.exc is not None:
            raise self.exc
        return self.status


def network_row(vm: CloudStatusVM):
    return vm.cloud_data[0].details[CloudStatusVM.NETWORK_INDEX]


def account_row(vm: CloudStatusVM):
    return vm.cloud_data[0].details[CloudStatusVM.ACCOUNT_INDEX]


def test_rows_start_in_checking_state() -> None:
    vm = CloudStatusVM(NetworkServiceStub())

    assert [row.status for row in vm.cloud_data[0].details] == ["Checking...", "Checking..."]
    assert vm.is_network_check_in_progress is False


def test_empty_response_means_connected() -> None:
    service = NetworkServiceStub(204)
    vm = CloudStatusVM(service)

    asyncio.run(vm.check_network_status())

    assert network_row(vm).status == "Connected to the internet"
    assert network_row(vm).account_status is AccountStatus.AVAILABLE
    assert vm.cloud_error is None
    assert vm.is_network_check_in_progress is False
    assert service.urls == ["https://www.google.com/generate_204"]


def test_other_status_means_limited_connection() -> None:
    vm = CloudStatusVM(NetworkServiceStub(200))

    asyncio.run(vm.check_network_status())

    assert network_row(vm).status == "Internet connection might be limited"
    assert network_row(vm).account_status is AccountStatus.RESTRICTED


@pytest.mark.parametrize(
    "exc, message",
    [
        (UnableToCompleteError(reason="not_connected"), "Not connected to the internet"),
        (UnableToCompleteError(reason="timed_out"), "Network request timed out"),
        (UnableToCompleteError(reason="cannot_connect"), "Cannot connect to server"),
        (
            UnableToCompleteError(reason="other"),
            "Network error: Unable to complete your request. Please check your internet connection.",
        ),
        (InvalidResponseError(), "Unknown network error: Invalid response from server. Please retry."),
    ],
)
def test_failures_map_to_messages_and_network_error(exc: Exception, message: str) -> None:
    vm = CloudStatusVM(NetworkServiceStub(exc=exc))

    asyncio.run(vm.check_network_status())

    assert network_row(vm).status == message
    assert vm.cloud_error is CloudStatusError.NETWORK_UNAVAILABLE
    assert vm.is_network_check_in_progress is False


def test_invalid_check_url_marks_temporarily_unavailable() -> None:
    vm = CloudStatusVM(NetworkServiceStub(exc=InvalidInputsError()), check_url="not a url")

    asyncio.run(vm.check_network_status())

    assert network_row(vm).status == "Invalid URL for network check"
    assert network_row(vm).account_status is AccountStatus.TEMPORARILY_UNAVAILABLE
    assert vm.cloud_error is None


def test_account_status_from_provider() -> None:
    async def provider() -> AccountStatus:
        return AccountStatus.NO_ACCOUNT

    vm = CloudStatusVM(NetworkServiceStub(204), account_status_provider=provider)

    asyncio.run(vm.make_network_calls())

    assert network_row(vm).status == "Connected to the internet"
    assert account_row(vm).status == "Not signed into a cloud account"
    assert vm.cloud_error is CloudStatusError.ACCOUNT_UNAVAILABLE


def test_account_status_unknown_without_provider() -> None:
    vm = CloudStatusVM(NetworkServiceStub(204))

    asyncio.run(vm.check_account_status())

    assert account_row(vm).account_status is AccountStatus.COULD_NOT_DETERMINE


def test_account_provider_failure_is_reported() -> None:
    async def provider() -> AccountStatus:
        raise RuntimeError("keychain locked")

    vm = CloudStatusVM(NetworkServiceStub(204), account_status_provider=provider)

    asyncio.run(vm.check_account_status())

    assert account_row(vm).status == "Error checking cloud account: keychain locked"
    assert vm.cloud_error is CloudStatusError.UNKNOWN_ERROR
