"""Global fixtures for Daikin Aircon integration."""

from collections.abc import Iterator, Mapping
from typing import Any
from unittest.mock import patch

import pytest

from custom_components.daikin_aircon.api import (
    ENDPOINT_BASIC_INFO,
    ENDPOINT_GET_CONTROL_INFO,
    ENDPOINT_REBOOT,
    ENDPOINT_SENSOR_INFO,
    ENDPOINT_SET_CONTROL_INFO,
)

from .const import BASIC_INFO_RESPONSE, CONTROL_INFO_RESPONSE, SENSOR_INFO_RESPONSE

pytest_plugins = "pytest_homeassistant_custom_component"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> None:  # noqa: D103
    return


class FakeAdapter:
    """Record requests and answer them like the wifi adapter."""

    def __init__(self) -> None:
        """Initialize the canned responses."""
        self.responses = {
            ENDPOINT_BASIC_INFO: BASIC_INFO_RESPONSE,
            ENDPOINT_SENSOR_INFO: SENSOR_INFO_RESPONSE,
            ENDPOINT_GET_CONTROL_INFO: CONTROL_INFO_RESPONSE,
            ENDPOINT_SET_CONTROL_INFO: "ret=OK",
            ENDPOINT_REBOOT: "ret=OK",
        }
        self.requests: list[tuple[str, Mapping[str, str] | None]] = []

    async def get(
        self,
        path: str,
        params: Mapping[str, str] | None,
        headers: Mapping[str, str] | None,
    ) -> str:
        """Answer a GET request."""
        self.requests.append((path, params))
        return self.responses[path]

    def writes(self) -> list[Mapping[str, str] | None]:
        """Return the parameters of every set_control_info request."""
        return [p for path, p in self.requests if path == ENDPOINT_SET_CONTROL_INFO]


@pytest.fixture
def adapter() -> Iterator[FakeAdapter]:
    """Patch the client transport with a fake adapter."""
    fake = FakeAdapter()
    with patch(
        "custom_components.daikin_aircon.api.DaikinAirconClient._async_get",
        side_effect=fake.get,
    ):
        yield fake
