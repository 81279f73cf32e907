"""API client for Daikin Aircon wifi adapters."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

import aiohttp
from aiohttp import ClientTimeout
from aiohttp.client_exceptions import ClientError

from .const import REQUEST_TIMEOUT
from .exceptions import ConfigurationError, DaikinConnectionError, UnsupportedMethod
from .models import ControlInfo, GeneralInfo, SensorInfo
from .protocol import (
    RawRecord,
    decode_response,
    merge_control_info,
    parse_basic_info,
    parse_control_info,
    parse_sensor_info,
)

_LOGGER = logging.getLogger(__name__)

# API endpoints
ENDPOINT_REBOOT = "/common/reboot"
ENDPOINT_BASIC_INFO = "/common/basic_info"
ENDPOINT_SENSOR_INFO = "/aircon/get_sensor_info"
ENDPOINT_GET_CONTROL_INFO = "/aircon/get_control_info"
ENDPOINT_SET_CONTROL_INFO = "/aircon/set_control_info"


class DaikinAirconClient:
    """API client for a Daikin Aircon wifi adapter.

    Every call is an independent request; the client keeps no appliance state.
    """

    def __init__(
        self, host: str, session: aiohttp.ClientSession | None = None
    ) -> None:
        """Initialize the API client.

        Args:
            host: IP address or hostname of the adapter
            session: optional aiohttp session, one is created on first use

        """
        self.host = host
        self._session = session
        self._close_session = session is None

    async def async_validate_connection(self) -> GeneralInfo:
        """Test if we can talk to the adapter.

        Returns:
            The adapter's basic info

        Raises:
            DaikinConnectionError: If connection fails

        """
        try:
            return await self.async_get_basic_info()
        except DaikinConnectionError:
            _LOGGER.error("Failed to connect to Daikin adapter at %s", self.host)
            raise

    async def async_reboot(self) -> None:
        """Reboot the adapter."""
        await self._async_request("GET", ENDPOINT_REBOOT)

    async def async_get_basic_info(self) -> GeneralInfo:
        """Get the adapter's basic info."""
        return parse_basic_info(await self._async_request("GET", ENDPOINT_BASIC_INFO))

    async def async_get_sensor_info(self) -> SensorInfo:
        """Get the indoor/outdoor sensor readings."""
        return parse_sensor_info(
            await self._async_request("GET", ENDPOINT_SENSOR_INFO)
        )

    async def async_get_control_info(self) -> ControlInfo:
        """Get the current control state."""
        return parse_control_info(await self.async_get_raw_control_info())

    async def async_get_raw_control_info(self) -> RawRecord:
        """Get the current control state as undecoded wire strings."""
        return await self._async_request("GET", ENDPOINT_GET_CONTROL_INFO)

    async def async_set_control_info(self, changes: Mapping[str, Any]) -> None:
        """Change the control state.

        The adapter only accepts a complete parameter set, so the current
        state is read first and the changes are laid over it. This is not
        atomic: two concurrent calls may overwrite each other's changes.

        Args:
            changes: typed control fields to change, e.g. {"stemp": 26}

        Raises:
            DaikinApiError: If the adapter rejects either request
            DaikinConnectionError: If connection fails

        """
        current = await self.async_get_raw_control_info()
        params = merge_control_info(current, changes)
        await self._async_request("GET", ENDPOINT_SET_CONTROL_INFO, params)

    async def async_close(self) -> None:
        """Close the API client session."""
        if self._session and self._close_session:
            await self._session.close()
            self._session = None

    async def _async_request(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawRecord:
        """Send a request and decode the adapter's response.

        Raises:
            ConfigurationError: If no host is configured
            UnsupportedMethod: If method is anything but GET
            DaikinApiError: If the response is malformed or an error status
            DaikinConnectionError: If connection fails

        """
        if not self.host:
            raise ConfigurationError("Host is required")

        if method != "GET":
            raise UnsupportedMethod(f"Target method {method} is not implemented")

        _LOGGER.debug("REQUEST %s %s %s", method, path, params)
        body = await self._async_get(path, params, headers)
        _LOGGER.debug("RESPONSE %s %s %s", method, path, body)

        return decode_response(body)

    async def _async_get(
        self,
        path: str,
        params: Mapping[str, str] | None,
        headers: Mapping[str, str] | None,
    ) -> str:
        """Perform a GET and return the raw body."""
        if self._session is None:
            self._session = aiohttp.ClientSession()

        try:
            response = await self._session.get(
                f"http://{self.host}{path}",
                params=params,
                headers=headers,
                timeout=ClientTimeout(total=REQUEST_TIMEOUT),
            )
            response.raise_for_status()
            return await response.text()
        except (ClientError, TimeoutError) as err:
            raise DaikinConnectionError(
                f"Failed to connect to Daikin adapter: {err}"
            ) from err
