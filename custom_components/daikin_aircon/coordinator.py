"""Data update coordinator for Daikin Aircon devices."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .api import DaikinAirconClient
from .const import DOMAIN
from .exceptions import DaikinApiError, DaikinConnectionError
from .models import DaikinAirconData, GeneralInfo

_LOGGER = logging.getLogger(__name__)


class DaikinAirconCoordinator(DataUpdateCoordinator[DaikinAirconData]):
    """Daikin Aircon data update coordinator.

    There is no update interval: data is refreshed at setup, after each write
    and when an entity update is requested.
    """

    def __init__(
        self, hass: HomeAssistant, api: DaikinAirconClient, basic_info: GeneralInfo
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            update_interval=None,
        )
        self.api = api
        self.basic_info = basic_info

    async def _async_update_data(self) -> DaikinAirconData:
        """Fetch data from API.

        Raises:
            UpdateFailed: If the update operation fails

        """
        try:
            control = await self.api.async_get_control_info()
            sensor = await self.api.async_get_sensor_info()
        except DaikinConnectionError as err:
            raise UpdateFailed(
                f"Error communicating with Daikin adapter: {err}"
            ) from err
        except DaikinApiError as err:
            raise UpdateFailed(f"Invalid response from Daikin adapter: {err}") from err

        return DaikinAirconData(control=control, sensor=sensor)

    async def async_set_control_info(self, changes: Mapping[str, Any]) -> None:
        """Write control changes and refresh the state."""
        _LOGGER.debug("Setting control info: %s", changes)
        await self.api.async_set_control_info(changes)
        await self.async_request_refresh()
