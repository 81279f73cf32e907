"""Integration for Daikin Aircon wifi adapters."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_HOST
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from .api import DaikinAirconClient
from .const import DOMAIN, PLATFORMS
from .coordinator import DaikinAirconCoordinator
from .exceptions import DaikinApiError, DaikinConnectionError

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Daikin Aircon from a config entry."""

    api = DaikinAirconClient(entry.data[CONF_HOST])

    # Validate the API connection, this also gives us the device details
    try:
        basic_info = await api.async_validate_connection()
    except (DaikinConnectionError, DaikinApiError) as err:
        await api.async_close()
        raise ConfigEntryNotReady(
            f"Failed to connect to Daikin adapter: {err}"
        ) from err

    coordinator = DaikinAirconCoordinator(hass, api, basic_info)
    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = coordinator

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        coordinator = hass.data[DOMAIN].pop(entry.entry_id)
        await coordinator.api.async_close()

        if not hass.data[DOMAIN]:
            hass.data.pop(DOMAIN)

    return unload_ok
