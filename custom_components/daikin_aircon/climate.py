"""Support for Daikin Aircon climate devices."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from homeassistant.components.climate import (
    ATTR_HVAC_MODE,
    ClimateEntity,
    ClimateEntityFeature,
    HVACMode,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.entity_platform import (
    AddConfigEntryEntitiesCallback,
    async_get_current_platform,
)
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, FAN_DIRECTIONS, FAN_RATES, SERVICE_REBOOT
from .coordinator import DaikinAirconCoordinator
from .exceptions import DaikinAirconError
from .models import Mode

_LOGGER = logging.getLogger(__name__)

HVAC_MODES: dict[Mode, HVACMode] = {
    Mode.AUTO: HVACMode.AUTO,
    Mode.DRY: HVACMode.DRY,
    Mode.COOL: HVACMode.COOL,
    Mode.HEAT: HVACMode.HEAT,
    Mode.FAN: HVACMode.FAN_ONLY,
}
DAIKIN_MODES = {hvac_mode: mode for mode, hvac_mode in HVAC_MODES.items()}

DAIKIN_FAN_RATES = {fan_mode: f_rate for f_rate, fan_mode in FAN_RATES.items()}
DAIKIN_FAN_DIRECTIONS = {swing: f_dir for f_dir, swing in FAN_DIRECTIONS.items()}


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up the Daikin Aircon climate device."""
    coordinator: DaikinAirconCoordinator = hass.data[DOMAIN][entry.entry_id]

    platform = async_get_current_platform()
    platform.async_register_entity_service(SERVICE_REBOOT, None, "async_reboot")

    async_add_entities([DaikinAirconClimate(coordinator, entry)])


class DaikinAirconClimate(CoordinatorEntity[DaikinAirconCoordinator], ClimateEntity):
    """Representation of a Daikin air conditioner."""

    _attr_has_entity_name = True
    _attr_name = None
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.5
    _attr_hvac_modes = [HVACMode.OFF, *HVAC_MODES.values()]
    _attr_fan_modes = list(FAN_RATES.values())
    _attr_swing_modes = list(FAN_DIRECTIONS.values())
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.FAN_MODE
        | ClimateEntityFeature.SWING_MODE
        | ClimateEntityFeature.TURN_ON
        | ClimateEntityFeature.TURN_OFF
    )

    def __init__(
        self, coordinator: DaikinAirconCoordinator, entry: ConfigEntry
    ) -> None:
        """Initialize the climate device."""
        super().__init__(coordinator)

        basic_info = coordinator.basic_info
        self._attr_unique_id = basic_info.mac or entry.entry_id
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, self._attr_unique_id)},
            name=basic_info.name or f"Daikin Aircon {entry.data['host']}",
            manufacturer="Daikin",
            sw_version=basic_info.ver,
        )

    @property
    def hvac_mode(self) -> HVACMode:  # type: ignore[override]
        """Return the current operation mode."""
        control = self.coordinator.data.control
        if not control.pow:
            return HVACMode.OFF
        try:
            return HVAC_MODES[Mode(control.mode)]
        except ValueError:
            # Modes 1 and 7 are variants of auto on some models
            return HVACMode.AUTO

    @property
    def target_temperature(self) -> float | None:  # type: ignore[override]
        """Return the temperature we try to reach."""
        return self.coordinator.data.control.stemp

    @property
    def current_temperature(self) -> float | None:  # type: ignore[override]
        """Return the indoor temperature."""
        return self.coordinator.data.sensor.htemp

    @property
    def current_humidity(self) -> float | None:  # type: ignore[override]
        """Return the indoor humidity."""
        return self.coordinator.data.sensor.hhum

    @property
    def fan_mode(self) -> str | None:  # type: ignore[override]
        """Return the fan setting."""
        return FAN_RATES.get(self.coordinator.data.control.f_rate or "")

    @property
    def swing_mode(self) -> str | None:  # type: ignore[override]
        """Return the swing setting."""
        return FAN_DIRECTIONS.get(self.coordinator.data.control.f_dir or "")

    @property
    def extra_state_attributes(self) -> dict[str, Any]:  # type: ignore[override]
        """Return extra state attributes."""
        return {"outdoor_temperature": self.coordinator.data.sensor.otemp}

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set new operation mode."""
        await self._async_set_control_info(
            self._hvac_mode_changes(hvac_mode), action="set hvac mode"
        )

    async def async_set_temperature(self, **kwargs: Any) -> None:
        """Set new target temperature, optionally with a new mode."""
        changes: dict[str, Any] = {}
        if (hvac_mode := kwargs.get(ATTR_HVAC_MODE)) is not None:
            changes.update(self._hvac_mode_changes(hvac_mode))
        if (temperature := kwargs.get(ATTR_TEMPERATURE)) is not None:
            changes["stemp"] = temperature
        await self._async_set_control_info(changes, action="set temperature")

    async def async_set_fan_mode(self, fan_mode: str) -> None:
        """Set new fan mode."""
        await self._async_set_control_info(
            {"f_rate": DAIKIN_FAN_RATES[fan_mode]}, action="set fan mode"
        )

    async def async_set_swing_mode(self, swing_mode: str) -> None:
        """Set new swing mode."""
        await self._async_set_control_info(
            {"f_dir": DAIKIN_FAN_DIRECTIONS[swing_mode]}, action="set swing mode"
        )

    async def async_turn_on(self) -> None:
        """Turn the device on."""
        await self._async_set_control_info({"pow": True}, action="turn on")

    async def async_turn_off(self) -> None:
        """Turn the device off."""
        await self._async_set_control_info({"pow": False}, action="turn off")

    async def async_reboot(self) -> None:
        """Reboot the wifi adapter."""
        try:
            await self.coordinator.api.async_reboot()
        except DaikinAirconError as err:
            raise HomeAssistantError(
                f"Failed to reboot {self.entity_id}: {err}"
            ) from err

    @staticmethod
    def _hvac_mode_changes(hvac_mode: HVACMode) -> dict[str, Any]:
        if hvac_mode == HVACMode.OFF:
            return {"pow": False}
        return {"pow": True, "mode": DAIKIN_MODES[hvac_mode]}

    async def _async_set_control_info(
        self, changes: Mapping[str, Any], action: str
    ) -> None:
        """Write control changes, with error handling."""
        try:
            await self.coordinator.async_set_control_info(changes)
        except DaikinAirconError as err:
            raise HomeAssistantError(
                f"Failed to {action} ({dict(changes)}) for {self.entity_id}: {err}"
            ) from err
