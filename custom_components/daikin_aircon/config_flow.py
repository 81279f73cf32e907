"""Config flow for Daikin Aircon integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_HOST

from .api import DaikinAirconClient
from .const import DOMAIN
from .exceptions import ConfigurationError, DaikinApiError, DaikinConnectionError

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): str,
    }
)


class DaikinAirconConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Daikin Aircon."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            host = user_input[CONF_HOST].strip()

            await self.async_set_unique_id(host)
            self._abort_if_unique_id_configured()

            api = DaikinAirconClient(host)
            try:
                await api.async_validate_connection()

                return self.async_create_entry(
                    title=f"Daikin Aircon ({host})",
                    data={CONF_HOST: host},
                )
            except ConfigurationError:
                errors[CONF_HOST] = "invalid_host"
            except DaikinConnectionError:
                errors["base"] = "cannot_connect"
            except DaikinApiError:
                errors["base"] = "invalid_response"
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception("Unexpected exception")
                errors["base"] = "unknown"
            finally:
                await api.async_close()

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )
