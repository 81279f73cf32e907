"""Exceptions for the Daikin Aircon integration."""

from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError


class DaikinAirconError(HomeAssistantError):
    """Base class for all Daikin Aircon errors."""


class ConfigurationError(DaikinAirconError):
    """Exception to indicate the client is missing its target host."""


class UnsupportedMethod(DaikinAirconError):
    """Exception to indicate an HTTP verb other than GET was requested."""


class DaikinConnectionError(DaikinAirconError):
    """Exception to indicate a connection error occurred."""


class DaikinApiError(DaikinAirconError):
    """Exception to indicate the appliance returned an unusable response."""


class MalformedResponse(DaikinApiError):
    """The response does not start with the `ret=` status prefix."""


class InvalidParameters(DaikinApiError):
    """The appliance rejected the request parameters (PARAM NG)."""


class AdvancedError(DaikinApiError):
    """The appliance reported an advanced-mode error (ADV_NG)."""


class UnknownStatus(DaikinApiError):
    """The appliance returned a status token we do not recognise."""

    def __init__(self, status: str) -> None:
        """Initialize the exception with the offending status."""
        super().__init__(f"Unrecognized return message: '{status}'")
        self.status = status
