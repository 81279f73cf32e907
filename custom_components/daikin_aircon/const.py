"""Constants for the Daikin Aircon integration."""

from homeassistant.const import Platform

DOMAIN = "daikin_aircon"

# Platforms
PLATFORMS = [Platform.CLIMATE]

REQUEST_TIMEOUT = 10  # seconds

# Fan rates (f_rate) as reported by the appliance
FAN_RATES = {
    "A": "auto",
    "B": "silence",
    "3": "level_1",
    "4": "level_2",
    "5": "level_3",
    "6": "level_4",
    "7": "level_5",
}

# Fan directions (f_dir) as reported by the appliance
FAN_DIRECTIONS = {
    "0": "off",
    "1": "vertical",
    "2": "horizontal",
    "3": "both",
}

SERVICE_REBOOT = "reboot"
