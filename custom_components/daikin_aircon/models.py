"""Data models for Daikin Aircon integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class Mode(IntEnum):
    """Operating modes understood by the appliance."""

    AUTO = 0
    DRY = 2
    COOL = 3
    HEAT = 4
    FAN = 6


@dataclass(frozen=True)
class GeneralInfo:
    """Basic adapter information from /common/basic_info."""

    name: str
    mac: str
    ver: str
    pow: bool = False
    led: bool = False
    port: int = 0
    err: int = 0
    pv: int = 0
    extra: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SensorInfo:
    """Sensor readings from /aircon/get_sensor_info."""

    htemp: float | None = None
    otemp: float | None = None
    hhum: float | None = None
    err: int = 0
    extra: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ControlInfo:
    """Control state from /aircon/get_control_info.

    `f_rate` and `f_dir` are appliance specific values and are passed through
    untouched.
    """

    pow: bool = False
    mode: int = 0
    stemp: float | None = None
    shum: float | None = None
    f_rate: str | None = None
    f_dir: str | None = None
    alert: int = 0
    b_mode: int = 0
    b_shum: float | None = None
    extra: dict[str, str] = field(default_factory=dict)


@dataclass
class DaikinAirconData:
    """Local model for the state shared by the coordinator's entities."""

    control: ControlInfo
    sensor: SensorInfo
