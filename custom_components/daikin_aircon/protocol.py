"""Codec for the Daikin Aircon `ret=...,key=value` protocol."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import fields
from enum import StrEnum
import logging
import math
import re
from types import MappingProxyType
from typing import Any, NamedTuple, TypeVar
from urllib.parse import unquote

from .exceptions import (
    AdvancedError,
    InvalidParameters,
    MalformedResponse,
    UnknownStatus,
)
from .models import ControlInfo, GeneralInfo, SensorInfo

_LOGGER = logging.getLogger(__name__)

RESPONSE_PREFIX = "ret="

RET_MSG_OK = "OK"
RET_MSG_PARAM_NG = "PARAM NG"
RET_MSG_ADV_NG = "ADV_NG"

# "sensor unavailable" markers used by the appliance for temperatures
TEMPERATURE_SENTINELS = (None, "-", "--")
TEMPERATURE_SENTINEL_OUT = "-"

# The write endpoint needs all of these on every request
REQUIRED_CONTROL_FIELDS = ("pow", "mode", "stemp", "shum", "f_rate", "f_dir")

_INT_RE = re.compile(r"\s*[-+]?\d+")
# escapes that decodeURI leaves alone: ; / ? : @ & = + $ , #
_RESERVED_ESCAPE_RE = re.compile(r"%(?=2[346BbCcFf]|3[ABbDdFf]|40)")
_FLOAT_RE = re.compile(r"\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")

_T = TypeVar("_T")

RawRecord = dict[str, str]


class CoercionKind(StrEnum):
    """How a raw string field is typed."""

    INT = "int"
    TEMPERATURE = "temperature"
    BOOL = "bool"
    DEFAULT = "default"


class Coercion(NamedTuple):
    """A pair of pure functions: wire -> typed and typed -> wire."""

    parse: Callable[[Any], Any]
    format: Callable[[Any], Any]


Schema = Mapping[CoercionKind, tuple[str, ...]]


def parse_int(value: Any) -> int:
    """Parse a leading base-10 integer, 0 when there is none."""
    if value is None or isinstance(value, bool):
        return int(bool(value))
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _INT_RE.match(str(value))
    if not match:
        return 0
    try:
        return int(match.group())
    except ValueError:
        # past the interpreter's integer string conversion limit
        return 0


def format_int(value: Any) -> str:
    """Render an integer field for the wire."""
    return str(parse_int(value))


def parse_temperature(value: Any) -> float | None:
    """Parse a temperature (or humidity), None when the sensor has no reading."""
    if value in TEMPERATURE_SENTINELS:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        temperature: float | None = float(value)
    else:
        match = _FLOAT_RE.match(str(value))
        temperature = float(match.group()) if match else None
    if temperature is None or not math.isfinite(temperature):
        return None
    return temperature


def format_temperature(value: Any) -> str:
    """Render a temperature for the wire, `-` when there is none."""
    temperature = parse_temperature(value)
    if temperature is None:
        return TEMPERATURE_SENTINEL_OUT
    if temperature.is_integer():
        return str(int(temperature))
    return str(temperature)


def parse_bool(value: Any) -> bool:
    """Parse a flag; anything but a true marker is False."""
    if isinstance(value, bool):
        return value
    return value in ("1", "true", 1)


def format_bool(value: Any) -> str:
    """Render a flag for the wire."""
    return "1" if parse_bool(value) else "0"


def _identity(value: _T) -> _T:
    return value


COERCIONS: Mapping[CoercionKind, Coercion] = MappingProxyType(
    {
        CoercionKind.INT: Coercion(parse_int, format_int),
        CoercionKind.TEMPERATURE: Coercion(parse_temperature, format_temperature),
        CoercionKind.BOOL: Coercion(parse_bool, format_bool),
        CoercionKind.DEFAULT: Coercion(_identity, _identity),
    }
)

BASIC_INFO_SCHEMA: Schema = MappingProxyType(
    {
        CoercionKind.INT: ("port", "err", "pv"),
        CoercionKind.BOOL: ("pow", "led"),
    }
)

SENSOR_INFO_SCHEMA: Schema = MappingProxyType(
    {
        CoercionKind.INT: ("err",),
        CoercionKind.TEMPERATURE: ("hhum", "htemp", "otemp"),
    }
)

CONTROL_INFO_SCHEMA: Schema = MappingProxyType(
    {
        CoercionKind.INT: ("alert", "mode", "b_mode"),
        CoercionKind.TEMPERATURE: ("shum", "stemp", "b_shum"),
        CoercionKind.BOOL: ("pow",),
    }
)


def parse_fields(record: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    """Return a copy of a raw record with the schema's fields typed.

    Fields named by the schema but missing from the record are added with the
    default of their kind. Fields not named by the schema are left as they are.
    """
    result = dict(record)
    for kind, names in schema.items():
        parse = COERCIONS.get(kind, COERCIONS[CoercionKind.DEFAULT]).parse
        for name in names:
            result[name] = parse(record.get(name))
    return result


def format_fields(record: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    """Return a copy of a typed record with the schema's fields as wire strings.

    Only fields present in the record are formatted. A None value is left as
    None, except for temperatures where it means "no setpoint" and is sent as
    the sentinel.
    """
    result = dict(record)
    for kind, names in schema.items():
        format_ = COERCIONS.get(kind, COERCIONS[CoercionKind.DEFAULT]).format
        for name in names:
            if name not in record:
                continue
            if record[name] is None and kind != CoercionKind.TEMPERATURE:
                continue
            result[name] = format_(record[name])
    return result


def decode_response(payload: str) -> RawRecord:
    """Transform an appliance response into a raw record.

    Args:
        payload: the response body, e.g. `ret=OK,pow=1,mode=3`

    Returns:
        The percent-decoded `key=value` pairs that follow the status

    Raises:
        MalformedResponse: If the body does not start with `ret=`
        InvalidParameters: If the appliance answered `PARAM NG`
        AdvancedError: If the appliance answered `ADV_NG`
        UnknownStatus: If the appliance answered anything else but `OK`

    """
    parts = payload.split(",")
    if not parts or not parts[0].startswith(RESPONSE_PREFIX):
        raise MalformedResponse("Unrecognized data format for the response")

    ret_msg = parts[0][len(RESPONSE_PREFIX) :]
    if ret_msg == RET_MSG_PARAM_NG:
        raise InvalidParameters("Wrong parameters")
    if ret_msg == RET_MSG_ADV_NG:
        raise AdvancedError("Wrong ADV")
    if ret_msg != RET_MSG_OK:
        raise UnknownStatus(ret_msg)

    record: RawRecord = {}
    for part in parts[1:]:
        key, sep, value = part.partition("=")
        if not sep:
            _LOGGER.debug("Dropping malformed field: %r", part)
            continue
        record[unquote(key)] = unquote(value)
    return record


def unquote_uri(value: str) -> str:
    """Decode a whole URI: escapes of reserved characters stay encoded."""
    return unquote(_RESERVED_ESCAPE_RE.sub("%25", value))


def _build(cls: type[_T], record: Mapping[str, Any]) -> _T:
    """Build a dataclass, collecting unknown fields under `extra`."""
    names = {f.name for f in fields(cls)} - {"extra"}  # type: ignore[arg-type]
    known = {k: v for k, v in record.items() if k in names}
    extra = {k: v for k, v in record.items() if k not in names}
    return cls(**known, extra=extra)


def parse_basic_info(record: Mapping[str, str]) -> GeneralInfo:
    """Type the basic info record; `name` is double encoded by the appliance."""
    data = parse_fields(record, BASIC_INFO_SCHEMA)
    data["name"] = unquote_uri(data.get("name", ""))
    data.setdefault("mac", "")
    data.setdefault("ver", "")
    return _build(GeneralInfo, data)


def parse_sensor_info(record: Mapping[str, str]) -> SensorInfo:
    """Type the sensor info record."""
    return _build(SensorInfo, parse_fields(record, SENSOR_INFO_SCHEMA))


def parse_control_info(record: Mapping[str, str]) -> ControlInfo:
    """Type the control info record."""
    return _build(ControlInfo, parse_fields(record, CONTROL_INFO_SCHEMA))


def format_control_info(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Render a control change-set as wire strings."""
    return format_fields(changes, CONTROL_INFO_SCHEMA)


def merge_control_info(
    current: Mapping[str, str], changes: Mapping[str, Any]
) -> dict[str, str]:
    """Overlay a change-set onto the current raw control state.

    The write endpoint expects the complete parameter set, so the required
    fields are copied verbatim from the current state and the formatted
    changes are laid over them. Changes set to None (other than
    temperatures) are not sent, so the current value is kept.

    Args:
        current: raw control record as decoded from the appliance
        changes: typed control fields to change

    Returns:
        The query parameters for /aircon/set_control_info

    """
    merged = {
        name: current[name] for name in REQUIRED_CONTROL_FIELDS if name in current
    }
    merged.update(
        (name, value)
        for name, value in format_control_info(changes).items()
        if value is not None
    )
    return merged
