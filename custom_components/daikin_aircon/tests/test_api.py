"""Test the Daikin Aircon API client."""

from unittest.mock import AsyncMock, call, patch

from aiohttp.client_exceptions import ClientConnectionError
import pytest

from custom_components.daikin_aircon.api import (
    ENDPOINT_BASIC_INFO,
    ENDPOINT_GET_CONTROL_INFO,
    ENDPOINT_REBOOT,
    ENDPOINT_SENSOR_INFO,
    ENDPOINT_SET_CONTROL_INFO,
    DaikinAirconClient,
)
from custom_components.daikin_aircon.exceptions import (
    ConfigurationError,
    DaikinConnectionError,
    InvalidParameters,
    UnsupportedMethod,
)
from custom_components.daikin_aircon.models import Mode

from .const import BASIC_INFO_RESPONSE, SENSOR_INFO_RESPONSE

CURRENT_CONTROL = "ret=OK,pow=1,mode=3,stemp=24,shum=0,f_rate=A,f_dir=0,alert=255"


def _client(*responses: str | Exception) -> tuple[DaikinAirconClient, AsyncMock]:
    client = DaikinAirconClient("192.0.2.10")
    transport = AsyncMock(side_effect=list(responses))
    client._async_get = transport  # type: ignore[method-assign]
    return client, transport


async def test_get_basic_info() -> None:
    """Test the basic info endpoint."""
    client, transport = _client(BASIC_INFO_RESPONSE)

    info = await client.async_get_basic_info()

    assert info.name == "Living Room"
    transport.assert_awaited_once_with(ENDPOINT_BASIC_INFO, None, None)


async def test_get_sensor_info() -> None:
    """Test the sensor info endpoint."""
    client, transport = _client(SENSOR_INFO_RESPONSE)

    info = await client.async_get_sensor_info()

    assert info.htemp == 22.5
    assert info.hhum is None
    transport.assert_awaited_once_with(ENDPOINT_SENSOR_INFO, None, None)


async def test_get_control_info() -> None:
    """Test the control info endpoint."""
    client, transport = _client("ret=OK,pow=1,mode=3,stemp=24.0,shum=-")

    info = await client.async_get_control_info()

    assert info.pow is True
    assert info.mode == Mode.COOL
    assert info.stemp == 24.0
    assert info.shum is None
    transport.assert_awaited_once_with(ENDPOINT_GET_CONTROL_INFO, None, None)


async def test_reboot() -> None:
    """Test the reboot response is decoded and discarded."""
    client, transport = _client("ret=OK")

    assert await client.async_reboot() is None
    transport.assert_awaited_once_with(ENDPOINT_REBOOT, None, None)


async def test_reboot_rejected() -> None:
    """Test a decode error on a fire-and-forget call still propagates."""
    client, _ = _client("ret=PARAM NG")

    with pytest.raises(InvalidParameters):
        await client.async_reboot()


async def test_set_control_info_merges() -> None:
    """Test a write sends the current state overlaid with the changes."""
    client, transport = _client(CURRENT_CONTROL, "ret=OK")

    await client.async_set_control_info({"stemp": 26})

    assert transport.await_args_list == [
        call(ENDPOINT_GET_CONTROL_INFO, None, None),
        call(
            ENDPOINT_SET_CONTROL_INFO,
            {
                "pow": "1",
                "mode": "3",
                "stemp": "26",
                "shum": "0",
                "f_rate": "A",
                "f_dir": "0",
            },
            None,
        ),
    ]


async def test_set_control_info_read_fails() -> None:
    """Test nothing is written when reading the current state fails."""
    client, transport = _client(DaikinConnectionError("boom"), "ret=OK")

    with pytest.raises(DaikinConnectionError):
        await client.async_set_control_info({"pow": False})

    transport.assert_awaited_once_with(ENDPOINT_GET_CONTROL_INFO, None, None)


async def test_set_control_info_read_rejected() -> None:
    """Test nothing is written when the current state is an error status."""
    client, transport = _client("ret=PARAM NG", "ret=OK")

    with pytest.raises(InvalidParameters):
        await client.async_set_control_info({"pow": False})

    assert transport.await_count == 1


async def test_set_control_info_write_rejected() -> None:
    """Test a rejected write is reported."""
    client, transport = _client(CURRENT_CONTROL, "ret=PARAM NG")

    with pytest.raises(InvalidParameters):
        await client.async_set_control_info({"mode": 9})

    assert transport.await_count == 2


async def test_missing_host() -> None:
    """Test an empty host fails before any request is made."""
    client = DaikinAirconClient("")
    client._async_get = AsyncMock()  # type: ignore[method-assign]

    with pytest.raises(ConfigurationError):
        await client.async_get_basic_info()

    client._async_get.assert_not_awaited()


async def test_unsupported_method() -> None:
    """Test only GET requests are allowed."""
    client, transport = _client("ret=OK")

    with pytest.raises(UnsupportedMethod):
        await client._async_request("POST", ENDPOINT_SET_CONTROL_INFO, {"pow": "1"})

    transport.assert_not_awaited()


async def test_validate_connection() -> None:
    """Test validation returns the basic info."""
    client, _ = _client(BASIC_INFO_RESPONSE)

    info = await client.async_validate_connection()

    assert info.mac == "A0B1C2D3E4F5"


async def test_validate_connection_failure() -> None:
    """Test validation propagates connection errors."""
    client, _ = _client(DaikinConnectionError("unreachable"))

    with pytest.raises(DaikinConnectionError):
        await client.async_validate_connection()


async def test_transport_error_wrapped() -> None:
    """Test aiohttp errors are raised as connection errors, without retry."""
    session = AsyncMock()
    session.get.side_effect = ClientConnectionError("refused")
    client = DaikinAirconClient("192.0.2.10", session=session)

    with pytest.raises(DaikinConnectionError) as exc_info:
        await client.async_get_sensor_info()

    assert isinstance(exc_info.value.__cause__, ClientConnectionError)
    session.get.assert_awaited_once()
    assert session.get.await_args.args == (f"http://192.0.2.10{ENDPOINT_SENSOR_INFO}",)


async def test_close_leaves_shared_session_open() -> None:
    """Test a session passed in by the caller is not closed."""
    session = AsyncMock()
    client = DaikinAirconClient("192.0.2.10", session=session)

    await client.async_close()

    session.close.assert_not_awaited()


async def test_close_owned_session() -> None:
    """Test the client closes the session it created."""
    client = DaikinAirconClient("192.0.2.10")

    with patch(
        "custom_components.daikin_aircon.api.aiohttp.ClientSession"
    ) as session_cls:
        session = session_cls.return_value
        session.get = AsyncMock()
        session.get.return_value.raise_for_status = lambda: None
        session.get.return_value.text = AsyncMock(return_value="ret=OK")
        session.close = AsyncMock()

        await client.async_reboot()
        await client.async_close()

    session.close.assert_awaited_once()
