from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from app.config import Settings
from app.models.enums import SensorSourceEnum
from app.services.blynk_client import BlynkClient, parse_pin_value

PIN_VALUES = {"V0": "48.5", "V1": "1", "V2": "0", "V3": "26.1", "V4": "71"}


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> BlynkClient:
	return BlynkClient(Settings(_env_file=None), transport=httpx.MockTransport(handler))


def _pin_of(request: httpx.Request) -> str:
	return request.url.query.decode().split("&")[-1]


def test_parse_pin_value() -> None:
	assert parse_pin_value(" 42.5\n") == 42.5
	assert parse_pin_value("ON") == "ON"
	assert parse_pin_value("nan") == "nan"


def test_pin_url_escapes_token() -> None:
	client = BlynkClient(Settings(_env_file=None, blynk_server="eu.blynk.cloud"))
	assert client.pin_url("a b&c", "V3") == "https://eu.blynk.cloud/external/api/get?token=a%20b%26c&V3"


@pytest.mark.asyncio
async def test_fetch_sensors_polls_all_pins() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		pin = _pin_of(request)
		if pin == "V8":
			return httpx.Response(400, text="Invalid pin")
		return httpx.Response(200, text=PIN_VALUES[pin])

	snapshot = await _client(handler).fetch_sensors("tok")

	assert snapshot is not None
	assert snapshot.soil_moisture == 48.5
	assert snapshot.pir == 1.0
	assert snapshot.temperature == 26.1
	assert snapshot.humidity == 71.0
	assert snapshot.ph == 6.8
	assert snapshot.source == SensorSourceEnum.polling


@pytest.mark.asyncio
async def test_offline_device_yields_none() -> None:
	snapshot = await _client(lambda request: httpx.Response(200, text="0")).fetch_sensors("tok")
	assert snapshot is None


@pytest.mark.asyncio
async def test_transport_error_is_swallowed_per_pin() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		raise httpx.ConnectError("unreachable", request=request)

	assert await _client(handler).fetch_pin("tok", "V0") is None


@pytest.mark.asyncio
async def test_fetch_pin_requires_token() -> None:
	with pytest.raises(ValueError):
		await _client(lambda request: httpx.Response(200, text="1")).fetch_pin("", "V0")
