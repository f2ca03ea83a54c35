from __future__ import annotations

import httpx
import pytest
from httpx import AsyncClient

from app.config import Settings
from app.models.enums import SensorSourceEnum
from app.services.container import ServiceContainer
from app.services.dataset_source import InMemoryDatasetSource
from conftest import FakeClock

TOKEN = "field-device-01"


def _push_all(container: ServiceContainer, **overrides: float) -> None:
	values = {"V0": 48.0, "V1": 0.0, "V2": 0.0, "V3": 24.0, "V4": 66.0, **overrides}
	for pin, value in values.items():
		container.sensor_cache.put(TOKEN, pin, value)


@pytest.mark.asyncio
async def test_snapshot_from_pushed_data(client: AsyncClient, container: ServiceContainer) -> None:
	_push_all(container, V8=6.4)
	response = await client.get("/api/v1/sensors", params={"token": TOKEN})
	assert response.status_code == 200
	body = response.json()
	assert body["soilMoisture"] == 48.0
	assert body["temperature"] == 24.0
	assert body["humidity"] == 66.0
	assert body["ph"] == 6.4
	assert body["status"] == "ok"
	assert body["source"] == "webhook"


@pytest.mark.asyncio
async def test_no_data_anywhere_is_503(client: AsyncClient) -> None:
	response = await client.get("/api/v1/sensors", params={"token": "unknown-device"})
	assert response.status_code == 503


@pytest.mark.asyncio
async def test_token_is_required(client: AsyncClient) -> None:
	response = await client.get("/api/v1/sensors")
	assert response.status_code == 422


@pytest.mark.asyncio
async def test_security_from_pushed_flame(client: AsyncClient, container: ServiceContainer) -> None:
	_push_all(container, V1=1.0, V2=1.0)
	response = await client.get("/api/v1/security", params={"token": TOKEN})
	assert response.status_code == 200
	assert response.json() == {"pir": 1.0, "flame": 1.0, "status": "critical", "source": "webhook"}


@pytest.mark.asyncio
async def test_security_motion_only_is_warning(client: AsyncClient, container: ServiceContainer) -> None:
	_push_all(container, V1=1.0)
	response = await client.get("/api/v1/security", params={"token": TOKEN})
	assert response.json()["status"] == "warning"


@pytest.mark.asyncio
async def test_security_falls_back_to_polling(client: AsyncClient) -> None:
	response = await client.get("/api/v1/security", params={"token": "quiet-device"})
	assert response.status_code == 200
	assert response.json() == {"pir": 0.0, "flame": 0.0, "status": "safe", "source": "polling"}


@pytest.mark.asyncio
async def test_partial_push_falls_back_to_polling(settings: Settings, fake_clock: FakeClock) -> None:
	polled = {"V0": "31", "V1": "0", "V2": "0", "V3": "29.5", "V4": "58", "V8": "6.2"}

	def handler(request: httpx.Request) -> httpx.Response:
		return httpx.Response(200, text=polled[request.url.query.decode().split("&")[-1]])

	container = ServiceContainer.build(
		settings,
		dataset_source=InMemoryDatasetSource(),
		clock=fake_clock,
		http_transport=httpx.MockTransport(handler),
	)
	container.sensor_cache.put(TOKEN, "V0", 48.0)
	container.sensor_cache.put(TOKEN, "V3", 24.0)

	snapshot = await container.sensors.get_snapshot(TOKEN)

	assert snapshot is not None
	assert snapshot.source == SensorSourceEnum.polling
	assert snapshot.soil_moisture == 31.0
	assert snapshot.temperature == 29.5
	assert snapshot.ph == 6.2
