"""Shared pytest fixtures — async test client, injected container, fake collaborators."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import app
from app.models.dataset import HistoricalRecord
from app.models.sensors import FieldReading
from app.services.container import ServiceContainer
from app.services.dataset_source import InMemoryDatasetSource
from app.services.model_service import ModelRecommendation


class FakeClock:
	"""Manually advanced time source for TTL tests."""

	def __init__(self, start: float = 1_700_000_000.0) -> None:
		self.now = start

	def __call__(self) -> float:
		return self.now

	def advance(self, seconds: float) -> None:
		self.now += seconds


class FakeRedis:
	def __init__(self) -> None:
		self._counter: dict[str, int] = {}
		self.incr = AsyncMock(side_effect=self._incr)
		self.expire = AsyncMock(return_value=True)

	async def _incr(self, key: str) -> int:
		value = self._counter.get(key, 0) + 1
		self._counter[key] = value
		return value

	def reset_counters(self) -> None:
		self._counter.clear()


class FakeModel:
	"""Model-tier stand-in that returns a canned answer or raises."""

	def __init__(self, result: ModelRecommendation | None = None, error: Exception | None = None) -> None:
		self.result = result
		self.error = error
		self.calls: list[FieldReading] = []

	async def recommend(self, reading: FieldReading) -> ModelRecommendation | None:
		self.calls.append(reading)
		if self.error is not None:
			raise self.error
		return self.result


def _offline_blynk(request: httpx.Request) -> httpx.Response:
	return httpx.Response(503, text="device offline")


@pytest.fixture
def fake_clock() -> FakeClock:
	return FakeClock()


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@pytest.fixture
def settings() -> Settings:
	return Settings(
		_env_file=None,
		dataset_path="does-not-exist.csv",
		kaggle_api_url="",
		kaggle_username="",
		kaggle_api_key="",
		redis_url="",
	)


@pytest.fixture
def sample_records() -> list[HistoricalRecord]:
	return [
		HistoricalRecord(25, 60, 55, "Clay", "Rice", "Urea"),
		HistoricalRecord(27, 62, 50, "Clay", "Rice", "Urea"),
		HistoricalRecord(24, 58, 60, "Loam", "Wheat", "DAP"),
		HistoricalRecord(38, 30, 20, "Sandy", "Millets", "28-28"),
	]


@pytest.fixture
def container(settings: Settings, sample_records: list[HistoricalRecord], fake_clock: FakeClock) -> ServiceContainer:
	"""Container over an in-memory dataset, a failing model and an offline device cloud."""
	return ServiceContainer.build(
		settings,
		dataset_source=InMemoryDatasetSource(sample_records),
		model=FakeModel(error=RuntimeError("model unavailable")),
		clock=fake_clock,
		http_transport=httpx.MockTransport(_offline_blynk),
	)


@pytest.fixture
async def client(container: ServiceContainer) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and the container injected."""
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan
	app.state.container = container
	app.state.redis = None

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.state.container = None
	app.state.redis = None
