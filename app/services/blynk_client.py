"""Device-cloud (Blynk) HTTP client used when no pushed data is available."""

from __future__ import annotations

import asyncio
import math
from datetime import UTC, datetime
from urllib.parse import quote

import httpx
import structlog

from app.config import Settings
from app.models.enums import SensorSourceEnum
from app.models.sensors import (
	DEFAULT_PH,
	PIN_FLAME,
	PIN_HUMIDITY,
	PIN_PH,
	PIN_PIR,
	PIN_SOIL_MOISTURE,
	PIN_TEMPERATURE,
	PinValue,
	SensorSnapshot,
)

_logger = structlog.get_logger("cropmind.blynk")

POLLED_PINS = (PIN_SOIL_MOISTURE, PIN_PIR, PIN_FLAME, PIN_TEMPERATURE, PIN_HUMIDITY, PIN_PH)


def parse_pin_value(raw: str) -> PinValue:
	"""Numeric text becomes a float, anything else stays a string."""
	text = raw.strip()
	try:
		number = float(text)
	except ValueError:
		return text
	return number if math.isfinite(number) else text


def _numeric(value: PinValue | None, default: float) -> float:
	return value if isinstance(value, float) else default


class BlynkClient:
	def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
		self.settings = settings
		self._transport = transport

	def pin_url(self, token: str, pin: str) -> str:
		return f"https://{self.settings.blynk_server}/external/api/get?token={quote(token, safe='')}&{pin}"

	def _client(self) -> httpx.AsyncClient:
		return httpx.AsyncClient(
			timeout=self.settings.blynk_timeout_seconds,
			headers={"User-Agent": "CropMind/1.0", "Accept": "text/plain, application/json"},
			transport=self._transport,
		)

	async def fetch_pin(self, token: str, pin: str, client: httpx.AsyncClient | None = None) -> PinValue | None:
		"""Current value of one pin, or ``None`` on any HTTP or transport failure."""
		if not token:
			raise ValueError("Blynk token is required")
		if client is None:
			async with self._client() as owned:
				return await self.fetch_pin(token, pin, owned)

		try:
			response = await client.get(self.pin_url(token, pin))
			response.raise_for_status()
		except httpx.TimeoutException:
			_logger.error("blynk_pin_timeout", pin=pin)
			return None
		except httpx.HTTPError as exc:
			_logger.error("blynk_pin_failed", pin=pin, error=str(exc))
			return None
		return parse_pin_value(response.text)

	async def fetch_sensors(self, token: str) -> SensorSnapshot | None:
		"""Poll every field pin concurrently.

		Returns ``None`` when soil moisture, temperature and humidity all come
		back zero or missing, which is how an offline device reports.
		"""
		if not token:
			return None

		async with self._client() as client:
			results = await asyncio.gather(*(self.fetch_pin(token, pin, client) for pin in POLLED_PINS))
		values = dict(zip(POLLED_PINS, results))

		snapshot = SensorSnapshot(
			soil_moisture=_numeric(values[PIN_SOIL_MOISTURE], 0.0),
			pir=_numeric(values[PIN_PIR], 0.0),
			flame=_numeric(values[PIN_FLAME], 0.0),
			temperature=_numeric(values[PIN_TEMPERATURE], 0.0),
			humidity=_numeric(values[PIN_HUMIDITY], 0.0),
			ph=_numeric(values[PIN_PH], DEFAULT_PH),
			timestamp=datetime.now(UTC),
			source=SensorSourceEnum.polling,
		)
		if snapshot.soil_moisture <= 0 and snapshot.temperature <= 0 and snapshot.humidity <= 0:
			_logger.warning("blynk_sensors_empty", token_prefix=token[:8])
			return None
		return snapshot
