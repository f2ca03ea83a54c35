"""Sensor snapshot assembly — pushed webhook data first, device polling second."""

from __future__ import annotations

import asyncio

import structlog

from app.models.enums import SensorSourceEnum
from app.models.sensors import PIN_FLAME, PIN_PIR, SecurityReading, SensorSnapshot
from app.services.blynk_client import BlynkClient
from app.services.sensor_cache import SensorCache, UnknownTokenError, as_number

_logger = structlog.get_logger("cropmind.sensors")


class SensorService:
	def __init__(self, cache: SensorCache, blynk: BlynkClient):
		self.cache = cache
		self.blynk = blynk

	async def get_snapshot(self, token: str) -> SensorSnapshot | None:
		try:
			snapshot = self.cache.get_composed_snapshot(token)
		except UnknownTokenError:
			snapshot = None
		if snapshot is not None:
			return snapshot

		polled = await self.blynk.fetch_sensors(token)
		if polled is None:
			_logger.warning("sensor_snapshot_unavailable", token_prefix=token[:8])
		return polled

	async def get_security_status(self, token: str) -> SecurityReading:
		pir = self.cache.get(token, PIN_PIR)
		flame = self.cache.get(token, PIN_FLAME)
		if pir is not None and flame is not None:
			return SecurityReading.from_values(
				as_number(pir.value, 0.0),
				as_number(flame.value, 0.0),
				SensorSourceEnum.webhook,
			)

		polled_pir, polled_flame = await asyncio.gather(
			self.blynk.fetch_pin(token, PIN_PIR),
			self.blynk.fetch_pin(token, PIN_FLAME),
		)
		return SecurityReading.from_values(
			polled_pir if isinstance(polled_pir, float) else 0.0,
			polled_flame if isinstance(polled_flame, float) else 0.0,
			SensorSourceEnum.polling,
		)
