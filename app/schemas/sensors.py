"""Pydantic schemas for webhook ingestion and live sensor reads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from app.models.enums import SecurityStatusEnum, SensorSourceEnum
from app.models.sensors import SecurityReading, SensorSnapshot
from app.schemas.common import CamelModel


class WebhookReceipt(CamelModel):
	success: bool = True
	message: str = "Webhook data received"
	pin: str
	value: float | str
	source: Literal["webhook"] = "webhook"


class SensorSnapshotResponse(CamelModel):
	timestamp: datetime
	soil_moisture: float
	temperature: float
	humidity: float
	ph: float
	pir: float
	flame: float
	status: Literal["ok"] = "ok"
	source: SensorSourceEnum

	@classmethod
	def from_snapshot(cls, snapshot: SensorSnapshot) -> "SensorSnapshotResponse":
		return cls(
			timestamp=snapshot.timestamp,
			soil_moisture=snapshot.soil_moisture,
			temperature=snapshot.temperature,
			humidity=snapshot.humidity,
			ph=snapshot.ph,
			pir=snapshot.pir,
			flame=snapshot.flame,
			source=snapshot.source,
		)


class SecurityStatusResponse(CamelModel):
	pir: float
	flame: float
	status: SecurityStatusEnum
	source: SensorSourceEnum

	@classmethod
	def from_reading(cls, reading: SecurityReading) -> "SecurityStatusResponse":
		return cls(pir=reading.pir, flame=reading.flame, status=reading.status, source=reading.source)
