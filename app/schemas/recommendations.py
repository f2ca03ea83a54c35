"""Pydantic schemas for the layered recommendation endpoint."""

from __future__ import annotations

from pydantic import Field

from app.models.sensors import FieldReading
from app.schemas.common import CamelModel


class FieldReadingIn(CamelModel):
	moisture: float = Field(allow_inf_nan=False, description="Soil moisture, %")
	temperature: float = Field(allow_inf_nan=False, description="Air temperature, °C")
	humidity: float = Field(allow_inf_nan=False, description="Relative humidity, %")

	def to_reading(self) -> FieldReading:
		return FieldReading(moisture=self.moisture, temperature=self.temperature, humidity=self.humidity)


class RecommendationRequest(FieldReadingIn):
	soil_type: str | None = Field(default=None, max_length=100)


class RecommendationResponse(CamelModel):
	recommendations: list[str] = Field(default_factory=list)
	confidence: float = Field(ge=0.0, le=1.0)
	source: str
	crop: str | None = None
	fertilizer: str | None = None
	soil_type: str | None = None
	match_count: int | None = None
	alternates: list[str] | None = None
