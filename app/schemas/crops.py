"""Pydantic schemas for the crop reference table and the best-crop scorer."""

from __future__ import annotations

from app.models.crops import CropProfile, GrowthRange
from app.models.enums import CropCategoryEnum
from app.schemas.common import CamelModel


class GrowthRangeOut(CamelModel):
	min: float
	max: float
	ideal: float

	@classmethod
	def from_range(cls, band: GrowthRange) -> "GrowthRangeOut":
		return cls(min=band.min, max=band.max, ideal=band.ideal)


class PhRangeOut(CamelModel):
	min: float
	max: float


class CropProfileOut(CamelModel):
	name: str
	category: CropCategoryEnum
	moisture: GrowthRangeOut
	temperature: GrowthRangeOut
	humidity: GrowthRangeOut
	npk_ratio: str
	soil_type: str
	irrigation_schedule: str
	ph_range: PhRangeOut

	@classmethod
	def from_profile(cls, crop: CropProfile) -> "CropProfileOut":
		return cls(
			name=crop.name,
			category=crop.category,
			moisture=GrowthRangeOut.from_range(crop.moisture),
			temperature=GrowthRangeOut.from_range(crop.temperature),
			humidity=GrowthRangeOut.from_range(crop.humidity),
			npk_ratio=crop.npk_ratio,
			soil_type=crop.soil_type,
			irrigation_schedule=crop.irrigation_schedule,
			ph_range=PhRangeOut(min=crop.ph_range.min, max=crop.ph_range.max),
		)


class CropListResponse(CamelModel):
	crops: list[CropProfileOut]
	total: int


class BestCropResponse(CamelModel):
	crop: CropProfileOut
	score: float
