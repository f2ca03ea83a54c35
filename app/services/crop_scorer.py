"""Best-crop scorer — weighted distance of a reading to every reference crop."""

from __future__ import annotations

import math
from dataclasses import dataclass

from app.models.crops import CropProfile, GrowthRange
from app.services import crop_catalog

OUT_OF_RANGE_PENALTY = 2.0


class InvalidReadingError(ValueError):
	"""Raised when a reading contains NaN or infinite values."""


@dataclass(frozen=True, slots=True)
class CropScore:
	crop: CropProfile
	score: float


def require_finite(**values: float) -> None:
	for name, value in values.items():
		if not math.isfinite(value):
			raise InvalidReadingError(f"{name} must be a finite number, got {value!r}")


def score_dimension(observed: float, band: GrowthRange) -> float:
	"""100 at the ideal point, falling linearly inside the band; negative outside."""
	if band.contains(observed):
		if band.span == 0:
			return 100.0
		return (1.0 - abs(observed - band.ideal) / band.span) * 100.0
	distance = min(abs(observed - band.min), abs(observed - band.max))
	return -OUT_OF_RANGE_PENALTY * distance


def score_crop(crop: CropProfile, moisture: float, temperature: float, humidity: float) -> float:
	require_finite(moisture=moisture, temperature=temperature, humidity=humidity)
	total = (
		score_dimension(moisture, crop.moisture)
		+ score_dimension(temperature, crop.temperature)
		+ score_dimension(humidity, crop.humidity)
	)
	return total / 3.0


def rank_crops(moisture: float, temperature: float, humidity: float) -> list[CropScore]:
	"""All reference crops sorted by score, best first (table order on ties)."""
	scored = [
		CropScore(crop=crop, score=score_crop(crop, moisture, temperature, humidity))
		for crop in crop_catalog.all_crops()
	]
	scored.sort(key=lambda item: item.score, reverse=True)
	return scored


def find_best_crop(moisture: float, temperature: float, humidity: float) -> CropScore:
	"""Pick the best-fitting crop; falls back to Wheat at score 0 when nothing scores above 0."""
	ranked = rank_crops(moisture, temperature, humidity)
	best = ranked[0]
	if best.score > 0:
		return best
	return CropScore(crop=crop_catalog.fallback_crop(), score=0.0)
