"""Static crop reference table (22 Kaggle crop-recommendation crops + extras).

Loaded once at import, never mutated. Values follow the
``atharvaingle/crop-recommendation-dataset`` growing-condition ranges.
"""

from __future__ import annotations

from app.models.crops import CropProfile, GrowthRange, PhRange
from app.models.enums import CropCategoryEnum

FALLBACK_CROP_NAME = "Wheat"

_FREQUENT = "Frequent - Every 1-2 days"
_MODERATE = "Moderate - Every 2-3 days"
_LESS_FREQUENT = "Less Frequent - Every 3-4 days"


def _crop(
	name: str,
	category: CropCategoryEnum,
	moisture: tuple[float, float, float],
	temperature: tuple[float, float, float],
	humidity: tuple[float, float, float],
	npk_ratio: str,
	soil_type: str,
	irrigation_schedule: str,
	ph: tuple[float, float],
) -> CropProfile:
	return CropProfile(
		name=name,
		category=category,
		moisture=GrowthRange(*moisture),
		temperature=GrowthRange(*temperature),
		humidity=GrowthRange(*humidity),
		npk_ratio=npk_ratio,
		soil_type=soil_type,
		irrigation_schedule=irrigation_schedule,
		ph_range=PhRange(*ph),
	)


_C = CropCategoryEnum

# (min, max, ideal) for moisture %, temperature °C, humidity %
CROP_DATABASE: tuple[CropProfile, ...] = (
	# Cereals
	_crop("Rice", _C.cereal, (60, 80, 70), (20, 35, 28), (70, 90, 80), "100-50-50", "Clay", _FREQUENT, (5.5, 7.0)),
	_crop("Wheat", _C.cereal, (50, 70, 60), (12, 25, 20), (50, 70, 60), "80-40-40", "Sandy Loam", _MODERATE, (6.0, 7.5)),
	_crop("Maize", _C.cereal, (50, 70, 60), (15, 30, 24), (50, 70, 60), "120-60-60", "Loamy", _MODERATE, (5.8, 7.0)),
	_crop("Barley", _C.cereal, (50, 70, 60), (10, 20, 15), (50, 70, 60), "80-40-40", "Sandy Loam", _MODERATE, (6.0, 7.5)),
	# Pulses
	_crop("Chickpea", _C.pulse, (40, 60, 50), (20, 30, 25), (50, 70, 60), "0-0-60", "Sandy Loam", _LESS_FREQUENT, (6.0, 7.5)),
	_crop("Kidney Beans", _C.pulse, (50, 70, 60), (20, 30, 25), (60, 80, 70), "0-0-60", "Loamy", _MODERATE, (6.0, 7.0)),
	_crop("Pigeon Pea", _C.pulse, (50, 70, 60), (20, 30, 25), (60, 80, 70), "0-0-60", "Loamy", _MODERATE, (6.0, 7.5)),
	_crop("Moth Beans", _C.pulse, (40, 60, 50), (20, 30, 25), (50, 70, 60), "0-0-60", "Sandy Loam", _LESS_FREQUENT, (6.0, 7.5)),
	_crop("Mung Bean", _C.pulse, (50, 70, 60), (20, 30, 25), (60, 80, 70), "0-0-60", "Loamy", _MODERATE, (6.0, 7.0)),
	_crop("Black Gram", _C.pulse, (50, 70, 60), (20, 30, 25), (60, 80, 70), "0-0-60", "Loamy", _MODERATE, (6.0, 7.0)),
	_crop("Lentil", _C.pulse, (40, 60, 50), (15, 25, 20), (50, 70, 60), "0-0-60", "Sandy Loam", _LESS_FREQUENT, (6.0, 7.5)),
	# Fruits
	_crop("Pomegranate", _C.fruit, (50, 70, 60), (20, 30, 25), (50, 70, 60), "100-50-50", "Sandy Loam", _MODERATE, (5.5, 7.0)),
	_crop("Banana", _C.fruit, (60, 80, 70), (25, 35, 30), (70, 90, 80), "150-50-200", "Loamy", _FREQUENT, (5.5, 7.0)),
	_crop("Mango", _C.fruit, (50, 70, 60), (25, 35, 30), (60, 80, 70), "100-50-50", "Loamy", _MODERATE, (5.5, 7.5)),
	_crop("Grapes", _C.fruit, (50, 70, 60), (20, 30, 25), (50, 70, 60), "100-50-50", "Sandy Loam", _MODERATE, (5.5, 7.0)),
	_crop("Watermelon", _C.fruit, (60, 80, 70), (25, 35, 30), (60, 80, 70), "100-50-50", "Sandy Loam", _FREQUENT, (5.5, 7.0)),
	_crop("Muskmelon", _C.fruit, (50, 70, 60), (25, 35, 30), (60, 80, 70), "100-50-50", "Sandy Loam", _MODERATE, (5.5, 7.0)),
	_crop("Apple", _C.fruit, (50, 70, 60), (10, 20, 15), (50, 70, 60), "100-50-50", "Loamy", _MODERATE, (5.5, 7.0)),
	_crop("Orange", _C.fruit, (50, 70, 60), (20, 30, 25), (60, 80, 70), "100-50-50", "Loamy", _MODERATE, (5.5, 7.0)),
	_crop("Papaya", _C.fruit, (50, 70, 60), (25, 35, 30), (60, 80, 70), "100-50-50", "Sandy Loam", _MODERATE, (5.5, 7.0)),
	_crop("Coconut", _C.fruit, (60, 80, 70), (25, 35, 30), (70, 90, 80), "100-50-50", "Sandy Loam", _FREQUENT, (5.5, 7.0)),
	# Cash crops
	_crop("Cotton", _C.cash_crop, (50, 70, 60), (21, 30, 26), (50, 70, 60), "100-50-50", "Loamy", _MODERATE, (5.5, 7.5)),
	_crop("Jute", _C.cash_crop, (60, 80, 70), (25, 35, 30), (70, 90, 80), "100-50-50", "Loamy", _FREQUENT, (5.5, 7.0)),
	_crop("Coffee", _C.cash_crop, (50, 70, 60), (15, 25, 20), (60, 80, 70), "100-50-50", "Loamy", _MODERATE, (5.5, 6.5)),
	# Oilseeds and vegetables from other datasets
	_crop("Soybean", _C.oilseed, (50, 70, 60), (20, 30, 25), (60, 80, 70), "0-0-60", "Loamy", _MODERATE, (6.0, 7.0)),
	_crop("Groundnut", _C.oilseed, (50, 70, 60), (25, 30, 28), (60, 80, 70), "0-0-60", "Sandy Loam", _MODERATE, (5.5, 7.0)),
	_crop("Sunflower", _C.oilseed, (50, 70, 60), (20, 30, 25), (50, 70, 60), "80-40-40", "Sandy Loam", _MODERATE, (6.0, 7.5)),
	_crop("Tomato", _C.vegetable, (60, 80, 70), (18, 25, 22), (60, 80, 70), "100-50-100", "Sandy Loam", _FREQUENT, (5.5, 7.0)),
	_crop("Potato", _C.vegetable, (60, 80, 70), (15, 20, 18), (70, 85, 80), "120-80-120", "Loamy", _FREQUENT, (5.0, 6.5)),
	_crop("Sugarcane", _C.cash_crop, (70, 85, 80), (26, 32, 29), (70, 90, 80), "200-100-100", "Loamy", _FREQUENT, (5.5, 7.5)),
)

_BY_NAME: dict[str, CropProfile] = {crop.name.lower(): crop for crop in CROP_DATABASE}


def all_crops() -> tuple[CropProfile, ...]:
	return CROP_DATABASE


def get_crop(name: str) -> CropProfile | None:
	"""Case-insensitive lookup; ``None`` for unknown names."""
	return _BY_NAME.get(name.strip().lower())


def crops_by_category(category: CropCategoryEnum) -> list[CropProfile]:
	return [crop for crop in CROP_DATABASE if crop.category == category]


def fallback_crop() -> CropProfile:
	return _BY_NAME[FALLBACK_CROP_NAME.lower()]
