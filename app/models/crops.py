"""Crop reference profiles — static agronomic growing-condition ranges.

Each profile carries three range triples (moisture %, temperature °C,
humidity %) used by the best-crop scorer::

    GrowthRange(min=60, max=80, ideal=70)

``npk_ratio`` and ``ph_range`` are descriptive only; the scorer does not
read them.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.models.enums import CropCategoryEnum


@dataclass(frozen=True, slots=True)
class GrowthRange:
    """Acceptable band for one growing condition with its ideal point."""

    min: float
    max: float
    ideal: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    @property
    def span(self) -> float:
        return self.max - self.min

    def describe(self, unit: str) -> str:
        return f"{self.min:g}-{self.max:g}{unit}"


@dataclass(frozen=True, slots=True)
class PhRange:
    min: float
    max: float


@dataclass(frozen=True, slots=True)
class CropProfile:
    """Agronomic reference: one crop and its preferred conditions."""

    name: str
    category: CropCategoryEnum
    moisture: GrowthRange
    temperature: GrowthRange
    humidity: GrowthRange
    npk_ratio: str
    soil_type: str
    irrigation_schedule: str
    ph_range: PhRange

    def __repr__(self) -> str:
        return f"<CropProfile name={self.name!r} category={self.category.value!r}>"
