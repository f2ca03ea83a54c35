"""Historical crop/fertilizer records and the per-request match groups."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.models.enums import MatchPhaseEnum


@dataclass(frozen=True, slots=True)
class HistoricalRecord:
    """One row of the flat historical dataset.

    Numeric fields hold ``nan`` when the source value could not be parsed.
    """

    temperature: float
    humidity: float
    moisture: float
    soil_type: str
    crop: str
    fertilizer: str


@dataclass(frozen=True, slots=True)
class MatchQuery:
    temperature: float
    humidity: float
    moisture: float
    soil_type: str | None = None


@dataclass(slots=True)
class RecommendationGroup:
    """Records collapsed on ``(crop, fertilizer, soil_type)``."""

    crop: str
    fertilizer: str
    soil_type: str
    match_count: int
    confidence: float
    similar_records: list[HistoricalRecord] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.crop, self.fertilizer, self.soil_type)


@dataclass(slots=True)
class MatchResult:
    groups: list[RecommendationGroup]
    total_matches: int
    phase: MatchPhaseEnum | None = None

    @property
    def is_empty(self) -> bool:
        return not self.groups
