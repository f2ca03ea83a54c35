"""Pydantic schemas for historical-dataset matching."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from app.models.dataset import MatchQuery, MatchResult
from app.models.enums import MatchPhaseEnum
from app.schemas.common import CamelModel


class DatasetMatchRequest(CamelModel):
	temperature: float = Field(allow_inf_nan=False)
	humidity: float = Field(allow_inf_nan=False)
	moisture: float = Field(allow_inf_nan=False)
	soil_type: str | None = Field(default=None, max_length=100)

	def to_query(self) -> MatchQuery:
		return MatchQuery(
			temperature=self.temperature,
			humidity=self.humidity,
			moisture=self.moisture,
			soil_type=self.soil_type or None,
		)


class DatasetRecommendation(CamelModel):
	crop: str
	fertilizer: str
	soil_type: str
	confidence: float = Field(ge=0.0, le=1.0)
	match_count: int = Field(ge=1)


class DatasetMatchResponse(CamelModel):
	recommendations: list[DatasetRecommendation] = Field(default_factory=list)
	total_matches: int = 0
	source: Literal["dataset"] = "dataset"
	phase: MatchPhaseEnum | None = None

	@classmethod
	def from_result(cls, result: MatchResult) -> "DatasetMatchResponse":
		return cls(
			recommendations=[
				DatasetRecommendation(
					crop=group.crop,
					fertilizer=group.fertilizer,
					soil_type=group.soil_type,
					confidence=group.confidence,
					match_count=group.match_count,
				)
				for group in result.groups
			],
			total_matches=result.total_matches,
			phase=result.phase,
		)


class CatalogResponse(CamelModel):
	items: list[str] = Field(default_factory=list)
	total: int = 0
