"""Layered recommendation orchestration: dataset → model → rule-based."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import structlog

from app.models.dataset import MatchQuery, MatchResult
from app.models.enums import RecommendationSourceEnum
from app.models.sensors import FieldReading
from app.services import advisory, crop_scorer
from app.services.dataset_matcher import DatasetMatcher
from app.services.model_service import RecommendationModel

MAX_ALTERNATES = 3
DEFAULT_MODEL_TIMEOUT_SECONDS = 10.0

_logger = structlog.get_logger("cropmind.recommendations")


@dataclass(slots=True)
class RecommendationResult:
	recommendations: list[str]
	confidence: float
	source: str
	crop: str | None = None
	fertilizer: str | None = None
	soil_type: str | None = None
	match_count: int | None = None
	alternates: list[str] = field(default_factory=list)


def format_dataset_advice(match: MatchResult) -> RecommendationResult:
	"""Advisory lines for the top dataset group plus up to three alternates."""
	primary = match.groups[0]
	lines = [
		f"🌾 Recommended crop: {primary.crop}",
		f"🧪 Recommended fertilizer: {primary.fertilizer}",
		f"🪨 Suitable soil type: {primary.soil_type}",
		f"📊 Confidence: {round(primary.confidence * 100)}% (based on {primary.match_count} similar records)",
	]
	alternates = [f"{group.crop} with {group.fertilizer} on {group.soil_type} soil" for group in match.groups[1 : 1 + MAX_ALTERNATES]]
	if alternates:
		lines.append("🔄 Alternatives: " + "; ".join(alternates))
	return RecommendationResult(
		recommendations=lines,
		confidence=primary.confidence,
		source=RecommendationSourceEnum.dataset.value,
		crop=primary.crop,
		fertilizer=primary.fertilizer,
		soil_type=primary.soil_type,
		match_count=primary.match_count,
		alternates=[group.crop for group in match.groups[1 : 1 + MAX_ALTERNATES]],
	)


def rule_based_advice(reading: FieldReading) -> RecommendationResult:
	assessment = advisory.assess_conditions(reading.moisture, reading.temperature, reading.humidity)
	best = crop_scorer.find_best_crop(reading.moisture, reading.temperature, reading.humidity)
	return RecommendationResult(
		recommendations=assessment.messages,
		confidence=assessment.confidence,
		source=RecommendationSourceEnum.rule_based.value,
		crop=best.crop.name,
	)


class RecommendationService:
	"""Tries each tier in order and returns the first non-empty answer.

	A failing or slow tier is logged and skipped; only the rule-based tier,
	which always answers for finite input, is allowed to raise.
	"""

	def __init__(
		self,
		matcher: DatasetMatcher,
		model: RecommendationModel | None = None,
		model_timeout_seconds: float = DEFAULT_MODEL_TIMEOUT_SECONDS,
	):
		self.matcher = matcher
		self.model = model
		self.model_timeout_seconds = model_timeout_seconds

	async def recommend(self, reading: FieldReading, soil_type: str | None = None) -> RecommendationResult:
		crop_scorer.require_finite(
			moisture=reading.moisture,
			temperature=reading.temperature,
			humidity=reading.humidity,
		)

		result = await self._from_dataset(reading, soil_type)
		if result is not None:
			return result

		result = await self._from_model(reading)
		if result is not None:
			return result

		return rule_based_advice(reading)

	async def _from_dataset(self, reading: FieldReading, soil_type: str | None) -> RecommendationResult | None:
		query = MatchQuery(
			temperature=reading.temperature,
			humidity=reading.humidity,
			moisture=reading.moisture,
			soil_type=soil_type,
		)
		try:
			match = await self.matcher.find_recommendations(query)
		except Exception as exc:
			_logger.exception("dataset_tier_failed", error=str(exc))
			return None
		if match.is_empty:
			return None
		return format_dataset_advice(match)

	async def _from_model(self, reading: FieldReading) -> RecommendationResult | None:
		if self.model is None:
			return None
		try:
			prediction = await asyncio.wait_for(self.model.recommend(reading), timeout=self.model_timeout_seconds)
		except TimeoutError:
			_logger.warning("model_tier_timeout", timeout_seconds=self.model_timeout_seconds)
			return None
		except Exception as exc:
			_logger.warning("model_tier_failed", error=str(exc))
			return None
		if prediction is None or not prediction.recommendations:
			return None
		return RecommendationResult(
			recommendations=prediction.recommendations,
			confidence=prediction.confidence,
			source=prediction.source or RecommendationSourceEnum.kaggle.value,
			crop=prediction.crop,
		)
