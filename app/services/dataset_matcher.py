"""Historical-dataset matcher — windowed lookup with nearest-neighbour fallback."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable

from app.models.dataset import HistoricalRecord, MatchQuery, MatchResult, RecommendationGroup
from app.models.enums import MatchPhaseEnum
from app.services.dataset_source import HistoricalDataset

TEMPERATURE_WINDOW = 5.0
HUMIDITY_WINDOW = 10.0
MOISTURE_WINDOW = 10.0
TEMPERATURE_WEIGHT = 2.0

NEAREST_POOL_SIZE = 50
EXACT_RESULT_LIMIT = 10
NEAREST_RESULT_LIMIT = 5
EXACT_SAMPLE_SIZE = 5
NEAREST_SAMPLE_SIZE = 3


def in_window(record: HistoricalRecord, query: MatchQuery) -> bool:
	"""True when the record falls inside the fixed match window (bounds inclusive).

	NaN fields compare false and therefore never match.
	"""
	within = (
		abs(record.temperature - query.temperature) <= TEMPERATURE_WINDOW
		and abs(record.humidity - query.humidity) <= HUMIDITY_WINDOW
		and abs(record.moisture - query.moisture) <= MOISTURE_WINDOW
	)
	if not within:
		return False
	if query.soil_type:
		return record.soil_type.lower() == query.soil_type.lower()
	return True


def weighted_distance(record: HistoricalRecord, query: MatchQuery) -> float:
	return (
		TEMPERATURE_WEIGHT * abs(record.temperature - query.temperature)
		+ abs(record.humidity - query.humidity)
		+ abs(record.moisture - query.moisture)
	)


def exact_confidence(match_count: int) -> float:
	return min(1.0, match_count / 100)


def nearest_confidence(match_count: int) -> float:
	# Decreases as the group grows; kept as-is pending product clarification.
	return max(0.5, 1.0 - match_count / 200)


def group_records(
	records: Iterable[HistoricalRecord],
	confidence: Callable[[int], float],
	sample_size: int,
) -> list[RecommendationGroup]:
	"""Collapse records on (crop, fertilizer, soil type), ranked by confidence then count."""
	buckets: dict[tuple[str, str, str], list[HistoricalRecord]] = {}
	for record in records:
		buckets.setdefault((record.crop, record.fertilizer, record.soil_type), []).append(record)

	groups = [
		RecommendationGroup(
			crop=crop,
			fertilizer=fertilizer,
			soil_type=soil_type,
			match_count=len(members),
			confidence=confidence(len(members)),
			similar_records=members[:sample_size],
		)
		for (crop, fertilizer, soil_type), members in buckets.items()
	]
	groups.sort(key=lambda group: (group.confidence, group.match_count), reverse=True)
	return groups


def match_records(records: list[HistoricalRecord], query: MatchQuery) -> MatchResult:
	"""Pure two-phase match over an already-loaded record list."""
	if not records:
		return MatchResult(groups=[], total_matches=0)

	matches = [record for record in records if in_window(record, query)]
	if matches:
		groups = group_records(matches, exact_confidence, EXACT_SAMPLE_SIZE)
		return MatchResult(
			groups=groups[:EXACT_RESULT_LIMIT],
			total_matches=len(matches),
			phase=MatchPhaseEnum.exact,
		)

	scored = [(weighted_distance(record, query), record) for record in records]
	finite = [(distance, record) for (distance, record) in scored if math.isfinite(distance)]
	finite.sort(key=lambda item: item[0])
	nearest = [record for (_distance, record) in finite[:NEAREST_POOL_SIZE]]
	groups = group_records(nearest, nearest_confidence, NEAREST_SAMPLE_SIZE)
	return MatchResult(
		groups=groups[:NEAREST_RESULT_LIMIT],
		total_matches=len(nearest),
		phase=MatchPhaseEnum.nearest,
	)


class DatasetMatcher:
	"""Recommendation lookups against the shared historical dataset."""

	def __init__(self, dataset: HistoricalDataset):
		self.dataset = dataset

	async def find_recommendations(self, query: MatchQuery) -> MatchResult:
		return match_records(await self.dataset.rows(), query)

	async def list_crops(self) -> list[str]:
		return sorted({record.crop for record in await self.dataset.rows()})

	async def list_fertilizers(self) -> list[str]:
		return sorted({record.fertilizer for record in await self.dataset.rows()})

	async def list_soil_types(self) -> list[str]:
		return sorted({record.soil_type for record in await self.dataset.rows()})
