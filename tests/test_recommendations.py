from __future__ import annotations

import asyncio

import pytest

from app.models.dataset import HistoricalRecord
from app.models.sensors import FieldReading
from app.services.crop_scorer import InvalidReadingError
from app.services.dataset_matcher import DatasetMatcher
from app.services.dataset_source import HistoricalDataset, InMemoryDatasetSource
from app.services.model_service import ModelRecommendation
from app.services.recommendation_service import RecommendationService
from conftest import FakeModel


def _matcher(records: list[HistoricalRecord] | None = None) -> DatasetMatcher:
	return DatasetMatcher(HistoricalDataset(InMemoryDatasetSource(records or [])))


class SlowModel:
	async def recommend(self, reading: FieldReading) -> ModelRecommendation | None:
		await asyncio.sleep(5)
		return ModelRecommendation(recommendations=["too late"], confidence=0.9, source="kaggle")


@pytest.mark.asyncio
async def test_falls_through_to_rule_based() -> None:
	model = FakeModel(error=RuntimeError("boom"))
	service = RecommendationService(_matcher(), model=model)

	result = await service.recommend(FieldReading(moisture=55, temperature=90, humidity=60))

	assert result.source == "rule-based"
	assert result.confidence < 0.95
	assert any("EXTREME HEAT" in line for line in result.recommendations)
	assert result.crop is not None
	assert len(model.calls) == 1


@pytest.mark.asyncio
async def test_dataset_tier_wins(sample_records: list[HistoricalRecord]) -> None:
	model = FakeModel(result=ModelRecommendation(recommendations=["unused"], confidence=0.9, source="kaggle"))
	service = RecommendationService(_matcher(sample_records), model=model)

	result = await service.recommend(FieldReading(moisture=55, temperature=25, humidity=60))

	assert result.source == "dataset"
	assert result.crop == "Rice"
	assert result.fertilizer == "Urea"
	assert result.soil_type == "Clay"
	assert result.match_count == 2
	assert result.alternates == ["Wheat"]
	assert result.recommendations[0] == "🌾 Recommended crop: Rice"
	assert "📊 Confidence: 2% (based on 2 similar records)" in result.recommendations
	assert any(line.startswith("🔄 Alternatives:") for line in result.recommendations)
	assert model.calls == []


@pytest.mark.asyncio
async def test_soil_filter_is_passed_to_dataset(sample_records: list[HistoricalRecord]) -> None:
	service = RecommendationService(_matcher(sample_records))
	result = await service.recommend(FieldReading(moisture=55, temperature=25, humidity=60), soil_type="loam")
	assert result.crop == "Wheat"


@pytest.mark.asyncio
async def test_model_tier_result_is_returned_unchanged() -> None:
	answer = ModelRecommendation(recommendations=["Plant sorghum"], confidence=0.85, source="kaggle", crop="Sorghum")
	service = RecommendationService(_matcher(), model=FakeModel(result=answer))

	result = await service.recommend(FieldReading(moisture=40, temperature=30, humidity=50))

	assert result.source == "kaggle"
	assert result.recommendations == ["Plant sorghum"]
	assert result.confidence == 0.85
	assert result.crop == "Sorghum"


@pytest.mark.asyncio
async def test_empty_model_answer_falls_through() -> None:
	answer = ModelRecommendation(recommendations=[], confidence=0.85, source="kaggle")
	service = RecommendationService(_matcher(), model=FakeModel(result=answer))
	result = await service.recommend(FieldReading(moisture=55, temperature=22, humidity=60))
	assert result.source == "rule-based"
	assert result.confidence == 0.95


@pytest.mark.asyncio
async def test_slow_model_times_out() -> None:
	service = RecommendationService(_matcher(), model=SlowModel(), model_timeout_seconds=0.05)
	result = await service.recommend(FieldReading(moisture=55, temperature=22, humidity=60))
	assert result.source == "rule-based"


@pytest.mark.asyncio
async def test_non_finite_reading_propagates() -> None:
	service = RecommendationService(_matcher())
	with pytest.raises(InvalidReadingError):
		await service.recommend(FieldReading(moisture=float("inf"), temperature=22, humidity=60))
