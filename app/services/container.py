"""Composition root — builds every long-lived service once per process."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from app.config import Settings
from app.services.blynk_client import BlynkClient
from app.services.dataset_matcher import DatasetMatcher
from app.services.dataset_source import CsvDatasetSource, DatasetSource, HistoricalDataset
from app.services.ingest_service import IngestService
from app.services.model_service import CropModelPredictor, KaggleModelClient, RecommendationModel
from app.services.recommendation_service import RecommendationService
from app.services.sensor_cache import SensorCache
from app.services.sensor_service import SensorService


@dataclass(slots=True)
class ServiceContainer:
	settings: Settings
	sensor_cache: SensorCache
	dataset: HistoricalDataset
	matcher: DatasetMatcher
	predictor: CropModelPredictor
	blynk: BlynkClient
	ingest: IngestService
	sensors: SensorService
	recommendations: RecommendationService

	@classmethod
	def build(
		cls,
		settings: Settings,
		*,
		dataset_source: DatasetSource | None = None,
		model: RecommendationModel | None = None,
		clock: Callable[[], float] = time.time,
		http_transport: httpx.AsyncBaseTransport | None = None,
	) -> "ServiceContainer":
		"""Wire the services; the keyword overrides exist for tests and alternative deployments."""
		sensor_cache = SensorCache(ttl_seconds=settings.sensor_cache_ttl_seconds, clock=clock)
		dataset = HistoricalDataset(dataset_source or CsvDatasetSource(settings.dataset_path))
		matcher = DatasetMatcher(dataset)
		predictor = CropModelPredictor()
		blynk = BlynkClient(settings, transport=http_transport)
		if model is None:
			model = KaggleModelClient(settings, predictor=predictor, transport=http_transport)

		return cls(
			settings=settings,
			sensor_cache=sensor_cache,
			dataset=dataset,
			matcher=matcher,
			predictor=predictor,
			blynk=blynk,
			ingest=IngestService(sensor_cache),
			sensors=SensorService(sensor_cache, blynk),
			recommendations=RecommendationService(
				matcher,
				model=model,
				model_timeout_seconds=settings.kaggle_timeout_seconds,
			),
		)
