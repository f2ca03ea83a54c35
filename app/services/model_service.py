"""Model-tier collaborators — in-process crop predictor and the Kaggle model client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog

from app.config import Settings
from app.models.crops import CropProfile
from app.models.enums import RecommendationSourceEnum
from app.models.sensors import FieldReading
from app.services import advisory, crop_scorer

REMOTE_MODEL_CONFIDENCE = 0.85

_logger = structlog.get_logger("cropmind.model")


class ModelServiceError(RuntimeError):
	"""Raised when the remote model cannot be reached or answers badly."""


@dataclass(slots=True)
class ModelRecommendation:
	recommendations: list[str]
	confidence: float
	source: str
	crop: str | None = None


@dataclass(slots=True)
class CropPrediction:
	crop: CropProfile
	score: float
	recommendations: list[str]
	confidence: float
	risk_score: int


class RecommendationModel(Protocol):
	async def recommend(self, reading: FieldReading) -> ModelRecommendation | None: ...


class CropModelPredictor:
	"""Deterministic stand-in for a trained model: best crop plus advisory text."""

	def predict(self, reading: FieldReading) -> CropPrediction:
		best = crop_scorer.find_best_crop(reading.moisture, reading.temperature, reading.humidity)
		assessment = advisory.assess_conditions(reading.moisture, reading.temperature, reading.humidity)
		return CropPrediction(
			crop=best.crop,
			score=best.score,
			recommendations=assessment.messages,
			confidence=assessment.confidence,
			risk_score=assessment.risk_score,
		)

	async def recommend(self, reading: FieldReading) -> ModelRecommendation | None:
		prediction = self.predict(reading)
		return ModelRecommendation(
			recommendations=prediction.recommendations,
			confidence=prediction.confidence,
			source=RecommendationSourceEnum.model.value,
			crop=prediction.crop.name,
		)


class KaggleModelClient:
	"""Remote model tier.

	With ``kaggle_api_url`` set, readings are posted to that endpoint. Without
	it, a successful credentialed probe of the Kaggle API enables the
	in-process predictor under the ``kaggle-enhanced`` label. With neither,
	the tier yields nothing.
	"""

	def __init__(
		self,
		settings: Settings,
		predictor: CropModelPredictor | None = None,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self.settings = settings
		self.predictor = predictor or CropModelPredictor()
		self._transport = transport

	@property
	def configured(self) -> bool:
		return bool(self.settings.kaggle_api_url) or self._has_credentials()

	def _has_credentials(self) -> bool:
		return bool(self.settings.kaggle_username and self.settings.kaggle_api_key)

	def _client(self) -> httpx.AsyncClient:
		auth = (
			httpx.BasicAuth(self.settings.kaggle_username, self.settings.kaggle_api_key)
			if self._has_credentials()
			else None
		)
		return httpx.AsyncClient(
			timeout=self.settings.kaggle_timeout_seconds,
			auth=auth,
			transport=self._transport,
		)

	async def recommend(self, reading: FieldReading) -> ModelRecommendation | None:
		if self.settings.kaggle_api_url:
			return await self._call_remote(reading)
		if not self._has_credentials():
			return None
		if not await self._probe():
			return None

		prediction = self.predictor.predict(reading)
		return ModelRecommendation(
			recommendations=prediction.recommendations,
			confidence=prediction.confidence,
			source=RecommendationSourceEnum.kaggle_enhanced.value,
			crop=prediction.crop.name,
		)

	async def _call_remote(self, reading: FieldReading) -> ModelRecommendation:
		body = {
			"inputs": {
				"moisture": reading.moisture,
				"temperature": reading.temperature,
				"humidity": reading.humidity,
			}
		}
		try:
			async with self._client() as client:
				response = await client.post(self.settings.kaggle_api_url, json=body)
				response.raise_for_status()
				payload = response.json()
		except (httpx.HTTPError, ValueError) as exc:
			raise ModelServiceError(f"Kaggle model call failed: {exc}") from exc

		return ModelRecommendation(
			recommendations=_string_list(payload),
			confidence=REMOTE_MODEL_CONFIDENCE,
			source=RecommendationSourceEnum.kaggle.value,
		)

	async def _probe(self) -> bool:
		try:
			async with self._client() as client:
				response = await client.get(self.settings.kaggle_probe_url)
		except httpx.HTTPError as exc:
			raise ModelServiceError(f"Kaggle connectivity probe failed: {exc}") from exc
		if not response.is_success:
			_logger.warning("kaggle_probe_rejected", status_code=response.status_code)
			return False
		return True


def _string_list(payload: Any) -> list[str]:
	if not isinstance(payload, dict):
		return []
	raw = payload.get("recommendations") or payload.get("predictions") or []
	if not isinstance(raw, list):
		return []
	return [str(item) for item in raw if item is not None]
