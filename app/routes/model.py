"""In-process crop model prediction route."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_container
from app.schemas.model import IdealConditions, ModelPredictRequest, ModelPredictResponse
from app.services.container import ServiceContainer

router = APIRouter(prefix="/model", tags=["model"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="model prediction failure")


@router.post("/predict", response_model=ModelPredictResponse)
async def predict(
	payload: ModelPredictRequest,
	container: ServiceContainer = Depends(get_container),
) -> ModelPredictResponse:
	try:
		prediction = container.predictor.predict(payload.inputs.to_reading())
	except Exception as exc:
		raise _map_error(exc) from exc

	crop = prediction.crop
	return ModelPredictResponse(
		predictions=prediction.recommendations,
		recommendations=prediction.recommendations,
		confidence=prediction.confidence,
		crop=crop.name,
		score=prediction.score,
		soil_type=crop.soil_type,
		npk_ratio=crop.npk_ratio,
		irrigation_schedule=crop.irrigation_schedule,
		ideal_conditions=IdealConditions(
			moisture=crop.moisture.describe("%"),
			temperature=crop.temperature.describe("°C"),
			humidity=crop.humidity.describe("%"),
		),
		timestamp=datetime.now(UTC),
	)
