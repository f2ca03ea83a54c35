"""Layered recommendation route — dataset, model, then rule-based advice."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_container
from app.schemas.recommendations import RecommendationRequest, RecommendationResponse
from app.services.container import ServiceContainer

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="recommendation failure")


@router.post("", response_model=RecommendationResponse, response_model_exclude_none=True)
async def recommend(
	payload: RecommendationRequest,
	container: ServiceContainer = Depends(get_container),
) -> RecommendationResponse:
	try:
		result = await container.recommendations.recommend(payload.to_reading(), soil_type=payload.soil_type)
	except Exception as exc:
		raise _map_error(exc) from exc

	return RecommendationResponse(
		recommendations=result.recommendations,
		confidence=result.confidence,
		source=result.source,
		crop=result.crop,
		fertilizer=result.fertilizer,
		soil_type=result.soil_type,
		match_count=result.match_count,
		alternates=result.alternates or None,
	)
