"""Crop reference table and best-crop scoring routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from app.models.enums import CropCategoryEnum
from app.schemas.crops import BestCropResponse, CropListResponse, CropProfileOut
from app.schemas.recommendations import FieldReadingIn
from app.services import crop_catalog, crop_scorer

router = APIRouter(prefix="/crops", tags=["crops"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="crop lookup failure")


@router.get("", response_model=CropListResponse)
async def list_crops(category: CropCategoryEnum | None = Query(default=None)) -> CropListResponse:
	crops = crop_catalog.crops_by_category(category) if category is not None else crop_catalog.all_crops()
	return CropListResponse(
		crops=[CropProfileOut.from_profile(crop) for crop in crops],
		total=len(crops),
	)


@router.post("/best", response_model=BestCropResponse)
async def best_crop(payload: FieldReadingIn) -> BestCropResponse:
	try:
		result = crop_scorer.find_best_crop(payload.moisture, payload.temperature, payload.humidity)
	except Exception as exc:
		raise _map_error(exc) from exc
	return BestCropResponse(crop=CropProfileOut.from_profile(result.crop), score=result.score)


@router.get("/{name}", response_model=CropProfileOut)
async def get_crop(name: str) -> CropProfileOut:
	crop = crop_catalog.get_crop(name)
	if crop is None:
		raise _map_error(LookupError(f"Unknown crop: {name}"))
	return CropProfileOut.from_profile(crop)
