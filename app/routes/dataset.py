"""Historical-dataset routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_container
from app.schemas.dataset import CatalogResponse, DatasetMatchRequest, DatasetMatchResponse
from app.services.container import ServiceContainer

router = APIRouter(prefix="/dataset", tags=["dataset"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="dataset failure")


@router.post("/recommend", response_model=DatasetMatchResponse)
async def dataset_recommend(
	payload: DatasetMatchRequest,
	container: ServiceContainer = Depends(get_container),
) -> DatasetMatchResponse:
	try:
		result = await container.matcher.find_recommendations(payload.to_query())
	except Exception as exc:
		raise _map_error(exc) from exc
	return DatasetMatchResponse.from_result(result)


@router.get("/crops", response_model=CatalogResponse)
async def dataset_crops(container: ServiceContainer = Depends(get_container)) -> CatalogResponse:
	try:
		items = await container.matcher.list_crops()
	except Exception as exc:
		raise _map_error(exc) from exc
	return CatalogResponse(items=items, total=len(items))


@router.get("/fertilizers", response_model=CatalogResponse)
async def dataset_fertilizers(container: ServiceContainer = Depends(get_container)) -> CatalogResponse:
	try:
		items = await container.matcher.list_fertilizers()
	except Exception as exc:
		raise _map_error(exc) from exc
	return CatalogResponse(items=items, total=len(items))


@router.get("/soil-types", response_model=CatalogResponse)
async def dataset_soil_types(container: ServiceContainer = Depends(get_container)) -> CatalogResponse:
	try:
		items = await container.matcher.list_soil_types()
	except Exception as exc:
		raise _map_error(exc) from exc
	return CatalogResponse(items=items, total=len(items))
