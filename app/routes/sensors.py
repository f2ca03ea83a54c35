"""Live sensor snapshot and security status routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.dependencies import get_container
from app.schemas.sensors import SecurityStatusResponse, SensorSnapshotResponse
from app.services.container import ServiceContainer

router = APIRouter(tags=["sensors"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="sensor read failure")


@router.get("/sensors", response_model=SensorSnapshotResponse)
async def get_sensors(
	token: str = Query(min_length=1),
	container: ServiceContainer = Depends(get_container),
) -> SensorSnapshotResponse:
	try:
		snapshot = await container.sensors.get_snapshot(token)
	except Exception as exc:
		raise _map_error(exc) from exc
	if snapshot is None:
		raise HTTPException(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
			detail="No sensor data available for this device",
		)
	return SensorSnapshotResponse.from_snapshot(snapshot)


@router.get("/security", response_model=SecurityStatusResponse)
async def get_security(
	token: str = Query(min_length=1),
	container: ServiceContainer = Depends(get_container),
) -> SecurityStatusResponse:
	try:
		reading = await container.sensors.get_security_status(token)
	except Exception as exc:
		raise _map_error(exc) from exc
	return SecurityStatusResponse.from_reading(reading)
