"""Device push webhooks — values land in the sensor cache."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.dependencies import get_container
from app.schemas.sensors import WebhookReceipt
from app.services.container import ServiceContainer
from app.services.ingest_service import extract_fields

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="webhook failure")


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _decode_json(text: str) -> dict[str, Any]:
	decoded = json.loads(text)
	return decoded if isinstance(decoded, dict) else {}


async def _read_body(request: Request) -> dict[str, Any]:
	"""Decode the webhook body; query parameters fill any gaps.

	Bodies without a JSON or form content type are tried as JSON first and
	read as URL-encoded text when that fails.
	"""
	raw = await request.body()
	content_type = request.headers.get("content-type", "")
	body: dict[str, Any] = {}
	if raw:
		text = raw.decode("utf-8", errors="replace")
		if "application/json" in content_type:
			try:
				body = _decode_json(text)
			except json.JSONDecodeError as exc:
				raise ValueError("request body is not valid JSON") from exc
		elif FORM_CONTENT_TYPE in content_type:
			body = dict(parse_qsl(text))
		else:
			try:
				body = _decode_json(text)
			except json.JSONDecodeError:
				body = dict(parse_qsl(text))
	return {**dict(request.query_params), **body}


async def _ingest(payload: dict[str, Any], request: Request, container: ServiceContainer) -> WebhookReceipt:
	try:
		fields = extract_fields(payload, request.headers)
		entry = container.ingest.ingest(fields)
	except Exception as exc:
		raise _map_error(exc) from exc
	return WebhookReceipt(pin=entry.pin, value=entry.value)


@router.post("/blynk", response_model=WebhookReceipt)
async def blynk_webhook_post(
	request: Request,
	container: ServiceContainer = Depends(get_container),
) -> WebhookReceipt:
	try:
		payload = await _read_body(request)
	except Exception as exc:
		raise _map_error(exc) from exc
	return await _ingest(payload, request, container)


@router.get("/blynk", response_model=WebhookReceipt)
async def blynk_webhook_get(
	request: Request,
	container: ServiceContainer = Depends(get_container),
) -> WebhookReceipt:
	return await _ingest(dict(request.query_params), request, container)
