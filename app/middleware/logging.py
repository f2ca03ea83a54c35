"""structlog setup and per-request logging with request ID propagation."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import LogFormat, Settings, get_settings
from app.middleware.rate_limit import WEBHOOK_PATH_PREFIX, extract_device_token

SERVICE_NAME = "cropmind"
QUIET_PATHS = frozenset({"/health"})
TOKEN_PREFIX_LENGTH = 8

_configured = False


def _add_service_name(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
	event_dict.setdefault("service", SERVICE_NAME)
	return event_dict


def configure_structured_logging(settings: Settings | None = None) -> None:
	"""Configure stdlib logging and structlog once per process."""
	global _configured
	if _configured:
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	shared_processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
		_add_service_name,
	]

	if settings.log_format == LogFormat.json:
		renderer: Any = structlog.processors.JSONRenderer()
		logging.basicConfig(level=log_level, format="%(message)s")
	else:
		renderer = structlog.dev.ConsoleRenderer()
		logging.basicConfig(level=log_level)

	structlog.configure(
		processors=[
			*shared_processors,
			structlog.processors.format_exc_info,
			renderer,
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


def device_context(request: Request) -> dict[str, str]:
	"""Log fields identifying the device behind a webhook call."""
	if not request.url.path.startswith(WEBHOOK_PATH_PREFIX):
		return {}
	token = extract_device_token(request)
	return {"token_prefix": token[:TOKEN_PREFIX_LENGTH]} if token else {}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind an ``x-request-id`` (and the device token prefix on webhooks) to every log line."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
		request.state.request_id = request_id
		device = device_context(request)

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id, **device)

		logger = structlog.get_logger("cropmind.request")
		path = request.url.path
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			logger.exception(
				"http_request_failed",
				method=request.method,
				path=path,
				duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
				error=str(exc),
				**device,
			)
			raise

		response.headers["x-request-id"] = request_id
		log = logger.debug if path in QUIET_PATHS else logger.info
		log(
			"http_request",
			method=request.method,
			path=path,
			status_code=response.status_code,
			duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
			**device,
		)
		return response
