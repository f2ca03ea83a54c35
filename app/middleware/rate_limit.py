"""Redis-backed rate limiting for device webhooks."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import get_settings

WEBHOOK_PATH_PREFIX = "/api/v1/webhooks"


def extract_device_token(request: Request) -> str | None:
	"""Token from the query string, ``x-blynk-token`` or a bearer header; body tokens are not inspected."""
	for name in ("token", "deviceToken", "authToken"):
		value = request.query_params.get(name)
		if value:
			return value
	header_token = request.headers.get("x-blynk-token")
	if header_token:
		return header_token
	authorization = request.headers.get("authorization") or ""
	if authorization.startswith("Bearer "):
		return authorization.removeprefix("Bearer ").strip() or None
	return None


class RateLimitMiddleware(BaseHTTPMiddleware):
	"""Per-device quota limiter backed by Redis atomic counters."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		if not request.url.path.startswith(WEBHOOK_PATH_PREFIX):
			return await call_next(request)

		redis_client = getattr(request.app.state, "redis", None)
		if redis_client is None:
			return await call_next(request)

		token = extract_device_token(request)
		if token is None:
			return await call_next(request)

		quota = get_settings().rate_limit_webhook_per_minute
		minute_bucket = datetime.now(UTC).strftime("%Y%m%d%H%M")
		key = f"ratelimit:webhook:{token}:{minute_bucket}"
		current = await redis_client.incr(key)
		if current == 1:
			await redis_client.expire(key, 65)

		if current > quota:
			return JSONResponse(
				status_code=429,
				content={
					"detail": {
						"error": "rate_limited",
						"message": "Device webhook quota exceeded",
						"quota": quota,
					}
				},
			)

		return await call_next(request)
