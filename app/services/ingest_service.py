"""Push-webhook ingestion: field extraction, pin normalisation, cache writes."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from app.models.sensors import CachedPinValue, PinValue
from app.services.sensor_cache import SensorCache

TOKEN_FIELDS = ("token", "deviceToken", "authToken")
PIN_FIELDS = ("pin", "p", "vPin", "datastreamId", "datastream", "virtualPin")
VALUE_FIELDS = ("value", "val", "data")

_PIN_PATTERN = re.compile(r"^V[0-9]+$")
_DIGITS = re.compile(r"^[0-9]+$")
_NON_DIGITS = re.compile(r"[^0-9]")

_logger = structlog.get_logger("cropmind.ingest")


@dataclass(frozen=True, slots=True)
class WebhookFields:
	token: str | None
	pin: str | None
	value: Any

	@property
	def missing(self) -> list[str]:
		names = []
		if not self.token:
			names.append("token")
		if not self.pin:
			names.append("pin")
		if self.value is None or self.value == "":
			names.append("value")
		return names


def _first(payload: Mapping[str, Any], names: tuple[str, ...]) -> Any:
	for name in names:
		value = payload.get(name)
		if value is not None and value != "":
			return value
	return None


def extract_fields(payload: Mapping[str, Any], headers: Mapping[str, str] | None = None) -> WebhookFields:
	"""Pick token / pin / value out of any of the supported webhook shapes.

	The token may also arrive as ``x-blynk-token`` or ``Authorization: Bearer``.
	"""
	headers = headers or {}
	token = _first(payload, TOKEN_FIELDS) or headers.get("x-blynk-token")
	if not token:
		authorization = headers.get("authorization") or ""
		if authorization.startswith("Bearer "):
			token = authorization.removeprefix("Bearer ").strip() or None
	pin = _first(payload, PIN_FIELDS)
	value = _first(payload, VALUE_FIELDS)
	return WebhookFields(
		token=str(token) if token is not None else None,
		pin=str(pin) if pin is not None else None,
		value=value,
	)


def normalize_pin(pin: str) -> str:
	"""``"0"`` → ``"V0"``, ``"v3"`` → ``"V3"``; raises ``ValueError`` when no ``V<digits>`` form exists."""
	normalized = pin.strip()
	if not normalized.startswith("V"):
		if _DIGITS.match(normalized):
			normalized = f"V{normalized}"
		else:
			normalized = f"V{_NON_DIGITS.sub('', normalized)}"
	if not _PIN_PATTERN.match(normalized):
		raise ValueError(f"invalid pin format: {pin!r}")
	return normalized


def coerce_value(value: Any) -> PinValue:
	"""Numbers and numeric strings become floats; everything else is kept as text."""
	if isinstance(value, bool):
		return float(value)
	if isinstance(value, (int, float)):
		return float(value)
	text = str(value).strip()
	try:
		number = float(text)
	except ValueError:
		return text
	return number if math.isfinite(number) else text


class IngestService:
	def __init__(self, cache: SensorCache):
		self.cache = cache

	def ingest(self, fields: WebhookFields) -> CachedPinValue:
		missing = fields.missing
		if missing:
			raise ValueError(f"missing required parameters: {', '.join(missing)}")
		assert fields.token is not None and fields.pin is not None

		pin = normalize_pin(fields.pin)
		value = coerce_value(fields.value)
		entry = self.cache.put(fields.token, pin, value)
		_logger.info(
			"webhook_value_received",
			pin=pin,
			value=value,
			token_prefix=fields.token[:8],
		)
		return entry
