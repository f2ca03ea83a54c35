"""Time-windowed push cache for live sensor pin values.

Entries expire ``ttl_seconds`` after they were written. Reads evict expired
entries eagerly, which is what makes expiry correct; the periodic sweep only
bounds memory for tokens that stop reporting.
"""

from __future__ import annotations

import asyncio
import math
import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from app.models.enums import SensorSourceEnum
from app.models.sensors import (
	DEFAULT_PH,
	PIN_FLAME,
	PIN_HUMIDITY,
	PIN_PH,
	PIN_PIR,
	PIN_SOIL_MOISTURE,
	PIN_TEMPERATURE,
	REQUIRED_PINS,
	CachedPinValue,
	PinValue,
	SensorSnapshot,
)

DEFAULT_TTL_SECONDS = 60.0
DEFAULT_SWEEP_INTERVAL_SECONDS = 30.0

_logger = structlog.get_logger("cropmind.sensor_cache")


class UnknownTokenError(LookupError):
	"""Raised when a composed snapshot is requested for a token with no write on record."""


def as_number(value: PinValue, default: float) -> float:
	if isinstance(value, bool):
		return float(value)
	if isinstance(value, (int, float)):
		return float(value) if math.isfinite(value) else default
	try:
		number = float(str(value).strip())
	except ValueError:
		return default
	return number if math.isfinite(number) else default


class SensorCache:
	"""Latest value per ``(token, pin)`` with a per-token last-write time.

	A token counts as known while it has written within the TTL or still
	holds an unswept pin; the sweep forgets tokens that have gone quiet.
	"""

	def __init__(
		self,
		ttl_seconds: float = DEFAULT_TTL_SECONDS,
		clock: Callable[[], float] = time.time,
	):
		self.ttl_seconds = ttl_seconds
		self._clock = clock
		self._pins: dict[tuple[str, str], CachedPinValue] = {}
		self._last_seen: dict[str, float] = {}
		self._lock = threading.Lock()

	def _is_expired(self, written_at: float, now: float) -> bool:
		return now - written_at > self.ttl_seconds

	def put(self, token: str, pin: str, value: PinValue) -> CachedPinValue:
		"""Insert or overwrite a pin value, stamped with the current time."""
		entry = CachedPinValue(token=token, pin=pin, value=value, timestamp=self._clock())
		with self._lock:
			self._pins[(token, pin)] = entry
			self._last_seen[token] = entry.timestamp
		return entry

	def get(self, token: str, pin: str) -> CachedPinValue | None:
		key = (token, pin)
		with self._lock:
			entry = self._pins.get(key)
			if entry is None:
				return None
			if self._is_expired(entry.timestamp, self._clock()):
				del self._pins[key]
				return None
			return entry

	def get_value(self, token: str, pin: str) -> PinValue | None:
		entry = self.get(token, pin)
		return None if entry is None else entry.value

	def is_known(self, token: str) -> bool:
		with self._lock:
			return token in self._last_seen

	def get_composed_snapshot(self, token: str) -> SensorSnapshot | None:
		"""Complete snapshot from live pins, or ``None`` if any required pin is missing.

		pH (V8) is optional and defaults to 6.8.
		"""
		if not self.is_known(token):
			raise UnknownTokenError(f"no recent sensor data has been received for token {token[:8]}...")

		values: dict[str, float] = {}
		newest = 0.0
		for pin in REQUIRED_PINS:
			entry = self.get(token, pin)
			if entry is None:
				return None
			values[pin] = as_number(entry.value, 0.0)
			newest = max(newest, entry.timestamp)

		ph_entry = self.get(token, PIN_PH)
		if ph_entry is None:
			ph = DEFAULT_PH
		else:
			ph = as_number(ph_entry.value, DEFAULT_PH)
			newest = max(newest, ph_entry.timestamp)

		return SensorSnapshot(
			soil_moisture=values[PIN_SOIL_MOISTURE],
			pir=values[PIN_PIR],
			flame=values[PIN_FLAME],
			temperature=values[PIN_TEMPERATURE],
			humidity=values[PIN_HUMIDITY],
			ph=ph,
			timestamp=datetime.fromtimestamp(newest, UTC),
			source=SensorSourceEnum.webhook,
		)

	def tokens(self) -> list[str]:
		"""Tokens holding at least one live pin value."""
		now = self._clock()
		with self._lock:
			return sorted(
				{token for (token, _pin), entry in self._pins.items() if not self._is_expired(entry.timestamp, now)}
			)

	def sweep_expired(self) -> int:
		"""Drop expired pin values and forget silent tokens; returns how many pins were removed."""
		now = self._clock()
		with self._lock:
			stale_pins = [key for key, entry in self._pins.items() if self._is_expired(entry.timestamp, now)]
			for key in stale_pins:
				del self._pins[key]
			live_tokens = {token for (token, _pin) in self._pins}
			silent = [
				token
				for token, seen_at in self._last_seen.items()
				if token not in live_tokens and self._is_expired(seen_at, now)
			]
			for token in silent:
				del self._last_seen[token]
		if silent:
			_logger.debug("sensor_tokens_forgotten", count=len(silent))
		return len(stale_pins)

	async def run_sweeper(self, interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS) -> None:
		"""Sweep forever; cancel the task to stop."""
		while True:
			await asyncio.sleep(interval_seconds)
			removed = self.sweep_expired()
			if removed:
				_logger.debug("sensor_cache_swept", removed=removed)
