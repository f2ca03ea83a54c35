from __future__ import annotations

import asyncio

import pytest

from app.models.enums import SensorSourceEnum
from app.services.sensor_cache import SensorCache, UnknownTokenError
from conftest import FakeClock

TOKEN = "device-token-1234"


def _write_required(cache: SensorCache, token: str = TOKEN) -> None:
	cache.put(token, "V0", 55.3)
	cache.put(token, "V1", 0.0)
	cache.put(token, "V2", 1.0)
	cache.put(token, "V3", 27.5)
	cache.put(token, "V4", 64.0)


def test_value_expires_after_ttl(fake_clock: FakeClock) -> None:
	cache = SensorCache(ttl_seconds=60, clock=fake_clock)
	cache.put(TOKEN, "V0", 55.3)
	assert cache.get_value(TOKEN, "V0") == 55.3

	fake_clock.advance(59)
	assert cache.get_value(TOKEN, "V0") == 55.3

	fake_clock.advance(2)
	assert cache.get(TOKEN, "V0") is None


def test_overwrite_refreshes_timestamp(fake_clock: FakeClock) -> None:
	cache = SensorCache(ttl_seconds=60, clock=fake_clock)
	cache.put(TOKEN, "V3", 20.0)
	fake_clock.advance(50)
	cache.put(TOKEN, "V3", 21.0)
	fake_clock.advance(50)
	assert cache.get_value(TOKEN, "V3") == 21.0


def test_tokens_are_isolated(fake_clock: FakeClock) -> None:
	cache = SensorCache(clock=fake_clock)
	cache.put("a", "V0", 10.0)
	assert cache.get("b", "V0") is None


def test_partial_pins_give_no_snapshot(fake_clock: FakeClock) -> None:
	cache = SensorCache(clock=fake_clock)
	cache.put(TOKEN, "V0", 55.3)
	cache.put(TOKEN, "V3", 27.5)
	assert cache.get_composed_snapshot(TOKEN) is None


def test_complete_pins_give_snapshot_with_default_ph(fake_clock: FakeClock) -> None:
	cache = SensorCache(clock=fake_clock)
	_write_required(cache)
	snapshot = cache.get_composed_snapshot(TOKEN)
	assert snapshot is not None
	assert snapshot.soil_moisture == 55.3
	assert snapshot.pir == 0.0
	assert snapshot.flame == 1.0
	assert snapshot.temperature == 27.5
	assert snapshot.humidity == 64.0
	assert snapshot.ph == 6.8
	assert snapshot.source == SensorSourceEnum.webhook
	assert snapshot.timestamp.timestamp() == pytest.approx(fake_clock.now)


def test_written_ph_is_used(fake_clock: FakeClock) -> None:
	cache = SensorCache(clock=fake_clock)
	_write_required(cache)
	cache.put(TOKEN, "V8", 5.9)
	snapshot = cache.get_composed_snapshot(TOKEN)
	assert snapshot is not None
	assert snapshot.ph == 5.9


def test_non_numeric_pins_are_coerced(fake_clock: FakeClock) -> None:
	cache = SensorCache(clock=fake_clock)
	_write_required(cache)
	cache.put(TOKEN, "V4", "n/a")
	cache.put(TOKEN, "V8", "unknown")
	snapshot = cache.get_composed_snapshot(TOKEN)
	assert snapshot is not None
	assert snapshot.humidity == 0.0
	assert snapshot.ph == 6.8


def test_snapshot_disappears_when_one_pin_expires(fake_clock: FakeClock) -> None:
	cache = SensorCache(ttl_seconds=60, clock=fake_clock)
	_write_required(cache)
	fake_clock.advance(40)
	cache.put(TOKEN, "V0", 50.0)
	cache.put(TOKEN, "V1", 1.0)
	cache.put(TOKEN, "V2", 0.0)
	cache.put(TOKEN, "V3", 28.0)
	fake_clock.advance(30)
	assert cache.get_composed_snapshot(TOKEN) is None


def test_unknown_token_is_distinct_from_miss(fake_clock: FakeClock) -> None:
	cache = SensorCache(clock=fake_clock)
	with pytest.raises(UnknownTokenError):
		cache.get_composed_snapshot("never-seen")


def test_sweep_removes_expired_entries(fake_clock: FakeClock) -> None:
	cache = SensorCache(ttl_seconds=60, clock=fake_clock)
	_write_required(cache)
	cache.put("other", "V0", 1.0)
	assert cache.tokens() == ["device-token-1234", "other"]

	fake_clock.advance(61)
	removed = cache.sweep_expired()

	assert removed == 6
	assert cache.tokens() == []
	assert cache.sweep_expired() == 0


def test_sweep_forgets_silent_tokens(fake_clock: FakeClock) -> None:
	cache = SensorCache(ttl_seconds=60, clock=fake_clock)
	tokens = [f"device-{index}" for index in range(1000)]
	for token in tokens:
		cache.put(token, "V0", 40.0)

	fake_clock.advance(120)
	assert cache.sweep_expired() == 1000

	assert not any(cache.is_known(token) for token in tokens)
	with pytest.raises(UnknownTokenError):
		cache.get_composed_snapshot(tokens[0])


def test_sweep_keeps_recently_active_tokens(fake_clock: FakeClock) -> None:
	cache = SensorCache(ttl_seconds=60, clock=fake_clock)
	cache.put(TOKEN, "V0", 40.0)
	fake_clock.advance(30)
	cache.sweep_expired()
	assert cache.is_known(TOKEN)
	assert cache.get_composed_snapshot(TOKEN) is None


def test_expired_pins_leave_token_known_until_swept(fake_clock: FakeClock) -> None:
	cache = SensorCache(ttl_seconds=60, clock=fake_clock)
	_write_required(cache)
	fake_clock.advance(61)
	assert cache.get_composed_snapshot(TOKEN) is None
	cache.sweep_expired()
	with pytest.raises(UnknownTokenError):
		cache.get_composed_snapshot(TOKEN)


@pytest.mark.asyncio
async def test_background_sweeper_runs_until_cancelled(fake_clock: FakeClock) -> None:
	cache = SensorCache(ttl_seconds=60, clock=fake_clock)
	cache.put(TOKEN, "V0", 40.0)
	fake_clock.advance(61)

	task = asyncio.create_task(cache.run_sweeper(interval_seconds=0.01))
	for _ in range(50):
		await asyncio.sleep(0.01)
		if not cache.is_known(TOKEN):
			break
	task.cancel()
	with pytest.raises(asyncio.CancelledError):
		await task

	assert not cache.is_known(TOKEN)
