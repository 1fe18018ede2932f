# tests/test_cache_kernel.py
"""Unit tests for app/services/cache_kernel.py."""

from __future__ import annotations

import threading

import pytest

from app.errors import InvalidInput
from app.services.cache_kernel import CacheKernel
from app.utils.clock import SystemClock


class TestCacheHits:

    def test_miss_then_hit_then_expiry(self, cache_kernel, clock):
        first = cache_kernel.fetch("AA101", True)
        second = cache_kernel.fetch("AA101", True)
        assert first.cache_hit is False
        assert second.cache_hit is True
        assert second.data == first.data

        clock.advance(60_000)
        third = cache_kernel.fetch("AA101", True)
        assert third.cache_hit is False

    def test_expired_entry_is_overwritten(self, cache_kernel, clock):
        cache_kernel.fetch("AA101", True)
        clock.advance(60_000)
        cache_kernel.fetch("AA101", True)
        assert cache_kernel.fetch("AA101", True).cache_hit is True
        assert len(cache_kernel) == 1

    def test_entry_fresh_just_before_ttl(self, cache_kernel, clock):
        cache_kernel.fetch("AA101", True)
        clock.advance(59_999)
        assert cache_kernel.fetch("AA101", True).cache_hit is True

    def test_keys_are_independent(self, cache_kernel):
        cache_kernel.fetch("AA101", True)
        assert cache_kernel.fetch("AA202", True).cache_hit is False
        assert cache_kernel.fetch("AA101", True).cache_hit is True

    def test_without_cache_nothing_is_stored(self, cache_kernel):
        assert cache_kernel.fetch("AA101", False).cache_hit is False
        assert cache_kernel.fetch("AA101", False).cache_hit is False
        assert len(cache_kernel) == 0

    def test_bypass_ignores_existing_entry(self, cache_kernel):
        cache_kernel.fetch("AA101", True)
        assert cache_kernel.fetch("AA101", False).cache_hit is False


class TestSimulatedTiming:

    def test_hit_is_fast_and_miss_is_slow(self, cache_kernel):
        miss = cache_kernel.fetch("AA101", True)
        hit = cache_kernel.fetch("AA101", True)
        assert 100 <= miss.elapsed_ms <= 250
        assert 0 <= hit.elapsed_ms < 20
        assert miss.source == "postgresql_db"
        assert hit.source == "redis_cache"

    def test_clock_advances_by_simulated_latency(self, cache_kernel, clock):
        result = cache_kernel.fetch("AA101", False)
        assert clock.now_ms() == pytest.approx(result.elapsed_ms, abs=0.01)


class TestPayload:

    def test_flight_record_shape(self, cache_kernel):
        record = cache_kernel.fetch("AA101", False).data
        assert record.flight_id == "AA101"
        assert (record.departure, record.arrival, record.status) == ("DFW", "LAX", "On Time")
        assert record.gate.startswith("A")
        assert 1 <= int(record.gate[1:]) <= 30

    def test_serialized_field_names(self, cache_kernel):
        body = cache_kernel.fetch("AA101", True).model_dump(by_alias=True)
        assert body["cacheHit"] is False
        assert body["cached"] is False
        assert body["responseTime"] == body["elapsedMs"]
        assert body["data"]["flightId"] == "AA101"

    @pytest.mark.parametrize("flight_id", ["", "  ", None])
    def test_blank_flight_id_rejected(self, cache_kernel, flight_id):
        with pytest.raises(InvalidInput):
            cache_kernel.fetch(flight_id, True)


class TestConcurrency:

    def test_concurrent_misses_leave_one_valid_entry(self):
        kernel = CacheKernel(SystemClock(enabled=False))
        errors = []

        def worker():
            try:
                for _ in range(50):
                    kernel.fetch("AA101", True)
            except Exception as e:  # pragma: no cover - only on failure
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(kernel) == 1
        assert kernel.fetch("AA101", True).data.flight_id == "AA101"
