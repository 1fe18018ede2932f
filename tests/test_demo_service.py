# tests/test_demo_service.py
"""Unit tests for app/services/demo_service.py (dispatch on the demo `type`)."""

from __future__ import annotations

import pytest

from app.errors import InternalFailure, InvalidInput, UnknownDiscriminant
from app.models import BatchResult, CacheResult, DeliveryResult, SearchResult


class TestDispatch:

    def test_caching(self, demo_service):
        result = demo_service.dispatch({"type": "caching", "flightId": "AA101", "useCache": True})
        assert isinstance(result, CacheResult)
        assert result.cache_hit is False
        again = demo_service.dispatch({"type": "caching", "flightId": "AA101", "useCache": True})
        assert again.cache_hit is True

    def test_search(self, demo_service):
        result = demo_service.dispatch({"type": "search", "query": "error", "useIndexed": True})
        assert isinstance(result, SearchResult)
        assert result.position == 3

    def test_batch(self, demo_service):
        result = demo_service.dispatch({"type": "batch", "count": 12, "useBatch": False})
        assert isinstance(result, BatchResult)
        assert result.connections_used == 12

    def test_batch_default_count(self, demo_service):
        assert demo_service.dispatch({"type": "batch", "useBatch": True}).item_count == 12

    def test_realtime(self, demo_service):
        result = demo_service.dispatch({"type": "realtime", "eventId": 2, "useWebSocket": False})
        assert isinstance(result, DeliveryResult)
        assert result.server_load_percent == 45

    def test_snake_case_fields_accepted(self, demo_service):
        result = demo_service.dispatch({"type": "caching", "flight_id": "AA7", "use_cache": False})
        assert result.data.flight_id == "AA7"

    def test_demo_types(self, demo_service):
        assert demo_service.demo_types == ["caching", "search", "batch", "realtime"]


class TestErrors:

    @pytest.mark.parametrize("body", [{}, {"type": ""}, {"type": None}, None, ["caching"]])
    def test_missing_type(self, demo_service, body):
        with pytest.raises(InvalidInput):
            demo_service.dispatch(body)

    @pytest.mark.parametrize("demo_type", ["teleport", "CACHING", 7])
    def test_unknown_type(self, demo_service, demo_type):
        with pytest.raises(UnknownDiscriminant) as exc_info:
            demo_service.dispatch({"type": demo_type})
        assert exc_info.value.received_type == demo_type

    @pytest.mark.parametrize(
        "body",
        [
            {"type": "caching"},
            {"type": "search"},
            {"type": "batch", "count": "many"},
            {"type": "realtime", "eventId": -1},
        ],
    )
    def test_missing_or_malformed_fields(self, demo_service, body):
        with pytest.raises(InvalidInput):
            demo_service.dispatch(body)

    def test_kernel_validation_passes_through(self, demo_service):
        with pytest.raises(InvalidInput):
            demo_service.dispatch({"type": "batch", "count": 1000})

    def test_unexpected_fault_is_wrapped(self, demo_service, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(demo_service.delivery_kernel, "next_event", boom)
        with pytest.raises(InternalFailure) as exc_info:
            demo_service.dispatch({"type": "realtime", "eventId": 1})
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert "disk on fire" not in exc_info.value.message

    def test_failure_does_not_break_later_requests(self, demo_service, monkeypatch):
        original = demo_service.cache_kernel.fetch
        monkeypatch.setattr(demo_service.cache_kernel, "fetch", lambda *a: 1 / 0)
        with pytest.raises(InternalFailure):
            demo_service.dispatch({"type": "caching", "flightId": "AA1", "useCache": True})
        monkeypatch.setattr(demo_service.cache_kernel, "fetch", original)
        assert demo_service.dispatch({"type": "caching", "flightId": "AA1", "useCache": True}).cache_hit is False
