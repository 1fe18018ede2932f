"""
CACHE KERNEL
============

Flight-lookup demo comparing a TTL cache against going to the backing store
every time.

  fetch(flight_id, use_cache):
    - use_cache and a fresh entry exists -> return it (cache hit, ~0-15 ms).
    - otherwise -> simulated database fetch (100-250 ms), build the flight record,
      and if use_cache store it with the current time (overwriting any old entry).

An entry is fresh while now - stored_at < ttl_ms. Expired entries are treated
exactly like missing ones; nothing sweeps them in the background.

All latencies are simulated samples from the kernel's random generator; the
clock's sleep only makes the demo feel real. The store is the one mutable
structure shared between requests, so reads and writes go through a lock.
"""

import logging
import random
import threading
from typing import Dict, NamedTuple, Optional

from app.errors import InvalidInput
from app.models import CacheResult, FlightRecord

logger = logging.getLogger("portfolio")

CACHE_HIT_MAX_MS = 15
DB_FETCH_MIN_MS = 100
DB_FETCH_MAX_MS = 250


class CacheEntry(NamedTuple):
    value: FlightRecord
    stored_at: float


class CacheKernel:
    def __init__(self, clock, ttl_ms: int = 60_000, rng: Optional[random.Random] = None):
        self.clock = clock
        self.ttl_ms = ttl_ms
        self.rng = rng or random.Random()
        self._store: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def _lookup(self, key: str) -> Optional[FlightRecord]:
        """Return the cached value if present and not expired."""
        with self._lock:
            entry = self._store.get(key)
        if entry is None:
            return None
        if self.clock.now_ms() - entry.stored_at >= self.ttl_ms:
            return None
        return entry.value

    def _store_entry(self, key: str, value: FlightRecord) -> None:
        with self._lock:
            self._store[key] = CacheEntry(value=value, stored_at=self.clock.now_ms())

    def _load_from_database(self, flight_id: str) -> FlightRecord:
        """Simulated backing-store read: same shape for every flight, random gate."""
        return FlightRecord(
            flight_id=flight_id,
            departure="DFW",
            arrival="LAX",
            status="On Time",
            gate=f"A{self.rng.randint(1, 30)}",
        )

    def fetch(self, flight_id: str, use_cache: bool) -> CacheResult:
        if not isinstance(flight_id, str) or not flight_id.strip():
            raise InvalidInput("flightId must be a non-empty string")

        if use_cache:
            cached = self._lookup(flight_id)
            if cached is not None:
                elapsed = round(self.rng.uniform(0, CACHE_HIT_MAX_MS), 2)
                self.clock.sleep(elapsed)
                logger.info("Cache hit for flight %s", flight_id)
                return CacheResult(data=cached, cache_hit=True, elapsed_ms=elapsed, source="redis_cache")

        elapsed = round(self.rng.uniform(DB_FETCH_MIN_MS, DB_FETCH_MAX_MS), 2)
        self.clock.sleep(elapsed)
        record = self._load_from_database(flight_id)
        if use_cache:
            self._store_entry(flight_id, record)
        logger.info("Cache miss for flight %s (use_cache=%s)", flight_id, use_cache)
        return CacheResult(data=record, cache_hit=False, elapsed_ms=elapsed, source="postgresql_db")

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
