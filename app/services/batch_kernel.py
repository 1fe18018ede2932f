"""
BATCH KERNEL
============

Compares sending N items over one pooled connection in groups against
opening a connection per item.

  batched     - items go out in groups of `group_size`; each group costs one
                simulated round trip (50-80 ms) and all of its members complete
                when that round trip does. One connection is used.
  individual  - every item pays its own round trip including connection
                setup (80-120 ms). One connection per item.

Completion records come back in id order 0..count-1 in both modes. All times
are simulated and cumulative from the start of the run.
"""

import logging
import random
from typing import List, Optional

from app.errors import InvalidInput
from app.models import BatchItem, BatchResult

logger = logging.getLogger("portfolio")

BATCH_ROUND_TRIP_MIN_MS = 50
BATCH_ROUND_TRIP_MAX_MS = 80
SINGLE_ROUND_TRIP_MIN_MS = 80
SINGLE_ROUND_TRIP_MAX_MS = 120


class BatchKernel:
    def __init__(self, clock, group_size: int = 4, max_items: int = 100, rng: Optional[random.Random] = None):
        if group_size < 1:
            raise ValueError("group_size must be at least 1")
        self.clock = clock
        self.group_size = group_size
        self.max_items = max_items
        self.rng = rng or random.Random()

    def _round_trip(self, low: float, high: float) -> float:
        cost = self.rng.uniform(low, high)
        self.clock.sleep(cost)
        return cost

    def run(self, count: int, batched: bool) -> BatchResult:
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidInput("count must be an integer")
        if count < 0 or count > self.max_items:
            raise InvalidInput(f"count must be between 0 and {self.max_items}")

        results: List[BatchItem] = []
        elapsed = 0.0

        if batched:
            for start in range(0, count, self.group_size):
                elapsed += self._round_trip(BATCH_ROUND_TRIP_MIN_MS, BATCH_ROUND_TRIP_MAX_MS)
                for item_id in range(start, min(start + self.group_size, count)):
                    results.append(BatchItem(id=item_id, elapsed_ms=round(elapsed, 2)))
            connections = 1
        else:
            for item_id in range(count):
                elapsed += self._round_trip(SINGLE_ROUND_TRIP_MIN_MS, SINGLE_ROUND_TRIP_MAX_MS)
                results.append(BatchItem(id=item_id, elapsed_ms=round(elapsed, 2)))
            connections = count

        logger.info("Batch run of %d items (batched=%s) took %.1f simulated ms", count, batched, elapsed)
        return BatchResult(
            results=results,
            total_elapsed_ms=round(elapsed, 2),
            connections_used=connections,
            item_count=count,
            method="batch_with_pooling" if batched else "individual_connections",
            efficiency="optimized" if batched else "naive",
        )
