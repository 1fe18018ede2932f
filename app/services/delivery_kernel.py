"""
DELIVERY KERNEL
===============

Real-time dashboard demo: one event delivered over a persistent push channel
(WebSocket) versus fetched by HTTP polling.

  push  - latency 5-50 ms, server load flat at PUSH_SERVER_LOAD percent.
  poll  - latency 200-500 ms, server load grows with the event's sequence id,
          min(POLL_LOAD_BASE + id * POLL_LOAD_STEP, POLL_LOAD_CAP), modelling
          the overhead that piles up from repeated polling.

`value` is just a random reading in [0, 100). Latencies are simulated.
"""

import random
from typing import Optional

from app.errors import InvalidInput
from app.models import DeliveryResult

PUSH_LATENCY_MIN_MS = 5
PUSH_LATENCY_MAX_MS = 50
PUSH_SERVER_LOAD = 5

POLL_LATENCY_MIN_MS = 200
POLL_LATENCY_MAX_MS = 500
POLL_LOAD_BASE = 15
POLL_LOAD_STEP = 15
POLL_LOAD_CAP = 95


def poll_server_load(sequence_id: int) -> int:
    return min(POLL_LOAD_BASE + sequence_id * POLL_LOAD_STEP, POLL_LOAD_CAP)


class DeliveryKernel:
    def __init__(self, clock, rng: Optional[random.Random] = None):
        self.clock = clock
        self.rng = rng or random.Random()

    def next_event(self, sequence_id: int, push: bool) -> DeliveryResult:
        if isinstance(sequence_id, bool) or not isinstance(sequence_id, int) or sequence_id < 0:
            raise InvalidInput("eventId must be a non-negative integer")

        if push:
            latency = self.rng.uniform(PUSH_LATENCY_MIN_MS, PUSH_LATENCY_MAX_MS)
            load = PUSH_SERVER_LOAD
            method, protocol = "websocket_push", "ws://"
        else:
            latency = self.rng.uniform(POLL_LATENCY_MIN_MS, POLL_LATENCY_MAX_MS)
            load = poll_server_load(sequence_id)
            method, protocol = "http_polling", "http://"

        self.clock.sleep(latency)
        return DeliveryResult(
            event_id=sequence_id,
            value=self.rng.randrange(100),
            latency_ms=round(latency, 2),
            server_load_percent=load,
            method=method,
            protocol=protocol,
        )
