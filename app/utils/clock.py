"""
CLOCK UTILITY
=============

Time source and delay function shared by the chat service and the demo kernels.

The demos only *simulate* latency: kernels sample a latency value, report it,
and ask the clock to "sleep" for it. SystemClock really sleeps (scaled, or not
at all when latency simulation is disabled) so the frontend feels realistic;
ManualClock never sleeps and just advances its own time, which lets tests
exercise TTL expiry and processing-time measurement instantly.

  now_ms()      - current time in milliseconds (monotonic for SystemClock).
  sleep(ms)     - wait for a simulated delay.
  timestamp()   - ISO-8601 UTC string used in chat metadata.
"""

import datetime
import threading
import time


class SystemClock:
    """Wall-clock time. Sleeps are multiplied by `scale`; disabled means no sleeping at all."""

    def __init__(self, enabled: bool = True, scale: float = 1.0):
        self.enabled = enabled
        self.scale = max(scale, 0.0)

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0

    def sleep(self, ms: float) -> None:
        if not self.enabled or ms <= 0 or self.scale == 0:
            return
        time.sleep(ms * self.scale / 1000.0)

    def timestamp(self) -> str:
        return datetime.datetime.now(datetime.timezone.utc).isoformat()


class ManualClock:
    """
    Clock whose time only moves when told to. sleep(ms) advances the clock
    instead of blocking, so code measuring elapsed time around a delay sees
    exactly the delay it asked for.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._lock = threading.Lock()

    def now_ms(self) -> float:
        with self._lock:
            return self._now

    def advance(self, ms: float) -> None:
        with self._lock:
            self._now += ms

    def sleep(self, ms: float) -> None:
        if ms > 0:
            self.advance(ms)

    def timestamp(self) -> str:
        epoch = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
        return (epoch + datetime.timedelta(milliseconds=self.now_ms())).isoformat()
