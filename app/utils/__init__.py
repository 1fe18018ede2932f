"""
UTILITIES PACKAGE
=================

Helpers used by the services (no HTTP, no business logic):

  clock - SystemClock / ManualClock: current time, simulated delays, timestamps.
"""
