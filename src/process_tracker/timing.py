"""Monotonic timestamps and elapsed-time helpers."""

import time

# Ticks per second of get_timestamp()
TIMESTAMP_FREQUENCY = 1_000_000_000


def get_timestamp() -> int:
    """Read the monotonic high-resolution clock, in ticks."""
    return time.perf_counter_ns()


def get_duration_ms(start_timestamp: int) -> float:
    """Milliseconds elapsed since ``start_timestamp``, with sub-millisecond precision."""
    return (get_timestamp() - start_timestamp) / TIMESTAMP_FREQUENCY * 1000
