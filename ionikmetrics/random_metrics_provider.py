"""Providers that produce random but plausible system and network metrics."""

from __future__ import annotations

import math
import random
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ionikmetrics.counter import Counter

_MAX_PRECISION = 6

_rng = random.SystemRandom()


def random_int64(from_: int, to: int) -> int:
    """Return a uniformly chosen integer in ``[from_, to]``."""
    if from_ == to:
        return from_
    return _rng.randint(from_, to)


def random_double(from_: int, to: int, precision: int) -> float:
    """Return a random integral part in ``[from_, to]`` plus the reciprocal of a random fraction.

    The fraction is drawn from ``[0, 10 ** precision]`` with ``precision`` capped
    at 6; a zero fraction yields infinity.
    """
    if from_ == to:
        return float(from_)
    precision = max(0, min(precision, _MAX_PRECISION))
    max_denom = 10**precision
    integral = _rng.randint(from_, to)
    fractional = _rng.randint(0, max_denom)
    return float(integral) + (1 / fractional if fractional else math.inf)


@dataclass(frozen=True)
class MetricLimits:
    """Ranges for random system metrics; ``*_range`` values other than CPU are percentages."""

    cpu_usage_total_range: tuple[int, int] = (0, 100)
    cpu_usage_range: tuple[int, int] = (0, 100)
    precision: int = 2
    ram_total: int = 16 * 1024 * 1024 * 1024
    ram_free_range: tuple[int, int] = (0, 100)
    swap_total: int = 4 * 1024 * 1024 * 1024
    swap_free_range: tuple[int, int] = (0, 100)
    mem_usage: tuple[int, int] = (0, 100)


@dataclass(frozen=True)
class NetworkMetricLimits:
    """Ranges of the byte increments added to the totals on every query."""

    rx_bytes_inc: tuple[int, int] = (0, 1024 * 1024)
    tx_bytes_inc: tuple[int, int] = (0, 1024 * 1024)


def _emit(f: Callable[[str, Counter], bool], items: Iterable[tuple[str, Counter]]) -> None:
    for key, value in items:
        if f(key, value):
            break


class RandomDefaultProvider:
    """Reports random CPU, RAM, swap and memory usage values."""

    def __init__(self, limits: MetricLimits | None = None) -> None:
        self._ml = limits if limits is not None else MetricLimits()
        self._recent_checkpoint = time.monotonic_ns()

    def query(self, f: Callable[[str, Counter], bool] | None) -> None:
        """Call ``f(key, value)`` for each random counter until it returns True."""
        if f is None:
            return
        ml = self._ml
        cpu_usage_total = random_double(*ml.cpu_usage_total_range, ml.precision)
        cpu_usage = random_double(*ml.cpu_usage_range, ml.precision)
        ram_free = (ml.ram_total * random_int64(*ml.ram_free_range)) // 100
        swap_free = (ml.swap_total * random_int64(*ml.swap_free_range)) // 100
        mem_usage = (ml.ram_total * random_int64(*ml.mem_usage)) // 100

        _emit(
            f,
            [
                ("cpu_usage_total", cpu_usage_total),
                ("cpu_usage", cpu_usage),
                ("ram_total", ml.ram_total),
                ("ram_free", ram_free),
                ("swap_total", ml.swap_total),
                ("swap_free", swap_free),
                ("mem_usage", mem_usage),
            ],
        )


class RandomNetworkProvider:
    """Reports growing random traffic totals and the speeds derived from them."""

    def __init__(self, limits: NetworkMetricLimits | None = None) -> None:
        self._ml = limits if limits is not None else NetworkMetricLimits()
        self._recent_checkpoint = time.monotonic_ns()
        self._rx_bytes = 0
        self._tx_bytes = 0
        self._rx_speed = 0.0
        self._tx_speed = 0.0
        self._rx_speed_max = 0.0
        self._tx_speed_max = 0.0

    def query(self, f: Callable[[str, Counter], bool] | None) -> None:
        """Advance the totals and call ``f(key, value)`` for each counter until it returns True."""
        if f is None:
            return
        now = time.monotonic_ns()
        millis = (now - self._recent_checkpoint) // 1_000_000

        rx_bytes = self._rx_bytes + random_int64(*self._ml.rx_bytes_inc)
        tx_bytes = self._tx_bytes + random_int64(*self._ml.tx_bytes_inc)
        rx_speed = (self._rx_speed + (rx_bytes - self._rx_bytes) * millis / 1000) / 2
        tx_speed = (self._tx_speed + (tx_bytes - self._tx_bytes) * millis / 1000) / 2

        self._rx_bytes = rx_bytes
        self._tx_bytes = tx_bytes
        self._rx_speed = rx_speed
        self._tx_speed = tx_speed
        self._rx_speed_max = max(self._rx_speed_max, rx_speed)
        self._tx_speed_max = max(self._tx_speed_max, tx_speed)
        self._recent_checkpoint = now

        _emit(
            f,
            [
                ("rx_bytes", self._rx_bytes),
                ("tx_bytes", self._tx_bytes),
                ("rx_speed", self._rx_speed),
                ("tx_speed", self._tx_speed),
                ("rx_speed_max", self._rx_speed_max),
                ("tx_speed_max", self._tx_speed_max),
            ],
        )