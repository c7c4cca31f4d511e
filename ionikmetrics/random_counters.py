"""System and network counter groups filled with random values."""

from __future__ import annotations

from collections.abc import Callable

from ionikmetrics.counter import Counter, to_double, to_integer
from ionikmetrics.network_counters import NetworkCounterGroup
from ionikmetrics.random_metrics_provider import (
    MetricLimits,
    NetworkMetricLimits,
    RandomDefaultProvider,
    RandomNetworkProvider,
)
from ionikmetrics.system_counters import SystemCounterGroup

_SYSTEM_FIELDS: dict[str, Callable[[Counter], Counter]] = {
    "cpu_usage_total": to_double,
    "cpu_usage": to_double,
    "ram_total": to_integer,
    "ram_free": to_integer,
    "swap_total": to_integer,
    "swap_free": to_integer,
    "mem_usage": to_integer,
}

_NETWORK_FIELDS: dict[str, Callable[[Counter], Counter]] = {
    "rx_bytes": to_integer,
    "tx_bytes": to_integer,
    "rx_speed": to_double,
    "tx_speed": to_double,
    "rx_speed_max": to_double,
    "tx_speed_max": to_double,
}

_RANDOM_IFACE = "eth0"


def _filler(target: object, fields: dict[str, Callable[[Counter], Counter]]):
    def f(key: str, value: Counter) -> bool:
        convert = fields.get(key)
        if convert is not None:
            setattr(target, key, convert(value))
        return False

    return f


class RandomSystemCounters:
    """Produces system counter groups with random values."""

    def __init__(self, limits: MetricLimits | None = None) -> None:
        self._p = RandomDefaultProvider(limits)

    def query(self) -> SystemCounterGroup:
        """Return a new group of random system counters."""
        counters = SystemCounterGroup()
        self._p.query(_filler(counters, _SYSTEM_FIELDS))
        counters.fill_usage_totals()
        return counters


class RandomNetworkCounters:
    """Produces network counter groups with random values for a fake interface."""

    def __init__(self, limits: NetworkMetricLimits | None = None) -> None:
        self._p = RandomNetworkProvider(limits)

    def query(self) -> NetworkCounterGroup:
        """Return a new group of random network counters."""
        counters = NetworkCounterGroup(iface=_RANDOM_IFACE, readable_name=_RANDOM_IFACE)
        self._p.query(_filler(counters, _NETWORK_FIELDS))
        return counters