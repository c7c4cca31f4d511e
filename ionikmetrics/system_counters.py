"""Aggregated CPU and memory counters of the system and the current process."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ionikmetrics.counter import Counter, to_double, to_integer
from ionikmetrics.proc_self_status_provider import ProcSelfStatusProvider
from ionikmetrics.proc_stat_provider import ProcStatProvider
from ionikmetrics.sysinfo_provider import SysinfoProvider
from ionikmetrics.times_provider import TimesProvider

DEFAULT_PROC_DIR = "/proc"


@dataclass
class SystemCounterGroup:
    """System counters; a value left as None was not measured."""

    cpu_usage_total: float | None = None
    cpu_usage: float | None = None
    ram_total: int | None = None
    ram_free: int | None = None
    swap_total: int | None = None
    swap_free: int | None = None
    mem_usage: int | None = None
    swap_usage: int | None = None
    mem_peak_usage: int | None = None
    ram_usage_total: float | None = None
    swap_usage_total: float | None = None

    def fill_usage_totals(self) -> None:
        """Derive the RAM and swap usage percentages from totals and free sizes."""
        if self.ram_total is not None and self.ram_free is not None and self.ram_total:
            self.ram_usage_total = (self.ram_total - self.ram_free) / self.ram_total * 100.0
        if self.swap_total is not None and self.swap_free is not None and self.swap_total:
            self.swap_usage_total = (self.swap_total - self.swap_free) / self.swap_total * 100.0


class SystemCounters:
    """Collects CPU and memory usage from procfs and system memory statistics."""

    def __init__(self, proc_dir: str | os.PathLike[str] = DEFAULT_PROC_DIR) -> None:
        base = Path(proc_dir)
        self._times_provider = TimesProvider(base / "cpuinfo")
        self._stat_provider = ProcStatProvider(base / "stat")
        self._sysinfo_provider = SysinfoProvider()
        self._self_status_provider = ProcSelfStatusProvider(base / "self" / "status")

    def query(self) -> SystemCounterGroup:
        """Take a fresh sample of all counters."""
        counters = SystemCounterGroup()

        def on_times(key: str, value: Counter) -> bool:
            if key == "cpu_usage":
                counters.cpu_usage = to_double(value)
                return True
            return False

        def on_stat(key: str, value: Counter) -> bool:
            if key == "cpu":
                counters.cpu_usage_total = to_double(value)
                return True
            return False

        def on_sysinfo(key: str, value: Counter) -> bool:
            if key == "totalram":
                counters.ram_total = to_integer(value)
            elif key == "freeram":
                counters.ram_free = to_integer(value)
            elif key == "totalswap":
                counters.swap_total = to_integer(value)
            elif key == "freeswap":
                counters.swap_free = to_integer(value)
            return False

        def on_status(key: str, value: Counter) -> bool:
            if key == "VmSize":
                counters.mem_usage = to_integer(value)
            elif key == "VmSwap":
                counters.swap_usage = to_integer(value)
            elif key == "VmPeak":
                counters.mem_peak_usage = to_integer(value)
            return False

        self._times_provider.query(on_times)
        self._stat_provider.query(on_stat)
        self._sysinfo_provider.query(on_sysinfo)
        self._self_status_provider.query(on_status)

        counters.fill_usage_totals()
        return counters