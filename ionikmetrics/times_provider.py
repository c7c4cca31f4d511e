"""CPU utilisation of the current process, measured with ``os.times``."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass

from ionikmetrics.counter import Counter, MetricsError, to_int64_counter
from ionikmetrics.parser import (
    advance_colon,
    advance_decimal_digits_value,
    advance_key,
    advance_nl1n,
    advance_units,
    advance_unparsed_value,
    advance_ws0n,
    is_nl,
    skip_ws,
)
from ionikmetrics.proc_reader import read_content

DEFAULT_CPUINFO_PATH = "/proc/cpuinfo"


@dataclass(frozen=True)
class CpuinfoRecord:
    """One ``key : value`` line of ``/proc/cpuinfo``; a blank line has an empty key."""

    key: str
    value: str


@dataclass
class CpuCoreInfo:
    """What ``/proc/cpuinfo`` tells about one processor."""

    vendor_id: str = ""
    model_name: str = ""
    cache_size: int = 0


def _parse_key_value(text: str, p: int) -> tuple[CpuinfoRecord, int] | None:
    key_part = advance_key(text, p)
    if key_part is None:
        return None
    key, p = key_part
    for step in (advance_ws0n, advance_colon, advance_ws0n):
        p = step(text, p)
        if p is None:
            return None
    value_part = advance_unparsed_value(text, p)
    if value_part is None:
        return None
    value, p = value_part
    end = advance_nl1n(text, p)
    if end is None:
        return None
    return CpuinfoRecord(key, value), end


def parse_record(text: str, pos: int) -> tuple[CpuinfoRecord, int] | None:
    """Parse the record at ``pos``.

    Returns the record and the position after it, or ``None`` when no text is
    left. A run of blank lines gives a record with an empty key. Raises
    ``MetricsError`` if the record is malformed.
    """
    if pos >= len(text):
        return None
    p = skip_ws(text, pos)
    if p >= len(text):
        return None

    if is_nl(text[p]):
        return CpuinfoRecord("", ""), advance_nl1n(text, p)

    parsed = _parse_key_value(text, p)
    if parsed is None:
        raise MetricsError("'/proc/cpuinfo' record has unexpected format")
    return parsed


def _parse_cache_size(value: str) -> int:
    digits_part = advance_decimal_digits_value(value, 0)
    if digits_part is None:
        raise MetricsError("`cache_size` in `/proc/cpuinfo` has unexpected format")
    digits, p = digits_part
    units, _ = advance_units(value, skip_ws(value, p))
    try:
        return to_int64_counter(digits, units)
    except MetricsError as exc:
        raise MetricsError("`cache_size` in `/proc/cpuinfo` has unexpected format") from exc


def parse_cpuinfo(text: str) -> list[CpuCoreInfo]:
    """Collect per-processor information from ``/proc/cpuinfo`` text.

    Parsing stops quietly at the first record that does not have the expected
    form; what was collected until then is returned. A record outside of a
    ``processor`` block raises ``MetricsError``.
    """
    cores: list[CpuCoreInfo] = []
    current: CpuCoreInfo | None = None
    pos = 0

    while True:
        try:
            parsed = parse_record(text, pos)
        except MetricsError:
            break
        if parsed is None:
            break
        rec, pos = parsed

        if not rec.key:
            current = None
            continue

        if rec.key == "processor":
            current = CpuCoreInfo()
            cores.append(current)
            continue

        if current is None:
            raise MetricsError("`/proc/cpuinfo` has unexpected format")

        if rec.key == "vendor_id":
            current.vendor_id = rec.value
        elif rec.key == "model_name":
            current.model_name = rec.value
        elif rec.key == "cache_size":
            current.cache_size = _parse_cache_size(rec.value)

    return cores


class TimesProvider:
    """Reports the CPU time share used by this process, as a percentage of all cores."""

    def __init__(self, cpuinfo_path: str | os.PathLike[str] = DEFAULT_CPUINFO_PATH) -> None:
        self._cpu_info = parse_cpuinfo(read_content(cpuinfo_path))
        sample = os.times()
        self._recent_ticks = sample.elapsed
        self._recent_sys = sample.system
        self._recent_usr = sample.user

    @property
    def cpu_info(self) -> tuple[CpuCoreInfo, ...]:
        """Processors found in the cpuinfo file."""
        return tuple(self._cpu_info)

    def calculate_cpu_usage(self) -> float:
        """Return the busy percentage since the previous sample, or -1.0 if it must be skipped."""
        cpu_count = len(self._cpu_info)
        if cpu_count == 0:
            raise MetricsError("no processor information available")

        sample = os.times()
        now, sys_time, usr_time = sample.elapsed, sample.system, sample.user

        overflow = (
            now <= self._recent_ticks
            or sys_time < self._recent_sys
            or usr_time < self._recent_usr
        )

        result = -1.0
        if not overflow:
            busy = (sys_time - self._recent_sys) + (usr_time - self._recent_usr)
            result = busy / (now - self._recent_ticks) / cpu_count * 100

        self._recent_ticks = now
        self._recent_sys = sys_time
        self._recent_usr = usr_time
        return result

    def query(self, f: Callable[[str, Counter], bool] | None) -> None:
        """Take a sample and call ``f("cpu_usage", percent)`` unless it must be skipped."""
        usage = self.calculate_cpu_usage()
        if usage < 0:
            return
        if f is not None:
            f("cpu_usage", usage)