"""CPU utilisation computed from ``/proc/stat``."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from ionikmetrics.counter import Counter, MetricsError, to_int64_counter
from ionikmetrics.parser import (
    advance_key,
    advance_nl1n,
    advance_token,
    advance_ws1n,
    skip_ws,
)
from ionikmetrics.proc_reader import read_content

DEFAULT_PATH = "/proc/stat"

_MAX_CPU_CORES = 4096


@dataclass(frozen=True)
class StatRecord:
    """One line of ``/proc/stat``: a key followed by its values."""

    key: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class CpuData:
    """Time spent by a CPU in user, nice, system and idle modes, in ticks."""

    usr: int = 0
    usr_low: int = 0
    sys: int = 0
    idl: int = 0


def cpu_core_index(key: str) -> int:
    """Return 0 for the ``cpu`` total line and N + 1 for ``cpuN``."""
    if key == "cpu":
        return 0
    index = to_int64_counter(key[3:]) + 1
    if index <= 0 or index > _MAX_CPU_CORES:
        raise MetricsError(f"too big number of CPU cores: {index}")
    return index


def parse_record(text: str, pos: int) -> tuple[StatRecord, int] | None:
    """Parse the record at ``pos``.

    Returns the record and the position after it, or ``None`` when no text is
    left. Raises ``MetricsError`` if the record is malformed.
    """
    if pos >= len(text):
        return None
    p = skip_ws(text, pos)
    if p >= len(text):
        return None

    key_part = advance_key(text, p)
    if key_part is None:
        raise MetricsError("unexpected `/proc/stat` record format")
    key, p = key_part

    values = []
    while (after_ws := advance_ws1n(text, p)) is not None:
        p = after_ws
        token_end = advance_token(text, p)
        if token_end is None:
            break
        values.append(text[p:token_end])
        p = token_end

    after_nl = advance_nl1n(text, p)
    if after_nl is not None:
        p = after_nl

    if not values:
        raise MetricsError("`/proc/stat` record value is empty")

    return StatRecord(key, tuple(values)), p


def _records(text: str) -> Iterator[StatRecord]:
    pos = 0
    while (parsed := parse_record(text, pos)) is not None:
        rec, pos = parsed
        yield rec


def parse_cpu_data(rec: StatRecord) -> CpuData | None:
    """Return the first four CPU time values of a record, or None if they are invalid."""
    if len(rec.values) < 4:
        return None
    try:
        usr, usr_low, sys_, idl = (to_int64_counter(v) for v in rec.values[:4])
    except MetricsError:
        return None
    return CpuData(usr, usr_low, sys_, idl)


class ProcStatProvider:
    """Reports the busy percentage of all CPUs (``cpu``) and of each core (``cpuN``)."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_PATH) -> None:
        self._path = path
        self._content = ""
        self._cpu_recent_data: list[CpuData] = []

        self.read_all()
        for rec in _records(self._content):
            if not rec.key.startswith("cpu"):
                continue
            index = cpu_core_index(rec.key)
            data = parse_cpu_data(rec)
            if data is None:
                raise MetricsError(f"bad value for `{rec.key}` in `/proc/stat`")
            del self._cpu_recent_data[index + 1 :]
            missing = index + 1 - len(self._cpu_recent_data)
            self._cpu_recent_data.extend(CpuData() for _ in range(missing))
            self._cpu_recent_data[index] = data

    def read_all(self) -> None:
        """Read the current content of the stat file."""
        self._content = read_content(self._path)

    def calculate_cpu_usage(self, rec: StatRecord) -> float | None:
        """Return the busy percentage since the previous sample, -1.0 if it must be skipped.

        Returns None if the record is invalid or names an unknown core.
        """
        current = parse_cpu_data(rec)
        if current is None:
            return None

        index = cpu_core_index(rec.key)
        if index >= len(self._cpu_recent_data):
            return None

        recent = self._cpu_recent_data[index]
        overflow = (
            current.usr < recent.usr
            or current.usr_low < recent.usr_low
            or current.sys < recent.sys
            or current.idl < recent.idl
        )

        result = -1.0
        if not overflow:
            busy = (
                (current.usr - recent.usr)
                + (current.usr_low - recent.usr_low)
                + (current.sys - recent.sys)
            )
            total = busy + (current.idl - recent.idl)
            if total != 0:
                result = busy / total * 100

        self._cpu_recent_data[index] = current
        return result

    def query(self, f: Callable[[str, Counter], bool] | None) -> None:
        """Call ``f(key, percent)`` for each CPU line until it returns True."""
        if f is None:
            return
        self.read_all()
        for rec in _records(self._content):
            if not rec.key.startswith("cpu"):
                continue
            usage = self.calculate_cpu_usage(rec)
            if usage is None:
                raise MetricsError(f"bad value for `{rec.key}` in `/proc/stat`")
            if usage < 0:
                continue
            if f(rec.key, usage):
                break