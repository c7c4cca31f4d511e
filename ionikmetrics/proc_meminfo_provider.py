"""Memory counters read from ``/proc/meminfo``."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from ionikmetrics.counter import Counter, MetricsError, to_int64_counter
from ionikmetrics.parser import (
    advance_colon,
    advance_decimal_digits_value,
    advance_key,
    advance_nl1n,
    advance_units,
    advance_ws0n,
    skip_ws,
)
from ionikmetrics.proc_reader import read_content

DEFAULT_PATH = "/proc/meminfo"

_REPORTED_KEYS = frozenset(
    {"MemTotal", "MemFree", "Cached", "SwapCached", "SwapTotal", "SwapFree"}
)


@dataclass(frozen=True)
class MeminfoRecord:
    """One ``Key: value [units]`` line of ``/proc/meminfo``."""

    key: str
    value: str
    units: str


def parse_record(text: str, pos: int) -> tuple[MeminfoRecord, int] | None:
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
    value_part = None
    units = ""
    end = None

    if key_part is not None:
        key, p = key_part
        p = advance_colon(text, p)
        if p is not None:
            p = advance_ws0n(text, p)
        if p is not None:
            value_part = advance_decimal_digits_value(text, p)
        if value_part is not None:
            value, p = value_part
            p = advance_ws0n(text, p)
            if p is not None:
                units, p = advance_units(text, p)
                p = advance_ws0n(text, p)
            if p is not None:
                end = advance_nl1n(text, p)

    if end is None:
        raise MetricsError("unexpected meminfo record format")

    return MeminfoRecord(key, value, units), end


def _records(text: str) -> Iterator[MeminfoRecord]:
    pos = 0
    while (parsed := parse_record(text, pos)) is not None:
        rec, pos = parsed
        yield rec


class ProcMeminfoProvider:
    """Reports total and free RAM, cache and swap in bytes."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_PATH) -> None:
        self._path = path
        self._content = ""

    def read_all(self) -> None:
        """Read the current content of the meminfo file."""
        self._content = read_content(self._path)

    def query(self, f: Callable[[str, Counter], bool] | None) -> None:
        """Call ``f(key, bytes)`` for each reported counter until it returns True."""
        if f is None:
            return
        self.read_all()
        for rec in _records(self._content):
            if rec.key in _REPORTED_KEYS:
                if f(rec.key, to_int64_counter(rec.value, rec.units)):
                    break