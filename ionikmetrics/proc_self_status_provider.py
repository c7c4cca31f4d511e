"""Memory counters of the current process read from ``/proc/self/status``."""

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
    advance_unparsed_value,
    advance_ws0n,
    skip_ws,
)
from ionikmetrics.proc_reader import read_content

DEFAULT_PATH = "/proc/self/status"

KEYS_WITH_UNITS = frozenset(
    {
        "VmPeak",
        "VmSize",
        "VmLck",
        "VmPin",
        "VmHWM",
        "VmRSS",
        "RssAnon",
        "RssFile",
        "RssShmem",
        "VmData",
        "VmStk",
        "VmExe",
        "VmLib",
        "VmPTE",
        "VmSwap",
        "HugetlbPages",
    }
)

_REPORTED_KEYS = frozenset({"VmSize", "VmPeak", "VmRSS", "VmSwap"})


@dataclass(frozen=True)
class StatusRecord:
    """One ``Key: ...`` line; ``values`` is (digits, units) for sized keys, else (text,)."""

    key: str
    values: tuple[str, ...]


def _parse_sized(text: str, p: int) -> tuple[tuple[str, ...], int] | None:
    part = advance_decimal_digits_value(text, p)
    if part is None:
        return None
    value, p = part
    p = advance_ws0n(text, p)
    if p is None:
        return None
    units, p = advance_units(text, p)
    p = advance_ws0n(text, p)
    if p is None:
        return None
    end = advance_nl1n(text, p)
    return None if end is None else ((value, units), end)


def _parse_plain(text: str, p: int) -> tuple[tuple[str, ...], int] | None:
    part = advance_unparsed_value(text, p)
    if part is None:
        return None
    value, p = part
    end = advance_nl1n(text, p)
    return None if end is None else ((value,), end)


def parse_record(text: str, pos: int) -> tuple[StatusRecord, int] | None:
    """Parse the record at ``pos``.

    Returns the record and the position after it, or ``None`` when no text is
    left. Raises ``MetricsError`` if the record is malformed.
    """
    if pos >= len(text):
        return None
    p = skip_ws(text, pos)
    if p >= len(text):
        return None

    parsed = None
    key_part = advance_key(text, p)
    if key_part is not None:
        key, p = key_part
        p = advance_colon(text, p)
        if p is not None:
            p = advance_ws0n(text, p)
        if p is not None:
            parse = _parse_sized if key in KEYS_WITH_UNITS else _parse_plain
            parsed = parse(text, p)

    if parsed is None:
        raise MetricsError("unexpected `/proc/self/status` record format")

    values, end = parsed
    return StatusRecord(key, values), end


def _records(text: str) -> Iterator[StatusRecord]:
    pos = 0
    while (parsed := parse_record(text, pos)) is not None:
        rec, pos = parsed
        yield rec


class ProcSelfStatusProvider:
    """Reports virtual, peak, resident and swapped memory of this process in bytes."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_PATH) -> None:
        self._path = path
        self._content = ""

    def read_all(self) -> None:
        """Read the current content of the status file."""
        self._content = read_content(self._path)

    def query(self, f: Callable[[str, Counter], bool] | None) -> None:
        """Call ``f(key, bytes)`` for each reported counter until it returns True."""
        if f is None:
            return
        self.read_all()
        for rec in _records(self._content):
            if rec.key in _REPORTED_KEYS:
                value, units = rec.values
                if f(rec.key, to_int64_counter(value, units)):
                    break