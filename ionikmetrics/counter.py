"""Counter values and conversion of textual counters with units."""

from __future__ import annotations

from typing import Union

Counter = Union[int, float]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# /proc/meminfo prints "kB" but means KiB; /proc/cpuinfo prints "KB".
_UNITS = {"kB": 1024, "KB": 1024}


class MetricsError(Exception):
    """Raised when metrics data cannot be read or has an unexpected form."""


def units_to_bytes(units: str) -> int:
    """Return the byte multiplier for a units suffix; an empty suffix means 1."""
    if not units:
        return 1
    try:
        return _UNITS[units]
    except KeyError:
        raise MetricsError(f"unsupported units: {units}") from None


def _parse_int64(value: str) -> int:
    digits = value[1:] if value[:1] in ("+", "-") else value
    if not digits or not all("0" <= ch <= "9" for ch in digits):
        raise MetricsError(f"bad numeric value for: {value}")
    result = int(value, 10)
    if not _INT64_MIN <= result <= _INT64_MAX:
        raise MetricsError(f"bad numeric value for: {value}")
    return result


def to_int64_counter(value: str, units: str = "") -> int:
    """Parse a decimal value and scale it to bytes according to ``units``."""
    number = _parse_int64(value)
    return number * units_to_bytes(units)


def to_integer(value: Counter) -> int:
    """Return a counter as an integer, truncating a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"not a counter value: {value!r}")
    return int(value)


def to_double(value: Counter) -> float:
    """Return a counter as a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"not a counter value: {value!r}")
    return float(value)