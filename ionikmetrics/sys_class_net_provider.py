"""Network interface traffic counters read from ``/sys/class/net``."""

from __future__ import annotations

import dataclasses
import errno
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ionikmetrics.counter import Counter, MetricsError, to_int64_counter
from ionikmetrics.proc_reader import read_content

DEFAULT_NET_DIR = "/sys/class/net"


@dataclass
class NetCounterData:
    """Byte totals and transfer speeds (bytes per second) of one interface."""

    rx_bytes: int = 0
    tx_bytes: int = 0
    rx_speed: float = 0.0
    tx_speed: float = 0.0
    rx_speed_max: float = 0.0
    tx_speed_max: float = 0.0


def _not_found(path: Path) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))


def read_integer(path: str | os.PathLike[str]) -> int:
    """Read a non-negative decimal integer that fills a sysfs file."""
    text = read_content(path).rstrip("\n")
    if not text:
        raise MetricsError(f"invalid content in: {os.fspath(path)}")
    try:
        value = to_int64_counter(text)
    except MetricsError as exc:
        raise MetricsError(f"invalid content in: {os.fspath(path)}") from exc
    if value < 0:
        raise MetricsError(f"invalid content in: {os.fspath(path)}")
    return value


class SysClassNetProvider:
    """Reports received and sent bytes of an interface and the speeds between queries."""

    def __init__(
        self,
        iface: str,
        readable_name: str = "",
        net_dir: str | os.PathLike[str] = DEFAULT_NET_DIR,
    ) -> None:
        self._iface = iface
        self._readable_name = readable_name or iface

        base = Path(net_dir)
        root = base / iface / "statistics"
        self._rx_bytes_path = root / "rx_bytes"
        self._tx_bytes_path = root / "tx_bytes"

        for path in (base, root, self._rx_bytes_path, self._tx_bytes_path):
            if not path.exists():
                raise _not_found(path)

        self._recent = NetCounterData()
        self._recent.rx_bytes, self._recent.tx_bytes = self.read()
        self._recent_checkpoint = time.monotonic_ns()

    @property
    def iface_name(self) -> str:
        """System name of the interface."""
        return self._iface

    @property
    def readable_name(self) -> str:
        """Name of the interface meant for people."""
        return self._readable_name

    def read(self) -> tuple[int, int]:
        """Return the current received and sent byte totals."""
        return read_integer(self._rx_bytes_path), read_integer(self._tx_bytes_path)

    def read_all(self) -> bool:
        """Update totals and speeds; return False if no time has passed since the last update."""
        rx_bytes, tx_bytes = self.read()

        now = time.monotonic_ns()
        millis = (now - self._recent_checkpoint) // 1_000_000
        if millis <= 0:
            return False

        rx_speed = (rx_bytes - self._recent.rx_bytes) * 1000 / millis
        tx_speed = (tx_bytes - self._recent.tx_bytes) * 1000 / millis

        self._recent = NetCounterData(
            rx_bytes=rx_bytes,
            tx_bytes=tx_bytes,
            rx_speed=rx_speed,
            tx_speed=tx_speed,
            rx_speed_max=max(self._recent.rx_speed_max, rx_speed),
            tx_speed_max=max(self._recent.tx_speed_max, tx_speed),
        )
        self._recent_checkpoint = now
        return True

    def query_counters(self) -> NetCounterData | None:
        """Update and return the counters, or None if no time has passed since the last update."""
        if not self.read_all():
            return None
        return dataclasses.replace(self._recent)

    def query(self, f: Callable[[str, Counter], bool] | None) -> bool:
        """Update counters and call ``f(key, value)`` for each until it returns True.

        Returns False if no time has passed since the last update.
        """
        if f is None:
            return True
        if not self.read_all():
            return False
        data = self._recent
        for key, value in (
            ("rx_bytes", data.rx_bytes),
            ("tx_bytes", data.tx_bytes),
            ("rx_speed", data.rx_speed),
            ("tx_speed", data.tx_speed),
            ("rx_speed_max", data.rx_speed_max),
            ("tx_speed_max", data.tx_speed_max),
        ):
            if f(key, value):
                break
        return True

    @staticmethod
    def interfaces(net_dir: str | os.PathLike[str] = DEFAULT_NET_DIR) -> list[str]:
        """Return the names of the network interfaces, sorted."""
        base = Path(net_dir)
        if not base.exists():
            raise _not_found(base)
        if not base.is_dir():
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(base))
        # Entries are usually symbolic links to device directories.
        return sorted(entry.name for entry in base.iterdir())