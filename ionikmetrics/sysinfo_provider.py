"""System-wide memory counters and resource usage of the current process."""

from __future__ import annotations

import resource
import time
from collections.abc import Callable, Iterable

import psutil

from ionikmetrics.counter import Counter


def _emit(f: Callable[[str, Counter], bool], items: Iterable[tuple[str, Counter]]) -> None:
    for key, value in items:
        if f(key, value):
            break


class SysinfoProvider:
    """Reports uptime in seconds and RAM and swap sizes in bytes."""

    def query(self, f: Callable[[str, Counter], bool] | None) -> None:
        """Call ``f(key, value)`` for each counter until it returns True."""
        uptime = int(time.time() - psutil.boot_time())
        mem = psutil.virtual_memory()
        swap = psutil.swap_memory()

        if f is None:
            return

        _emit(
            f,
            [
                ("uptime", uptime),
                ("totalram", int(mem.total)),
                ("freeram", int(mem.free)),
                ("sharedram", int(getattr(mem, "shared", 0))),
                ("bufferram", int(getattr(mem, "buffers", 0))),
                ("totalswap", int(swap.total)),
                ("freeswap", int(swap.free)),
                # High memory exists only on 32-bit kernels.
                ("totalhigh", 0),
                ("freehigh", 0),
            ],
        )


class GetrusageProvider:
    """Reports the resource usage of the current process."""

    def query(self, f: Callable[[str, Counter], bool] | None) -> None:
        """Call ``f(key, value)`` for each counter until it returns True."""
        usage = resource.getrusage(resource.RUSAGE_SELF)

        if f is None:
            return

        _emit(
            f,
            [
                ("maxrss", int(usage.ru_maxrss)),
                ("ixrss", int(usage.ru_ixrss)),
                ("idrss", int(usage.ru_idrss)),
                ("isrss", int(usage.ru_isrss)),
            ],
        )