"""Traffic counters of a selected network interface."""

from __future__ import annotations

import os
from dataclasses import dataclass

from ionikmetrics.sys_class_net_provider import DEFAULT_NET_DIR, SysClassNetProvider


@dataclass
class NetworkCounterGroup:
    """Traffic counters of one interface; all zero when nothing could be measured."""

    iface: str = ""
    readable_name: str = ""
    rx_bytes: int = 0
    tx_bytes: int = 0
    rx_speed: float = 0.0
    tx_speed: float = 0.0
    rx_speed_max: float = 0.0
    tx_speed_max: float = 0.0


class NetworkCounters:
    """Measures traffic of one network interface, which may be chosen later."""

    def __init__(
        self,
        iface: str | None = None,
        net_dir: str | os.PathLike[str] = DEFAULT_NET_DIR,
    ) -> None:
        self._net_dir = net_dir
        self._provider: SysClassNetProvider | None = None
        if iface is not None:
            self.set_interface(iface)

    def set_interface(self, iface: str) -> None:
        """Start measuring ``iface`` instead of the current interface."""
        self._provider = SysClassNetProvider(iface, iface, self._net_dir)

    def query(self) -> NetworkCounterGroup:
        """Return fresh counters, or an empty group if none can be measured yet."""
        if self._provider is None:
            return NetworkCounterGroup()
        data = self._provider.query_counters()
        if data is None:
            return NetworkCounterGroup()
        return NetworkCounterGroup(
            iface=self._provider.iface_name,
            readable_name=self._provider.readable_name,
            rx_bytes=data.rx_bytes,
            tx_bytes=data.tx_bytes,
            rx_speed=data.rx_speed,
            tx_speed=data.tx_speed,
            rx_speed_max=data.rx_speed_max,
            tx_speed_max=data.tx_speed_max,
        )

    @staticmethod
    def interfaces(net_dir: str | os.PathLike[str] = DEFAULT_NET_DIR) -> list[str]:
        """Return the names of the network interfaces, sorted."""
        return SysClassNetProvider.interfaces(net_dir)