"""Network interface collector."""

import logging
import socket
from typing import List

import psutil

from ..core.errors import CollectorFailure
from ..core.models import Domain, NetworkInfo
from .base import Collector


logger = logging.getLogger(__name__)

LINK_FAMILIES = {getattr(psutil, "AF_LINK", None), getattr(socket, "AF_PACKET", None)} - {None}


class NetworkCollector(Collector):
    """Collects per-interface counters, addresses and link state."""

    domain = Domain.NETWORK

    def __init__(self, include_loopback: bool = False):
        super().__init__()
        self.include_loopback = include_loopback

    def _collect(self) -> List[NetworkInfo]:
        try:
            stats = psutil.net_io_counters(pernic=True)
            addrs = psutil.net_if_addrs()
            if_stats = psutil.net_if_stats()
        except (psutil.Error, OSError) as e:
            raise CollectorFailure(f"cannot read network interfaces: {e}") from e

        interfaces = []
        for name in sorted(stats):
            io = stats[name]
            if not self.include_loopback and name.lower().startswith("lo"):
                continue

            iface = NetworkInfo(
                name=name,
                received=io.bytes_recv,
                transmitted=io.bytes_sent,
                packets_received=io.packets_recv,
                packets_transmitted=io.packets_sent,
                errors_in=io.errin,
                errors_out=io.errout,
            )

            for addr in addrs.get(name, []):
                if addr.family == socket.AF_INET and not iface.ipv4_address:
                    iface.ipv4_address = addr.address
                elif addr.family == socket.AF_INET6 and not iface.ipv6_address:
                    iface.ipv6_address = addr.address.split("%", 1)[0]
                elif addr.family in LINK_FAMILIES and addr.address:
                    iface.mac_address = addr.address

            if name in if_stats:
                iface.is_up = if_stats[name].isup
                iface.speed_mbps = if_stats[name].speed or None
                iface.mtu = if_stats[name].mtu or None

            interfaces.append(iface)

        return interfaces
