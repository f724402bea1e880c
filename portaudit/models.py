"""Input data model: scan results, portspecs and host mappings."""

from __future__ import annotations

from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Optional, Tuple, Union

from .states import HostState, PortStatus, Requirement

IpAddress = Union[IPv4Address, IPv6Address]


@dataclass(frozen=True)
class Address:
    """A single ``<address>`` element of a scanned host."""

    addr: str
    addrtype: str

    @property
    def ipv4(self) -> Optional[IPv4Address]:
        if self.addrtype != "ipv4":
            return None
        parsed = ip_address(self.addr)
        return parsed if isinstance(parsed, IPv4Address) else None


@dataclass(frozen=True)
class ExtraPorts:
    """Aggregated ``<extraports>`` bucket, present when nmap did not list every port."""

    state: PortStatus
    count: int


@dataclass(frozen=True)
class ScanPort:
    id: int
    status: PortStatus
    protocol: str = "tcp"
    reason: str = ""
    service: Optional[str] = None


@dataclass(frozen=True)
class HostStatus:
    """The ``<status>`` element of a scanned host."""

    state: HostState = HostState.UP
    reason: str = ""
    reason_ttl: int = 0


@dataclass(frozen=True)
class ScanHost:
    addresses: Tuple[Address, ...]
    ports: Tuple[ScanPort, ...] = ()
    hostnames: Tuple[str, ...] = ()
    extra_ports: Tuple[ExtraPorts, ...] = ()
    status: HostStatus = field(default_factory=HostStatus)
    starttime: int = 0
    endtime: int = 0

    @property
    def ipv4_addresses(self) -> Tuple[IPv4Address, ...]:
        found = (address.ipv4 for address in self.addresses)
        return tuple(ip for ip in found if ip is not None)


@dataclass(frozen=True)
class ScanRun:
    """Parsed ``<nmaprun>`` document."""

    scanner: str
    args: str
    start: int
    hosts: Tuple[ScanHost, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PolicyRule:
    id: int
    requirement: Requirement


@dataclass(frozen=True)
class Policy:
    """A named portspec: ordered rules describing expected port reachability."""

    name: str
    rules: Tuple[PolicyRule, ...] = ()


@dataclass(frozen=True)
class MappingEntry:
    """Associates one or more IP addresses with a portspec name.

    ``id``, ``hostname`` and ``name`` are carried for reporting only and play
    no part in matching.
    """

    ips: Tuple[IpAddress, ...]
    policy_name: str
    id: str = ""
    hostname: str = ""
    name: str = ""
