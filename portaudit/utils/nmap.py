"""nmap XML result helpers."""

from __future__ import annotations

import logging
from ipaddress import ip_address
from pathlib import Path
from typing import List, Optional

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET

from portaudit.errors import InsaneScanError, InvalidFileError
from portaudit.models import Address, ExtraPorts, HostStatus, ScanHost, ScanPort, ScanRun
from portaudit.states import HostState, PortStatus

from .fileio import read_text_file

logger = logging.getLogger(__name__)

ALL_PORTS_FLAG = "-dd"
MAX_PORT = 65535


def load_scan(path: Path) -> ScanRun:
    """Load an nmap ``-oX`` result file."""

    return parse_scan(read_text_file(path), source=path)


def parse_scan(text: str, source: object = "<nmap>") -> ScanRun:
    try:
        root = ET.fromstring(text)
    except (ET.ParseError, DefusedXmlException) as exc:
        raise InvalidFileError(source, f"could not parse file, because {exc}") from exc
    if root.tag != "nmaprun":
        raise InvalidFileError(source, f"unexpected root element <{root.tag}>")

    hosts = tuple(_parse_host(element, source) for element in root.findall("host"))
    logger.debug("Parsed %d hosts from %s", len(hosts), source)
    return ScanRun(
        scanner=root.get("scanner", ""),
        args=root.get("args", ""),
        start=_parse_int(root.get("start"), "start", source, default=0),
        hosts=hosts,
    )


def _parse_host(element, source: object) -> ScanHost:
    addresses: List[Address] = []
    for node in element.findall("address"):
        addr = node.get("addr")
        addrtype = node.get("addrtype", "ipv4")
        if not addr:
            raise InvalidFileError(source, "host address without 'addr' attribute")
        address = Address(addr=addr, addrtype=addrtype)
        if addrtype == "ipv4":
            try:
                ip_address(addr)
            except ValueError as exc:
                raise InvalidFileError(source, str(exc)) from exc
        addresses.append(address)

    hostnames = tuple(
        node.get("name", "") for node in element.findall("hostnames/hostname") if node.get("name")
    )
    extra_ports = tuple(
        ExtraPorts(
            state=_parse_status(node.get("state", ""), source),
            count=_parse_int(node.get("count"), "extraports count", source, default=0),
        )
        for node in element.findall("ports/extraports")
    )
    ports = tuple(_parse_port(node, source) for node in element.findall("ports/port"))
    return ScanHost(
        addresses=tuple(addresses),
        ports=ports,
        hostnames=hostnames,
        extra_ports=extra_ports,
        status=_parse_host_status(element.find("status"), source),
        starttime=_parse_int(element.get("starttime"), "starttime", source, default=0),
        endtime=_parse_int(element.get("endtime"), "endtime", source, default=0),
    )


def _parse_host_status(node, source: object) -> HostStatus:
    if node is None:
        raise InvalidFileError(source, "host has no status")
    state = node.get("state", "")
    try:
        host_state = HostState.parse(state)
    except ValueError as exc:
        raise InvalidFileError(source, f"invalid host state: {state.strip().lower()}") from exc
    return HostStatus(
        state=host_state,
        reason=node.get("reason", ""),
        reason_ttl=_parse_int(node.get("reason_ttl"), "reason_ttl", source, default=0),
    )


def _parse_port(node, source: object) -> ScanPort:
    port_id = _parse_int(node.get("portid"), "portid", source)
    if not 0 <= port_id <= MAX_PORT:
        raise InvalidFileError(source, f"port id out of range: {port_id}")
    state = node.find("state")
    if state is None:
        raise InvalidFileError(source, f"port {port_id} has no state")
    service = node.find("service")
    return ScanPort(
        id=port_id,
        status=_parse_status(state.get("state", ""), source),
        protocol=node.get("protocol", "tcp"),
        reason=state.get("reason", ""),
        service=service.get("name") if service is not None else None,
    )


def _parse_status(value: str, source: object) -> PortStatus:
    try:
        return PortStatus.parse(value)
    except ValueError as exc:
        raise InvalidFileError(source, f"invalid port status: {value.strip().lower()}") from exc


def _parse_int(value: Optional[str], label: str, source: object, default: Optional[int] = None) -> int:
    if value is None and default is not None:
        return default
    try:
        return int(str(value))
    except ValueError as exc:
        raise InvalidFileError(source, f"invalid {label}: {value!r}") from exc


# ----------------------------------------------------------------------
# Sanity check
# ----------------------------------------------------------------------
def check_sanity(run: ScanRun) -> None:
    """Reject scans that do not enumerate every port of every host.

    A port only counts as closed when nmap reported it individually, which
    requires ``nmap -dd``. Aggregated ``extraports`` buckets and hosts
    without an IPv4 address cannot be analyzed.
    """

    if ALL_PORTS_FLAG not in run.args:
        raise InsaneScanError("nmap has been run without -dd option; use nmap -dd ..")
    for host in run.hosts:
        _check_host(host)


def _check_host(host: ScanHost) -> None:
    if host.extra_ports:
        raise InsaneScanError("Host has extraports defined; use nmap -dd ...")
    if not host.addresses:
        raise InsaneScanError("Host has no addresses")
    if not host.ipv4_addresses:
        raise InsaneScanError("Host has no IP address")

