"""Index scanned hosts and portspecs by IP address."""

from __future__ import annotations

import logging
from ipaddress import IPv4Address
from typing import Dict, Iterable

from portaudit.models import IpAddress, MappingEntry, Policy, ScanHost

logger = logging.getLogger(__name__)


def _ip_sort_key(ip: IpAddress):
    return (ip.version, ip)


def build_policy_by_name(policies: Iterable[Policy]) -> Dict[str, Policy]:
    """Index portspecs by name; a later portspec replaces an earlier one of the same name."""

    by_name: Dict[str, Policy] = {}
    for policy in policies:
        if policy.name in by_name:
            logger.debug("Portspec '%s' defined more than once; using the last definition", policy.name)
        by_name[policy.name] = policy
    return by_name


def build_policy_index(mappings: Iterable[MappingEntry], policies: Iterable[Policy]) -> Dict[IpAddress, Policy]:
    """Resolve each mapped IP to its portspec.

    Entries naming an unknown portspec are skipped; such IPs surface later as
    hosts without a policy. When an IP is mapped more than once the last
    entry wins.
    """

    by_name = build_policy_by_name(policies)
    by_ip: Dict[IpAddress, Policy] = {}
    for entry in mappings:
        policy = by_name.get(entry.policy_name)
        if policy is None:
            logger.debug("Mapping %s references unknown portspec '%s'", entry.id or entry.ips, entry.policy_name)
            continue
        for ip in entry.ips:
            previous = by_ip.get(ip)
            if previous is not None and previous.name != policy.name:
                logger.debug("IP %s remapped from portspec '%s' to '%s'", ip, previous.name, policy.name)
            by_ip[ip] = policy
    return dict(sorted(by_ip.items(), key=lambda item: _ip_sort_key(item[0])))


def build_host_index(hosts: Iterable[ScanHost]) -> Dict[IPv4Address, ScanHost]:
    """Map every IPv4 address of every scanned host to that host.

    Multi-homed hosts appear once per address; hosts without an IPv4
    address cannot be matched and are left out.
    """

    by_ip: Dict[IPv4Address, ScanHost] = {}
    for host in hosts:
        addresses = host.ipv4_addresses
        if not addresses:
            logger.debug("Skipping scanned host without IPv4 address: %s", host.addresses)
            continue
        for ip in addresses:
            by_ip[ip] = host
    return dict(sorted(by_ip.items()))
