"""Host mapping document helpers."""

from __future__ import annotations

from ipaddress import ip_address
from pathlib import Path
from typing import Any, List, Tuple

from portaudit.errors import InvalidFileError
from portaudit.models import IpAddress, MappingEntry

from .fileio import read_json_file


def load_mapping(path: Path) -> Tuple[MappingEntry, ...]:
    """Load the ``mappings`` JSON document."""

    return parse_mapping(read_json_file(path), source=path)


def parse_mapping(data: Any, source: object = "<mapping>") -> Tuple[MappingEntry, ...]:
    if not isinstance(data, dict) or not isinstance(data.get("mappings"), list):
        raise InvalidFileError(source, "expected an object with a 'mappings' list")

    entries: List[MappingEntry] = []
    for index, item in enumerate(data["mappings"]):
        if not isinstance(item, dict):
            raise InvalidFileError(source, f"mapping #{index} is not an object")
        policy_name = item.get("portspec")
        if not isinstance(policy_name, str):
            raise InvalidFileError(source, f"mapping #{index} has no portspec name")
        entries.append(
            MappingEntry(
                ips=_parse_ips(item.get("ips"), index, source),
                policy_name=policy_name,
                id=str(item.get("id", "")),
                hostname=str(item.get("hostname", "")),
                name=str(item.get("name", "")),
            )
        )
    return tuple(entries)


def _parse_ips(value: Any, index: int, source: object) -> Tuple[IpAddress, ...]:
    if not isinstance(value, list) or not value:
        raise InvalidFileError(source, f"mapping #{index} must list at least one IP address")
    ips: List[IpAddress] = []
    for raw in value:
        try:
            ips.append(ip_address(str(raw).strip()))
        except ValueError as exc:
            raise InvalidFileError(source, f"mapping #{index}: {exc}") from exc
    return tuple(ips)
