"""Portspec (policy) document helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Tuple

from portaudit.errors import InvalidFileError
from portaudit.models import Policy, PolicyRule
from portaudit.states import Requirement

from .fileio import read_yaml_file

MAX_PORT = 65535


def load_portspecs(path: Path) -> Tuple[Policy, ...]:
    """Load the ``portspecs`` YAML document into policies."""

    return parse_portspecs(read_yaml_file(path), source=path)


def parse_portspecs(data: Any, source: object = "<portspecs>") -> Tuple[Policy, ...]:
    if not isinstance(data, dict) or not isinstance(data.get("portspecs"), list):
        raise InvalidFileError(source, "expected a mapping with a 'portspecs' list")

    policies: List[Policy] = []
    for index, item in enumerate(data["portspecs"]):
        if not isinstance(item, dict):
            raise InvalidFileError(source, f"portspec #{index} is not a mapping")
        name = item.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidFileError(source, f"portspec #{index} has no name")
        ports = item.get("ports") or []
        if not isinstance(ports, list):
            raise InvalidFileError(source, f"portspec '{name}' ports must be a list")
        rules = tuple(_parse_rule(port, name, source) for port in ports)
        policies.append(Policy(name=name, rules=rules))
    return tuple(policies)


def _parse_rule(port: Any, policy_name: str, source: object) -> PolicyRule:
    if not isinstance(port, dict):
        raise InvalidFileError(source, f"portspec '{policy_name}' contains a non-mapping port entry")
    port_id = port.get("id")
    # bool is an int subclass; yaml turns "yes"/"no" into booleans
    if isinstance(port_id, bool) or not isinstance(port_id, int) or not 0 <= port_id <= MAX_PORT:
        raise InvalidFileError(source, f"portspec '{policy_name}' has invalid port id: {port_id!r}")
    state = port.get("state")
    if not isinstance(state, str):
        raise InvalidFileError(source, f"portspec '{policy_name}' port {port_id} has no state")
    try:
        requirement = Requirement.parse(state)
    except ValueError as exc:
        raise InvalidFileError(source, f"invalid port state: {state.strip().lower()}") from exc
    return PolicyRule(id=port_id, requirement=requirement)
