"""Compare observed port states with the portspec assigned to each host."""

from __future__ import annotations

import logging
from ipaddress import IPv4Address
from typing import Callable, Dict, List, Mapping, Tuple

from portaudit.models import IpAddress, Policy, PolicyRule, ScanHost
from portaudit.result import NO_POLICY_REASON, Evaluation, PortVerdict
from portaudit.states import PortReason, PortStatus, Requirement, Verdict

logger = logging.getLogger(__name__)

# (requirement, observed open) -> outcome
CLASSIFICATION: Dict[Tuple[Requirement, bool], Tuple[Callable[[int, PortReason], PortVerdict], PortReason]] = {
    (Requirement.OPEN, True): (PortVerdict.passed, PortReason.OPEN_AND_OPEN),
    (Requirement.OPEN, False): (PortVerdict.failed, PortReason.OPEN_BUT_CLOSED),
    (Requirement.CLOSED, False): (PortVerdict.passed, PortReason.CLOSED_AND_CLOSED),
    (Requirement.CLOSED, True): (PortVerdict.failed, PortReason.CLOSED_BUT_OPEN),
    (Requirement.MAYBE, True): (PortVerdict.passed, PortReason.MAYBE_AND_OPEN),
    (Requirement.MAYBE, False): (PortVerdict.passed, PortReason.MAYBE_AND_CLOSED),
}


def classify(port_id: int, requirement: Requirement, status: PortStatus) -> PortVerdict:
    build, reason = CLASSIFICATION[(requirement, status.is_open)]
    return build(port_id, reason)


def index_rules(policy: Policy) -> Dict[int, PolicyRule]:
    """Index rules by port id; the first rule for a port id wins."""

    rules: Dict[int, PolicyRule] = {}
    for rule in policy.rules:
        if rule.id in rules:
            logger.warning(
                "Portspec '%s' defines port %d more than once; using the first rule",
                policy.name,
                rule.id,
            )
            continue
        rules[rule.id] = rule
    return rules


def evaluate_ports(host: ScanHost, policy: Policy) -> Tuple[PortVerdict, ...]:
    """Classify every scanned port, then report rules whose port was never scanned."""

    rules = index_rules(policy)
    unconsumed = dict.fromkeys(rules)
    verdicts: List[PortVerdict] = []

    for port in host.ports:
        unconsumed.pop(port.id, None)
        rule = rules.get(port.id)
        # ports not named by the portspec are expected to be closed
        requirement = rule.requirement if rule is not None else Requirement.CLOSED
        verdicts.append(classify(port.id, requirement, port.status))

    verdicts.extend(PortVerdict.not_scanned(port_id) for port_id in unconsumed)
    return tuple(verdicts)


def evaluate_host(ip: IpAddress, host: ScanHost, policy: Policy) -> Evaluation:
    port_verdicts = evaluate_ports(host, policy)
    verdict = Verdict.PASS if all(item.is_pass for item in port_verdicts) else Verdict.FAIL
    return Evaluation(
        ip=ip,
        verdict=verdict,
        policy_name=policy.name,
        port_verdicts=port_verdicts,
    )


def evaluate(
    hosts_by_ip: Mapping[IPv4Address, ScanHost],
    policy_by_ip: Mapping[IpAddress, Policy],
) -> List[Evaluation]:
    """Produce one evaluation per scanned IP, in ascending IP order."""

    evaluations: List[Evaluation] = []
    for ip in sorted(hosts_by_ip):
        policy = policy_by_ip.get(ip)
        if policy is None:
            logger.info("No portspec mapped to %s", ip)
            evaluations.append(Evaluation(ip=ip, verdict=Verdict.ERROR, error_reason=NO_POLICY_REASON))
            continue
        evaluation = evaluate_host(ip, hosts_by_ip[ip], policy)
        logger.debug("%s evaluated against '%s': %s", ip, policy.name, evaluation.verdict.value)
        evaluations.append(evaluation)
    return evaluations
