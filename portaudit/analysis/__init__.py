"""Join scan results with portspecs and evaluate compliance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from portaudit.models import MappingEntry, Policy, ScanRun
from portaudit.result import AnalysisResult, aggregate

from .evaluator import evaluate, evaluate_host
from .indexer import build_host_index, build_policy_index


@dataclass
class AnalysisContext:
    """Bundle the three inputs of an analysis run."""

    run: ScanRun
    mappings: Sequence[MappingEntry]
    policies: Sequence[Policy]


def run_analysis(context: AnalysisContext) -> AnalysisResult:
    hosts_by_ip = build_host_index(context.run.hosts)
    policy_by_ip = build_policy_index(context.mappings, context.policies)
    return aggregate(evaluate(hosts_by_ip, policy_by_ip))


__all__ = [
    "AnalysisContext",
    "build_host_index",
    "build_policy_index",
    "evaluate",
    "evaluate_host",
    "run_analysis",
]
