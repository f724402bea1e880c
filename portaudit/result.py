"""Core result data structures for the analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .models import IpAddress
from .states import PortReason, PortVerdictKind, Verdict

NO_POLICY_REASON = "no policy found for this IP address"


@dataclass(frozen=True)
class PortVerdict:
    """Outcome for a single port: ``Pass``, ``Fail``, ``NotScanned`` or ``Unknown``.

    Only ``Pass`` and ``Fail`` carry a reason.
    """

    kind: PortVerdictKind
    port: int
    reason: Optional[PortReason] = None

    @classmethod
    def passed(cls, port: int, reason: PortReason) -> "PortVerdict":
        return cls(PortVerdictKind.PASS, port, reason)

    @classmethod
    def failed(cls, port: int, reason: PortReason) -> "PortVerdict":
        return cls(PortVerdictKind.FAIL, port, reason)

    @classmethod
    def not_scanned(cls, port: int) -> "PortVerdict":
        return cls(PortVerdictKind.NOT_SCANNED, port)

    @property
    def is_pass(self) -> bool:
        return self.kind is PortVerdictKind.PASS

    def to_dict(self) -> Dict[str, object]:
        return {
            "port": self.port,
            "result": self.kind.value,
            "reason": self.reason.value if self.reason else None,
        }


@dataclass(frozen=True)
class Evaluation:
    """Verdict for one scanned IP address against its portspec."""

    ip: IpAddress
    verdict: Verdict
    policy_name: Optional[str] = None
    port_verdicts: Tuple[PortVerdict, ...] = ()
    error_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "ip": str(self.ip),
            "portspec": self.policy_name,
            "result": self.verdict.value,
            "reason": self.error_reason,
            "ports": [verdict.to_dict() for verdict in self.port_verdicts],
        }


@dataclass
class Summary:
    """Aggregate host counts by verdict."""

    passed: int = 0
    failed: int = 0
    errors: int = 0

    def increment(self, verdict: Verdict) -> None:
        if verdict is Verdict.PASS:
            self.passed += 1
        elif verdict is Verdict.FAIL:
            self.failed += 1
        else:
            self.errors += 1

    def to_dict(self) -> Dict[str, int]:
        return {"pass": self.passed, "fail": self.failed, "error": self.errors}

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.errors


@dataclass
class AnalysisResult:
    """Bundle verdict counts and the ordered evaluations."""

    summary: Summary = field(default_factory=Summary)
    evaluations: List[Evaluation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.summary.failed == 0 and self.summary.errors == 0

    def add_evaluation(self, evaluation: Evaluation) -> None:
        self.summary.increment(evaluation.verdict)
        self.evaluations.append(evaluation)

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "evaluations": [evaluation.to_dict() for evaluation in self.evaluations],
            "passed": self.passed,
        }

    def exit_code(self) -> int:
        if self.summary.errors > 0:
            return 10
        if self.summary.failed > 0:
            return 1
        return 0


def aggregate(evaluations: Iterable[Evaluation]) -> AnalysisResult:
    """Tally evaluations by verdict, keeping their order."""

    result = AnalysisResult()
    for evaluation in evaluations:
        result.add_evaluation(evaluation)
    return result


def format_summary_line(result: AnalysisResult) -> str:
    summary = result.summary
    return f"Analyzer result summary: pass={summary.passed}, failed={summary.failed}, errors={summary.errors}"
