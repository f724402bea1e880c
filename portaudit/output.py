"""Render analysis results as a console table or JSON document."""

from __future__ import annotations

import json
from enum import Enum
from typing import List, Sequence

from .result import AnalysisResult, Evaluation, PortVerdict
from .states import PortReason, PortVerdictKind, Verdict

TABLE_HEADERS = ("Host", "Portspec", "Result", "Port", "Port Result", "Failure Reason")

PORT_RESULT_LABELS = {
    PortVerdictKind.PASS: "passed",
    PortVerdictKind.FAIL: "failed",
    PortVerdictKind.NOT_SCANNED: "not scanned",
    PortVerdictKind.UNKNOWN: "unknown",
}

REASON_LABELS = {
    PortReason.OPEN_BUT_CLOSED: "expected Open, found Closed",
    PortReason.CLOSED_BUT_OPEN: "expected Closed, found Open",
    PortReason.MAYBE_AND_OPEN: "maybe Open, found Open",
    PortReason.MAYBE_AND_CLOSED: "maybe Open, found Closed",
    PortReason.UNKNOWN: "unknown",
}


class OutputFormat(str, Enum):
    HUMAN = "human"
    JSON = "json"
    NONE = "none"


class OutputDetail(str, Enum):
    FAIL = "fail"
    ALL = "all"


def port_reason_label(verdict: PortVerdict) -> str:
    if verdict.reason is None:
        return ""
    return REASON_LABELS.get(verdict.reason, "")


def build_rows(result: AnalysisResult, detail: OutputDetail = OutputDetail.FAIL) -> List[Sequence[str]]:
    """Flatten evaluations into table rows: one host row followed by its port rows."""

    only_failures = detail is OutputDetail.FAIL
    rows: List[Sequence[str]] = []
    for evaluation in result.evaluations:
        if only_failures and evaluation.verdict is Verdict.PASS:
            continue
        rows.append(_host_row(evaluation))
        for verdict in evaluation.port_verdicts:
            if only_failures and verdict.is_pass:
                continue
            rows.append(
                (
                    "",
                    "",
                    "",
                    str(verdict.port),
                    PORT_RESULT_LABELS[verdict.kind],
                    port_reason_label(verdict),
                )
            )
    return rows


def _host_row(evaluation: Evaluation) -> Sequence[str]:
    return (
        str(evaluation.ip),
        evaluation.policy_name or "",
        evaluation.verdict.value,
        "",
        "",
        evaluation.error_reason or "",
    )


def format_table(rows: Sequence[Sequence[str]], headers: Sequence[str] = TABLE_HEADERS) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    border = "+" + "+".join("-" * (width + 2) for width in widths) + "+"

    def _line(cells: Sequence[str]) -> str:
        return "|" + "|".join(f" {cell:<{width}} " for cell, width in zip(cells, widths)) + "|"

    lines = [border, _line(headers), border]
    lines.extend(_line(row) for row in rows)
    lines.append(border)
    return "\n".join(lines)


def to_human(result: AnalysisResult, detail: OutputDetail = OutputDetail.FAIL) -> str:
    return format_table(build_rows(result, detail))


def to_json(result: AnalysisResult) -> str:
    """Serialize every evaluation and port; output detail only applies to the table."""

    return json.dumps(result.to_dict(), indent=2)


def render(result: AnalysisResult, output_format: OutputFormat, detail: OutputDetail) -> str:
    if output_format is OutputFormat.HUMAN:
        return to_human(result, detail)
    if output_format is OutputFormat.JSON:
        return to_json(result)
    return ""
