import json
from ipaddress import ip_address

from portaudit.output import OutputDetail, OutputFormat, render, to_human, to_json
from portaudit.result import NO_POLICY_REASON, Evaluation, PortVerdict, aggregate
from portaudit.states import PortReason, Verdict


def sample_result():
    return aggregate(
        [
            Evaluation(
                ip=ip_address("192.168.0.1"),
                verdict=Verdict.PASS,
                policy_name="Group A",
                port_verdicts=(PortVerdict.passed(25, PortReason.OPEN_AND_OPEN),),
            ),
            Evaluation(
                ip=ip_address("192.168.0.3"),
                verdict=Verdict.FAIL,
                policy_name="Group A",
                port_verdicts=(
                    PortVerdict.failed(22, PortReason.CLOSED_BUT_OPEN),
                    PortVerdict.passed(80, PortReason.CLOSED_AND_CLOSED),
                    PortVerdict.not_scanned(25),
                ),
            ),
            Evaluation(ip=ip_address("192.168.0.9"), verdict=Verdict.ERROR, error_reason=NO_POLICY_REASON),
        ]
    )


def test_human_output_shows_only_failures_by_default():
    expected = "\n".join(
        [
            "+-------------+----------+--------+------+-------------+-------------------------------------+",
            "| Host        | Portspec | Result | Port | Port Result | Failure Reason                      |",
            "+-------------+----------+--------+------+-------------+-------------------------------------+",
            "| 192.168.0.3 | Group A  | Fail   |      |             |                                     |",
            "|             |          |        | 22   | failed      | expected Closed, found Open         |",
            "|             |          |        | 25   | not scanned |                                     |",
            "| 192.168.0.9 |          | Error  |      |             | no policy found for this IP address |",
            "+-------------+----------+--------+------+-------------+-------------------------------------+",
        ]
    )

    assert to_human(sample_result()) == expected


def test_human_output_all_detail_includes_passing_rows():
    table = to_human(sample_result(), OutputDetail.ALL)

    assert "| 192.168.0.1 | Group A  | Pass" in table
    assert "| 80   | passed" in table
    assert len(table.splitlines()) == 11


def test_json_output_contains_summary_and_reasons():
    data = json.loads(to_json(sample_result()))

    assert data["summary"] == {"pass": 1, "fail": 1, "error": 1}
    assert data["passed"] is False
    assert [item["ip"] for item in data["evaluations"]] == ["192.168.0.1", "192.168.0.3", "192.168.0.9"]
    failing = data["evaluations"][1]
    assert failing["portspec"] == "Group A"
    assert failing["ports"][0] == {"port": 22, "result": "Fail", "reason": "ClosedButOpen"}
    assert failing["ports"][2] == {"port": 25, "result": "NotScanned", "reason": None}
    assert data["evaluations"][2]["reason"] == NO_POLICY_REASON


def test_render_none_is_empty():
    assert render(sample_result(), OutputFormat.NONE, OutputDetail.ALL) == ""


def test_json_render_ignores_output_detail():
    data = json.loads(render(sample_result(), OutputFormat.JSON, OutputDetail.FAIL))

    assert [item["ip"] for item in data["evaluations"]] == ["192.168.0.1", "192.168.0.3", "192.168.0.9"]
    assert [port["port"] for port in data["evaluations"][1]["ports"]] == [22, 80, 25]
