from ipaddress import ip_address

from portaudit.analysis import AnalysisContext, build_host_index, build_policy_index, run_analysis
from portaudit.models import Address, MappingEntry, Policy, PolicyRule, ScanHost, ScanPort, ScanRun
from portaudit.states import PortStatus, Requirement, Verdict

GROUP_A = Policy(name="Group A", rules=(PolicyRule(22, Requirement.CLOSED),))
GROUP_B = Policy(name="Group B", rules=(PolicyRule(22, Requirement.OPEN),))


def test_policy_index_last_mapping_entry_wins():
    mappings = [
        MappingEntry(ips=(ip_address("10.0.0.1"),), policy_name="Group A"),
        MappingEntry(ips=(ip_address("10.0.0.1"), ip_address("10.0.0.2")), policy_name="Group B"),
    ]

    index = build_policy_index(mappings, [GROUP_A, GROUP_B])

    assert index[ip_address("10.0.0.1")] is GROUP_B
    assert index[ip_address("10.0.0.2")] is GROUP_B


def test_policy_index_drops_unknown_policy_names():
    mappings = [
        MappingEntry(ips=(ip_address("10.0.0.1"),), policy_name="Group A"),
        MappingEntry(ips=(ip_address("10.0.0.3"),), policy_name="Does not exist"),
    ]

    index = build_policy_index(mappings, [GROUP_A])

    assert list(index) == [ip_address("10.0.0.1")]


def test_policy_index_last_policy_definition_wins():
    redefined = Policy(name="Group A", rules=())
    mappings = [MappingEntry(ips=(ip_address("10.0.0.1"),), policy_name="Group A")]

    index = build_policy_index(mappings, [GROUP_A, redefined])

    assert index[ip_address("10.0.0.1")] is redefined


def test_policy_index_accepts_ipv6_mappings():
    mappings = [
        MappingEntry(ips=(ip_address("fe80::1"), ip_address("10.0.0.1")), policy_name="Group A"),
    ]

    index = build_policy_index(mappings, [GROUP_A])

    assert list(index) == [ip_address("10.0.0.1"), ip_address("fe80::1")]


def test_host_index_uses_every_ipv4_address():
    multi_homed = ScanHost(
        addresses=(
            Address("10.0.0.2", "ipv4"),
            Address("00:11:DD:5D:2E:DD", "mac"),
            Address("10.0.1.2", "ipv4"),
        ),
    )
    mac_only = ScanHost(addresses=(Address("00:11:DD:5D:2E:DE", "mac"),))

    index = build_host_index([multi_homed, mac_only])

    assert list(index) == [ip_address("10.0.0.2"), ip_address("10.0.1.2")]
    assert index[ip_address("10.0.1.2")] is multi_homed


def test_run_analysis_counts_one_evaluation_per_scanned_address():
    open_ssh = (ScanPort(id=22, status=PortStatus.OPEN),)
    run = ScanRun(
        scanner="nmap",
        args="nmap -dd",
        start=0,
        hosts=(
            ScanHost(addresses=(Address("10.0.0.1", "ipv4"), Address("10.0.1.1", "ipv4")), ports=open_ssh),
            ScanHost(addresses=(Address("10.0.0.2", "ipv4"),), ports=open_ssh),
            ScanHost(addresses=(Address("10.0.0.3", "ipv4"),), ports=open_ssh),
        ),
    )
    mappings = (
        MappingEntry(ips=(ip_address("10.0.0.1"), ip_address("10.0.1.1")), policy_name="Group B"),
        MappingEntry(ips=(ip_address("10.0.0.2"),), policy_name="Group A"),
    )

    result = run_analysis(AnalysisContext(run=run, mappings=mappings, policies=(GROUP_A, GROUP_B)))

    assert result.summary.to_dict() == {"pass": 2, "fail": 1, "error": 1}
    assert result.summary.total == len(result.evaluations) == 4
    assert [evaluation.verdict for evaluation in result.evaluations] == [
        Verdict.PASS,
        Verdict.FAIL,
        Verdict.ERROR,
        Verdict.PASS,
    ]
    assert result.exit_code() == 10
