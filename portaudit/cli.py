"""Command-line entry point for the portaudit analyzer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from . import __version__
from .analysis import AnalysisContext, run_analysis
from .config import RuntimeConfig, load_config
from .errors import PortAuditError
from .logger import setup_logging
from .output import OutputDetail, OutputFormat, render
from .result import AnalysisResult, format_summary_line
from .utils import check_sanity, load_mapping, load_portspecs, load_scan

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portaudit",
        description="Analyze nmap XML output and compare port states with portspecs",
    )
    parser.add_argument("--nmap", "-n", required=True, type=Path, help="Nmap XML file (run with -dd).")
    parser.add_argument("--mapping", "-m", required=True, type=Path, help="JSON file mapping IPs to portspecs.")
    parser.add_argument("--portspec", "-p", required=True, type=Path, help="YAML file of portspecs.")
    parser.add_argument(
        "--output",
        "-o",
        choices=[item.value for item in OutputFormat],
        default=None,
        help="Report format (defaults to human).",
    )
    parser.add_argument(
        "--output-detail",
        dest="output_detail",
        choices=[item.value for item in OutputDetail],
        default=None,
        help="Show only failing hosts and ports, or everything (defaults to fail).",
    )
    parser.add_argument(
        "--out",
        dest="output_path",
        type=str,
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    parser.add_argument(
        "--skip-sanity-check",
        action="store_true",
        default=None,
        help="Analyze scans that were not run with nmap -dd.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        dest="verbosity",
        action="count",
        default=0,
        help="Increase log verbosity (-v, -vv).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_portaudit(nmap_path: Path, mapping_path: Path, portspec_path: Path, skip_sanity_check: bool = False) -> AnalysisResult:
    logger.info("Loading port specification file")
    policies = load_portspecs(portspec_path)
    logger.info("Loading mappings file")
    mappings = load_mapping(mapping_path)
    logger.info("Loading nmap file")
    run = load_scan(nmap_path)
    if skip_sanity_check:
        logger.warning("Skipping sanity check of %s", nmap_path)
    else:
        check_sanity(run)

    result = run_analysis(AnalysisContext(run=run, mappings=mappings, policies=policies))
    logger.info("Analysis finished.")
    return result


def write_output(result: AnalysisResult, config: RuntimeConfig, output_path: str | None) -> None:
    print(format_summary_line(result))

    report = render(result, config.output_format, config.output_detail)
    if not report:
        return
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(report + "\n", encoding="utf-8")
        print(f"Report written to {output_path}")
    else:
        print(report)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(
            cli_output=args.output,
            cli_output_detail=args.output_detail,
            cli_verbosity=args.verbosity,
            cli_skip_sanity_check=args.skip_sanity_check,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    package_logger = setup_logging(config.verbosity)
    level_name = logging.getLevelName(package_logger.level)
    print(f"portaudit version={__version__}, log level={level_name}", file=sys.stderr)
    logger.debug("config = %r", config)

    try:
        result = run_portaudit(args.nmap, args.mapping, args.portspec, config.skip_sanity_check)
        write_output(result, config, args.output_path)
    except (PortAuditError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    return result.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
