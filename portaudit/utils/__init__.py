"""Input decoding helpers for the analyzer."""

from .fileio import read_json_file, read_text_file, read_yaml_file
from .mapping import load_mapping, parse_mapping
from .nmap import check_sanity, load_scan, parse_scan
from .portspec import load_portspecs, parse_portspecs

__all__ = [
    "read_json_file",
    "read_text_file",
    "read_yaml_file",
    "load_mapping",
    "parse_mapping",
    "check_sanity",
    "load_scan",
    "parse_scan",
    "load_portspecs",
    "parse_portspecs",
]
