"""Exceptions raised while loading analyzer inputs."""

from __future__ import annotations


class PortAuditError(Exception):
    """Base class for errors reported at the command line boundary."""


class InvalidFileError(PortAuditError):
    """An input file is missing, unreadable or does not match its expected format."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class InsaneScanError(PortAuditError):
    """The scan result cannot be analyzed faithfully (e.g. not run with ``-dd``)."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"invalid nmap file because {reason}")
        self.reason = reason
