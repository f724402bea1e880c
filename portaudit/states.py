"""State and verdict enumerations shared across the analyzer."""

from __future__ import annotations

from enum import Enum


class PortStatus(str, Enum):
    """Port states reported by nmap (cf. nmap.dtd)."""

    OPEN = "open"
    CLOSED = "closed"
    FILTERED = "filtered"
    UNFILTERED = "unfiltered"
    OPEN_FILTERED = "open|filtered"
    CLOSED_FILTERED = "closed|filtered"

    @classmethod
    def parse(cls, value: str) -> "PortStatus":
        normalized = value.strip().lower()
        if normalized == "close|filtered":
            return cls.CLOSED_FILTERED
        return cls(normalized)

    @property
    def is_open(self) -> bool:
        """Only a plain ``open`` state counts as reachable."""

        return self is PortStatus.OPEN


class HostState(str, Enum):
    """Host states reported by nmap (cf. nmap.dtd)."""

    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"
    SKIPPED = "skipped"

    @classmethod
    def parse(cls, value: str) -> "HostState":
        return cls(value.strip().lower())


class Requirement(str, Enum):
    """Expected state of a port as declared by a portspec rule."""

    OPEN = "open"
    CLOSED = "closed"
    MAYBE = "maybe"

    @classmethod
    def parse(cls, value: str) -> "Requirement":
        return cls(value.strip().lower())


class PortReason(str, Enum):
    """Reason codes attached to passing and failing port verdicts."""

    OPEN_AND_OPEN = "OpenAndOpen"
    OPEN_BUT_CLOSED = "OpenButClosed"
    CLOSED_AND_CLOSED = "ClosedAndClosed"
    CLOSED_BUT_OPEN = "ClosedButOpen"
    MAYBE_AND_OPEN = "MaybeAndOpen"
    MAYBE_AND_CLOSED = "MaybeAndClosed"
    UNKNOWN = "Unknown"


class PortVerdictKind(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"
    NOT_SCANNED = "NotScanned"
    UNKNOWN = "Unknown"


class Verdict(str, Enum):
    """Host level verdict."""

    PASS = "Pass"
    FAIL = "Fail"
    ERROR = "Error"

