"""Diagnostic log and check result.

A run appends severity-tagged messages to a fresh ``DiagnosticLog``; the
result status is derived from the worst severity recorded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class Severity(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    CRITICAL = 3


class Status(str, Enum):
    OK = "OK"
    WARN = "WARN"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class LogEntry:
    severity: Severity
    message: str


@dataclass
class DiagnosticLog:
    """Append-only list of log entries."""

    entries: list[LogEntry] = field(default_factory=list)

    def add(self, severity: Severity, message: str) -> None:
        self.entries.append(LogEntry(severity, message))

    def debug(self, message: str) -> None:
        self.add(Severity.DEBUG, message)

    def info(self, message: str) -> None:
        self.add(Severity.INFO, message)

    def warn(self, message: str) -> None:
        self.add(Severity.WARN, message)

    def critical(self, message: str) -> None:
        self.add(Severity.CRITICAL, message)

    @property
    def aggregate_severity(self) -> Severity:
        """Worst severity recorded; INFO for an empty or debug-only log."""
        return max([Severity.INFO, *(e.severity for e in self.entries)])


@dataclass(frozen=True)
class HealthCheckResult:
    """Verdict of one check run plus its ordered diagnostic lines."""

    status: Status
    entries: tuple[LogEntry, ...] = ()

    @classmethod
    def from_log(cls, log: DiagnosticLog) -> HealthCheckResult:
        severity = log.aggregate_severity
        if severity >= Severity.CRITICAL:
            status = Status.CRITICAL
        elif severity >= Severity.WARN:
            status = Status.WARN
        else:
            status = Status.OK
        return cls(status=status, entries=tuple(log.entries))

    @property
    def ok(self) -> bool:
        return self.status == Status.OK

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.entries]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "status": self.status.value,
            "messages": [
                {"severity": e.severity.name, "message": e.message} for e in self.entries
            ],
        }

    def __str__(self) -> str:
        lines = ", ".join(f"{e.severity.name} {e.message}" for e in self.entries)
        return f"Result [status={self.status.value}, resultLog=[{lines}]]"
