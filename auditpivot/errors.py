"""Exception types raised across the pivot pipeline."""

from __future__ import annotations


class AuditPivotError(Exception):
    """Base class for audit-pivot failures."""


class LineRejected(AuditPivotError, ValueError):
    """Raised by an extractor when a line does not match its grammar."""

    def __init__(self, reason: str, line: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line


class InputReadError(AuditPivotError):
    """Reading the input stream failed; the run produces no report."""


class ConfigError(AuditPivotError):
    pass


class AggregatorFrozenError(AuditPivotError, RuntimeError):
    pass
