"""covimport error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report (locating, reading, parsing)
- 4xxx: Coverage data (rejected by the sink)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Report (3xxx)
    REPORT_NOT_FOUND = 3001
    REPORT_IO_ERROR = 3002
    REPORT_MALFORMED = 3003
    REPORT_INVALID_CONTENT = 3004

    # Coverage data (4xxx)
    COVERAGE_LINE_OUT_OF_RANGE = 4001
    COVERAGE_DUPLICATE_LINE = 4002
    COVERAGE_CONFLICTING_CONDITIONS = 4003
    COVERAGE_INVALID_STATE = 4004


@dataclass(frozen=True, slots=True)
class CovImportError(Exception):
    """Base error with structured context for logs and JSON output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_MALFORMED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovImportError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ReportUnreadableError(CovImportError):
    """A coverage report could not be read or parsed.

    Always scoped to a single report: the importer recovers from it at the
    report boundary.
    """

    @classmethod
    def not_found(cls, path: str) -> "ReportUnreadableError":
        return cls(
            code=ErrorCode.REPORT_NOT_FOUND,
            message=f"Coverage report not found: {path}",
            details={"path": path},
        )

    @classmethod
    def io_error(cls, path: str, reason: str) -> "ReportUnreadableError":
        return cls(
            code=ErrorCode.REPORT_IO_ERROR,
            message=f"Cannot read coverage report {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def malformed(cls, path: str, reason: str) -> "ReportUnreadableError":
        return cls(
            code=ErrorCode.REPORT_MALFORMED,
            message=f"Invalid XML in coverage report {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_content(cls, path: str, reason: str) -> "ReportUnreadableError":
        return cls(
            code=ErrorCode.REPORT_INVALID_CONTENT,
            message=f"Invalid coverage report {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InvalidCoverageDataError(CovImportError):
    """Coverage facts rejected by the sink for one file."""

    @classmethod
    def line_out_of_range(cls, path: str, line: int, line_count: int) -> "InvalidCoverageDataError":
        return cls(
            code=ErrorCode.COVERAGE_LINE_OUT_OF_RANGE,
            message=f"Line {line} is out of range for {path} ({line_count} lines)",
            details={"path": path, "line": line, "line_count": line_count},
        )

    @classmethod
    def duplicate_line(cls, path: str, line: int) -> "InvalidCoverageDataError":
        return cls(
            code=ErrorCode.COVERAGE_DUPLICATE_LINE,
            message=f"Line {line} of {path} was recorded twice",
            details={"path": path, "line": line},
        )

    @classmethod
    def conflicting_conditions(
        cls, path: str, line: int, existing: int, new: int
    ) -> "InvalidCoverageDataError":
        return cls(
            code=ErrorCode.COVERAGE_CONFLICTING_CONDITIONS,
            message=(
                f"Conditions already recorded for line {line} of {path}: "
                f"{existing} branches, got {new}"
            ),
            details={"path": path, "line": line, "existing": existing, "new": new},
        )

    @classmethod
    def state_error(cls, reason: str) -> "InvalidCoverageDataError":
        return cls(
            code=ErrorCode.COVERAGE_INVALID_STATE,
            message=f"Invalid coverage sink state: {reason}",
            details={"reason": reason},
        )

