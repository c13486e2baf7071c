"""Core module exports."""

from covimport.core.errors import (
    ConfigError,
    CovImportError,
    ErrorCode,
    InvalidCoverageDataError,
    ReportUnreadableError,
)
from covimport.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "CovImportError",
    "ErrorCode",
    "InvalidCoverageDataError",
    "ReportUnreadableError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
