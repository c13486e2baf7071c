"""Config module exports."""

from covimport.config.loader import load_config
from covimport.config.models import (
    CovImportConfig,
    ImporterConfig,
    LoggingConfig,
    ProjectConfig,
    ReportsConfig,
)

__all__ = [
    "load_config",
    "CovImportConfig",
    "ImporterConfig",
    "LoggingConfig",
    "ProjectConfig",
    "ReportsConfig",
]
