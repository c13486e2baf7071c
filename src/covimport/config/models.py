"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVIMPORT__SECTION__KEY)
3. Project YAML (.covimport.yaml in the project root, or an explicit path)
4. Built-in defaults (this file)

Environment Variable Format:
    COVIMPORT__<SECTION>__<KEY>=<VALUE>

Examples:
    COVIMPORT__LOGGING__LEVEL=DEBUG
    COVIMPORT__IMPORTER__MAX_WORKERS=4
    COVIMPORT__REPORTS__PATHS='["build/**/jacoco*.xml"]'
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVIMPORT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG lists every report read and every skipped file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReportsConfig(BaseModel):
    """Report discovery configuration.

    Env vars:
        COVIMPORT__REPORTS__PATHS: JSON list of report paths or glob patterns
    """

    paths: list[str] = Field(
        default_factory=list,
        description="JaCoCo XML report paths, relative to the project root or absolute. "
        "Glob patterns (*, **, ?) are expanded. Empty means the Maven/Gradle defaults.",
    )


class ProjectConfig(BaseModel):
    """Project file index configuration.

    Env vars:
        COVIMPORT__PROJECT__SOURCE_DIRS: JSON list of source roots
        COVIMPORT__PROJECT__EXCLUDE: JSON list of exclude globs
    """

    source_dirs: list[str] = Field(
        default_factory=list,
        description="Source roots that report package paths are relative to. "
        "Empty means the existing Maven/Gradle source roots, else the project root.",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="fnmatch patterns (project-relative) of files never matched.",
    )


class ImporterConfig(BaseModel):
    """Batch import configuration.

    Env vars:
        COVIMPORT__IMPORTER__MAX_WORKERS: Reports processed in parallel
    """

    max_workers: int = Field(
        default=1,
        description="Reports processed in parallel. Records of one report are "
        "always processed in document order.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class CovImportConfig(BaseModel):
    """Root configuration for covimport."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reports: ReportsConfig = Field(default_factory=ReportsConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    importer: ImporterConfig = Field(default_factory=ImporterConfig)
