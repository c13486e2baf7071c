"""JaCoCo coverage report import.

This package provides:
- Report discovery from configured paths and globs
- JaCoCo XML parsing into per-source-file records
- Resolution of report package paths to project files, including Kotlin's
  duplicated root package
- Failure-isolated import into a coverage sink

Usage:
    from covimport.coverage import (
        CoverageApplier, CoverageImporter, CoverageStore, PathResolver, ReportLocator,
    )

    store = CoverageStore()
    importer = CoverageImporter(
        ReportLocator(project_root, ["build/**/jacoco*.xml"]),
        PathResolver(list_project_files(project_root)),
        CoverageApplier(store),
    )
    summary = importer.import_reports()
"""

from covimport.coverage.applier import CoverageApplier
from covimport.coverage.importer import CoverageImporter, decide_scheme
from covimport.coverage.locator import ReportLocator
from covimport.coverage.models import (
    FileFailure,
    ImportSummary,
    LineCoverage,
    PackageScheme,
    ProjectFile,
    Report,
    ReportOutcome,
    ResolvedMatch,
    SourceFileRecord,
)
from covimport.coverage.parser import parse_report
from covimport.coverage.resolver import PathResolver
from covimport.coverage.sink import CoverageSink, CoverageStore, CoverageStoreSummary

__all__ = [
    # Models
    "FileFailure",
    "ImportSummary",
    "LineCoverage",
    "PackageScheme",
    "ProjectFile",
    "Report",
    "ReportOutcome",
    "ResolvedMatch",
    "SourceFileRecord",
    # Pipeline
    "CoverageApplier",
    "CoverageImporter",
    "PathResolver",
    "ReportLocator",
    "decide_scheme",
    "parse_report",
    # Sink
    "CoverageSink",
    "CoverageStore",
    "CoverageStoreSummary",
]
