"""Batch import of JaCoCo reports into a coverage sink.

Pipeline per report:

    parse → decide package scheme (first record only) → resolve each record
          → apply coverage of matched files

Failure units:
- one report: anything raised while parsing or processing it is logged with
  the report location and recorded in its ReportOutcome;
- one file: coverage rejected by the sink is logged with the file and the
  report carries on with the next record.

Records that resolve to no project file are skipped silently; reports
routinely cover generated, third-party or excluded sources.
"""

from __future__ import annotations

import contextvars
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Protocol

import structlog

from covimport.coverage.applier import CoverageApplier
from covimport.coverage.models import (
    ImportSummary,
    PackageScheme,
    Report,
    ReportOutcome,
    ResolvedMatch,
    SourceFileRecord,
)
from covimport.coverage.parser import parse_report
from covimport.coverage.resolver import PathResolver

log = structlog.get_logger(__name__)


class ReportLocations(Protocol):
    def get_report_locations(self) -> Sequence[Path]: ...


def decide_scheme(source_files: Sequence[SourceFileRecord], resolver: PathResolver) -> PackageScheme:
    """Decide from the first record whether package paths repeat the root package.

    Kotlin sources may be reported as ``<root>/<root>/...``. If the first
    record does not resolve literally but does once the first ``root/`` is
    removed, the whole report is read with stripped paths. The probe only
    picks the scheme; it is not the resolution of that record.
    """
    if not source_files:
        return PackageScheme.LITERAL

    first = source_files[0]
    if resolver.resolve(first.package_name, first.file_name) is not None:
        return PackageScheme.LITERAL
    if resolver.resolve(first.stripped_package_name(), first.file_name) is not None:
        return PackageScheme.STRIPPED
    return PackageScheme.LITERAL


class CoverageImporter:
    """Imports every report a locator yields.

    Args:
        locator: Source of report locations.
        resolver: Project file index lookups.
        applier: Writes matched coverage into the sink.
        parse: Report parser, JaCoCo XML by default.
        max_workers: Reports processed in parallel (1 = sequential).
    """

    def __init__(
        self,
        locator: ReportLocations,
        resolver: PathResolver,
        applier: CoverageApplier,
        *,
        parse: Callable[[Path], Report] = parse_report,
        max_workers: int = 1,
    ) -> None:
        self.locator = locator
        self.resolver = resolver
        self.applier = applier
        self.parse = parse
        self.max_workers = max_workers

    def import_reports(self) -> ImportSummary:
        locations = list(self.locator.get_report_locations())
        if not locations:
            log.info("coverage.no_reports", message="No report imported, no coverage information will be imported")
            return ImportSummary()

        log.info("coverage.importing", reports=len(locations))

        if self.max_workers > 1 and len(locations) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(locations))) as executor:
                # Each report runs in a copy of the caller's context so worker
                # events keep the run id.
                futures = [
                    executor.submit(contextvars.copy_context().run, self.import_report, location)
                    for location in locations
                ]
                outcomes = [future.result() for future in futures]
        else:
            outcomes = [self.import_report(location) for location in locations]

        summary = ImportSummary(outcomes=outcomes)
        log.info(
            "coverage.import_complete",
            reports_imported=summary.reports_imported,
            reports_failed=summary.reports_failed,
            files_imported=summary.files_imported,
            files_failed=summary.files_failed,
        )
        return summary

    def import_report(self, location: Path) -> ReportOutcome:
        """Import one report. Never raises: failures end up in the outcome."""
        outcome = ReportOutcome(location=location)
        log.debug("coverage.reading_report", report=str(location))
        try:
            report = self.parse(location)
            outcome.scheme = decide_scheme(report.source_files, self.resolver)
            self._import_records(report.source_files, outcome)
        except Exception as e:
            log.error("coverage.report_unreadable", report=str(location), error=str(e))
            outcome.error = str(e)
            return outcome

        outcome.imported = True
        log.debug(
            "coverage.report_imported",
            report=str(location),
            stripped_root_prefix=outcome.scheme.stripped_root_prefix,
            files_imported=len(outcome.files_imported),
            files_skipped=outcome.files_skipped,
        )
        return outcome

    def match(self, record: SourceFileRecord, scheme: PackageScheme) -> ResolvedMatch | None:
        file = self.resolver.resolve(scheme.package_path(record), record.file_name)
        if file is None:
            return None
        return ResolvedMatch(record=record, file=file)

    def _import_records(self, records: Sequence[SourceFileRecord], outcome: ReportOutcome) -> None:
        for record in records:
            matched = self.match(record, outcome.scheme)
            if matched is None:
                outcome.files_skipped += 1
                continue

            failure = self.applier.apply(matched.file, matched.record)
            if failure is not None:
                log.error(
                    "coverage.file_invalid",
                    message="Cannot import coverage information for file, coverage data is invalid",
                    file=failure.file.path,
                    report=str(outcome.location),
                    error=failure.reason,
                )
                outcome.failures.append(failure)
                continue
            outcome.files_imported.append(matched.file.path)
