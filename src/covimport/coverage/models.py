"""Coverage import data model.

Records come out of a parsed report, get resolved against the project file
index, and are applied to the sink. Outcomes are plain values: failures of
one report or one file are recorded here instead of propagating.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class LineCoverage:
    """Instruction and branch counters of one source line."""

    line: int
    covered_instructions: int = 0
    missed_instructions: int = 0
    covered_branches: int = 0
    missed_branches: int = 0

    @property
    def is_covered(self) -> bool:
        """A line counts as hit if any of its instructions ran."""
        return self.covered_instructions > 0

    @property
    def branches(self) -> int:
        return self.covered_branches + self.missed_branches

    @property
    def has_branches(self) -> bool:
        return self.branches > 0


@dataclass(frozen=True, slots=True)
class SourceFileRecord:
    """One <sourcefile> entry of a report.

    package_name is slash-delimited and relative ("com/example/app");
    lines maps 1-based line numbers, in increasing order, to their counters.
    """

    package_name: str
    file_name: str
    lines: dict[int, LineCoverage] = field(default_factory=dict)

    @property
    def root_package_name(self) -> str:
        """First segment of the package path, or "" for a single-segment package."""
        root, sep, _ = self.package_name.partition("/")
        return root if sep else ""

    @property
    def path(self) -> str:
        return f"{self.package_name}/{self.file_name}" if self.package_name else self.file_name

    def stripped_package_name(self) -> str:
        """Package path with the first ``root + "/"`` removed.

        Kotlin can prefix the package path with the project's root package a
        second time; only that first occurrence is dropped.
        """
        root = self.root_package_name
        if not root:
            return self.package_name
        return self.package_name.replace(root + "/", "", 1)


@dataclass(frozen=True, slots=True)
class Report:
    """Parsed report: source file records in document order."""

    location: Path
    source_files: tuple[SourceFileRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.source_files)


@dataclass(frozen=True, slots=True)
class PackageScheme:
    """How the package paths of one report map to project directories.

    Decided once per report and threaded through its processing.
    """

    stripped_root_prefix: bool = False

    LITERAL: ClassVar[PackageScheme]
    STRIPPED: ClassVar[PackageScheme]

    def package_path(self, record: SourceFileRecord) -> str:
        """Effective package path of a record under this scheme."""
        if self.stripped_root_prefix:
            return record.stripped_package_name()
        return record.package_name


PackageScheme.LITERAL = PackageScheme(stripped_root_prefix=False)
PackageScheme.STRIPPED = PackageScheme(stripped_root_prefix=True)


@dataclass(frozen=True, slots=True)
class ProjectFile:
    """Handle of a project source file, owned by the project file index."""

    path: str  # relative to its source root, forward slashes
    abs_path: Path
    line_count: int

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class ResolvedMatch:
    """A record paired with the project file it resolved to."""

    record: SourceFileRecord
    file: ProjectFile


@dataclass(frozen=True, slots=True)
class FileFailure:
    """Coverage of one matched file rejected by the sink."""

    file: ProjectFile
    reason: str


@dataclass(slots=True)
class ReportOutcome:
    """Result of importing one report."""

    location: Path
    imported: bool = False
    scheme: PackageScheme = PackageScheme.LITERAL
    files_imported: list[str] = field(default_factory=list)
    files_skipped: int = 0
    failures: list[FileFailure] = field(default_factory=list)
    error: str | None = None  # set when the report itself could not be read/imported

    def to_dict(self) -> dict[str, object]:
        return {
            "report": str(self.location),
            "imported": self.imported,
            "stripped_root_prefix": self.scheme.stripped_root_prefix,
            "files_imported": len(self.files_imported),
            "files_skipped": self.files_skipped,
            "failures": [{"file": f.file.path, "reason": f.reason} for f in self.failures],
            "error": self.error,
        }


@dataclass(slots=True)
class ImportSummary:
    """Aggregate result of one import batch, outcomes in discovery order."""

    outcomes: list[ReportOutcome] = field(default_factory=list)

    @property
    def reports_found(self) -> int:
        return len(self.outcomes)

    @property
    def reports_imported(self) -> int:
        return sum(1 for o in self.outcomes if o.imported)

    @property
    def reports_failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.imported)

    @property
    def files_imported(self) -> int:
        return sum(len(o.files_imported) for o in self.outcomes)

    @property
    def files_failed(self) -> int:
        return sum(len(o.failures) for o in self.outcomes)

    def to_dict(self) -> dict[str, object]:
        return {
            "reports_found": self.reports_found,
            "reports_imported": self.reports_imported,
            "reports_failed": self.reports_failed,
            "files_imported": self.files_imported,
            "files_failed": self.files_failed,
            "reports": [o.to_dict() for o in self.outcomes],
        }
