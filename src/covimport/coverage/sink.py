"""Coverage sink protocol and the in-memory coverage store.

The importer writes one file at a time: begin_coverage(), record_line() for
every line, then commit(). A sink rejects structurally invalid data with
InvalidCoverageDataError; discard() drops whatever is pending for the file.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Protocol

from covimport.core.errors import InvalidCoverageDataError
from covimport.coverage.models import ProjectFile


class CoverageSink(Protocol):
    """Destination of per-line coverage facts."""

    def begin_coverage(self, file: ProjectFile) -> None: ...

    def record_line(
        self,
        line_number: int,
        instructions_covered: int,
        instructions_missed: int,
        branches_covered: int,
        branches_missed: int,
    ) -> None: ...

    def commit(self) -> None: ...

    def discard(self) -> None: ...


@dataclass(frozen=True, slots=True)
class Conditions:
    """Branch conditions of one line."""

    total: int
    covered: int


@dataclass(slots=True)
class StoredCoverage:
    """Committed coverage of one project file.

    Lines map line number → hit flag (1 if any instruction covered).
    """

    file: ProjectFile
    lines: dict[int, int] = field(default_factory=dict)
    conditions: dict[int, Conditions] = field(default_factory=dict)

    @property
    def lines_found(self) -> int:
        return len(self.lines)

    @property
    def lines_hit(self) -> int:
        return sum(1 for hits in self.lines.values() if hits > 0)

    @property
    def branches_found(self) -> int:
        return sum(c.total for c in self.conditions.values())

    @property
    def branches_hit(self) -> int:
        return sum(c.covered for c in self.conditions.values())

    @property
    def uncovered_lines(self) -> list[int]:
        return sorted(line for line, hits in self.lines.items() if hits == 0)


@dataclass(frozen=True, slots=True)
class CoverageStoreSummary:
    """Aggregate statistics over every file in a store."""

    files: int
    lines_found: int
    lines_hit: int
    branches_found: int
    branches_hit: int

    @property
    def line_rate(self) -> float:
        return self.lines_hit / self.lines_found if self.lines_found else 0.0

    @property
    def branch_rate(self) -> float:
        return self.branches_hit / self.branches_found if self.branches_found else 0.0


class CoverageStore:
    """In-memory analysis context holding imported coverage.

    Pending data is per thread, so reports can be imported in parallel into
    one store. A file imported by several reports is merged with max-hit
    semantics: a line is hit if any report hit it, and covered conditions
    are the maximum seen.
    """

    def __init__(self) -> None:
        self._files: dict[str, StoredCoverage] = {}
        self._lock = threading.Lock()
        self._local = threading.local()

    # -- sink protocol -----------------------------------------------------

    def begin_coverage(self, file: ProjectFile) -> None:
        if self._pending is not None:
            raise InvalidCoverageDataError.state_error(
                f"coverage of {self._pending.file.path} not committed before {file.path}"
            )
        self._local.pending = StoredCoverage(file=file)
        self._local.seen = set()

    def record_line(
        self,
        line_number: int,
        instructions_covered: int,
        instructions_missed: int,
        branches_covered: int,
        branches_missed: int,
    ) -> None:
        pending = self._pending
        if pending is None:
            raise InvalidCoverageDataError.state_error("record_line() called before begin_coverage()")

        file = pending.file
        if line_number < 1 or line_number > file.line_count:
            raise InvalidCoverageDataError.line_out_of_range(file.path, line_number, file.line_count)
        seen: set[int] = self._local.seen
        if line_number in seen:
            raise InvalidCoverageDataError.duplicate_line(file.path, line_number)
        seen.add(line_number)

        # Lines without instructions carry no coverage (JaCoCo emits them for
        # declarations spanning several lines).
        if instructions_covered + instructions_missed > 0:
            pending.lines[line_number] = 1 if instructions_covered > 0 else 0
        total = branches_covered + branches_missed
        if total > 0:
            pending.conditions[line_number] = Conditions(total=total, covered=branches_covered)

    def commit(self) -> None:
        pending = self._pending
        if pending is None:
            raise InvalidCoverageDataError.state_error("commit() called before begin_coverage()")
        self._local.pending = None

        path = pending.file.path
        with self._lock:
            existing = self._files.get(path)
            if existing is None:
                self._files[path] = pending
                return
            for line, cond in pending.conditions.items():
                previous = existing.conditions.get(line)
                if previous is not None and previous.total != cond.total:
                    raise InvalidCoverageDataError.conflicting_conditions(
                        path, line, previous.total, cond.total
                    )
            for line, hits in pending.lines.items():
                existing.lines[line] = max(existing.lines.get(line, 0), hits)
            for line, cond in pending.conditions.items():
                previous = existing.conditions.get(line)
                if previous is None or cond.covered > previous.covered:
                    existing.conditions[line] = cond

    def discard(self) -> None:
        self._local.pending = None

    # -- queries -----------------------------------------------------------

    @property
    def _pending(self) -> StoredCoverage | None:
        return getattr(self._local, "pending", None)

    @property
    def files(self) -> dict[str, StoredCoverage]:
        with self._lock:
            return dict(self._files)

    def get(self, path: str) -> StoredCoverage | None:
        with self._lock:
            return self._files.get(path)

    def summary(self) -> CoverageStoreSummary:
        files = self.files.values()
        return CoverageStoreSummary(
            files=len(files),
            lines_found=sum(f.lines_found for f in files),
            lines_hit=sum(f.lines_hit for f in files),
            branches_found=sum(f.branches_found for f in files),
            branches_hit=sum(f.branches_hit for f in files),
        )
