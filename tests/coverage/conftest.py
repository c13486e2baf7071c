"""Shared fixtures for coverage import tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from covimport.core.errors import InvalidCoverageDataError
from covimport.coverage.models import LineCoverage, ProjectFile, SourceFileRecord


class RecordingSink:
    """Sink double recording every call; can reject chosen files."""

    def __init__(self, reject: set[str] | None = None) -> None:
        self.reject = reject or set()
        self.calls: list[tuple[Any, ...]] = []
        self.committed: list[str] = []
        self._current: ProjectFile | None = None

    def begin_coverage(self, file: ProjectFile) -> None:
        self.calls.append(("begin", file.path))
        self._current = file

    def record_line(
        self,
        line_number: int,
        instructions_covered: int,
        instructions_missed: int,
        branches_covered: int,
        branches_missed: int,
    ) -> None:
        assert self._current is not None
        self.calls.append(
            (
                "line",
                line_number,
                instructions_covered,
                instructions_missed,
                branches_covered,
                branches_missed,
            )
        )
        if self._current.path in self.reject:
            raise InvalidCoverageDataError.line_out_of_range(self._current.path, line_number, 0)

    def commit(self) -> None:
        assert self._current is not None
        self.calls.append(("commit", self._current.path))
        self.committed.append(self._current.path)
        self._current = None

    def discard(self) -> None:
        self.calls.append(("discard",))
        self._current = None


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., ProjectFile]:
    """Factory for project file handles (no file is written)."""

    def _make(path: str, line_count: int = 100) -> ProjectFile:
        return ProjectFile(path=path, abs_path=tmp_path / path, line_count=line_count)

    return _make


@pytest.fixture
def make_record() -> Callable[..., SourceFileRecord]:
    """Factory for records; lines default to one covered line."""

    def _make(package: str, name: str, lines: list[LineCoverage] | None = None) -> SourceFileRecord:
        if lines is None:
            lines = [LineCoverage(line=1, covered_instructions=1)]
        return SourceFileRecord(
            package_name=package, file_name=name, lines={lc.line: lc for lc in lines}
        )

    return _make
