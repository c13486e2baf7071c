"""Tests for CoverageApplier."""

from collections.abc import Callable
from typing import Any

import pytest

from covimport.coverage.applier import CoverageApplier
from covimport.coverage.models import LineCoverage, ProjectFile, SourceFileRecord
from covimport.coverage.sink import CoverageStore


class _ExplodingSink:
    def begin_coverage(self, file: ProjectFile) -> None:  # noqa: ARG002
        self.discarded = False

    def record_line(self, *args: int) -> None:  # noqa: ARG002
        raise RuntimeError("disk on fire")

    def commit(self) -> None:
        pass

    def discard(self) -> None:
        self.discarded = True


class TestCoverageApplier:
    def test_writes_lines_in_order(
        self,
        recording_sink: Any,
        make_file: Callable[..., ProjectFile],
        make_record: Callable[..., SourceFileRecord],
    ) -> None:
        record = make_record(
            "a",
            "Foo.java",
            [
                LineCoverage(line=2, covered_instructions=3, missed_instructions=1),
                LineCoverage(line=7, missed_instructions=2, covered_branches=1, missed_branches=1),
            ],
        )

        failure = CoverageApplier(recording_sink).apply(make_file("a/Foo.java"), record)

        assert failure is None
        assert recording_sink.calls == [
            ("begin", "a/Foo.java"),
            ("line", 2, 3, 1, 0, 0),
            ("line", 7, 0, 2, 1, 1),
            ("commit", "a/Foo.java"),
        ]

    def test_invalid_data_becomes_failure(
        self,
        make_file: Callable[..., ProjectFile],
        make_record: Callable[..., SourceFileRecord],
    ) -> None:
        store = CoverageStore()
        file = make_file("a/Foo.java", line_count=3)
        record = make_record("a", "Foo.java", [LineCoverage(line=10, covered_instructions=1)])

        failure = CoverageApplier(store).apply(file, record)

        assert failure is not None
        assert failure.file is file
        assert "out of range" in failure.reason
        assert store.get("a/Foo.java") is None

    def test_sink_usable_after_failure(
        self,
        make_file: Callable[..., ProjectFile],
        make_record: Callable[..., SourceFileRecord],
    ) -> None:
        store = CoverageStore()
        applier = CoverageApplier(store)
        bad = make_record("a", "Bad.java", [LineCoverage(line=99, covered_instructions=1)])
        good = make_record("a", "Good.java")

        assert applier.apply(make_file("a/Bad.java", line_count=5), bad) is not None
        assert applier.apply(make_file("a/Good.java"), good) is None
        assert store.get("a/Good.java") is not None

    def test_other_errors_propagate(
        self,
        make_file: Callable[..., ProjectFile],
        make_record: Callable[..., SourceFileRecord],
    ) -> None:
        sink = _ExplodingSink()

        with pytest.raises(RuntimeError, match="disk on fire"):
            CoverageApplier(sink).apply(make_file("a/Foo.java"), make_record("a", "Foo.java"))
        assert sink.discarded
