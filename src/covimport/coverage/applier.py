"""Writes the coverage of one matched source file into a sink."""

from __future__ import annotations

from covimport.core.errors import InvalidCoverageDataError
from covimport.coverage.models import FileFailure, ProjectFile, SourceFileRecord
from covimport.coverage.sink import CoverageSink


class CoverageApplier:
    """Pushes line and branch counters of a record into a CoverageSink."""

    def __init__(self, sink: CoverageSink) -> None:
        self.sink = sink

    def apply(self, file: ProjectFile, record: SourceFileRecord) -> FileFailure | None:
        """Import the record's coverage for ``file``.

        Returns:
            None on success, or a FileFailure when the sink rejected the data.
            Any other exception propagates to the caller.
        """
        try:
            self.sink.begin_coverage(file)
            for line in record.lines.values():
                self.sink.record_line(
                    line.line,
                    line.covered_instructions,
                    line.missed_instructions,
                    line.covered_branches,
                    line.missed_branches,
                )
            self.sink.commit()
        except InvalidCoverageDataError as e:
            self.sink.discard()
            return FileFailure(file=file, reason=e.message)
        except Exception:
            self.sink.discard()
            raise
        return None
