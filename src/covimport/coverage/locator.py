"""Discovery of the JaCoCo XML reports to import."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from covimport.config.constants import DEFAULT_REPORT_PATHS, GLOB_CHARS

log = structlog.get_logger(__name__)


class ReportLocator:
    """Turns configured report paths and glob patterns into report files.

    With no patterns configured, the Maven/Gradle default locations are
    checked and missing ones are ignored silently.
    """

    def __init__(self, base_dir: Path, patterns: Sequence[str] = ()) -> None:
        self.base_dir = base_dir
        self.patterns = tuple(patterns)

    def get_report_locations(self) -> list[Path]:
        """Existing report files, in pattern order, without duplicates."""
        explicit = bool(self.patterns)
        found: dict[Path, None] = {}
        for pattern in self.patterns or DEFAULT_REPORT_PATHS:
            matches = self._expand(pattern)
            if not matches and explicit:
                log.warning("coverage.report_not_found", pattern=pattern, base_dir=str(self.base_dir))
            for match in matches:
                found.setdefault(match.resolve(), None)
        return list(found)

    def _expand(self, pattern: str) -> list[Path]:
        path = Path(pattern).expanduser()
        if not any(c in pattern for c in GLOB_CHARS):
            full = path if path.is_absolute() else self.base_dir / path
            return [full] if full.is_file() else []

        if path.is_absolute():
            anchor = Path(path.anchor)
            relative = str(path.relative_to(anchor))
        else:
            anchor = self.base_dir
            relative = pattern
        return sorted(m for m in anchor.glob(relative) if m.is_file())
