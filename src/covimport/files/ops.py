"""Project file index - lists the source files coverage can attach to.

Pure filesystem I/O. Paths are keyed relative to their source root, which is
what JaCoCo package paths correspond to (``com/example/Foo.java`` lives in
``src/main/java/com/example/Foo.java``).
"""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Sequence
from pathlib import Path

import structlog

from covimport.config.constants import DEFAULT_SOURCE_DIRS, PRUNED_DIRS, SOURCE_EXTENSIONS
from covimport.coverage.models import ProjectFile

log = structlog.get_logger(__name__)


def source_roots(project_root: Path, source_dirs: Sequence[str] = ()) -> list[Path]:
    """Existing source roots of the project.

    Configured directories are used as given; otherwise the Maven/Gradle
    conventional roots that exist, falling back to the project root itself.
    """
    candidates = source_dirs or DEFAULT_SOURCE_DIRS
    roots = [project_root / d for d in candidates if (project_root / d).is_dir()]
    if source_dirs:
        missing = [d for d in source_dirs if not (project_root / d).is_dir()]
        if missing:
            log.warning("files.source_dirs_missing", source_dirs=missing)
        return roots
    return roots or [project_root]


def count_lines(path: Path) -> int:
    data = path.read_bytes()
    if not data:
        return 0
    return data.count(b"\n") + (0 if data.endswith(b"\n") else 1)


def _is_excluded(rel_path: str, exclude: Sequence[str]) -> bool:
    return any(fnmatch.fnmatch(rel_path, pattern) for pattern in exclude)


def list_project_files(
    project_root: Path,
    source_dirs: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> list[tuple[str, ProjectFile]]:
    """List source files as ``(path relative to source root, handle)`` pairs.

    Args:
        project_root: Project root directory.
        source_dirs: Source roots relative to project_root.
        exclude: fnmatch patterns matched against project-relative paths.

    Returns:
        Pairs sorted by source root order, then path.
    """
    project_root = project_root.resolve()
    entries: list[tuple[str, ProjectFile]] = []

    for root in source_roots(project_root, source_dirs):
        found: list[tuple[str, ProjectFile]] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [d for d in dirnames if d not in PRUNED_DIRS]
            current = Path(dirpath)
            for name in filenames:
                abs_path = current / name
                if abs_path.suffix not in SOURCE_EXTENSIONS:
                    continue
                if _is_excluded(abs_path.relative_to(project_root).as_posix(), exclude):
                    continue
                try:
                    line_count = count_lines(abs_path)
                except OSError as e:
                    log.warning("files.unreadable", path=str(abs_path), error=str(e))
                    continue
                rel_path = abs_path.relative_to(root).as_posix()
                found.append(
                    (rel_path, ProjectFile(path=rel_path, abs_path=abs_path, line_count=line_count))
                )
        entries.extend(sorted(found, key=lambda entry: entry[0]))

    log.debug("files.indexed", count=len(entries))
    return entries
