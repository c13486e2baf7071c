"""Resolution of report package/file identities to project files."""

from __future__ import annotations

from collections.abc import Iterable

from covimport.coverage.models import ProjectFile


class PathResolver:
    """Exact lookup of ``package/file`` paths in the project file index.

    The index is built once per batch and never mutated afterwards, so
    resolve() may be called from several threads.
    """

    def __init__(self, files: Iterable[tuple[str, ProjectFile]]) -> None:
        self._index: dict[str, ProjectFile] = {}
        for rel_path, handle in files:
            # First source root wins when two roots hold the same relative path
            self._index.setdefault(rel_path.replace("\\", "/"), handle)

    def resolve(self, package_name: str, file_name: str) -> ProjectFile | None:
        """Return the project file at ``package_name/file_name``, or None.

        No fuzzy, partial or case-insensitive matching: a missing path is an
        ordinary outcome (third-party, generated or excluded sources).
        """
        candidate = f"{package_name}/{file_name}" if package_name else file_name
        return self._index.get(candidate)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, rel_path: object) -> bool:
        return rel_path in self._index
