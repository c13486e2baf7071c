"""Project file index."""

from covimport.files.ops import count_lines, list_project_files, source_roots

__all__ = ["count_lines", "list_project_files", "source_roots"]
