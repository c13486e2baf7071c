"""covimport CLI package."""

from covimport.cli.main import cli

__all__ = ["cli"]
