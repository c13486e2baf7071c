"""covimport - JaCoCo coverage report importer."""

__version__ = "0.1.0"
