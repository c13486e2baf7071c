"""Configuration constants.

Values that are conventions of the JaCoCo toolchain rather than user
settings. For configurable values, see models.py.
"""

# =============================================================================
# Report discovery
# =============================================================================
# Where Maven and Gradle write JaCoCo XML reports by default. Checked silently
# when no report paths are configured.

DEFAULT_REPORT_PATHS: tuple[str, ...] = (
    "target/site/jacoco/jacoco.xml",
    "target/site/jacoco-it/jacoco.xml",
    "build/reports/jacoco/test/jacocoTestReport.xml",
)

GLOB_CHARS = frozenset("*?[")
"""Characters that turn a report path into a glob pattern."""

# =============================================================================
# Project layout
# =============================================================================

DEFAULT_SOURCE_DIRS: tuple[str, ...] = (
    "src/main/java",
    "src/main/kotlin",
    "src/test/java",
    "src/test/kotlin",
)
"""Source roots JaCoCo package paths are relative to (Maven/Gradle layout)."""

SOURCE_EXTENSIONS: frozenset[str] = frozenset((".java", ".kt", ".kts", ".groovy", ".scala"))
"""Extensions of files that can appear in a JaCoCo report."""

PRUNED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        # Build outputs
        "target",
        "build",
        "out",
        ".gradle",
        ".mvn",
        # IDE metadata
        ".idea",
        ".vscode",
        # Dependencies
        "node_modules",
    )
)
"""Directories never walked when listing project files."""

CONFIG_FILE_NAME = ".covimport.yaml"
"""Per-project configuration file, looked up in the project root."""
