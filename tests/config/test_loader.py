"""Tests for configuration loading."""

from pathlib import Path

import pytest

from covimport.config.loader import load_config
from covimport.config.models import CovImportConfig, ImporterConfig, LogOutputConfig
from covimport.core.errors import ConfigError, ErrorCode


class TestModels:
    def test_defaults(self) -> None:
        config = CovImportConfig()

        assert config.logging.level == "INFO"
        assert config.reports.paths == []
        assert config.project.source_dirs == []
        assert config.importer.max_workers == 1

    def test_relative_log_file_rejected(self) -> None:
        with pytest.raises(ValueError, match="absolute"):
            LogOutputConfig(destination="logs/import.log")

    def test_max_workers_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="max_workers"):
            ImporterConfig(max_workers=0)


class TestLoadConfig:
    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("COVIMPORT__LOGGING__LEVEL", "COVIMPORT__IMPORTER__MAX_WORKERS"):
            monkeypatch.delenv(name, raising=False)

    def test_no_config_file(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config == CovImportConfig()

    def test_project_yaml(self, tmp_path: Path) -> None:
        (tmp_path / ".covimport.yaml").write_text(
            "reports:\n  paths:\n    - build/**/jacoco*.xml\n"
            "project:\n  source_dirs: [app/src]\n"
            "importer:\n  max_workers: 3\n"
        )

        config = load_config(tmp_path)

        assert config.reports.paths == ["build/**/jacoco*.xml"]
        assert config.project.source_dirs == ["app/src"]
        assert config.importer.max_workers == 3

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".covimport.yaml").write_text("importer:\n  max_workers: 3\n")
        monkeypatch.setenv("COVIMPORT__IMPORTER__MAX_WORKERS", "5")

        assert load_config(tmp_path).importer.max_workers == 5

    def test_kwargs_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVIMPORT__LOGGING__LEVEL", "ERROR")

        config = load_config(tmp_path, logging={"level": "DEBUG"})

        assert config.logging.level == "DEBUG"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        path = tmp_path / "ci.yaml"
        path.write_text("reports:\n  paths: [out/jacoco.xml]\n")

        config = load_config(tmp_path / "elsewhere", config_path=path)

        assert config.reports.paths == ["out/jacoco.xml"]

    def test_explicit_config_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path, config_path=tmp_path / "missing.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        (tmp_path / ".covimport.yaml").write_text("reports: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        (tmp_path / ".covimport.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / ".covimport.yaml").write_text("importer:\n  max_workers: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"].startswith("importer")
