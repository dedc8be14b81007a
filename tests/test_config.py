"""Tests for cmdcenter.config module.

Covers:
- AppConfig settings and environment variable support
- Configuration load/save to YAML
- Parser context built from the open project
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from cmdcenter.config import CONFIG_DIR, CONFIG_FILE, AppConfig
from cmdcenter.core.commands import MAX_INPUT_LENGTH, CommandContext


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in (
        "CMDCENTER_PROJECT_PATH",
        "CMDCENTER_PROJECT_ID",
        "CMDCENTER_PROJECT_TYPE",
        "CMDCENTER_MAX_INPUT_LENGTH",
        "CMDCENTER_OUTPUT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# AppConfig Tests
# ============================================================================


class TestAppConfig:
    """Tests for AppConfig settings."""

    def test_default_values(self, tmp_path):
        """No project is open by default."""
        config = AppConfig(project_path=tmp_path)
        assert config.project_id is None
        assert config.project_type is None
        assert config.max_input_length == MAX_INPUT_LENGTH
        assert config.output_format == "table"
        assert not config.has_open_project()

    def test_config_file_location(self, tmp_path):
        config = AppConfig(project_path=tmp_path)
        assert config.config_file == tmp_path / CONFIG_DIR / CONFIG_FILE

    def test_project_id_from_env(self, monkeypatch, tmp_path):
        """CMDCENTER_PROJECT_ID sets the open project."""
        monkeypatch.setenv("CMDCENTER_PROJECT_ID", "p-env")
        config = AppConfig(project_path=tmp_path)
        assert config.project_id == "p-env"
        assert config.has_open_project()

    def test_output_format_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CMDCENTER_OUTPUT_FORMAT", "json")
        assert AppConfig(project_path=tmp_path).output_format == "json"

    def test_invalid_output_format_rejected(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CMDCENTER_OUTPUT_FORMAT", "xml")
        with pytest.raises(ValidationError):
            AppConfig(project_path=tmp_path)

    def test_max_input_length_must_be_positive(self, tmp_path):
        with pytest.raises(ValidationError):
            AppConfig(project_path=tmp_path, max_input_length=0)

    def test_context(self, tmp_path):
        config = AppConfig(project_path=tmp_path, project_id="p1", project_type="deck")
        assert config.context() == CommandContext(project_id="p1", project_type="deck")


# ============================================================================
# Load / Save Tests
# ============================================================================


class TestConfigPersistence:
    """Tests for loading and saving .cmdcenter/config.yaml."""

    def test_load_without_file(self, tmp_path):
        """Loading with no saved config gives defaults."""
        config = AppConfig.load(tmp_path)
        assert config.project_path == tmp_path
        assert config.project_id is None

    def test_save_creates_directory(self, tmp_path):
        config = AppConfig(project_path=tmp_path, project_id="p1")
        config.save()
        assert (tmp_path / CONFIG_DIR).is_dir()
        assert config.config_file.exists()

    def test_load_reads_saved_config(self, tmp_path):
        config = AppConfig(project_path=tmp_path, project_id="p1", project_type="kitchen_remodel")
        config.output_format = "json"
        config.save()

        loaded = AppConfig.load(tmp_path)
        assert loaded.project_id == "p1"
        assert loaded.project_type == "kitchen_remodel"
        assert loaded.output_format == "json"

    def test_saved_file_overrides_env(self, monkeypatch, tmp_path):
        AppConfig(project_path=tmp_path, project_id="p-saved").save()
        monkeypatch.setenv("CMDCENTER_PROJECT_ID", "p-env")
        assert AppConfig.load(tmp_path).project_id == "p-saved"

    def test_save_overwrites_existing(self, tmp_path):
        AppConfig(project_path=tmp_path, project_id="p1").save()
        AppConfig(project_path=tmp_path, project_id="p2").save()
        assert AppConfig.load(tmp_path).project_id == "p2"

    def test_config_yaml_structure(self, tmp_path):
        from ruamel.yaml import YAML

        AppConfig(project_path=tmp_path, project_id="p1").save()

        data = YAML().load((tmp_path / CONFIG_DIR / CONFIG_FILE).read_text())
        assert data["context"]["project_id"] == "p1"
        assert data["context"]["project_type"] is None
        assert data["output_format"] == "table"

    def test_load_with_empty_config(self, tmp_path):
        (tmp_path / CONFIG_DIR).mkdir()
        (tmp_path / CONFIG_DIR / CONFIG_FILE).write_text("")
        assert AppConfig.load(tmp_path).project_id is None

    def test_load_with_partial_config(self, tmp_path):
        (tmp_path / CONFIG_DIR).mkdir()
        (tmp_path / CONFIG_DIR / CONFIG_FILE).write_text("output_format: json\n")

        config = AppConfig.load(tmp_path)
        assert config.output_format == "json"
        assert config.project_id is None

    def test_load_ignores_unknown_output_format(self, tmp_path):
        (tmp_path / CONFIG_DIR).mkdir()
        (tmp_path / CONFIG_DIR / CONFIG_FILE).write_text("output_format: xml\n")
        assert AppConfig.load(tmp_path).output_format == "table"

    def test_load_with_invalid_yaml(self, tmp_path):
        """A corrupt config file falls back to defaults."""
        (tmp_path / CONFIG_DIR).mkdir()
        (tmp_path / CONFIG_DIR / CONFIG_FILE).write_text("context: [unclosed\n")

        config = AppConfig.load(tmp_path)
        assert config.project_id is None
        assert isinstance(config.project_path, Path)

    def test_load_with_scalar_context(self, tmp_path):
        """A context that is not a mapping is ignored; other keys still apply."""
        (tmp_path / CONFIG_DIR).mkdir()
        (tmp_path / CONFIG_DIR / CONFIG_FILE).write_text("context: p1\noutput_format: json\n")

        config = AppConfig.load(tmp_path)
        assert config.project_id is None
        assert config.output_format == "json"

    def test_load_with_top_level_list(self, tmp_path):
        (tmp_path / CONFIG_DIR).mkdir()
        (tmp_path / CONFIG_DIR / CONFIG_FILE).write_text("- project_id\n- p1\n")

        config = AppConfig.load(tmp_path)
        assert config.project_id is None
        assert config.output_format == "table"
