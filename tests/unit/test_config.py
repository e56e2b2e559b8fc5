"""Unit tests for config.py"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mdpost.config import Settings, load_config


def test_load_config_defaults(tmp_path, monkeypatch):
    """Settings defaults are used when no config.yaml, env var or override exists."""
    monkeypatch.chdir(tmp_path)
    settings = load_config()
    assert settings.source_path == Path(".") / "source"
    assert settings.new_post_name == ":title.md"
    assert settings.syntax_highlighter is True
    assert settings.post_asset_folder is False


def test_load_config_reads_config_yaml(tmp_path, monkeypatch):
    """Values from config.yaml in the working directory are applied."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("source_dir: content\npost_asset_folder: true\n")
    settings = load_config()
    assert settings.source_dir == "content"
    assert settings.post_asset_folder is True


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDPOST_FILENAME_CASE takes precedence over config.yaml and is coerced to int."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("filename_case: 2\n")
    monkeypatch.setenv("MDPOST_FILENAME_CASE", "1")
    assert load_config().filename_case == 1


def test_load_config_env_bool(tmp_path, monkeypatch):
    """MDPOST_SYNTAX_HIGHLIGHTER=false turns the highlighter off."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDPOST_SYNTAX_HIGHLIGHTER", "false")
    assert load_config().syntax_highlighter is False


def test_load_config_cli_overrides_env(tmp_path, monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDPOST_DEFAULT_LAYOUT", "page")
    settings = load_config(overrides={"default_layout": "draft", "source_dir": None})
    assert settings.default_layout == "draft"
    assert settings.source_dir == "source"


def test_load_config_invalid_yaml(tmp_path, monkeypatch):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_settings_rejects_bad_filename_case():
    """filename_case outside 0..2 fails validation."""
    with pytest.raises(ValidationError):
        Settings(filename_case=3)


def test_settings_paths_resolve_against_base_dir(tmp_path):
    """source_path and scaffold_path are rooted at base_dir."""
    settings = Settings(base_dir=str(tmp_path))
    assert settings.source_path == tmp_path / "source"
    assert settings.scaffold_path == tmp_path / "scaffolds"
