"""Tests for YAML settings loading."""

from pathlib import Path

import pytest
import yaml

from florist.domain.exceptions import ValidationError
from florist.domain.model.value_objects import Coordinates
from florist.infrastructure.config import (
    CONFIG_ENV_VAR,
    Settings,
    config_path,
    load_settings,
)


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "florist.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestLoadSettings:

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        settings = load_settings()
        assert settings.cache.ttl_seconds == 300
        assert settings.store.coordinates() == Coordinates(-6.7575719, 108.5621832)
        assert settings.log_level == "WARNING"

    def test_reads_yaml(self, tmp_path):
        path = _write(
            tmp_path,
            {
                "data_dir": str(tmp_path / "data"),
                "log_level": "debug",
                "store": {"latitude": -6.9, "longitude": 107.6},
                "cache": {"ttl_seconds": 60, "serve_stale": True},
            },
        )
        settings = load_settings(path)
        assert settings.data_dir == tmp_path / "data"
        assert settings.log_level == "DEBUG"
        assert settings.store.latitude == -6.9
        assert settings.cache.ttl_seconds == 60
        assert settings.cache.serve_stale is True
        assert settings.cache.coalesce_grace_seconds == 0.1

    def test_env_var_names_the_file(self, tmp_path, monkeypatch):
        path = _write(tmp_path, {"log_level": "info"})
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert config_path() == path
        assert load_settings().log_level == "INFO"

    def test_empty_file_means_defaults(self, tmp_path):
        path = tmp_path / "florist.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path).cache.ttl_seconds == 300

    def test_unknown_key_rejected(self, tmp_path):
        path = _write(tmp_path, {"cache": {"ttl": 5}})
        with pytest.raises(ValidationError, match="Unknown key"):
            load_settings(path)

    def test_non_positive_ttl_rejected(self, tmp_path):
        path = _write(tmp_path, {"cache": {"ttl_seconds": 0}})
        with pytest.raises(ValidationError, match="ttl_seconds must be positive"):
            load_settings(path)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ValidationError, match="not found"):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "florist.yaml"
        path.write_text("cache: [unclosed", encoding="utf-8")
        with pytest.raises(ValidationError, match="Invalid YAML"):
            load_settings(path)


def test_to_dict_round_trips():
    settings = Settings()
    assert Settings.from_dict(settings.to_dict()) == settings
