"""Runtime configuration.

Settings come from a YAML file named by ``FLORIST_CONFIG`` or, failing
that, ``florist.yaml`` in the working directory.  A missing file means
defaults everywhere.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from florist.domain.exceptions import ValidationError
from florist.domain.model.value_objects import Coordinates

CONFIG_ENV_VAR = "FLORIST_CONFIG"
DEFAULT_CONFIG_FILE = "florist.yaml"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass
class StoreLocation:
    """Origin used for delivery distance (the Cirebon shop by default)."""

    latitude: float = -6.7575719
    longitude: float = 108.5621832

    def coordinates(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude)


@dataclass
class CacheSettings:
    ttl_seconds: float = 300.0
    coalesce_grace_seconds: float = 0.1
    serve_stale: bool = False


@dataclass
class Settings:
    data_dir: Path = field(default_factory=lambda: _DEFAULT_DATA_DIR)
    store: StoreLocation = field(default_factory=StoreLocation)
    cache: CacheSettings = field(default_factory=CacheSettings)
    log_level: str = "WARNING"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["data_dir"] = str(self.data_dir)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        _reject_unknown(cls, data, "settings")
        store = data.get("store") or {}
        cache = data.get("cache") or {}
        _reject_unknown(StoreLocation, store, "store")
        _reject_unknown(CacheSettings, cache, "cache")

        settings = cls(
            store=StoreLocation(**store),
            cache=CacheSettings(**cache),
            log_level=str(data.get("log_level", "WARNING")).upper(),
        )
        if data.get("data_dir"):
            settings.data_dir = Path(data["data_dir"]).expanduser()
        if settings.cache.ttl_seconds <= 0:
            raise ValidationError("cache.ttl_seconds must be positive")
        if settings.cache.coalesce_grace_seconds < 0:
            raise ValidationError("cache.coalesce_grace_seconds cannot be negative")
        return settings


def _reject_unknown(cls: type, data: dict[str, Any], section: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"Config section '{section}' must be a mapping")
    unknown = set(data) - {f.name for f in fields(cls)}
    if unknown:
        raise ValidationError(
            f"Unknown key(s) in '{section}' config: {', '.join(sorted(unknown))}"
        )


def config_path() -> Path | None:
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    candidate = Path.cwd() / DEFAULT_CONFIG_FILE
    return candidate if candidate.exists() else None


def load_settings(path: Path | None = None) -> Settings:
    path = path or config_path()
    if path is None:
        return Settings()
    if not path.exists():
        raise ValidationError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValidationError(f"Invalid YAML in {path}: {exc}") from exc
    return Settings.from_dict(data)
