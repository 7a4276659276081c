"""Cascading configuration management for remote_prompt.

Configuration priority (highest first):
1. Environment variables
2. .remote-prompt/config.local.toml (git-ignored, per-machine overrides)
3. .remote-prompt/config.toml (project-specific)
4. ~/.remote-prompt/config.toml (user defaults)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

logger = logging.getLogger(__name__)

ENV_PREFIX = "REMOTE_PROMPT_"
ENV_KEYS = ("host", "port", "bundle", "socket")


@dataclass
class ConfigLayer:
    """A single layer in the configuration cascade."""

    name: str
    path: Path | None
    data: dict[str, Any] = field(default_factory=dict)
    source: str = ""

    @classmethod
    def from_file(cls, path: Path) -> ConfigLayer:
        """Load a config layer from a TOML file."""
        if not path.exists():
            return cls(name=path.stem, path=path, data={}, source="file")

        try:
            data = tomllib.loads(path.read_bytes().decode())
            return cls(name=path.stem, path=path, data=data, source="file")
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            logger.warning("Failed to load %s: %s", path, e)
            return cls(name=path.stem, path=path, data={}, source="file")

    @classmethod
    def from_env(cls) -> ConfigLayer:
        """Load config from REMOTE_PROMPT_* environment variables."""
        data: dict[str, Any] = {}
        for key in ENV_KEYS:
            value = os.getenv(ENV_PREFIX + key.upper())
            if value:
                data.setdefault("session", {})[key] = value
        return cls(name="environment", path=None, data=data, source="env")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a nested value using dot notation."""
        parts = key.split(".")
        current = self.data
        for part in parts:
            if isinstance(current, dict):
                current = current.get(part)
                if current is None:
                    return default
            else:
                return default
        return current


class CascadingConfig:
    """Manages multiple configuration layers with proper override behavior."""

    def __init__(self, workspace: Path | None = None, home: Path | None = None):
        self.workspace = workspace
        self.home = home or Path.home()
        self.layers: list[ConfigLayer] = []
        self._merged: dict[str, Any] = {}
        self._load_layers()

    def _load_layers(self):
        """Load all config layers in priority order (lowest first)."""
        self.layers = []

        self.layers.append(ConfigLayer.from_file(self.home / ".remote-prompt" / "config.toml"))

        if self.workspace:
            project_dir = self.workspace / ".remote-prompt"
            self.layers.append(ConfigLayer.from_file(project_dir / "config.toml"))
            self.layers.append(ConfigLayer.from_file(project_dir / "config.local.toml"))

        self.layers.append(ConfigLayer.from_env())

        # Later layers override earlier ones
        self._merged = {}
        for layer in self.layers:
            self._deep_merge(self._merged, layer.data)

    @staticmethod
    def _deep_merge(base: dict, updates: dict):
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                CascadingConfig._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value using dot notation."""
        parts = key.split(".")
        current = self._merged
        for part in parts:
            if isinstance(current, dict):
                current = current.get(part)
                if current is None:
                    return default
            else:
                return default
        return current
