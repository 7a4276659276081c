"""Session configuration for remote prompting.

Config loading priority (highest first):
1. Explicit options passed by the caller
2. Environment variables (REMOTE_PROMPT_HOST, _PORT, _BUNDLE, _SOCKET)
3. .remote-prompt/config.local.toml (git-ignored, per-machine)
4. .remote-prompt/config.toml (project-specific)
5. ~/.remote-prompt/config.toml (user defaults)

TOML files keep their values under a ``[session]`` table.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from remote_prompt.transport import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_READ_LIMIT

_TRUE_STRINGS = {"1", "true", "yes", "on"}


@dataclass
class SessionConfig:
    """Connection target and mode selector for one prompt call."""

    socket: bool = False
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    bundle: bool = False
    message_type: str = ""
    code: str = ""
    message: str = ""
    read_limit: int = DEFAULT_READ_LIMIT

    def __post_init__(self):
        self.host = self.host or DEFAULT_HOST
        self.port = self._parse_port(self.port, DEFAULT_PORT)
        self.socket = self._parse_bool(self.socket)
        self.bundle = self._parse_bool(self.bundle)

    # ── Loading ──────────────────────────────────────────────

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any] | SessionConfig | None = None,
        base: SessionConfig | None = None,
    ) -> SessionConfig:
        """Normalize caller options into a SessionConfig.

        Accepts ``type`` as an alias of ``message_type`` and the legacy
        ``msg`` key as an alias of ``message``. Keys that are missing or
        None keep the value from ``base``.
        """
        if isinstance(options, SessionConfig):
            return options
        base = base or cls()
        if not options:
            return base

        opts = dict(options)
        if "type" in opts and "message_type" not in opts:
            opts["message_type"] = opts.pop("type")
        if "msg" in opts and "message" not in opts:
            opts["message"] = opts.pop("msg")

        known = {f.name for f in fields(cls)}
        updates = {k: v for k, v in opts.items() if k in known and v is not None}
        return replace(base, **updates)

    @classmethod
    def load(
        cls,
        workspace: Path | None = None,
        options: Mapping[str, Any] | None = None,
        home: Path | None = None,
    ) -> SessionConfig:
        """Load config from the cascade, then apply explicit ``options``."""
        from remote_prompt.cascade import CascadingConfig

        cascade = CascadingConfig(workspace=workspace, home=home)
        section = cascade.get("session", {}) or {}
        base = cls.from_options(section)
        return cls.from_options(options, base=base)

    @staticmethod
    def _parse_port(value: Any, default: int) -> int:
        """Parse a TCP port with safe fallback."""
        try:
            port = int(value)
        except (TypeError, ValueError):
            return default
        if 0 < port < 65536:
            return port
        return default

    @staticmethod
    def _parse_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)

    def message_frame(self) -> dict[str, str]:
        """Frame sent by the one-shot message path."""
        return {"type": self.message_type, "code": self.code, "message": self.message}
