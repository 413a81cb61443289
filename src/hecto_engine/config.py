"""Editor settings and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "HECTO_"


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _env_float(environ: Mapping[str, str], key: str, fallback: float) -> float:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables shared by the modes and the host adapters."""

    tab_width: int = 4
    sequence_timeout_ms: int = 500
    status_timeout_s: float = 5.0
    viewport_width: int = 80
    viewport_height: int = 24

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            tab_width=_env_int(env, "TAB_WIDTH", defaults.tab_width),
            sequence_timeout_ms=_env_int(
                env, "SEQUENCE_TIMEOUT_MS", defaults.sequence_timeout_ms
            ),
            status_timeout_s=_env_float(
                env, "STATUS_TIMEOUT", defaults.status_timeout_s
            ),
            viewport_width=defaults.viewport_width,
            viewport_height=defaults.viewport_height,
        )


__all__ = ["EditorConfig", "ENV_PREFIX"]
