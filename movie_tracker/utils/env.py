from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing from the environment."""

    def __init__(self, message: str, *, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


def load_env(*, override: bool = False) -> Path | None:
    repo_root = Path(__file__).resolve().parents[2]
    candidates = [
        repo_root / ".env",
        Path.cwd() / ".env",
    ]
    for path in candidates:
        if path.is_file():
            load_dotenv(dotenv_path=path, override=override)
            return path
    return None


def optional_env(name: str, value: str | None = None) -> str | None:
    """
    Best-effort setting resolution for callers that want to continue when the value is missing.

    An explicit `value` wins over the environment.
    """

    resolved = (value or os.getenv(name) or "").strip()
    return resolved or None


def require_env(name: str, value: str | None = None) -> str:
    resolved = optional_env(name, value)
    if not resolved:
        raise ConfigurationError(f"{name} is not set.", setting=name)
    return resolved
