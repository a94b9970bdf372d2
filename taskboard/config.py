"""Ustawienia aplikacji z zmiennych środowiskowych (prefiks TASKBOARD_).

Opcje CLI nadpisują wartości ze środowiska.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TASKBOARD"
BACKENDS = ("json", "sql", "memory")


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    backend: str
    log_level: str
    log_file: Optional[Path]

    @property
    def sql_path(self) -> Path:
        return self.data_dir / "taskboard.db"

    @staticmethod
    def from_env() -> "Settings":
        backend = _env(_k("BACKEND"), "json").lower()
        if backend not in BACKENDS:
            backend = "json"
        log_file = _env(_k("LOG_FILE"))
        return Settings(
            data_dir=_env_path(_k("DATA_DIR"), Path.home() / ".taskboard"),
            backend=backend,
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
        )

    def override(self, **changes) -> "Settings":
        """Nowe ustawienia z pominięciem wartości `None`."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
