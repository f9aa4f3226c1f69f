"""Configuration primitives for the generator and its logging."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load the .env file once for the process."""

    if getattr(_load_env, "_loaded", False):  # type: ignore[attr-defined]
        return

    load_dotenv(dotenv_path)
    setattr(_load_env, "_loaded", True)  # type: ignore[attr-defined]


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass(frozen=True)
class GeneratorSettings:
    """Knobs for the synthetic data generator."""

    currency: str = "USD"
    history_days: int = 730
    pending_rate: float = 0.10
    modified_rate: float = 0.05
    removed_rate: float = 0.02
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.history_days < 1:
            raise ValueError("history_days must be at least 1")
        for name in ("pending_rate", "modified_rate", "removed_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

    @classmethod
    def from_env(cls) -> "GeneratorSettings":
        """Instantiate settings using environment overrides when present."""

        defaults = cls()
        return cls(
            currency=os.getenv("FINSYNTH_CURRENCY", defaults.currency).upper(),
            history_days=int(os.getenv("FINSYNTH_HISTORY_DAYS", defaults.history_days)),
            pending_rate=float(os.getenv("FINSYNTH_PENDING_RATE", defaults.pending_rate)),
            modified_rate=float(os.getenv("FINSYNTH_MODIFIED_RATE", defaults.modified_rate)),
            removed_rate=float(os.getenv("FINSYNTH_REMOVED_RATE", defaults.removed_rate)),
            seed=_optional_int(os.getenv("FINSYNTH_SEED")),
        )


@dataclass(frozen=True)
class LoggingSettings:
    """Where and how verbosely to log."""

    level: str = "INFO"
    log_dir: Path | None = None

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        raw_dir = os.getenv("LOG_DIR", "").strip()
        return cls(
            level=os.getenv("LOG_LEVEL", cls.level).upper(),
            log_dir=Path(raw_dir) if raw_dir else None,
        )


@dataclass(frozen=True)
class Settings:
    """Container for package configuration."""

    generator: GeneratorSettings
    logging: LoggingSettings

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Settings":
        """Build ``Settings`` using environment variables (optionally from ``.env``)."""

        _load_env(dotenv_path)

        return cls(
            generator=GeneratorSettings.from_env(),
            logging=LoggingSettings.from_env(),
        )


@lru_cache()
def get_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """Return a cached settings instance."""

    return Settings.from_env(dotenv_path=dotenv_path)
