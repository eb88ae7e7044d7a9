"""
Runtime settings, read from the environment with in-code defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

DEFAULT_MODEL_ID = "google/medgemma-4b-it"
BACKENDS = ("text", "structured")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_env(path: Optional[Union[str, Path]] = None) -> bool:
    """Load a .env file (default: ./.env). Variables already set win."""
    return load_dotenv(dotenv_path=path, override=False)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    model_id: str = DEFAULT_MODEL_ID
    device: Optional[str] = None
    backend: str = "text"
    timeout_s: float = 90.0
    max_new_tokens: int = 512
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")
        if self.max_new_tokens <= 0:
            raise ValueError("max_new_tokens must be positive")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            model_id=os.getenv("PILLASSIST_MODEL_ID", DEFAULT_MODEL_ID),
            device=os.getenv("PILLASSIST_DEVICE") or None,
            backend=os.getenv("PILLASSIST_BACKEND", "text").strip().lower(),
            timeout_s=_float_env("PILLASSIST_TIMEOUT_S", 90.0),
            max_new_tokens=_int_env("PILLASSIST_MAX_NEW_TOKENS", 512),
            log_level=os.getenv("PILLASSIST_LOG_LEVEL", "WARNING").strip().upper(),
        )
