# src/eisen_triage/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing requires a network service at import time.
- Refinement defaults point at a local Ollama instance and stay off until enabled.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "EISEN"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Refinement (local text-generation service) ----
    refine_enabled: bool
    refine_endpoint: str
    refine_model: str
    refine_temperature: float
    refine_timeout_ms: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "eisen-triage") or "eisen-triage"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/eisen"))

        refine_enabled = _env_bool(_k("REFINE_ENABLED"), False)
        refine_endpoint = _env(_k("REFINE_ENDPOINT"), "http://localhost:11434/api/generate").strip()
        refine_model = _env(_k("REFINE_MODEL"), "llama3.2").strip() or "llama3.2"
        refine_temperature = _env_float(_k("REFINE_TEMPERATURE"), 0.2)

        # Negative or zero budgets make no sense; keep the default instead.
        refine_timeout_ms = _env_int(_k("REFINE_TIMEOUT_MS"), 3000)
        if refine_timeout_ms <= 0:
            refine_timeout_ms = 3000

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            refine_enabled=refine_enabled,
            refine_endpoint=refine_endpoint,
            refine_model=refine_model,
            refine_temperature=refine_temperature,
            refine_timeout_ms=refine_timeout_ms,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
