# src/eisen_triage/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the concrete refiner into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Refiner
from ..core.state import AppState
from ..llm.offline import OfflineRefiner
from ..llm.refine import OllamaRefiner, RefineConfig

logger = logging.getLogger(__name__)


def build_refiner(settings) -> Refiner:
    endpoint = (getattr(settings, "refine_endpoint", "") or "").strip()
    if not endpoint:
        logger.info("No refinement endpoint configured, using offline refiner.")
        return OfflineRefiner()
    return OllamaRefiner(RefineConfig.from_settings(settings))


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Settings stay injectable for tests; if None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    return AppState(
        settings=settings,
        refiner=build_refiner(settings),
        refine_enabled=bool(settings.refine_enabled),
    )
