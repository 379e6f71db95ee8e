# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from eisen_triage.core.state import AppState

from .fakes import FakeRefiner


@pytest.fixture()
def now() -> datetime:
    """A fixed reference time so due-date tests do not depend on the wall clock."""
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="eisen-triage-test",
        log_level="INFO",
        data_dir=tmp_path / "data",
        refine_enabled=False,
        refine_endpoint="http://localhost:11434/api/generate",
        refine_model="llama3.2",
        refine_temperature=0.2,
        refine_timeout_ms=3000,
    )


@pytest.fixture()
def refiner() -> FakeRefiner:
    return FakeRefiner()


@pytest.fixture()
def state(settings: SimpleNamespace, refiner: FakeRefiner) -> AppState:
    """AppState wired with a deterministic refiner."""
    return AppState(settings=settings, refiner=refiner, refine_enabled=False)
