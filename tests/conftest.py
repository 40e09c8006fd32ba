# tests/conftest.py
from __future__ import annotations

import pytest

from numnotation.runtime import reset


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Every test gets an empty workspace and a fresh runtime."""
    ws = tmp_path / "workspace"
    monkeypatch.setenv("NUMNOTATION_HOME", str(ws))
    monkeypatch.delenv("NUMNOTATION_DEV", raising=False)
    reset()
    yield ws
    reset()
