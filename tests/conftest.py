from __future__ import annotations

import pytest

from bigint import runtime


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Every test starts from default settings."""
    yield runtime.reset()
    runtime.reset()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point the workspace at a temporary directory."""
    home = tmp_path / "bigint-home"
    monkeypatch.setenv("BIGINT_HOME", str(home))
    return home
