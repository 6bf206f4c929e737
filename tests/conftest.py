"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def environ() -> dict[str, str]:
    """Isolated environment store."""
    return {}


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory so no stray .env is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
