"""CLI test isolation: no real home config, no insight latency."""

from __future__ import annotations

from pathlib import Path

import pytest

import continuum.config


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(continuum.config, "_GLOBAL_CONFIG_PATH", tmp_path / "home" / "config.yaml")
    monkeypatch.delenv("CONTINUUM_DB", raising=False)
    monkeypatch.setenv("CONTINUUM_INSIGHT_LATENCY", "0")
