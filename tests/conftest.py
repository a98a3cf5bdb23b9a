from __future__ import annotations

import pytest

import ora
import vision


@pytest.fixture(autouse=True)
def offline(monkeypatch, tmp_path):
    """Keep every test on fixture data and the simulated ORA client."""
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(tmp_path / "missing.json"))
    monkeypatch.setenv("ORA_MODE", "simulated")
    monkeypatch.setenv("ORA_SIMULATED_LATENCY", "0")
    monkeypatch.setattr(vision, "_adapter", None)
    monkeypatch.setattr(ora, "_client", None)
