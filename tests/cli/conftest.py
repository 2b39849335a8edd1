"""Shared fixtures for CLI tests."""

from __future__ import annotations

import pytest
from rich.console import Console


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> Console:
    """Render Rich tables wide enough that long temp paths never wrap."""
    console = Console(width=400)
    monkeypatch.setattr("jdkprobe.cli.output.console", console)
    return console
