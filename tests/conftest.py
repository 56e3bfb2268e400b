"""Shared fixtures for earningsalert tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from earningsalert.channels.mock import RecordingChannel
from earningsalert.sources.mock import MockCalendarSource
from earningsalert.state import MemoryStateStore
from tests.helpers import make_row


@pytest.fixture
def sample_rows() -> list[dict[str, Any]]:
    """Unsorted window with one estimate-only row."""
    return [
        make_row("MSFT", "2024-01-17"),
        make_row("AAPL", "2024-01-15"),
        make_row("NVDA", "2024-01-18", eps_actual=None, revenue_actual=None),
        make_row("GOOG", "2024-01-16", hour="bmo"),
    ]


@pytest.fixture
def mock_source(sample_rows) -> MockCalendarSource:
    return MockCalendarSource(sample_rows)


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def memory_store() -> MemoryStateStore:
    return MemoryStateStore()
