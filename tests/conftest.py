"""Shared fixtures."""

import pytest
import tempfile
from pathlib import Path

from lead_radar.storage import SignalDatabase


@pytest.fixture
def temp_data_dir():
    """Create temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db(temp_data_dir):
    """Create a signal database in temp storage."""
    return SignalDatabase(temp_data_dir / "signals.db")


@pytest.fixture
def no_sleep():
    """Sleep stand-in that records requested delays."""
    delays = []

    def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep
