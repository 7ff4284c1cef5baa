import threading

import pytest
from click.testing import CliRunner


class RecordingTarget:
    """Collects `set_decorations` calls the way an editor view would."""

    def __init__(self):
        self.calls = []
        self.applied = threading.Event()

    def set_decorations(self, decoration, ranges):
        self.calls.append((decoration, ranges))
        self.applied.set()

    def latest(self):
        """Return the most recent ranges per color index."""
        latest = {}
        for decoration, ranges in self.calls:
            latest[decoration.index] = ranges
        return latest


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def target() -> RecordingTarget:
    """Provides a decoration target that records applied ranges."""
    return RecordingTarget()
