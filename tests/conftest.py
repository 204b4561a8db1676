"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`stellarion` package (e.g., `from stellarion.api.app import app`) without
requiring an editable install in CI.
"""

import random
import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


class ScriptedRandom(random.Random):
    """Generator returning queued draws, then a fixed default.

    ``choice`` always picks the first option so tests can predict targets.
    """

    def __init__(self, draws=(), default=0.0):
        super().__init__(0)
        self._draws = list(draws)
        self._default = default

    def random(self):
        if self._draws:
            return self._draws.pop(0)
        return self._default

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def scripted_rng():
    """Factory for predictable generators."""
    return ScriptedRandom
