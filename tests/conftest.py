"""Pytest configuration and shared fixtures."""

import os
import sys

import pytest

root = os.path.dirname(os.path.abspath(__file__))
src = os.path.abspath(os.path.join(root, "..", "src"))
if src not in sys.path:
    sys.path.insert(0, src)


class ManualClock:
    """Deterministic clock: every reading is one step after the previous one."""

    def __init__(self, start: float = 1000.0, step: float = 1.0):
        self.current = start
        self.step = step

    def __call__(self) -> float:
        self.current += self.step
        return self.current


@pytest.fixture
def clock():
    return ManualClock()
