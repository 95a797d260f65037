"""Shared fixtures and test doubles"""

from datetime import datetime

import pytest

from datesynth.clock import reset_clock
from datesynth.randomizer import Randomizer

# Largest double below 1.0
ALMOST_ONE = 1 - 2 ** -53


class FixedRandom(Randomizer):
    """Random source replaying fixed values (the last one repeats)"""

    def __init__(self, *values: float):
        super().__init__(seed=0)
        self.values = list(values) or [0.0]
        self.calls = 0

    def double(self) -> float:
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


class CountingClock:
    """Clock returning a fixed instant and counting reads"""

    def __init__(self, instant: datetime):
        self.instant = instant
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.instant


@pytest.fixture(autouse=True)
def restore_clock():
    yield
    reset_clock()
