"""
Pytest fixtures for Tree Garden tests.
"""

import random

import pytest

from tree_garden.gameplay.constants import DAY_MS
from tree_garden.gameplay.garden import Garden, new_game_state
from tree_garden.persistence.gateway import PersistenceGateway
from tree_garden.persistence.store import MemoryStore

# Arbitrary fixed start time (ms)
START_MS = 1_700_000_000_000.0


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: float = START_MS):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms

    def advance_days(self, days: float) -> None:
        self.now += days * DAY_MS


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def gateway(store: MemoryStore) -> PersistenceGateway:
    return PersistenceGateway(store)


@pytest.fixture
def garden(clock: FakeClock, gateway: PersistenceGateway) -> Garden:
    """A fresh garden on a fake clock that never rolls golden trees."""
    return Garden(gateway=gateway, clock=clock, rng=FixedRandom(0.99))


@pytest.fixture
def empty_garden(clock: FakeClock) -> Garden:
    """A garden with no persistence attached."""
    return Garden(state=new_game_state(clock()), clock=clock, rng=FixedRandom(0.99))
