"""
Tests for planting positions and spacing.
"""
import math
import random

import pytest
from tree_garden.gameplay.placement import (
    random_position, is_valid_position, find_open_position, horizontal_distance,
    is_inside_garden
)


class TestRandomPosition:
    """Tests for random_position."""

    def test_on_ground_within_radius(self):
        """Positions sit at y=0 inside the radius."""
        rng = random.Random(42)
        for _ in range(200):
            x, y, z = random_position(8.0, rng)
            assert y == 0.0
            assert math.hypot(x, z) < 8.0

    def test_seeded_is_repeatable(self):
        assert random_position(8.0, random.Random(7)) == random_position(8.0, random.Random(7))


class TestIsValidPosition:
    """Tests for spacing validation."""

    def test_too_close(self):
        """Distance 1.0 is under the 1.5 minimum."""
        assert not is_valid_position((1.0, 0.0, 0.0), [(0.0, 0.0, 0.0)], 1.5)

    def test_far_enough(self):
        """Distance 2.0 clears the 1.5 minimum."""
        assert is_valid_position((2.0, 0.0, 0.0), [(0.0, 0.0, 0.0)], 1.5)

    def test_exact_minimum_is_valid(self):
        assert is_valid_position((0.0, 0.0, 1.5), [(0.0, 0.0, 0.0)], 1.5)

    def test_height_is_ignored(self):
        """Only x and z count toward spacing."""
        assert not is_valid_position((0.0, 5.0, 0.0), [(0.0, 0.0, 0.0)])
        assert horizontal_distance((3.0, 9.0, 4.0), (0.0, 0.0, 0.0)) == pytest.approx(5.0)

    def test_empty_garden(self):
        assert is_valid_position((0.0, 0.0, 0.0), [])

    def test_checks_every_position(self):
        existing = [(5.0, 0.0, 5.0), (0.5, 0.0, 0.0)]
        assert not is_valid_position((0.0, 0.0, 0.0), existing)


class TestFindOpenPosition:
    """Tests for find_open_position."""

    def test_finds_spaced_position(self):
        rng = random.Random(1)
        existing = [(0.0, 0.0, 0.0), (2.0, 0.0, 2.0)]
        position = find_open_position(existing, rng=rng)
        assert position is not None
        assert is_valid_position(position, existing)

    def test_gives_up_when_crowded(self):
        """A tiny radius around an occupied center has no room."""
        position = find_open_position(
            [(0.0, 0.0, 0.0)], radius=0.5, max_attempts=20, rng=random.Random(3)
        )
        assert position is None


class TestIsInsideGarden:
    def test_border_is_inclusive(self):
        assert is_inside_garden((10.0, 0.0, -10.0))
        assert is_inside_garden((0.0, 0.0, 0.0))

    def test_outside(self):
        assert not is_inside_garden((10.5, 0.0, 0.0))
        assert not is_inside_garden((0.0, 0.0, -11.0))
