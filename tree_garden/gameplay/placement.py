"""
Planting position generation and spacing checks.
NO UI DEPENDENCIES.

Coordinate system:
- y is up; plantings sit on the ground at y = 0
- spacing is measured in the horizontal (x, z) plane only
"""
import math
import random
from typing import Iterable, Optional, Tuple

from .constants import (
    PLANTING_RADIUS, MIN_PLANT_DISTANCE, MAX_PLACEMENT_ATTEMPTS, GARDEN_HALF_EXTENT
)

Position = Tuple[float, float, float]


def horizontal_distance(a: Position, b: Position) -> float:
    """Euclidean distance ignoring height."""
    return math.hypot(a[0] - b[0], a[2] - b[2])


def random_position(radius: float = PLANTING_RADIUS, rng: Optional[random.Random] = None) -> Position:
    """
    Random ground position within `radius` of the garden center.

    Angle and distance are both uniform, so positions cluster toward the
    center rather than spreading evenly over the disc.
    """
    rng = rng or random
    angle = rng.random() * math.pi * 2
    distance = rng.random() * radius
    return (math.cos(angle) * distance, 0.0, math.sin(angle) * distance)


def is_inside_garden(position: Position, half_extent: float = GARDEN_HALF_EXTENT) -> bool:
    """True if `position` lies within the square garden border."""
    return abs(position[0]) <= half_extent and abs(position[2]) <= half_extent


def is_valid_position(
    candidate: Position,
    existing: Iterable[Position],
    min_distance: float = MIN_PLANT_DISTANCE
) -> bool:
    """True if `candidate` is at least `min_distance` from every existing position."""
    for other in existing:
        if horizontal_distance(candidate, other) < min_distance:
            return False
    return True


def find_open_position(
    existing: Iterable[Position],
    radius: float = PLANTING_RADIUS,
    min_distance: float = MIN_PLANT_DISTANCE,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
    rng: Optional[random.Random] = None
) -> Optional[Position]:
    """
    Draw random positions until one respects spacing.
    Returns None if the garden is too crowded after `max_attempts` draws.
    """
    occupied = list(existing)
    for _ in range(max_attempts):
        candidate = random_position(radius, rng)
        if is_valid_position(candidate, occupied, min_distance):
            return candidate
    return None
