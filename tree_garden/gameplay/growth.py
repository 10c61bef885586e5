"""
Growth and health model.
NO UI DEPENDENCIES.

Pure functions of timestamps (milliseconds). The render layer calls these
once per entity per frame, so they never touch game state.
"""
from .items import HealthBand
from .constants import (
    FULL_GROWTH_PERIOD_MS, WATERING_BONUS_WINDOW_MS, NEGLECT_THRESHOLD_MS,
    WATERING_BONUS, NEGLECT_PENALTY, DEFAULT_GROWTH_RATE
)


def clamp_growth(value: float) -> float:
    """Clamp a growth fraction into [0, 1]."""
    return max(0.0, min(1.0, value))


def compute_growth(
    planted_at: float,
    last_watered: float,
    now: float,
    base_rate: float = DEFAULT_GROWTH_RATE
) -> float:
    """
    Growth fraction computed live from timestamps.

    A base rate of 1.0 reaches full size one week after planting. Recent
    watering multiplies growth by WATERING_BONUS, neglect by NEGLECT_PENALTY.
    The bonus is applied before the penalty; both are checked independently.
    """
    since_planted = now - planted_at
    since_watered = now - last_watered

    growth = min(1.0, (since_planted / FULL_GROWTH_PERIOD_MS) * base_rate)

    if since_watered < WATERING_BONUS_WINDOW_MS:
        growth *= WATERING_BONUS

    if since_watered > NEGLECT_THRESHOLD_MS:
        growth *= NEGLECT_PENALTY

    # Lower bound covers a planted_at ahead of the clock
    return clamp_growth(growth)


def displayed_growth(
    stored: float,
    planted_at: float,
    last_watered: float,
    now: float,
    base_rate: float = DEFAULT_GROWTH_RATE
) -> float:
    """Stored growth acts as a floor under the live value."""
    return max(stored, compute_growth(planted_at, last_watered, now, base_rate))


def is_healthy(last_watered: float, now: float) -> bool:
    """True if watered within the neglect threshold."""
    return now - last_watered < NEGLECT_THRESHOLD_MS


def health_color(last_watered: float, now: float, is_golden: bool = False) -> HealthBand:
    """Health band for display. Golden trees always show gold."""
    if is_golden:
        return HealthBand.GOLDEN

    since_watered = now - last_watered
    if since_watered < WATERING_BONUS_WINDOW_MS:
        return HealthBand.HEALTHY
    elif since_watered < NEGLECT_THRESHOLD_MS:
        return HealthBand.NORMAL
    return HealthBand.UNHEALTHY
