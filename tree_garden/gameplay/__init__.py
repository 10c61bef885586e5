"""
Gameplay core for Tree Garden.
NO UI DEPENDENCIES.
"""

from tree_garden.gameplay.garden import (
    Garden,
    GameState,
    GameEvent,
    RainStoppedEvent,
    CloudReadyEvent,
    new_game_state,
)
from tree_garden.gameplay.items import SeedType, ToolType, HealthBand

__all__ = [
    "Garden",
    "GameState",
    "GameEvent",
    "RainStoppedEvent",
    "CloudReadyEvent",
    "new_game_state",
    "SeedType",
    "ToolType",
    "HealthBand",
]
