"""
Seed, tool and health types.
NO UI DEPENDENCIES.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Dict, Optional, Union


class SeedType(Enum):
    """Everything that can be planted. Values double as snapshot keys."""
    TREE = "tree"
    FLOWER = "flower"
    BUSH = "bush"
    SMALL_TREE = "small_tree"

    @classmethod
    def parse(cls, value: Union["SeedType", str]) -> Optional["SeedType"]:
        """Return the matching seed type, or None if unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class ToolType(Enum):
    """Consumable garden tools. Values double as snapshot keys."""
    WATERING_CAN = "watering_can"
    FERTILIZER = "fertilizer"
    PRUNING_SHEARS = "pruning_shears"

    @classmethod
    def parse(cls, value: Union["ToolType", str]) -> Optional["ToolType"]:
        """Return the matching tool type, or None if unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# Seeds that grow into a Plant rather than a Tree
PLANT_SEEDS = frozenset({SeedType.FLOWER, SeedType.BUSH, SeedType.SMALL_TREE})


class HealthBand(Enum):
    """Display category for an entity, banded on time since watering."""
    GOLDEN = "#FFD700"
    HEALTHY = "#4ADE80"     # watered within a day
    NORMAL = "#84CC16"      # watered within two days
    UNHEALTHY = "#EF4444"   # neglected

    @property
    def hex(self) -> str:
        return self.value


@dataclass(frozen=True)
class PlantProfile:
    """Rendering hints for a plant subtype."""
    max_height: float
    growth_rate: float


# Per-subtype profiles. Growth itself uses PLANT_GROWTH_RATE for every subtype;
# growth_rate here only feeds the renderer's animation speed.
PLANT_PROFILES: Dict[SeedType, PlantProfile] = {
    SeedType.FLOWER: PlantProfile(max_height=0.5, growth_rate=0.8),
    SeedType.BUSH: PlantProfile(max_height=1.0, growth_rate=0.6),
    SeedType.SMALL_TREE: PlantProfile(max_height=1.5, growth_rate=0.4),
}
