"""
Garden entities: Tree, Plant, Cloud.
NO UI DEPENDENCIES.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List
from uuid import uuid4

from .items import SeedType, HealthBand, PlantProfile, PLANT_PROFILES
from .growth import clamp_growth, displayed_growth, is_healthy, health_color
from .placement import Position, horizontal_distance
from .constants import (
    TREE_GROWTH_RATE, PLANT_GROWTH_RATE, CLOUD_COOLDOWN_MS,
    DEFAULT_CLOUD_POSITIONS
)


def make_entity_id(prefix: str, now: float) -> str:
    """Unique id of the form '<prefix>-<ms timestamp>-<random hex>'."""
    return f"{prefix}-{int(now)}-{uuid4().hex[:8]}"


@dataclass
class GardenEntity(ABC):
    """
    Base class for anything planted in the garden.

    `growth` is a stored floor raised by tools; what the player sees is
    the larger of it and the growth computed from timestamps.
    """
    id: str
    position: Position
    growth: float = 0.0
    planted_at: float = 0.0
    last_watered: float = 0.0
    is_watered: bool = False

    @property
    @abstractmethod
    def base_rate(self) -> float:
        """Growth rate fed to the growth model."""
        pass

    @property
    @abstractmethod
    def kind(self) -> str:
        """Seed type name, used by renderers and views."""
        pass

    @property
    def is_golden(self) -> bool:
        return False

    def water(self, now: float) -> None:
        """Mark as watered at `now`."""
        self.last_watered = now
        self.is_watered = True

    def boost(self, amount: float) -> None:
        """Raise stored growth, clamped to 1."""
        self.growth = clamp_growth(self.growth + amount)

    def current_growth(self, now: float) -> float:
        return displayed_growth(
            self.growth, self.planted_at, self.last_watered, now, self.base_rate
        )

    def is_healthy(self, now: float) -> bool:
        return is_healthy(self.last_watered, now)

    def health(self, now: float) -> HealthBand:
        return health_color(self.last_watered, now, self.is_golden)

    def is_within(self, center: Position, radius: float) -> bool:
        """True if within `radius` of `center` in the horizontal plane (inclusive)."""
        return horizontal_distance(self.position, center) <= radius


@dataclass
class Tree(GardenEntity):
    """A tree. A small share of trees are golden."""
    golden: bool = False

    @property
    def base_rate(self) -> float:
        return TREE_GROWTH_RATE

    @property
    def kind(self) -> str:
        return SeedType.TREE.value

    @property
    def is_golden(self) -> bool:
        return self.golden


@dataclass
class Plant(GardenEntity):
    """A flower, bush or small tree."""
    type: SeedType = SeedType.FLOWER

    @property
    def base_rate(self) -> float:
        # Shared by every subtype, see PLANT_PROFILES for per-type render hints
        return PLANT_GROWTH_RATE

    @property
    def kind(self) -> str:
        return self.type.value

    @property
    def profile(self) -> PlantProfile:
        return PLANT_PROFILES[self.type]


@dataclass
class Cloud:
    """
    A rain cloud. Watering starts a cooldown that gates reuse;
    `is_raining` is a separate, shorter-lived visual flag.
    """
    id: str
    position: Position
    is_raining: bool = False
    cooldown: float = 0.0

    @property
    def is_ready(self) -> bool:
        """True if the cloud can water again."""
        return self.cooldown <= 0

    def start_rain(self) -> None:
        self.is_raining = True
        self.cooldown = CLOUD_COOLDOWN_MS

    def stop_rain(self) -> None:
        self.is_raining = False

    def tick(self, delta_ms: float) -> None:
        """Decay cooldown toward zero."""
        self.cooldown = max(0.0, self.cooldown - delta_ms)


def default_clouds() -> List[Cloud]:
    """The fixed set of clouds every garden starts with."""
    return [
        Cloud(id=f"cloud-{i + 1}", position=position)
        for i, position in enumerate(DEFAULT_CLOUD_POSITIONS)
    ]
