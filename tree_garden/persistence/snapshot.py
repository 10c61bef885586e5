"""
Snapshot schema for the persisted game state.

The snapshot is one JSON object with camelCase keys:
trees, plants, clouds, inventory, waterLevel, lastCheckIn, dailyStreak
and schemaVersion. Loading merges over defaults: any top-level field (or
inventory count) that is missing keeps its default, unknown fields are
ignored. A snapshot without schemaVersion is read as version 0, which has
the same shape as version 1.
"""

import logging

from pydantic import BaseModel, Field, NonNegativeInt, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from tree_garden.gameplay.entities import Cloud, Plant, Tree
from tree_garden.gameplay.garden import GameState
from tree_garden.gameplay.growth import clamp_growth
from tree_garden.gameplay.inventory import Inventory
from tree_garden.gameplay.items import PLANT_SEEDS, SeedType, ToolType
from tree_garden.persistence.errors import PersistenceCorrupt

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1


class SnapshotModel(BaseModel):
    """Common config: camelCase on disk, snake_case in Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"


class EntitySnapshot(SnapshotModel):
    """Fields shared by trees and plants."""

    id: str
    position: tuple[float, float, float]
    growth: float = 0.0
    planted_at: float
    last_watered: float
    is_watered: bool = False

    @field_validator("growth")
    @classmethod
    def clamp(cls, value: float) -> float:
        return clamp_growth(value)


class TreeSnapshot(EntitySnapshot):
    is_golden: bool = False


class PlantSnapshot(EntitySnapshot):
    type: SeedType

    @field_validator("type")
    @classmethod
    def must_be_plant(cls, value: SeedType) -> SeedType:
        if value not in PLANT_SEEDS:
            raise ValueError(f"{value.value} is not a plant type")
        return value


class CloudSnapshot(SnapshotModel):
    id: str
    position: tuple[float, float, float]
    is_raining: bool = False
    cooldown: float = Field(default=0.0, ge=0)


class InventorySnapshot(SnapshotModel):
    seeds: dict[str, NonNegativeInt] = Field(default_factory=dict)
    tools: dict[str, NonNegativeInt] = Field(default_factory=dict)
    special_items: list[str] = Field(default_factory=list)


class GameSnapshot(SnapshotModel):
    """The whole persisted aggregate. None means 'not present, keep default'."""

    schema_version: int = 0
    trees: list[TreeSnapshot] | None = None
    plants: list[PlantSnapshot] | None = None
    clouds: list[CloudSnapshot] | None = None
    inventory: InventorySnapshot | None = None
    water_level: int | None = None
    last_check_in: float | None = None
    daily_streak: NonNegativeInt | None = None


# =============================================================================
# STATE -> SNAPSHOT
# =============================================================================

def snapshot_from_state(state: GameState) -> GameSnapshot:
    """Build a complete snapshot of `state`."""
    return GameSnapshot(
        schema_version=CURRENT_SCHEMA_VERSION,
        trees=[
            TreeSnapshot(
                id=t.id,
                position=t.position,
                growth=t.growth,
                planted_at=t.planted_at,
                last_watered=t.last_watered,
                is_watered=t.is_watered,
                is_golden=t.golden,
            )
            for t in state.trees
        ],
        plants=[
            PlantSnapshot(
                id=p.id,
                position=p.position,
                growth=p.growth,
                planted_at=p.planted_at,
                last_watered=p.last_watered,
                is_watered=p.is_watered,
                type=p.type,
            )
            for p in state.plants
        ],
        clouds=[
            CloudSnapshot(
                id=c.id,
                position=c.position,
                is_raining=c.is_raining,
                cooldown=c.cooldown,
            )
            for c in state.clouds
        ],
        inventory=InventorySnapshot(
            seeds={seed.value: count for seed, count in state.inventory.seeds.items()},
            tools={tool.value: count for tool, count in state.inventory.tools.items()},
            special_items=list(state.inventory.special_items),
        ),
        water_level=state.water_level,
        last_check_in=state.last_check_in,
        daily_streak=state.daily_streak,
    )


def dump_snapshot(state: GameState) -> str:
    """
    Serialize `state` to snapshot JSON.
    Raises PersistenceCorrupt if the state doesn't fit the snapshot schema.
    """
    try:
        snapshot = snapshot_from_state(state)
    except ValidationError as e:
        raise PersistenceCorrupt(f"Game state can't be saved: {e}") from e
    return snapshot.model_dump_json(by_alias=True)


# =============================================================================
# SNAPSHOT -> STATE
# =============================================================================

def parse_snapshot(text: str) -> GameSnapshot:
    """
    Parse snapshot JSON.
    Raises PersistenceCorrupt if the text is not a valid snapshot.
    """
    try:
        return GameSnapshot.model_validate_json(text)
    except ValidationError as e:
        raise PersistenceCorrupt(f"Invalid game snapshot: {e}") from e


def _merge_inventory(snapshot: InventorySnapshot, defaults: Inventory) -> Inventory:
    seeds = dict(defaults.seeds)
    for key, count in snapshot.seeds.items():
        seed = SeedType.parse(key)
        if seed is None:
            logger.warning(f"Dropping unknown seed type {key!r} from snapshot")
            continue
        seeds[seed] = count

    tools = dict(defaults.tools)
    for key, count in snapshot.tools.items():
        tool = ToolType.parse(key)
        if tool is None:
            logger.warning(f"Dropping unknown tool {key!r} from snapshot")
            continue
        tools[tool] = count

    special_items = list(dict.fromkeys(snapshot.special_items))
    return Inventory(seeds=seeds, tools=tools, special_items=special_items)


def state_from_snapshot(snapshot: GameSnapshot, defaults: GameState) -> GameState:
    """Build a GameState from `snapshot`, falling back to `defaults` per field."""
    state = GameState(
        trees=defaults.trees,
        plants=defaults.plants,
        clouds=defaults.clouds,
        inventory=defaults.inventory,
        water_level=defaults.water_level,
        last_check_in=defaults.last_check_in,
        daily_streak=defaults.daily_streak,
    )

    if snapshot.trees is not None:
        state.trees = [
            Tree(
                id=t.id,
                position=t.position,
                growth=t.growth,
                planted_at=t.planted_at,
                last_watered=t.last_watered,
                is_watered=t.is_watered,
                golden=t.is_golden,
            )
            for t in snapshot.trees
        ]
    if snapshot.plants is not None:
        state.plants = [
            Plant(
                id=p.id,
                position=p.position,
                growth=p.growth,
                planted_at=p.planted_at,
                last_watered=p.last_watered,
                is_watered=p.is_watered,
                type=p.type,
            )
            for p in snapshot.plants
        ]
    if snapshot.clouds is not None:
        state.clouds = [
            Cloud(id=c.id, position=c.position, is_raining=c.is_raining, cooldown=c.cooldown)
            for c in snapshot.clouds
        ]
    if snapshot.inventory is not None:
        state.inventory = _merge_inventory(snapshot.inventory, defaults.inventory)
    if snapshot.water_level is not None:
        state.water_level = snapshot.water_level
    if snapshot.last_check_in is not None:
        state.last_check_in = snapshot.last_check_in
    if snapshot.daily_streak is not None:
        state.daily_streak = snapshot.daily_streak

    return state
