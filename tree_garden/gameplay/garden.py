"""
Main Garden class - owns the game state and every mutation of it.
NO UI DEPENDENCIES.

This is the central gameplay module. It can be fully tested
without any UI framework or real clock.
"""
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Union, TYPE_CHECKING

from .items import SeedType, ToolType, PLANT_SEEDS
from .entities import GardenEntity, Tree, Plant, Cloud, default_clouds, make_entity_id
from .inventory import Inventory, DailyReward, rewards_for_streak, is_reward_due
from .placement import Position, find_open_position
from .timers import TimerQueue, TimerHandle
from .constants import (
    CLOUD_COUNT, CLOUD_WATER_RADIUS, RAIN_DURATION_MS, GOLDEN_TREE_CHANCE,
    FERTILIZER_BOOST, PRUNING_BOOST, STARTING_WATER_LEVEL
)

if TYPE_CHECKING:
    from tree_garden.persistence.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


def wall_clock_ms() -> float:
    """Current wall-clock time in milliseconds."""
    return time.time() * 1000


@dataclass
class GameState:
    """Everything that gets persisted between sessions."""
    trees: List[Tree] = field(default_factory=list)
    plants: List[Plant] = field(default_factory=list)
    clouds: List[Cloud] = field(default_factory=default_clouds)
    inventory: Inventory = field(default_factory=Inventory)
    water_level: int = STARTING_WATER_LEVEL  # reserved, not used by any rule yet
    last_check_in: float = 0.0
    daily_streak: int = 0


def new_game_state(now: float) -> GameState:
    """A fresh garden. The first daily reward becomes available a day after `now`."""
    return GameState(last_check_in=now)


@dataclass
class GameEvent:
    """An event that occurred during an update (for UI to react to)."""
    pass


@dataclass
class RainStoppedEvent(GameEvent):
    """A cloud's rain animation finished."""
    cloud_id: str


@dataclass
class CloudReadyEvent(GameEvent):
    """A cloud's cooldown ran out and it can water again."""
    cloud_id: str


class Garden:
    """
    Controller for a single garden.

    The UI reads state through the query methods and changes it only through
    the action methods. Invalid actions (no seeds left, unknown cloud, ...)
    are silent no-ops.

    Usage:
        garden = Garden(gateway=gateway)
        garden.load()
        garden.plant_seed(SeedType.TREE, (1.0, 0.0, 2.0))
        while running:
            events = garden.update(delta_ms)
    """

    def __init__(
        self,
        state: Optional[GameState] = None,
        gateway: Optional["PersistenceGateway"] = None,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None
    ):
        self._clock = clock or wall_clock_ms
        self._rng = rng or random.Random()
        self.gateway = gateway

        self.state = state if state is not None else new_game_state(self.now())
        self._ensure_clouds()

        # Deferred tasks, e.g. ending a rain shower
        self.timers = TimerQueue()
        self._rain_timers: Dict[str, TimerHandle] = {}

        # Event queue for UI notifications
        self._events: List[GameEvent] = []

    def now(self) -> float:
        return self._clock()

    # =========================================================================
    # PLANTING
    # =========================================================================

    def plant_seed(self, seed_type: Union[SeedType, str], position: Position) -> Optional[GardenEntity]:
        """
        Plant one seed at `position`.
        Returns the new tree or plant, or None if nothing was planted.

        Spacing is not checked here; use placement.is_valid_position first.
        """
        seed = SeedType.parse(seed_type)
        if seed is None:
            logger.debug(f"Ignoring unknown seed type {seed_type!r}")
            return None

        position = tuple(position)
        if len(position) != 3:
            logger.debug(f"Ignoring position {position!r}, expected (x, y, z)")
            return None

        if not self.state.inventory.spend_seed(seed):
            logger.debug(f"No {seed.value} seeds left")
            return None

        now = self.now()
        entity: GardenEntity
        if seed == SeedType.TREE:
            entity = Tree(
                id=make_entity_id("tree", now),
                position=position,
                planted_at=now,
                last_watered=now,
                golden=self._rng.random() < GOLDEN_TREE_CHANCE,
            )
            self.state.trees.append(entity)
        else:
            entity = Plant(
                id=make_entity_id("plant", now),
                position=position,
                planted_at=now,
                last_watered=now,
                type=seed,
            )
            self.state.plants.append(entity)

        logger.info(f"Planted {entity.kind} {entity.id}" + (" (golden!)" if entity.is_golden else ""))
        return entity

    def plant_at_random(self, seed_type: Union[SeedType, str]) -> Optional[GardenEntity]:
        """Plant at a random position that keeps minimum spacing."""
        seed = SeedType.parse(seed_type)
        if seed is None or self.state.inventory.seed_count(seed) <= 0:
            return None

        occupied = [e.position for e in self.iter_entities()]
        position = find_open_position(occupied, rng=self._rng)
        if position is None:
            logger.warning("No open position left for planting")
            return None
        return self.plant_seed(seed, position)

    # =========================================================================
    # WATERING
    # =========================================================================

    def water_by_cloud(self, cloud_id: str) -> bool:
        """
        Rain from a cloud onto everything within CLOUD_WATER_RADIUS of it.
        Returns True if it rained, False if the cloud is unknown or cooling down.
        """
        cloud = self.get_cloud(cloud_id)
        if cloud is None:
            logger.debug(f"Ignoring unknown cloud {cloud_id!r}")
            return False
        if not cloud.is_ready:
            logger.debug(f"Cloud {cloud_id} cooling down ({cloud.cooldown:.0f}ms left)")
            return False

        cloud.start_rain()

        now = self.now()
        watered = 0
        for entity in self.iter_entities():
            if entity.is_within(cloud.position, CLOUD_WATER_RADIUS):
                entity.water(now)
                watered += 1

        # Replace any stale stop-rain task for this cloud
        stale = self._rain_timers.pop(cloud_id, None)
        if stale is not None:
            stale.cancel()
        self._rain_timers[cloud_id] = self.timers.call_later(
            RAIN_DURATION_MS, lambda: self._stop_rain(cloud_id)
        )

        logger.info(f"Cloud {cloud_id} watered {watered} plantings")
        return True

    def _stop_rain(self, cloud_id: str) -> None:
        self._rain_timers.pop(cloud_id, None)
        cloud = self.get_cloud(cloud_id)
        if cloud is not None:
            cloud.stop_rain()
            self._events.append(RainStoppedEvent(cloud_id))

    def tick_clouds(self, delta_ms: float) -> None:
        """Decay every cloud's cooldown by `delta_ms`."""
        for cloud in self.state.clouds:
            was_ready = cloud.is_ready
            cloud.tick(delta_ms)
            if cloud.is_ready and not was_ready:
                self._events.append(CloudReadyEvent(cloud.id))

    # =========================================================================
    # TOOLS
    # =========================================================================

    def use_tool(self, tool_type: Union[ToolType, str], target_id: Optional[str] = None) -> bool:
        """
        Use one tool on the whole garden.
        Returns True if a tool was used.

        `target_id` is accepted for the UI's convenience; every tool
        currently acts on all plantings.
        """
        tool = ToolType.parse(tool_type)
        if tool is None:
            logger.debug(f"Ignoring unknown tool {tool_type!r}")
            return False

        if not self.state.inventory.spend_tool(tool):
            logger.debug(f"No {tool.value} left")
            return False

        now = self.now()
        if tool == ToolType.WATERING_CAN:
            for entity in self.iter_entities():
                entity.water(now)
            logger.info("Watering can used: all plantings watered")

        elif tool == ToolType.FERTILIZER:
            for entity in self.iter_entities():
                entity.boost(FERTILIZER_BOOST)
            logger.info("Fertilizer used: all plantings boosted")

        elif tool == ToolType.PRUNING_SHEARS:
            # Neglected plantings are left as they are
            healthy = [e for e in self.iter_entities() if e.is_healthy(now)]
            for entity in healthy:
                entity.boost(PRUNING_BOOST)
            logger.info(f"Pruning shears used: {len(healthy)} healthy plantings boosted")

        return True

    # =========================================================================
    # DAILY REWARD
    # =========================================================================

    def check_daily_reward(self) -> bool:
        """True if a daily reward can be collected now."""
        return is_reward_due(self.state.last_check_in, self.now())

    def collect_daily_reward(self) -> Optional[DailyReward]:
        """
        Collect today's reward, extending the streak.
        Returns the reward granted, or None if it's too early.
        """
        now = self.now()
        if not is_reward_due(self.state.last_check_in, now):
            return None

        self.state.daily_streak += 1
        reward = rewards_for_streak(self.state.daily_streak)
        self.state.inventory.grant(reward)
        self.state.last_check_in = max(self.state.last_check_in, now)

        logger.info(f"Daily reward collected (streak {self.state.daily_streak})")
        return reward

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def save(self) -> bool:
        """Snapshot the game. Returns True if written."""
        if self.gateway is None:
            return False
        return self.gateway.save(self.state)

    def load(self) -> bool:
        """
        Replace the current state with the saved snapshot.
        Returns False, leaving state untouched, if there is nothing usable to load.
        """
        if self.gateway is None:
            return False

        loaded = self.gateway.load(defaults=new_game_state(self.now()))
        if loaded is None:
            return False

        self._cancel_rain_timers()
        self.state = loaded
        self._ensure_clouds()
        # Rain timers don't survive a reload
        for cloud in self.state.clouds:
            cloud.stop_rain()
        return True

    def reset_game(self) -> None:
        """Start over with a fresh garden and erase the saved snapshot."""
        self._cancel_rain_timers()
        self.state = new_game_state(self.now())
        if self.gateway is not None:
            self.gateway.erase()
        logger.info("Garden reset")

    def _cancel_rain_timers(self) -> None:
        for handle in self._rain_timers.values():
            handle.cancel()
        self._rain_timers.clear()

    def _ensure_clouds(self) -> None:
        if len(self.state.clouds) != CLOUD_COUNT:
            if self.state.clouds:
                logger.warning(
                    f"Expected {CLOUD_COUNT} clouds, found {len(self.state.clouds)}; "
                    f"restoring defaults"
                )
            self.state.clouds = default_clouds()

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    def update(self, delta_ms: float) -> List[GameEvent]:
        """
        Advance the garden by `delta_ms` milliseconds.
        Returns list of events that occurred.
        """
        self._events = []
        self.tick_clouds(delta_ms)
        self.timers.advance(delta_ms)
        return self._events

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    def iter_entities(self) -> Iterator[GardenEntity]:
        """Iterate over all trees, then all plants."""
        yield from self.state.trees
        yield from self.state.plants

    def get_entity(self, entity_id: str) -> Optional[GardenEntity]:
        for entity in self.iter_entities():
            if entity.id == entity_id:
                return entity
        return None

    def get_cloud(self, cloud_id: str) -> Optional[Cloud]:
        for cloud in self.state.clouds:
            if cloud.id == cloud_id:
                return cloud
        return None

    def get_entity_views(self, now: Optional[float] = None) -> List[dict]:
        """
        Plantings as plain dicts for the renderer.
        Returns list of {id, kind, position, growth, health, is_watered, is_golden}.
        """
        now = self.now() if now is None else now
        return [
            {
                'id': e.id,
                'kind': e.kind,
                'position': e.position,
                'growth': e.current_growth(now),
                'health': e.health(now).name,
                'is_watered': e.is_watered,
                'is_golden': e.is_golden,
            }
            for e in self.iter_entities()
        ]

    def get_cloud_views(self) -> List[dict]:
        """Clouds as plain dicts for the renderer."""
        return [
            {
                'id': c.id,
                'position': c.position,
                'is_raining': c.is_raining,
                'cooldown': c.cooldown,
                'ready': c.is_ready,
            }
            for c in self.state.clouds
        ]

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def simulate(self, ms: float, step_ms: float = 100.0) -> List[GameEvent]:
        """
        Run update() in `step_ms` steps for `ms` milliseconds.
        Returns all events that occurred.
        """
        all_events = []
        elapsed = 0.0
        while elapsed < ms:
            step = min(step_ms, ms - elapsed)
            all_events.extend(self.update(step))
            elapsed += step
        return all_events
