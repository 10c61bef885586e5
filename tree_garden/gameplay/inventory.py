"""
Inventory and daily rewards.
NO UI DEPENDENCIES.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from .items import SeedType, ToolType
from .constants import DAILY_REWARD_INTERVAL_MS

# Counts a new garden starts with
STARTING_SEEDS = {
    SeedType.TREE: 5,
    SeedType.FLOWER: 10,
    SeedType.BUSH: 8,
    SeedType.SMALL_TREE: 3,
}
STARTING_TOOLS = {
    ToolType.WATERING_CAN: 3,
    ToolType.FERTILIZER: 2,
    ToolType.PRUNING_SHEARS: 1,
}


@dataclass(frozen=True)
class DailyReward:
    """Seeds and tools granted for one daily check-in."""
    seeds: Mapping[SeedType, int]
    tools: Mapping[ToolType, int]


def rewards_for_streak(streak: int) -> DailyReward:
    """
    Reward for reaching `streak` consecutive check-ins.
    Every count is a capped step function, non-decreasing in streak.
    """
    return DailyReward(
        seeds={
            SeedType.TREE: min(2 + streak // 3, 5),
            SeedType.FLOWER: min(5 + streak // 2, 10),
            SeedType.BUSH: min(3 + streak // 2, 8),
            SeedType.SMALL_TREE: min(1 + streak // 5, 3),
        },
        tools={
            ToolType.WATERING_CAN: min(1 + streak // 7, 3),
            ToolType.FERTILIZER: min(streak // 10, 2),
            ToolType.PRUNING_SHEARS: min(streak // 14, 1),
        },
    )


def is_reward_due(last_check_in: float, now: float) -> bool:
    """True once a full reward interval has passed since the last check-in."""
    return now - last_check_in >= DAILY_REWARD_INTERVAL_MS


@dataclass
class Inventory:
    """
    Seed and tool counts plus special items.
    Counts never go negative: operations that would do so are rejected.
    """
    seeds: Dict[SeedType, int] = field(default_factory=lambda: dict(STARTING_SEEDS))
    tools: Dict[ToolType, int] = field(default_factory=lambda: dict(STARTING_TOOLS))
    special_items: List[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Inventory":
        return cls(
            seeds={s: 0 for s in SeedType},
            tools={t: 0 for t in ToolType},
        )

    def seed_count(self, seed: SeedType) -> int:
        return self.seeds.get(seed, 0)

    def tool_count(self, tool: ToolType) -> int:
        return self.tools.get(tool, 0)

    def spend_seed(self, seed: SeedType) -> bool:
        """
        Use one seed.
        Returns True if spent, False if none left.
        """
        return self._adjust(self.seeds, seed, -1)

    def spend_tool(self, tool: ToolType) -> bool:
        """
        Use one tool.
        Returns True if spent, False if none left.
        """
        return self._adjust(self.tools, tool, -1)

    def add_seeds(self, seed: SeedType, amount: int) -> bool:
        return self._adjust(self.seeds, seed, amount)

    def add_tools(self, tool: ToolType, amount: int) -> bool:
        return self._adjust(self.tools, tool, amount)

    def grant(self, reward: DailyReward) -> None:
        """Add every count in `reward` to the inventory."""
        for seed, amount in reward.seeds.items():
            self.add_seeds(seed, amount)
        for tool, amount in reward.tools.items():
            self.add_tools(tool, amount)

    def add_special_item(self, item_id: str) -> bool:
        """
        Add a special item.
        Returns False if already owned.
        """
        if item_id in self.special_items:
            return False
        self.special_items.append(item_id)
        return True

    def has_special_item(self, item_id: str) -> bool:
        return item_id in self.special_items

    @staticmethod
    def _adjust(counts: Dict, key, delta: int) -> bool:
        new_value = counts.get(key, 0) + delta
        if new_value < 0:
            return False
        counts[key] = new_value
        return True
