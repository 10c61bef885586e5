"""
Tests for inventory and daily reward curves.
"""
import dataclasses

import pytest
from tree_garden.gameplay.inventory import (
    Inventory, DailyReward, rewards_for_streak, is_reward_due,
    STARTING_SEEDS, STARTING_TOOLS
)
from tree_garden.gameplay.items import SeedType, ToolType
from tree_garden.gameplay.constants import DAY_MS, HOUR_MS


class TestRewardsForStreak:
    """Tests for the reward curve."""

    def test_first_day(self):
        reward = rewards_for_streak(1)
        assert reward.seeds == {
            SeedType.TREE: 2,
            SeedType.FLOWER: 5,
            SeedType.BUSH: 3,
            SeedType.SMALL_TREE: 1,
        }
        assert reward.tools == {
            ToolType.WATERING_CAN: 1,
            ToolType.FERTILIZER: 0,
            ToolType.PRUNING_SHEARS: 0,
        }

    def test_two_weeks(self):
        reward = rewards_for_streak(14)
        assert reward.seeds[SeedType.TREE] == 5        # min(2 + 4, 5)
        assert reward.seeds[SeedType.FLOWER] == 10     # min(5 + 7, 10)
        assert reward.seeds[SeedType.BUSH] == 8        # min(3 + 7, 8)
        assert reward.seeds[SeedType.SMALL_TREE] == 3  # min(1 + 2, 3)
        assert reward.tools[ToolType.WATERING_CAN] == 3
        assert reward.tools[ToolType.FERTILIZER] == 1
        assert reward.tools[ToolType.PRUNING_SHEARS] == 1

    def test_caps(self):
        """A very long streak stays at the caps."""
        reward = rewards_for_streak(100)
        assert reward.seeds[SeedType.TREE] == 5
        assert reward.seeds[SeedType.FLOWER] == 10
        assert reward.seeds[SeedType.BUSH] == 8
        assert reward.seeds[SeedType.SMALL_TREE] == 3
        assert reward.tools[ToolType.WATERING_CAN] == 3
        assert reward.tools[ToolType.FERTILIZER] == 2
        assert reward.tools[ToolType.PRUNING_SHEARS] == 1

    def test_non_decreasing(self):
        """No count ever drops as the streak grows."""
        previous = rewards_for_streak(0)
        for streak in range(1, 60):
            current = rewards_for_streak(streak)
            for seed in SeedType:
                assert current.seeds[seed] >= previous.seeds[seed]
            for tool in ToolType:
                assert current.tools[tool] >= previous.tools[tool]
            previous = current


class TestRewardDue:
    def test_due_after_a_day(self):
        assert is_reward_due(0, DAY_MS)
        assert not is_reward_due(0, DAY_MS - 1)
        assert not is_reward_due(0, 23 * HOUR_MS)


class TestInventory:
    """Tests for Inventory counts."""

    def test_starting_counts(self):
        inventory = Inventory()
        assert inventory.seeds == STARTING_SEEDS
        assert inventory.tools == STARTING_TOOLS
        assert inventory.special_items == []

    def test_default_is_a_copy(self):
        """Each inventory gets its own dicts."""
        a = Inventory()
        a.spend_seed(SeedType.TREE)
        assert Inventory().seed_count(SeedType.TREE) == STARTING_SEEDS[SeedType.TREE]

    def test_spend_seed(self):
        inventory = Inventory()
        assert inventory.spend_seed(SeedType.FLOWER)
        assert inventory.seed_count(SeedType.FLOWER) == 9

    def test_spend_rejects_negative(self):
        """Spending from zero is refused and leaves the count at zero."""
        inventory = Inventory.empty()
        assert not inventory.spend_seed(SeedType.TREE)
        assert not inventory.spend_tool(ToolType.FERTILIZER)
        assert inventory.seed_count(SeedType.TREE) == 0
        assert inventory.tool_count(ToolType.FERTILIZER) == 0

    def test_add_rejects_negative_result(self):
        inventory = Inventory.empty()
        inventory.add_tools(ToolType.WATERING_CAN, 2)
        assert not inventory.add_tools(ToolType.WATERING_CAN, -3)
        assert inventory.tool_count(ToolType.WATERING_CAN) == 2

    def test_grant_is_additive(self):
        inventory = Inventory()
        inventory.grant(rewards_for_streak(1))
        assert inventory.seed_count(SeedType.TREE) == 5 + 2
        assert inventory.seed_count(SeedType.FLOWER) == 10 + 5
        assert inventory.tool_count(ToolType.WATERING_CAN) == 3 + 1
        assert inventory.tool_count(ToolType.FERTILIZER) == 2

    def test_special_items_are_a_set(self):
        inventory = Inventory()
        assert inventory.add_special_item("golden_acorn")
        assert not inventory.add_special_item("golden_acorn")
        assert inventory.has_special_item("golden_acorn")
        assert inventory.special_items == ["golden_acorn"]

    def test_reward_is_frozen(self):
        reward = DailyReward(seeds={}, tools={})
        with pytest.raises(dataclasses.FrozenInstanceError):
            reward.seeds = {SeedType.TREE: 1}
