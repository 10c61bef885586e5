#!/usr/bin/env python3
"""
Tree Garden - Main Entry Point

Plant trees and flowers, water them with rain clouds and collect a
daily reward to keep your streak going. Rendering lives elsewhere; this
entry point runs the game headless and exposes every player action.

Usage:
    tree-garden run                  Run the game loop (Ctrl+C to save and quit)
    tree-garden status               Show inventory, streak and plantings
    tree-garden plant SEED [X Z]     Plant a seed (random open spot if no position)
    tree-garden water CLOUD_ID       Rain from a cloud
    tree-garden use-tool TOOL        Use a watering_can, fertilizer or pruning_shears
    tree-garden collect              Collect the daily reward
    tree-garden reset                Start over and erase the saved game
"""
import argparse
import asyncio
import logging
import sys

from tree_garden.config import Settings, get_settings
from tree_garden.gameplay.garden import Garden, GameEvent
from tree_garden.gameplay.items import SeedType, ToolType
from tree_garden.gameplay.entities import Plant
from tree_garden.gameplay.placement import is_inside_garden, is_valid_position
from tree_garden.persistence.gateway import create_gateway
from tree_garden.tick_engine.engine import GameLoop

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug_mode else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tree-garden",
        description="Grow a garden with rain clouds and daily rewards",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("run", help="Run the game loop until interrupted")
    subparsers.add_parser("status", help="Show inventory, streak and plantings")

    plant = subparsers.add_parser("plant", help="Plant a seed")
    plant.add_argument("seed", choices=[s.value for s in SeedType])
    plant.add_argument("x", type=float, nargs="?", help="x position (omit for a random spot)")
    plant.add_argument("z", type=float, nargs="?", help="z position")

    water = subparsers.add_parser("water", help="Rain from a cloud")
    water.add_argument("cloud_id", help="e.g. cloud-1")

    tool = subparsers.add_parser("use-tool", help="Use a tool on the whole garden")
    tool.add_argument("tool", choices=[t.value for t in ToolType])

    subparsers.add_parser("collect", help="Collect the daily reward")
    subparsers.add_parser("reset", help="Start over and erase the saved game")

    return parser


def print_status(garden: Garden) -> None:
    """Print a plain-text summary of the garden."""
    state = garden.state
    print(f"Daily streak: {state.daily_streak}")
    print(f"Daily reward available: {'yes' if garden.check_daily_reward() else 'no'}")

    print("Seeds:  " + ", ".join(f"{s.value}={state.inventory.seed_count(s)}" for s in SeedType))
    print("Tools:  " + ", ".join(f"{t.value}={state.inventory.tool_count(t)}" for t in ToolType))
    if state.inventory.special_items:
        print("Special: " + ", ".join(state.inventory.special_items))

    for cloud in garden.get_cloud_views():
        status = "ready" if cloud['ready'] else f"cooldown {cloud['cooldown']:.0f}ms"
        print(f"  {cloud['id']:<10} {status}")

    views = garden.get_entity_views()
    print(f"Plantings: {len(views)}")
    for view in views:
        x, _, z = view['position']
        extra = " golden" if view['is_golden'] else ""
        entity = garden.get_entity(view['id'])
        if isinstance(entity, Plant):
            extra += f"  height {view['growth'] * entity.profile.max_height:.2f}"
        print(
            f"  {view['kind']:<10} ({x:5.1f}, {z:5.1f})  "
            f"growth {view['growth']:.0%}  {view['health'].lower()}{extra}"
        )


def _log_events(events: list[GameEvent]) -> None:
    for event in events:
        logger.debug(f"Event: {event}")


async def run_loop(garden: Garden, settings: Settings) -> None:
    """
    Run the game loop until cancelled, then save.
    A failing frame stops the loop and its exception propagates from here.
    """
    game_loop = GameLoop(
        garden,
        frame_interval_s=1 / settings.frame_rate,
        autosave_interval_s=settings.autosave_interval_seconds,
        on_events=_log_events,
    )
    await game_loop.start()
    try:
        await game_loop.wait_stopped()
    finally:
        await game_loop.stop(save=True)


def run_command(garden: Garden, args: argparse.Namespace) -> int:
    """Apply a one-shot command. Returns the process exit code."""
    if args.command == "status":
        print_status(garden)
        return 0

    if args.command == "plant":
        if args.x is None or args.z is None:
            planted = garden.plant_at_random(args.seed)
        else:
            position = (args.x, 0.0, args.z)
            if not is_inside_garden(position):
                print("That spot is outside the garden.")
                return 1
            occupied = [e.position for e in garden.iter_entities()]
            if not is_valid_position(position, occupied):
                print("Too close to another planting.")
                return 1
            planted = garden.plant_seed(args.seed, position)
        if planted is None:
            print(f"Could not plant {args.seed}.")
            return 1
        print(f"Planted {planted.kind} {planted.id}" + (" - it's golden!" if planted.is_golden else ""))

    elif args.command == "water":
        if not garden.water_by_cloud(args.cloud_id):
            print(f"{args.cloud_id} can't rain right now.")
            return 1
        print(f"{args.cloud_id} is raining.")

    elif args.command == "use-tool":
        if not garden.use_tool(args.tool):
            print(f"No {args.tool} left.")
            return 1
        print(f"Used {args.tool}.")

    elif args.command == "collect":
        reward = garden.collect_daily_reward()
        if reward is None:
            print("Come back tomorrow for your next reward.")
            return 1
        gained = [f"{n} {s.value}" for s, n in reward.seeds.items() if n]
        gained += [f"{n} {t.value}" for t, n in reward.tools.items() if n]
        print(f"Streak {garden.state.daily_streak}! Received " + ", ".join(gained) + ".")

    elif args.command == "reset":
        garden.reset_game()
        print("Garden reset.")
        return 0

    garden.save()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    garden = Garden(gateway=create_gateway(settings))
    garden.load()

    if args.command == "run":
        try:
            asyncio.run(run_loop(garden, settings))
        except KeyboardInterrupt:
            pass
        return 0

    return run_command(garden, args)


if __name__ == "__main__":
    sys.exit(main())
