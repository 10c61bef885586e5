"""
Game loop driver for Tree Garden.
"""

from tree_garden.tick_engine.engine import GameLoop

__all__ = ["GameLoop"]
