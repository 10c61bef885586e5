"""
Tree Garden - plant trees and flowers, water them with rain clouds,
and keep a daily check-in streak going.
"""

__version__ = "0.1.0"
