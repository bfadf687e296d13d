"""Procedural floor generation."""

from depthcrawl.generation.floor_gen import STANDARD_ROOM_TYPES, FloorGenerator
from depthcrawl.generation.flavor import lore_fragment_for_level, theme_for_level

__all__ = [
    "FloorGenerator",
    "STANDARD_ROOM_TYPES",
    "lore_fragment_for_level",
    "theme_for_level",
]
