"""Room graph model -- floors, rooms, exits and their enumerations."""

from depthcrawl.world.enums import (
    Direction,
    DungeonEventType,
    FeatureInteraction,
    LoreFragmentType,
    RoomType,
    SealType,
    Theme,
)
from depthcrawl.world.floor import DungeonFloor
from depthcrawl.world.room import Exit, Room, RoomFeature

__all__ = [
    "Direction",
    "DungeonEventType",
    "DungeonFloor",
    "Exit",
    "FeatureInteraction",
    "LoreFragmentType",
    "Room",
    "RoomFeature",
    "RoomType",
    "SealType",
    "Theme",
]
