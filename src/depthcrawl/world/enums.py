"""Enumerations shared by the room graph, the generator and the session."""

from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Compass direction of an exit."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def short(self) -> str:
        """Single-letter form used by the command parser and the map."""
        return self.value[0].upper()


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


class Theme(str, Enum):
    """Environmental skin applied uniformly to every room of a floor."""

    CATACOMBS = "catacombs"
    SEWERS = "sewers"
    CAVERNS = "caverns"
    ANCIENT_RUINS = "ancient_ruins"
    DEMON_LAIR = "demon_lair"
    FROZEN_DEPTHS = "frozen_depths"
    VOLCANIC_PIT = "volcanic_pit"
    ABYSSAL_VOID = "abyssal_void"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class RoomType(str, Enum):
    """Structural kind of a room."""

    CORRIDOR = "corridor"
    CHAMBER = "chamber"
    HALL = "hall"
    ALCOVE = "alcove"
    SHRINE = "shrine"
    CRYPT = "crypt"
    PUZZLE_ROOM = "puzzle_room"
    RIDDLE_GATE = "riddle_gate"
    SECRET_VAULT = "secret_vault"
    LORE_LIBRARY = "lore_library"
    MEDITATION_CHAMBER = "meditation_chamber"
    ARENA_ROOM = "arena_room"
    MEMORY_FRAGMENT = "memory_fragment"
    BOSS_ANTECHAMBER = "boss_antechamber"
    BOSS_LAIR = "boss_lair"


class FeatureInteraction(str, Enum):
    """How the player interacts with a room feature."""

    EXAMINE = "examine"
    OPEN = "open"
    SEARCH = "search"
    READ = "read"
    TAKE = "take"
    USE = "use"
    BREAK = "break"
    ENTER = "enter"


class DungeonEventType(str, Enum):
    """Kind of event a room may hold."""

    NONE = "none"
    TREASURE_CHEST = "treasure_chest"
    MERCHANT = "merchant"
    SHRINE = "shrine"
    TRAP = "trap"
    NPC_ENCOUNTER = "npc_encounter"
    PUZZLE = "puzzle"
    REST_SPOT = "rest_spot"
    MYSTERY_EVENT = "mystery_event"
    RIDDLE = "riddle"
    LORE_DISCOVERY = "lore_discovery"
    MEMORY_FLASH = "memory_flash"


class SealType(str, Enum):
    """The seven narrative seals.  Only the discovery trigger is modelled."""

    CREATION = "creation"
    FIRST_WAR = "first_war"
    CORRUPTION = "corruption"
    IMPRISONMENT = "imprisonment"
    PROPHECY = "prophecy"
    REGRET = "regret"
    TRUTH = "truth"


class LoreFragmentType(str, Enum):
    """Lore fragment found in a lore library, chosen by depth."""

    OCEAN_ORIGIN = "ocean_origin"
    FIRST_SEPARATION = "first_separation"
    THE_FORGETTING = "the_forgetting"
    MANWES_CHOICE = "manwes_choice"
    THE_CORRUPTION = "the_corruption"
    THE_CYCLE = "the_cycle"
    THE_TRUTH = "the_truth"


# Room types that may carry a floor's seal (the boss room qualifies too).
SEAL_ROOM_TYPES: frozenset[RoomType] = frozenset({
    RoomType.SHRINE,
    RoomType.LORE_LIBRARY,
    RoomType.SECRET_VAULT,
    RoomType.MEDITATION_CHAMBER,
})
