"""Collaborator boundaries of the dungeon core and their defaults."""

from depthcrawl.interfaces.base import (
    CombatResolver,
    CombatResult,
    MonsterSupply,
    PresentationSink,
    RareEncounterHook,
    StoryFlags,
)
from depthcrawl.interfaces.defaults import (
    SEAL_FLOORS,
    AutoCombatResolver,
    BufferSink,
    ChanceRareEncounter,
    FallbackMonsterSupply,
    InMemoryStory,
    NoRareEncounters,
)

__all__ = [
    "AutoCombatResolver",
    "BufferSink",
    "ChanceRareEncounter",
    "CombatResolver",
    "CombatResult",
    "FallbackMonsterSupply",
    "InMemoryStory",
    "MonsterSupply",
    "NoRareEncounters",
    "PresentationSink",
    "RareEncounterHook",
    "SEAL_FLOORS",
    "StoryFlags",
]
