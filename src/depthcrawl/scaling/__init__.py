"""Discovery and reward scaling -- stateless depth-driven laws."""

from depthcrawl.scaling.difficulty import DifficultyLabel, EncounterAssessment, assess_encounter
from depthcrawl.scaling.discovery import (
    SealCheck,
    SealCheckReason,
    check_seal_discovery,
    exploration_progress,
    is_seal_eligible,
    seal_discovery_chance,
)
from depthcrawl.scaling.monsters import MonsterStats, create_dungeon_monster, fallback_monster_stats
from depthcrawl.scaling.rewards import TreasureReward, grant_reward, roll_boss_bonus, roll_treasure
from depthcrawl.scaling.traps import TrapOutcome, TrapResult, apply_trap, roll_trap

__all__ = [
    "DifficultyLabel",
    "EncounterAssessment",
    "MonsterStats",
    "SealCheck",
    "SealCheckReason",
    "TrapOutcome",
    "TrapResult",
    "TreasureReward",
    "apply_trap",
    "assess_encounter",
    "check_seal_discovery",
    "create_dungeon_monster",
    "exploration_progress",
    "fallback_monster_stats",
    "grant_reward",
    "is_seal_eligible",
    "roll_boss_bonus",
    "roll_treasure",
    "roll_trap",
    "seal_discovery_chance",
]
