"""Encounter difficulty labels.

Purely a player-facing signal: the label never changes how combat
resolves.  The threat ratio compares the group's aggregate power times
its HP pool to the player's power times current HP.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from pydantic import BaseModel

from depthcrawl.core.entities import Monster, Player


class DifficultyLabel(str, Enum):
    TRIVIAL = "Trivial"
    EASY = "Easy"
    MODERATE = "Moderate"
    HARD = "Hard"
    DANGEROUS = "Dangerous"
    DEADLY = "Deadly"


# Upper bound (exclusive) of the threat ratio for each label; Deadly above.
_THRESHOLDS: list[tuple[float, DifficultyLabel]] = [
    (0.25, DifficultyLabel.TRIVIAL),
    (0.5, DifficultyLabel.EASY),
    (0.9, DifficultyLabel.MODERATE),
    (1.3, DifficultyLabel.HARD),
    (2.0, DifficultyLabel.DANGEROUS),
]


class EncounterAssessment(BaseModel):
    label: DifficultyLabel
    ratio: float
    monster_power: int
    monster_hp: int


def threat_ratio(player: Player, monsters: Sequence[Monster]) -> float:
    monster_power = sum(m.offense + m.protection for m in monsters)
    monster_hp = sum(max(0, m.current_hp) for m in monsters)
    player_power = max(1, player.offense + player.protection)
    player_hp = max(1, player.current_hp)
    return (monster_power * monster_hp) / (player_power * player_hp)


def label_for_ratio(ratio: float) -> DifficultyLabel:
    for upper, label in _THRESHOLDS:
        if ratio < upper:
            return label
    return DifficultyLabel.DEADLY


def assess_encounter(player: Player, monsters: Sequence[Monster]) -> EncounterAssessment:
    """Label the difficulty of *monsters* for *player*."""
    ratio = threat_ratio(player, monsters)
    return EncounterAssessment(
        label=label_for_ratio(ratio),
        ratio=ratio,
        monster_power=sum(m.offense + m.protection for m in monsters),
        monster_hp=sum(max(0, m.current_hp) for m in monsters),
    )
