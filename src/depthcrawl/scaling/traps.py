"""Trap resolution.

A triggered trap picks one of six outcomes uniformly and applies exactly
one effect (level = current depth):

- Pit: ``level*3 + rand(0, 10)`` damage
- Darts: ``level*2 + rand(0, 8)`` damage plus poison
- Fire: ``level*4 + rand(0, 12)`` damage
- Corrosion: lose ``gold // 10`` gold
- Curse: lose ``level*50`` experience (floored at 0)
- Dud: gain ``level*20`` gold

Trap damage never drops the player below 1 HP.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from depthcrawl.core.entities import Player
from depthcrawl.core.rng import GameRNG


class TrapOutcome(str, Enum):
    PIT = "pit"
    DARTS = "darts"
    FIRE = "fire"
    CORROSION = "corrosion"
    CURSE = "curse"
    DUD = "dud"


POISON_STATUS = "poison"


class TrapResult(BaseModel):
    """Effect of one trap trigger.

    ``roll_trap`` fills in the nominal amounts; ``apply_trap`` returns a
    copy holding the amounts actually applied to the player.
    """

    outcome: TrapOutcome
    damage: int = 0
    poison_stacks: int = 0
    gold_lost: int = 0
    experience_lost: int = 0
    gold_gained: int = 0

    @property
    def summary(self) -> str:
        if self.outcome == TrapOutcome.PIT:
            return f"The floor gives way! You fall into a pit and take {self.damage} damage."
        if self.outcome == TrapOutcome.DARTS:
            return (
                f"Poisoned darts shoot from the walls! You take {self.damage} damage "
                f"and are poisoned."
            )
        if self.outcome == TrapOutcome.FIRE:
            return f"Flames erupt around you! You take {self.damage} damage."
        if self.outcome == TrapOutcome.CORROSION:
            return f"Acid sprays over your purse. You lose {self.gold_lost} gold."
        if self.outcome == TrapOutcome.CURSE:
            return f"A curse drains your memories. You lose {self.experience_lost} experience."
        return f"The trap is a dud. Behind its mechanism you find {self.gold_gained} gold."


def roll_trap(level: int, gold: int, rng: GameRNG) -> TrapResult:
    """Roll the outcome of a trap at *level* for a player holding *gold*.

    One draw selects the outcome; damage outcomes draw once more.
    """
    outcome = rng.random_choice(list(TrapOutcome))
    if outcome == TrapOutcome.PIT:
        return TrapResult(outcome=outcome, damage=level * 3 + rng.random_int(0, 10))
    if outcome == TrapOutcome.DARTS:
        return TrapResult(
            outcome=outcome,
            damage=level * 2 + rng.random_int(0, 8),
            poison_stacks=1 + level // 10,
        )
    if outcome == TrapOutcome.FIRE:
        return TrapResult(outcome=outcome, damage=level * 4 + rng.random_int(0, 12))
    if outcome == TrapOutcome.CORROSION:
        return TrapResult(outcome=outcome, gold_lost=gold // 10)
    if outcome == TrapOutcome.CURSE:
        return TrapResult(outcome=outcome, experience_lost=level * 50)
    return TrapResult(outcome=outcome, gold_gained=level * 20)


def apply_trap(player: Player, result: TrapResult) -> TrapResult:
    """Apply *result* to *player* and return the effect actually applied."""
    damage = player.take_damage(result.damage, min_hp=1)
    if result.poison_stacks:
        player.apply_status(POISON_STATUS, result.poison_stacks)
    gold_lost = player.lose_gold(result.gold_lost)
    experience_lost = player.lose_experience(result.experience_lost)
    player.gain_gold(result.gold_gained)
    return result.model_copy(update={
        "damage": damage,
        "gold_lost": gold_lost,
        "experience_lost": experience_lost,
    })
