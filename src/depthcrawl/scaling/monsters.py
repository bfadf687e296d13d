"""Fallback monster stat scaling.

``scale = 1 + level / 20``; a regular monster uses multiplier 0.6 and a
boss 1.8.  Every stat is ``level * base * scale * multiplier`` with the
per-level bases below.  Stats are a pure function of ``(level, is_boss)``;
building a monster draws once from the RNG, for its name.
"""

from __future__ import annotations

from pydantic import BaseModel

from depthcrawl.core.entities import Monster
from depthcrawl.core.rng import GameRNG
from depthcrawl.generation.flavor import boss_title, monster_names
from depthcrawl.world.enums import Theme

REGULAR_MULTIPLIER = 0.6
BOSS_MULTIPLIER = 1.8

# Per-level base of each stat
_HP_BASE = 4.0
_STRENGTH_BASE = 1.5
_DEFENCE_BASE = 1.0
_WEAPON_BASE = 2.0
_ARMOR_BASE = 1.5


class MonsterStats(BaseModel):
    hp: int
    strength: int
    defence: int
    weapon_power: int
    armor_power: int


def scale_factor(level: int) -> float:
    return 1 + level / 20


def fallback_monster_stats(level: int, is_boss: bool = False) -> MonsterStats:
    """Stats of a generic monster at *level*."""
    factor = level * scale_factor(level) * (BOSS_MULTIPLIER if is_boss else REGULAR_MULTIPLIER)
    return MonsterStats(
        hp=max(1, int(_HP_BASE * factor)),
        strength=int(_STRENGTH_BASE * factor),
        defence=int(_DEFENCE_BASE * factor),
        weapon_power=int(_WEAPON_BASE * factor),
        armor_power=int(_ARMOR_BASE * factor),
    )


def create_dungeon_monster(
    level: int, theme: Theme, rng: GameRNG, is_boss: bool = False,
) -> Monster:
    """Build a themed monster with fallback stats."""
    stats = fallback_monster_stats(level, is_boss)
    base_name = rng.random_choice(monster_names(theme))
    return Monster(
        name=boss_title(base_name) if is_boss else base_name,
        max_hp=stats.hp,
        current_hp=stats.hp,
        strength=stats.strength,
        defence=stats.defence,
        weapon_power=stats.weapon_power,
        armor_power=stats.armor_power,
        level=level,
        is_boss=is_boss,
    )
