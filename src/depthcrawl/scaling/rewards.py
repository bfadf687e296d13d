"""Treasure and boss rewards.

- Room treasure: gold ``level*100 + rand(0, level*200)``, experience
  ``level*50 + rand(0, 100)``; 30% chance of 1-2 bonus consumables.
- Boss clear bonus: gold ``level*500 + rand(0, 1000)``, experience
  ``level*300``.
"""

from __future__ import annotations

from pydantic import BaseModel

from depthcrawl.config import EngineConfig
from depthcrawl.core.entities import Player
from depthcrawl.core.rng import GameRNG


class TreasureReward(BaseModel):
    gold: int = 0
    experience: int = 0
    consumables: int = 0
    is_boss_bonus: bool = False


def roll_treasure(
    level: int, rng: GameRNG, config: EngineConfig | None = None,
) -> TreasureReward:
    """Roll the contents of a room's treasure."""
    chance = (config or EngineConfig()).bonus_consumable_chance
    gold = level * 100 + rng.random_int(0, level * 200)
    experience = level * 50 + rng.random_int(0, 100)
    consumables = rng.random_int(1, 2) if rng.chance(chance) else 0
    return TreasureReward(gold=gold, experience=experience, consumables=consumables)


def roll_boss_bonus(level: int, rng: GameRNG) -> TreasureReward:
    """Roll the bonus paid out when a cleared boss room is looted."""
    return TreasureReward(
        gold=level * 500 + rng.random_int(0, 1000),
        experience=level * 300,
        is_boss_bonus=True,
    )


def grant_reward(player: Player, reward: TreasureReward) -> None:
    player.gain_gold(reward.gold)
    player.gain_experience(reward.experience)
    player.potions += reward.consumables
