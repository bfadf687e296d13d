"""Core primitives: seeded RNG and entity models."""

from depthcrawl.core.entities import Entity, Monster, Player, starting_player
from depthcrawl.core.rng import GameRNG

__all__ = [
    "Entity",
    "GameRNG",
    "Monster",
    "Player",
    "starting_player",
]
