"""Shared fixtures: a small hand-built floor and sessions over it."""

from __future__ import annotations

from typing import Callable

import pytest

from depthcrawl.config import EngineConfig
from depthcrawl.core.entities import Monster, Player, starting_player
from depthcrawl.core.rng import GameRNG
from depthcrawl.exploration.session import ExplorationSession
from depthcrawl.interfaces.base import CombatResolver, CombatResult, MonsterSupply
from depthcrawl.interfaces.defaults import BufferSink, InMemoryStory, NoRareEncounters
from depthcrawl.world.enums import (
    Direction,
    FeatureInteraction,
    RoomType,
    SealType,
    Theme,
)
from depthcrawl.world.floor import DungeonFloor
from depthcrawl.world.room import Room, RoomFeature


def build_floor(level: int = 1) -> DungeonFloor:
    """Five rooms::

            [2 boss]
               |
            [1 chamber, monsters]
               |
        [0 entrance] -- [3 corridor, treasure, stairs] ~~ [4 vault]

    The 3 -> 4 exit is hidden; room 3 has a feature that reveals it.
    """
    rooms = {
        0: Room(id=0, name="Entrance Hall", type=RoomType.HALL, danger_rating=0),
        1: Room(id=1, name="Bone Chamber", type=RoomType.CHAMBER, has_monsters=True),
        2: Room(
            id=2, name="Lich Lord's Throne", type=RoomType.BOSS_LAIR,
            is_boss_room=True, has_monsters=True, danger_rating=3,
        ),
        3: Room(
            id=3, name="Dusty Corridor", type=RoomType.CORRIDOR,
            has_treasure=True, has_stairs_down=True,
            features=[RoomFeature(
                name="suspicious wall",
                description="A loose stone conceals a narrow passage.",
                interaction=FeatureInteraction.SEARCH,
            )],
        ),
        4: Room(
            id=4, name="Hidden Vault", type=RoomType.SECRET_VAULT,
            is_secret_room=True, has_treasure=True,
        ),
    }
    floor = DungeonFloor(
        level=level,
        theme=Theme.CATACOMBS,
        danger_level=1,
        rooms=rooms,
        boss_room_id=2,
        stairs_room_id=3,
    )
    r = floor.rooms
    floor.link(r[0], Direction.NORTH, r[1], "A dark passage leads north.", "A dark passage leads south.")
    floor.link(r[1], Direction.NORTH, r[2], "A dark passage leads north.", "A dark passage leads south.")
    floor.link(r[0], Direction.EAST, r[3], "A dark passage leads east.", "A dark passage leads west.")
    floor.link(r[3], Direction.EAST, r[4], "A loose stone.", "A dark passage leads west.")
    r[3].exits[Direction.EAST].is_hidden = True
    return floor


class FixedGenerator:
    """Stands in for ``FloorGenerator``: every level gets a fresh hand-built floor."""

    def __init__(self, build: Callable[[int], DungeonFloor] = build_floor) -> None:
        self.build = build
        self.calls: list[int] = []

    def generate(self, level, rng, theme=None, seal_type=None) -> DungeonFloor:
        self.calls.append(level)
        floor = self.build(level)
        if seal_type is not None:
            floor.has_uncollected_seal = True
            floor.seal_type = seal_type
        return floor


class ScriptedCombat(CombatResolver):
    """Returns a fixed result; on victory every monster dies, on defeat the player does."""

    def __init__(self, result: CombatResult = CombatResult.VICTORY, damage: int = 5) -> None:
        self.result = result
        self.damage = damage
        self.calls = 0

    def resolve_combat(self, player, monsters, allies) -> CombatResult:
        self.calls += 1
        if self.result == CombatResult.VICTORY:
            for monster in monsters:
                monster.current_hp = 0
            player.take_damage(self.damage, min_hp=1)
        else:
            player.take_damage(player.current_hp)
        return self.result


class SingleGoblin(MonsterSupply):
    def generate_monster_group(self, level, rng, *, theme, boss=False) -> list[Monster]:
        name = "Goblin King" if boss else "Goblin"
        return [Monster(
            name=name, max_hp=10, current_hp=10, strength=3, weapon_power=2,
            level=level, is_boss=boss,
        )]


@pytest.fixture
def floor() -> DungeonFloor:
    return build_floor()


@pytest.fixture
def player() -> Player:
    return starting_player("Tester")


@pytest.fixture
def make_session(player):
    """Factory building a deterministic session over the hand-built floor.

    Ambushes are off unless ``ambush_chance`` is passed.
    """

    def _make(
        *,
        ambush_chance: float = 0.0,
        combat_result: CombatResult = CombatResult.VICTORY,
        story: InMemoryStory | None = None,
        level: int = 1,
        build: Callable[[int], DungeonFloor] = build_floor,
        **config_overrides,
    ) -> ExplorationSession:
        config = EngineConfig(ambush_chance=ambush_chance, **config_overrides)
        return ExplorationSession(
            player,
            seed=7,
            level=level,
            config=config,
            generator=FixedGenerator(build),
            monsters=SingleGoblin(),
            combat=ScriptedCombat(combat_result),
            story=story or InMemoryStory(seal_floors={}),
            sink=BufferSink(),
            rare_encounters=NoRareEncounters(),
        )

    return _make


@pytest.fixture
def seal_story() -> InMemoryStory:
    return InMemoryStory(seal_floors={1: SealType.FIRST_WAR})


@pytest.fixture
def rng() -> GameRNG:
    return GameRNG(seed=42)
