"""Tests for seal discovery."""

import pytest

from depthcrawl.config import EngineConfig
from depthcrawl.core.rng import GameRNG
from depthcrawl.scaling.discovery import (
    SealCheckReason,
    check_seal_discovery,
    is_seal_eligible,
    seal_discovery_chance,
)
from depthcrawl.world.enums import DungeonEventType, RoomType, SealType
from depthcrawl.world.room import Room


class _CountingRNG(GameRNG):
    def __init__(self, result: bool) -> None:
        super().__init__(seed=0)
        self.result = result
        self.draws = 0

    def chance(self, probability):
        self.draws += 1
        return self.result


def _seal_floor(floor, explored: list[int]):
    floor.has_uncollected_seal = True
    floor.seal_type = SealType.FIRST_WAR
    for rid in explored:
        floor.rooms[rid].is_explored = True
    return floor


class TestEligibility:
    @pytest.mark.parametrize("room_type", [
        RoomType.SHRINE, RoomType.LORE_LIBRARY, RoomType.SECRET_VAULT, RoomType.MEDITATION_CHAMBER,
    ])
    def test_seal_room_types(self, room_type):
        rng = _CountingRNG(False)
        assert is_seal_eligible(Room(id=1, name="r", type=room_type), rng)
        assert rng.draws == 0

    def test_boss_room(self):
        room = Room(id=1, name="r", type=RoomType.BOSS_LAIR, is_boss_room=True)
        assert is_seal_eligible(room, _CountingRNG(False))

    def test_pending_shrine_event(self):
        room = Room(
            id=1, name="r", type=RoomType.CORRIDOR,
            has_event=True, event_type=DungeonEventType.SHRINE,
        )
        assert is_seal_eligible(room, _CountingRNG(False))
        room.event_completed = True
        assert not is_seal_eligible(room, _CountingRNG(False))

    def test_chamber_rolls_once(self):
        room = Room(id=1, name="r", type=RoomType.CHAMBER)
        rng = _CountingRNG(True)
        assert is_seal_eligible(room, rng)
        assert rng.draws == 1
        assert not is_seal_eligible(room, _CountingRNG(False))

    def test_other_rooms_never_roll(self):
        rng = _CountingRNG(True)
        assert not is_seal_eligible(Room(id=1, name="r", type=RoomType.CORRIDOR), rng)
        assert rng.draws == 0


class TestChance:
    def test_thresholds(self):
        assert seal_discovery_chance(0.49) == 0.0
        assert seal_discovery_chance(0.5) == pytest.approx(0.15)
        assert seal_discovery_chance(0.7) == pytest.approx(0.23)
        assert seal_discovery_chance(0.75) == 1.0

    def test_configurable(self):
        config = EngineConfig(seal_base_chance=0.5, seal_progress_slope=0.0)
        assert seal_discovery_chance(0.6, config) == pytest.approx(0.5)


class TestCheckSealDiscovery:
    def test_inactive_without_seal(self, floor):
        check = check_seal_discovery(floor, floor.rooms[4], _CountingRNG(True))
        assert not check.discovered
        assert check.reason == SealCheckReason.INACTIVE

    def test_inactive_once_collected(self, floor):
        _seal_floor(floor, [0, 4])
        floor.seal_collected = True
        check = check_seal_discovery(floor, floor.rooms[4], _CountingRNG(True))
        assert check.reason == SealCheckReason.INACTIVE

    def test_eligible_room_discovers_early(self, floor):
        _seal_floor(floor, [0, 4])
        check = check_seal_discovery(floor, floor.rooms[4], _CountingRNG(False))
        assert check.discovered
        assert check.reason == SealCheckReason.ELIGIBLE_ROOM
        assert check.progress == pytest.approx(0.4)

    def test_below_threshold(self, floor):
        _seal_floor(floor, [0, 3])
        rng = _CountingRNG(True)
        check = check_seal_discovery(floor, floor.rooms[3], rng)
        assert not check.discovered
        assert check.reason == SealCheckReason.BELOW_THRESHOLD
        assert rng.draws == 0

    def test_progress_roll(self, floor):
        _seal_floor(floor, [0, 1, 3])
        floor.rooms[1].type = RoomType.CORRIDOR
        check = check_seal_discovery(floor, floor.rooms[3], _CountingRNG(True))
        assert check.discovered
        assert check.reason == SealCheckReason.PROGRESS_ROLL
        assert check.chance == pytest.approx(0.15 + 0.1 * 0.4)

    def test_progress_roll_fails(self, floor):
        _seal_floor(floor, [0, 1, 3])
        check = check_seal_discovery(floor, floor.rooms[3], _CountingRNG(False))
        assert not check.discovered
        assert check.reason == SealCheckReason.ROLL_FAILED

    def test_guaranteed_at_three_quarters(self, floor):
        _seal_floor(floor, [0, 1, 2, 3])
        rng = _CountingRNG(False)
        check = check_seal_discovery(floor, floor.rooms[3], rng)
        assert check.discovered
        assert check.reason == SealCheckReason.GUARANTEED
        assert rng.draws == 0
