"""Tests for the default collaborators."""

from depthcrawl.core.entities import Monster, starting_player
from depthcrawl.core.rng import GameRNG
from depthcrawl.interfaces.base import CombatResult
from depthcrawl.interfaces.defaults import (
    SEAL_EXPERIENCE,
    AutoCombatResolver,
    BufferSink,
    ChanceRareEncounter,
    FallbackMonsterSupply,
    InMemoryStory,
    NoRareEncounters,
    seal_flag,
)
from depthcrawl.world.enums import SealType, Theme


class TestFallbackMonsterSupply:
    def test_regular_group_size(self):
        supply = FallbackMonsterSupply()
        rng = GameRNG(3)
        for _ in range(50):
            group = supply.generate_monster_group(5, rng, theme=Theme.SEWERS)
            assert 1 <= len(group) <= 3
            assert not any(m.is_boss for m in group)

    def test_boss_group_leads_with_boss(self):
        supply = FallbackMonsterSupply()
        rng = GameRNG(3)
        for _ in range(50):
            group = supply.generate_monster_group(5, rng, theme=Theme.SEWERS, boss=True)
            assert group[0].is_boss
            assert 1 <= len(group) <= 3
            assert sum(m.is_boss for m in group) == 1


class TestAutoCombat:
    def test_weak_monster_loses(self):
        p = starting_player()
        rat = Monster(name="Rat", max_hp=5, current_hp=5, strength=1)
        assert AutoCombatResolver().resolve_combat(p, [rat], []) == CombatResult.VICTORY
        assert rat.is_dead
        assert p.current_hp == p.max_hp

    def test_overwhelming_monster_wins(self):
        p = starting_player()
        p.potions = 0
        giant = Monster(name="Giant", max_hp=10_000, current_hp=10_000, strength=200)
        assert AutoCombatResolver().resolve_combat(p, [giant], []) == CombatResult.DEFEAT
        assert p.is_dead

    def test_potion_drunk_when_low(self):
        p = starting_player()
        brute = Monster(name="Brute", max_hp=200, current_hp=200, strength=30, defence=20)
        AutoCombatResolver().resolve_combat(p, [brute], [])
        assert p.potions < 2

    def test_round_cap_is_defeat(self):
        p = starting_player()
        wall = Monster(name="Wall", max_hp=10**9, current_hp=10**9)
        assert AutoCombatResolver(max_rounds=3).resolve_combat(p, [wall], []) == CombatResult.DEFEAT

    def test_allies_help(self):
        p = starting_player()
        ally = starting_player("Ally")
        target = Monster(name="Dummy", max_hp=24, current_hp=24)
        AutoCombatResolver().resolve_combat(p, [target], [ally])
        # Two hits of 15 each in the first round
        assert p.current_hp == p.max_hp


class TestInMemoryStory:
    def test_flags(self):
        story = InMemoryStory()
        assert not story.has_flag("x")
        story.set_flag("x")
        assert story.has_flag("x")
        story.set_flag("x", False)
        assert not story.has_flag("x")

    def test_seal_floors(self):
        story = InMemoryStory()
        assert story.seal_for_floor(15) == SealType.FIRST_WAR
        assert story.seal_for_floor(99) == SealType.TRUTH
        assert story.seal_for_floor(16) is None

    def test_collect_once(self):
        story = InMemoryStory()
        p = starting_player()
        story.collect_seal(SealType.FIRST_WAR, p)
        assert story.has_flag(seal_flag(SealType.FIRST_WAR))
        assert p.experience == SEAL_EXPERIENCE[SealType.FIRST_WAR]
        assert story.seal_for_floor(15) is None
        story.collect_seal(SealType.FIRST_WAR, p)
        assert p.experience == SEAL_EXPERIENCE[SealType.FIRST_WAR]


class TestBufferSink:
    def test_records_and_replays(self):
        sink = BufferSink(["north", "fight"])
        sink.display("hello")
        assert sink.await_choice() == "north"
        assert sink.await_choice("? ") == "fight"
        assert sink.await_choice() == "quit"
        assert sink.lines == ["hello"]
        assert sink.prompts == ["> ", "? ", "> "]


class TestRareEncounters:
    def test_chance_extremes(self):
        never = ChanceRareEncounter(GameRNG(1), chance=0.0)
        always = ChanceRareEncounter(GameRNG(1), chance=1.0)
        assert not never.try_rare_encounter(3, Theme.CAVERNS)
        assert always.try_rare_encounter(3, Theme.CAVERNS)
        assert always.encounters == [(3, Theme.CAVERNS)]
        assert not NoRareEncounters().try_rare_encounter(3, Theme.CAVERNS)
