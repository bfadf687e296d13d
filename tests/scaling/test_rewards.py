"""Tests for treasure and boss rewards."""

from depthcrawl.config import EngineConfig
from depthcrawl.core.entities import starting_player
from depthcrawl.core.rng import GameRNG
from depthcrawl.scaling.rewards import TreasureReward, grant_reward, roll_boss_bonus, roll_treasure


class TestTreasure:
    def test_ranges(self):
        rng = GameRNG(8)
        for level in (1, 10, 50):
            for _ in range(100):
                r = roll_treasure(level, rng)
                assert level * 100 <= r.gold <= level * 300
                assert level * 50 <= r.experience <= level * 50 + 100
                assert r.consumables in (0, 1, 2)
                assert not r.is_boss_bonus

    def test_consumable_chance_configurable(self):
        rng = GameRNG(8)
        never = EngineConfig(bonus_consumable_chance=0.0)
        always = EngineConfig(bonus_consumable_chance=1.0)
        assert all(roll_treasure(3, rng, never).consumables == 0 for _ in range(50))
        assert all(roll_treasure(3, rng, always).consumables >= 1 for _ in range(50))


class TestBossBonus:
    def test_ranges(self):
        rng = GameRNG(9)
        for _ in range(100):
            r = roll_boss_bonus(7, rng)
            assert 3500 <= r.gold <= 4500
            assert r.experience == 2100
            assert r.is_boss_bonus


class TestGrant:
    def test_grant(self):
        p = starting_player()
        grant_reward(p, TreasureReward(gold=10, experience=20, consumables=1))
        assert p.gold == 60
        assert p.experience == 20
        assert p.potions == 3
