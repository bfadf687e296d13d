"""Tests for fallback monster scaling."""

import pytest

from depthcrawl.core.rng import GameRNG
from depthcrawl.generation.flavor import monster_names
from depthcrawl.scaling.monsters import (
    BOSS_MULTIPLIER,
    REGULAR_MULTIPLIER,
    create_dungeon_monster,
    fallback_monster_stats,
    scale_factor,
)
from depthcrawl.world.enums import Theme


class TestStats:
    @pytest.mark.parametrize("level", [1, 7, 20, 63, 100])
    @pytest.mark.parametrize("boss", [False, True])
    def test_formula(self, level, boss):
        factor = level * (1 + level / 20) * (BOSS_MULTIPLIER if boss else REGULAR_MULTIPLIER)
        stats = fallback_monster_stats(level, boss)
        assert stats.hp == max(1, int(4.0 * factor))
        assert stats.strength == int(1.5 * factor)
        assert stats.defence == int(1.0 * factor)
        assert stats.weapon_power == int(2.0 * factor)
        assert stats.armor_power == int(1.5 * factor)

    def test_minimum_hp(self):
        assert fallback_monster_stats(1).hp >= 1

    def test_boss_stronger(self):
        for level in (1, 10, 50, 100):
            assert fallback_monster_stats(level, True).hp > fallback_monster_stats(level).hp

    def test_grows_with_depth(self):
        hps = [fallback_monster_stats(level).hp for level in range(1, 101)]
        assert hps == sorted(hps)

    def test_scale_factor(self):
        assert scale_factor(20) == pytest.approx(2.0)


class TestCreateMonster:
    def test_deterministic_stats_and_themed_name(self):
        a = create_dungeon_monster(30, Theme.CAVERNS, GameRNG(1))
        b = create_dungeon_monster(30, Theme.CAVERNS, GameRNG(2))
        assert a.max_hp == b.max_hp == fallback_monster_stats(30).hp
        assert a.name in monster_names(Theme.CAVERNS)
        assert a.current_hp == a.max_hp

    def test_boss_title(self):
        boss = create_dungeon_monster(10, Theme.CATACOMBS, GameRNG(1), is_boss=True)
        assert boss.is_boss
        assert boss.name.endswith("Overlord")
