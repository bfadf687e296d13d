"""Tests for theme and depth lookup tables."""

from depthcrawl.core.rng import GameRNG
from depthcrawl.generation.flavor import (
    boss_title,
    exit_description,
    lore_fragment_for_level,
    room_flavor,
    theme_features,
    theme_for_level,
)
from depthcrawl.world.enums import Direction, LoreFragmentType, RoomType, Theme


class TestThemeBands:
    def test_band_edges(self):
        assert theme_for_level(1) == Theme.CATACOMBS
        assert theme_for_level(10) == Theme.CATACOMBS
        assert theme_for_level(11) == Theme.SEWERS
        assert theme_for_level(35) == Theme.CAVERNS
        assert theme_for_level(50) == Theme.ANCIENT_RUINS
        assert theme_for_level(65) == Theme.DEMON_LAIR
        assert theme_for_level(80) == Theme.FROZEN_DEPTHS
        assert theme_for_level(90) == Theme.VOLCANIC_PIT
        assert theme_for_level(91) == Theme.ABYSSAL_VOID
        assert theme_for_level(100) == Theme.ABYSSAL_VOID

    def test_lore_bands(self):
        assert lore_fragment_for_level(15) == LoreFragmentType.OCEAN_ORIGIN
        assert lore_fragment_for_level(36) == LoreFragmentType.THE_FORGETTING
        assert lore_fragment_for_level(99) == LoreFragmentType.THE_TRUTH


class TestFlavor:
    def test_every_theme_and_type_has_flavor(self):
        rng = GameRNG(0)
        for theme in Theme:
            for room_type in RoomType:
                name, description, atmosphere = room_flavor(theme, room_type, rng)
                assert name and description and atmosphere

    def test_exit_description_mentions_direction(self):
        assert "north" in exit_description(Direction.NORTH, Theme.CATACOMBS)

    def test_theme_features_are_fresh(self):
        a = theme_features(Theme.CAVERNS)
        a[0].is_interacted = True
        b = theme_features(Theme.CAVERNS)
        assert not b[0].is_interacted

    def test_boss_title(self):
        assert boss_title("Ghoul") == "Ghoul Overlord"
