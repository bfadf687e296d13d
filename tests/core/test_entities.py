"""Tests for player and monster entities."""

from depthcrawl.core.entities import Monster, starting_player


class TestEntity:
    def test_take_damage_respects_min_hp(self):
        p = starting_player()
        lost = p.take_damage(500, min_hp=1)
        assert p.current_hp == 1
        assert lost == 99

    def test_take_damage_can_kill(self):
        p = starting_player()
        p.take_damage(500)
        assert p.is_dead
        assert p.current_hp == 0

    def test_negative_damage_is_ignored(self):
        p = starting_player()
        assert p.take_damage(-5) == 0
        assert p.current_hp == 100

    def test_heal_capped_at_max(self):
        p = starting_player()
        p.take_damage(10)
        assert p.heal(50) == 10
        assert p.current_hp == p.max_hp

    def test_status_stacks_and_removal(self):
        m = Monster(name="Rat", max_hp=5, current_hp=5)
        m.apply_status("poison", 3)
        assert m.get_status("poison") == 3
        m.apply_status("poison", -3)
        assert "poison" not in m.status_effects
        assert m.get_status("poison") == 0

    def test_offense_and_protection(self):
        p = starting_player()
        assert p.offense == 15
        assert p.protection == 8


class TestPlayerResources:
    def test_lose_gold_floors_at_zero(self):
        p = starting_player()
        assert p.lose_gold(80) == 50
        assert p.gold == 0

    def test_lose_experience_floors_at_zero(self):
        p = starting_player()
        p.gain_experience(30)
        assert p.lose_experience(100) == 30
        assert p.experience == 0

    def test_gains_ignore_negative(self):
        p = starting_player()
        p.gain_gold(-10)
        p.gain_experience(-10)
        assert p.gold == 50
        assert p.experience == 0

    def test_starting_kit(self):
        p = starting_player("Ayla")
        assert p.name == "Ayla"
        assert p.current_hp == p.max_hp == 100
        assert p.potions == 2
