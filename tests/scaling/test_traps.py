"""Tests for trap rolling and application."""

import pytest

from depthcrawl.core.entities import starting_player
from depthcrawl.core.rng import GameRNG
from depthcrawl.scaling.traps import POISON_STATUS, TrapOutcome, TrapResult, apply_trap, roll_trap


class _ForcedRNG(GameRNG):
    """Picks a fixed trap outcome and rolls the bottom of every range."""

    def __init__(self, outcome: TrapOutcome) -> None:
        super().__init__(seed=0)
        self.outcome = outcome

    def random_choice(self, seq):
        return self.outcome

    def random_int(self, low, high):
        return low


class TestRollTrap:
    @pytest.mark.parametrize("outcome,damage", [
        (TrapOutcome.PIT, 30),
        (TrapOutcome.DARTS, 20),
        (TrapOutcome.FIRE, 40),
    ])
    def test_damage_outcomes(self, outcome, damage):
        result = roll_trap(10, gold=500, rng=_ForcedRNG(outcome))
        assert result.outcome == outcome
        assert result.damage == damage
        assert result.gold_lost == result.gold_gained == result.experience_lost == 0

    def test_darts_poison_scales(self):
        assert roll_trap(1, 0, _ForcedRNG(TrapOutcome.DARTS)).poison_stacks == 1
        assert roll_trap(25, 0, _ForcedRNG(TrapOutcome.DARTS)).poison_stacks == 3

    def test_corrosion_takes_a_tenth(self):
        result = roll_trap(10, gold=555, rng=_ForcedRNG(TrapOutcome.CORROSION))
        assert result.gold_lost == 55
        assert result.damage == 0

    def test_curse(self):
        assert roll_trap(4, 0, _ForcedRNG(TrapOutcome.CURSE)).experience_lost == 200

    def test_dud_pays(self):
        assert roll_trap(3, 0, _ForcedRNG(TrapOutcome.DUD)).gold_gained == 60

    def test_damage_ranges(self):
        rng = GameRNG(11)
        for _ in range(300):
            r = roll_trap(5, 100, rng)
            if r.outcome == TrapOutcome.PIT:
                assert 15 <= r.damage <= 25
            elif r.outcome == TrapOutcome.DARTS:
                assert 10 <= r.damage <= 18
            elif r.outcome == TrapOutcome.FIRE:
                assert 20 <= r.damage <= 32

    def test_every_outcome_occurs(self):
        rng = GameRNG(2)
        seen = {roll_trap(5, 100, rng).outcome for _ in range(300)}
        assert seen == set(TrapOutcome)


class TestApplyTrap:
    def test_never_kills(self):
        p = starting_player()
        p.current_hp = 5
        applied = apply_trap(p, TrapResult(outcome=TrapOutcome.FIRE, damage=400))
        assert p.current_hp == 1
        assert applied.damage == 4

    def test_darts_poison_applied(self):
        p = starting_player()
        apply_trap(p, TrapResult(outcome=TrapOutcome.DARTS, damage=3, poison_stacks=2))
        assert p.get_status(POISON_STATUS) == 2

    def test_gold_loss_is_actual(self):
        p = starting_player()
        p.gold = 7
        applied = apply_trap(p, TrapResult(outcome=TrapOutcome.CORROSION, gold_lost=50))
        assert p.gold == 0
        assert applied.gold_lost == 7

    def test_curse_floors_experience(self):
        p = starting_player()
        p.experience = 30
        applied = apply_trap(p, TrapResult(outcome=TrapOutcome.CURSE, experience_lost=100))
        assert p.experience == 0
        assert applied.experience_lost == 30

    def test_dud_gain(self):
        p = starting_player()
        apply_trap(p, TrapResult(outcome=TrapOutcome.DUD, gold_gained=20))
        assert p.gold == 70

    def test_summary_mentions_amount(self):
        assert "12" in TrapResult(outcome=TrapOutcome.PIT, damage=12).summary
