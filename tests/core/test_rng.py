"""Tests for the seeded RNG."""

import pytest

from depthcrawl.core.rng import GameRNG


class TestGameRNG:
    def test_same_seed_same_stream(self):
        a, b = GameRNG(123), GameRNG(123)
        assert [a.random_int(0, 1000) for _ in range(20)] == [b.random_int(0, 1000) for _ in range(20)]

    def test_random_int_inclusive_bounds(self):
        rng = GameRNG(1)
        values = {rng.random_int(0, 2) for _ in range(200)}
        assert values == {0, 1, 2}

    def test_chance_extremes(self):
        rng = GameRNG(5)
        assert not any(rng.chance(0.0) for _ in range(100))
        assert all(rng.chance(1.0) for _ in range(100))

    def test_random_choice_empty_raises(self):
        with pytest.raises(ValueError):
            GameRNG(0).random_choice([])

    def test_fork_is_independent_of_parent_consumption(self):
        parent = GameRNG(99)
        before = parent.fork("floor-3").random_int(0, 10**9)
        for _ in range(50):
            parent.random_float()
        after = parent.fork("floor-3").random_int(0, 10**9)
        assert before == after

    def test_fork_names_give_different_streams(self):
        parent = GameRNG(99)
        a = [parent.fork("floor-1").random_int(0, 10**9) for _ in range(3)]
        b = [parent.fork("floor-2").random_int(0, 10**9) for _ in range(3)]
        assert a != b

    def test_shuffle_deterministic(self):
        a, b = list(range(10)), list(range(10))
        GameRNG(3).shuffle(a)
        GameRNG(3).shuffle(b)
        assert a == b
        assert sorted(a) == list(range(10))
