"""Random explorer -- wanders a floor issuing random legal commands.

The ``RandomExplorer`` is the baseline autopilot for batch runs.  It
exercises every room action end to end and gives a lower bound on how
well a depth curve treats a careless player.

Behaviour:
    - Never issues ``map``, ``status``, ``leave`` or ``ascend``.
    - Outside the floor it always enters.
    - Takes the stairs with probability ``descend_chance`` whenever they
      are available.
    - Otherwise picks uniformly among the remaining commands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from depthcrawl.core.rng import GameRNG
from depthcrawl.play_agents.base import ExplorerAgent

if TYPE_CHECKING:
    from depthcrawl.exploration.session import ExplorationSession

_IGNORED = frozenset({"map", "status", "leave", "ascend"})


class RandomExplorer(ExplorerAgent):
    """Agent that issues random legal commands.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, a default
        ``GameRNG(seed=0)`` is created.
    descend_chance:
        Probability of taking the stairs when standing on them.
    """

    def __init__(
        self,
        rng: GameRNG | None = None,
        descend_chance: float = 0.3,
    ) -> None:
        self._rng = rng or GameRNG(seed=0)
        self._descend_chance = descend_chance

    def choose_action(
        self,
        session: ExplorationSession,
        actions: list[str],
    ) -> str | None:
        if "enter" in actions:
            return "enter"
        if "descend" in actions and self._rng.chance(self._descend_chance):
            return "descend"
        candidates = [a for a in actions if a not in _IGNORED and a != "descend"]
        if not candidates:
            return None
        return self._rng.random_choice(candidates)
