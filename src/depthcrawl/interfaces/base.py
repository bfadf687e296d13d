"""Boundaries between the dungeon core and its collaborators.

The core hands depth to a monster supply, passes monster groups to a
combat resolver, consults story flags at seal and milestone points,
talks to the player through a presentation sink and asks a rare-encounter
hook on first room visits.  It never looks inside any of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depthcrawl.core.entities import Monster, Player
    from depthcrawl.core.rng import GameRNG
    from depthcrawl.world.enums import SealType, Theme


class CombatResult(str, Enum):
    VICTORY = "victory"
    DEFEAT = "defeat"


class MonsterSupply(ABC):
    """Produces monster groups for a depth."""

    @abstractmethod
    def generate_monster_group(
        self,
        level: int,
        rng: GameRNG,
        *,
        theme: Theme,
        boss: bool = False,
    ) -> list[Monster]:
        """Return an ordered, non-empty group of monsters.

        Parameters
        ----------
        level:
            Current depth.
        rng:
            Session RNG; the only source of randomness allowed.
        theme:
            Theme of the floor the group lives on.
        boss:
            Build the group of a boss lair (the boss leads the list).
        """


class CombatResolver(ABC):
    """Resolves a fight.  The core only reacts to the outcome."""

    @abstractmethod
    def resolve_combat(
        self,
        player: Player,
        monsters: list[Monster],
        allies: list[Player],
    ) -> CombatResult:
        """Fight *monsters* and return ``VICTORY`` or ``DEFEAT``.

        Implementations may mutate the HP of every participant.
        """


class StoryFlags(ABC):
    """Narrative state owned outside the core."""

    @abstractmethod
    def has_flag(self, name: str) -> bool:
        ...

    @abstractmethod
    def set_flag(self, name: str, value: bool = True) -> None:
        ...

    @abstractmethod
    def collect_seal(self, seal_type: SealType, player: Player) -> None:
        """Hand the discovered seal over to the narrative layer."""

    @abstractmethod
    def seal_for_floor(self, level: int) -> SealType | None:
        """The seal hidden on floor *level*, or ``None``.

        Should return ``None`` once that seal has been collected.
        """


class PresentationSink(ABC):
    """Output channel and input source of the player."""

    @abstractmethod
    def display(self, text: str) -> None:
        ...

    @abstractmethod
    def await_choice(self, prompt: str = "> ") -> str:
        """Block until the player enters a line of input."""


class RareEncounterHook(ABC):

    @abstractmethod
    def try_rare_encounter(self, level: int, theme: Theme) -> bool:
        """Called on every first room visit; ``True`` if an encounter fired."""
