"""Working default collaborators.

These make the engine playable and testable end to end without a full
game around it.  Real front-ends are expected to supply their own.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from depthcrawl.core.entities import Monster, Player
from depthcrawl.core.rng import GameRNG
from depthcrawl.interfaces.base import (
    CombatResolver,
    CombatResult,
    MonsterSupply,
    PresentationSink,
    RareEncounterHook,
    StoryFlags,
)
from depthcrawl.scaling.monsters import create_dungeon_monster
from depthcrawl.world.enums import SealType, Theme

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Monsters and combat
# ---------------------------------------------------------------------------

class FallbackMonsterSupply(MonsterSupply):
    """Groups of 1-3 themed monsters; a boss comes with 0-2 minions."""

    def generate_monster_group(
        self,
        level: int,
        rng: GameRNG,
        *,
        theme: Theme,
        boss: bool = False,
    ) -> list[Monster]:
        if boss:
            group = [create_dungeon_monster(level, theme, rng, is_boss=True)]
            minions = rng.random_int(0, 2)
        else:
            group = []
            minions = rng.random_int(1, 3)
        group.extend(create_dungeon_monster(level, theme, rng) for _ in range(minions))
        return group


class AutoCombatResolver(CombatResolver):
    """Deterministic round-based exchange of blows.

    Each round the player (and then each ally) hits the first living
    monster for ``max(1, offense - protection // 2)``; every living
    monster then hits the player back the same way.  The player drinks a
    potion, healing ``potion_heal_fraction`` of max HP, whenever HP falls
    below a quarter.
    """

    def __init__(self, max_rounds: int = 500, potion_heal_fraction: float = 0.4) -> None:
        self.max_rounds = max_rounds
        self.potion_heal_fraction = potion_heal_fraction

    @staticmethod
    def _hit(attacker: Player | Monster, defender: Player | Monster) -> int:
        return max(1, attacker.offense - defender.protection // 2)

    def resolve_combat(
        self,
        player: Player,
        monsters: list[Monster],
        allies: list[Player],
    ) -> CombatResult:
        for _ in range(self.max_rounds):
            for attacker in [player, *allies]:
                if attacker.is_dead:
                    continue
                living = [m for m in monsters if not m.is_dead]
                if not living:
                    break
                living[0].take_damage(self._hit(attacker, living[0]))

            living = [m for m in monsters if not m.is_dead]
            if not living:
                return CombatResult.VICTORY

            for monster in living:
                player.take_damage(self._hit(monster, player))
                if player.is_dead:
                    return CombatResult.DEFEAT
                if player.current_hp * 4 < player.max_hp and player.potions > 0:
                    player.potions -= 1
                    player.heal(int(player.max_hp * self.potion_heal_fraction))

        logger.warning("Combat exceeded %d rounds; counting it as a defeat", self.max_rounds)
        return CombatResult.DEFEAT


# ---------------------------------------------------------------------------
# Story flags
# ---------------------------------------------------------------------------

# Depth of each dungeon seal.  The Seal of Creation lives in town.
SEAL_FLOORS: dict[int, SealType] = {
    15: SealType.FIRST_WAR,
    30: SealType.CORRUPTION,
    45: SealType.IMPRISONMENT,
    60: SealType.PROPHECY,
    80: SealType.REGRET,
    99: SealType.TRUTH,
}

SEAL_EXPERIENCE: dict[SealType, int] = {
    SealType.CREATION: 1000,
    SealType.FIRST_WAR: 2000,
    SealType.CORRUPTION: 3000,
    SealType.IMPRISONMENT: 4000,
    SealType.PROPHECY: 5000,
    SealType.REGRET: 6000,
    SealType.TRUTH: 10000,
}


def seal_flag(seal_type: SealType) -> str:
    return f"seal_{seal_type.value}"


class InMemoryStory(StoryFlags):
    """Story flags held in a dictionary."""

    def __init__(self, seal_floors: dict[int, SealType] | None = None) -> None:
        self.flags: dict[str, bool] = {}
        self.collected_seals: set[SealType] = set()
        self.seal_floors = dict(SEAL_FLOORS if seal_floors is None else seal_floors)

    def has_flag(self, name: str) -> bool:
        return self.flags.get(name, False)

    def set_flag(self, name: str, value: bool = True) -> None:
        self.flags[name] = value

    def collect_seal(self, seal_type: SealType, player: Player) -> None:
        if seal_type in self.collected_seals:
            logger.warning("Seal %s collected twice; ignoring", seal_type.value)
            return
        self.collected_seals.add(seal_type)
        self.set_flag(seal_flag(seal_type))
        player.gain_experience(SEAL_EXPERIENCE[seal_type])

    def seal_for_floor(self, level: int) -> SealType | None:
        seal_type = self.seal_floors.get(level)
        if seal_type is None or seal_type in self.collected_seals:
            return None
        return seal_type


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------

class BufferSink(PresentationSink):
    """Records displayed text and replays scripted input.

    Parameters
    ----------
    choices:
        Lines returned by ``await_choice`` in order.  Once exhausted,
        ``"quit"`` is returned.
    """

    def __init__(self, choices: Iterable[str] = ()) -> None:
        self.lines: list[str] = []
        self.prompts: list[str] = []
        self._choices: deque[str] = deque(choices)

    def display(self, text: str) -> None:
        self.lines.append(text)

    def await_choice(self, prompt: str = "> ") -> str:
        self.prompts.append(prompt)
        if not self._choices:
            return "quit"
        return self._choices.popleft()

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


# ---------------------------------------------------------------------------
# Rare encounters
# ---------------------------------------------------------------------------

class ChanceRareEncounter(RareEncounterHook):
    """Fires with a fixed probability on its own RNG stream."""

    def __init__(self, rng: GameRNG, chance: float = 0.02) -> None:
        self.rng = rng
        self.chance = chance
        self.encounters: list[tuple[int, Theme]] = []

    def try_rare_encounter(self, level: int, theme: Theme) -> bool:
        if not self.rng.chance(self.chance):
            return False
        self.encounters.append((level, theme))
        logger.info("Rare encounter on floor %d (%s)", level, theme.value)
        return True


class NoRareEncounters(RareEncounterHook):

    def try_rare_encounter(self, level: int, theme: Theme) -> bool:
        return False
