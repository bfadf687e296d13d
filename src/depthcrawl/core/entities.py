"""Entity models for the dungeon engine.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  Combat internals live behind the ``CombatResolver``
boundary; these models only carry the numbers the core reads or writes
(HP, gold, experience, combat stats, consumables, status effects).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Entity base
# ---------------------------------------------------------------------------

class Entity(BaseModel):
    """Common base for anything with HP, combat stats and status effects."""

    name: str
    max_hp: int
    current_hp: int
    strength: int = 0
    defence: int = 0
    weapon_power: int = 0
    armor_power: int = 0
    status_effects: dict[str, int] = Field(default_factory=dict)
    """Maps a status identifier (e.g. ``"poison"``) to its stack count.
    Stacks <= 0 are automatically removed."""

    # -- HP queries ----------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.current_hp <= 0

    @property
    def offense(self) -> int:
        """Aggregate offensive power used for difficulty signalling."""
        return self.strength + self.weapon_power

    @property
    def protection(self) -> int:
        """Aggregate defensive power used for difficulty signalling."""
        return self.defence + self.armor_power

    # -- status effects ------------------------------------------------------

    def apply_status(self, status_id: str, stacks: int) -> None:
        """Add *stacks* of a status effect.  If the total falls to 0 or
        below, the status is removed entirely."""
        new_total = self.status_effects.get(status_id, 0) + stacks
        if new_total <= 0:
            self.status_effects.pop(status_id, None)
        else:
            self.status_effects[status_id] = new_total

    def get_status(self, status_id: str) -> int:
        """Return the stack count for *status_id*, or ``0`` if absent."""
        return self.status_effects.get(status_id, 0)

    # -- damage / heal -------------------------------------------------------

    def take_damage(self, amount: int, min_hp: int = 0) -> int:
        """Apply *amount* damage without letting HP drop below *min_hp*.

        Returns the actual HP lost.
        """
        if amount <= 0:
            return 0
        floor = max(0, min(min_hp, self.current_hp))
        hp_lost = min(self.current_hp - floor, amount)
        self.current_hp -= hp_lost
        return hp_lost

    def heal(self, amount: int) -> int:
        """Heal *amount* HP, capped at ``max_hp``.  Returns HP restored."""
        if amount <= 0:
            return 0
        restored = min(self.max_hp - self.current_hp, amount)
        self.current_hp += restored
        return restored


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class Player(Entity):
    """The player character as seen by the dungeon core."""

    level: int = 1
    gold: int = 0
    experience: int = 0
    potions: int = 0
    """Healing consumables carried."""

    def gain_gold(self, amount: int) -> None:
        self.gold += max(0, amount)

    def lose_gold(self, amount: int) -> int:
        """Remove up to *amount* gold.  Returns the gold actually lost."""
        lost = min(self.gold, max(0, amount))
        self.gold -= lost
        return lost

    def gain_experience(self, amount: int) -> None:
        self.experience += max(0, amount)

    def lose_experience(self, amount: int) -> int:
        """Remove up to *amount* experience (floored at 0)."""
        lost = min(self.experience, max(0, amount))
        self.experience -= lost
        return lost


# ---------------------------------------------------------------------------
# Monster
# ---------------------------------------------------------------------------

class Monster(Entity):
    """A single dungeon monster handed to combat resolution."""

    level: int = 1
    is_boss: bool = False


def starting_player(name: str = "Adventurer") -> Player:
    """A fresh level-1 adventurer with the default kit."""
    return Player(
        name=name,
        max_hp=100,
        current_hp=100,
        strength=10,
        defence=5,
        weapon_power=5,
        armor_power=3,
        gold=50,
        potions=2,
    )
