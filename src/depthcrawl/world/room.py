"""Room graph model -- rooms, their exits and their content flags.

Completion flags (``is_cleared``, ``treasure_looted``, ``trap_triggered``,
``event_completed``, ``is_interacted``, ...) are monotonic: once ``True``
they can never be assigned ``False`` again.  The guard lives in
``__setattr__`` so it holds no matter which code path mutates the room.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, Field

from depthcrawl.core.entities import Monster
from depthcrawl.world.enums import (
    Direction,
    DungeonEventType,
    FeatureInteraction,
    LoreFragmentType,
    RoomType,
    Theme,
)


class MonotonicModel(BaseModel):
    """Base model whose listed boolean fields may only go False -> True."""

    _monotonic_fields: ClassVar[frozenset[str]] = frozenset()

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._monotonic_fields and getattr(self, name) and not value:
            raise ValueError(
                f"{type(self).__name__}.{name} is a completion flag and cannot "
                f"be reset once set"
            )
        super().__setattr__(name, value)


# ---------------------------------------------------------------------------
# Exit
# ---------------------------------------------------------------------------

class Exit(MonotonicModel):
    """A directed edge from one room to another, keyed by direction."""

    _monotonic_fields: ClassVar[frozenset[str]] = frozenset({"is_revealed"})

    target_room_id: int
    description: str
    is_hidden: bool = False
    is_revealed: bool = False
    """Only meaningful for hidden exits."""

    @property
    def is_usable(self) -> bool:
        """A hidden exit can be walked through only once revealed."""
        return not self.is_hidden or self.is_revealed


# ---------------------------------------------------------------------------
# RoomFeature
# ---------------------------------------------------------------------------

class RoomFeature(MonotonicModel):
    """Something in a room the player can interact with once."""

    _monotonic_fields: ClassVar[frozenset[str]] = frozenset({"is_interacted"})

    name: str
    description: str
    interaction: FeatureInteraction
    is_interacted: bool = False


# ---------------------------------------------------------------------------
# Room
# ---------------------------------------------------------------------------

class Room(MonotonicModel):
    """A node of the floor graph."""

    _monotonic_fields: ClassVar[frozenset[str]] = frozenset({
        "is_explored",
        "is_cleared",
        "treasure_looted",
        "trap_triggered",
        "event_completed",
    })

    id: int
    name: str
    description: str = ""
    atmosphere_text: str = ""
    type: RoomType = RoomType.CHAMBER
    theme: Theme = Theme.CATACOMBS
    danger_rating: int = Field(default=1, ge=0, le=3)

    exits: dict[Direction, Exit] = Field(default_factory=dict)
    features: list[RoomFeature] = Field(default_factory=list)

    is_explored: bool = False

    has_monsters: bool = False
    is_cleared: bool = False
    monsters: list[Monster] = Field(default_factory=list)
    """Encounter rolled when the room's monsters are first seen."""

    has_treasure: bool = False
    treasure_looted: bool = False

    has_trap: bool = False
    trap_triggered: bool = False

    has_event: bool = False
    event_type: DungeonEventType = DungeonEventType.NONE
    event_completed: bool = False
    event_difficulty: int = 1
    """Puzzle / riddle difficulty."""

    has_stairs_down: bool = False
    is_boss_room: bool = False
    is_secret_room: bool = False

    lore_fragment: LoreFragmentType | None = None
    memory_fragment_level: int = 0

    # -- queries -------------------------------------------------------------

    @property
    def is_safe(self) -> bool:
        """No living monsters stand between the player and the room."""
        return not self.has_monsters or self.is_cleared

    @property
    def has_uncleared_monsters(self) -> bool:
        return self.has_monsters and not self.is_cleared

    @property
    def has_unlooted_treasure(self) -> bool:
        return self.has_treasure and not self.treasure_looted

    @property
    def has_pending_event(self) -> bool:
        return self.has_event and not self.event_completed

    @property
    def has_armed_trap(self) -> bool:
        return self.has_trap and not self.trap_triggered

    @property
    def has_unresolved_content(self) -> bool:
        return (
            self.has_uncleared_monsters
            or self.has_unlooted_treasure
            or self.has_pending_event
            or self.has_armed_trap
        )

    @property
    def visible_exits(self) -> dict[Direction, Exit]:
        """Exits the player can currently see and use."""
        return {d: e for d, e in self.exits.items() if e.is_usable}

    def free_directions(self) -> list[Direction]:
        """Directions with no exit yet, in compass order."""
        return [d for d in Direction if d not in self.exits]

    def pending_features(self) -> list[RoomFeature]:
        return [f for f in self.features if not f.is_interacted]
