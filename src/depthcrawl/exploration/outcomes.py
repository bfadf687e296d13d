"""Result models returned by the exploration session.

Every public session call returns one of these; rejected commands come
back with ``ok=False`` and a reason in ``message`` rather than raising.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from depthcrawl.interfaces.base import CombatResult
from depthcrawl.scaling.difficulty import DifficultyLabel
from depthcrawl.scaling.rewards import TreasureReward
from depthcrawl.scaling.traps import TrapResult
from depthcrawl.world.enums import (
    Direction,
    DungeonEventType,
    FeatureInteraction,
    SealType,
)


class SessionState(str, Enum):
    OVERVIEW = "overview"
    """Outside the floor, looking at its summary."""
    IN_ROOM = "in_room"
    """Cursor on a room."""


class CombatReport(BaseModel):
    result: CombatResult
    ambush: bool = False
    boss: bool = False
    monster_names: list[str] = Field(default_factory=list)
    difficulty: DifficultyLabel | None = None
    hp_lost: int = 0

    @property
    def victory(self) -> bool:
        return self.result == CombatResult.VICTORY


class EventResolution(BaseModel):
    """Outcome of a room event."""

    event_type: DungeonEventType
    success: bool = True
    message: str = ""
    gold: int = 0
    experience: int = 0
    hp_change: int = 0
    consumables: int = 0
    trap: TrapResult | None = None


class FeatureResolution(BaseModel):
    """Outcome of interacting with a room feature."""

    name: str
    interaction: FeatureInteraction
    message: str = ""
    gold: int = 0
    hp_change: int = 0
    revealed: list[Direction] = Field(default_factory=list)


class MapEntry(BaseModel):
    """One room as the player knows it."""

    room_id: int
    name: str
    explored: bool
    current: bool = False
    markers: list[str] = Field(default_factory=list)
    exits: dict[Direction, int] = Field(default_factory=dict)


class StatusSnapshot(BaseModel):
    player_name: str
    hp: int
    max_hp: int
    gold: int
    experience: int
    potions: int
    level: int
    theme: str
    rooms_explored: int
    total_rooms: int
    progress: float
    monsters_killed: int
    treasures_found: int
    secrets_found: int
    boss_defeated: bool
    has_rested: bool
    seal_pending: bool
    statuses: dict[str, int] = Field(default_factory=dict)


class MoveOutcome(BaseModel):
    """Result of entering a room (by movement, floor entry or descent).

    ``steps`` lists the side effects applied, in order.
    """

    ok: bool
    message: str = ""
    direction: Direction | None = None
    room_id: int | None = None
    first_visit: bool = False
    steps: list[str] = Field(default_factory=list)
    trap: TrapResult | None = None
    seal_discovered: SealType | None = None
    event: EventResolution | None = None
    rare_encounter: bool = False
    monsters_present: bool = False
    difficulty: DifficultyLabel | None = None
    ambush: bool = False
    combat: CombatReport | None = None


class ActionResult(BaseModel):
    """Result of a room action (fight, loot, rest, depth change, ...)."""

    ok: bool
    action: str
    message: str = ""
    reward: TreasureReward | None = None
    combat: CombatReport | None = None
    event: EventResolution | None = None
    feature: FeatureResolution | None = None
    healed: int = 0
    level: int | None = None
    map: list[MapEntry] | None = None
    status: StatusSnapshot | None = None
    entry: MoveOutcome | None = None
    """First-visit side effects of the entrance after a descent."""
