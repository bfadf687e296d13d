"""Telemetry data models for per-floor and per-session statistics.

These lightweight dataclasses capture what balance analysis needs without
storing the whole floor history:

- **FloorTelemetry**: one loaded floor -- rooms explored, traps, ambushes,
  combats, treasure, seal discovery.
- **SessionTelemetry**: seed, ordered floor records, final outcome.

Both are plain ``dataclass`` instances (not Pydantic models) to keep
collection cheap during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FloorTelemetry:
    """Stats from one loaded floor.

    Attributes
    ----------
    level:
        Depth of the floor.
    theme:
        Theme value of the floor.
    total_rooms:
        Number of rooms generated.
    rooms_explored:
        First visits made while the floor was loaded.
    trap_outcomes:
        Outcome value of every trap triggered, in order.
    monster_rooms_entered:
        Entries into rooms with uncleared monsters.
    ambushes:
        Entries that forced combat.
    had_seal:
        Whether the floor carried a seal when generated.
    seal_progress:
        Exploration progress at the moment the seal was found, or ``None``.
    """

    level: int
    theme: str
    total_rooms: int
    rooms_explored: int = 0
    trap_outcomes: list[str] = field(default_factory=list)
    monster_rooms_entered: int = 0
    ambushes: int = 0
    combats_won: int = 0
    combats_lost: int = 0
    treasures_found: int = 0
    gold_earned: int = 0
    events_completed: int = 0
    secrets_found: int = 0
    rare_encounters: int = 0
    rested: bool = False
    boss_defeated: bool = False
    had_seal: bool = False
    seal_discovered: bool = False
    seal_progress: float | None = None
    seal_reason: str | None = None


@dataclass
class SessionTelemetry:
    """Stats from a full exploration session.

    Attributes
    ----------
    seed:
        The session RNG seed.
    floors:
        Ordered list of floor telemetry, one per floor load.
    final_result:
        ``"defeat"`` if the player fell, ``"alive"`` otherwise.
    deepest_level:
        Deepest depth loaded during the session.
    """

    seed: int
    floors: list[FloorTelemetry] = field(default_factory=list)
    final_result: str = "alive"  # "alive" or "defeat"
    deepest_level: int = 0
    actions_taken: int = 0
    rejected_actions: int = 0

    @property
    def current_floor(self) -> FloorTelemetry | None:
        return self.floors[-1] if self.floors else None
