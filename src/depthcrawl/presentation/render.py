"""TextRenderer -- turns floors, rooms and session results into text.

Views with structure (floor overview, room, map, status) are jinja2
templates under ``templates/``; one-line outcomes are assembled here.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from depthcrawl.exploration.outcomes import (
    ActionResult,
    CombatReport,
    MapEntry,
    MoveOutcome,
    StatusSnapshot,
)
from depthcrawl.scaling.difficulty import DifficultyLabel
from depthcrawl.world.floor import DungeonFloor
from depthcrawl.world.room import Room

_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TextRenderer:
    """Renders the player-facing views of a session."""

    def __init__(self, milestone_floors: list[int] | None = None) -> None:
        self.milestone_floors = set(milestone_floors or [])
        self._jinja = Environment(
            loader=FileSystemLoader(str(_TEMPLATE_DIR)),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    # -- templated views -----------------------------------------------------

    def render_overview(self, floor: DungeonFloor) -> str:
        template = self._jinja.get_template("overview.txt.j2")
        return template.render(floor=floor, milestone=floor.level in self.milestone_floors)

    def render_room(self, room: Room, difficulty: DifficultyLabel | None = None) -> str:
        template = self._jinja.get_template("room.txt.j2")
        return template.render(
            room=room,
            exits=room.visible_exits,
            monster_names=", ".join(m.name for m in room.monsters),
            difficulty=difficulty.value if difficulty else None,
        )

    def render_map(self, level: int, entries: list[MapEntry]) -> str:
        rows = [
            (entry, " ".join(f"{d.short}->{target}" for d, target in entry.exits.items()))
            for entry in entries
        ]
        return self._jinja.get_template("map.txt.j2").render(level=level, rows=rows)

    def render_status(self, snapshot: StatusSnapshot) -> str:
        afflictions = ", ".join(f"{name} x{stacks}" for name, stacks in snapshot.statuses.items())
        return self._jinja.get_template("status.txt.j2").render(s=snapshot, afflictions=afflictions)

    # -- outcomes ------------------------------------------------------------

    def render_combat(self, report: CombatReport) -> str:
        opening = "Ambush! " if report.ambush else ""
        foes = ", ".join(report.monster_names) or "nothing"
        verdict = "You are victorious" if report.victory else "You have been defeated"
        return f"{opening}You fight {foes}. {verdict} (lost {report.hp_lost} HP)."

    def render_move(self, outcome: MoveOutcome, room: Room | None) -> str:
        """Everything that happened on entering a room, then the room view."""
        if not outcome.ok:
            return outcome.message
        parts: list[str] = []
        if outcome.trap is not None:
            parts.append(outcome.trap.summary)
        if outcome.seal_discovered is not None:
            parts.append("An ancient seal reveals itself to you!")
        if outcome.event is not None:
            parts.append(outcome.event.message)
        if outcome.rare_encounter:
            parts.append("You feel watched by something rare and strange.")
        if outcome.combat is not None:
            parts.append(self.render_combat(outcome.combat))
        if room is not None:
            parts.append(self.render_room(room, outcome.difficulty).rstrip("\n"))
        return "\n".join(parts)

    def render_action(self, result: ActionResult, floor: DungeonFloor) -> str:
        if not result.ok:
            return result.message
        if result.map is not None:
            return self.render_map(floor.level, result.map).rstrip("\n")
        if result.status is not None:
            return self.render_status(result.status).rstrip("\n")
        parts: list[str] = []
        if result.combat is not None:
            parts.append(self.render_combat(result.combat))
        elif result.message:
            parts.append(result.message)
        if result.entry is not None:
            parts.append(self.render_move(result.entry, floor.current_room))
        return "\n".join(parts)
