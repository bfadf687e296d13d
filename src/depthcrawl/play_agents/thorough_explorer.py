"""Thorough explorer -- clears every room before taking the stairs.

Behaviour, in priority order:
    1. Enter the floor when outside it.
    2. Fight monsters in the current room.
    3. Loot treasure, resolve the event, then interact with features.
    4. Rest once HP drops below half.
    5. Walk towards the nearest unexplored room (shortest path over
       visible exits).
    6. When nothing is left to explore, descend.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from depthcrawl.play_agents.base import ExplorerAgent
from depthcrawl.world.enums import Direction

if TYPE_CHECKING:
    from depthcrawl.exploration.session import ExplorationSession


class ThoroughExplorer(ExplorerAgent):
    """Agent that explores the whole floor before descending."""

    def __init__(self, rng=None) -> None:
        # Deterministic; rng accepted for runner symmetry
        self._rng = rng

    def choose_action(
        self,
        session: ExplorationSession,
        actions: list[str],
    ) -> str | None:
        if "enter" in actions:
            return "enter"
        for action in ("fight", "loot", "investigate"):
            if action in actions:
                return action
        features = [a for a in actions if a.startswith("examine ")]
        if features:
            return features[0]
        player = session.player
        if "rest" in actions and player.current_hp * 2 < player.max_hp:
            return "rest"

        step = self._next_step(session)
        if step is not None and f"go {step.value}" in actions:
            return f"go {step.value}"
        if "descend" in actions:
            return "descend"
        if session.floor.stairs_room_id is not None:
            towards = self._step_towards(session, session.floor.stairs_room_id)
            if towards is not None:
                return f"go {towards.value}"
        return None

    @staticmethod
    def _bfs(session: ExplorationSession) -> dict[int, Direction | None]:
        """First step from the current room to every reachable room."""
        floor = session.floor
        start = floor.current_room_id
        first_step: dict[int, Direction | None] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for direction, exit_ in floor.rooms[current].visible_exits.items():
                target = exit_.target_room_id
                if target in first_step:
                    continue
                first_step[target] = first_step[current] or direction
                queue.append(target)
        return first_step

    def _next_step(self, session: ExplorationSession) -> Direction | None:
        floor = session.floor
        for room_id, step in self._bfs(session).items():
            if step is not None and not floor.rooms[room_id].is_explored:
                return step
        return None

    def _step_towards(self, session: ExplorationSession, room_id: int) -> Direction | None:
        return self._bfs(session).get(room_id)
