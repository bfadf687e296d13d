"""Dungeon floor -- the room graph for one depth level plus floor counters.

Houses the full mutable state of a loaded floor and the graph queries
the generator, the session and the tests need (neighbours, BFS
distances, reachability, exploration progress).
"""

from __future__ import annotations

from collections import deque
from typing import ClassVar

from pydantic import Field

from depthcrawl.world.enums import Direction, SealType, Theme
from depthcrawl.world.room import Exit, MonotonicModel, Room


class DungeonFloor(MonotonicModel):
    """One generated depth level.

    The graph is stored as directed exits, but every edge the generator
    creates has a mirrored exit in the opposite direction, so reachability
    is computed over the undirected view.
    """

    _monotonic_fields: ClassVar[frozenset[str]] = frozenset({
        "boss_defeated",
        "seal_collected",
    })

    level: int
    theme: Theme
    danger_level: int = Field(ge=1, le=10)
    rooms: dict[int, Room] = Field(default_factory=dict)
    entrance_room_id: int = 0
    current_room_id: int = 0

    boss_room_id: int | None = None
    stairs_room_id: int | None = None
    treasury_room_id: int | None = None

    # -- counters ------------------------------------------------------------
    monsters_killed: int = 0
    treasures_found: int = 0
    boss_defeated: bool = False
    secrets_found: int = 0
    puzzles_solved: int = 0
    riddles_answered: int = 0
    lore_fragments_collected: int = 0

    # -- seal discovery ------------------------------------------------------
    has_uncollected_seal: bool = False
    seal_type: SealType | None = None
    seal_collected: bool = False
    seal_room_id: int | None = None

    # -- room access ---------------------------------------------------------

    @property
    def current_room(self) -> Room:
        return self.rooms[self.current_room_id]

    @property
    def entrance(self) -> Room:
        return self.rooms[self.entrance_room_id]

    def get_room(self, room_id: int) -> Room | None:
        return self.rooms.get(room_id)

    def move_cursor(self, room_id: int) -> Room:
        """Point the cursor at *room_id*.  Raises ``KeyError`` if the room
        is not part of this floor."""
        if room_id not in self.rooms:
            raise KeyError(f"Room {room_id} does not exist on floor {self.level}")
        self.current_room_id = room_id
        return self.rooms[room_id]

    # -- graph construction --------------------------------------------------

    def link(
        self,
        room_a: Room,
        direction: Direction,
        room_b: Room,
        description_ab: str,
        description_ba: str,
    ) -> None:
        """Create a two-way connection ``room_a --direction--> room_b``."""
        room_a.exits[direction] = Exit(
            target_room_id=room_b.id, description=description_ab,
        )
        room_b.exits[direction.opposite] = Exit(
            target_room_id=room_a.id, description=description_ba,
        )

    # -- graph queries -------------------------------------------------------

    def neighbors(self, room_id: int) -> set[int]:
        """Rooms adjacent to *room_id* in the undirected view of the graph."""
        adjacent = {e.target_room_id for e in self.rooms[room_id].exits.values()}
        for other in self.rooms.values():
            if any(e.target_room_id == room_id for e in other.exits.values()):
                adjacent.add(other.id)
        adjacent.discard(room_id)
        return adjacent

    def distances_from(self, start_id: int) -> dict[int, int]:
        """Shortest-path hop counts from *start_id* to every reachable room."""
        adjacency = self._undirected_adjacency()
        distances = {start_id: 0}
        queue = deque([start_id])
        while queue:
            current = queue.popleft()
            for nxt in sorted(adjacency[current]):
                if nxt not in distances:
                    distances[nxt] = distances[current] + 1
                    queue.append(nxt)
        return distances

    def shortest_path(self, start_id: int, goal_id: int) -> list[int]:
        """Room ids along a shortest path, both ends included (``[]`` if none)."""
        adjacency = self._undirected_adjacency()
        parents: dict[int, int | None] = {start_id: None}
        queue = deque([start_id])
        while queue:
            current = queue.popleft()
            if current == goal_id:
                break
            for nxt in sorted(adjacency[current]):
                if nxt not in parents:
                    parents[nxt] = current
                    queue.append(nxt)
        if goal_id not in parents:
            return []
        path: list[int] = []
        node: int | None = goal_id
        while node is not None:
            path.append(node)
            node = parents[node]
        return list(reversed(path))

    def reachable_from(self, start_id: int) -> set[int]:
        return set(self.distances_from(start_id))

    def is_connected(self) -> bool:
        """Every room is reachable from the entrance."""
        return self.reachable_from(self.entrance_room_id) == set(self.rooms)

    def _undirected_adjacency(self) -> dict[int, set[int]]:
        adjacency: dict[int, set[int]] = {rid: set() for rid in self.rooms}
        for room in self.rooms.values():
            for exit_ in room.exits.values():
                if exit_.target_room_id in adjacency:
                    adjacency[room.id].add(exit_.target_room_id)
                    adjacency[exit_.target_room_id].add(room.id)
        return adjacency

    # -- exploration ---------------------------------------------------------

    @property
    def total_rooms(self) -> int:
        return len(self.rooms)

    @property
    def explored_count(self) -> int:
        return sum(1 for r in self.rooms.values() if r.is_explored)

    @property
    def exploration_progress(self) -> float:
        """Fraction of rooms explored, in ``[0, 1]``."""
        if not self.rooms:
            return 0.0
        return self.explored_count / self.total_rooms

    @property
    def boss_room(self) -> Room | None:
        if self.boss_room_id is None:
            return None
        return self.rooms.get(self.boss_room_id)

    def stairs_rooms(self) -> list[Room]:
        return [r for r in self.rooms.values() if r.has_stairs_down]

    def boss_rooms(self) -> list[Room]:
        return [r for r in self.rooms.values() if r.is_boss_room]

    def visible_exits(self) -> dict[Direction, Exit]:
        """Usable exits of the room under the cursor."""
        return self.current_room.visible_exits

    def reveal_hidden_exits(self, room_id: int) -> list[Direction]:
        """Reveal every hidden exit leading out of *room_id*.

        Returns the directions newly revealed; each one counts as a secret
        found.
        """
        revealed: list[Direction] = []
        for direction, exit_ in self.rooms[room_id].exits.items():
            if exit_.is_hidden and not exit_.is_revealed:
                exit_.is_revealed = True
                revealed.append(direction)
        self.secrets_found += len(revealed)
        return revealed
