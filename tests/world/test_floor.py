"""Tests for floor graph queries and the room cursor."""

import pytest

from depthcrawl.world.enums import Direction


class TestCursor:
    def test_starts_at_entrance(self, floor):
        assert floor.current_room.id == floor.entrance_room_id == 0

    def test_move_cursor(self, floor):
        room = floor.move_cursor(3)
        assert room.id == 3
        assert floor.current_room_id == 3

    def test_move_cursor_unknown_room(self, floor):
        with pytest.raises(KeyError):
            floor.move_cursor(99)
        assert floor.current_room_id == 0

    def test_get_room(self, floor):
        assert floor.get_room(2).is_boss_room
        assert floor.get_room(42) is None


class TestGraph:
    def test_link_is_two_way(self, floor):
        assert floor.rooms[0].exits[Direction.NORTH].target_room_id == 1
        assert floor.rooms[1].exits[Direction.SOUTH].target_room_id == 0

    def test_neighbors(self, floor):
        assert floor.neighbors(0) == {1, 3}
        assert floor.neighbors(3) == {0, 4}

    def test_distances(self, floor):
        assert floor.distances_from(0) == {0: 0, 1: 1, 3: 1, 2: 2, 4: 2}

    def test_shortest_path(self, floor):
        assert floor.shortest_path(0, 2) == [0, 1, 2]
        assert floor.shortest_path(2, 4) == [2, 1, 0, 3, 4]

    def test_connected_counts_hidden_exits(self, floor):
        assert floor.is_connected()

    def test_special_room_lookups(self, floor):
        assert [r.id for r in floor.stairs_rooms()] == [3]
        assert [r.id for r in floor.boss_rooms()] == [2]
        assert floor.boss_room.id == 2


class TestExplorationState:
    def test_progress(self, floor):
        assert floor.exploration_progress == 0.0
        floor.rooms[0].is_explored = True
        floor.rooms[3].is_explored = True
        assert floor.explored_count == 2
        assert floor.exploration_progress == pytest.approx(0.4)

    def test_reveal_hidden_exits(self, floor):
        assert Direction.EAST not in floor.rooms[3].visible_exits
        assert floor.reveal_hidden_exits(3) == [Direction.EAST]
        assert floor.secrets_found == 1
        assert Direction.EAST in floor.rooms[3].visible_exits
        # Nothing left to reveal
        assert floor.reveal_hidden_exits(3) == []
        assert floor.secrets_found == 1

    def test_visible_exits_of_current_room(self, floor):
        floor.move_cursor(3)
        assert set(floor.visible_exits()) == {Direction.WEST}

    def test_floor_flags_monotonic(self, floor):
        floor.boss_defeated = True
        with pytest.raises(ValueError):
            floor.boss_defeated = False
        floor.seal_collected = True
        with pytest.raises(ValueError):
            floor.seal_collected = False
