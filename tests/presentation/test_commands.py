"""Tests for command parsing and dispatch."""

import pytest

from depthcrawl.errors import CommandParseError
from depthcrawl.exploration.outcomes import ActionResult, MoveOutcome
from depthcrawl.presentation.commands import Command, Verb, dispatch, parse_command
from depthcrawl.world.enums import Direction


class TestParseCommand:
    @pytest.mark.parametrize("text,direction", [
        ("n", Direction.NORTH),
        ("s", Direction.SOUTH),
        ("east", Direction.EAST),
        ("go west", Direction.WEST),
        ("move n", Direction.NORTH),
        ("  Go   SOUTH  ", Direction.SOUTH),
    ])
    def test_movement(self, text, direction):
        assert parse_command(text) == Command(verb=Verb.GO, direction=direction)

    @pytest.mark.parametrize("text,verb", [
        ("fight", Verb.FIGHT),
        ("attack", Verb.FIGHT),
        ("loot", Verb.LOOT),
        ("i", Verb.INVESTIGATE),
        ("rest", Verb.REST),
        ("d", Verb.DESCEND),
        ("up", Verb.ASCEND),
        ("m", Verb.MAP),
        ("status", Verb.STATUS),
        ("enter", Verb.ENTER),
        ("exit", Verb.LEAVE),
        ("?", Verb.HELP),
        ("q", Verb.QUIT),
    ])
    def test_verbs(self, text, verb):
        assert parse_command(text).verb == verb

    def test_examine_number(self):
        assert parse_command("examine 2") == Command(verb=Verb.EXAMINE, number=2)
        assert parse_command("x 1").number == 1

    def test_depth_number(self):
        assert parse_command("depth 40") == Command(verb=Verb.DEPTH, number=40)

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "dance",
        "go",
        "go up",
        "examine",
        "examine two",
        "examine 0",
        "depth deep",
    ])
    def test_malformed_input(self, text):
        with pytest.raises(CommandParseError):
            parse_command(text)

    def test_error_names_the_word(self):
        with pytest.raises(CommandParseError, match="dance"):
            parse_command("dance")


class TestDispatch:
    def test_move_returns_move_outcome(self, make_session):
        s = make_session()
        assert isinstance(dispatch(s, parse_command("enter")), MoveOutcome)
        result = dispatch(s, parse_command("e"))
        assert isinstance(result, MoveOutcome)
        assert result.room_id == 3

    def test_examine_is_one_based(self, make_session):
        s = make_session()
        s.enter_floor()
        s.move(Direction.EAST)
        result = dispatch(s, parse_command("examine 1"))
        assert isinstance(result, ActionResult)
        assert result.feature.name == "suspicious wall"

    def test_examine_missing_feature_raises(self, make_session):
        s = make_session()
        s.enter_floor()
        with pytest.raises(CommandParseError):
            dispatch(s, parse_command("examine 3"))

    def test_depth(self, make_session):
        s = make_session()
        result = dispatch(s, parse_command("depth 4"))
        assert result.ok and s.level == 4

    @pytest.mark.parametrize("text,action", [
        ("fight", "fight"),
        ("loot", "loot"),
        ("investigate", "investigate"),
        ("rest", "rest"),
        ("descend", "descend"),
        ("ascend", "ascend"),
        ("leave", "leave"),
    ])
    def test_room_actions_route_to_session(self, make_session, text, action):
        result = dispatch(make_session(), parse_command(text))
        assert result.action == action
        assert not result.ok

    def test_map_and_status(self, make_session):
        s = make_session()
        assert dispatch(s, parse_command("map")).map is not None
        assert dispatch(s, parse_command("status")).status is not None

    @pytest.mark.parametrize("text", ["help", "quit"])
    def test_loop_verbs_are_not_dispatched(self, make_session, text):
        with pytest.raises(CommandParseError):
            dispatch(make_session(), parse_command(text))
