"""Player command parsing.

Turns a line of input into a ``Command``.  Malformed input raises
``CommandParseError``; the caller reports it and reprompts.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

from depthcrawl.errors import CommandParseError
from depthcrawl.world.enums import Direction

if TYPE_CHECKING:
    from depthcrawl.exploration.outcomes import ActionResult, MoveOutcome
    from depthcrawl.exploration.session import ExplorationSession


class Verb(str, Enum):
    GO = "go"
    FIGHT = "fight"
    LOOT = "loot"
    INVESTIGATE = "investigate"
    EXAMINE = "examine"
    REST = "rest"
    DESCEND = "descend"
    ASCEND = "ascend"
    DEPTH = "depth"
    MAP = "map"
    STATUS = "status"
    ENTER = "enter"
    LEAVE = "leave"
    HELP = "help"
    QUIT = "quit"


class Command(BaseModel):
    verb: Verb
    direction: Direction | None = None
    number: int | None = None


_VERB_ALIASES: dict[str, Verb] = {
    "go": Verb.GO, "move": Verb.GO, "walk": Verb.GO,
    "fight": Verb.FIGHT, "attack": Verb.FIGHT, "f": Verb.FIGHT,
    "loot": Verb.LOOT, "collect": Verb.LOOT, "treasure": Verb.LOOT,
    "investigate": Verb.INVESTIGATE, "event": Verb.INVESTIGATE, "i": Verb.INVESTIGATE,
    "examine": Verb.EXAMINE, "x": Verb.EXAMINE, "feature": Verb.EXAMINE,
    "rest": Verb.REST, "r": Verb.REST,
    "descend": Verb.DESCEND, "down": Verb.DESCEND, "d": Verb.DESCEND,
    "ascend": Verb.ASCEND, "up": Verb.ASCEND, "u": Verb.ASCEND,
    "depth": Verb.DEPTH, "jump": Verb.DEPTH,
    "map": Verb.MAP, "m": Verb.MAP,
    "status": Verb.STATUS, "stat": Verb.STATUS,
    "enter": Verb.ENTER,
    "leave": Verb.LEAVE, "exit": Verb.LEAVE,
    "help": Verb.HELP, "?": Verb.HELP, "h": Verb.HELP,
    "quit": Verb.QUIT, "q": Verb.QUIT,
}

_DIRECTION_ALIASES: dict[str, Direction] = {
    **{d.value: d for d in Direction},
    **{d.value[0]: d for d in Direction},
}

HELP_TEXT = """\
Commands:
  n / s / e / w, go <direction>   move through an exit
  fight                           attack the monsters in the room
  loot                            collect treasure
  investigate                     resolve the room's event
  examine <n>                     interact with feature number n
  rest                            rest once per floor in a safe room
  descend / ascend                take the stairs down / climb up from the entrance
  depth <n>                       travel directly to floor n
  enter / leave                   enter the floor / return to the overview
  map, status, help, quit"""


def _parse_number(verb: Verb, tokens: list[str]) -> int:
    if len(tokens) < 2:
        raise CommandParseError(f"'{verb.value}' needs a number.")
    try:
        return int(tokens[1])
    except ValueError:
        raise CommandParseError(f"'{tokens[1]}' is not a number.") from None


def parse_command(text: str) -> Command:
    """Parse one line of player input."""
    tokens = text.strip().lower().split()
    if not tokens:
        raise CommandParseError("Please enter a command.")

    head = tokens[0]
    if head in _DIRECTION_ALIASES and len(tokens) == 1:
        return Command(verb=Verb.GO, direction=_DIRECTION_ALIASES[head])

    verb = _VERB_ALIASES.get(head)
    if verb is None:
        raise CommandParseError(f"Unknown command '{head}'. Type 'help' for a list.")

    if verb == Verb.GO:
        if len(tokens) < 2:
            raise CommandParseError("Go where?")
        direction = _DIRECTION_ALIASES.get(tokens[1])
        if direction is None:
            raise CommandParseError(f"'{tokens[1]}' is not a direction.")
        return Command(verb=verb, direction=direction)

    if verb in (Verb.EXAMINE, Verb.DEPTH):
        number = _parse_number(verb, tokens)
        if verb == Verb.EXAMINE and number < 1:
            raise CommandParseError("Feature numbers start at 1.")
        return Command(verb=verb, number=number)

    return Command(verb=verb)


def dispatch(session: ExplorationSession, command: Command) -> MoveOutcome | ActionResult:
    """Run a parsed *command* against *session*.

    ``HELP`` and ``QUIT`` belong to the caller's loop and are rejected
    here.  Raises ``CommandParseError`` for a feature number the room
    does not have.
    """
    verb = command.verb
    if verb == Verb.GO:
        return session.move(command.direction)
    if verb == Verb.ENTER:
        return session.enter_floor()
    if verb == Verb.EXAMINE:
        return session.examine_feature(command.number - 1)
    if verb == Verb.DEPTH:
        return session.change_depth(command.number)
    handler = {
        Verb.FIGHT: session.fight,
        Verb.LOOT: session.collect_treasure,
        Verb.INVESTIGATE: session.investigate_event,
        Verb.REST: session.rest,
        Verb.DESCEND: session.descend,
        Verb.ASCEND: session.ascend,
        Verb.MAP: session.show_map,
        Verb.STATUS: session.status,
        Verb.LEAVE: session.leave_floor,
    }.get(verb)
    if handler is None:
        raise CommandParseError(f"'{verb.value}' cannot be sent to the dungeon.")
    return handler()
