"""Interactive command-line entry point.

Usage:
    depthcrawl [--seed N] [--level N] [--config engine.json] [--log-level INFO]
"""

from __future__ import annotations

import argparse
import logging
import secrets
import sys
from pathlib import Path

from depthcrawl.config import EngineConfig, load_config
from depthcrawl.core.entities import starting_player
from depthcrawl.errors import CommandParseError, ConfigError
from depthcrawl.exploration.outcomes import MoveOutcome
from depthcrawl.exploration.session import ExplorationSession
from depthcrawl.interfaces.base import PresentationSink
from depthcrawl.presentation.commands import HELP_TEXT, Command, Verb, dispatch, parse_command
from depthcrawl.presentation.console import ConsoleSink
from depthcrawl.presentation.render import TextRenderer

logger = logging.getLogger(__name__)


def execute(session: ExplorationSession, command: Command, renderer: TextRenderer) -> str:
    """Run *command* against *session* and return the text to show.

    Raises ``CommandParseError`` for a feature number the room does not
    have.
    """
    result = dispatch(session, command)
    if isinstance(result, MoveOutcome):
        room = session.current_room if result.ok and session.in_room else None
        text = renderer.render_move(result, room)
    else:
        text = renderer.render_action(result, session.floor)
        if result.action in ("map", "status"):
            return text
    if result.ok and not session.in_room:
        text += "\n" + renderer.render_overview(session.floor)
    return text


def run_loop(
    session: ExplorationSession, sink: PresentationSink, renderer: TextRenderer,
) -> int:
    """Read-eval-print loop.  Returns the process exit code."""
    sink.display(renderer.render_overview(session.floor))
    while True:
        prompt = f"[floor {session.level}] > "
        try:
            command = parse_command(sink.await_choice(prompt))
        except CommandParseError as exc:
            sink.display(str(exc))
            continue

        if command.verb == Verb.QUIT:
            sink.display("You leave the dungeon behind. Farewell.")
            return 0
        if command.verb == Verb.HELP:
            sink.display(HELP_TEXT)
            continue

        try:
            sink.display(execute(session, command, renderer))
        except CommandParseError as exc:
            sink.display(str(exc))
            continue

        if session.player.is_dead:
            sink.display("Your adventure ends here.")
            return 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="depthcrawl", description="Explore a procedurally generated dungeon.")
    parser.add_argument("--seed", type=int, default=None, help="Session seed (default: random)")
    parser.add_argument("--level", type=int, default=1, help="Starting depth")
    parser.add_argument("--name", default="Adventurer", help="Player name")
    parser.add_argument("--config", type=Path, default=None, help="Engine config JSON file")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else EngineConfig()
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    seed = args.seed if args.seed is not None else secrets.randbelow(2**31)
    logger.info("Starting session with seed %d", seed)
    sink = ConsoleSink()
    session = ExplorationSession(
        starting_player(args.name),
        seed=seed,
        level=args.level,
        config=config,
        sink=sink,
    )
    return run_loop(session, sink, TextRenderer(config.milestone_floors))


if __name__ == "__main__":
    sys.exit(main())
