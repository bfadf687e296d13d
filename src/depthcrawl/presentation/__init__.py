"""Player-facing text: templates, command parsing and the console sink."""

from depthcrawl.presentation.commands import HELP_TEXT, Command, Verb, dispatch, parse_command
from depthcrawl.presentation.console import ConsoleSink
from depthcrawl.presentation.render import TextRenderer

__all__ = [
    "Command",
    "ConsoleSink",
    "HELP_TEXT",
    "TextRenderer",
    "Verb",
    "dispatch",
    "parse_command",
]
