"""Exception taxonomy for the dungeon engine."""


class DepthcrawlError(Exception):
    """Base class for every error raised by depthcrawl."""


class InvalidCommandError(DepthcrawlError):
    """Raised when a room action is requested without its precondition.

    The session converts this into a rejected result; it never escapes a
    public session method.
    """


class CommandParseError(DepthcrawlError):
    """Raised when player input cannot be parsed (unknown verb, bad number,
    out-of-range index)."""


class ConfigError(DepthcrawlError):
    """Raised when an engine configuration file is missing or invalid."""
