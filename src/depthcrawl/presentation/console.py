"""Terminal presentation sink."""

from __future__ import annotations

from depthcrawl.interfaces.base import PresentationSink


class ConsoleSink(PresentationSink):
    """Writes to stdout and reads from stdin.

    End of input is reported as ``"quit"``.
    """

    def display(self, text: str) -> None:
        print(text)

    def await_choice(self, prompt: str = "> ") -> str:
        try:
            return input(prompt)
        except EOFError:
            return "quit"
