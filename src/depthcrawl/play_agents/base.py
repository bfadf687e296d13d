"""Base class for autopilot agents that explore a dungeon session.

All explorer agents subclass ``ExplorerAgent`` and implement
``choose_action``.  The batch runner calls it before every step with the
commands whose preconditions currently hold.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depthcrawl.exploration.session import ExplorationSession


class ExplorerAgent(ABC):
    """Base class for agents that drive an exploration session."""

    @abstractmethod
    def choose_action(
        self,
        session: ExplorationSession,
        actions: list[str],
    ) -> str | None:
        """Choose the next command to issue.

        Parameters
        ----------
        session:
            The live session, giving the agent full observability.
        actions:
            Command strings (as accepted by ``parse_command``) whose
            preconditions hold right now, e.g. ``"go north"``, ``"fight"``,
            ``"examine 2"``.

        Returns
        -------
        str | None
            One of *actions*, or ``None`` to end the session.
        """
