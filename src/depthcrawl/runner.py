"""Batch runner -- drives many seeded autopilot sessions for balance work.

Each session gets a fresh ``starting_player`` and its own seed
(``base_seed + i``).  The agent RNG is forked from the same seed so a
batch is fully reproducible.  Commands go through ``parse_command`` and
``dispatch``, the same path the interactive CLI uses.
"""

from __future__ import annotations

import logging
import multiprocessing

from depthcrawl.config import EngineConfig
from depthcrawl.core.entities import starting_player
from depthcrawl.core.rng import GameRNG
from depthcrawl.exploration.session import ExplorationSession
from depthcrawl.play_agents.base import ExplorerAgent
from depthcrawl.play_agents.random_explorer import RandomExplorer
from depthcrawl.presentation.commands import dispatch, parse_command
from depthcrawl.telemetry import SessionTelemetry

logger = logging.getLogger(__name__)

_MAX_ACTIONS = 2000


def _make_agent(agent_class: type[ExplorerAgent], seed: int) -> ExplorerAgent:
    agent_rng = GameRNG(seed).fork("agent")
    try:
        return agent_class(rng=agent_rng)  # type: ignore[call-arg]
    except TypeError:
        return agent_class()  # type: ignore[call-arg]


def run_single_session(
    agent: ExplorerAgent,
    seed: int,
    config: EngineConfig | None = None,
    start_level: int = 1,
    max_actions: int = _MAX_ACTIONS,
) -> SessionTelemetry:
    """Play one session until defeat, agent stop, or *max_actions*.

    Parameters
    ----------
    agent:
        Autopilot choosing every command.
    seed:
        Session RNG seed.
    config:
        Engine tunables; defaults to ``EngineConfig()``.
    start_level:
        Depth of the first floor.
    max_actions:
        Upper bound on commands issued, rejected ones included.
    """
    session = ExplorationSession(
        starting_player(), seed=seed, level=start_level, config=config,
    )
    for _ in range(max_actions):
        if session.player.is_dead or session.telemetry.final_result == "defeat":
            break
        choice = agent.choose_action(session, session.available_actions())
        if choice is None:
            break
        dispatch(session, parse_command(choice))
    else:
        logger.debug("Session %d hit the action cap (%d)", seed, max_actions)

    logger.debug(
        "Session %d finished: %s at depth %d",
        seed, session.telemetry.final_result, session.telemetry.deepest_level,
    )
    return session.telemetry


def _worker_run_single(args: tuple) -> SessionTelemetry:
    """Worker entry point for multiprocessing."""
    agent_class, config, seed, start_level, max_actions = args
    agent = _make_agent(agent_class, seed)
    return run_single_session(agent, seed, config, start_level, max_actions)


class BatchRunner:
    """Runs many autopilot sessions, optionally in parallel."""

    def __init__(
        self,
        agent_class: type[ExplorerAgent] = RandomExplorer,
        config: EngineConfig | None = None,
    ) -> None:
        self.agent_class = agent_class
        self.config = config or EngineConfig()

    def run_batch(
        self,
        n_sessions: int,
        base_seed: int = 42,
        start_level: int = 1,
        max_actions: int = _MAX_ACTIONS,
        parallel: bool = False,
    ) -> list[SessionTelemetry]:
        """Run *n_sessions* sessions seeded ``base_seed .. base_seed + n - 1``."""
        work_items = [
            (self.agent_class, self.config, base_seed + i, start_level, max_actions)
            for i in range(n_sessions)
        ]
        logger.info("Running %d sessions with %s", n_sessions, self.agent_class.__name__)

        if parallel and n_sessions > 1:
            n_workers = min(n_sessions, multiprocessing.cpu_count() or 1)
            with multiprocessing.Pool(processes=n_workers) as pool:
                return pool.map(_worker_run_single, work_items)
        return [_worker_run_single(item) for item in work_items]
