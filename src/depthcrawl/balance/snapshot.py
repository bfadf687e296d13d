"""Snapshot generation: run sessions, compute metrics, save/load JSON.

Orchestrates BatchRunner -> metric computation -> BalanceSnapshot model.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from depthcrawl.balance.metrics import (
    compute_depth_metrics,
    compute_global_metrics,
    compute_seal_metrics,
    compute_trap_metrics,
)
from depthcrawl.balance.models import BalanceSnapshot
from depthcrawl.config import EngineConfig
from depthcrawl.play_agents.base import ExplorerAgent
from depthcrawl.play_agents.random_explorer import RandomExplorer
from depthcrawl.runner import BatchRunner
from depthcrawl.telemetry import SessionTelemetry


def build_snapshot(
    sessions: list[SessionTelemetry], agent: str,
) -> BalanceSnapshot:
    """Compute every metric over already collected *sessions*."""
    return BalanceSnapshot(
        agent=agent,
        num_sessions=len(sessions),
        generated_at=datetime.now(timezone.utc).isoformat(),
        global_metrics=compute_global_metrics(sessions),
        seal_metrics=compute_seal_metrics(sessions),
        trap_metrics=compute_trap_metrics(sessions),
        depth_metrics=compute_depth_metrics(sessions),
    )


def generate_snapshot(
    num_sessions: int = 200,
    base_seed: int = 42,
    agent_class: type[ExplorerAgent] = RandomExplorer,
    config: EngineConfig | None = None,
    start_level: int = 1,
    parallel: bool = False,
) -> BalanceSnapshot:
    """Run a batch of autopilot sessions and summarise them.

    Parameters
    ----------
    num_sessions:
        Number of sessions to play.
    base_seed:
        Starting seed for reproducible batches.
    agent_class:
        Autopilot used for every session.
    config:
        Engine tunables under test.
    start_level:
        Depth each session starts at.
    parallel:
        Use a process pool.
    """
    runner = BatchRunner(agent_class=agent_class, config=config)
    sessions = runner.run_batch(
        num_sessions, base_seed=base_seed, start_level=start_level, parallel=parallel,
    )
    return build_snapshot(sessions, agent_class.__name__)


def save_snapshot(snapshot: BalanceSnapshot, path: Path) -> None:
    """Save snapshot to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot.model_dump(), indent=2))


def load_snapshot(path: Path) -> BalanceSnapshot:
    """Load snapshot from JSON file."""
    return BalanceSnapshot.model_validate(json.loads(path.read_text()))
