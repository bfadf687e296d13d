"""Pure metric computation functions for balance analysis.

All functions take a list of SessionTelemetry and return structured
metrics.  No side effects, no I/O.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from depthcrawl.balance.models import (
    DepthMetrics,
    GlobalMetrics,
    SealMetrics,
    TrapMetrics,
)

if TYPE_CHECKING:
    from depthcrawl.telemetry import FloorTelemetry, SessionTelemetry


def _all_floors(sessions: list[SessionTelemetry]) -> list[FloorTelemetry]:
    return [f for s in sessions for f in s.floors]


def compute_global_metrics(sessions: list[SessionTelemetry]) -> GlobalMetrics:
    """Compute aggregate session statistics."""
    total = len(sessions)
    if total == 0:
        return GlobalMetrics(
            total_sessions=0, defeats=0, defeat_rate=0.0,
            avg_deepest_level=0.0, avg_floors_loaded=0.0,
            avg_gold_earned=0.0, ambush_rate=0.0,
        )

    defeats = sum(1 for s in sessions if s.final_result == "defeat")
    floors = _all_floors(sessions)
    monster_rooms = sum(f.monster_rooms_entered for f in floors)
    ambushes = sum(f.ambushes for f in floors)

    return GlobalMetrics(
        total_sessions=total,
        defeats=defeats,
        defeat_rate=defeats / total,
        avg_deepest_level=sum(s.deepest_level for s in sessions) / total,
        avg_floors_loaded=len(floors) / total,
        avg_gold_earned=sum(f.gold_earned for f in floors) / total,
        ambush_rate=ambushes / monster_rooms if monster_rooms else 0.0,
    )


def compute_seal_metrics(sessions: list[SessionTelemetry]) -> SealMetrics:
    """Seal discovery rate and mean progress at discovery."""
    sealed = [f for f in _all_floors(sessions) if f.had_seal]
    found = [f for f in sealed if f.seal_discovered]
    progresses = [f.seal_progress for f in found if f.seal_progress is not None]
    reasons = Counter(f.seal_reason for f in found if f.seal_reason)

    return SealMetrics(
        floors_with_seal=len(sealed),
        discovered=len(found),
        discovery_rate=len(found) / len(sealed) if sealed else 0.0,
        mean_progress_at_discovery=(
            sum(progresses) / len(progresses) if progresses else None
        ),
        reasons=dict(sorted(reasons.items())),
    )


def compute_trap_metrics(sessions: list[SessionTelemetry]) -> TrapMetrics:
    """Count every triggered trap outcome."""
    counts = Counter(o for f in _all_floors(sessions) for o in f.trap_outcomes)
    total = sum(counts.values())
    return TrapMetrics(
        total=total,
        counts=dict(sorted(counts.items())),
        distribution={k: v / total for k, v in sorted(counts.items())},
    )


def compute_depth_metrics(sessions: list[SessionTelemetry]) -> list[DepthMetrics]:
    """Per-depth statistics, sorted by level."""
    by_level: dict[int, list[FloorTelemetry]] = defaultdict(list)
    for f in _all_floors(sessions):
        by_level[f.level].append(f)

    results: list[DepthMetrics] = []
    for level in sorted(by_level):
        floors = by_level[level]
        n = len(floors)
        monster_rooms = sum(f.monster_rooms_entered for f in floors)
        results.append(DepthMetrics(
            level=level,
            floors=n,
            avg_rooms=sum(f.total_rooms for f in floors) / n,
            avg_explored_fraction=sum(
                f.rooms_explored / f.total_rooms for f in floors if f.total_rooms
            ) / n,
            ambush_rate=(
                sum(f.ambushes for f in floors) / monster_rooms if monster_rooms else 0.0
            ),
            combats_lost=sum(f.combats_lost for f in floors),
        ))
    return results
