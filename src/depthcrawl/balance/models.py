"""Pydantic v2 models for exploration balance data.

These models define the structured output of balance analysis: session
outcomes, seal discovery, trap outcomes and per-depth statistics.  All
are serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel


class GlobalMetrics(BaseModel):
    """Aggregate session statistics."""

    total_sessions: int
    defeats: int
    defeat_rate: float
    avg_deepest_level: float
    avg_floors_loaded: float
    avg_gold_earned: float
    ambush_rate: float
    """ambushes / monster rooms entered."""


class SealMetrics(BaseModel):
    """How often reserved seals are found, and how late."""

    floors_with_seal: int
    discovered: int
    discovery_rate: float
    """discovered / floors_with_seal."""
    mean_progress_at_discovery: float | None = None
    """Average exploration progress when the seal was found."""
    reasons: dict[str, int] = {}
    """Discovery count per check reason."""


class TrapMetrics(BaseModel):
    """Distribution of triggered trap outcomes."""

    total: int
    counts: dict[str, int]
    distribution: dict[str, float]
    """Share of each outcome among all triggered traps."""


class DepthMetrics(BaseModel):
    """Per-depth statistics over every load of that floor."""

    level: int
    floors: int
    avg_rooms: float
    avg_explored_fraction: float
    ambush_rate: float
    combats_lost: int


class BalanceSnapshot(BaseModel):
    """Top-level balance data structure."""

    agent: str
    """Agent class used for the batch (e.g. 'RandomExplorer')."""
    num_sessions: int
    generated_at: str
    """ISO 8601 timestamp."""
    global_metrics: GlobalMetrics
    seal_metrics: SealMetrics
    trap_metrics: TrapMetrics
    depth_metrics: list[DepthMetrics]
