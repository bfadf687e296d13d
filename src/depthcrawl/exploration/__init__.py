"""Exploration state machine and its result models."""

from depthcrawl.exploration.interactions import InteractionResolver
from depthcrawl.exploration.outcomes import (
    ActionResult,
    CombatReport,
    EventResolution,
    FeatureResolution,
    MapEntry,
    MoveOutcome,
    SessionState,
    StatusSnapshot,
)
from depthcrawl.exploration.session import ExplorationSession

__all__ = [
    "ActionResult",
    "CombatReport",
    "EventResolution",
    "ExplorationSession",
    "FeatureResolution",
    "InteractionResolver",
    "MapEntry",
    "MoveOutcome",
    "SessionState",
    "StatusSnapshot",
]
