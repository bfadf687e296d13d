"""Seal discovery.

The check runs on a room's first visit while the floor still holds an
uncollected seal.  With ``progress = explored / total`` (computed after
the entered room is marked explored):

1. ``progress >= 0.75`` -- discovery is guaranteed.
2. The room is seal-eligible -- discovery succeeds.
3. ``progress < 0.5`` -- nothing this visit.
4. Otherwise it succeeds with ``0.15 + (progress - 0.5) * 0.4``.

The functions here are stateless; the session applies the result.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from depthcrawl.config import EngineConfig
from depthcrawl.core.rng import GameRNG
from depthcrawl.world.enums import SEAL_ROOM_TYPES, DungeonEventType, RoomType
from depthcrawl.world.floor import DungeonFloor
from depthcrawl.world.room import Room

_DEFAULT_CONFIG = EngineConfig()


class SealCheckReason(str, Enum):
    INACTIVE = "inactive"
    GUARANTEED = "guaranteed"
    ELIGIBLE_ROOM = "eligible_room"
    BELOW_THRESHOLD = "below_threshold"
    PROGRESS_ROLL = "progress_roll"
    ROLL_FAILED = "roll_failed"


class SealCheck(BaseModel):
    discovered: bool
    reason: SealCheckReason
    progress: float = 0.0
    chance: float = 0.0


def exploration_progress(floor: DungeonFloor) -> float:
    """Fraction of the floor's rooms explored."""
    return floor.exploration_progress


def is_seal_eligible(
    room: Room, rng: GameRNG, config: EngineConfig | None = None,
) -> bool:
    """Whether *room* can carry the seal.

    Only a Chamber consumes an RNG draw (its independent low-probability
    roll); every other room is decided deterministically.
    """
    config = config or _DEFAULT_CONFIG
    if room.type in SEAL_ROOM_TYPES or room.is_boss_room:
        return True
    if room.has_pending_event and room.event_type == DungeonEventType.SHRINE:
        return True
    if room.type == RoomType.CHAMBER:
        return rng.chance(config.chamber_seal_chance)
    return False


def seal_discovery_chance(progress: float, config: EngineConfig | None = None) -> float:
    """Probability of discovery in a non-eligible room at *progress*."""
    config = config or _DEFAULT_CONFIG
    if progress >= config.seal_guaranteed_progress:
        return 1.0
    if progress < config.seal_min_progress:
        return 0.0
    return config.seal_base_chance + (progress - config.seal_min_progress) * config.seal_progress_slope


def check_seal_discovery(
    floor: DungeonFloor,
    room: Room,
    rng: GameRNG,
    config: EngineConfig | None = None,
) -> SealCheck:
    """Decide whether entering *room* discovers the floor's seal."""
    config = config or _DEFAULT_CONFIG
    if not floor.has_uncollected_seal or floor.seal_collected:
        return SealCheck(discovered=False, reason=SealCheckReason.INACTIVE)

    progress = exploration_progress(floor)
    if progress >= config.seal_guaranteed_progress:
        return SealCheck(
            discovered=True, reason=SealCheckReason.GUARANTEED, progress=progress, chance=1.0,
        )
    if is_seal_eligible(room, rng, config):
        return SealCheck(
            discovered=True, reason=SealCheckReason.ELIGIBLE_ROOM, progress=progress, chance=1.0,
        )
    if progress < config.seal_min_progress:
        return SealCheck(
            discovered=False, reason=SealCheckReason.BELOW_THRESHOLD, progress=progress,
        )

    chance = seal_discovery_chance(progress, config)
    if rng.chance(chance):
        return SealCheck(
            discovered=True, reason=SealCheckReason.PROGRESS_ROLL, progress=progress, chance=chance,
        )
    return SealCheck(
        discovered=False, reason=SealCheckReason.ROLL_FAILED, progress=progress, chance=chance,
    )
