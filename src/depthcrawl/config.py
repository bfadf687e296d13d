"""Engine configuration -- every tunable constant of the dungeon core.

The probability constants (ambush, seal-eligible chamber roll, discovery
slope) are load-bearing for the difficulty curve; change them only when
deliberately rebalancing.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from depthcrawl.errors import ConfigError


class EngineConfig(BaseModel):
    """Tunables for floor generation, exploration and scaling."""

    model_config = ConfigDict(extra="forbid")

    max_level: int = Field(default=100, ge=1)

    # -- floor size ----------------------------------------------------------
    room_count_base: int = Field(default=10, ge=1)
    room_count_depth_divisor: int = Field(default=10, ge=1)
    min_rooms: int = Field(default=8, ge=3)
    max_rooms: int = Field(default=20, ge=3)
    extra_edge_divisor: int = Field(default=3, ge=1)
    """``rooms // extra_edge_divisor`` attempts at adding loop edges."""

    # -- content rates -------------------------------------------------------
    monster_chance: float = Field(default=0.6, ge=0.0, le=1.0)
    event_chance: float = Field(default=0.3, ge=0.0, le=1.0)
    trap_chance: float = Field(default=0.15, ge=0.0, le=1.0)
    treasure_chance: float = Field(default=0.1, ge=0.0, le=1.0)

    # -- exploration ---------------------------------------------------------
    ambush_chance: float = Field(default=0.30, ge=0.0, le=1.0)
    rest_heal_fraction: float = Field(default=0.30, ge=0.0, le=1.0)

    # -- seal discovery ------------------------------------------------------
    chamber_seal_chance: float = Field(default=0.20, ge=0.0, le=1.0)
    seal_guaranteed_progress: float = Field(default=0.75, ge=0.0, le=1.0)
    seal_min_progress: float = Field(default=0.5, ge=0.0, le=1.0)
    seal_base_chance: float = Field(default=0.15, ge=0.0, le=1.0)
    seal_progress_slope: float = Field(default=0.4, ge=0.0)

    # -- rewards -------------------------------------------------------------
    bonus_consumable_chance: float = Field(default=0.30, ge=0.0, le=1.0)

    # -- story ---------------------------------------------------------------
    milestone_floors: list[int] = Field(default_factory=lambda: [10, 25, 50, 75, 100])
    rare_encounter_chance: float = Field(default=0.02, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_ranges(self) -> EngineConfig:
        if self.min_rooms > self.max_rooms:
            raise ValueError(
                f"min_rooms ({self.min_rooms}) exceeds max_rooms ({self.max_rooms})"
            )
        if self.seal_min_progress > self.seal_guaranteed_progress:
            raise ValueError("seal_min_progress must not exceed seal_guaranteed_progress")
        return self

    def room_count(self, level: int) -> int:
        """Number of rooms on a floor at *level* (grows weakly with depth)."""
        count = self.room_count_base + level // self.room_count_depth_divisor
        return max(self.min_rooms, min(self.max_rooms, count))

    def clamp_level(self, level: int) -> int:
        return max(1, min(self.max_level, level))


def load_config(path: Path) -> EngineConfig:
    """Load an ``EngineConfig`` from a JSON file."""
    try:
        data = json.loads(path.read_text())
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config {path} is not valid JSON: {exc}") from exc
    try:
        return EngineConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc


def save_config(config: EngineConfig, path: Path) -> None:
    """Save an ``EngineConfig`` to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.model_dump(), indent=2))
