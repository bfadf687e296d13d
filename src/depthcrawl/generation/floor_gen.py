"""Floor generator -- builds the connected room graph for one depth level.

Layout of a floor:
- Room 0 is the entrance: a safe Hall with no monsters, trap or event.
- Rooms are attached one at a time to a random already-connected room
  (a spanning tree), then ``rooms // extra_edge_divisor`` extra edges add
  loops and branches.
- The boss lair is one of the rooms farthest from the entrance.
- One guarded treasury, one stairs room (unless at maximum depth) and an
  optional boss antechamber on the shortest entrance -> boss path.
- Depth-gated special rooms (vaults, arenas, puzzles, riddles, libraries,
  meditation chambers, memory fragments).
- On a seal floor at least one seal-eligible room is guaranteed.

Generation never fails; when an ideal placement is impossible it logs the
fallback and carries on.
"""

from __future__ import annotations

import logging

from depthcrawl.config import EngineConfig
from depthcrawl.core.rng import GameRNG
from depthcrawl.generation.flavor import (
    boss_lair_flavor,
    exit_description,
    hidden_exit_description,
    lore_fragment_for_level,
    room_flavor,
    theme_features,
    theme_for_level,
)
from depthcrawl.world.enums import (
    SEAL_ROOM_TYPES,
    DungeonEventType,
    FeatureInteraction,
    RoomType,
    SealType,
    Theme,
)
from depthcrawl.world.floor import DungeonFloor
from depthcrawl.world.room import Room, RoomFeature

logger = logging.getLogger(__name__)


# Weighted pool for ordinary rooms (weights sum to 100)
_STANDARD_WEIGHTS: list[tuple[RoomType, int]] = [
    (RoomType.CORRIDOR, 25),
    (RoomType.CHAMBER, 25),
    (RoomType.HALL, 15),
    (RoomType.ALCOVE, 15),
    (RoomType.SHRINE, 10),
    (RoomType.CRYPT, 10),
]

STANDARD_ROOM_TYPES: frozenset[RoomType] = frozenset(t for t, _ in _STANDARD_WEIGHTS)

# Events rolled for ordinary rooms with ``has_event`` (weights sum to 100)
_EVENT_WEIGHTS: list[tuple[DungeonEventType, int]] = [
    (DungeonEventType.TREASURE_CHEST, 20),
    (DungeonEventType.MYSTERY_EVENT, 20),
    (DungeonEventType.NPC_ENCOUNTER, 15),
    (DungeonEventType.REST_SPOT, 15),
    (DungeonEventType.MERCHANT, 10),
    (DungeonEventType.SHRINE, 10),
    (DungeonEventType.TRAP, 10),
]

# Extra rooms queued on floors that carry a seal
_SEAL_FLOOR_ROOMS: list[RoomType] = [
    RoomType.SHRINE,
    RoomType.SECRET_VAULT,
    RoomType.MEDITATION_CHAMBER,
]

_REVEALING_INTERACTIONS = frozenset({
    FeatureInteraction.SEARCH,
    FeatureInteraction.BREAK,
    FeatureInteraction.ENTER,
})

_LORE_GUARD_CHANCE = 0.3
_ANTECHAMBER_GUARD_CHANCE = 0.5
_ANTECHAMBER_TRAP_CHANCE = 0.3


def _weighted_pick(rng: GameRNG, weights: list[tuple[RoomType | DungeonEventType, int]]):
    total = sum(w for _, w in weights)
    roll = rng.random_float() * total
    cumulative = 0
    for item, weight in weights:
        cumulative += weight
        if roll < cumulative:
            return item
    return weights[-1][0]


class FloorGenerator:
    """Builds ``DungeonFloor`` instances.

    Parameters
    ----------
    config:
        Tunables (room counts, content rates, maximum depth).  Defaults to
        ``EngineConfig()``.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def generate(
        self,
        level: int,
        rng: GameRNG,
        theme: Theme | None = None,
        seal_type: SealType | None = None,
    ) -> DungeonFloor:
        """Generate a floor for *level*.

        Parameters
        ----------
        level:
            Depth; clamped to ``[1, max_level]``.
        rng:
            RNG consumed by generation.  The result is a pure function of
            ``(level, theme, seal_type)`` and the RNG state.
        theme:
            Force a theme instead of deriving it from depth.
        seal_type:
            When set, the floor carries an uncollected seal of this type.
        """
        level = self.config.clamp_level(level)
        theme = theme or theme_for_level(level)
        room_count = self.config.room_count(level)

        types = self._roll_room_types(level, room_count, rng, seal_type is not None)
        rooms = [self._create_room(i, rtype, level, theme, rng) for i, rtype in enumerate(types)]

        floor = DungeonFloor(
            level=level,
            theme=theme,
            danger_level=max(1, min(10, level // 10)),
            rooms={room.id: room for room in rooms},
            entrance_room_id=0,
            current_room_id=0,
        )

        self._connect(floor, rooms, theme, rng)
        self._place_boss(floor, theme, rng)
        self._place_treasury(floor, rng)
        self._place_stairs(floor, rng)
        self._place_antechamber(floor, theme, rng)
        self._hide_vault_entrances(floor, theme)
        self._assign_events(floor, rng)
        if seal_type is not None:
            self._reserve_seal(floor, seal_type)

        logger.debug(
            "Generated floor %d (%s): %d rooms, boss=%s, stairs=%s, treasury=%s, seal=%s",
            level, theme.value, floor.total_rooms, floor.boss_room_id,
            floor.stairs_room_id, floor.treasury_room_id,
            seal_type.value if seal_type else None,
        )
        return floor

    # ------------------------------------------------------------------
    # Room types
    # ------------------------------------------------------------------

    def _roll_room_types(
        self, level: int, room_count: int, rng: GameRNG, seal_floor: bool,
    ) -> list[RoomType]:
        """Entrance Hall followed by shuffled special and standard rooms."""
        specials: list[RoomType] = []
        if seal_floor:
            specials.extend(_SEAL_FLOOR_ROOMS)
        specials.extend([RoomType.SECRET_VAULT] * (1 + level // 25))
        if level >= 5:
            specials.append(RoomType.ARENA_ROOM)
        if level >= 8:
            specials.append(RoomType.PUZZLE_ROOM)
        if level >= 10:
            specials.append(RoomType.MEDITATION_CHAMBER)
        if level >= 12:
            specials.append(RoomType.RIDDLE_GATE)
        if level >= 15:
            specials.append(RoomType.LORE_LIBRARY)
        if level >= 20 and level % 15 == 0:
            specials.append(RoomType.MEMORY_FRAGMENT)

        # At least half the floor stays standard
        special_cap = (room_count - 1) // 2
        if len(specials) > special_cap:
            logger.debug(
                "Floor %d: %d special rooms capped to %d",
                level, len(specials), special_cap,
            )
            specials = specials[:special_cap]

        body = list(specials)
        while len(body) < room_count - 1:
            body.append(_weighted_pick(rng, _STANDARD_WEIGHTS))
        rng.shuffle(body)
        return [RoomType.HALL] + body

    # ------------------------------------------------------------------
    # Room creation
    # ------------------------------------------------------------------

    def _create_room(
        self, room_id: int, room_type: RoomType, level: int, theme: Theme, rng: GameRNG,
    ) -> Room:
        name, description, atmosphere = room_flavor(theme, room_type, rng)
        pool = theme_features(theme)
        rng.shuffle(pool)
        features = pool[: rng.random_int(1, min(3, len(pool)))]

        room = Room(
            id=room_id,
            name=name,
            description=description,
            atmosphere_text=atmosphere,
            type=room_type,
            theme=theme,
            features=features,
        )
        if room_id == 0:
            room.danger_rating = 0
            return room

        cfg = self.config
        room.danger_rating = rng.random_int(1, 3)
        room.has_monsters = rng.chance(cfg.monster_chance)
        room.has_event = rng.chance(cfg.event_chance)
        room.has_trap = rng.chance(cfg.trap_chance)
        room.has_treasure = rng.chance(cfg.treasure_chance)
        self._configure_special(room, level, rng)
        return room

    def _configure_special(self, room: Room, level: int, rng: GameRNG) -> None:
        """Apply the fixed content of depth-gated special room types."""
        rtype = room.type
        if rtype == RoomType.PUZZLE_ROOM:
            room.has_event = True
            room.event_type = DungeonEventType.PUZZLE
            room.event_difficulty = 1 + level // 20
            room.has_monsters = False
        elif rtype == RoomType.RIDDLE_GATE:
            room.has_event = True
            room.event_type = DungeonEventType.RIDDLE
            room.event_difficulty = 1 + level // 25
            room.has_monsters = False
        elif rtype == RoomType.LORE_LIBRARY:
            room.has_event = True
            room.event_type = DungeonEventType.LORE_DISCOVERY
            room.lore_fragment = lore_fragment_for_level(level)
            room.has_monsters = rng.chance(_LORE_GUARD_CHANCE)
        elif rtype == RoomType.MEDITATION_CHAMBER:
            room.has_event = True
            room.event_type = DungeonEventType.REST_SPOT
            room.has_monsters = False
            room.has_trap = False
        elif rtype == RoomType.ARENA_ROOM:
            room.has_monsters = True
            room.has_treasure = True
        elif rtype == RoomType.SECRET_VAULT:
            room.is_secret_room = True
            room.has_monsters = True
            room.has_trap = True
            room.has_treasure = True
        elif rtype == RoomType.MEMORY_FRAGMENT:
            room.has_event = True
            room.event_type = DungeonEventType.MEMORY_FLASH
            room.memory_fragment_level = level

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def _connect(
        self, floor: DungeonFloor, rooms: list[Room], theme: Theme, rng: GameRNG,
    ) -> None:
        """Spanning attachment followed by a bounded number of extra edges."""
        connected = [rooms[0]]
        for room in rooms[1:]:
            # A tree always has a leaf with free directions
            anchors = [r for r in connected if r.free_directions()]
            anchor = rng.random_choice(anchors)
            direction = rng.random_choice(anchor.free_directions())
            floor.link(
                anchor, direction, room,
                exit_description(direction, theme),
                exit_description(direction.opposite, theme),
            )
            connected.append(room)

        for _ in range(len(rooms) // self.config.extra_edge_divisor):
            sources = [r for r in rooms if r.free_directions()]
            if not sources:
                break
            source = rng.random_choice(sources)
            direction = rng.random_choice(source.free_directions())
            adjacent = floor.neighbors(source.id)
            targets = [
                r for r in rooms
                if r.id != source.id
                and r.id not in adjacent
                and direction.opposite not in r.exits
            ]
            if not targets:
                continue
            target = rng.random_choice(targets)
            floor.link(
                source, direction, target,
                exit_description(direction, theme),
                exit_description(direction.opposite, theme),
            )

    # ------------------------------------------------------------------
    # Special placements
    # ------------------------------------------------------------------

    def _place_boss(self, floor: DungeonFloor, theme: Theme, rng: GameRNG) -> None:
        distances = floor.distances_from(floor.entrance_room_id)
        farthest = max(distances.values())
        if farthest == 0:
            logger.warning("Floor %d has a single room; no boss placed", floor.level)
            return
        candidates = sorted(rid for rid, d in distances.items() if d == farthest)
        boss = floor.rooms[rng.random_choice(candidates)]

        boss.name, boss.description = boss_lair_flavor(theme)
        boss.type = RoomType.BOSS_LAIR
        boss.is_boss_room = True
        boss.is_secret_room = False
        boss.danger_rating = 3
        boss.has_monsters = True
        boss.has_treasure = False
        boss.has_trap = False
        boss.has_event = False
        boss.event_type = DungeonEventType.NONE
        boss.lore_fragment = None
        boss.memory_fragment_level = 0
        floor.boss_room_id = boss.id

    def _place_treasury(self, floor: DungeonFloor, rng: GameRNG) -> None:
        reserved = {floor.entrance_room_id, floor.boss_room_id}
        others = [r for r in floor.rooms.values() if r.id not in reserved]
        if not others:
            return
        # Special rooms keep their own content when a standard room exists
        standard = [r for r in others if r.type in STANDARD_ROOM_TYPES]
        treasury = rng.random_choice(standard or others)
        treasury.has_treasure = True
        treasury.has_trap = True
        treasury.has_monsters = True
        floor.treasury_room_id = treasury.id

    def _place_stairs(self, floor: DungeonFloor, rng: GameRNG) -> None:
        if floor.level >= self.config.max_level:
            return
        reserved = {floor.entrance_room_id, floor.boss_room_id, floor.treasury_room_id}
        candidates = [r for r in floor.rooms.values() if r.id not in reserved]
        if not candidates:
            logger.info("Floor %d: no free room for stairs, using the entrance", floor.level)
            candidates = [floor.entrance]
        open_candidates = [r for r in candidates if r.type != RoomType.SECRET_VAULT]
        stairs = rng.random_choice(open_candidates or candidates)
        stairs.has_stairs_down = True
        floor.stairs_room_id = stairs.id

    def _place_antechamber(self, floor: DungeonFloor, theme: Theme, rng: GameRNG) -> None:
        if floor.boss_room_id is None:
            return
        path = floor.shortest_path(floor.entrance_room_id, floor.boss_room_id)
        if len(path) < 3:
            return
        room = floor.rooms[path[-2]]
        if room.id in {floor.stairs_room_id, floor.treasury_room_id}:
            return
        room.name, room.description, room.atmosphere_text = room_flavor(
            theme, RoomType.BOSS_ANTECHAMBER, rng,
        )
        room.type = RoomType.BOSS_ANTECHAMBER
        room.is_secret_room = False
        room.has_monsters = rng.chance(_ANTECHAMBER_GUARD_CHANCE)
        room.has_trap = rng.chance(_ANTECHAMBER_TRAP_CHANCE)
        room.has_event = False
        room.event_type = DungeonEventType.NONE
        room.lore_fragment = None
        room.memory_fragment_level = 0

    def _hide_vault_entrances(self, floor: DungeonFloor, theme: Theme) -> None:
        """Hide every exit leading into a secret vault.

        Each room holding such an exit is guaranteed a feature able to
        reveal it.
        """
        vault_ids = {r.id for r in floor.rooms.values() if r.type == RoomType.SECRET_VAULT}
        if not vault_ids:
            return
        for room in floor.rooms.values():
            hides = False
            for exit_ in room.exits.values():
                if exit_.target_room_id in vault_ids and room.id not in vault_ids:
                    exit_.is_hidden = True
                    hides = True
            if hides and not any(
                f.interaction in _REVEALING_INTERACTIONS for f in room.features
            ):
                room.features.append(RoomFeature(
                    name="suspicious wall",
                    description=hidden_exit_description(theme),
                    interaction=FeatureInteraction.SEARCH,
                ))

    def _assign_events(self, floor: DungeonFloor, rng: GameRNG) -> None:
        for room in floor.rooms.values():
            if not room.has_event or room.event_type != DungeonEventType.NONE:
                continue
            if room.type == RoomType.SHRINE:
                room.event_type = DungeonEventType.SHRINE
            else:
                room.event_type = _weighted_pick(rng, _EVENT_WEIGHTS)

    def _reserve_seal(self, floor: DungeonFloor, seal_type: SealType) -> None:
        """Mark the seal and make sure a seal-eligible room exists."""
        floor.has_uncollected_seal = True
        floor.seal_type = seal_type

        eligible = [
            r for r in floor.rooms.values()
            if r.id != floor.entrance_room_id and r.type in SEAL_ROOM_TYPES
        ]
        if eligible:
            return

        reserved = {
            floor.entrance_room_id, floor.boss_room_id,
            floor.stairs_room_id, floor.treasury_room_id,
        }
        convertible = [
            r for r in floor.rooms.values()
            if r.id not in reserved and r.type in STANDARD_ROOM_TYPES
        ]
        if convertible:
            room = convertible[0]
            logger.info(
                "Floor %d: no seal-eligible room rolled, converting room %d (%s) to a shrine",
                floor.level, room.id, room.type.value,
            )
            room.type = RoomType.SHRINE
            return

        logger.info(
            "Floor %d: no seal-eligible room available, boss room %s carries the seal",
            floor.level, floor.boss_room_id,
        )
