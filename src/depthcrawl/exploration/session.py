"""Exploration session -- the per-player state machine over one floor.

The session owns the session RNG, the currently loaded ``DungeonFloor``
and the per-floor counters.  It has two states:

- ``OVERVIEW``: outside the floor, looking at its summary.
- ``IN_ROOM``: the cursor is on a room.

Entering a room runs a fixed sequence of side effects:

1. resolve the exit (reject if absent),
2. trigger an armed trap,
3. move the cursor, mark first visits explored and auto-clear rooms
   without monsters,
4. on a first visit, run the seal-discovery check,
5. on a first visit, auto-trigger the mandatory event of puzzle rooms
   and riddle gates,
6. on a first visit, ask the rare-encounter hook,
7. with uncleared monsters, preview the encounter and roll an ambush
   (never in a boss room); otherwise reset the monster-room streak.

Every action runs to completion before returning.  Commands whose
precondition does not hold are rejected with a reason and change
nothing.

Usage::

    from depthcrawl.exploration.session import ExplorationSession
    from depthcrawl.core.entities import starting_player

    session = ExplorationSession(starting_player(), seed=42)
    session.enter_floor()
    outcome = session.move("north")
"""

from __future__ import annotations

import logging
from typing import Callable

from depthcrawl.config import EngineConfig
from depthcrawl.core.entities import Monster, Player
from depthcrawl.core.rng import GameRNG
from depthcrawl.errors import CommandParseError, InvalidCommandError
from depthcrawl.exploration.interactions import InteractionResolver
from depthcrawl.exploration.outcomes import (
    ActionResult,
    CombatReport,
    MapEntry,
    MoveOutcome,
    SessionState,
    StatusSnapshot,
)
from depthcrawl.generation.floor_gen import FloorGenerator
from depthcrawl.interfaces.base import (
    CombatResolver,
    CombatResult,
    MonsterSupply,
    PresentationSink,
    RareEncounterHook,
    StoryFlags,
)
from depthcrawl.interfaces.defaults import (
    AutoCombatResolver,
    BufferSink,
    ChanceRareEncounter,
    FallbackMonsterSupply,
    InMemoryStory,
)
from depthcrawl.scaling.difficulty import assess_encounter
from depthcrawl.scaling.discovery import check_seal_discovery
from depthcrawl.scaling.rewards import grant_reward, roll_boss_bonus, roll_treasure
from depthcrawl.scaling.traps import TrapResult, apply_trap, roll_trap
from depthcrawl.telemetry import FloorTelemetry, SessionTelemetry
from depthcrawl.world.enums import Direction, RoomType
from depthcrawl.world.floor import DungeonFloor
from depthcrawl.world.room import Room

logger = logging.getLogger(__name__)

# Room types whose event fires on entry and cannot be walked past
_MANDATORY_EVENT_ROOMS = frozenset({RoomType.RIDDLE_GATE, RoomType.PUZZLE_ROOM})


class ExplorationSession:
    """Moves a cursor through a floor and applies room side effects.

    Parameters
    ----------
    player:
        The player character; mutated in place.
    seed:
        Seed of the session RNG.  A fixed seed plus a fixed command
        sequence reproduces every outcome.
    level:
        Starting depth (clamped to ``[1, max_level]``).
    config:
        Engine tunables.
    generator:
        Floor generator; defaults to ``FloorGenerator(config)``.
    monsters, combat, story, sink, rare_encounters:
        Collaborators; working defaults are used when omitted.
    allies:
        Companions passed to combat resolution untouched.
    """

    def __init__(
        self,
        player: Player,
        *,
        seed: int = 0,
        level: int = 1,
        config: EngineConfig | None = None,
        generator: FloorGenerator | None = None,
        monsters: MonsterSupply | None = None,
        combat: CombatResolver | None = None,
        story: StoryFlags | None = None,
        sink: PresentationSink | None = None,
        rare_encounters: RareEncounterHook | None = None,
        allies: list[Player] | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.player = player
        self.rng = GameRNG(seed)
        self.generator = generator or FloorGenerator(self.config)
        self.monsters = monsters or FallbackMonsterSupply()
        self.combat = combat or AutoCombatResolver()
        self.story = story or InMemoryStory()
        self.sink = sink or BufferSink()
        self.rare_encounters = rare_encounters or ChanceRareEncounter(
            self.rng.fork("rare"), self.config.rare_encounter_chance,
        )
        self.allies = list(allies or [])
        self.interactions = InteractionResolver(self.rng, self.story)
        self.telemetry = SessionTelemetry(seed=seed)

        self.state = SessionState.OVERVIEW
        self.rooms_explored_this_floor = 0
        self.has_rest_this_floor = False
        self.consecutive_monster_rooms = 0
        self.floor: DungeonFloor = self._load_floor(level)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def level(self) -> int:
        return self.floor.level

    @property
    def current_room(self) -> Room:
        return self.floor.current_room

    @property
    def in_room(self) -> bool:
        return self.state == SessionState.IN_ROOM

    def available_actions(self) -> list[str]:
        """Commands whose preconditions currently hold, as command text."""
        actions: list[str] = ["map", "status"]
        if not self.in_room:
            if not self.player.is_dead:
                actions.append("enter")
            if self.level > 1:
                actions.append("ascend")
            return actions

        room = self.current_room
        actions.extend(f"go {d.value}" for d in room.visible_exits)
        if room.has_uncleared_monsters:
            actions.append("fight")
        if room.is_safe:
            if room.has_unlooted_treasure:
                actions.append("loot")
            if room.has_pending_event:
                actions.append("investigate")
            actions.extend(
                f"examine {i + 1}"
                for i, f in enumerate(room.features) if not f.is_interacted
            )
            if not self.has_rest_this_floor:
                actions.append("rest")
            if room.has_stairs_down and self.level < self.config.max_level:
                actions.append("descend")
        if room.id == self.floor.entrance_room_id and self.level > 1:
            actions.append("ascend")
        actions.append("leave")
        return actions

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def enter_floor(self) -> MoveOutcome:
        """``OVERVIEW -> IN_ROOM`` at the floor entrance."""
        try:
            if self.in_room:
                raise InvalidCommandError("You are already inside the dungeon.")
            if self.player.is_dead:
                raise InvalidCommandError("You are too wounded to enter the dungeon.")
        except InvalidCommandError as exc:
            return self._reject_move(str(exc))

        self.state = SessionState.IN_ROOM
        logger.debug("Entering floor %d", self.level)
        outcome = MoveOutcome(ok=True)
        self._arrive(self.floor.entrance, outcome)
        self.telemetry.actions_taken += 1
        return outcome

    def leave_floor(self) -> ActionResult:
        """``IN_ROOM -> OVERVIEW``.  Nothing already applied is rolled back."""
        return self._attempt("leave", self._do_leave)

    def _do_leave(self) -> ActionResult:
        self._require_room()
        self.state = SessionState.OVERVIEW
        logger.debug("Leaving floor %d", self.level)
        return ActionResult(ok=True, action="leave", message="You step back from the dungeon.")

    def move(self, direction: Direction | str) -> MoveOutcome:
        """Walk through the exit in *direction* (``IN_ROOM -> IN_ROOM``)."""
        try:
            self._require_room()
            try:
                direction = Direction(direction)
            except ValueError:
                raise InvalidCommandError(f"'{direction}' is not a direction.") from None
            exit_ = self.current_room.visible_exits.get(direction)
            if exit_ is None:
                raise InvalidCommandError(f"You cannot go {direction.value} from here.")
        except InvalidCommandError as exc:
            return self._reject_move(str(exc))

        outcome = MoveOutcome(ok=True, direction=direction)
        self._arrive(self.floor.rooms[exit_.target_room_id], outcome)
        self.telemetry.actions_taken += 1
        return outcome

    # ------------------------------------------------------------------
    # Room entry protocol
    # ------------------------------------------------------------------

    def _arrive(self, room: Room, outcome: MoveOutcome) -> None:
        floor = self.floor
        floor_stats = self.telemetry.current_floor

        if room.has_armed_trap:
            outcome.trap = self._trigger_trap(room)
            outcome.steps.append("trap")

        first_visit = not room.is_explored
        floor.move_cursor(room.id)
        outcome.room_id = room.id
        outcome.first_visit = first_visit
        outcome.steps.append("enter")

        if first_visit:
            room.is_explored = True
            if not room.has_monsters:
                room.is_cleared = True
            self.rooms_explored_this_floor += 1
            floor_stats.rooms_explored += 1
            outcome.steps.append("explore")

            self._check_seal(room, outcome)
            outcome.steps.append("seal_check")

            if room.type in _MANDATORY_EVENT_ROOMS and room.has_pending_event:
                outcome.event = self.interactions.resolve_event(floor, room, self.player)
                floor_stats.events_completed += 1
                outcome.steps.append("event")

            if self.rare_encounters.try_rare_encounter(floor.level, floor.theme):
                outcome.rare_encounter = True
                floor_stats.rare_encounters += 1
                self._notify("Something rare stirs in the shadows of this room...")
            outcome.steps.append("rare_encounter")

        if room.has_uncleared_monsters:
            self.consecutive_monster_rooms += 1
            floor_stats.monster_rooms_entered += 1
            group = self._encounter(room)
            outcome.monsters_present = True
            outcome.difficulty = assess_encounter(self.player, group).label
            if not room.is_boss_room and self.rng.chance(self.config.ambush_chance):
                logger.info("Ambush in room %d on floor %d", room.id, floor.level)
                floor_stats.ambushes += 1
                outcome.ambush = True
                outcome.steps.append("ambush")
                outcome.combat = self._run_combat(room, ambush=True)
        else:
            self.consecutive_monster_rooms = 0

    def _trigger_trap(self, room: Room) -> TrapResult:
        result = apply_trap(self.player, roll_trap(self.floor.level, self.player.gold, self.rng))
        room.trap_triggered = True
        self.telemetry.current_floor.trap_outcomes.append(result.outcome.value)
        logger.info(
            "Trap (%s) triggered in room %d on floor %d",
            result.outcome.value, room.id, self.floor.level,
        )
        return result

    def _check_seal(self, room: Room, outcome: MoveOutcome) -> None:
        floor = self.floor
        check = check_seal_discovery(floor, room, self.rng, self.config)
        if not check.discovered:
            return
        floor.seal_collected = True
        floor.has_uncollected_seal = False
        floor.seal_room_id = room.id
        self.story.collect_seal(floor.seal_type, self.player)
        outcome.seal_discovered = floor.seal_type

        floor_stats = self.telemetry.current_floor
        floor_stats.seal_discovered = True
        floor_stats.seal_progress = check.progress
        floor_stats.seal_reason = check.reason.value
        logger.info(
            "Seal %s discovered in room %d on floor %d (%s, progress %.2f)",
            floor.seal_type.value, room.id, floor.level, check.reason.value, check.progress,
        )
        self._notify(f"You have found the Seal of {floor.seal_type.value.replace('_', ' ').title()}!")

    def _encounter(self, room: Room) -> list[Monster]:
        """The room's monster group, rolled once when first seen."""
        if not room.monsters:
            room.monsters = self.monsters.generate_monster_group(
                self.floor.level, self.rng, theme=self.floor.theme, boss=room.is_boss_room,
            )
            if not room.monsters:
                logger.warning(
                    "Monster supply returned an empty group for room %d on floor %d",
                    room.id, self.floor.level,
                )
        return room.monsters

    def _run_combat(self, room: Room, ambush: bool) -> CombatReport:
        group = self._encounter(room)
        label = assess_encounter(self.player, group).label
        hp_before = self.player.current_hp
        result = self.combat.resolve_combat(self.player, group, self.allies)
        report = CombatReport(
            result=result,
            ambush=ambush,
            boss=room.is_boss_room,
            monster_names=[m.name for m in group],
            difficulty=label,
            hp_lost=max(0, hp_before - self.player.current_hp),
        )

        floor_stats = self.telemetry.current_floor
        if result == CombatResult.VICTORY:
            room.is_cleared = True
            self.floor.monsters_killed += len(group)
            room.monsters = []
            floor_stats.combats_won += 1
            if room.is_boss_room:
                self.floor.boss_defeated = True
                room.has_treasure = True
                floor_stats.boss_defeated = True
                logger.info("Boss of floor %d defeated", self.floor.level)
        else:
            floor_stats.combats_lost += 1
            self.telemetry.final_result = "defeat"
            self.state = SessionState.OVERVIEW
            logger.info("Player defeated in room %d on floor %d", room.id, self.floor.level)
            self._notify("You have been defeated and drag yourself out of the dungeon.")
        return report

    # ------------------------------------------------------------------
    # Room actions
    # ------------------------------------------------------------------

    def fight(self) -> ActionResult:
        return self._attempt("fight", self._do_fight)

    def _do_fight(self) -> ActionResult:
        room = self._require_room()
        if not room.has_uncleared_monsters:
            raise InvalidCommandError("There is nothing here to fight.")
        report = self._run_combat(room, ambush=False)
        message = "Victory!" if report.victory else "Defeat."
        return ActionResult(ok=True, action="fight", combat=report, message=message)

    def collect_treasure(self) -> ActionResult:
        return self._attempt("loot", self._do_collect_treasure)

    def _do_collect_treasure(self) -> ActionResult:
        room = self._require_safe_room("loot")
        if not room.has_unlooted_treasure:
            raise InvalidCommandError("There is no treasure here.")
        if room.is_boss_room:
            reward = roll_boss_bonus(self.floor.level, self.rng)
        else:
            reward = roll_treasure(self.floor.level, self.rng, self.config)
        grant_reward(self.player, reward)
        room.treasure_looted = True
        self.floor.treasures_found += 1

        floor_stats = self.telemetry.current_floor
        floor_stats.treasures_found += 1
        floor_stats.gold_earned += reward.gold
        message = f"You collect {reward.gold} gold and {reward.experience} experience."
        if reward.consumables:
            message += f" You also find {reward.consumables} potion(s)."
        return ActionResult(ok=True, action="loot", reward=reward, message=message)

    def investigate_event(self) -> ActionResult:
        return self._attempt("investigate", self._do_investigate_event)

    def _do_investigate_event(self) -> ActionResult:
        room = self._require_safe_room("investigate")
        if not room.has_pending_event:
            raise InvalidCommandError("There is nothing here to investigate.")
        resolution = self.interactions.resolve_event(self.floor, room, self.player)
        self.telemetry.current_floor.events_completed += 1
        if resolution.trap is not None:
            self.telemetry.current_floor.trap_outcomes.append(resolution.trap.outcome.value)
        return ActionResult(
            ok=True, action="investigate", event=resolution, message=resolution.message,
        )

    def examine_feature(self, index: int) -> ActionResult:
        """Interact with feature *index* (0-based) of the current room.

        Raises ``CommandParseError`` when *index* is out of range.
        """
        if self.in_room and not 0 <= index < len(self.current_room.features):
            raise CommandParseError(
                f"Feature {index + 1} does not exist; "
                f"choose 1-{len(self.current_room.features)}."
            )
        return self._attempt("examine", self._do_examine_feature, index)

    def _do_examine_feature(self, index: int) -> ActionResult:
        room = self._require_safe_room("examine anything")
        feature = room.features[index]
        if feature.is_interacted:
            raise InvalidCommandError(f"You have already dealt with the {feature.name}.")
        secrets_before = self.floor.secrets_found
        resolution = self.interactions.resolve_feature(self.floor, room, feature, self.player)
        self.telemetry.current_floor.secrets_found += self.floor.secrets_found - secrets_before
        return ActionResult(
            ok=True, action="examine", feature=resolution, message=resolution.message,
        )

    def rest(self) -> ActionResult:
        return self._attempt("rest", self._do_rest)

    def _do_rest(self) -> ActionResult:
        room = self._require_room()
        if self.has_rest_this_floor:
            raise InvalidCommandError("You have already rested on this floor.")
        if not room.is_safe:
            raise InvalidCommandError("You cannot rest with monsters nearby.")
        healed = self.player.heal(int(self.player.max_hp * self.config.rest_heal_fraction))
        self.has_rest_this_floor = True
        self.telemetry.current_floor.rested = True
        return ActionResult(
            ok=True, action="rest", healed=healed, message=f"You rest and recover {healed} HP.",
        )

    def show_map(self) -> ActionResult:
        return self._attempt("map", self._do_show_map)

    def _do_show_map(self) -> ActionResult:
        floor = self.floor
        entries: list[MapEntry] = []
        for room in sorted(floor.rooms.values(), key=lambda r: r.id):
            known = room.is_explored or any(
                other.is_explored and any(
                    e.target_room_id == room.id for e in other.visible_exits.values()
                )
                for other in floor.rooms.values()
            )
            if not known:
                continue
            entries.append(MapEntry(
                room_id=room.id,
                name=room.name if room.is_explored else "???",
                explored=room.is_explored,
                current=self.in_room and room.id == floor.current_room_id,
                markers=self._markers(room) if room.is_explored else [],
                exits=(
                    {d: e.target_room_id for d, e in room.visible_exits.items()}
                    if room.is_explored else {}
                ),
            ))
        return ActionResult(ok=True, action="map", map=entries)

    def _markers(self, room: Room) -> list[str]:
        markers: list[str] = []
        if room.id == self.floor.entrance_room_id:
            markers.append("entrance")
        if room.is_boss_room:
            markers.append("boss")
        if room.has_stairs_down:
            markers.append("stairs")
        if room.has_uncleared_monsters:
            markers.append("monsters")
        if room.has_unlooted_treasure:
            markers.append("treasure")
        if room.has_pending_event:
            markers.append("event")
        return markers

    def status(self) -> ActionResult:
        return self._attempt("status", self._do_status)

    def _do_status(self) -> ActionResult:
        floor, player = self.floor, self.player
        snapshot = StatusSnapshot(
            player_name=player.name,
            hp=player.current_hp,
            max_hp=player.max_hp,
            gold=player.gold,
            experience=player.experience,
            potions=player.potions,
            level=floor.level,
            theme=floor.theme.label,
            rooms_explored=floor.explored_count,
            total_rooms=floor.total_rooms,
            progress=floor.exploration_progress,
            monsters_killed=floor.monsters_killed,
            treasures_found=floor.treasures_found,
            secrets_found=floor.secrets_found,
            boss_defeated=floor.boss_defeated,
            has_rested=self.has_rest_this_floor,
            seal_pending=floor.has_uncollected_seal and not floor.seal_collected,
            statuses=dict(player.status_effects),
        )
        return ActionResult(ok=True, action="status", status=snapshot)

    # ------------------------------------------------------------------
    # Depth changes
    # ------------------------------------------------------------------

    def descend(self) -> ActionResult:
        """Take the stairs down; the cursor lands on the new entrance."""
        return self._attempt("descend", self._do_descend)

    def _do_descend(self) -> ActionResult:
        room = self._require_room()
        if not room.has_stairs_down:
            raise InvalidCommandError("There are no stairs down here.")
        if not room.is_safe:
            raise InvalidCommandError("Monsters block the way to the stairs.")
        if self.level >= self.config.max_level:
            raise InvalidCommandError("There is nothing deeper than this.")

        self._load_floor(self.level + 1)
        self.state = SessionState.IN_ROOM
        entry = MoveOutcome(ok=True)
        self._arrive(self.floor.entrance, entry)
        return ActionResult(
            ok=True, action="descend", level=self.level, entry=entry,
            message=f"You descend to floor {self.level}.",
        )

    def ascend(self) -> ActionResult:
        """Climb one level up, from the entrance room or the overview."""
        return self._attempt("ascend", self._do_ascend)

    def _do_ascend(self) -> ActionResult:
        if self.level <= 1:
            raise InvalidCommandError("You are already on the first floor.")
        if self.in_room and self.floor.current_room_id != self.floor.entrance_room_id:
            raise InvalidCommandError("You can only climb up from the floor entrance.")
        self._load_floor(self.level - 1)
        self.state = SessionState.OVERVIEW
        return ActionResult(
            ok=True, action="ascend", level=self.level,
            message=f"You climb back up to floor {self.level}.",
        )

    def change_depth(self, target: int) -> ActionResult:
        """Jump directly to depth *target* (clamped), landing in the overview."""
        return self._attempt("depth", self._do_change_depth, target)

    def _do_change_depth(self, target: int) -> ActionResult:
        target = self.config.clamp_level(target)
        if target == self.level:
            raise InvalidCommandError(f"You are already on floor {target}.")
        self._load_floor(target)
        self.state = SessionState.OVERVIEW
        return ActionResult(
            ok=True, action="depth", level=self.level,
            message=f"You travel to floor {self.level}.",
        )

    def _load_floor(self, level: int) -> DungeonFloor:
        """Discard the current floor and generate *level* with fresh counters."""
        level = self.config.clamp_level(level)
        seal_type = self.story.seal_for_floor(level)
        self.floor = self.generator.generate(
            level, self.rng.fork(f"floor-{level}"), seal_type=seal_type,
        )
        self.rooms_explored_this_floor = 0
        self.has_rest_this_floor = False
        self.consecutive_monster_rooms = 0

        self.telemetry.floors.append(FloorTelemetry(
            level=level,
            theme=self.floor.theme.value,
            total_rooms=self.floor.total_rooms,
            had_seal=seal_type is not None,
        ))
        self.telemetry.deepest_level = max(self.telemetry.deepest_level, level)
        logger.info("Loaded floor %d (%s)", level, self.floor.theme.value)

        if level in self.config.milestone_floors:
            flag = f"reached_floor_{level}"
            if not self.story.has_flag(flag):
                self.story.set_flag(flag)
                self._notify(f"Milestone: you have reached floor {level}.")
        return self.floor

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _attempt(self, action: str, handler: Callable[..., ActionResult], *args) -> ActionResult:
        """Run *handler*, turning a failed precondition into a rejection."""
        try:
            result = handler(*args)
        except InvalidCommandError as exc:
            logger.debug("Rejected %s: %s", action, exc)
            self.telemetry.rejected_actions += 1
            return ActionResult(ok=False, action=action, message=str(exc))
        self.telemetry.actions_taken += 1
        return result

    def _reject_move(self, message: str) -> MoveOutcome:
        logger.debug("Rejected move: %s", message)
        self.telemetry.rejected_actions += 1
        return MoveOutcome(ok=False, message=message)

    def _require_room(self) -> Room:
        if not self.in_room:
            raise InvalidCommandError("You are not inside the dungeon.")
        return self.current_room

    def _require_safe_room(self, verb: str) -> Room:
        room = self._require_room()
        if not room.is_safe:
            raise InvalidCommandError(f"You cannot {verb} while monsters remain.")
        return room

    def _notify(self, text: str) -> None:
        self.sink.display(text)
