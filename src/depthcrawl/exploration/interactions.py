"""Room event and feature resolution.

Events and feature interactions are dispatched through tables keyed by
``DungeonEventType`` and ``FeatureInteraction``.  Each handler receives
exactly what its resolution needs and returns an ``EventResolution`` /
``FeatureResolution``; completion flags are set by the resolver, never
by the handlers.

The resolver is stateless between calls -- all mutable state lives in the
floor, the room and the player threaded through every call.
"""

from __future__ import annotations

import logging
from typing import Callable

from depthcrawl.core.entities import Player
from depthcrawl.core.rng import GameRNG
from depthcrawl.exploration.outcomes import EventResolution, FeatureResolution
from depthcrawl.interfaces.base import StoryFlags
from depthcrawl.scaling.traps import apply_trap, roll_trap
from depthcrawl.world.enums import DungeonEventType, FeatureInteraction
from depthcrawl.world.floor import DungeonFloor
from depthcrawl.world.room import Room, RoomFeature

logger = logging.getLogger(__name__)


def _pct(player: Player, fraction: float) -> int:
    return max(1, int(player.max_hp * fraction))


class InteractionResolver:
    """Resolves room events and feature interactions.

    Parameters
    ----------
    rng:
        Session RNG.
    story:
        Story flags; lore and memory events record themselves here.
    """

    def __init__(self, rng: GameRNG, story: StoryFlags) -> None:
        self.rng = rng
        self.story = story

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def resolve_event(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        """Resolve the pending event of *room* and mark it completed."""
        handler = _EVENT_DISPATCH.get(room.event_type)
        if handler is None:
            logger.warning("No handler for event type %s", room.event_type)
            resolution = EventResolution(
                event_type=room.event_type, success=False, message="Nothing happens.",
            )
        else:
            resolution = handler(self, floor, room, player)
        room.event_completed = True
        logger.debug(
            "Event %s in room %d resolved (success=%s)",
            room.event_type.value, room.id, resolution.success,
        )
        return resolution

    def _event_treasure_chest(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        gold = floor.level * 50 + self.rng.random_int(0, floor.level * 100)
        player.gain_gold(gold)
        return EventResolution(
            event_type=room.event_type, gold=gold,
            message=f"You pry open an old chest and find {gold} gold.",
        )

    def _event_merchant(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        price = floor.level * 30
        if player.gold < price:
            return EventResolution(
                event_type=room.event_type, success=False,
                message=f"A wandering merchant offers a potion for {price} gold. You cannot afford it.",
            )
        player.lose_gold(price)
        player.potions += 1
        return EventResolution(
            event_type=room.event_type, gold=-price, consumables=1,
            message=f"You buy a healing potion from a wandering merchant for {price} gold.",
        )

    def _event_shrine(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        healed = player.heal(_pct(player, 0.2))
        return EventResolution(
            event_type=room.event_type, hp_change=healed,
            message=f"You pray at the shrine and recover {healed} HP.",
        )

    def _event_trap(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        trap = apply_trap(player, roll_trap(floor.level, player.gold, self.rng))
        return EventResolution(
            event_type=room.event_type, success=False, trap=trap, hp_change=-trap.damage,
            message=trap.summary,
        )

    def _event_npc(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        experience = floor.level * 25
        player.gain_experience(experience)
        return EventResolution(
            event_type=room.event_type, experience=experience,
            message=f"A lost adventurer shares what they know of the depths. +{experience} XP.",
        )

    def _challenge(
        self, floor: DungeonFloor, room: Room, player: Player, noun: str,
    ) -> EventResolution:
        """Shared resolution of puzzles and riddles: harder means less likely."""
        difficulty = room.event_difficulty
        if self.rng.chance(max(0.2, 0.9 - 0.1 * difficulty)):
            gold = floor.level * 25 * difficulty
            experience = floor.level * 40 * difficulty
            player.gain_gold(gold)
            player.gain_experience(experience)
            return EventResolution(
                event_type=room.event_type, gold=gold, experience=experience,
                message=f"You solve the {noun}. +{gold} gold, +{experience} XP.",
            )
        damage = player.take_damage(floor.level * 2, min_hp=1)
        return EventResolution(
            event_type=room.event_type, success=False, hp_change=-damage,
            message=f"You fail the {noun} and take {damage} damage as the way opens anyway.",
        )

    def _event_puzzle(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        resolution = self._challenge(floor, room, player, "puzzle")
        if resolution.success:
            floor.puzzles_solved += 1
        return resolution

    def _event_riddle(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        resolution = self._challenge(floor, room, player, "riddle")
        if resolution.success:
            floor.riddles_answered += 1
        return resolution

    def _event_rest_spot(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        healed = player.heal(_pct(player, 0.25))
        return EventResolution(
            event_type=room.event_type, hp_change=healed,
            message=f"The stillness here mends you. +{healed} HP.",
        )

    def _event_mystery(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        roll = self.rng.random_float() * 100
        if roll < 50:
            gold = floor.level * 40
            player.gain_gold(gold)
            return EventResolution(
                event_type=room.event_type, gold=gold,
                message=f"A shimmering light leaves {gold} gold at your feet.",
            )
        elif roll < 80:
            healed = player.heal(_pct(player, 0.1))
            return EventResolution(
                event_type=room.event_type, hp_change=healed,
                message=f"A warm wind passes through you. +{healed} HP.",
            )
        damage = player.take_damage(floor.level * 2, min_hp=1)
        return EventResolution(
            event_type=room.event_type, success=False, hp_change=-damage,
            message=f"Something unseen lashes out. You take {damage} damage.",
        )

    def _event_lore(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        experience = floor.level * 40
        player.gain_experience(experience)
        floor.lore_fragments_collected += 1
        if room.lore_fragment is not None:
            self.story.set_flag(f"lore_{room.lore_fragment.value}")
        return EventResolution(
            event_type=room.event_type, experience=experience,
            message=f"You piece together an ancient text. +{experience} XP.",
        )

    def _event_memory(self, floor: DungeonFloor, room: Room, player: Player) -> EventResolution:
        experience = floor.level * 60
        player.gain_experience(experience)
        self.story.set_flag(f"memory_{room.memory_fragment_level or floor.level}")
        return EventResolution(
            event_type=room.event_type, experience=experience,
            message=f"A memory that is not yours floods in. +{experience} XP.",
        )

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    def resolve_feature(
        self, floor: DungeonFloor, room: Room, feature: RoomFeature, player: Player,
    ) -> FeatureResolution:
        """Interact with *feature* and mark it interacted."""
        handler = _FEATURE_DISPATCH[feature.interaction]
        resolution = handler(self, floor, room, feature, player)
        feature.is_interacted = True
        return resolution

    def _reveal(self, floor: DungeonFloor, room: Room, feature: RoomFeature) -> FeatureResolution | None:
        revealed = floor.reveal_hidden_exits(room.id)
        if not revealed:
            return None
        directions = ", ".join(d.value for d in revealed)
        logger.info("Room %d: hidden exits revealed (%s)", room.id, directions)
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction, revealed=revealed,
            message=f"Your {feature.interaction.value} uncovers a hidden passage: {directions}.",
        )

    def _feature_examine(self, floor, room, feature, player) -> FeatureResolution:
        gold = 0
        message = feature.description
        if self.rng.chance(0.2):
            gold = floor.level * 10 + self.rng.random_int(0, floor.level * 20)
            player.gain_gold(gold)
            message = f"{feature.description} Looking closer, you find {gold} gold."
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction, gold=gold, message=message,
        )

    def _feature_open(self, floor, room, feature, player) -> FeatureResolution:
        roll = self.rng.random_float() * 100
        if roll < 50:
            gold = floor.level * 20 + self.rng.random_int(0, floor.level * 40)
            player.gain_gold(gold)
            return FeatureResolution(
                name=feature.name, interaction=feature.interaction, gold=gold,
                message=f"You open the {feature.name} and find {gold} gold.",
            )
        elif roll < 70:
            damage = player.take_damage(floor.level * 2, min_hp=1)
            return FeatureResolution(
                name=feature.name, interaction=feature.interaction, hp_change=-damage,
                message=f"The {feature.name} was rigged. You take {damage} damage.",
            )
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction,
            message=f"The {feature.name} is empty.",
        )

    def _feature_search(self, floor, room, feature, player) -> FeatureResolution:
        found = self._reveal(floor, room, feature)
        if found is not None:
            return found
        if self.rng.chance(0.4):
            gold = floor.level * 15
            player.gain_gold(gold)
            return FeatureResolution(
                name=feature.name, interaction=feature.interaction, gold=gold,
                message=f"Searching the {feature.name} turns up {gold} gold.",
            )
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction,
            message=f"You search the {feature.name} but find nothing.",
        )

    def _feature_break(self, floor, room, feature, player) -> FeatureResolution:
        found = self._reveal(floor, room, feature)
        if found is not None:
            return found
        if self.rng.chance(0.25):
            damage = player.take_damage(floor.level, min_hp=1)
            return FeatureResolution(
                name=feature.name, interaction=feature.interaction, hp_change=-damage,
                message=f"Debris from the {feature.name} hits you for {damage} damage.",
            )
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction,
            message=f"The {feature.name} crumbles, revealing only rock.",
        )

    def _feature_enter(self, floor, room, feature, player) -> FeatureResolution:
        found = self._reveal(floor, room, feature)
        if found is not None:
            return found
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction,
            message=f"The {feature.name} leads nowhere.",
        )

    def _feature_read(self, floor, room, feature, player) -> FeatureResolution:
        experience = floor.level * 15 + self.rng.random_int(0, 30)
        player.gain_experience(experience)
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction,
            message=f"You decipher the {feature.name}. +{experience} XP.",
        )

    def _feature_take(self, floor, room, feature, player) -> FeatureResolution:
        if self.rng.chance(0.5):
            player.potions += 1
            return FeatureResolution(
                name=feature.name, interaction=feature.interaction,
                message=f"The {feature.name} has healing properties. You gain a potion.",
            )
        gold = floor.level * 15
        player.gain_gold(gold)
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction, gold=gold,
            message=f"The {feature.name} fetches {gold} gold.",
        )

    def _feature_use(self, floor, room, feature, player) -> FeatureResolution:
        if self.rng.chance(0.5):
            healed = player.heal(_pct(player, 0.1))
            return FeatureResolution(
                name=feature.name, interaction=feature.interaction, hp_change=healed,
                message=f"The {feature.name} hums and restores {healed} HP.",
            )
        damage = player.take_damage(floor.level, min_hp=1)
        return FeatureResolution(
            name=feature.name, interaction=feature.interaction, hp_change=-damage,
            message=f"The {feature.name} backfires. You take {damage} damage.",
        )


# ------------------------------------------------------------------
# Dispatch tables
# ------------------------------------------------------------------

_EVENT_DISPATCH: dict[DungeonEventType, Callable[..., EventResolution]] = {
    DungeonEventType.TREASURE_CHEST: InteractionResolver._event_treasure_chest,
    DungeonEventType.MERCHANT: InteractionResolver._event_merchant,
    DungeonEventType.SHRINE: InteractionResolver._event_shrine,
    DungeonEventType.TRAP: InteractionResolver._event_trap,
    DungeonEventType.NPC_ENCOUNTER: InteractionResolver._event_npc,
    DungeonEventType.PUZZLE: InteractionResolver._event_puzzle,
    DungeonEventType.REST_SPOT: InteractionResolver._event_rest_spot,
    DungeonEventType.MYSTERY_EVENT: InteractionResolver._event_mystery,
    DungeonEventType.RIDDLE: InteractionResolver._event_riddle,
    DungeonEventType.LORE_DISCOVERY: InteractionResolver._event_lore,
    DungeonEventType.MEMORY_FLASH: InteractionResolver._event_memory,
}

_FEATURE_DISPATCH: dict[FeatureInteraction, Callable[..., FeatureResolution]] = {
    FeatureInteraction.EXAMINE: InteractionResolver._feature_examine,
    FeatureInteraction.OPEN: InteractionResolver._feature_open,
    FeatureInteraction.SEARCH: InteractionResolver._feature_search,
    FeatureInteraction.READ: InteractionResolver._feature_read,
    FeatureInteraction.TAKE: InteractionResolver._feature_take,
    FeatureInteraction.USE: InteractionResolver._feature_use,
    FeatureInteraction.BREAK: InteractionResolver._feature_break,
    FeatureInteraction.ENTER: InteractionResolver._feature_enter,
}
