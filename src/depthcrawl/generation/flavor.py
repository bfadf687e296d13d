"""Theme and depth tables used by the floor generator.

Only the structural lookups (theme by depth, lore fragment by depth) are
load-bearing.  Names and descriptions are kept deliberately short; rich
flavour text belongs to the presentation layer.
"""

from __future__ import annotations

from depthcrawl.core.rng import GameRNG
from depthcrawl.world.enums import (
    Direction,
    FeatureInteraction,
    LoreFragmentType,
    RoomType,
    Theme,
)
from depthcrawl.world.room import RoomFeature

# Upper depth bound (inclusive) -> theme.  Deeper than the last bound is
# the Abyssal Void.
_THEME_BANDS: list[tuple[int, Theme]] = [
    (10, Theme.CATACOMBS),
    (20, Theme.SEWERS),
    (35, Theme.CAVERNS),
    (50, Theme.ANCIENT_RUINS),
    (65, Theme.DEMON_LAIR),
    (80, Theme.FROZEN_DEPTHS),
    (90, Theme.VOLCANIC_PIT),
]

_LORE_BANDS: list[tuple[int, LoreFragmentType]] = [
    (20, LoreFragmentType.OCEAN_ORIGIN),
    (35, LoreFragmentType.FIRST_SEPARATION),
    (50, LoreFragmentType.THE_FORGETTING),
    (65, LoreFragmentType.MANWES_CHOICE),
    (80, LoreFragmentType.THE_CORRUPTION),
    (95, LoreFragmentType.THE_CYCLE),
]


def theme_for_level(level: int) -> Theme:
    for upper, theme in _THEME_BANDS:
        if level <= upper:
            return theme
    return Theme.ABYSSAL_VOID


def lore_fragment_for_level(level: int) -> LoreFragmentType:
    for upper, fragment in _LORE_BANDS:
        if level <= upper:
            return fragment
    return LoreFragmentType.THE_TRUTH


# ---------------------------------------------------------------------------
# Room naming
# ---------------------------------------------------------------------------

_THEME_WORDS: dict[Theme, tuple[tuple[str, ...], tuple[str, ...]]] = {
    Theme.CATACOMBS: (
        ("Dusty", "Bone-Lined", "Forgotten", "Silent"),
        ("The air is thick and stale.", "Candles that should have died long ago still flicker."),
    ),
    Theme.SEWERS: (
        ("Fetid", "Dripping", "Flooded", "Rusted"),
        ("Something moves in the water beside you.", "The dripping keeps an unsettling rhythm."),
    ),
    Theme.CAVERNS: (
        ("Crystal", "Echoing", "Winding", "Luminous"),
        ("A gentle draft hints at vast spaces beyond.", "The crystals hum in your teeth."),
    ),
    Theme.ANCIENT_RUINS: (
        ("Ruined", "Glyph-Carved", "Crumbling", "Gilded"),
        ("The air crackles with residual magic.", "Faded murals watch your every step."),
    ),
    Theme.DEMON_LAIR: (
        ("Blood-Stained", "Screaming", "Obsidian", "Profane"),
        ("Something terrible is still happening here.", "The temperature drops without warning."),
    ),
    Theme.FROZEN_DEPTHS: (
        ("Frozen", "Glacial", "Rime-Covered", "Silent"),
        ("Your breath falls as tiny diamonds of ice.", "Something sleeps beneath the ice."),
    ),
    Theme.VOLCANIC_PIT: (
        ("Scorched", "Smouldering", "Basalt", "Ashen"),
        ("Heat shimmers off every surface.", "The floor trembles with distant eruptions."),
    ),
    Theme.ABYSSAL_VOID: (
        ("Unmade", "Whispering", "Inverted", "Starless"),
        ("Reality frays at the edges of your sight.", "You hear your own name, spoken backwards."),
    ),
}

_TYPE_NOUNS: dict[RoomType, tuple[str, str]] = {
    RoomType.CORRIDOR: ("Passage", "A {adj} passage winds onward, its walls close enough to touch."),
    RoomType.CHAMBER: ("Chamber", "A {adj} chamber opens around you, littered with the remains of older visitors."),
    RoomType.HALL: ("Hall", "A {adj} hall stretches beyond the reach of your light."),
    RoomType.ALCOVE: ("Alcove", "A {adj} alcove is cut into the rock, barely large enough to stand in."),
    RoomType.SHRINE: ("Shrine", "A {adj} shrine to gods whose names were scratched away by fearful hands."),
    RoomType.CRYPT: ("Crypt", "A {adj} crypt where the dead were laid to rest, and did not all stay there."),
    RoomType.PUZZLE_ROOM: ("Mechanism Vault", "Gears and levers cover every {adj} wall; the way on is sealed until they align."),
    RoomType.RIDDLE_GATE: ("Riddle Gate", "A {adj} gate bears a carved face that opens its stone eyes as you approach."),
    RoomType.SECRET_VAULT: ("Hidden Vault", "Behind a false wall lies a {adj} vault of offerings nobody was meant to find."),
    RoomType.LORE_LIBRARY: ("Archive", "{adj_cap} shelves of scrolls line the walls, some still faintly glowing."),
    RoomType.MEDITATION_CHAMBER: ("Sanctum", "A {adj} sanctum where the noise of the dungeon falls away."),
    RoomType.ARENA_ROOM: ("Arena", "A {adj} fighting pit ringed by the bones of the defeated."),
    RoomType.MEMORY_FRAGMENT: ("Mirror Chamber", "{adj_cap} mirrors show a face that is almost, but not quite, yours."),
    RoomType.BOSS_ANTECHAMBER: ("Antechamber", "A {adj} antechamber. Whatever rules this floor waits beyond."),
    RoomType.BOSS_LAIR: ("Lair", "A {adj} lair."),
}

_BOSS_LAIRS: dict[Theme, tuple[str, str]] = {
    Theme.CATACOMBS: ("The Bone Throne", "A throne made entirely of bones dominates the chamber. Something ancient stirs."),
    Theme.SEWERS: ("The Abomination's Nest", "The stench is overwhelming. Something massive has made this place its home."),
    Theme.CAVERNS: ("Crystal Heart", "A giant crystal pulses with malevolent energy."),
    Theme.ANCIENT_RUINS: ("The Sealed Sanctum", "Sealed for millennia, until now. You have woken what sleeps within."),
    Theme.DEMON_LAIR: ("Throne of Suffering", "Chains rattle over a carpet of tortured souls. The demon lord awaits."),
    Theme.FROZEN_DEPTHS: ("The Frozen Core", "A massive figure frozen in the wall begins to crack free."),
    Theme.VOLCANIC_PIT: ("Magma Lord's Chamber", "A river of magma encircles an obsidian platform. A creature of fire rises."),
    Theme.ABYSSAL_VOID: ("The End of All Things", "The heart of madness. Reality itself screams."),
}


def room_flavor(theme: Theme, room_type: RoomType, rng: GameRNG) -> tuple[str, str, str]:
    """Return ``(name, description, atmosphere)`` for a room (two draws)."""
    adjectives, atmospheres = _THEME_WORDS[theme]
    adjective = rng.random_choice(adjectives)
    noun, template = _TYPE_NOUNS[room_type]
    description = template.format(adj=adjective.lower(), adj_cap=adjective)
    return f"{adjective} {noun}", description, rng.random_choice(atmospheres)


def boss_lair_flavor(theme: Theme) -> tuple[str, str]:
    return _BOSS_LAIRS[theme]


# ---------------------------------------------------------------------------
# Exits
# ---------------------------------------------------------------------------

_EXIT_PHRASES: dict[Theme, str] = {
    Theme.CATACOMBS: "A dark passage leads {dir}.",
    Theme.SEWERS: "A tunnel continues {dir}.",
    Theme.CAVERNS: "The cave extends {dir}.",
    Theme.ANCIENT_RUINS: "An archway opens to the {dir}.",
    Theme.DEMON_LAIR: "A blood-red portal flickers to the {dir}.",
    Theme.FROZEN_DEPTHS: "An icy corridor stretches {dir}.",
    Theme.VOLCANIC_PIT: "A heat-warped passage leads {dir}.",
    Theme.ABYSSAL_VOID: "Reality bends {dir}ward.",
}

_HIDDEN_EXIT_PHRASES: dict[Theme, str] = {
    Theme.CATACOMBS: "A loose stone conceals a narrow passage.",
    Theme.SEWERS: "Behind the flowing water, a gap in the wall.",
    Theme.CAVERNS: "A crevice, barely visible in the crystal light.",
    Theme.ANCIENT_RUINS: "A concealed door, marked only by faded runes.",
    Theme.DEMON_LAIR: "A portal of shadow, visible only to those who look with fear.",
}


def exit_description(direction: Direction, theme: Theme) -> str:
    return _EXIT_PHRASES[theme].format(dir=direction.value)


def hidden_exit_description(theme: Theme) -> str:
    return _HIDDEN_EXIT_PHRASES.get(theme, "A hidden passage reveals itself to careful eyes.")


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------

_THEME_FEATURES: dict[Theme, list[tuple[str, str, FeatureInteraction]]] = {
    Theme.CATACOMBS: [
        ("pile of bones", "Ancient bones, picked clean long ago.", FeatureInteraction.EXAMINE),
        ("stone coffin", "A heavy stone lid covers this sarcophagus.", FeatureInteraction.OPEN),
        ("crumbling wall", "This section of wall looks weak.", FeatureInteraction.BREAK),
        ("faded inscription", "Words carved into stone, mostly illegible.", FeatureInteraction.READ),
        ("burial urn", "A clay urn that might contain valuables. Or ashes.", FeatureInteraction.OPEN),
    ],
    Theme.SEWERS: [
        ("drainage grate", "Something glints beneath the grate.", FeatureInteraction.OPEN),
        ("suspicious pile", "A mound of refuse. Something might be hidden in it.", FeatureInteraction.SEARCH),
        ("rusted valve", "An old valve. Turning it might do something.", FeatureInteraction.USE),
        ("crack in the wall", "Wide enough to squeeze through?", FeatureInteraction.ENTER),
    ],
    Theme.CAVERNS: [
        ("crystal cluster", "Beautiful crystals. Might be valuable.", FeatureInteraction.TAKE),
        ("underground pool", "Dark water. Something ripples beneath.", FeatureInteraction.EXAMINE),
        ("narrow crevice", "A tight squeeze, but passable.", FeatureInteraction.ENTER),
        ("glowing mushrooms", "Bioluminescent fungi. Edible?", FeatureInteraction.TAKE),
    ],
    Theme.ANCIENT_RUINS: [
        ("ancient chest", "An ornate chest, surprisingly intact.", FeatureInteraction.OPEN),
        ("magical runes", "Glowing symbols pulse with power.", FeatureInteraction.READ),
        ("hidden alcove", "A concealed space behind a tapestry.", FeatureInteraction.SEARCH),
        ("mechanism", "Gears and levers. An ancient device.", FeatureInteraction.USE),
    ],
    Theme.DEMON_LAIR: [
        ("blood pool", "Fresh blood. Still warm.", FeatureInteraction.EXAMINE),
        ("demonic altar", "An altar radiating evil. Offerings sit upon it.", FeatureInteraction.TAKE),
        ("cage", "Someone is locked inside, barely alive.", FeatureInteraction.OPEN),
        ("portal fragment", "A tear in reality. Looking into it hurts.", FeatureInteraction.EXAMINE),
    ],
}

_DEFAULT_FEATURES: list[tuple[str, str, FeatureInteraction]] = [
    ("old chest", "A weathered chest.", FeatureInteraction.OPEN),
    ("strange markings", "Symbols you don't recognize.", FeatureInteraction.READ),
    ("pile of debris", "Might be hiding something.", FeatureInteraction.SEARCH),
]


def theme_features(theme: Theme) -> list[RoomFeature]:
    """Fresh feature instances available for rooms of *theme*."""
    return [
        RoomFeature(name=name, description=desc, interaction=interaction)
        for name, desc, interaction in _THEME_FEATURES.get(theme, _DEFAULT_FEATURES)
    ]


# ---------------------------------------------------------------------------
# Monsters
# ---------------------------------------------------------------------------

_MONSTER_NAMES: dict[Theme, tuple[str, ...]] = {
    Theme.CATACOMBS: ("Skeleton", "Ghoul", "Crypt Rat", "Restless Shade"),
    Theme.SEWERS: ("Sewer Lurker", "Giant Rat", "Sludge Crawler", "Outcast Thug"),
    Theme.CAVERNS: ("Cave Troll", "Crystal Spider", "Deep Gnome", "Blind Stalker"),
    Theme.ANCIENT_RUINS: ("Stone Sentinel", "Rune Wraith", "Broken Automaton", "Cultist"),
    Theme.DEMON_LAIR: ("Imp", "Hellhound", "Flesh Horror", "Tormentor"),
    Theme.FROZEN_DEPTHS: ("Frost Wight", "Ice Golem", "Rime Wolf", "Frozen Knight"),
    Theme.VOLCANIC_PIT: ("Magma Hound", "Ash Wraith", "Fire Salamander", "Cinder Brute"),
    Theme.ABYSSAL_VOID: ("Void Spawn", "Thing That Watches", "Unravelled Soul", "Null Horror"),
}


def monster_names(theme: Theme) -> tuple[str, ...]:
    return _MONSTER_NAMES[theme]


def boss_title(base_name: str) -> str:
    return f"{base_name} Overlord"
