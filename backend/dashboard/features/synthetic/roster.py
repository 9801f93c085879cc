"""Static game data the synthetic generator draws from."""

from typing import NamedTuple, Tuple


class RosterItem(NamedTuple):
    name: str
    tier: int
    cost: int


HEROES: Tuple[str, ...] = (
    "Abrams",
    "Bebop",
    "Dynamo",
    "Grey Talon",
    "Haze",
    "Infernus",
    "Ivy",
    "Kelvin",
    "Lady Geist",
    "Lash",
    "McGinnis",
    "Mirage",
    "Mo & Krill",
    "Paradox",
    "Pocket",
    "Seven",
    "Shiv",
    "Vindicta",
    "Viscous",
    "Warden",
    "Wraith",
    "Yamato",
)

ITEMS: Tuple[RosterItem, ...] = (
    RosterItem("Headshot Booster", 1, 500),
    RosterItem("Swift Strikes", 1, 500),
    RosterItem("Spirit Flask", 1, 500),
    RosterItem("Stamina Matrix", 1, 750),
    RosterItem("Burst Magazine", 2, 1250),
    RosterItem("Siphon Bullets", 2, 1250),
    RosterItem("Phantom Rounds", 2, 1500),
    RosterItem("Warp Stone", 2, 1500),
    RosterItem("Reactive Armor", 2, 1750),
    RosterItem("Mystic Reverb", 2, 1750),
    RosterItem("Silencer Module", 3, 3000),
    RosterItem("Titanic Magazine", 3, 3000),
    RosterItem("Colossus Core", 3, 3250),
    RosterItem("Soul Recycler", 3, 3250),
    RosterItem("Ethereal Shift", 3, 3500),
    RosterItem("Pristine Emblem", 3, 3500),
    RosterItem("Unstoppable Drive", 4, 6200),
    RosterItem("Ancient Reactor", 4, 6200),
    RosterItem("Leviathan Plate", 4, 6400),
    RosterItem("Soul Furnace", 4, 6500),
)

REGIONS: Tuple[str, ...] = ("EU", "NA", "SA", "APAC")

# Repeats weight the draw: half quickplay, a third ranked, the rest custom
MODES: Tuple[str, ...] = ("Quickplay", "Ranked", "Quickplay", "Ranked", "Quickplay", "Custom")

RANK_TIERS: Tuple[str, ...] = (
    "Seeker I",
    "Seeker II",
    "Seeker III",
    "Rogue I",
    "Rogue II",
    "Rogue III",
    "Phantom I",
    "Phantom II",
    "Phantom III",
    "Archon I",
    "Archon II",
    "Archon III",
)

PATCHES: Tuple[str, ...] = ("EA-0.8.2", "EA-0.8.3", "EA-0.9.0", "EA-0.9.1")

ULTIMATE = "ULT"
SKILL_SEQUENCE: Tuple[str, ...] = (
    "A1", "A2", "A1", "A3", "A1", ULTIMATE, "A2", "A2",
    "A3", "A3", ULTIMATE, "A1", "A2", "A3", ULTIMATE, "A1",
)
MAX_ABILITY_LEVEL = 4
MAX_ULTIMATE_LEVEL = 3

PERSONA_PREFIXES: Tuple[str, ...] = ("Soul", "Lane", "Hex", "Vanta", "Pulse", "Rift", "Apex")
PERSONA_NOUNS: Tuple[str, ...] = ("Runner", "Warden", "Shade", "Driver", "Keeper", "Hunter", "Pilot")

SUPPORT_HEROES = frozenset({"Kelvin", "Dynamo", "Ivy", "Viscous"})
SUSTAIN_HEROES = frozenset({"Abrams", "Mo & Krill"})


def healing_profile(hero: str) -> float:
    """Healing multiplier of a hero."""
    if hero in SUPPORT_HEROES:
        return 1.45
    if hero in SUSTAIN_HEROES:
        return 1.15
    return 0.65


def rank_tier_from_mmr(mmr: int) -> str:
    """One of the twelve rank tiers, 220 MMR apart starting at 900."""
    index = min(max((mmr - 900) // 220, 0), len(RANK_TIERS) - 1)
    return RANK_TIERS[index]
