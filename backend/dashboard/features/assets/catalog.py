"""
Asset catalog records and the lenient parsers that build them.

The assets API has changed field names between versions, so every field is
read from a list of known aliases and records without a usable ID are skipped.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dashboard.core.enums import AssetKind
from dashboard.utils import dict_rows, first_str, to_int

from .icons import UrlResolver, extract_asset_image_url


@dataclass
class HeroRecord:
    """A playable hero and its ability labels."""

    id: int
    name: str
    abilities: Dict[int, str] = field(default_factory=dict)
    icon_url: Optional[str] = None


@dataclass
class ItemRecord:
    """A shop item."""

    id: int
    name: str
    cost: int
    tier: int
    icon_url: Optional[str] = None


@dataclass
class RankRecord:
    """A ranked badge image."""

    badge_level: int
    icon_url: Optional[str] = None


@dataclass
class AssetCatalog:
    """ID-keyed lookup tables over the asset API."""

    heroes_by_id: Dict[int, HeroRecord] = field(default_factory=dict)
    items_by_id: Dict[int, ItemRecord] = field(default_factory=dict)
    ranks_by_badge_level: Dict[int, RankRecord] = field(default_factory=dict)

    def hero_name(self, hero_id: int) -> str:
        hero = self.heroes_by_id.get(hero_id)
        return hero.name if hero and hero.name else f"Hero {hero_id}"

    def hero_icon(self, hero_id: int) -> Optional[str]:
        hero = self.heroes_by_id.get(hero_id)
        return hero.icon_url if hero else None

    def item_name(self, item_id: int) -> str:
        item = self.items_by_id.get(item_id)
        return item.name if item and item.name else f"Item {item_id}"

    def item_icon(self, item_id: int) -> Optional[str]:
        item = self.items_by_id.get(item_id)
        return item.icon_url if item else None

    def rank_icon(self, badge_level: int) -> Optional[str]:
        if badge_level <= 0:
            return None
        rank = self.ranks_by_badge_level.get(badge_level)
        return rank.icon_url if rank else None


def infer_tier_from_cost(cost: int) -> int:
    """Shop tier implied by an item's soul cost."""
    if cost >= 6000:
        return 4
    if cost >= 3000:
        return 3
    if cost >= 1200:
        return 2
    return 1


def _first_present(record: Dict[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not null."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _display_name(record: Dict[str, Any], fallback: str) -> str:
    return (
        first_str(record.get("name"), record.get("localized_name"), record.get("display_name"))
        or fallback
    )


def parse_hero_abilities(hero: Dict[str, Any]) -> Dict[int, str]:
    """Ability ID to label across every ability collection a hero may carry."""
    abilities: Dict[int, str] = {}
    for collection in ("abilities", "skills", "ability_list"):
        for ability in dict_rows(hero.get(collection)):
            ability_id = to_int(_first_present(ability, "id", "ability_id"))
            if ability_id <= 0:
                continue
            abilities[ability_id] = (
                first_str(
                    ability.get("name"),
                    ability.get("localized_name"),
                    ability.get("display_name"),
                    ability.get("class_name"),
                )
                or f"Ability {ability_id}"
            )
    return abilities


def build_heroes(raw: Any, resolve: UrlResolver) -> Dict[int, HeroRecord]:
    """Index hero records by ID."""
    heroes: Dict[int, HeroRecord] = {}
    for hero in dict_rows(raw):
        hero_id = to_int(_first_present(hero, "id", "hero_id"))
        if hero_id <= 0:
            continue
        heroes[hero_id] = HeroRecord(
            id=hero_id,
            name=_display_name(hero, f"Hero {hero_id}"),
            abilities=parse_hero_abilities(hero),
            icon_url=extract_asset_image_url(hero, AssetKind.HERO, resolve),
        )
    return heroes


def build_items(raw: Any, resolve: UrlResolver) -> Dict[int, ItemRecord]:
    """Index item records by ID, inferring tiers the record does not carry."""
    items: Dict[int, ItemRecord] = {}
    for item in dict_rows(raw):
        item_id = to_int(_first_present(item, "id", "item_id"))
        if item_id <= 0:
            continue
        cost = max(0, to_int(_first_present(item, "cost", "item_cost", "shop_cost", "price")))
        tier = to_int(_first_present(item, "tier", "item_tier", "shop_tier"))
        items[item_id] = ItemRecord(
            id=item_id,
            name=_display_name(item, f"Item {item_id}"),
            cost=cost,
            tier=max(1, tier or infer_tier_from_cost(cost)),
            icon_url=extract_asset_image_url(item, AssetKind.ITEM, resolve),
        )
    return items


def build_ranks(raw: Any, resolve: UrlResolver) -> Dict[int, RankRecord]:
    """Index rank badges by badge level."""
    ranks: Dict[int, RankRecord] = {}
    for rank in dict_rows(raw):
        badge_level = to_int(_first_present(rank, "badge_level", "rank", "id", "level"))
        if badge_level <= 0:
            continue
        ranks[badge_level] = RankRecord(
            badge_level=badge_level,
            icon_url=extract_asset_image_url(rank, AssetKind.RANK, resolve),
        )
    return ranks


def build_catalog(
    heroes_raw: Any, items_raw: Any, ranks_raw: Any, resolve: UrlResolver
) -> AssetCatalog:
    """Build the full catalog from the three raw asset lists."""
    return AssetCatalog(
        heroes_by_id=build_heroes(heroes_raw, resolve),
        items_by_id=build_items(items_raw, resolve),
        ranks_by_badge_level=build_ranks(ranks_raw, resolve),
    )

