"""Asset catalog feature: hero, item and rank reference data."""

from .catalog import AssetCatalog, HeroRecord, ItemRecord, RankRecord, infer_tier_from_cost
from .gateway import AssetCatalogGateway
from .icons import extract_asset_image_url

__all__ = [
    "AssetCatalog",
    "HeroRecord",
    "ItemRecord",
    "RankRecord",
    "infer_tier_from_cost",
    "AssetCatalogGateway",
    "extract_asset_image_url",
]
