"""Pydantic schemas for meta snapshot payloads."""

from typing import List, Literal, Optional

from pydantic import Field

from dashboard.core.enums import DataSource
from dashboard.core.schemas import CamelModel


class HeroMetaStat(CamelModel):
    """Pick, win and ban rates of one hero."""

    hero: str
    hero_icon_url: Optional[str] = None
    picks: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    matches: int = Field(..., ge=0)
    pick_rate: float
    win_rate: float
    ban_rate: Optional[float] = None


class ItemMetaStat(CamelModel):
    """Win rate and purchase order of an item on a hero."""

    hero: str
    hero_icon_url: Optional[str] = None
    item: str
    item_icon_url: Optional[str] = None
    sample_size: int = Field(..., gt=0)
    win_rate: float
    avg_purchase_order: float = Field(..., gt=0)


class MetaPayload(CamelModel):
    """Meta snapshot response."""

    ok: Literal[True] = True
    source: DataSource
    fetched_at: str
    patch_label: str
    population_players: int = Field(..., ge=0)
    population_matches: int = Field(..., ge=0)
    hero_stats: List[HeroMetaStat]
    item_stats: List[ItemMetaStat]
    notes: List[str] = Field(default_factory=list)
