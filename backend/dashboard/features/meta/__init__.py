"""Meta feature module: hero pick/win/ban rates and per-hero item statistics."""

from .gateway import LiveMetaGateway
from .schemas import HeroMetaStat, ItemMetaStat, MetaPayload

__all__ = ["LiveMetaGateway", "HeroMetaStat", "ItemMetaStat", "MetaPayload"]
