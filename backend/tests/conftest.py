"""Shared fixtures for the dashboard test suite."""

from datetime import datetime, timezone

import pytest

from dashboard.features.assets.catalog import AssetCatalog, HeroRecord, ItemRecord, RankRecord


@pytest.fixture
def fixed_now():
    """A fixed reference time for deterministic payloads."""
    return datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def resolve():
    """Asset URL resolver for a fake assets host."""
    return lambda path: f"https://assets.test/{path.lstrip('/')}"


@pytest.fixture
def catalog():
    """Small asset catalog with two heroes, four items and one rank."""
    return AssetCatalog(
        heroes_by_id={
            1: HeroRecord(
                id=1,
                name="Infernus",
                abilities={
                    101: "Catalyst",
                    102: "Flame Dash",
                    103: "Afterburn",
                    104: "Concussive Combustion",
                },
                icon_url="https://assets.test/heroes/infernus.png",
            ),
            2: HeroRecord(id=2, name="Seven", icon_url="https://assets.test/heroes/seven.png"),
        },
        items_by_id={
            501: ItemRecord(501, "Extra Stamina", 500, 1, "https://assets.test/items/stamina.png"),
            502: ItemRecord(502, "Mystic Burst", 1250, 2, "https://assets.test/items/burst.png"),
            503: ItemRecord(503, "Boundless Spirit", 9999, 5, None),
            504: ItemRecord(504, "Toxic Bullets", 3000, 3, None),
        },
        ranks_by_badge_level={
            45: RankRecord(45, "https://assets.test/ranks/badge_45.png"),
        },
    )
