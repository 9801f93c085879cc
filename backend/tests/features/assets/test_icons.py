"""
Tests for icon URL extraction.
"""

import pytest

from dashboard.core.enums import AssetKind
from dashboard.features.assets.icons import (
    as_url_string,
    collect_urls_deep,
    extract_asset_image_url,
    score_asset_url,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("https://cdn.test/a.png", "https://cdn.test/a.png"),
        ("  /images/a.webp ", "/images/a.webp"),
        ("heroes/abrams_card.PNG", "heroes/abrams_card.PNG"),
        ("Abrams", None),
        ("", None),
        (42, None),
    ],
)
def test_as_url_string(value, expected):
    assert as_url_string(value) == expected


def test_known_path_wins(resolve):
    hero = {"name": "Abrams", "images": {"icon": "/heroes/abrams.png"}}
    assert extract_asset_image_url(hero, AssetKind.HERO, resolve) == (
        "https://assets.test/heroes/abrams.png"
    )


def test_absolute_url_is_kept(resolve):
    item = {"shop_image": "https://cdn.test/items/burst.webp"}
    assert extract_asset_image_url(item, AssetKind.ITEM, resolve) == (
        "https://cdn.test/items/burst.webp"
    )


def test_candidate_order(resolve):
    hero = {"image": "https://cdn.test/second.png", "icon": "https://cdn.test/first.png"}
    assert extract_asset_image_url(hero, AssetKind.HERO, resolve) == "https://cdn.test/first.png"


def test_non_url_candidate_falls_through_to_scan(resolve):
    rank = {"icon": "badge", "media": {"large": "https://cdn.test/ranks/badge_11.png"}}
    assert extract_asset_image_url(rank, AssetKind.RANK, resolve) == (
        "https://cdn.test/ranks/badge_11.png"
    )


def test_scan_prefers_kind_specific_urls(resolve):
    rank = {
        "media": {
            "a": "https://cdn.test/ranks/large.png",
            "b": "https://cdn.test/ranks/badge_small.png",
        }
    }
    assert extract_asset_image_url(rank, AssetKind.RANK, resolve) == (
        "https://cdn.test/ranks/badge_small.png"
    )


def test_scan_prefers_portrait_for_heroes(resolve):
    hero = {"art": ["https://cdn.test/item_art.png", "https://cdn.test/portrait.png"]}
    assert extract_asset_image_url(hero, AssetKind.HERO, resolve) == (
        "https://cdn.test/portrait.png"
    )


def test_scan_ties_keep_first_url(resolve):
    entity = {"art": {"a": "https://cdn.test/a.png", "b": "https://cdn.test/b.png"}}
    assert extract_asset_image_url(entity, AssetKind.ITEM, resolve) == "https://cdn.test/a.png"


def test_scan_resolves_relative_paths(resolve):
    entity = {"art": {"path": "items/burst.png"}}
    assert extract_asset_image_url(entity, AssetKind.ITEM, resolve) == (
        "https://assets.test/items/burst.png"
    )


def test_no_image_returns_none(resolve):
    assert extract_asset_image_url({"name": "Haze", "id": 13}, AssetKind.HERO, resolve) is None
    assert extract_asset_image_url(["https://cdn.test/a.png"], AssetKind.HERO, resolve) is None
    assert extract_asset_image_url(None, AssetKind.RANK, resolve) is None


def test_collect_stops_at_max_depth():
    shallow = {"l1": {"l2": {"l3": {"l4": {"l5": "https://cdn.test/ok.png"}}}}}
    deep = {"l1": {"l2": {"l3": {"l4": {"l5": {"l6": "https://cdn.test/deep.png"}}}}}}

    assert collect_urls_deep(shallow) == ["https://cdn.test/ok.png"]
    assert collect_urls_deep(deep) == []


def test_score_asset_url():
    # icon + http + image extension
    assert score_asset_url("https://cdn.test/icon.png", AssetKind.ITEM) == 25
    # badge is favoured for ranks only
    assert score_asset_url("https://cdn.test/badge", AssetKind.RANK) == 21
    assert score_asset_url("https://cdn.test/badge", AssetKind.HERO) == 3
