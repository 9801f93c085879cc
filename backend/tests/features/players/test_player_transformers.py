"""
Tests for live player transformers.
"""

from datetime import datetime, timezone

import pytest

from dashboard.core.enums import MatchMode, MatchOutcome
from dashboard.features.players.transformers import (
    LIVE_PATCH_VERSION,
    HeroEnrichment,
    aggregate_matches,
    build_hero_item_order,
    build_hero_skill_order,
    build_kda,
    derive_rank_badge_level,
    format_rank_tier,
    map_live_match_entry,
    map_match_mode,
)


@pytest.fixture
def match_entry():
    return {
        "match_id": 31000000,
        "hero_id": 1,
        "match_duration_s": 1800,
        "player_kills": 8,
        "player_deaths": 2,
        "player_assists": 10,
        "net_worth": 27000,
        "match_result": 1,
        "start_time": 1760000000,
    }


@pytest.fixture
def hero_stats():
    return {
        "hero_id": 1,
        "damage_per_min": 900,
        "obj_damage_per_min": 150.5,
        "matches_played": 10,
        "time_played": 18000,
    }


class TestBuildKda:
    """KDA ratios."""

    def test_ratio_and_per_minute(self):
        kda = build_kda(3, 4, 5, 20)
        assert kda.ratio == 2.0
        assert kda.per_minute == 0.4

    def test_zero_deaths_divides_by_one(self):
        kda = build_kda(10, 0, 5, 30)
        assert kda.ratio == 15.0
        assert kda.per_minute == 0.5

    def test_rounding_is_half_up(self):
        # (1 + 0) / 8 = 0.125
        assert build_kda(1, 8, 0, 1).ratio == 0.13


class TestMatchMode:
    """Match mode classification."""

    def test_ranked_when_in_mmr_history(self):
        entry = {"brawl_score_team0": 1, "brawl_score_team1": 2}
        assert map_match_mode(entry, {42}, 42) == MatchMode.RANKED

    def test_brawl_scores_mean_quickplay(self):
        entry = {"brawl_score_team0": 0, "brawl_score_team1": 2, "match_mode": 200}
        assert map_match_mode(entry, set(), 42) == MatchMode.QUICKPLAY

    def test_high_match_mode_is_custom(self):
        assert map_match_mode({"match_mode": 100}, set(), 42) == MatchMode.CUSTOM

    def test_default_is_quickplay(self):
        assert map_match_mode({"match_mode": 1}, set(), 42) == MatchMode.QUICKPLAY


class TestRankTier:
    """Rank label cascade."""

    def test_card_badge_wins(self):
        card = {"ranked_badge_level": 42, "ranked_rank": 4, "ranked_subrank": 2}
        assert format_rank_tier(card, {"rank": 33}) == "Badge 42"
        assert derive_rank_badge_level(card, {"rank": 33}) == 42

    def test_mmr_rank_when_card_has_no_badge(self):
        assert format_rank_tier({"ranked_badge_level": 0}, {"rank": 33}) == "Badge 33"

    def test_rank_and_subrank(self):
        card = {"ranked_rank": 5, "ranked_subrank": 2}
        assert format_rank_tier(card, None) == "Rank 5.2"
        assert derive_rank_badge_level(card, None) == 0

    def test_unranked(self):
        assert format_rank_tier(None, None) is None
        assert derive_rank_badge_level(None, None) == 0


class TestItemOrder:
    """Per-hero purchase order."""

    def test_sorted_by_average_buy_time(self, catalog):
        rows = [
            {"item_id": 502, "matches": 10, "avg_buy_time_s": 600.4},
            {"item_id": 501, "matches": 12, "avg_buy_time_s": 20},
            {"item_id": 503, "matches": 3},
            {"item_id": 504, "matches": 0, "avg_buy_time_s": 1},
            {"item_id": 999, "matches": 2, "avg_buy_time_s": 900.5},
        ]

        items = build_hero_item_order(catalog, rows)

        assert [item.item_name for item in items] == [
            "Extra Stamina",
            "Mystic Burst",
            "Item 999",
            "Boundless Spirit",
        ]
        assert [item.order for item in items] == [1, 2, 3, 4]
        assert [item.at_second for item in items] == [45, 600, 901, 720]

    def test_tier_and_unknown_items(self, catalog):
        rows = [
            {"item_id": 503, "matches": 3, "avg_buy_time_s": 100},
            {"item_id": 999, "matches": 2, "avg_buy_time_s": 200},
        ]

        boundless, unknown = build_hero_item_order(catalog, rows)

        assert boundless.tier == 4
        assert boundless.cost == 9999
        assert unknown.tier == 1
        assert unknown.cost == 0
        assert unknown.icon_url is None

    def test_ties_prefer_more_matches(self, catalog):
        rows = [
            {"item_id": 501, "matches": 2, "avg_buy_time_s": 100},
            {"item_id": 502, "matches": 9, "avg_buy_time_s": 100},
        ]
        items = build_hero_item_order(catalog, rows)
        assert [item.item_name for item in items] == ["Mystic Burst", "Extra Stamina"]

    def test_capped_at_twelve(self, catalog):
        rows = [{"item_id": 600 + i, "matches": 1, "avg_buy_time_s": i * 60} for i in range(15)]
        assert len(build_hero_item_order(catalog, rows)) == 12


class TestSkillOrder:
    """Per-hero ability order."""

    def test_most_played_order_spread_over_match(self, catalog):
        orders = [
            {"abilities": [101, 102, 101], "matches": 5, "wins": 1},
            {"abilities": [102, 101, 103, 104, 101], "matches": 9, "wins": 3},
            {"abilities": [], "matches": 50, "wins": 40},
        ]

        skills = build_hero_skill_order(1, catalog, orders, 1400)

        assert [skill.ability for skill in skills] == [
            "Flame Dash",
            "Catalyst",
            "Afterburn",
            "Concussive Combustion",
            "Catalyst",
        ]
        assert [skill.level_after for skill in skills] == [1, 1, 1, 1, 2]
        assert [skill.at_second for skill in skills] == [200, 400, 600, 800, 1000]

    def test_wins_break_match_ties(self, catalog):
        orders = [
            {"abilities": [101], "matches": 5, "wins": 1},
            {"abilities": [102], "matches": 5, "wins": 4},
        ]
        assert build_hero_skill_order(1, catalog, orders, 1400)[0].ability == "Flame Dash"

    def test_unknown_abilities_and_minimum_time(self, catalog):
        skills = build_hero_skill_order(2, catalog, [{"abilities": [7, 7], "matches": 1}], 60)
        assert [skill.ability for skill in skills] == ["Ability 7", "Ability 7"]
        assert [skill.level_after for skill in skills] == [1, 2]
        assert all(skill.at_second == 30 for skill in skills)

    def test_no_orders(self, catalog):
        assert build_hero_skill_order(1, catalog, [], 1400) == []


class TestMapLiveMatchEntry:
    """Match history row mapping."""

    def test_full_row(self, catalog, match_entry, hero_stats):
        enrichment = HeroEnrichment(metrics={"healing_per_min": {"avg": 120}})

        match = map_live_match_entry(match_entry, catalog, hero_stats, enrichment, {31000000})

        assert match.match_id == "31000000"
        assert match.hero == "Infernus"
        assert match.hero_icon_url == "https://assets.test/heroes/infernus.png"
        assert match.result == MatchOutcome.WIN
        assert match.mode == MatchMode.RANKED
        assert match.patch_version == LIVE_PATCH_VERSION
        assert match.started_at == "2025-10-09T08:53:20.000Z"
        assert match.duration_seconds == 1800
        assert (match.kda.ratio, match.kda.per_minute) == (9.0, 0.6)
        assert match.economy.total_souls == 27000
        assert match.economy.souls_per_minute == 900.0
        assert match.economy.breakdown.other == 27000
        assert match.economy.breakdown.creeps == 0
        assert match.combat.player_damage == 27000
        assert match.combat.objective_damage == 4515
        assert match.combat.healing == 3600

    def test_metrics_fill_missing_hero_stats(self, catalog, match_entry):
        enrichment = HeroEnrichment(
            metrics={
                "player_damage_per_min": {"avg": 500},
                "boss_damage_per_min": {"avg": 10},
                "self_healing_per_min": {"avg": 2},
            }
        )

        match = map_live_match_entry(match_entry, catalog, None, enrichment, set())

        assert match.combat.player_damage == 15000
        assert match.combat.objective_damage == 300
        assert match.combat.healing == 60

    def test_sparse_row(self, catalog):
        now = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

        match = map_live_match_entry({"match_id": 5, "hero_id": 77}, catalog, None, None, set(), now)

        assert match.hero == "Hero 77"
        assert match.result == MatchOutcome.LOSS
        assert match.mode == MatchMode.QUICKPLAY
        assert match.duration_seconds == 1
        assert match.started_at == "2026-01-15T12:00:00.000Z"
        assert match.combat.player_damage == 0
        assert match.build.items == []
        assert match.build.skills == []

    def test_skills_use_average_hero_match_length(self, catalog, match_entry, hero_stats):
        enrichment = HeroEnrichment(ability_orders=[{"abilities": [101, 102], "matches": 1}])
        hero_stats = {**hero_stats, "time_played": 8000}

        match = map_live_match_entry(match_entry, catalog, hero_stats, enrichment, set())

        # average length 800s, 2 steps spread over 4 slots
        assert [skill.at_second for skill in match.build.skills] == [200, 400]


class TestAggregateMatches:
    """Profile aggregates."""

    def test_totals_and_favourite(self, catalog, match_entry, hero_stats):
        win = map_live_match_entry(match_entry, catalog, hero_stats, None, set())
        loss = map_live_match_entry(
            {**match_entry, "match_id": 2, "hero_id": 2, "match_result": 0, "start_time": 1},
            catalog,
            None,
            None,
            set(),
        )
        second_loss = map_live_match_entry(
            {**match_entry, "match_id": 3, "hero_id": 2, "match_result": 0},
            catalog,
            None,
            None,
            set(),
        )

        aggregates = aggregate_matches([win, loss, second_loss])

        assert aggregates.total_matches == 3
        assert aggregates.wins == 1
        assert aggregates.losses == 2
        assert aggregates.winrate == 33.3
        assert aggregates.total_souls == 81000
        assert aggregates.total_hero_damage == 27000
        assert aggregates.favorite_hero == "Seven"
        assert aggregates.last_match_at == win.started_at

    def test_explicit_favourite_wins(self, catalog, match_entry):
        match = map_live_match_entry(match_entry, catalog, None, None, set())
        assert aggregate_matches([match], "Seven").favorite_hero == "Seven"

    def test_empty(self):
        aggregates = aggregate_matches([])
        assert aggregates.total_matches == 0
        assert aggregates.winrate == 0
        assert aggregates.favorite_hero is None
        assert aggregates.last_match_at is None
