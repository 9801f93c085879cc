"""Deadlock API endpoint definitions."""

from typing import Optional


class DeadlockAPIEndpoints:
    """Deadlock live API and assets API endpoint definitions."""

    def __init__(self, api_base_url: str, assets_base_url: str):
        """
        Initialize endpoint configuration.

        Args:
            api_base_url: Base URL of the live stats API
            assets_base_url: Base URL of the asset catalog API
        """
        self.api_base_url = api_base_url.rstrip("/")
        self.assets_base_url = assets_base_url.rstrip("/")

    def _api(self, path: str) -> str:
        return f"{self.api_base_url}{path}"

    def _assets(self, path: str) -> str:
        return f"{self.assets_base_url}{path}"

    # Player endpoints
    def steam_profiles(self) -> str:
        """Steam profile metadata by account IDs."""
        return self._api("/v1/players/steam")

    def match_history(self, account_id: int) -> str:
        """Full match history of one account."""
        return self._api(f"/v1/players/{account_id}/match-history")

    def player_card(self, account_id: int) -> str:
        """Ranked card (badge level, rank, subrank)."""
        return self._api(f"/v1/players/{account_id}/card")

    def mmr_history(self, account_id: int) -> str:
        """Ranked MMR history; its match IDs are the ranked matches."""
        return self._api(f"/v1/players/{account_id}/mmr-history")

    def player_hero_stats(self) -> str:
        """Per-hero aggregate stats for the given account IDs."""
        return self._api("/v1/players/hero-stats")

    # Analytics endpoints
    def player_stats_metrics(self) -> str:
        """Per-minute metric distributions for a player on a hero."""
        return self._api("/v1/analytics/player-stats/metrics")

    def item_stats(self) -> str:
        """Item purchase aggregates."""
        return self._api("/v1/analytics/item-stats")

    def ability_order_stats(self) -> str:
        """Ability level-up order aggregates."""
        return self._api("/v1/analytics/ability-order-stats")

    def hero_stats(self) -> str:
        """Population hero pick/win aggregates."""
        return self._api("/v1/analytics/hero-stats")

    def patches(self) -> str:
        """Published patch notes."""
        return self._api("/v1/patches")

    def leaderboard(self, region: str, hero_id: Optional[int] = None) -> str:
        """Regional leaderboard, optionally for a single hero."""
        if hero_id:
            return self._api(f"/v1/leaderboard/{region}/{hero_id}")
        return self._api(f"/v1/leaderboard/{region}")

    # Asset endpoints
    def heroes(self) -> str:
        """All heroes with abilities and images."""
        return self._assets("/v2/heroes")

    def items(self) -> str:
        """All items (upgrades, abilities, weapons) with cost and tier."""
        return self._assets("/v2/items")

    def ranks(self) -> str:
        """Rank badges."""
        return self._assets("/v2/ranks")

    def asset_url(self, path: str) -> str:
        """Resolve a relative asset path against the assets host."""
        if path.startswith("/"):
            return self._assets(path)
        return self._assets(f"/{path}")
