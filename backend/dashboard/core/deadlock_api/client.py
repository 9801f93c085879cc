"""Deadlock API HTTP client with timeout handling and error mapping."""

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx
import structlog

from dashboard.core.config import get_global_settings

from .constants import API_KEY_HEADER, ERROR_BODY_PREVIEW, USER_AGENT
from .endpoints import DeadlockAPIEndpoints
from .errors import (
    BadRequestError,
    DeadlockAPIError,
    ForbiddenError,
    MalformedResponseError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServiceUnavailableError,
)

logger = structlog.get_logger(__name__)

QueryScalar = Union[str, int, float, bool]
QueryValue = Union[QueryScalar, Sequence[QueryScalar], None]


def encode_query(query: Optional[Dict[str, QueryValue]]) -> Dict[str, str]:
    """Encode query parameters the way the upstream expects them.

    ``None`` and empty lists are dropped, lists are comma-joined and booleans
    are lower-cased.
    """
    params: Dict[str, str] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            params[key] = ",".join(_scalar(entry) for entry in value)
            continue
        params[key] = _scalar(value)  # type: ignore[arg-type]
    return params


def _scalar(value: QueryScalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DeadlockAPIClient:
    """Async client for the Deadlock live API and assets API."""

    def __init__(
        self,
        api_base_url: Optional[str] = None,
        assets_base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Deadlock API client.

        Args:
            api_base_url: Live API base URL (uses config if None)
            assets_base_url: Assets API base URL (uses config if None)
            api_key: Optional API key sent as X-API-KEY (uses config if None)
            timeout_seconds: Per-request timeout (uses config if None)
            transport: Optional httpx transport, used by tests
        """
        settings = get_global_settings()
        self.api_key = api_key if api_key is not None else settings.deadlock_api_key
        self.timeout_seconds = timeout_seconds or settings.api_timeout_seconds
        self.endpoints = DeadlockAPIEndpoints(
            api_base_url or settings.deadlock_api_base_url,
            assets_base_url or settings.deadlock_assets_base_url,
        )
        self._transport = transport

        # HTTP session
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> "DeadlockAPIClient":
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "Accept": "application/json",
                        "User-Agent": USER_AGENT,
                    }
                    if self.api_key:
                        headers[API_KEY_HEADER] = self.api_key

                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout_seconds),
                        transport=self._transport,
                    )

                    logger.info(
                        "Deadlock API client session started",
                        api_base_url=self.endpoints.api_base_url,
                        assets_base_url=self.endpoints.assets_base_url,
                        timeout_seconds=self.timeout_seconds,
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Deadlock API client session closed")

    @staticmethod
    def _raise_for_status(response: httpx.Response, url: str) -> None:
        """Raise the DeadlockAPIError subclass matching a non-2xx status."""
        status = response.status_code
        if 200 <= status < 300:
            return

        body = response.text
        if len(body) > ERROR_BODY_PREVIEW:
            body = f"{body[:ERROR_BODY_PREVIEW]}..."
        message = f"HTTP {status} {response.reason_phrase} for {url} :: {body}"

        if status == 400:
            raise BadRequestError(message, status_code=status, url=url, body=body)
        if status in (401, 403):
            raise ForbiddenError(message, status_code=status, url=url, body=body)
        if status == 404:
            raise NotFoundError(message, status_code=status, url=url, body=body)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                message,
                status_code=status,
                url=url,
                body=body,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        if status >= 500:
            raise ServiceUnavailableError(message, status_code=status, url=url, body=body)
        raise DeadlockAPIError(message, status_code=status, url=url, body=body)

    async def fetch_json(
        self, url: str, query: Optional[Dict[str, QueryValue]] = None
    ) -> Any:
        """
        GET a JSON document.

        Args:
            url: Absolute request URL
            query: Query parameters, encoded with :func:`encode_query`

        Returns:
            Decoded JSON (dict or list)

        Raises:
            RequestTimeoutError: If the request exceeded the timeout
            DeadlockAPIError: For transport failures and non-2xx responses
            MalformedResponseError: If the body is not JSON
        """
        await self.start_session()
        if self.session is None:
            raise DeadlockAPIError("Session not initialized", url=url)

        params = encode_query(query)
        try:
            # httpx only bounds each phase; the whole read shares one deadline
            response = await asyncio.wait_for(
                self.session.get(url, params=params), timeout=self.timeout_seconds
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeoutError(
                f"Request timed out after {self.timeout_seconds}s", url=url
            ) from e
        except httpx.RequestError as e:
            raise DeadlockAPIError(f"Request failed: {e}", url=url) from e

        self._raise_for_status(response, url)

        try:
            return json.loads(response.text)
        except ValueError as e:
            raise MalformedResponseError(
                f"Invalid JSON body for {url}", status_code=response.status_code, url=url
            ) from e

    # Live API endpoints

    async def get_steam_profiles(self, account_ids: List[int]) -> Any:
        """Get Steam profile metadata (persona name, avatar, country)."""
        return await self.fetch_json(
            self.endpoints.steam_profiles(), {"account_ids": account_ids}
        )

    async def get_match_history(self, account_id: int) -> Any:
        """Get the raw match history of an account."""
        return await self.fetch_json(self.endpoints.match_history(account_id))

    async def get_player_card(self, account_id: int) -> Any:
        """Get the ranked player card."""
        return await self.fetch_json(self.endpoints.player_card(account_id))

    async def get_mmr_history(self, account_id: int) -> Any:
        """Get the ranked MMR history."""
        return await self.fetch_json(self.endpoints.mmr_history(account_id))

    async def get_player_hero_stats(self, account_ids: List[int]) -> Any:
        """Get per-hero aggregate stats for accounts."""
        return await self.fetch_json(
            self.endpoints.player_hero_stats(), {"account_ids": account_ids}
        )

    async def get_player_metrics(self, account_id: int, hero_id: int) -> Any:
        """Get per-minute metric distributions for one player on one hero."""
        return await self.fetch_json(
            self.endpoints.player_stats_metrics(),
            {"account_ids": [account_id], "hero_ids": str(hero_id), "max_matches": 200},
        )

    async def get_player_item_stats(self, account_id: int, hero_id: int) -> Any:
        """Get one player's item purchase aggregates on one hero."""
        return await self.fetch_json(
            self.endpoints.item_stats(),
            {
                "account_id": account_id,
                "hero_id": hero_id,
                "game_mode": "normal",
                "min_matches": 1,
            },
        )

    async def get_player_ability_orders(self, account_id: int, hero_id: int) -> Any:
        """Get one player's ability order aggregates on one hero."""
        return await self.fetch_json(
            self.endpoints.ability_order_stats(),
            {
                "hero_id": hero_id,
                "account_ids": [account_id],
                "game_mode": "normal",
                "min_matches": 1,
            },
        )

    async def get_hero_analytics(self) -> Any:
        """Get population-wide hero pick/win aggregates."""
        return await self.fetch_json(
            self.endpoints.hero_stats(), {"bucket": "no_bucket", "game_mode": "normal"}
        )

    async def get_item_analytics(self) -> Any:
        """Get population-wide item aggregates bucketed by hero."""
        return await self.fetch_json(
            self.endpoints.item_stats(),
            {"bucket": "hero", "game_mode": "normal", "min_matches": 100},
        )

    async def get_patches(self) -> Any:
        """Get the patch list."""
        return await self.fetch_json(self.endpoints.patches())

    async def get_leaderboard(self, region: str, hero_id: Optional[int] = None) -> Any:
        """Get a regional leaderboard."""
        return await self.fetch_json(self.endpoints.leaderboard(region, hero_id))

    # Assets API endpoints

    async def get_heroes(self) -> Any:
        """Get all hero assets."""
        return await self.fetch_json(self.endpoints.heroes())

    async def get_items(self) -> Any:
        """Get all item assets."""
        return await self.fetch_json(self.endpoints.items())

    async def get_ranks(self) -> Any:
        """Get all rank assets."""
        return await self.fetch_json(self.endpoints.ranks())
