"""
Service layer custom exceptions.

This module defines service-specific exceptions that carry enough context for
the orchestration layer to decide between surfacing a failure and falling back
to synthetic data.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class ValidationError(ServiceException):
    """Exception raised for input validation errors in services."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        validation_context = context or {}
        if field:
            validation_context["field"] = field
        if value is not None:
            validation_context["value"] = str(value)

        super().__init__(
            message=f"Validation error: {message}",
            service=service,
            operation=operation,
            context=validation_context,
        )


class InvalidSteamIdError(ValidationError):
    """SteamID64 cannot be converted to a positive, safe account ID."""

    def __init__(self, steam_id64: str, reason: str):
        super().__init__(
            message=f"Invalid SteamID64 for account conversion: {steam_id64} ({reason})",
            service="SteamIdentity",
            operation="steam_id64_to_account_id",
            field="steam_id64",
            value=steam_id64,
        )


class LiveDataUnavailableError(ServiceException):
    """The live source answered, but not with anything usable."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service="LiveDataSource",
            operation=operation,
            context=context,
            original_error=original_error,
        )


class EmptyMatchHistoryError(LiveDataUnavailableError):
    """Match history came back empty for an account.

    Treated as a failure because an empty history cannot be told apart from a
    degraded upstream.
    """

    def __init__(self, account_id: int):
        super().__init__(
            message=f"No live match history returned for account {account_id}",
            operation="build_live_player_profile",
            context={"account_id": account_id},
        )


class EmptyMetaSampleError(LiveDataUnavailableError):
    """Hero analytics returned no row with a hero ID and recorded matches."""

    def __init__(self) -> None:
        super().__init__(
            message="Deadlock live meta hero-stats returned no rows",
            operation="build_live_meta_snapshot",
        )


class EmptyLeaderboardError(LiveDataUnavailableError):
    """Leaderboard endpoint returned no entries."""

    def __init__(self, region: str, hero_id: Optional[int] = None):
        super().__init__(
            message=f"Deadlock live leaderboard returned no entries for {region}",
            operation="build_live_leaderboard",
            context={"region": region, "hero_id": hero_id},
        )


class AssetCatalogUnavailableError(LiveDataUnavailableError):
    """Every asset catalog fetch failed."""

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(
            message="All Deadlock asset catalog fetches failed",
            operation="get_assets_catalog",
            original_error=original_error,
        )
