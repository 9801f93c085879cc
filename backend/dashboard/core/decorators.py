"""
Service layer decorators for common functionality.

This module provides the live-to-synthetic fallback used by the stats
service, with structured logging of every degraded call.
"""

import functools
import inspect
from typing import Any, Awaitable, Callable, Dict, TypeVar

import structlog

from dashboard.core.schemas import CamelModel

logger = structlog.get_logger(__name__)

R = TypeVar("R", bound=CamelModel)

FALLBACK_NOTE = "Live data unavailable ({reason}); showing synthetic demo data instead."


def _call_context(func: Callable[..., Any], args: tuple, kwargs: dict) -> Dict[str, Any]:
    """Bound call arguments, excluding ``self``, for log events."""
    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()
    return {
        name: str(value)[:200] if value is not None else None
        for name, value in bound_args.arguments.items()
        if name != "self"
    }


def with_synthetic_fallback(
    service_name: str,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """
    Decorator that retries a failed live call against the synthetic source.

    The decorated method must belong to an object exposing ``allow_mock_fallback``
    and a ``synthetic`` source with a method of the same name. When fallback is
    disabled the original exception propagates unchanged.

    :param service_name: Name of the service, used in log events
    :returns: Decorated coroutine function

    :example:
        @with_synthetic_fallback("DeadlockStatsService")
        async def get_meta_stats(self) -> MetaPayload:
            return await self.live.get_meta_stats()
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        operation_name = func.__name__

        @functools.wraps(func)
        async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> R:
            context: Dict[str, Any] = {
                "service": service_name,
                "operation": operation_name,
                **_call_context(func, (self, *args), kwargs),
            }

            try:
                return await func(self, *args, **kwargs)
            except Exception as e:
                if not self.allow_mock_fallback:
                    logger.error(
                        "Live data source failed, fallback disabled",
                        error_type=type(e).__name__,
                        error_message=str(e),
                        **context,
                    )
                    raise

                reason = type(e).__name__
                logger.warning(
                    "Live data source failed, serving synthetic data",
                    error_type=type(e).__name__,
                    error_message=str(e),
                    **context,
                )

            synthetic_call = getattr(self.synthetic, operation_name)
            payload = await synthetic_call(*args, **kwargs)
            note = FALLBACK_NOTE.format(reason=reason)
            return payload.model_copy(update={"notes": [note, *payload.notes]})

        return async_wrapper

    return decorator
