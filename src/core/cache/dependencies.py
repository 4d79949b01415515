from typing import cast

from fastapi import Request

from src.core.cache.interface import ExpiringCache


async def get_expiring_cache(request: Request) -> ExpiringCache:
    """
    Provide the expiring cache attached to app.state during startup.
    """
    cache = getattr(request.app.state, "expiring_cache", None)
    if cache is None:
        raise RuntimeError(
            "Expiring cache is not initialized. Ensure startup lifecycle ran."
        )
    return cast(ExpiringCache, cache)
