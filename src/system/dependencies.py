from fastapi import Depends

from src.core.cache.dependencies import get_expiring_cache
from src.core.cache.interface import ExpiringCache
from src.system.services import HealthService


async def get_health_service(
    cache: ExpiringCache = Depends(get_expiring_cache),
) -> HealthService:
    return HealthService(cache=cache)
