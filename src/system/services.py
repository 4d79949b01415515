import sentry_sdk

from loggers import get_logger
from src.core.cache.interface import CacheBackendError, ExpiringCache
from src.core.errors.exceptions import InfrastructureException
from src.system.schemas import HealthCheckResponse

HEALTH_PROBE_KEY = "health:probe"


class HealthService:
    def __init__(self, cache: ExpiringCache) -> None:
        self.cache = cache
        self.logger = get_logger(__name__)

    async def get_status(self) -> HealthCheckResponse:
        if not await self._check_cache():
            raise InfrastructureException(
                "System health check failed",
                additional_info={"cache": type(self.cache).__name__},
            )
        return HealthCheckResponse(status="ok", cache=self.cache.backend_name)

    async def _check_cache(self) -> bool:
        # a miss is fine, only a backend failure counts
        try:
            await self.cache.get_value(HEALTH_PROBE_KEY)
            return True
        except CacheBackendError as exc:
            self.logger.error("Cache health check failed", exc_info=exc)
            sentry_sdk.capture_exception(exc)
            return False
