from abc import ABC, abstractmethod

from src.core.errors.exceptions import InfrastructureException


class CacheBackendError(InfrastructureException):
    """The cache backend could not be reached or refused the command."""


class ExpiringCache(ABC):
    """
    Key-value cache whose entries expire after a time-to-live.

    Missing and expired keys are never an error: ``get_value`` returns None and
    ``delete`` is a no-op. Backends raise ``CacheBackendError`` only when the
    underlying storage itself fails.
    """

    backend_name: str = "abstract"

    @abstractmethod
    async def get_value(self, key: str) -> str | None:
        """Retrieve a value from the cache by its key."""
        raise NotImplementedError

    @abstractmethod
    async def set_value(self, key: str, value: str, ttl: int) -> None:
        """Store a value in the cache with a specified time-to-live in seconds."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a value from the cache by its key."""
        raise NotImplementedError
