from typing import Any


class CoreException(Exception):
    """
    Base of every error the API renders itself.

    ``message`` is shown to the client; ``additional_info`` only reaches the logs.
    """

    def __init__(
        self, message: str | None = None, additional_info: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        self.additional_info = additional_info


class InfrastructureException(CoreException):
    """A backing service (database, cache) failed. Rendered as 500."""


class InstanceNotFoundException(CoreException):
    pass


class InstanceAlreadyExistsException(CoreException):
    pass


class InstanceProcessingException(CoreException):
    """The request is well-formed but cannot be processed. Rendered as 400."""


class UnauthorizedException(CoreException):
    """Missing, invalid or no longer accepted credentials. Rendered as 401."""
