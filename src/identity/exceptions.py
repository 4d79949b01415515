from typing import Any

from src.core.errors.exceptions import (
    InfrastructureException,
    InstanceProcessingException,
    UnauthorizedException,
)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."
INVALID_REFRESH_TOKEN_MESSAGE = "Invalid refresh token."


class CredentialsInvalid(InstanceProcessingException):
    """Unknown login or wrong password. Both cases share one message."""

    def __init__(
        self,
        message: str | None = INVALID_CREDENTIALS_MESSAGE,
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, additional_info)


class RefreshTokenMalformed(InstanceProcessingException):
    def __init__(
        self,
        message: str | None = INVALID_REFRESH_TOKEN_MESSAGE,
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, additional_info)


class RefreshTokenExpired(UnauthorizedException):
    def __init__(
        self,
        message: str | None = "Refresh token expired",
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, additional_info)


class RefreshTokenMismatch(UnauthorizedException):
    """Well-formed, unexpired token that is not the one on record, e.g. superseded."""

    def __init__(
        self,
        message: str | None = "Refresh token is not valid",
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, additional_info)


class InvalidSignature(UnauthorizedException):
    def __init__(
        self,
        message: str | None = "Could not validate credentials",
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, additional_info)


class TokenExpired(InvalidSignature):
    def __init__(
        self,
        message: str | None = "Token expired",
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, additional_info)


class StoreUnavailable(InfrastructureException):
    def __init__(
        self,
        message: str | None = "Refresh token store is unavailable",
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, additional_info)
