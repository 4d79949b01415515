from typing import Any

from src.core.errors.exceptions import InstanceAlreadyExistsException

LOGIN_TAKEN_MESSAGE = "Login is already taken"


class LoginAlreadyTaken(InstanceAlreadyExistsException):
    def __init__(
        self,
        message: str | None = LOGIN_TAKEN_MESSAGE,
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, additional_info)
