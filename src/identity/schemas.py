from pydantic import Field

from src.core.schemas import Base
from src.identity.claims import TokenPair
from src.user.schemas import PASSWORD_MIN_LENGTH


class LoginRequest(Base):
    login: str = Field(min_length=1)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)


class RefreshRequest(Base):
    refresh_token: str = Field(min_length=1)


class TokenResponse(Base):
    access_token: str
    refresh_token: str
    expires: int  # access token expiry, Unix seconds

    @classmethod
    def from_pair(cls, pair: TokenPair) -> "TokenResponse":
        return cls(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            expires=pair.access_expires_unix,
        )
