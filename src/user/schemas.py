from pydantic import EmailStr, Field, field_validator

from src.core.schemas import Base

PASSWORD_MIN_LENGTH = 8


class SignInRequest(Base):
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return str(v).strip().lower()
