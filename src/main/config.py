from functools import lru_cache
import json
import logging
import os
from pathlib import Path
from typing import Any, Literal

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]

MIN_SIGNING_KEY_LENGTH = 16


class RedisConfig(BaseModel):
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""
    REDIS_DATABASE: str = "0"

    model_config = ConfigDict(extra="ignore")

    @property
    def dsn(self) -> str:
        return (
            f"redis://:"
            f"{self.REDIS_PASSWORD}@"
            f"{self.REDIS_HOST}:"
            f"{self.REDIS_PORT}/"
            f"{self.REDIS_DATABASE}"
        )


class SentryConfig(BaseModel):
    SENTRY_DSN: str | None = None
    SENTRY_ENV: str = "development"
    SENTRY_ENABLED: bool = False

    model_config = ConfigDict(extra="ignore")


class TokenConfig(BaseModel):
    """
    Signing material and lifetimes for access and refresh tokens.

    Access and refresh tokens are signed with independent keys, so a leaked
    refresh token can never be replayed as an access token.
    """

    TOKEN_ISSUER: str
    TOKEN_AUDIENCE: str

    TOKEN_ACCESS_KEY: str = Field(min_length=MIN_SIGNING_KEY_LENGTH)
    TOKEN_REFRESH_KEY: str = Field(min_length=MIN_SIGNING_KEY_LENGTH)

    TOKEN_ACCESS_LIFETIME_SECONDS: int = Field(300, gt=0)
    TOKEN_REFRESH_LIFETIME_SECONDS: int = Field(86_400, gt=0)

    # "memory" keeps refresh records in-process, "redis" shares them between workers
    REFRESH_STORE_BACKEND: Literal["memory", "redis"] = "memory"

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="after")
    def check_keys_differ(self) -> "TokenConfig":
        if self.TOKEN_ACCESS_KEY == self.TOKEN_REFRESH_KEY:
            raise ValueError("TOKEN_ACCESS_KEY and TOKEN_REFRESH_KEY must differ")
        return self


class PostgresConfig(BaseModel):
    DB_ECHO: bool = False

    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_HOST: str
    POSTGRES_PORT: int
    POSTGRES_DB: str

    model_config = ConfigDict(extra="ignore")

    @property
    def dsn_async(self) -> str:
        return (
            f"postgresql+asyncpg://"
            f"{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )


class AppConfig(BaseModel):
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_LEVEL_FILE: str = "WARNING"

    CORS_ALLOWED_ORIGINS: list[str] = Field(["*"])
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOWED_METHODS: list[str] = Field(["*"])
    CORS_ALLOWED_HEADERS: list[str] = Field(["*"])
    CORS_EXPOSE_HEADERS: list[str] = Field(default_factory=list)

    PROJECT_NAME: str = "Identity API"

    model_config = ConfigDict(extra="ignore")

    @field_validator(
        "CORS_ALLOWED_ORIGINS",
        "CORS_ALLOWED_METHODS",
        "CORS_ALLOWED_HEADERS",
        "CORS_EXPOSE_HEADERS",
        mode="before",
    )
    @classmethod
    def parse_cors_list(cls, v: Any) -> list[str]:
        if isinstance(v, list):
            return v
        if isinstance(v, str) and v.strip().startswith("[") and v.strip().endswith("]"):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(item) for item in parsed]
            except json.JSONDecodeError:
                pass
        sep = "," if "," in v else ";"
        return [item.strip() for item in v.split(sep) if item.strip()]


class Config(BaseModel):
    app: AppConfig
    token: TokenConfig
    redis: RedisConfig
    sentry: SentryConfig
    postgres: PostgresConfig

    model_config = ConfigDict(extra="ignore")


def load_environment() -> dict[str, Any]:
    """
    Merge values from the env file with the process environment.

    The process environment wins. ``.env.test`` is used when ``TESTING=true``.
    """
    env_filename = ".env.test" if os.getenv("TESTING") == "true" else ".env"
    env_file_values = dotenv_values(PROJECT_ROOT / env_filename)
    if not env_file_values:
        logger.debug("No values loaded from %s", env_filename)
    return {
        k: v
        for k, v in {**env_file_values, **dict(os.environ)}.items()
        if v is not None
    }


@lru_cache
def get_settings() -> Config:
    """
    Cached settings factory. Override in tests via monkeypatching or dependency overrides.
    """
    merged_env = load_environment()

    return Config(
        app=AppConfig(**merged_env),
        token=TokenConfig(**merged_env),
        redis=RedisConfig(**merged_env),
        sentry=SentryConfig(**merged_env),
        postgres=PostgresConfig(**merged_env),
    )


config = get_settings()
