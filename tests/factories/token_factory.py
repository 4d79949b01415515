from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

import jwt

from src.core.utils.datetime_utils import get_utc_now, to_unix_seconds
from src.identity.refresh_store import RefreshTokenStore
from src.identity.signer import ALGORITHM, Signer
from src.identity.token_issuer import SigningMaterial, TokenIssuer

TEST_ISSUER = "identity-api"
TEST_AUDIENCE = "identity-api-clients"
TEST_ACCESS_KEY = "access-key-for-unit-tests-000000000000"
TEST_REFRESH_KEY = "refresh-key-for-unit-tests-11111111111"
ACCESS_LIFETIME = timedelta(minutes=5)
REFRESH_LIFETIME = timedelta(days=1)


def build_signer() -> Signer:
    return Signer(TEST_ISSUER, TEST_AUDIENCE)


def build_issuer(store: RefreshTokenStore) -> TokenIssuer:
    return TokenIssuer(
        signer=build_signer(),
        store=store,
        keys=SigningMaterial(access_key=TEST_ACCESS_KEY, refresh_key=TEST_REFRESH_KEY),
        access_lifetime=ACCESS_LIFETIME,
        refresh_lifetime=REFRESH_LIFETIME,
    )


def forge_token(
    *,
    key: str = TEST_REFRESH_KEY,
    sub: str | None = "alice",
    expires_at: datetime | None = None,
    not_before: datetime | None = None,
    issuer: str = TEST_ISSUER,
    audience: str = TEST_AUDIENCE,
    **extra: Any,
) -> str:
    """Sign an arbitrary payload, bypassing the claim set checks."""
    now = get_utc_now()
    payload: dict[str, Any] = {
        "iss": issuer,
        "aud": audience,
        "nbf": to_unix_seconds(not_before or now),
        "exp": to_unix_seconds(expires_at or now + REFRESH_LIFETIME),
        **extra,
    }
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, key, algorithm=ALGORITHM)
