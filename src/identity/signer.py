from datetime import datetime
from typing import Any
from uuid import uuid4

import jwt

from loggers import get_logger
from src.core.utils.datetime_utils import from_unix_seconds, to_unix_seconds
from src.identity.claims import ClaimSet, DecodedToken
from src.identity.exceptions import (
    InvalidSignature,
    RefreshTokenMalformed,
    TokenExpired,
)

logger = get_logger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["exp", "nbf", "iss", "aud", "sub"]


class Signer:
    """
    Stateless HS256 signer.

    Every token carries ``iss``, ``aud``, ``nbf`` and ``exp`` (Unix seconds, UTC)
    next to the claim set, plus a random ``jti`` so no two tokens are equal. The key is passed per call so one signer serves both
    access and refresh tokens.
    """

    def __init__(self, issuer: str, audience: str, *, leeway: int = 0) -> None:
        self.issuer = issuer
        self.audience = audience
        self.leeway = leeway

    def issue(
        self,
        claims: ClaimSet,
        not_before: datetime,
        expires_at: datetime,
        key: str,
    ) -> str:
        """
        Sign ``claims`` into a token valid from ``not_before`` until ``expires_at``.

        Args:
            claims: Identity claims, ``sub`` included
            not_before: First instant the token is accepted
            expires_at: Instant the token stops being accepted
            key: Symmetric signing key

        Returns:
            str: Compact JWT (header.payload.signature)
        """
        payload: dict[str, Any] = {
            **claims,
            "iss": self.issuer,
            "aud": self.audience,
            "nbf": to_unix_seconds(not_before),
            "exp": to_unix_seconds(expires_at),
            "jti": uuid4().hex,
        }
        return str(jwt.encode(payload, key, algorithm=ALGORITHM))

    @staticmethod
    def decode_unverified(token: str) -> DecodedToken:
        """
        Read claims and expiry without checking signature, audience or lifetime.

        Only meant for pulling the login out of a presented refresh token; the
        refresh store comparison is what decides whether the token is trusted.

        Raises:
            RefreshTokenMalformed: If the token cannot be parsed or has no usable ``exp``
        """
        try:
            payload = jwt.decode(
                token,
                options={"verify_signature": False},
                algorithms=[ALGORITHM],
            )
        except jwt.PyJWTError as exc:
            logger.debug("Unparseable token: %s", exc)
            raise RefreshTokenMalformed() from exc

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, int | float):
            raise RefreshTokenMalformed()

        try:
            expires_at = from_unix_seconds(exp)
        except (OverflowError, OSError, ValueError) as exc:
            raise RefreshTokenMalformed() from exc

        return DecodedToken(claims=payload, expires_at=expires_at)

    def verify(self, token: str, key: str) -> ClaimSet:
        """
        Fully verify ``token`` against ``key``: signature, issuer, audience and lifetime.

        Raises:
            TokenExpired: If ``exp`` is in the past
            InvalidSignature: For any other verification failure
        """
        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                leeway=self.leeway,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except jwt.PyJWTError as exc:
            logger.debug("Token verification failed: %s", exc)
            raise InvalidSignature() from exc

        try:
            return ClaimSet.from_payload(payload)
        except (TypeError, ValueError) as exc:
            raise InvalidSignature() from exc
