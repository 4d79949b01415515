"""
Identity claims and token pairs.

A ``ClaimSet`` is the payload shared by access and refresh tokens. It is
immutable, keeps insertion order and always carries the ``sub`` claim holding
the user's login. Registered JWT claims (``iss``, ``aud``, ``nbf``, ``exp``,
``iat``, ``jti``) are owned by the signer and cannot be set through a claim set.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any

from src.core.utils.datetime_utils import to_unix_seconds

SUBJECT_CLAIM = "sub"
REGISTERED_CLAIMS = frozenset({"iss", "aud", "nbf", "exp", "iat", "jti"})


class ClaimSet(Mapping[str, str]):
    __slots__ = ("_claims",)

    def __init__(self, claims: Mapping[str, str]) -> None:
        data = dict(claims)
        subject = data.get(SUBJECT_CLAIM)
        if not isinstance(subject, str) or not subject:
            raise ValueError("Claim set must contain a non-empty 'sub' claim")

        reserved = REGISTERED_CLAIMS.intersection(data)
        if reserved:
            raise ValueError(f"Registered claims cannot be set: {sorted(reserved)}")

        for name, value in data.items():
            if not isinstance(value, str):
                raise TypeError(f"Claim '{name}' must be a string")

        self._claims: Mapping[str, str] = MappingProxyType(data)

    @classmethod
    def for_login(cls, login: str, **extra: str) -> "ClaimSet":
        return cls({SUBJECT_CLAIM: login, **extra})

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ClaimSet":
        """Build a claim set from a decoded token payload, dropping registered claims."""
        return cls(
            {
                name: str(value)
                for name, value in payload.items()
                if name not in REGISTERED_CLAIMS
            }
        )

    @property
    def subject(self) -> str:
        return self._claims[SUBJECT_CLAIM]

    def __getitem__(self, key: str) -> str:
        return self._claims[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __repr__(self) -> str:
        return f"ClaimSet({dict(self._claims)!r})"


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_at: datetime

    @property
    def access_expires_unix(self) -> int:
        return to_unix_seconds(self.access_expires_at)


@dataclass(frozen=True, slots=True)
class DecodedToken:
    """Claims read from a token without any verification."""

    claims: Mapping[str, Any]
    expires_at: datetime

    @property
    def subject(self) -> str | None:
        subject = self.claims.get(SUBJECT_CLAIM)
        if isinstance(subject, str) and subject:
            return subject
        return None
