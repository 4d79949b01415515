from datetime import datetime, timezone

import pytest

from src.identity.claims import ClaimSet, DecodedToken, TokenPair


def test_for_login_sets_subject() -> None:
    claims = ClaimSet.for_login("alice", role="admin")

    assert claims.subject == "alice"
    assert dict(claims) == {"sub": "alice", "role": "admin"}


def test_claim_set_rejects_missing_or_empty_subject() -> None:
    with pytest.raises(ValueError):
        ClaimSet({"role": "admin"})
    with pytest.raises(ValueError):
        ClaimSet.for_login("")


def test_claim_set_rejects_registered_claims() -> None:
    with pytest.raises(ValueError, match="exp"):
        ClaimSet({"sub": "alice", "exp": "1"})


def test_claim_set_rejects_non_string_values() -> None:
    with pytest.raises(TypeError):
        ClaimSet({"sub": "alice", "level": 3})  # type: ignore[dict-item]


def test_claim_set_is_immutable() -> None:
    claims = ClaimSet.for_login("alice")

    with pytest.raises(TypeError):
        claims["sub"] = "mallory"  # type: ignore[index]


def test_from_payload_drops_registered_claims() -> None:
    claims = ClaimSet.from_payload(
        {"sub": "alice", "iss": "x", "aud": "y", "nbf": 1, "exp": 2, "tenant": 7}
    )

    assert dict(claims) == {"sub": "alice", "tenant": "7"}


def test_token_pair_exposes_unix_expiry() -> None:
    expires_at = datetime(2030, 1, 1, tzinfo=timezone.utc)
    pair = TokenPair("a", "r", expires_at)

    assert pair.access_expires_unix == int(expires_at.timestamp())


@pytest.mark.parametrize("subject", [None, "", 42])
def test_decoded_token_subject_is_none_when_unusable(subject: object) -> None:
    payload = {} if subject is None else {"sub": subject}
    decoded = DecodedToken(claims=payload, expires_at=datetime.now(timezone.utc))

    assert decoded.subject is None
