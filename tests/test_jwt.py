"""Token service tests — issuance, validation, expiry, tampering.

Learn: The token service is pure (no DB), so these are plain unit tests.
Expiry is tested by issuing with a negative lifetime override rather than
sleeping.
"""

from datetime import timedelta

import pytest

from tasktrack.auth.jwt import TokenError, TokenKind, TokenService

SECRET = "unit-test-secret-0123456789abcdef0123"
OTHER_SECRET = "another-secret-0123456789abcdef012345"


@pytest.fixture
def tokens():
    return TokenService(
        secret=SECRET,
        access_lifetime=timedelta(seconds=900),
        refresh_lifetime=timedelta(seconds=604800),
    )


def _mutate(token: str, index: int) -> str:
    replacement = "A" if token[index] != "A" else "B"
    return token[:index] + replacement + token[index + 1:]


# ═══════════════════════════════════════════════════════════
# Issue + validate
# ═══════════════════════════════════════════════════════════


def test_issued_access_token_is_valid(tokens):
    token = tokens.issue("john@mail.com", TokenKind.ACCESS)
    assert tokens.validate(token) is True
    assert tokens.extract_subject(token) == "john@mail.com"


def test_issued_refresh_token_is_valid(tokens):
    token = tokens.issue_refresh("john@mail.com")
    assert tokens.validate(token) is True
    assert tokens.extract_subject(token) == "john@mail.com"


def test_each_issue_produces_a_fresh_token(tokens):
    """Two tokens for the same subject in the same second still differ."""
    assert tokens.issue_access("a@b.com") != tokens.issue_access("a@b.com")


def test_lifetimes_configured_independently(tokens):
    assert tokens.lifetime(TokenKind.ACCESS) == timedelta(seconds=900)
    assert tokens.lifetime(TokenKind.REFRESH) == timedelta(seconds=604800)


def test_repr_does_not_leak_secret(tokens):
    assert SECRET not in repr(tokens)


# ═══════════════════════════════════════════════════════════
# Invalid tokens → False, never an exception
# ═══════════════════════════════════════════════════════════


def test_expired_token_is_invalid(tokens):
    token = tokens.issue("john@mail.com", TokenKind.ACCESS, lifetime=timedelta(seconds=-1))
    assert tokens.validate(token) is False


def test_token_signed_with_other_key_is_invalid(tokens):
    forged = TokenService(secret=OTHER_SECRET).issue_access("john@mail.com")
    assert tokens.validate(forged) is False


@pytest.mark.parametrize("segment", [0, 1, 2])
def test_mutated_token_is_invalid(tokens, segment):
    """Changing a character in the header, payload or signature breaks it."""
    token = tokens.issue_access("john@mail.com")
    parts = token.split(".")
    start = sum(len(p) + 1 for p in parts[:segment])
    # middle of the segment; the last base64 char may only carry padding bits
    index = start + len(parts[segment]) // 2
    assert tokens.validate(_mutate(token, index)) is False


@pytest.mark.parametrize(
    "garbage",
    ["", "not-a-jwt", "a.b.c", "eyJhbGciOiJIUzI1NiJ9..", None],
)
def test_malformed_tokens_are_invalid(tokens, garbage):
    assert tokens.validate(garbage) is False


def test_extract_subject_raises_on_invalid_token(tokens):
    with pytest.raises(TokenError):
        tokens.extract_subject("not-a-jwt")


def test_extract_subject_raises_on_expired_token(tokens):
    token = tokens.issue("john@mail.com", TokenKind.ACCESS, lifetime=timedelta(seconds=-5))
    with pytest.raises(TokenError, match="expired"):
        tokens.extract_subject(token)
