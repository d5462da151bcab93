# mypy: ignore-errors
# tests/test_scripts.py
"""Tests for maintenance scripts and security helpers."""

from ideaboard.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from ideaboard.scripts.promote_admin import promote


def test_promote_existing_user(db_session, test_user) -> None:
    assert promote(db_session, "ALICE") is True
    db_session.refresh(test_user)
    assert test_user.is_admin


def test_promote_unknown_user(db_session) -> None:
    assert promote(db_session, "nobody") is False


def test_password_hash_roundtrip() -> None:
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_with_corrupt_hash() -> None:
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_access_token_subject() -> None:
    assert decode_access_token(create_access_token(42, username="zed")) == 42
