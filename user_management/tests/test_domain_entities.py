from datetime import datetime

import pytest
from conftest import make_user

from user_management.domain import InvariantViolation
from user_management.domain.users import normalize_email


def test_user_repr_hides_password_hash() -> None:
    user = make_user(password_hash="hashed:topsecret")
    assert "topsecret" not in repr(user)


def test_user_rejects_empty_password_hash() -> None:
    with pytest.raises(InvariantViolation) as exc_info:
        make_user(password_hash="")
    assert exc_info.value.field == "password_hash"


def test_user_rejects_username_out_of_range() -> None:
    with pytest.raises(InvariantViolation):
        make_user(username="al")
    with pytest.raises(InvariantViolation):
        make_user(username="a" * 51)


def test_user_rejects_naive_created_at() -> None:
    with pytest.raises(InvariantViolation):
        make_user(created_at=datetime(2025, 1, 1))


def test_profile_drops_password_hash() -> None:
    user = make_user()
    profile = user.profile()
    assert profile.id == user.id
    assert profile.email == user.email
    assert not hasattr(profile, "password_hash")


def test_normalize_email_is_case_insensitive() -> None:
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"
