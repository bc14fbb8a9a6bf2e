"""
Tests for the session service and the account store behind it.
"""

from datetime import datetime, timedelta, timezone

import pytest

from config import database
from config.database import DuplicateEmailError, create_user, get_user_by_email
from webapp.errors import AuthError, ConflictError, ValidationError


def test_signup_returns_public_fields_only(session_service):
    user, token = session_service.signup("Grace", "grace@example.com", "cobol")
    assert set(user) == {"id", "name", "email"}
    assert token


def test_password_is_stored_hashed_and_salted(session_service):
    session_service.signup("Grace", "grace@example.com", "cobol")
    session_service.signup("Alan", "alan@example.com", "cobol")

    grace = get_user_by_email("grace@example.com")
    alan = get_user_by_email("alan@example.com")
    assert grace["password_hash"] != "cobol"
    assert grace["password_hash"] != alan["password_hash"]


def test_signup_validation(session_service):
    with pytest.raises(ValidationError):
        session_service.signup("Grace", "", "cobol")


def test_signup_conflict(session_service):
    session_service.signup("Grace", "grace@example.com", "cobol")
    with pytest.raises(ConflictError):
        session_service.signup("Other Grace", " GRACE@example.com", "fortran")


def test_racing_signups_only_one_wins(session_service, monkeypatch):
    # Both requests pass the existence check before either inserts.
    monkeypatch.setattr("webapp.services.session_service.get_user_by_email", lambda email: None)

    session_service.signup("Grace", "grace@example.com", "cobol")
    with pytest.raises(ConflictError):
        session_service.signup("Grace", "Grace@Example.com", "cobol")

    session = database.get_db_session()
    try:
        from config.models import User
        assert session.query(User).count() == 1
    finally:
        session.close()


def test_create_user_unique_constraint(app):
    create_user("Grace", "grace@example.com", "hash")
    with pytest.raises(DuplicateEmailError):
        create_user("Grace", "GRACE@example.com ", "hash")


def test_login_and_me_round_trip(session_service):
    created, _ = session_service.signup("Grace", "grace@example.com", "cobol")
    user, token = session_service.login("grace@example.com", "cobol")
    assert user == created
    assert session_service.me(token) == created


def test_login_rejects_bad_password(session_service):
    session_service.signup("Grace", "grace@example.com", "cobol")
    with pytest.raises(AuthError, match="Invalid credentials."):
        session_service.login("grace@example.com", "COBOL")


def test_token_expiry_window(session_service):
    issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
    token = session_service.issue_token({"id": 1, "name": "G", "email": "g@example.com"}, now=issued)
    assert session_service.decode_token(token) is None

    fresh = session_service.issue_token({"id": 1, "name": "G", "email": "g@example.com"})
    payload = session_service.decode_token(fresh)
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())


@pytest.mark.parametrize("token", [None, "", "abc.def.ghi"])
def test_me_rejects_missing_or_malformed_tokens(session_service, token):
    with pytest.raises(AuthError):
        session_service.me(token)


def test_max_age_follows_cookie_days(session_service):
    assert session_service.max_age == 7 * 24 * 60 * 60
