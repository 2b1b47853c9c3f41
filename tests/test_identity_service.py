from __future__ import annotations

from datetime import timedelta

import pytest
from jose import jwt

from mentorlink import models
from mentorlink.config import settings
from mentorlink.errors import AuthError, ConflictError, NotFoundError, ValidationError
from mentorlink.services import connection_service, identity_service, notification_service
from mentorlink.schemas import Identity
from mentorlink.utils.security import authenticate, create_access_token, decode_access_token


# ======================
# REGISTRATION & LOGIN
# ======================

def test_register_creates_user_with_default_mentee_profile(db_session):
    user = identity_service.register_identity(
        db_session, username="alice", email="Alice@X.com", password="secret1"
    )

    assert user.id is not None
    assert user.email == "alice@x.com"
    assert user.password_hash != "secret1"
    profile = db_session.query(models.Profile).filter(models.Profile.user_id == user.id).one()
    assert profile.role == "mentee"
    assert (profile.about, profile.skills, profile.interests, profile.bio) == ("", "", "", "")
    assert profile.profile_image is None


@pytest.mark.parametrize(
    "username, email, password",
    [("", "a@x.com", "secret1"), ("bob", "", "secret1"), ("bob", "b@x.com", "short")],
)
def test_register_rejects_invalid_input(db_session, username, email, password):
    with pytest.raises(ValidationError) as exc_info:
        identity_service.register_identity(db_session, username=username, email=email, password=password)
    assert exc_info.value.kind == "InvalidInput"
    assert db_session.query(models.User).count() == 0


def test_register_rejects_duplicates(db_session):
    identity_service.register_identity(db_session, username="alice", email="alice@x.com", password="secret1")

    with pytest.raises(ConflictError) as exc_info:
        identity_service.register_identity(db_session, username="alice", email="other@x.com", password="secret1")
    assert exc_info.value.kind == "DuplicateUsername"
    assert exc_info.value.status_code == 400

    with pytest.raises(ConflictError) as exc_info:
        identity_service.register_identity(db_session, username="alice2", email="alice@x.com", password="secret1")
    assert exc_info.value.kind == "DuplicateEmail"


def test_verify_credential(db_session):
    identity_service.register_identity(db_session, username="alice", email="alice@x.com", password="secret1")

    assert identity_service.verify_credential(db_session, username="alice", password="secret1").username == "alice"

    with pytest.raises(AuthError) as exc_info:
        identity_service.verify_credential(db_session, username="alice", password="wrong-password")
    assert exc_info.value.status_code == 401

    with pytest.raises(NotFoundError) as exc_info:
        identity_service.verify_credential(db_session, username="ghost", password="secret1")
    assert exc_info.value.kind == "UserNotFound"


# ======================
# TOKENS & ACCESS GATE
# ======================

def test_issued_token_resolves_to_identity(db_session, make_user):
    user = make_user("tokenuser")
    token = identity_service.issue_token(user)

    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == "tokenuser"
    assert payload["id"] == user.id

    assert authenticate(db_session, token) == Identity(id=user.id, username="tokenuser")


def test_authenticate_missing_token(db_session):
    with pytest.raises(AuthError) as exc_info:
        authenticate(db_session, None)
    assert exc_info.value.kind == "MissingToken"
    assert exc_info.value.status_code == 401


@pytest.mark.parametrize(
    "token_factory",
    [
        lambda user: "not-a-jwt",
        lambda user: create_access_token({"sub": user.username, "id": user.id}, timedelta(minutes=-1)),
        lambda user: jwt.encode({"sub": user.username, "id": user.id}, "wrong-secret", algorithm="HS256"),
        lambda user: create_access_token({"sub": user.username}),
        lambda user: create_access_token({"sub": "impostor", "id": user.id}),
    ],
    ids=["garbage", "expired", "bad-signature", "missing-id", "wrong-username"],
)
def test_authenticate_invalid_token(db_session, make_user, token_factory):
    user = make_user("gate")
    with pytest.raises(AuthError) as exc_info:
        authenticate(db_session, token_factory(user))
    assert exc_info.value.kind == "InvalidToken"
    assert exc_info.value.status_code == 403


def test_decode_access_token_returns_claims():
    token = create_access_token({"sub": "someone", "id": 7})
    data = decode_access_token(token)
    assert (data.username, data.user_id) == ("someone", 7)


# ======================
# ACCOUNT DELETION
# ======================

def test_delete_account_cascades(db_session, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    alice_id = alice.id
    connection_service.request_connection(
        db_session, actor=Identity(id=bob.id, username="bob"), receiver_id=alice_id
    )
    notification_service.enqueue(db_session, user_id=alice_id, message="Hello")
    db_session.commit()

    identity_service.delete_account(db_session, user_id=alice_id)
    db_session.expire_all()

    assert db_session.query(models.User).filter(models.User.id == alice_id).first() is None
    assert db_session.query(models.Profile).filter(models.Profile.user_id == alice_id).count() == 0
    assert db_session.query(models.Connection).count() == 0
    assert db_session.query(models.Notification).filter(models.Notification.user_id == alice_id).count() == 0
    assert db_session.query(models.User).filter(models.User.id == bob.id).one().username == "bob"
