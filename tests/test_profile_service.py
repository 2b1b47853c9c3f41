from __future__ import annotations

import base64

import pytest

from mentorlink import models
from mentorlink.config import settings
from mentorlink.errors import NotFoundError, ValidationError
from mentorlink.schemas import ProfileUpdate
from mentorlink.services import discovery_service, profile_service


IMG1 = b"\xff\xd8\xff\xe0IMG1-bytes\x00\x01"


# ======================
# PROFILE STORE
# ======================

def test_default_profile_fields(db_session, make_user):
    user = make_user("dora")
    profile = profile_service.get_profile(db_session, user.id)

    assert profile.role == "mentee"
    assert (profile.about, profile.skills, profile.interests, profile.bio) == ("", "", "", "")
    assert profile.profile_image is None


def test_update_without_image_preserves_stored_image(db_session, make_user):
    carol = make_user("carol")
    profile_service.update_profile(
        db_session, carol.id, ProfileUpdate(role="mentor"), image=IMG1, image_content_type="image/png"
    )

    result = profile_service.update_profile(db_session, carol.id, ProfileUpdate(role="mentor", skills="Go,Rust"))

    stored = profile_service.get_profile(db_session, carol.id)
    assert stored.profile_image == IMG1
    assert stored.skills == "Go,Rust"
    assert result["profile_image"] == "data:image/png;base64," + base64.b64encode(IMG1).decode("ascii")


def test_update_replaces_image_when_supplied(db_session, make_user):
    user = make_user("imgswap")
    profile_service.update_profile(db_session, user.id, ProfileUpdate(role="mentee"), image=IMG1)
    profile_service.update_profile(db_session, user.id, ProfileUpdate(role="mentee"), image=b"IMG2")

    stored = profile_service.get_profile(db_session, user.id)
    assert stored.profile_image == b"IMG2"
    # Unknown upload type is served as jpeg.
    assert profile_service.get_profile_image(db_session, user.id) == {
        "username": "imgswap",
        "profileImage": "data:image/jpeg;base64," + base64.b64encode(b"IMG2").decode("ascii"),
    }


def test_update_keeps_fields_that_were_not_sent(db_session, make_user):
    user = make_user("partial", bio="Original bio", interests="Chess")
    profile_service.update_profile(db_session, user.id, ProfileUpdate(role="mentor", interests=""))

    stored = profile_service.get_profile(db_session, user.id)
    assert stored.role == "mentor"
    assert stored.bio == "Original bio"
    assert stored.interests == ""


@pytest.mark.parametrize("role", [None, "", "admin", "Mentor"])
def test_update_rejects_invalid_role_before_writing(db_session, make_user, role):
    user = make_user("badrole", skills="Python")

    with pytest.raises(ValidationError) as exc_info:
        profile_service.update_profile(db_session, user.id, ProfileUpdate(role=role, skills="Changed"))

    assert exc_info.value.kind == "InvalidRole"
    db_session.expire_all()
    assert profile_service.get_profile(db_session, user.id).skills == "Python"


def test_update_rejects_oversized_image(db_session, make_user, monkeypatch):
    user = make_user("bigimage")
    monkeypatch.setattr(settings, "MAX_PROFILE_IMAGE_BYTES", 4)

    with pytest.raises(ValidationError) as exc_info:
        profile_service.update_profile(db_session, user.id, ProfileUpdate(role="mentee"), image=b"12345")

    assert exc_info.value.kind == "ImageTooLarge"


def test_update_creates_missing_profile(db_session):
    user = models.User(username="noprofile", email="noprofile@x.com", password_hash="hash")
    db_session.add(user)
    db_session.commit()

    result = profile_service.update_profile(db_session, user.id, ProfileUpdate(role="mentor", about="Hi"))

    assert result["username"] == "noprofile"
    assert result["role"] == "mentor"
    assert result["about"] == "Hi"
    assert result["skills"] == ""


def test_public_profile_hides_credentials(db_session, make_user):
    make_user("eve", role="mentor", bio="Security person")
    profile = profile_service.get_profile_by_username(db_session, "eve")

    assert profile["username"] == "eve"
    assert profile["bio"] == "Security person"
    assert "email" not in profile
    assert "password" not in profile
    assert "password_hash" not in profile

    with pytest.raises(NotFoundError):
        profile_service.get_profile_by_username(db_session, "nobody")


def test_get_profile_missing(db_session):
    with pytest.raises(NotFoundError) as exc_info:
        profile_service.get_profile(db_session, 12345)
    assert exc_info.value.kind == "ProfileNotFound"


# ======================
# DISCOVERY
# ======================

@pytest.fixture
def community(make_user):
    return {
        "me": make_user("me", role="mentor", skills="Python, SQL", interests="AI"),
        "ada": make_user("ada", role="mentor", skills="python, C", interests="Math"),
        "ben": make_user("ben", role="mentee", skills="Python", interests="AI, music"),
        "cy": make_user("cy", role="mentor", skills="Java", interests="ai"),
    }


def _usernames(results):
    return sorted(r["username"] for r in results)


def test_discover_without_filters_excludes_caller(db_session, community):
    results = discovery_service.discover(db_session, caller_id=community["me"].id)
    assert _usernames(results) == ["ada", "ben", "cy"]


def test_discover_mentors_with_python_skills(db_session, community):
    results = discovery_service.discover(
        db_session, caller_id=community["me"].id, role="mentor", skills="PYTHON"
    )
    assert _usernames(results) == ["ada"]


def test_discover_interest_filter_is_case_insensitive_substring(db_session, community):
    results = discovery_service.discover(db_session, caller_id=community["me"].id, interests="Ai")
    assert _usernames(results) == ["ben", "cy"]


def test_discover_combines_skills_and_interests(db_session, community):
    results = discovery_service.discover(
        db_session, caller_id=community["me"].id, skills="python", interests="music"
    )
    assert _usernames(results) == ["ben"]


@pytest.mark.parametrize(
    "filters",
    [{}, {"role": "mentor"}, {"skills": "python"}, {"interests": "ai"}, {"role": "mentor", "skills": "sql"}],
)
def test_discover_never_returns_caller(db_session, community, filters):
    me = community["me"]
    results = discovery_service.discover(db_session, caller_id=me.id, **filters)
    assert me.id not in [r["user_id"] for r in results]


def test_discover_ignores_empty_filters(db_session, community):
    results = discovery_service.discover(
        db_session, caller_id=community["me"].id, role="", skills="", interests=""
    )
    assert len(results) == 3
