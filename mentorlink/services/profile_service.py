# mentorlink/services/profile_service.py
"""
Profile store.

One profile per user. Images are kept as raw bytes and turned into a
base64 data URI only when a profile is read.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorlink import models
from mentorlink.config import settings
from mentorlink.errors import NotFoundError, ServerError, ValidationError
from mentorlink.models.user import DEFAULT_PROFILE_ROLE, PROFILE_ROLES
from mentorlink.schemas.profile import ProfileUpdate

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"
PROFILE_TEXT_FIELDS = ("about", "role", "skills", "interests", "bio")


# ======================
# SERIALIZATION
# ======================

def image_data_uri(image: Optional[bytes], content_type: Optional[str] = None) -> Optional[str]:
    if not image:
        return None
    mime = content_type or DEFAULT_IMAGE_CONTENT_TYPE
    return f"data:{mime};base64,{base64.b64encode(image).decode('ascii')}"


def serialize_profile(profile: models.Profile, username: str) -> Dict[str, Any]:
    """Public representation of a profile. Never includes credential fields."""
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "username": username,
        "about": profile.about,
        "role": profile.role,
        "skills": profile.skills,
        "interests": profile.interests,
        "bio": profile.bio,
        "profile_image": image_data_uri(profile.profile_image, profile.image_content_type),
    }


# ======================
# CRUD
# ======================

def create_profile(db: Session, user_id: int, data: Optional[ProfileUpdate] = None, *,
                   image: Optional[bytes] = None, image_content_type: Optional[str] = None) -> models.Profile:
    """Insert a profile row. Flushes only; the caller owns the transaction."""
    values = data.model_dump(exclude_none=True) if data else {}
    profile = models.Profile(
        user_id=user_id,
        about=values.get("about", ""),
        role=values.get("role", DEFAULT_PROFILE_ROLE),
        skills=values.get("skills", ""),
        interests=values.get("interests", ""),
        bio=values.get("bio", ""),
        profile_image=image,
        image_content_type=image_content_type if image else None,
    )
    db.add(profile)
    db.flush()
    return profile


def get_profile(db: Session, user_id: int) -> models.Profile:
    profile = db.query(models.Profile).filter(models.Profile.user_id == user_id).first()
    if not profile:
        raise NotFoundError("Profile not found", kind="ProfileNotFound")
    return profile


def get_profile_with_username(db: Session, user_id: int) -> Dict[str, Any]:
    row = (
        db.query(models.Profile, models.User.username)
        .join(models.User, models.Profile.user_id == models.User.id)
        .filter(models.Profile.user_id == user_id)
        .first()
    )
    if not row:
        raise NotFoundError("Profile not found", kind="ProfileNotFound")
    profile, username = row
    return serialize_profile(profile, username)


def get_profile_by_username(db: Session, username: str) -> Dict[str, Any]:
    row = (
        db.query(models.Profile, models.User.username)
        .join(models.User, models.Profile.user_id == models.User.id)
        .filter(models.User.username == username)
        .first()
    )
    if not row:
        raise NotFoundError("Profile not found", kind="ProfileNotFound")
    profile, found_username = row
    return serialize_profile(profile, found_username)


def get_profile_image(db: Session, user_id: int) -> Dict[str, Any]:
    profile = get_profile_with_username(db, user_id)
    return {"username": profile["username"], "profileImage": profile["profile_image"]}


def update_profile(
    db: Session,
    user_id: int,
    data: ProfileUpdate,
    *,
    image: Optional[bytes] = None,
    image_content_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create or update the caller's profile.

    ``None`` text fields keep their stored value. The stored image is only
    replaced when new bytes are supplied.

    Raises:
        ValidationError: role is not mentor/mentee, or the image is too large
    """
    if data.role not in PROFILE_ROLES:
        raise ValidationError("Invalid role", kind="InvalidRole")
    if image is not None and len(image) > settings.MAX_PROFILE_IMAGE_BYTES:
        raise ValidationError("Profile image is too large", kind="ImageTooLarge")

    try:
        profile = db.query(models.Profile).filter(models.Profile.user_id == user_id).first()
        if profile is None:
            profile = create_profile(db, user_id, data, image=image, image_content_type=image_content_type)
        else:
            for field, value in data.model_dump(exclude_none=True).items():
                setattr(profile, field, value)
            if image:
                profile.profile_image = image
                profile.image_content_type = image_content_type
        db.commit()
        db.refresh(profile)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Profile update failed for user_id=%s", user_id)
        raise ServerError("Server error") from exc

    return get_profile_with_username(db, user_id)


def delete_profile(db: Session, user_id: int) -> int:
    """Remove the profile row. Used only as part of account deletion."""
    return db.query(models.Profile).filter(
        models.Profile.user_id == user_id
    ).delete(synchronize_session="fetch")
