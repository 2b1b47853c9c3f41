# mentorlink/services/identity_service.py
"""
Identity & credential service.

Owns user registration, credential verification and token issuance.
Hashing and signing are delegated to ``mentorlink.utils.security``.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorlink import models
from mentorlink.errors import AuthError, ConflictError, NotFoundError, ServerError, ValidationError
from mentorlink.services import profile_service
from mentorlink.utils.security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def get_user_by_username(db: Session, username: str):
    return db.query(models.User).filter(models.User.username == username).first()


def get_user(db: Session, user_id: int):
    return db.query(models.User).filter(models.User.id == user_id).first()


def register_identity(db: Session, *, username: str, email: str, password: str) -> models.User:
    """
    Create a user together with its default profile.

    Raises:
        ValidationError: missing fields or password shorter than 6 characters
        ConflictError: username or email already taken
    """
    username = (username or "").strip()
    email = (email or "").strip().lower()
    if not username or not email or not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Invalid input", kind="InvalidInput")

    # Duplicates answer 400 like the rest of the registration errors.
    if get_user_by_username(db, username):
        raise ConflictError("User already exists", kind="DuplicateUsername", status_code=400)
    if db.query(models.User.id).filter(models.User.email == email).first():
        raise ConflictError("Email already registered", kind="DuplicateEmail", status_code=400)

    try:
        user = models.User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
        )
        db.add(user)
        db.flush()

        profile_service.create_profile(db, user.id)

        db.commit()
        db.refresh(user)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Registration failed for username=%s", username)
        raise ServerError("Server error") from exc

    logger.info("Registered user id=%s username=%s", user.id, user.username)
    return user


def verify_credential(db: Session, *, username: str, password: str) -> models.User:
    user = get_user_by_username(db, (username or "").strip())
    if not user:
        raise NotFoundError("User not found", kind="UserNotFound")

    if not verify_password(password, user.password_hash):
        logger.warning("Invalid credentials for username=%s", user.username)
        raise AuthError("Invalid credentials", kind="InvalidCredentials")

    return user


def issue_token(user: models.User) -> str:
    return create_access_token(data={"sub": user.username, "id": user.id})


def delete_account(db: Session, *, user_id: int) -> None:
    """Delete the profile and then the user; connections and notifications cascade."""
    try:
        profile_service.delete_profile(db, user_id)
        user = get_user(db, user_id)
        if user is not None:
            db.delete(user)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Account deletion failed for user_id=%s", user_id)
        raise ServerError("Server error") from exc

    logger.info("Deleted account user_id=%s", user_id)
