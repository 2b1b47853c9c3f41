# mentorlink/services/connection_service.py
"""
Connection graph.

A connection is a directed request from a requester to a receiver:

    pending -> accepted | declined

Accepted and declined are terminal. Creating a request notifies the
receiver; accepting one notifies the requester. The notification is
committed in the same transaction as the status change.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy import and_, case, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorlink import models
from mentorlink.errors import AuthError, ConflictError, NotFoundError, ServerError, ValidationError
from mentorlink.models.connection import Connection, ConnectionStatus
from mentorlink.schemas.auth import Identity
from mentorlink.services import notification_service

logger = logging.getLogger(__name__)


# ======================
# HELPERS
# ======================

def _between(user_a: int, user_b: int):
    """Filter matching connections between two users in either direction."""
    return or_(
        and_(Connection.requester_id == user_a, Connection.receiver_id == user_b),
        and_(Connection.requester_id == user_b, Connection.receiver_id == user_a),
    )


def get_connection(db: Session, connection_id: int) -> Connection:
    connection = db.query(Connection).filter(Connection.id == connection_id).first()
    if not connection:
        raise NotFoundError("Connection request not found.", kind="ConnectionNotFound")
    return connection


def has_active_connection(db: Session, user_a: int, user_b: int) -> bool:
    return db.query(Connection.id).filter(
        _between(user_a, user_b),
        Connection.status.in_(ConnectionStatus.ACTIVE),
    ).first() is not None


# ======================
# STATE TRANSITIONS
# ======================

def request_connection(db: Session, *, actor: Identity, receiver_id: int) -> Connection:
    """
    Create a pending connection from ``actor`` to ``receiver_id`` and notify
    the receiver.

    Raises:
        ValidationError: actor tries to connect with themselves
        NotFoundError: receiver does not exist
        ConflictError: a pending or accepted connection already links the pair
    """
    if actor.id == receiver_id:
        raise ValidationError("You cannot connect with yourself.", kind="SelfConnection")

    receiver = db.query(models.User.id).filter(models.User.id == receiver_id).first()
    if not receiver:
        raise NotFoundError("User not found", kind="UserNotFound")

    if has_active_connection(db, actor.id, receiver_id):
        raise ConflictError("A connection with this user already exists.", kind="DuplicateConnection")

    try:
        connection = Connection(
            requester_id=actor.id,
            receiver_id=receiver_id,
            status=ConnectionStatus.PENDING,
        )
        db.add(connection)
        db.flush()

        notification_service.enqueue(
            db,
            user_id=receiver_id,
            message=notification_service.CONNECTION_REQUESTED_MESSAGE.format(username=actor.username),
        )
        db.commit()
        db.refresh(connection)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Connection request failed (requester_id=%s, receiver_id=%s)", actor.id, receiver_id)
        raise ServerError("Server error") from exc

    logger.info(
        "Connection %s requested: requester_id=%s receiver_id=%s",
        connection.id,
        actor.id,
        receiver_id,
    )
    return connection


def respond_to_connection(db: Session, *, actor: Identity, connection_id: int, status: str) -> Connection:
    """
    Accept or decline a pending connection addressed to ``actor``.

    Raises:
        ValidationError: status is not "accepted" or "declined"
        NotFoundError: no connection with this id
        AuthError: actor is not the receiver of the request
        ConflictError: the connection was already accepted or declined
    """
    if status not in ConnectionStatus.RESPONSES:
        raise ValidationError("Invalid status value.", kind="InvalidStatus")

    connection = get_connection(db, connection_id)

    if connection.receiver_id != actor.id:
        raise AuthError(
            "Only the receiver can respond to this connection request.",
            kind="NotConnectionReceiver",
            status_code=403,
        )
    if connection.status != ConnectionStatus.PENDING:
        raise ConflictError(
            f"Connection request was already {connection.status}.",
            kind="ConnectionAlreadyResolved",
        )

    try:
        connection.status = status
        if status == ConnectionStatus.ACCEPTED:
            notification_service.enqueue(
                db,
                user_id=connection.requester_id,
                message=notification_service.CONNECTION_ACCEPTED_MESSAGE.format(username=actor.username),
            )
        db.commit()
        db.refresh(connection)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Connection response failed (connection_id=%s)", connection_id)
        raise ServerError("Server error") from exc

    logger.info("Connection %s %s by user_id=%s", connection.id, status, actor.id)
    return connection


# ======================
# QUERIES
# ======================

def list_pending(db: Session, *, user_id: int) -> List[Dict[str, Any]]:
    rows = (
        db.query(Connection, models.User.username)
        .join(models.User, Connection.requester_id == models.User.id)
        .filter(
            Connection.receiver_id == user_id,
            Connection.status == ConnectionStatus.PENDING,
        )
        .order_by(Connection.created_at.desc(), Connection.id.desc())
        .all()
    )
    return [
        {
            "id": connection.id,
            "requester_id": connection.requester_id,
            "receiver_id": connection.receiver_id,
            "status": connection.status,
            "created_at": connection.created_at,
            "requester_username": username,
        }
        for connection, username in rows
    ]


def list_accepted(db: Session, *, user_id: int) -> List[Dict[str, Any]]:
    """Accepted connections of ``user_id``, described by the other party."""
    peer_id = case(
        (Connection.requester_id == user_id, Connection.receiver_id),
        else_=Connection.requester_id,
    )
    rows = (
        db.query(
            models.User.id,
            models.User.username,
            models.Profile.role,
            models.Profile.skills,
            models.Profile.interests,
        )
        .select_from(Connection)
        .join(models.User, models.User.id == peer_id)
        .join(models.Profile, models.Profile.user_id == models.User.id)
        .filter(
            or_(Connection.requester_id == user_id, Connection.receiver_id == user_id),
            Connection.status == ConnectionStatus.ACCEPTED,
            models.User.id != user_id,
        )
        .all()
    )
    return [
        {
            "user_id": peer,
            "username": username,
            "role": role,
            "skills": skills,
            "interests": interests,
        }
        for peer, username, role, skills, interests in rows
    ]


def list_sent(db: Session, *, user_id: int) -> List[Dict[str, int]]:
    """Receivers of the user's still-pending requests."""
    rows = db.query(Connection.receiver_id).filter(
        Connection.requester_id == user_id,
        Connection.status == ConnectionStatus.PENDING,
    ).all()
    return [{"receiver_id": receiver_id} for (receiver_id,) in rows]
