from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from mentorlink.errors import NotFoundError
from mentorlink.models.notification import Notification
from mentorlink.schemas.auth import Identity

logger = logging.getLogger(__name__)


CONNECTION_REQUESTED_MESSAGE = "You have received a connection request from {username}."
CONNECTION_ACCEPTED_MESSAGE = "{username} has accepted your connection request."


def _newest_first(query):
    return query.order_by(Notification.created_at.desc(), Notification.id.desc())


def enqueue(db: Session, *, user_id: int, message: str) -> Notification:
    """Append an unread notification. Flushes only; committed with the caller's change."""
    notification = Notification(user_id=user_id, message=message, is_read=False)
    db.add(notification)
    db.flush()
    logger.info("Queued notification id=%s for user_id=%s", notification.id, user_id)
    return notification


def list_unread(db: Session, *, user_id: int) -> List[Notification]:
    query = db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read.is_(False),
    )
    return _newest_first(query).all()


def list_all(db: Session, *, user_id: int) -> List[Notification]:
    query = db.query(Notification).filter(Notification.user_id == user_id)
    return _newest_first(query).all()


def mark_read(db: Session, *, actor: Identity, notification_id: int) -> Notification:
    # Someone else's notification is reported exactly like a missing one.
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == actor.id,
    ).first()
    if not notification:
        raise NotFoundError("Notification not found.", kind="NotificationNotFound")
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return notification


def mark_all_read(db: Session, *, user_id: int) -> int:
    updated = db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read.is_(False),
    ).update({"is_read": True}, synchronize_session=False)
    db.commit()
    return int(updated)


def get_unread_count(db: Session, *, user_id: int) -> int:
    return db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read.is_(False),
    ).count()
