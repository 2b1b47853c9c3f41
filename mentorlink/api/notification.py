from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mentorlink.database import get_db
from mentorlink.schemas import Identity, MarkAllReadResponse, NotificationResponse, UnreadCountResponse
from mentorlink.services import notification_service
from mentorlink.utils.security import get_current_user

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationResponse])
def get_my_notifications(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return notification_service.list_unread(db, user_id=current_user.id)


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return {"unread_count": notification_service.get_unread_count(db, user_id=current_user.id)}


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    count = notification_service.mark_all_read(db, user_id=current_user.id)
    return {"message": "All notifications marked as read", "updated": count}


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: int,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return notification_service.mark_read(db, actor=current_user, notification_id=notification_id)
