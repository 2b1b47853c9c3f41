from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mentorlink.database import get_db
from mentorlink.schemas import (
    AcceptedConnectionResponse,
    ConnectionCreate,
    ConnectionRespond,
    ConnectionResponse,
    Identity,
    PendingConnectionResponse,
    SentConnectionResponse,
)
from mentorlink.services import connection_service
from mentorlink.utils.security import get_current_user

router = APIRouter(prefix="/connections", tags=["Connections"])


@router.post("", response_model=ConnectionResponse, status_code=status.HTTP_201_CREATED)
def send_connection_request(
    payload: ConnectionCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return connection_service.request_connection(
        db,
        actor=current_user,
        receiver_id=payload.receiver_id,
    )


@router.get("/pending", response_model=List[PendingConnectionResponse])
def get_pending_connection_requests(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return connection_service.list_pending(db, user_id=current_user.id)


@router.get("/sent", response_model=List[SentConnectionResponse])
def get_sent_requests(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return connection_service.list_sent(db, user_id=current_user.id)


@router.get("", response_model=List[AcceptedConnectionResponse])
def get_user_connections(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return connection_service.list_accepted(db, user_id=current_user.id)


@router.put("/{connection_id}", response_model=ConnectionResponse)
def respond_to_connection_request(
    connection_id: int,
    payload: ConnectionRespond,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return connection_service.respond_to_connection(
        db,
        actor=current_user,
        connection_id=connection_id,
        status=payload.status,
    )
