# mentorlink/schemas/connection.py
"""
Connection request/response models.

Request bodies keep the camelCase keys used by the web client
(``receiverId``) through field aliases.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ConnectionCreate(BaseModel):
    receiver_id: int = Field(..., alias="receiverId")

    model_config = ConfigDict(populate_by_name=True)


class ConnectionRespond(BaseModel):
    # Validated by the service so unknown values map to InvalidStatus (400).
    status: Optional[str] = None


class ConnectionResponse(BaseModel):
    id: int
    requester_id: int
    receiver_id: int
    status: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PendingConnectionResponse(ConnectionResponse):
    requester_username: str


class AcceptedConnectionResponse(BaseModel):
    user_id: int = Field(..., description="The other party of the connection")
    username: str
    role: Optional[str] = None
    skills: Optional[str] = None
    interests: Optional[str] = None


class SentConnectionResponse(BaseModel):
    receiver_id: int
