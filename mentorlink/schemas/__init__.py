# mentorlink/schemas/__init__.py

# Auth schemas
from .auth import Token, TokenData, Identity, RegisterRequest, LoginRequest, MessageResponse

# Profile schemas
from .profile import ProfileUpdate, ProfileResponse, ProfileImageResponse

# Connection schemas
from .connection import (
    ConnectionCreate,
    ConnectionRespond,
    ConnectionResponse,
    PendingConnectionResponse,
    AcceptedConnectionResponse,
    SentConnectionResponse,
)

# Notification schemas
from .notification import NotificationResponse, UnreadCountResponse, MarkAllReadResponse

__all__ = [
    "Token",
    "TokenData",
    "Identity",
    "RegisterRequest",
    "LoginRequest",
    "MessageResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "ProfileImageResponse",
    "ConnectionCreate",
    "ConnectionRespond",
    "ConnectionResponse",
    "PendingConnectionResponse",
    "AcceptedConnectionResponse",
    "SentConnectionResponse",
    "NotificationResponse",
    "UnreadCountResponse",
    "MarkAllReadResponse",
]
