# mentorlink/models/__init__.py
# Import models in dependency order
from .user import User, Profile
from .connection import Connection, ConnectionStatus
from .notification import Notification

__all__ = ["User", "Profile", "Connection", "ConnectionStatus", "Notification"]
