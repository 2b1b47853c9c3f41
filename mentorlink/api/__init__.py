# mentorlink/api/__init__.py
# This file makes the api directory a Python package.

from . import auth
from . import connection
from . import notification
from . import search
from . import users

__all__ = [
    "auth",
    "users",
    "search",
    "connection",
    "notification",
]
