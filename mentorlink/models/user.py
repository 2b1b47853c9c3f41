from sqlalchemy import Column, Integer, String, Text, LargeBinary, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from mentorlink.database import Base
from datetime import datetime

PROFILE_ROLES = ("mentor", "mentee")
DEFAULT_PROFILE_ROLE = "mentee"


# ---------------- USER (AUTH TABLE) ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    sent_connections = relationship(
        "Connection",
        foreign_keys="Connection.requester_id",
        back_populates="requester",
        cascade="all, delete",
    )
    received_connections = relationship(
        "Connection",
        foreign_keys="Connection.receiver_id",
        back_populates="receiver",
        cascade="all, delete",
    )
    notifications = relationship("Notification", back_populates="recipient", cascade="all, delete")


# ---------------- PROFILE TABLE ----------------
class Profile(Base):
    __tablename__ = "profiles"

    id: int = Column(Integer, primary_key=True)
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    about: str = Column(Text, default="")
    role: str = Column(String(20), default=DEFAULT_PROFILE_ROLE)
    skills: str = Column(Text, default="")
    interests: str = Column(Text, default="")
    bio: str = Column(Text, default="")
    profile_image: bytes = Column(LargeBinary, nullable=True)
    image_content_type: str = Column(String(100), nullable=True)
    updated_at: datetime = Column(
        TIMESTAMP,
        server_default=func.now(),
        onupdate=func.now()
    )
    user = relationship("User", back_populates="profile")
