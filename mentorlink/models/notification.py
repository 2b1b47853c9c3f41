from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from mentorlink.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    is_read = Column("read", Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)

    recipient = relationship("User", back_populates="notifications")
