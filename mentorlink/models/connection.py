from sqlalchemy import CheckConstraint, Column, Integer, String, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from mentorlink.database import Base


class ConnectionStatus:
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    # Values a receiver may respond with.
    RESPONSES = (ACCEPTED, DECLINED)
    # States that block a new request between the same pair.
    ACTIVE = (PENDING, ACCEPTED)


class Connection(Base):
    __tablename__ = "connections"
    __table_args__ = (
        CheckConstraint("requester_id <> receiver_id", name="ck_connections_not_self"),
    )

    id = Column(Integer, primary_key=True, index=True)
    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ConnectionStatus.PENDING, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)

    requester = relationship("User", foreign_keys=[requester_id], back_populates="sent_connections")
    receiver = relationship("User", foreign_keys=[receiver_id], back_populates="received_connections")
