"""Message model."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from devdeck.db.base import Base


class Message(Base):
    """Note sent from one user to another. Never edited after creation."""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subject = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    sender = relationship("User", back_populates="sent_messages", foreign_keys=[sender_id], lazy="joined")
    receiver = relationship("User", back_populates="received_messages", foreign_keys=[receiver_id], lazy="joined")
