"""User model."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, JSON, func
from sqlalchemy.orm import relationship
from devdeck.db.base import Base
from devdeck.models.role import Role


class User(Base):
    """Registered account plus its public profile."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Enum(Role), default=Role.dev, nullable=False, index=True)

    # Profile
    headline = Column(String(255), default="", nullable=False)
    location = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String(500), nullable=True)
    skills = Column(JSON, nullable=True)  # ["Python", "SQL", ...]
    social = Column(JSON, nullable=True)  # {"github": ..., "linkedin": ..., "website": ...}
    experiences = Column(JSON, nullable=True)
    education = Column(JSON, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    projects = relationship(
        "Project",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sent_messages = relationship(
        "Message",
        back_populates="sender",
        cascade="all, delete-orphan",
        passive_deletes=True,
        foreign_keys="[Message.sender_id]",
    )
    received_messages = relationship(
        "Message",
        back_populates="receiver",
        cascade="all, delete-orphan",
        passive_deletes=True,
        foreign_keys="[Message.receiver_id]",
    )

    def __repr__(self):
        return f"<User {self.email}>"
