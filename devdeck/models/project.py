"""Project model."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from devdeck.db.base import Base


class Project(Base):
    """Portfolio project owned by exactly one user."""
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    images = Column(JSON, nullable=True)  # ordered list of URLs/paths
    tags = Column(JSON, nullable=True)
    link_repo = Column(String(500), nullable=True)
    link_deploy = Column(String(500), nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    owner = relationship("User", back_populates="projects", lazy="joined")
