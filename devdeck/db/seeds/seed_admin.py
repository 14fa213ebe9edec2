"""Seed the default admin account from settings."""

import logging

from sqlalchemy.orm import Session
from devdeck.models.user import User
from devdeck.models.role import Role
from devdeck.core.security import hash_password
from devdeck.core.config import Settings

logger = logging.getLogger("devdeck.seed")


def seed_default_admin(db: Session, settings: Settings) -> bool:
    """Create the default admin if no admin exists yet. Returns True if created."""
    if db.query(User).filter(User.role == Role.admin).first():
        logger.info("Admin account already present, skipping seed")
        return False

    if db.query(User).filter(User.email == settings.DEFAULT_ADMIN_EMAIL).first():
        logger.warning(
            "No admin exists but '%s' is taken by a non-admin account, skipping seed",
            settings.DEFAULT_ADMIN_EMAIL,
        )
        return False

    admin = User(
        name="Super Admin",
        email=settings.DEFAULT_ADMIN_EMAIL,
        hashed_password=hash_password(settings.DEFAULT_ADMIN_PASSWORD, settings.BCRYPT_ROUNDS),
        role=Role.admin,
        headline="",
        bio="System administrator",
        location="Server",
        avatar_url="",
        skills=["System", "Management"],
        social={},
        experiences=[],
        education=[],
    )
    db.add(admin)
    db.commit()
    logger.info("Created default admin: %s", settings.DEFAULT_ADMIN_EMAIL)
    return True
