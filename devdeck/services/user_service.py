"""User service — registration, login, profile, password, account deletion,
public portfolio and talent search."""

import logging
from typing import Optional, Dict, Any

from sqlalchemy.orm import Session, selectinload

from devdeck.core.config import Settings
from devdeck.core.exceptions import (
    AuthenticationError,
    ResourceNotFoundError,
    ValidationError,
)
from devdeck.core.policy import registration_role
from devdeck.core.security import hash_password, verify_password, create_access_token
from devdeck.models.role import Role
from devdeck.models.user import User
from devdeck.schemas.schemas import UserProfileUpdate
from devdeck.services.merge import apply_updates
from devdeck.services.projection import private_view, public_view
from devdeck.services.query import PageParams, contains_filter, paginate

logger = logging.getLogger("devdeck.users")


class UserService:
    """Credential store and self-service account operations."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    # ---- Lookups ----

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get(self, user_id: int) -> User:
        """Get a user by id."""
        user = self.db.get(User, user_id)
        if not user:
            raise ResourceNotFoundError("User not found")
        return user

    # ---- Registration / login ----

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: Optional[str] = None,
        headline: Optional[str] = None,
    ) -> User:
        """Create an account. Self-registration yields dev or recruiter only."""
        if self.find_by_email(email):
            raise ValidationError("Email already registered")

        user = User(
            name=name,
            email=email,
            hashed_password=hash_password(password, self.settings.BCRYPT_ROUNDS),
            role=registration_role(role),
            headline=headline or "",
            bio="",
            location="",
            avatar_url="",
            skills=[],
            social={},
            experiences=[],
            education=[],
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Registered user %s (%s)", user.id, user.role.value)
        return user

    def authenticate(self, email: str, password: str) -> Dict[str, Any]:
        """Check credentials and issue an access token.

        Raises:
            AuthenticationError: If credentials are invalid.
        """
        user = self.find_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Invalid email or password")

        return {
            "token": create_access_token(user, self.settings),
            "token_type": "bearer",
            "user": private_view(user),
        }

    # ---- Self-service ----

    def update_profile(self, user_id: int, update: UserProfileUpdate) -> User:
        """Merge the provided profile fields over the stored ones."""
        user = self.get(user_id)
        changed = apply_updates(user, update)
        if changed:
            self.db.commit()
            self.db.refresh(user)
        return user

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        """Replace the password after checking the current one.

        Raises:
            AuthenticationError: If ``current_password`` does not match.
        """
        user = self.get(user_id)
        if not verify_password(current_password, user.hashed_password):
            raise AuthenticationError("Current password is incorrect")
        user.hashed_password = hash_password(new_password, self.settings.BCRYPT_ROUNDS)
        self.db.commit()

    def delete_account(self, user_id: int, password: Optional[str]) -> None:
        """Delete the caller's own account once the password is confirmed.

        Projects and messages go with it.
        """
        if not password:
            raise ValidationError("Password is required to delete the account")
        user = self.get(user_id)
        if not verify_password(password, user.hashed_password):
            raise ValidationError("Incorrect password")
        self.db.delete(user)
        self.db.commit()
        logger.info("User %s deleted their account", user_id)

    # ---- Public reads ----

    def get_portfolio(self, user_id: int) -> User:
        """Load a user together with their projects for the public page."""
        user = (
            self.db.query(User)
            .options(selectinload(User.projects))
            .filter(User.id == user_id)
            .first()
        )
        if not user:
            raise ResourceNotFoundError("Portfolio not found")
        return user

    def search_developers(self, params: PageParams, q: Optional[str] = None) -> Dict[str, Any]:
        """Talent search: developers whose name, headline, location or skills contain ``q``."""
        query = self.db.query(User).filter(User.role == Role.dev)
        criteria = contains_filter(q, User.name, User.headline, User.location, User.skills)
        if criteria is not None:
            query = query.filter(criteria)
        query = query.options(selectinload(User.projects))
        return paginate(
            query,
            params,
            order_by=(User.created_at.desc(), User.id.desc()),
            serialize=public_view,
        )
