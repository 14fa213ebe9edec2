"""Admin service — user moderation and system statistics."""

import logging
from typing import Optional, Dict, Any

from sqlalchemy.orm import Session

from devdeck.core.exceptions import ResourceNotFoundError
from devdeck.core.policy import parse_assignable_role
from devdeck.models.message import Message
from devdeck.models.project import Project
from devdeck.models.role import Role
from devdeck.models.user import User
from devdeck.services.projection import private_view
from devdeck.services.query import PageParams, contains_filter, paginate

logger = logging.getLogger("devdeck.admin")


class AdminService:
    """Operations reserved for administrators. Callers are gated by the router."""

    def __init__(self, db: Session):
        self.db = db

    def _get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise ResourceNotFoundError("User not found")
        return user

    def list_users(self, params: PageParams, search: Optional[str] = None) -> Dict[str, Any]:
        """All accounts, newest first, filtered by name or email substring."""
        query = self.db.query(User)
        criteria = contains_filter(search, User.name, User.email)
        if criteria is not None:
            query = query.filter(criteria)
        return paginate(
            query,
            params,
            order_by=(User.created_at.desc(), User.id.desc()),
            serialize=private_view,
        )

    def delete_user(self, user_id: int) -> str:
        """Delete any account with its projects and messages. Returns the email."""
        user = self._get_user(user_id)
        email = user.email
        self.db.delete(user)
        self.db.commit()
        logger.info("Admin deleted user %s", user_id)
        return email

    def update_role(self, user_id: int, new_role: str) -> User:
        """Change a user's role. Only admin and dev are valid targets.

        The role is validated before the user is looked up, so an invalid
        value never touches the database.
        """
        role = parse_assignable_role(new_role)
        user = self._get_user(user_id)
        user.role = role
        self.db.commit()
        self.db.refresh(user)
        return user

    def stats(self) -> Dict[str, int]:
        """Entity counts for the admin dashboard."""
        def users_with(role: Role) -> int:
            return self.db.query(User).filter(User.role == role).count()

        return {
            "total_users": self.db.query(User).count(),
            "total_developers": users_with(Role.dev),
            "total_recruiters": users_with(Role.recruiter),
            "total_admins": users_with(Role.admin),
            "total_projects": self.db.query(Project).count(),
            "total_messages": self.db.query(Message).count(),
        }
