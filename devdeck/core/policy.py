"""Access control policy.

Every allow/deny decision in DevDeck is made here. Route handlers and
services describe *what* is being attempted (an ``Action`` plus, for
project mutations, the project) and get back a ``Decision``; nothing else
in the codebase compares roles.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Any

from devdeck.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from devdeck.models.role import Role


class Action(str, enum.Enum):
    # anonymous
    register = "user.register"
    login = "user.login"
    list_projects = "project.list"
    view_project = "project.view"
    view_portfolio = "user.portfolio"

    # any authenticated caller
    read_own_profile = "user.profile.read"
    update_own_profile = "user.profile.update"
    change_own_password = "user.password.update"
    delete_own_account = "user.delete_self"
    create_project = "project.create"
    send_message = "message.send"
    list_own_messages = "message.list"
    search_talent = "user.talent_search"

    # owner or admin
    update_project = "project.update"
    delete_project = "project.delete"

    # admin only
    admin_list_users = "admin.user.list"
    admin_delete_user = "admin.user.delete"
    admin_update_role = "admin.user.role"
    admin_list_projects = "admin.project.list"
    admin_update_project = "admin.project.update"
    admin_delete_project = "admin.project.delete"
    admin_view_audit = "admin.audit"
    admin_view_stats = "admin.stats"


ANONYMOUS_ACTIONS = frozenset({
    Action.register,
    Action.login,
    Action.list_projects,
    Action.view_project,
    Action.view_portfolio,
})

AUTHENTICATED_ACTIONS = frozenset({
    Action.read_own_profile,
    Action.update_own_profile,
    Action.change_own_password,
    Action.delete_own_account,
    Action.create_project,
    Action.send_message,
    Action.list_own_messages,
    Action.search_talent,
})

OWNERSHIP_ACTIONS = frozenset({
    Action.update_project,
    Action.delete_project,
})

ADMIN_ACTIONS = frozenset({
    Action.admin_list_users,
    Action.admin_delete_user,
    Action.admin_update_role,
    Action.admin_list_projects,
    Action.admin_update_project,
    Action.admin_delete_project,
    Action.admin_view_audit,
    Action.admin_view_stats,
})

# Roles an admin may assign through the role-change endpoint.
ASSIGNABLE_ROLES = frozenset({Role.admin, Role.dev})

# Roles a visitor may pick when registering.
SELF_SERVICE_ROLES = frozenset({Role.dev, Role.recruiter})


@dataclass(frozen=True)
class Caller:
    """Identity asserted by a verified access token."""
    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin


@dataclass(frozen=True)
class Decision:
    """Tagged outcome of ``authorize``: allowed, or denied with a reason."""
    allowed: bool
    reason: str = ""
    anonymous: bool = False

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str, anonymous: bool = False) -> "Decision":
        return cls(False, reason, anonymous)

    def enforce(self) -> None:
        """Raise the matching domain error when the decision is a denial.

        Anonymous callers get ``AuthenticationError``; authenticated callers
        get ``AuthorizationError``.
        """
        if self.allowed:
            return
        if self.anonymous:
            raise AuthenticationError(self.reason)
        raise AuthorizationError(self.reason)


def authorize(caller: Optional[Caller], action: Action, resource: Any = None) -> Decision:
    """Decide whether ``caller`` may perform ``action`` on ``resource``.

    ``resource`` is only consulted for ownership actions, where it must be an
    object exposing ``owner_id`` (a ``Project``).
    """
    if action in ANONYMOUS_ACTIONS:
        return Decision.allow()

    if caller is None:
        return Decision.deny("Not authenticated", anonymous=True)

    if action in AUTHENTICATED_ACTIONS:
        return Decision.allow()

    if action in OWNERSHIP_ACTIONS:
        if caller.is_admin:
            return Decision.allow()
        if resource is not None and resource.owner_id == caller.id:
            return Decision.allow()
        return Decision.deny("You do not have permission to modify this project")

    if action in ADMIN_ACTIONS:
        if caller.is_admin:
            return Decision.allow()
        return Decision.deny("Access denied. Administrator privileges required.")

    return Decision.deny(f"Unknown action '{action}'")


def parse_assignable_role(value: str) -> Role:
    """Validate a role-change target. Only admin and dev are assignable."""
    try:
        role = Role(value)
    except ValueError:
        raise ValidationError(f"Invalid role '{value}'")
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError(f"Invalid role '{value}'")
    return role


def registration_role(value: Optional[str]) -> Role:
    """Role granted at self-registration: recruiter on request, otherwise dev.

    Asking for admin silently falls back to dev.
    """
    try:
        role = Role(value)
    except ValueError:
        return Role.dev
    return role if role in SELF_SERVICE_ROLES else Role.dev
