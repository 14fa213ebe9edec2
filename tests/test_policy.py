"""Unit tests for the access control policy."""

from types import SimpleNamespace

import pytest

from devdeck.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from devdeck.core.policy import (
    ADMIN_ACTIONS,
    ANONYMOUS_ACTIONS,
    AUTHENTICATED_ACTIONS,
    Action,
    Caller,
    Decision,
    authorize,
    parse_assignable_role,
    registration_role,
)
from devdeck.models.role import Role

ADMIN = Caller(id=1, role=Role.admin)
DEV = Caller(id=2, role=Role.dev)
RECRUITER = Caller(id=3, role=Role.recruiter)


class TestAnonymousAndAuthenticated:
    """Actions that need no ownership or role"""

    @pytest.mark.parametrize("action", sorted(ANONYMOUS_ACTIONS, key=lambda a: a.value))
    def test_anonymous_actions_open_to_everyone(self, action):
        assert authorize(None, action).allowed
        assert authorize(DEV, action).allowed

    @pytest.mark.parametrize("action", sorted(AUTHENTICATED_ACTIONS, key=lambda a: a.value))
    def test_authenticated_actions_require_a_caller(self, action):
        decision = authorize(None, action)
        assert not decision.allowed
        assert decision.anonymous, "Anonymous denial should map to Unauthorized"
        for caller in (ADMIN, DEV, RECRUITER):
            assert authorize(caller, action).allowed


class TestProjectOwnership:
    """Mutation succeeds iff caller is admin or owns the project"""

    @pytest.mark.parametrize("action", [Action.update_project, Action.delete_project])
    @pytest.mark.parametrize("caller", [ADMIN, DEV, RECRUITER])
    @pytest.mark.parametrize("owner_id", [1, 2, 3, 99])
    def test_owner_or_admin(self, action, caller, owner_id):
        project = SimpleNamespace(owner_id=owner_id)
        decision = authorize(caller, action, project)
        expected = caller.role == Role.admin or caller.id == owner_id
        assert decision.allowed is expected

    def test_denial_is_forbidden_not_unauthenticated(self):
        decision = authorize(DEV, Action.delete_project, SimpleNamespace(owner_id=42))
        assert not decision.allowed
        assert not decision.anonymous
        with pytest.raises(AuthorizationError):
            decision.enforce()


class TestAdminActions:
    """Admin-only actions ignore ownership"""

    @pytest.mark.parametrize("action", sorted(ADMIN_ACTIONS, key=lambda a: a.value))
    def test_only_admin_allowed(self, action):
        assert authorize(ADMIN, action).allowed
        assert not authorize(DEV, action).allowed
        assert not authorize(RECRUITER, action).allowed

    def test_owner_does_not_bypass_admin_gate(self):
        project = SimpleNamespace(owner_id=DEV.id)
        assert not authorize(DEV, Action.admin_delete_project, project).allowed

    def test_anonymous_admin_request_is_unauthenticated(self):
        with pytest.raises(AuthenticationError):
            authorize(None, Action.admin_list_users).enforce()


class TestDecision:
    def test_allow_enforce_is_noop(self):
        Decision.allow().enforce()

    def test_deny_carries_reason(self):
        decision = Decision.deny("nope")
        assert decision.reason == "nope"
        with pytest.raises(AuthorizationError, match="nope"):
            decision.enforce()


class TestRoles:
    @pytest.mark.parametrize("value,expected", [("admin", Role.admin), ("dev", Role.dev)])
    def test_assignable_roles(self, value, expected):
        assert parse_assignable_role(value) == expected

    @pytest.mark.parametrize("value", ["recruiter", "superuser", "", "ADMIN"])
    def test_other_role_targets_rejected(self, value):
        with pytest.raises(ValidationError):
            parse_assignable_role(value)

    @pytest.mark.parametrize(
        "requested,granted",
        [(None, Role.dev), ("dev", Role.dev), ("recruiter", Role.recruiter),
         ("admin", Role.dev), ("hacker", Role.dev)],
    )
    def test_registration_never_grants_admin(self, requested, granted):
        assert registration_role(requested) == granted
