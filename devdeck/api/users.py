"""Users API router — registration, profile, password, account, portfolio, talent search."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status

from devdeck.api.deps import PageQuery, get_audit_service, get_user_service
from devdeck.core.policy import Action, Caller
from devdeck.core.security import RequireAction
from devdeck.schemas.schemas import (
    AccountDeleteRequest,
    MessageResponse,
    Page,
    PasswordUpdateRequest,
    RegisterRequest,
    SessionInfo,
    UserPrivateView,
    UserProfileUpdate,
    UserPublicView,
)
from devdeck.services.audit_service import AuditService
from devdeck.services.projection import private_view, public_view
from devdeck.services.query import PageParams, TALENT_DEFAULT_LIMIT
from devdeck.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserPrivateView, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    request: Request,
    users: UserService = Depends(get_user_service),
    audit: AuditService = Depends(get_audit_service),
):
    """Register a new account."""
    user = users.register(body.name, body.email, body.password, body.role, body.headline)
    audit.record(
        "user.registered", "user", user.id,
        actor_id=user.id, actor_email=user.email, request=request,
    )
    return private_view(user)


@router.get("", response_model=Page[UserPublicView])
async def search_talent(
    q: Optional[str] = Query(None),
    params: PageParams = Depends(PageQuery(TALENT_DEFAULT_LIMIT)),
    users: UserService = Depends(get_user_service),
    caller: Caller = Depends(RequireAction(Action.search_talent)),
):
    """Paginated developer listing, filtered by name/headline/location/skills."""
    return users.search_developers(params, q)


@router.get("/me", response_model=SessionInfo)
async def session_info(caller: Caller = Depends(RequireAction(Action.read_own_profile))):
    """Check that the bearer token is still valid."""
    return SessionInfo(message="Session is valid", id=caller.id, role=caller.role.value)


@router.get("/profile", response_model=UserPrivateView)
async def get_profile(
    users: UserService = Depends(get_user_service),
    caller: Caller = Depends(RequireAction(Action.read_own_profile)),
):
    """The caller's own account."""
    return private_view(users.get(caller.id))


@router.put("/profile", response_model=UserPrivateView)
async def update_profile(
    body: UserProfileUpdate,
    users: UserService = Depends(get_user_service),
    caller: Caller = Depends(RequireAction(Action.update_own_profile)),
):
    """Update the caller's profile; omitted fields are left unchanged."""
    return private_view(users.update_profile(caller.id, body))


@router.put("/password", response_model=MessageResponse)
async def update_password(
    body: PasswordUpdateRequest,
    users: UserService = Depends(get_user_service),
    caller: Caller = Depends(RequireAction(Action.change_own_password)),
):
    """Change the caller's password. The current password must match."""
    users.change_password(caller.id, body.current_password, body.new_password)
    return MessageResponse(message="Password updated successfully")


@router.delete("/me", response_model=MessageResponse)
async def delete_account(
    request: Request,
    body: Optional[AccountDeleteRequest] = None,
    users: UserService = Depends(get_user_service),
    audit: AuditService = Depends(get_audit_service),
    caller: Caller = Depends(RequireAction(Action.delete_own_account)),
):
    """Delete the caller's account after password confirmation."""
    email = users.get(caller.id).email
    users.delete_account(caller.id, body.password if body else None)
    audit.record(
        "user.deleted_self", "user", caller.id, actor_email=email, request=request,
    )
    return MessageResponse(message="Account deleted")


@router.get("/{user_id}/portfolio", response_model=UserPublicView)
async def get_portfolio(
    user_id: int,
    users: UserService = Depends(get_user_service),
):
    """Public portfolio: profile plus projects, no account fields."""
    return public_view(users.get_portfolio(user_id))
