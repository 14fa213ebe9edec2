"""Auth API router — login."""

from fastapi import APIRouter, Depends, Request

from devdeck.api.deps import get_audit_service, get_user_service
from devdeck.schemas.schemas import LoginRequest, TokenResponse
from devdeck.services.audit_service import AuditService
from devdeck.services.user_service import UserService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    request: Request,
    users: UserService = Depends(get_user_service),
    audit: AuditService = Depends(get_audit_service),
):
    """Authenticate and return a JWT access token."""
    result = users.authenticate(body.email, body.password)
    user_id = result["user"].id
    audit.record(
        "user.login", "user", user_id,
        actor_id=user_id, actor_email=body.email, request=request,
    )
    return result
