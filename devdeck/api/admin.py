"""Admin API router — user and project moderation, audit log, stats."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, Response, status

from devdeck.api.deps import (
    PageQuery,
    get_admin_service,
    get_audit_service,
    get_project_service,
)
from devdeck.core.policy import Action, Caller
from devdeck.core.security import RequireAction
from devdeck.schemas.schemas import (
    AuditLogOut,
    Page,
    ProjectOut,
    ProjectUpdate,
    RoleUpdateRequest,
    StatsResponse,
    UserPrivateView,
)
from devdeck.services.admin_service import AdminService
from devdeck.services.audit_service import AuditService
from devdeck.services.project_service import ProjectService
from devdeck.services.projection import private_view, project_out
from devdeck.services.query import PageParams

router = APIRouter(prefix="/admin", tags=["admin"])


# ---- Users ----

@router.get("/users", response_model=Page[UserPrivateView])
async def admin_list_users(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(PageQuery()),
    admin: AdminService = Depends(get_admin_service),
    caller: Caller = Depends(RequireAction(Action.admin_list_users)),
):
    """List all users, filtered by name or email (admin only)."""
    return admin.list_users(params, search)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_user(
    user_id: int,
    request: Request,
    admin: AdminService = Depends(get_admin_service),
    audit: AuditService = Depends(get_audit_service),
    caller: Caller = Depends(RequireAction(Action.admin_delete_user)),
):
    """Delete a user with all their projects and messages (admin only)."""
    email = admin.delete_user(user_id)
    # an admin deleting their own account leaves no actor row to point at
    actor_id = caller.id if caller.id != user_id else None
    audit.record(
        "user.deleted", "user", user_id,
        actor_id=actor_id, detail={"email": email}, request=request,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/users/{user_id}/role", response_model=UserPrivateView)
async def admin_update_role(
    user_id: int,
    body: RoleUpdateRequest,
    request: Request,
    admin: AdminService = Depends(get_admin_service),
    audit: AuditService = Depends(get_audit_service),
    caller: Caller = Depends(RequireAction(Action.admin_update_role)),
):
    """Change a user's role to admin or dev (admin only)."""
    user = admin.update_role(user_id, body.role)
    audit.record(
        "user.role_changed", "user", user_id,
        actor_id=caller.id, detail={"role": user.role.value}, request=request,
    )
    return private_view(user)


# ---- Projects ----

@router.get("/projects", response_model=Page[ProjectOut])
async def admin_list_projects(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(PageQuery()),
    projects: ProjectService = Depends(get_project_service),
    caller: Caller = Depends(RequireAction(Action.admin_list_projects)),
):
    """List all projects, filtered by title (admin only)."""
    return projects.list_projects(params, search=search)


@router.put("/projects/{project_id}", response_model=ProjectOut)
async def admin_update_project(
    project_id: int,
    body: ProjectUpdate,
    projects: ProjectService = Depends(get_project_service),
    caller: Caller = Depends(RequireAction(Action.admin_update_project)),
):
    """Update any project (admin only)."""
    project = projects.update(project_id, body, caller, action=Action.admin_update_project)
    return project_out(project)


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_project(
    project_id: int,
    request: Request,
    projects: ProjectService = Depends(get_project_service),
    audit: AuditService = Depends(get_audit_service),
    caller: Caller = Depends(RequireAction(Action.admin_delete_project)),
):
    """Delete any project (admin only)."""
    projects.delete(project_id, caller, action=Action.admin_delete_project)
    audit.record(
        "project.deleted", "project", project_id, actor_id=caller.id, request=request,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---- Audit / stats ----

@router.get("/audit", response_model=Page[AuditLogOut])
async def get_audit_logs(
    action: Optional[str] = Query(None),
    resource_type: Optional[str] = Query(None),
    actor_id: Optional[int] = Query(None),
    params: PageParams = Depends(PageQuery()),
    audit: AuditService = Depends(get_audit_service),
    caller: Caller = Depends(RequireAction(Action.admin_view_audit)),
):
    """Query audit logs (admin only)."""
    return audit.query_logs(params, actor_id, action, resource_type)


@router.get("/stats", response_model=StatsResponse)
async def system_stats(
    admin: AdminService = Depends(get_admin_service),
    caller: Caller = Depends(RequireAction(Action.admin_view_stats)),
):
    """Entity counts (admin only)."""
    return admin.stats()
