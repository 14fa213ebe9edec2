"""Projects API router — create, list, read, update, delete."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, Response, status

from devdeck.api.deps import PageQuery, get_audit_service, get_project_service
from devdeck.core.policy import Action, Caller
from devdeck.core.security import RequireAction, get_current_caller
from devdeck.schemas.schemas import Page, ProjectCreate, ProjectOut, ProjectUpdate
from devdeck.services.audit_service import AuditService
from devdeck.services.project_service import ProjectService
from devdeck.services.projection import project_out
from devdeck.services.query import PageParams

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    projects: ProjectService = Depends(get_project_service),
    caller: Caller = Depends(RequireAction(Action.create_project)),
):
    """Create a project owned by the caller."""
    return project_out(projects.create(caller.id, body))


@router.get("", response_model=Page[ProjectOut])
async def list_projects(
    params: PageParams = Depends(PageQuery()),
    filter: Optional[str] = Query(None, description="Title substring"),
    user_id: Optional[int] = Query(None, description="Only this owner's projects"),
    projects: ProjectService = Depends(get_project_service),
):
    """Public project listing, newest first."""
    return projects.list_projects(params, search=filter, owner_id=user_id)


@router.get("/{project_id}", response_model=ProjectOut)
async def get_project(
    project_id: int,
    projects: ProjectService = Depends(get_project_service),
):
    """Get a single project."""
    return project_out(projects.get(project_id))


@router.put("/{project_id}", response_model=ProjectOut)
async def update_project(
    project_id: int,
    body: ProjectUpdate,
    projects: ProjectService = Depends(get_project_service),
    caller: Caller = Depends(get_current_caller),
):
    """Update a project (owner or admin)."""
    return project_out(projects.update(project_id, body, caller))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    request: Request,
    projects: ProjectService = Depends(get_project_service),
    audit: AuditService = Depends(get_audit_service),
    caller: Caller = Depends(get_current_caller),
):
    """Delete a project (owner or admin)."""
    projects.delete(project_id, caller)
    audit.record(
        "project.deleted", "project", project_id, actor_id=caller.id, request=request,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
