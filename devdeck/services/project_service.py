"""Project service — CRUD with ownership checks, public and admin listings."""

import logging
from typing import Optional, Dict, Any

from sqlalchemy.orm import Session

from devdeck.core.exceptions import ResourceNotFoundError
from devdeck.core.policy import Action, Caller, authorize
from devdeck.models.project import Project
from devdeck.schemas.schemas import ProjectCreate, ProjectUpdate
from devdeck.services.merge import apply_updates
from devdeck.services.projection import project_out
from devdeck.services.query import PageParams, contains_filter, paginate

logger = logging.getLogger("devdeck.projects")


class ProjectService:
    """Manages portfolio projects."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, owner_id: int, body: ProjectCreate) -> Project:
        """Create a project owned by ``owner_id``."""
        project = Project(
            title=body.title,
            description=body.description,
            link_repo=body.link_repo,
            link_deploy=body.link_deploy,
            images=list(body.images),
            tags=list(body.tags),
            owner_id=owner_id,
        )
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        return project

    def get(self, project_id: int) -> Project:
        """Get a project by id."""
        project = self.db.get(Project, project_id)
        if not project:
            raise ResourceNotFoundError("Project not found")
        return project

    def list_projects(
        self,
        params: PageParams,
        search: Optional[str] = None,
        owner_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """List projects, newest first, optionally by title substring and owner."""
        query = self.db.query(Project)

        criteria = contains_filter(search, Project.title)
        if criteria is not None:
            query = query.filter(criteria)
        if owner_id is not None:
            query = query.filter(Project.owner_id == owner_id)

        return paginate(
            query,
            params,
            order_by=(Project.created_at.desc(), Project.id.desc()),
            serialize=project_out,
        )

    def update(
        self,
        project_id: int,
        body: ProjectUpdate,
        caller: Caller,
        action: Action = Action.update_project,
    ) -> Project:
        """Apply an owner/admin edit.

        Raises:
            ResourceNotFoundError: the project does not exist.
            AuthorizationError: the caller is neither owner nor admin.
        """
        project = self.get(project_id)
        authorize(caller, action, project).enforce()
        if apply_updates(project, body):
            self.db.commit()
            self.db.refresh(project)
        return project

    def delete(
        self,
        project_id: int,
        caller: Caller,
        action: Action = Action.delete_project,
    ) -> None:
        """Delete a project; owner or admin only."""
        project = self.get(project_id)
        authorize(caller, action, project).enforce()
        self.db.delete(project)
        self.db.commit()
        logger.info("Project %s deleted by user %s", project_id, caller.id)
