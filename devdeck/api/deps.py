"""Service providers. Each request gets services bound to its own session."""

from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from devdeck.core.config import Settings, get_settings
from devdeck.db.session import get_db
from devdeck.services.admin_service import AdminService
from devdeck.services.audit_service import AuditService
from devdeck.services.message_service import MessageService
from devdeck.services.project_service import ProjectService
from devdeck.services.query import DEFAULT_LIMIT, PageParams
from devdeck.services.user_service import UserService


def get_user_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(db, settings)


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


def get_message_service(db: Session = Depends(get_db)) -> MessageService:
    return MessageService(db)


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(db)


def get_audit_service(db: Session = Depends(get_db)) -> AuditService:
    return AuditService(db)


class PageQuery:
    """Dependency reading ``page`` and ``limit`` from the query string.

    Raw strings are accepted so that junk values fall back to defaults
    instead of failing validation. Limits are clamped to the app's
    ``MAX_PAGE_LIMIT``.
    """

    def __init__(self, default_limit: int = DEFAULT_LIMIT):
        self.default_limit = default_limit

    def __call__(
        self,
        page: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        settings: Settings = Depends(get_settings),
    ) -> PageParams:
        return PageParams.from_raw(
            page, limit, self.default_limit, max_limit=settings.MAX_PAGE_LIMIT,
        )
