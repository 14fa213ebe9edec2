"""Audit service — append-only audit trail for security-relevant events."""

import json
import logging
from typing import Optional, Any, Tuple

from fastapi import Request
from sqlalchemy.orm import Session

from devdeck.models.audit_log import AuditLog
from devdeck.schemas.schemas import AuditLogOut
from devdeck.services.query import PageParams, paginate

logger = logging.getLogger("devdeck.audit")

USER_AGENT_MAX = 500


def _client_info(request: Optional[Request]) -> Tuple[Optional[str], Optional[str]]:
    if request is None:
        return None, None
    host = request.client.host if request.client else None
    return host, request.headers.get("user-agent", "")[:USER_AGENT_MAX]


class AuditService:
    """Writes and reads the audit trail. Entries are never updated or deleted."""

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        action: str,
        resource_type: str,
        resource_id: Optional[Any] = None,
        *,
        actor_id: Optional[int] = None,
        actor_email: Optional[str] = None,
        detail: Optional[dict] = None,
        request: Optional[Request] = None,
    ) -> AuditLog:
        """Append one entry and commit it straight away.

        ``action`` is dotted, e.g. "user.login" or "project.deleted".
        When ``request`` is given the client address and user agent are kept.
        """
        ip_address, user_agent = _client_info(request)
        entry = AuditLog(
            action=action,
            resource_type=resource_type,
            resource_id=None if resource_id is None else str(resource_id),
            actor_id=actor_id,
            actor_email=actor_email,
            detail_json=json.dumps(detail, default=str) if detail else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.db.add(entry)
        self.db.commit()
        logger.info("%s %s:%s by %s", action, resource_type, resource_id, actor_id or actor_email)
        return entry

    def query_logs(
        self,
        params: PageParams,
        actor_id: Optional[int] = None,
        action: Optional[str] = None,
        resource_type: Optional[str] = None,
    ):
        """Newest entries first. ``action`` matches as a substring."""
        query = self.db.query(AuditLog)
        if actor_id is not None:
            query = query.filter(AuditLog.actor_id == actor_id)
        if action:
            query = query.filter(AuditLog.action.icontains(action, autoescape=True))
        if resource_type:
            query = query.filter(AuditLog.resource_type == resource_type)

        return paginate(
            query,
            params,
            order_by=(AuditLog.created_at.desc(), AuditLog.id.desc()),
            serialize=AuditLogOut.model_validate,
        )
