"""Models package — import all models so metadata.create_all can discover them."""

from devdeck.models.role import Role
from devdeck.models.user import User
from devdeck.models.project import Project
from devdeck.models.message import Message
from devdeck.models.audit_log import AuditLog

__all__ = ["Role", "User", "Project", "Message", "AuditLog"]
