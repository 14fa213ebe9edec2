"""Response shaping for users, projects and messages.

A user record leaves the API in exactly one of two shapes, picked with
``UserView``. Building either shape from an explicit field list means the
password hash can never leak through a new code path.
"""

import enum
from typing import Union

from devdeck.models.message import Message
from devdeck.models.project import Project
from devdeck.models.role import Role
from devdeck.models.user import User
from devdeck.schemas.schemas import (
    MessageOut,
    ProjectOut,
    SocialLinks,
    UserPrivateView,
    UserPublicView,
)


class UserView(str, enum.Enum):
    private = "private"
    public = "public"


def _profile_fields(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "role": Role(user.role).value,
        "headline": user.headline or "",
        "location": user.location,
        "bio": user.bio,
        "avatar_url": user.avatar_url,
        "skills": list(user.skills or []),
        "social": SocialLinks(**(user.social or {})),
        "experiences": list(user.experiences or []),
        "education": list(user.education or []),
    }


def project_user(user: User, view: UserView) -> Union[UserPrivateView, UserPublicView]:
    """Shape ``user`` for the given view."""
    if view == UserView.private:
        return UserPrivateView(email=user.email, **_profile_fields(user))
    if view == UserView.public:
        projects = sorted(
            user.projects,
            key=lambda p: (p.created_at is not None, p.created_at, p.id),
            reverse=True,
        )
        return UserPublicView(
            projects=[project_out(p) for p in projects],
            **_profile_fields(user),
        )
    raise ValueError(f"Unknown user view {view!r}")


def private_view(user: User) -> UserPrivateView:
    return project_user(user, UserView.private)


def public_view(user: User) -> UserPublicView:
    return project_user(user, UserView.public)


def project_out(project: Project) -> ProjectOut:
    return ProjectOut(
        id=project.id,
        title=project.title,
        description=project.description,
        images=list(project.images or []),
        tags=list(project.tags or []),
        link_repo=project.link_repo,
        link_deploy=project.link_deploy,
        owner_id=project.owner_id,
        owner_name=project.owner.name if project.owner else None,
        created_at=project.created_at,
    )


def message_out(message: Message) -> MessageOut:
    return MessageOut(
        id=message.id,
        subject=message.subject,
        content=message.content,
        sender_id=message.sender_id,
        receiver_id=message.receiver_id,
        sender_name=message.sender.name if message.sender else None,
        receiver_name=message.receiver.name if message.receiver else None,
        created_at=message.created_at,
    )
