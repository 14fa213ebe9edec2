"""Pydantic schemas for API request/response serialization."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any, Generic, TypeVar
from datetime import datetime

T = TypeVar("T")


# ---- Auth ----
class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    role: Optional[str] = None
    headline: Optional[str] = None


# ---- User ----
class SocialLinks(BaseModel):
    github: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None

class UserPrivateView(BaseModel):
    """The owner's own view of their account. Never carries the password hash."""
    id: int
    name: str
    email: str
    role: str
    headline: str = ""
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    skills: List[str] = []
    social: SocialLinks = SocialLinks()
    experiences: List[Dict[str, Any]] = []
    education: List[Dict[str, Any]] = []

class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserPrivateView

class UserProfileUpdate(BaseModel):
    """Self-service profile edit. Omitted or null fields keep their value."""
    name: Optional[str] = Field(None, min_length=1)
    headline: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    skills: Optional[List[str]] = None
    social: Optional[SocialLinks] = None
    experiences: Optional[List[Dict[str, Any]]] = None
    education: Optional[List[Dict[str, Any]]] = None

class PasswordUpdateRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)

class AccountDeleteRequest(BaseModel):
    password: Optional[str] = None

class RoleUpdateRequest(BaseModel):
    role: str

class SessionInfo(BaseModel):
    message: str
    id: int
    role: str


# ---- Project ----
class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    link_repo: Optional[str] = None
    link_deploy: Optional[str] = None
    images: List[str] = []
    tags: List[str] = []

class ProjectUpdate(BaseModel):
    """Owner/admin edit. Omitted or null fields keep their value."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    link_repo: Optional[str] = None
    link_deploy: Optional[str] = None
    images: Optional[List[str]] = None
    tags: Optional[List[str]] = None

class ProjectOut(BaseModel):
    id: int
    title: str
    description: str
    images: List[str] = []
    tags: List[str] = []
    link_repo: Optional[str] = None
    link_deploy: Optional[str] = None
    owner_id: int
    owner_name: Optional[str] = None
    created_at: Optional[datetime] = None


class UserPublicView(BaseModel):
    """Portfolio view, safe for anonymous visitors. No email, no account fields."""
    id: int
    name: str
    role: str
    headline: str = ""
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    skills: List[str] = []
    social: SocialLinks = SocialLinks()
    experiences: List[Dict[str, Any]] = []
    education: List[Dict[str, Any]] = []
    projects: List[ProjectOut] = []


# ---- Message ----
class MessageCreate(BaseModel):
    receiver_id: int
    subject: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)

class MessageOut(BaseModel):
    id: int
    subject: str
    content: str
    sender_id: int
    receiver_id: int
    sender_name: Optional[str] = None
    receiver_name: Optional[str] = None
    created_at: Optional[datetime] = None


# ---- Audit ----
class AuditLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    actor_id: Optional[int] = None
    actor_email: Optional[str] = None
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None


# ---- Generic ----
class MessageResponse(BaseModel):
    message: str
    detail: Optional[Any] = None

class Page(BaseModel, Generic[T]):
    data: List[T] = []
    total: int
    page: int
    limit: int
    total_pages: int

class StatsResponse(BaseModel):
    total_users: int
    total_developers: int
    total_recruiters: int
    total_admins: int
    total_projects: int
    total_messages: int
