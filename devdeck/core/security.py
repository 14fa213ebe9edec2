"""Password hashing, JWT issuing/verification and the auth dependencies."""

import logging
import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from devdeck.core.config import Settings, get_settings
from devdeck.core.exceptions import AuthenticationError, ConfigurationError
from devdeck.core.policy import Action, Caller, authorize
from devdeck.db.session import get_db
from devdeck.models.role import Role
from devdeck.models.user import User

logger = logging.getLogger("devdeck.security")

# JWT bearer scheme
security_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str, rounds: int) -> str:
    """Hash a password using bcrypt with ``rounds`` cost."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pwd_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    return bcrypt.checkpw(pwd_bytes, hashed_bytes)


def require_jwt_secret(settings: Settings) -> str:
    """Return the signing secret, or fail loudly if the server has none."""
    if not settings.JWT_SECRET:
        raise ConfigurationError("JWT_SECRET is not configured")
    return settings.JWT_SECRET


def create_access_token(
    user: User,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Issue a signed access token carrying the user's id and role."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRY_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "role": Role(user.role).value,
        "name": user.name,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, require_jwt_secret(settings), algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, settings: Settings) -> dict:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, require_jwt_secret(settings), algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")


def caller_from_token(token: str, settings: Settings) -> Caller:
    """Turn a bearer token into the ``Caller`` it asserts."""
    payload = decode_token(token, settings)
    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type")
    try:
        return Caller(id=int(payload["sub"]), role=Role(payload["role"]))
    except (KeyError, ValueError):
        raise AuthenticationError("Invalid token payload")


async def get_optional_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[Caller]:
    """Resolve the caller from the bearer token, or None when there is none.

    The stored user is re-read so that deleted accounts lose access and role
    changes apply immediately.
    """
    if credentials is None:
        return None
    caller = caller_from_token(credentials.credentials, settings)
    user = db.get(User, caller.id)
    if user is None:
        raise AuthenticationError("User no longer exists")
    return Caller(id=user.id, role=Role(user.role))


async def get_current_caller(
    caller: Optional[Caller] = Depends(get_optional_caller),
) -> Caller:
    """Require an authenticated caller."""
    if caller is None:
        raise AuthenticationError("Not authenticated")
    return caller


class RequireAction:
    """Dependency that authenticates, then asks the policy about ``action``.

    Used for actions whose decision needs no resource (all admin routes).
    """

    def __init__(self, action: Action):
        self.action = action

    async def __call__(self, caller: Caller = Depends(get_current_caller)) -> Caller:
        authorize(caller, self.action).enforce()
        return caller
