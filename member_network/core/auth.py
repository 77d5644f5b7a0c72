"""
Authentication Utility - JWT, password handling and access dependencies.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes (roles, permissions, approval)
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from member_network.core.config import get_settings
from member_network.repositories import Storage, get_storage
from member_network.schemas.schemas import ApprovalStatus, Role
from member_network.services.roles import can_access_feature, has_any_role, has_role

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor (missing header handled below as 401)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_credentials(credentials: Optional[HTTPAuthorizationCredentials],
                           storage: Storage) -> Optional[dict]:
    if credentials is None:
        return None
    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise _credentials_exception()
    user = storage.get_user(payload["sub"])
    if not user:
        raise _credentials_exception()
    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    storage: Storage = Depends(get_storage),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    user = _user_from_credentials(credentials, storage)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    storage: Storage = Depends(get_storage),
) -> Optional[dict]:
    """Dependency - the current user on public routes, or None when signed out."""
    return _user_from_credentials(credentials, storage)


async def require_admin(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require the admin role."""
    if not has_role(user["roles"], Role.admin):
        raise HTTPException(status_code=403, detail="Admins only")
    return user


async def require_approved(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require a completed, approved membership (admins always pass)."""
    if has_role(user["roles"], Role.admin):
        return user
    if not user["profile_completed"]:
        raise HTTPException(status_code=403, detail="Complete your profile first")
    if user["approval_status"] != ApprovalStatus.approved.value:
        raise HTTPException(status_code=403, detail="Your membership is awaiting approval")
    return user


def require_roles(*roles: Role):
    """Dependency factory - Require at least one of the given roles (admins always pass)."""
    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if not has_any_role(user["roles"], (Role.admin,) + roles):
            names = ", ".join(Role(r).value for r in roles)
            raise HTTPException(status_code=403, detail=f"Requires one of the roles: {names}")
        return user
    return dependency


def require_permission(permission: str):
    """Dependency factory - Require a role that grants `permission` (admins always pass)."""
    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if not (has_role(user["roles"], Role.admin) or can_access_feature(user["roles"], permission)):
            raise HTTPException(status_code=403, detail=f"Missing permission: {permission}")
        return user
    return dependency
