"""
Authentication Routes

POST /auth/register - Register new account
POST /auth/login - Login and get JWT token
POST /auth/complete-registration - Submit profile and roles for approval
GET /auth/me - Get current user info
GET /auth/member-status - Membership lifecycle state
GET /auth/navigation - Where the web app may send this user
"""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, Depends, Query

from member_network.core.auth import (
    hash_password, verify_password, create_access_token, get_current_user, get_optional_user
)
from member_network.core.config import get_settings
from member_network.repositories import Storage, get_storage
from member_network.schemas.schemas import (
    ApprovalStatus, CompleteRegistrationRequest, LoginRequest, MemberStatusResponse, MessageResponse,
    NavigationResponse, RegisterRequest, Role, TokenResponse, UserResponse,
)
from member_network.services.access import landing_path, resolve_route
from member_network.services.member_status import member_status_for_user
from member_network.services.roles import active_roles, has_role, roles_to_flags

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest, storage: Storage = Depends(get_storage)):
    """
    Register a new account.

    After registration, login to get access token, then complete registration.
    """
    if storage.get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = storage.create_user(
        email=request.email,
        password_hash=hash_password(request.password),
        display_name=request.display_name,
    )
    logger.info("Registered account %s", user["id"])
    return MessageResponse(message="Registered successfully. Please login and complete your profile.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, storage: Storage = Depends(get_storage)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = storage.get_user_by_email(request.email)
    if not user or not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    storage.update_user(user["id"], last_login=datetime.utcnow())
    token = create_access_token(data={"sub": user["id"]})
    return TokenResponse(
        access_token=token,
        user_id=user["id"],
        roles=[r.value for r in active_roles(user["roles"])],
    )


@router.post("/complete-registration", response_model=UserResponse)
async def complete_registration(
    request: CompleteRegistrationRequest,
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Submit profile data and roles. The membership then waits for admin approval
    (unless AUTO_APPROVE_MEMBERS is set).
    """
    if user["profile_completed"]:
        raise HTTPException(status_code=400, detail="User already registered")

    approval = ApprovalStatus.approved if get_settings().auto_approve_members else ApprovalStatus.pending
    roles = list(request.roles)
    if has_role(user["roles"], Role.admin):
        roles.append(Role.admin)
    updated = storage.update_user(
        user["id"],
        roles=roles,
        profile_completed=True,
        approval_status=approval,
        display_name=user["display_name"] or request.profile.full_name,
        **request.profile.model_dump(),
    )
    logger.info("Registration completed for %s (%s)", user["id"], approval.value)
    return UserResponse.from_record(updated)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return UserResponse.from_record(user)


@router.get("/member-status", response_model=MemberStatusResponse)
async def member_status(user: dict = Depends(get_current_user)):
    """Membership state: unregistered, pending, active or rejected."""
    return MemberStatusResponse(
        status=member_status_for_user(user),
        user_id=user["id"],
        approval_status=user["approval_status"],
        roles=roles_to_flags(user["roles"]),
    )


@router.get("/navigation", response_model=NavigationResponse)
async def navigation(
    path: str = Query("/dashboard", description="Page the client wants to open"),
    user: dict = Depends(get_optional_user),
):
    """Route guard: is `path` allowed for this user, and where to redirect otherwise."""
    redirect = resolve_route(user, path)
    return NavigationResponse(
        path=path,
        allowed=redirect is None,
        redirect=redirect,
        landing=landing_path(user),
    )
