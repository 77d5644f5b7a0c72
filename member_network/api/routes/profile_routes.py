"""
Profile Routes

PUT /profile - Update base profile
PUT /profile/roles - Change own roles
PUT /profile/sections/{section} - Update a role-specific profile section
GET /talent - Browse approved professionals / job seekers
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from typing import Any, Dict, List

from member_network.core.auth import get_current_user, require_approved
from member_network.repositories import Storage, get_storage
from member_network.schemas.schemas import (
    ProfileSection, ProfileUpdate, Role, RoleSelection, SECTION_MODELS, TalentResponse, UserResponse,
)
from member_network.services.roles import active_roles, has_role

router = APIRouter(tags=["Profile"])

TALENT_ROLES = (Role.professional, Role.job_seeker)


def _require_completed(user: dict) -> None:
    if not user["profile_completed"]:
        raise HTTPException(status_code=400, detail="Complete registration first")


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Update base profile. Only provided fields are updated."""
    _require_completed(user)
    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")
    return UserResponse.from_record(storage.update_user(user["id"], **fields))


@router.put("/profile/roles", response_model=UserResponse)
async def update_roles(
    data: RoleSelection,
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Replace own member roles. An existing admin role is kept."""
    _require_completed(user)
    roles = list(data.roles)
    if has_role(user["roles"], Role.admin):
        roles.append(Role.admin)
    return UserResponse.from_record(storage.set_user_roles(user["id"], roles))


@router.put("/profile/sections/{section}", response_model=UserResponse)
async def update_section(
    section: ProfileSection,
    data: Dict[str, Any],
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Save the role-specific part of the profile (e.g. employer company details)."""
    _require_completed(user)
    if not has_role(user["roles"], section.value):
        raise HTTPException(status_code=403, detail=f"You do not have the {section.value} role")

    try:
        section_data = SECTION_MODELS[section](**data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))

    role_data = dict(user["role_data"])
    role_data[section.value] = section_data.model_dump()
    return UserResponse.from_record(storage.update_user(user["id"], role_data=role_data))


@router.get("/talent", response_model=List[TalentResponse])
async def browse_talent(
    role: Role = Query(Role.professional, description="professional or jobSeeker"),
    user: dict = Depends(require_approved),
    storage: Storage = Depends(get_storage),
):
    """Approved members holding the role, with their role-specific section."""
    if role not in TALENT_ROLES:
        raise HTTPException(status_code=400, detail="Talent can be browsed for professional or jobSeeker only")

    members = storage.list_users(approval_status="approved", role=role, profile_completed=True)
    return [
        TalentResponse(
            id=m["id"], full_name=m.get("full_name"), headline=m.get("headline"),
            country=m.get("country"), city=m.get("city"),
            roles=[r.value for r in active_roles(m["roles"])],
            profile=(m.get("role_data") or {}).get(role.value, {}),
        ) for m in members
    ]
