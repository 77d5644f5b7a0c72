"""
Admin Routes

GET /admin/stats - Dashboard counts
GET /admin/users - List users (filter by approval status / role)
PATCH /admin/users/{user_id}/status - Approve or reject a member
PATCH /admin/users/{user_id}/roles - Set a member's roles (admin included)
PATCH /admin/users/{user_id}/activation - Activate / deactivate an account
DELETE /admin/users/{user_id} - Delete an account and everything it owns
GET /membership-applications - Completed registrations by approval status
GET /membership-applications/{user_id} - One membership application
PATCH /membership-applications/{user_id} - Decide a membership application
GET /admin/opportunities - All listings (filter by approval status)
POST /admin/opportunities - Create a listing (approved by default)
PATCH /admin/opportunities/{opportunity_id} - Update any listing, including review state
DELETE /admin/opportunities/{opportunity_id} - Delete any listing
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from member_network.core.auth import require_admin
from member_network.repositories import Storage, get_storage
from member_network.schemas.schemas import (
    ActivationUpdate, AdminOpportunityCreate, AdminOpportunityUpdate, AdminRolesUpdate, ApprovalDecision,
    ApprovalStatus, MembershipApplicationResponse, MessageResponse, OpportunityResponse, Role,
    StatsResponse, UserResponse,
)
from member_network.services.opportunities import details_errors
from member_network.services.roles import active_roles

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"], dependencies=[Depends(require_admin)])


def _get_user_or_404(storage: Storage, user_id: str) -> dict:
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _membership(user: dict) -> MembershipApplicationResponse:
    data = {key: user.get(key) for key in MembershipApplicationResponse.model_fields
            if key not in ("roles", "status", "languages")}
    return MembershipApplicationResponse(
        **data,
        languages=user.get("languages") or [],
        roles=[r.value for r in active_roles(user["roles"])],
        status=user["approval_status"],
    )


def _decide(storage: Storage, user_id: str, status: ApprovalStatus, admin: dict) -> dict:
    user = _get_user_or_404(storage, user_id)
    if not user["profile_completed"]:
        raise HTTPException(status_code=400, detail="User has not completed registration")
    updated = storage.update_user(user_id, approval_status=status)
    logger.info("Membership %s set to %s by %s", user_id, status.value, admin["id"])
    return updated


# ============================================================
# DASHBOARD
# ============================================================

@router.get("/admin/stats", response_model=StatsResponse)
async def get_stats(storage: Storage = Depends(get_storage)):
    """Counts for the admin dashboard."""
    stats = storage.user_stats()
    return StatsResponse(
        total_users=stats["total_users"],
        pending_approvals=stats["pending_approvals"],
        approved=stats["approved"],
        rejected=stats["rejected"],
        professionals=stats.get(Role.professional.value, 0),
        job_seekers=stats.get(Role.job_seeker.value, 0),
        employers=stats.get(Role.employer.value, 0),
        business_owners=stats.get(Role.business_owner.value, 0),
        investors=stats.get(Role.investor.value, 0),
        admins=stats.get(Role.admin.value, 0),
        total_opportunities=len(storage.list_opportunities()),
        pending_opportunities=len(storage.list_opportunities(approval_status=ApprovalStatus.pending.value)),
    )


# ============================================================
# USERS
# ============================================================

@router.get("/admin/users", response_model=List[UserResponse])
async def list_users(
    approval_status: Optional[ApprovalStatus] = None,
    role: Optional[Role] = None,
    storage: Storage = Depends(get_storage),
):
    users = storage.list_users(approval_status=approval_status, role=role)
    return [UserResponse.from_record(u) for u in users]


@router.patch("/admin/users/{user_id}/status", response_model=UserResponse)
async def set_user_status(
    user_id: str,
    decision: ApprovalDecision,
    admin: dict = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Approve, reject or return a member to pending."""
    return UserResponse.from_record(_decide(storage, user_id, decision.status, admin))


@router.patch("/admin/users/{user_id}/roles", response_model=UserResponse)
async def set_user_roles(
    user_id: str,
    data: AdminRolesUpdate,
    admin: dict = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Replace a user's roles. Admins may grant the admin role."""
    _get_user_or_404(storage, user_id)
    if user_id == admin["id"] and Role.admin not in data.roles:
        raise HTTPException(status_code=400, detail="Cannot remove your own admin role")

    updated = storage.set_user_roles(user_id, data.roles)
    logger.info("Roles of %s set to %s by %s", user_id, [r.value for r in data.roles], admin["id"])
    return UserResponse.from_record(updated)


@router.patch("/admin/users/{user_id}/activation", response_model=UserResponse)
async def set_user_activation(
    user_id: str,
    data: ActivationUpdate,
    admin: dict = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Deactivated accounts cannot log in or use their tokens."""
    _get_user_or_404(storage, user_id)
    if user_id == admin["id"] and not data.is_active:
        raise HTTPException(status_code=400, detail="Cannot deactivate your own account")
    return UserResponse.from_record(storage.update_user(user_id, is_active=data.is_active))


@router.delete("/admin/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    admin: dict = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if user_id == admin["id"]:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    if not storage.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("User %s deleted by %s", user_id, admin["id"])
    return MessageResponse(message="User deleted")


# ============================================================
# MEMBERSHIP APPLICATIONS
# ============================================================

@router.get("/membership-applications", response_model=List[MembershipApplicationResponse])
async def list_membership_applications(
    status: Optional[ApprovalStatus] = Query(None, description="pending, approved or rejected"),
    storage: Storage = Depends(get_storage),
):
    """Completed registrations, newest first."""
    users = storage.list_users(approval_status=status, profile_completed=True)
    return [_membership(u) for u in users]


@router.get("/membership-applications/{user_id}", response_model=MembershipApplicationResponse)
async def get_membership_application(user_id: str, storage: Storage = Depends(get_storage)):
    user = _get_user_or_404(storage, user_id)
    if not user["profile_completed"]:
        raise HTTPException(status_code=404, detail="Membership application not found")
    return _membership(user)


@router.patch("/membership-applications/{user_id}", response_model=MembershipApplicationResponse)
async def decide_membership_application(
    user_id: str,
    decision: ApprovalDecision,
    admin: dict = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return _membership(_decide(storage, user_id, decision.status, admin))


# ============================================================
# OPPORTUNITIES
# ============================================================

@router.get("/admin/opportunities", response_model=List[OpportunityResponse])
async def list_all_opportunities(
    approval_status: Optional[ApprovalStatus] = None,
    storage: Storage = Depends(get_storage),
):
    """Every listing regardless of review state."""
    return storage.list_opportunities(approval_status=approval_status.value if approval_status else None)


@router.post("/admin/opportunities", response_model=OpportunityResponse, status_code=201)
async def create_opportunity_as_admin(
    data: AdminOpportunityCreate,
    admin: dict = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Create a listing on behalf of a member (or the admin when user_id is omitted)."""
    owner_id = data.user_id or admin["id"]
    _get_user_or_404(storage, owner_id)

    opportunity = storage.create_opportunity(owner_id, data.model_dump(exclude={"user_id"}))
    logger.info("Opportunity %s (%s) created by admin %s", opportunity["id"], opportunity["type"], admin["id"])
    return opportunity


@router.patch("/admin/opportunities/{opportunity_id}", response_model=OpportunityResponse)
async def update_opportunity_as_admin(
    opportunity_id: str,
    data: AdminOpportunityUpdate,
    admin: dict = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Update any field of a listing, including type and approval status."""
    opportunity = storage.get_opportunity(opportunity_id)
    if not opportunity:
        raise HTTPException(status_code=404, detail="Opportunity not found")

    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    if "type" in fields or "details" in fields:
        errors = details_errors(
            fields.get("type", opportunity["type"]),
            fields.get("details", opportunity["details"]),
        )
        if errors:
            raise HTTPException(status_code=422, detail=errors)

    updated = storage.update_opportunity(opportunity_id, **fields)
    if "approval_status" in fields:
        logger.info("Opportunity %s set to %s by %s",
                    opportunity_id, updated["approval_status"], admin["id"])
    return updated


@router.delete("/admin/opportunities/{opportunity_id}", response_model=MessageResponse)
async def delete_opportunity_as_admin(
    opportunity_id: str,
    admin: dict = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_opportunity(opportunity_id):
        raise HTTPException(status_code=404, detail="Opportunity not found")
    logger.info("Opportunity %s deleted by admin %s", opportunity_id, admin["id"])
    return MessageResponse(message="Opportunity deleted")
