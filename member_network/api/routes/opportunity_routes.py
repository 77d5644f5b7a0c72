"""
Opportunity Routes

GET /opportunities - Public listings (approved and open)
GET /opportunities/mine - Listings posted by the current user
GET /opportunities/{opportunity_id} - Listing details
POST /opportunities - Post a listing (role-dependent)
PATCH /opportunities/{opportunity_id} - Update listing (owner or admin)
DELETE /opportunities/{opportunity_id} - Delete listing (owner or admin)
POST /opportunities/{opportunity_id}/apply - Apply to a job
GET /opportunities/{opportunity_id}/applications - Applicants (owner or admin)
POST /opportunities/{opportunity_id}/interest - Register investor interest
GET /opportunities/{opportunity_id}/interests - Interested investors (owner or admin)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from member_network.core.auth import get_current_user, get_optional_user, require_approved
from member_network.repositories import Storage, get_storage
from member_network.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, ApprovalStatus, InterestCreate, InterestResponse,
    MessageResponse, OpportunityCreate, OpportunityResponse, OpportunityType, OpportunityUpdate, Role,
)
from member_network.services.opportunities import (
    REVIEWED_FIELDS, can_manage, can_post, can_view, details_errors, is_public
)
from member_network.services.roles import can_access_feature, has_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/opportunities", tags=["Opportunities"])


def get_opportunity_or_404(storage: Storage, opportunity_id: str) -> dict:
    opportunity = storage.get_opportunity(opportunity_id)
    if not opportunity:
        raise HTTPException(status_code=404, detail="Opportunity not found")
    return opportunity


def _managed_opportunity(storage: Storage, opportunity_id: str, user: dict) -> dict:
    opportunity = get_opportunity_or_404(storage, opportunity_id)
    if not can_manage(user, opportunity):
        raise HTTPException(status_code=403, detail="Not your opportunity")
    return opportunity


@router.get("", response_model=List[OpportunityResponse])
async def list_opportunities(
    type: Optional[OpportunityType] = Query(None, description="job, investment, partnership or collaboration"),
    storage: Storage = Depends(get_storage),
):
    """Public board: approved, open listings, newest first."""
    return storage.list_public_opportunities(type=type)


@router.get("/mine", response_model=List[OpportunityResponse])
async def my_opportunities(user: dict = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    """Everything the current user has posted, whatever its review state."""
    return storage.list_opportunities(user_id=user["id"])


@router.get("/{opportunity_id}", response_model=OpportunityResponse)
async def get_opportunity(
    opportunity_id: str,
    user: Optional[dict] = Depends(get_optional_user),
    storage: Storage = Depends(get_storage),
):
    """Listing details. Unapproved or closed listings are only visible to the owner and admins."""
    opportunity = get_opportunity_or_404(storage, opportunity_id)
    if not can_view(user, opportunity):
        raise HTTPException(status_code=404, detail="Opportunity not found")
    return opportunity


@router.post("", response_model=OpportunityResponse, status_code=201)
async def create_opportunity(
    data: OpportunityCreate,
    user: dict = Depends(require_approved),
    storage: Storage = Depends(get_storage),
):
    """
    Post a listing. Jobs need the employer role, investment and partnership
    listings the business owner role. The listing waits for admin review.
    """
    if not can_post(user["roles"], data.type):
        raise HTTPException(status_code=403, detail=f"Your roles cannot post {data.type.value} opportunities")

    fields = data.model_dump()
    # admin postings skip review
    is_admin = has_role(user["roles"], Role.admin)
    fields["approval_status"] = ApprovalStatus.approved if is_admin else ApprovalStatus.pending
    opportunity = storage.create_opportunity(user["id"], fields)
    logger.info("Opportunity %s (%s) posted by %s", opportunity["id"], opportunity["type"], user["id"])
    return opportunity


@router.patch("/{opportunity_id}", response_model=OpportunityResponse)
async def update_opportunity(
    opportunity_id: str,
    data: OpportunityUpdate,
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Update a listing. Editing the content of an approved listing sends it back to review."""
    opportunity = _managed_opportunity(storage, opportunity_id, user)

    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    if "details" in fields:
        errors = details_errors(opportunity["type"], fields["details"])
        if errors:
            raise HTTPException(status_code=422, detail=errors)

    is_admin = has_role(user["roles"], Role.admin)
    if (not is_admin and opportunity["approval_status"] == ApprovalStatus.approved.value
            and any(key in fields for key in REVIEWED_FIELDS)):
        fields["approval_status"] = ApprovalStatus.pending

    return storage.update_opportunity(opportunity_id, **fields)


@router.delete("/{opportunity_id}", response_model=MessageResponse)
async def delete_opportunity(
    opportunity_id: str,
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Delete a listing together with its applications and interests."""
    _managed_opportunity(storage, opportunity_id, user)
    storage.delete_opportunity(opportunity_id)
    logger.info("Opportunity %s deleted by %s", opportunity_id, user["id"])
    return MessageResponse(message="Opportunity deleted")


@router.post("/{opportunity_id}/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_opportunity(
    opportunity_id: str,
    application: ApplicationCreate,
    user: dict = Depends(require_approved),
    storage: Storage = Depends(get_storage),
):
    """Apply to an open, approved job listing. One application per job."""
    opportunity = get_opportunity_or_404(storage, opportunity_id)
    if opportunity["type"] != OpportunityType.job.value:
        raise HTTPException(status_code=400, detail="Only job listings accept applications")
    if not is_public(opportunity):
        raise HTTPException(status_code=400, detail="Job is not accepting applications")
    if opportunity["user_id"] == user["id"]:
        raise HTTPException(status_code=400, detail="Cannot apply to your own job")
    if storage.find_application(user["id"], opportunity_id):
        raise HTTPException(status_code=400, detail="Already applied to this job")

    return storage.create_application(
        user["id"], opportunity_id,
        cover_letter=application.cover_letter, resume=application.resume,
    )


@router.get("/{opportunity_id}/applications", response_model=List[ApplicationResponse])
async def list_applicants(
    opportunity_id: str,
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Applications received for a job (owner or admin)."""
    _managed_opportunity(storage, opportunity_id, user)
    return storage.list_applications(opportunity_id=opportunity_id)


@router.post("/{opportunity_id}/interest", response_model=InterestResponse, status_code=201)
async def express_interest(
    opportunity_id: str,
    interest: InterestCreate,
    user: dict = Depends(require_approved),
    storage: Storage = Depends(get_storage),
):
    """Investors register interest in an investment, partnership or collaboration listing."""
    if not can_access_feature(user["roles"], "contact_businesses"):
        raise HTTPException(status_code=403, detail="Only investors can register interest")
    opportunity = get_opportunity_or_404(storage, opportunity_id)
    if opportunity["type"] == OpportunityType.job.value:
        raise HTTPException(status_code=400, detail="Use /apply for job listings")
    if not is_public(opportunity):
        raise HTTPException(status_code=400, detail="Opportunity is not open")
    if opportunity["user_id"] == user["id"]:
        raise HTTPException(status_code=400, detail="Cannot express interest in your own opportunity")
    if storage.find_interest(user["id"], opportunity_id):
        raise HTTPException(status_code=400, detail="Interest already registered")

    return storage.create_interest(
        user["id"], opportunity_id,
        message=interest.message,
        contact_email=str(interest.contact_email) if interest.contact_email else user["email"],
        contact_phone=interest.contact_phone or user.get("phone"),
    )


@router.get("/{opportunity_id}/interests", response_model=List[InterestResponse])
async def list_interests(
    opportunity_id: str,
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Interest received for a listing (owner or admin)."""
    _managed_opportunity(storage, opportunity_id, user)
    return storage.list_interests(opportunity_id)
