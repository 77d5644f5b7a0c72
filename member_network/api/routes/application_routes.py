"""
Application Routes

GET /applications/mine - Current user's job applications
PATCH /applications/{application_id} - Move an application through the workflow
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from member_network.core.auth import get_current_user
from member_network.repositories import Storage, get_storage
from member_network.schemas.schemas import ApplicationResponse, ApplicationStatusUpdate
from member_network.services.applications import InvalidTransition, check_transition
from member_network.services.opportunities import can_manage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("/mine", response_model=List[ApplicationResponse])
async def my_applications(user: dict = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    """Get all applications made by the current user."""
    return storage.list_applications(user_id=user["id"])


@router.patch("/{application_id}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    user: dict = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Change application status.

    The job owner (or an admin) reviews: under_review, interview, offer, rejected.
    The applicant may withdraw.
    """
    application = storage.get_application(application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    opportunity = storage.get_opportunity(application["opportunity_id"])
    is_applicant = application["user_id"] == user["id"]
    is_reviewer = opportunity is not None and can_manage(user, opportunity)
    if not (is_applicant or is_reviewer):
        raise HTTPException(status_code=404, detail="Application not found")

    try:
        new_status = check_transition(application["status"], update.status, is_applicant, is_reviewer)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidTransition as e:
        raise HTTPException(status_code=400, detail=str(e))

    updated = storage.update_application_status(application_id, new_status)
    logger.info("Application %s: %s -> %s by %s",
                application_id, application["status"], new_status.value, user["id"])
    return updated
