"""
Opportunity rules - per-type details, who may post what, who may see what.
"""

from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from member_network.schemas.schemas import (
    ApprovalStatus, EmploymentType, OpportunityStatus, OpportunityType, Role
)
from member_network.services.roles import active_roles, can_access_feature, has_role

# details keys every listing of a type must carry
REQUIRED_DETAILS = {
    OpportunityType.job: ("employment_type", "application_email"),
    OpportunityType.investment: ("investment_amount", "investment_type"),
    OpportunityType.partnership: ("partnership_type",),
    OpportunityType.collaboration: (),
}

# None means any member role may post
POSTING_PERMISSIONS = {
    OpportunityType.job: "post_jobs",
    OpportunityType.investment: "post_investment_opportunities",
    OpportunityType.partnership: "post_partnerships",
    OpportunityType.collaboration: None,
}

# Content fields whose change sends an approved listing back to review
REVIEWED_FIELDS = ("title", "description", "sector", "country", "city",
                   "budget_or_salary", "contact_preference", "details")


def details_errors(opportunity_type, details: dict) -> List[str]:
    opportunity_type = OpportunityType(opportunity_type)
    errors = []
    for key in REQUIRED_DETAILS[opportunity_type]:
        value = details.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f"'{key}' is required for {opportunity_type.value} opportunities")

    if opportunity_type is OpportunityType.job:
        employment_type = details.get("employment_type")
        allowed = [e.value for e in EmploymentType]
        if employment_type and employment_type not in allowed:
            errors.append(f"'employment_type' must be one of: {', '.join(allowed)}")
        email = details.get("application_email")
        if email:
            try:
                validate_email(str(email), check_deliverability=False)
            except EmailNotValidError:
                errors.append("'application_email' must be a valid email address")
    return errors


def can_post(roles, opportunity_type) -> bool:
    if has_role(roles, Role.admin):
        return True
    permission = POSTING_PERMISSIONS[OpportunityType(opportunity_type)]
    if permission is None:
        return any(role is not Role.admin for role in active_roles(roles))
    return can_access_feature(roles, permission)


def is_public(opportunity: dict) -> bool:
    return (
        opportunity["approval_status"] == ApprovalStatus.approved.value
        and opportunity["status"] == OpportunityStatus.open.value
    )


def can_manage(user: Optional[dict], opportunity: dict) -> bool:
    """Owner or admin."""
    if user is None:
        return False
    return opportunity["user_id"] == user["id"] or has_role(user.get("roles"), Role.admin)


def can_view(user: Optional[dict], opportunity: dict) -> bool:
    return is_public(opportunity) or can_manage(user, opportunity)
