"""
Role Resolver - static role table and permission checks.

Roles are held as a set of Role tags. The legacy boolean bag
(isProfessional, isJobSeeker, ...) is still accepted on input and
produced on output for clients that expect it.

Every function treats a missing role collection (None) as "no roles".
"""

from typing import Dict, Iterable, List, Optional, Set

from member_network.schemas.schemas import Role


ROLE_DEFINITIONS = {
    Role.professional: {
        "key": "isProfessional",
        "label": "Professional",
        "description": "Network, showcase skills, and gain career visibility",
        "permissions": ("view_professionals", "create_professional_profile", "update_own_profile"),
        "dashboard": "/dashboard/professional",
    },
    Role.job_seeker: {
        "key": "isJobSeeker",
        "label": "Job Seeker",
        "description": "Actively looking for jobs locally or internationally",
        "permissions": ("view_jobs", "apply_to_jobs", "create_job_seeker_profile"),
        "dashboard": "/dashboard/job-seeker",
    },
    Role.employer: {
        "key": "isEmployer",
        "label": "Employer",
        "description": "Post job openings and find qualified candidates",
        "permissions": ("post_jobs", "view_applicants", "create_employer_profile"),
        "dashboard": "/dashboard/employer",
    },
    Role.business_owner: {
        "key": "isBusinessOwner",
        "label": "Business Owner",
        "description": "Seek partnerships, expansion support, and investors",
        "permissions": ("post_partnerships", "post_investment_opportunities", "create_business_profile"),
        "dashboard": "/dashboard/business-owner",
    },
    Role.investor: {
        "key": "isInvestor",
        "label": "Investor",
        "description": "Invest in startups, SMEs, and market opportunities",
        "permissions": ("view_investments", "contact_businesses", "create_investor_profile"),
        "dashboard": "/dashboard/investor",
    },
    Role.admin: {
        "key": "isAdmin",
        "label": "Admin",
        "description": "Manage users, content, and platform settings",
        "permissions": ("manage_users", "approve_content", "view_analytics", "manage_system"),
        "dashboard": "/admin",
    },
}

# Roles a member may pick for themselves
SELF_SERVICE_ROLES = tuple(role for role in ROLE_DEFINITIONS if role is not Role.admin)


def _role_set(roles: Optional[Iterable]) -> Set[Role]:
    if not roles:
        return set()
    return {Role(role) for role in roles}


def has_role(roles: Optional[Iterable], role) -> bool:
    return Role(role) in _role_set(roles)


def has_any_role(roles: Optional[Iterable], wanted: Iterable) -> bool:
    held = _role_set(roles)
    return any(Role(role) in held for role in wanted)


def has_all_roles(roles: Optional[Iterable], wanted: Iterable) -> bool:
    held = _role_set(roles)
    return all(Role(role) in held for role in wanted)


def active_roles(roles: Optional[Iterable]) -> List[Role]:
    """Held roles in definition order."""
    held = _role_set(roles)
    return [role for role in ROLE_DEFINITIONS if role in held]


def role_labels(roles: Optional[Iterable]) -> List[str]:
    return [ROLE_DEFINITIONS[role]["label"] for role in active_roles(roles)]


def format_role_list(roles: Optional[Iterable]) -> str:
    """Human readable list: "No roles", "A", "A and B", "A, B, and C"."""
    labels = role_labels(roles)
    if not labels:
        return "No roles"
    if len(labels) == 1:
        return labels[0]
    if len(labels) == 2:
        return f"{labels[0]} and {labels[1]}"
    return f"{', '.join(labels[:-1])}, and {labels[-1]}"


def can_access_feature(roles: Optional[Iterable], permission: str) -> bool:
    return any(
        permission in ROLE_DEFINITIONS[role]["permissions"]
        for role in active_roles(roles)
    )


def roles_from_flags(flags: Optional[Dict[str, bool]]) -> List[Role]:
    """
    Convert a boolean bag to roles.
    Accepts both the relational keys (isEmployer) and the document keys (employer).
    """
    if not flags:
        return []
    return [
        role for role, definition in ROLE_DEFINITIONS.items()
        if flags.get(definition["key"]) is True or flags.get(role.value) is True
    ]


def roles_to_flags(roles: Optional[Iterable]) -> Dict[str, bool]:
    held = _role_set(roles)
    return {definition["key"]: role in held for role, definition in ROLE_DEFINITIONS.items()}


def required_profiles(roles: Optional[Iterable]) -> List[str]:
    """Role-specific profile sections a member with these roles should fill in."""
    return [role.value for role in active_roles(roles) if role is not Role.admin]


def dashboard_path(role) -> str:
    return ROLE_DEFINITIONS[Role(role)]["dashboard"]
