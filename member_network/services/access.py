"""
Route guard - decides where a member may go in the web app.

resolve_route() returns None when the path is allowed, otherwise the
path to redirect to:
- signed out on a protected page      -> /login
- profile not completed               -> /profile/complete
- no roles selected                   -> /role-selection
- admin pages without the admin role  -> /dashboard
- a role page without that role       -> /dashboard
"""

from typing import Optional

from member_network.schemas.schemas import Role
from member_network.services.roles import ROLE_DEFINITIONS, active_roles, dashboard_path, has_role

LOGIN_PATH = "/login"
PROFILE_COMPLETE_PATH = "/profile/complete"
ROLE_SELECTION_PATH = "/role-selection"
DASHBOARD_PATH = "/dashboard"
ADMIN_PATH = "/admin"

PUBLIC_PATHS = {
    "/", "/about", "/leadership", "/gallery", "/membership", "/opportunities",
    "/media", "/contact", "/register", "/signup", LOGIN_PATH, "/forgot-password",
}
PUBLIC_PREFIXES = ("/browse/",)

# Pages that need a specific role besides the dashboards
ROLE_PAGES = {
    "/job/create": Role.employer,
    "/business/create": Role.business_owner,
}

DASHBOARD_ROLES = {
    definition["dashboard"]: role
    for role, definition in ROLE_DEFINITIONS.items()
    if role is not Role.admin
}


def normalize_path(path: str) -> str:
    path = "/" + path.strip().split("?", 1)[0].strip("/")
    return path


def is_public(path: str) -> bool:
    path = normalize_path(path)
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def resolve_route(user: Optional[dict], path: str) -> Optional[str]:
    path = normalize_path(path)
    if is_public(path):
        return None
    if user is None:
        return LOGIN_PATH

    if not user.get("profile_completed"):
        return None if path == PROFILE_COMPLETE_PATH else PROFILE_COMPLETE_PATH

    roles = user.get("roles")
    if not active_roles(roles):
        return None if path == ROLE_SELECTION_PATH else ROLE_SELECTION_PATH

    if path == ADMIN_PATH or path.startswith(ADMIN_PATH + "/"):
        return None if has_role(roles, Role.admin) else DASHBOARD_PATH

    required = DASHBOARD_ROLES.get(path) or ROLE_PAGES.get(path)
    if required and not has_role(roles, required):
        return DASHBOARD_PATH
    return None


def landing_path(user: Optional[dict]) -> str:
    """Where to send a member right after sign-in."""
    if user is None:
        return LOGIN_PATH
    if not user.get("profile_completed"):
        return PROFILE_COMPLETE_PATH

    roles = active_roles(user.get("roles"))
    if not roles:
        return ROLE_SELECTION_PATH
    member_roles = [role for role in roles if role is not Role.admin]
    if not member_roles:
        return ADMIN_PATH
    if len(roles) == 1:
        return dashboard_path(roles[0])
    return DASHBOARD_PATH
