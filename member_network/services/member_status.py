"""
Member Status - derives the membership lifecycle state of a user.

    no account / profile not completed  -> unregistered
    approval_status = pending           -> pending
    approval_status = approved          -> active
    approval_status = rejected          -> rejected

`loading` and `error` only exist on the client side of the wire;
`member_status_from_response` and `resolve_member_status` give clients
the same translation the web frontend performs.
"""

from typing import Optional

from member_network.schemas.schemas import ApprovalStatus, MemberStatus

_BY_APPROVAL = {
    ApprovalStatus.pending.value: MemberStatus.pending,
    ApprovalStatus.approved.value: MemberStatus.active,
    ApprovalStatus.rejected.value: MemberStatus.rejected,
}


def member_status_for_user(user: Optional[dict]) -> MemberStatus:
    if not user or not user.get("profile_completed"):
        return MemberStatus.unregistered
    approval = user.get("approval_status")
    if isinstance(approval, ApprovalStatus):
        approval = approval.value
    return _BY_APPROVAL.get(approval, MemberStatus.error)


def member_status_from_response(status_code: int, body: Optional[dict] = None) -> MemberStatus:
    """Translate a GET /api/auth/me response into a member status."""
    if status_code == 404:
        return MemberStatus.unregistered
    if not 200 <= status_code < 300:
        return MemberStatus.error
    if not body:
        return MemberStatus.unregistered
    user = body.get("user", body)
    if not user or "id" not in user:
        return MemberStatus.unregistered
    return member_status_for_user(user)


def resolve_member_status(
    auth_loading: bool,
    authenticated: bool,
    status_code: Optional[int] = None,
    body: Optional[dict] = None,
) -> MemberStatus:
    """Full client-side chain: identity loading, signed out, then the /me lookup."""
    if auth_loading:
        return MemberStatus.loading
    if not authenticated:
        return MemberStatus.unregistered
    if status_code is None:
        return MemberStatus.loading
    return member_status_from_response(status_code, body)
