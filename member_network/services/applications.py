"""
Application workflow.

    applied -> under_review -> interview -> offer

Any non-terminal application can also move to rejected (reviewer)
or withdrawn (applicant). rejected and withdrawn are terminal.
"""

from member_network.schemas.schemas import ApplicationStatus as S


class InvalidTransition(ValueError):
    pass


TRANSITIONS = {
    S.applied: {S.under_review, S.rejected, S.withdrawn},
    S.under_review: {S.interview, S.rejected, S.withdrawn},
    S.interview: {S.offer, S.rejected, S.withdrawn},
    S.offer: {S.rejected, S.withdrawn},
    S.rejected: set(),
    S.withdrawn: set(),
}

# Only the applicant moves an application here
APPLICANT_STATUSES = {S.withdrawn}


def can_transition(current, new) -> bool:
    return S(new) in TRANSITIONS[S(current)]


def check_transition(current, new, is_applicant: bool, is_reviewer: bool) -> S:
    """
    Validate a status change for the acting user.

    Raises PermissionError when the actor may not make this move and
    InvalidTransition when the move itself is not allowed.
    """
    current, new = S(current), S(new)
    if new in APPLICANT_STATUSES:
        if not is_applicant:
            raise PermissionError("Only the applicant can withdraw an application")
    elif not is_reviewer:
        raise PermissionError("Only the job owner can update this application")

    if not can_transition(current, new):
        raise InvalidTransition(f"Cannot move application from '{current.value}' to '{new.value}'")
    return new
