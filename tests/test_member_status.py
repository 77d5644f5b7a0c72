import pytest

from member_network.schemas.schemas import ApprovalStatus, MemberStatus
from member_network.services.member_status import (
    member_status_for_user, member_status_from_response, resolve_member_status,
)


@pytest.mark.parametrize("approval, expected", [
    ("pending", MemberStatus.pending),
    ("approved", MemberStatus.active),
    ("rejected", MemberStatus.rejected),
    (ApprovalStatus.approved, MemberStatus.active),
])
def test_status_follows_approval(approval, expected):
    user = {"id": "u1", "profile_completed": True, "approval_status": approval}
    assert member_status_for_user(user) is expected


def test_incomplete_profile_is_unregistered():
    assert member_status_for_user(None) is MemberStatus.unregistered
    user = {"id": "u1", "profile_completed": False, "approval_status": "approved"}
    assert member_status_for_user(user) is MemberStatus.unregistered


def test_unknown_approval_is_error():
    user = {"id": "u1", "profile_completed": True, "approval_status": "archived"}
    assert member_status_for_user(user) is MemberStatus.error


def test_from_response():
    approved = {"id": "u1", "profile_completed": True, "approval_status": "approved"}
    assert member_status_from_response(404) is MemberStatus.unregistered
    assert member_status_from_response(500) is MemberStatus.error
    assert member_status_from_response(401, {"detail": "x"}) is MemberStatus.error
    assert member_status_from_response(200, None) is MemberStatus.unregistered
    assert member_status_from_response(200, {"user": None}) is MemberStatus.unregistered
    assert member_status_from_response(200, {"user": approved}) is MemberStatus.active
    assert member_status_from_response(200, approved) is MemberStatus.active


def test_resolve_chain():
    assert resolve_member_status(True, True) is MemberStatus.loading
    assert resolve_member_status(False, False) is MemberStatus.unregistered
    assert resolve_member_status(False, True) is MemberStatus.loading
    pending = {"id": "u1", "profile_completed": True, "approval_status": "pending"}
    assert resolve_member_status(False, True, 200, pending) is MemberStatus.pending
