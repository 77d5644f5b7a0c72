"""
Storage interface.

Routes only talk to a Storage; the relational and document backends
implement the same methods and return plain dicts whose keys match the
response schemas. Missing records come back as None (or False for
deletes); driver errors propagate.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

USER_PROFILE_FIELDS = (
    "full_name", "phone", "country", "city", "languages", "headline", "bio",
    "linkedin_url", "website_url", "portfolio_url",
)
USER_FIELDS = USER_PROFILE_FIELDS + (
    "display_name", "is_active", "approval_status", "profile_completed", "role_data", "last_login",
)
OPPORTUNITY_FIELDS = (
    "type", "title", "description", "sector", "country", "city", "budget_or_salary",
    "contact_preference", "status", "approval_status", "details",
)
CONTENT_KINDS = ("leaders", "gallery_images", "videos")


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.utcnow()


def plain(value):
    """Unwrap enums (and lists of enums) to their stored values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [plain(v) for v in value]
    return value


def pick(fields: dict, allowed: Iterable[str]) -> dict:
    allowed = set(allowed)
    return {key: plain(value) for key, value in fields.items() if key in allowed}


class Storage(ABC):

    # ---- lifecycle ------------------------------------------------

    @abstractmethod
    def init(self) -> None:
        """Create tables / indexes."""

    @abstractmethod
    def ping(self) -> bool:
        """True if the backing store is reachable."""

    # ---- users ----------------------------------------------------

    @abstractmethod
    def create_user(self, email: str, password_hash: str, display_name: str = None,
                    roles: Iterable = (), approval_status: str = "pending",
                    profile_completed: bool = False) -> dict: ...

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[dict]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[dict]: ...

    @abstractmethod
    def update_user(self, user_id: str, roles: Iterable = None, **fields) -> Optional[dict]:
        """Update user fields; `roles`, when given, replaces the role set in the same write."""

    @abstractmethod
    def set_user_roles(self, user_id: str, roles: Iterable) -> Optional[dict]: ...

    @abstractmethod
    def list_users(self, approval_status: str = None, role: str = None,
                   profile_completed: bool = None) -> List[dict]: ...

    @abstractmethod
    def delete_user(self, user_id: str) -> bool:
        """Delete a user with their opportunities, applications and interests."""

    @abstractmethod
    def user_stats(self) -> dict:
        """
        Counts for the admin dashboard:
        total_users, pending_approvals, approved, rejected (completed profiles only),
        and one count per role keyed by role value.
        """

    # ---- opportunities --------------------------------------------

    @abstractmethod
    def create_opportunity(self, user_id: str, data: dict) -> dict: ...

    @abstractmethod
    def get_opportunity(self, opportunity_id: str) -> Optional[dict]: ...

    @abstractmethod
    def list_opportunities(self, user_id: str = None, type: str = None, status: str = None,
                           approval_status: str = None) -> List[dict]:
        """Newest first."""

    @abstractmethod
    def update_opportunity(self, opportunity_id: str, **fields) -> Optional[dict]: ...

    @abstractmethod
    def delete_opportunity(self, opportunity_id: str) -> bool:
        """Delete a listing with its applications and interests."""

    def list_public_opportunities(self, type: str = None) -> List[dict]:
        """Approved and open listings only."""
        return self.list_opportunities(type=plain(type), status="open", approval_status="approved")

    # ---- applications ---------------------------------------------

    @abstractmethod
    def create_application(self, user_id: str, opportunity_id: str,
                           cover_letter: str = None, resume: str = None) -> dict: ...

    @abstractmethod
    def get_application(self, application_id: str) -> Optional[dict]: ...

    @abstractmethod
    def find_application(self, user_id: str, opportunity_id: str) -> Optional[dict]: ...

    @abstractmethod
    def list_applications(self, user_id: str = None, opportunity_id: str = None) -> List[dict]:
        """Newest first, with opportunity_title, applicant_name and applicant_email."""

    @abstractmethod
    def update_application_status(self, application_id: str, status: str) -> Optional[dict]: ...

    # ---- investor interests ---------------------------------------

    @abstractmethod
    def create_interest(self, user_id: str, opportunity_id: str, message: str = None,
                        contact_email: str = None, contact_phone: str = None) -> dict: ...

    @abstractmethod
    def find_interest(self, user_id: str, opportunity_id: str) -> Optional[dict]: ...

    @abstractmethod
    def list_interests(self, opportunity_id: str) -> List[dict]: ...

    # ---- static content -------------------------------------------

    @abstractmethod
    def create_content(self, kind: str, data: dict) -> dict: ...

    @abstractmethod
    def get_content(self, kind: str, item_id: str) -> Optional[dict]: ...

    @abstractmethod
    def list_content(self, kind: str, include_hidden: bool = False) -> List[dict]:
        """Ordered by `order`, then creation time."""

    @abstractmethod
    def update_content(self, kind: str, item_id: str, **fields) -> Optional[dict]: ...

    @abstractmethod
    def delete_content(self, kind: str, item_id: str) -> bool: ...
