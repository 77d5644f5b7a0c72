"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum

from member_network.utils.youtube import extract_youtube_id, youtube_thumbnail


# ============================================================
# ENUMS
# ============================================================

class Role(str, Enum):
    professional = "professional"
    job_seeker = "jobSeeker"
    employer = "employer"
    business_owner = "businessOwner"
    investor = "investor"
    admin = "admin"


class ApprovalStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class OpportunityType(str, Enum):
    job = "job"
    investment = "investment"
    partnership = "partnership"
    collaboration = "collaboration"


class OpportunityStatus(str, Enum):
    open = "open"
    closed = "closed"


class EmploymentType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    remote = "remote"
    contract = "contract"


class ApplicationStatus(str, Enum):
    applied = "applied"
    under_review = "under_review"
    interview = "interview"
    offer = "offer"
    rejected = "rejected"
    withdrawn = "withdrawn"


class MemberStatus(str, Enum):
    unregistered = "unregistered"
    pending = "pending"
    active = "active"
    rejected = "rejected"
    loading = "loading"
    error = "error"


class ProfileSection(str, Enum):
    professional = "professional"
    job_seeker = "jobSeeker"
    employer = "employer"
    business_owner = "businessOwner"
    investor = "investor"


def _parse_roles(value: Any) -> Any:
    """Accept either a list of role names or a legacy {flag: bool} mapping."""
    if isinstance(value, dict):
        from member_network.services.roles import roles_from_flags
        return roles_from_flags(value)
    return value


def _dedupe_roles(roles: List[Role]) -> List[Role]:
    if not roles:
        raise ValueError("Select at least one role")
    return list(dict.fromkeys(roles))


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    display_name: Optional[str] = Field(None, max_length=100)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    roles: List[str] = []


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileData(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    country: str = Field(..., min_length=2, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    languages: List[str] = []
    headline: Optional[str] = None
    bio: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None
    portfolio_url: Optional[str] = None

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    country: Optional[str] = Field(None, min_length=2, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    languages: Optional[List[str]] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None
    portfolio_url: Optional[str] = None

class RoleSelection(BaseModel):
    roles: List[Role]

    @field_validator("roles", mode="before")
    @classmethod
    def parse_roles(cls, value):
        return _parse_roles(value)

    @field_validator("roles")
    @classmethod
    def check_roles(cls, roles: List[Role]) -> List[Role]:
        if Role.admin in roles:
            raise ValueError("The admin role cannot be self-assigned")
        return _dedupe_roles(roles)

class CompleteRegistrationRequest(RoleSelection):
    profile: ProfileData

class AdminRolesUpdate(BaseModel):
    roles: List[Role]

    @field_validator("roles", mode="before")
    @classmethod
    def parse_roles(cls, value):
        return _parse_roles(value)

    @field_validator("roles")
    @classmethod
    def check_roles(cls, roles: List[Role]) -> List[Role]:
        return _dedupe_roles(roles)


class ProfessionalData(BaseModel):
    industry: Optional[str] = None
    title: Optional[str] = None
    experience: Optional[str] = None
    skills: List[str] = []
    certifications: List[str] = []
    achievements: Optional[str] = None

class JobSeekerData(BaseModel):
    target_industry: Optional[str] = None
    target_role: Optional[str] = None
    expected_salary: Optional[str] = None
    availability: Optional[str] = None
    resume: Optional[str] = None
    skills: List[str] = []

class EmployerData(BaseModel):
    company_name: str = Field(..., min_length=1)
    company_size: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

class BusinessOwnerData(BaseModel):
    business_name: str = Field(..., min_length=1)
    business_type: Optional[str] = None
    industry: Optional[str] = None
    year_founded: Optional[int] = Field(None, ge=1800, le=2100)
    employees: Optional[str] = None
    revenue: Optional[str] = None
    description: Optional[str] = None

class InvestorData(BaseModel):
    investment_focus: List[str] = []
    investment_range: Optional[str] = None
    preferred_stage: Optional[str] = None
    industries: List[str] = []
    portfolio: Optional[str] = None


# Profile section -> model used to validate its payload
SECTION_MODELS = {
    ProfileSection.professional: ProfessionalData,
    ProfileSection.job_seeker: JobSeekerData,
    ProfileSection.employer: EmployerData,
    ProfileSection.business_owner: BusinessOwnerData,
    ProfileSection.investor: InvestorData,
}


class UserResponse(BaseModel):
    id: str
    email: str
    display_name: Optional[str] = None
    is_active: bool
    approval_status: str
    profile_completed: bool
    member_status: str
    roles: List[str] = []
    role_labels: List[str] = []
    full_name: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    languages: List[str] = []
    headline: Optional[str] = None
    bio: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    role_data: Dict[str, Any] = {}
    created_at: datetime
    last_login: Optional[datetime] = None

    @classmethod
    def from_record(cls, user: dict) -> "UserResponse":
        from member_network.services.member_status import member_status_for_user
        from member_network.services.roles import active_roles, role_labels

        data = {k: v for k, v in user.items() if k != "password_hash"}
        data["roles"] = [r.value for r in active_roles(user.get("roles"))]
        data["role_labels"] = role_labels(user.get("roles"))
        data["member_status"] = member_status_for_user(user).value
        data["languages"] = user.get("languages") or []
        data["role_data"] = user.get("role_data") or {}
        return cls(**data)

class TalentResponse(BaseModel):
    id: str
    full_name: Optional[str] = None
    headline: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    roles: List[str] = []
    profile: Dict[str, Any] = {}


# ============================================================
# MEMBER STATUS / NAVIGATION SCHEMAS
# ============================================================

class MemberStatusResponse(BaseModel):
    status: MemberStatus
    user_id: Optional[str] = None
    approval_status: Optional[str] = None
    roles: Dict[str, bool] = {}

class NavigationResponse(BaseModel):
    path: str
    allowed: bool
    redirect: Optional[str] = None
    landing: str


# ============================================================
# OPPORTUNITY SCHEMAS
# ============================================================

def _strip_required(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _check_details(opportunity_type: Optional[OpportunityType], details: Optional[dict]) -> None:
    from member_network.services.opportunities import details_errors

    if opportunity_type is None:
        return
    errors = details_errors(opportunity_type, details or {})
    if errors:
        raise ValueError("; ".join(errors))


class OpportunityCreate(BaseModel):
    type: OpportunityType
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    sector: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    budget_or_salary: Optional[str] = None
    contact_preference: Optional[str] = None
    details: Dict[str, Any] = {}

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return _strip_required(value)

    @model_validator(mode="after")
    def check_details(self):
        _check_details(self.type, self.details)
        return self

class OpportunityUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    sector: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    budget_or_salary: Optional[str] = None
    contact_preference: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    status: Optional[OpportunityStatus] = None

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_required(value)

class AdminOpportunityCreate(OpportunityCreate):
    user_id: Optional[str] = None
    status: OpportunityStatus = OpportunityStatus.open
    approval_status: ApprovalStatus = ApprovalStatus.approved

class AdminOpportunityUpdate(OpportunityUpdate):
    type: Optional[OpportunityType] = None
    approval_status: Optional[ApprovalStatus] = None

class OpportunityResponse(BaseModel):
    id: str
    user_id: str
    type: str
    title: str
    description: str
    sector: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    budget_or_salary: Optional[str] = None
    contact_preference: Optional[str] = None
    status: str
    approval_status: str
    details: Dict[str, Any] = {}
    created_at: datetime
    updated_at: datetime


# ============================================================
# APPLICATION / INTEREST SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    cover_letter: Optional[str] = None
    resume: Optional[str] = None

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class ApplicationResponse(BaseModel):
    id: str
    user_id: str
    opportunity_id: str
    status: str
    cover_letter: Optional[str] = None
    resume: Optional[str] = None
    opportunity_title: Optional[str] = None
    applicant_name: Optional[str] = None
    applicant_email: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class InterestCreate(BaseModel):
    message: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None

class InterestResponse(BaseModel):
    id: str
    user_id: str
    opportunity_id: str
    message: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    created_at: datetime


# ============================================================
# ADMIN SCHEMAS
# ============================================================

class ApprovalDecision(BaseModel):
    status: ApprovalStatus

class ActivationUpdate(BaseModel):
    is_active: bool

class MembershipApplicationResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    languages: List[str] = []
    headline: Optional[str] = None
    bio: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    roles: List[str] = []
    status: str
    created_at: datetime

class StatsResponse(BaseModel):
    total_users: int
    pending_approvals: int
    approved: int
    rejected: int
    professionals: int
    job_seekers: int
    employers: int
    business_owners: int
    investors: int
    admins: int
    total_opportunities: int
    pending_opportunities: int


# ============================================================
# CONTENT SCHEMAS
# ============================================================

def _not_null(value: Any) -> Any:
    # partial updates: omit a required column to keep it, never send null
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


class LeaderCreate(BaseModel):
    name: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    bio: Optional[str] = None
    image_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    order: int = 0
    visible: bool = True

class LeaderUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = None
    image_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    order: Optional[int] = None
    visible: Optional[bool] = None

    @field_validator("name", "title", "order", "visible")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)

class LeaderResponse(LeaderCreate):
    id: str
    created_at: datetime

class GalleryImageCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: str = Field(..., min_length=1)
    category: Optional[str] = None
    event_date: Optional[datetime] = None
    order: int = 0
    visible: bool = True

class GalleryImageUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    event_date: Optional[datetime] = None
    order: Optional[int] = None
    visible: Optional[bool] = None

    @field_validator("title", "image_url", "order", "visible")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)

class GalleryImageResponse(GalleryImageCreate):
    id: str
    created_at: datetime

class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    youtube_id: str = Field(..., min_length=1)
    thumbnail_url: Optional[str] = None
    published_at: Optional[datetime] = None
    featured: bool = False
    visible: bool = True
    order: int = 0

    @field_validator("youtube_id")
    @classmethod
    def normalize_youtube_id(cls, value: str) -> str:
        return extract_youtube_id(value)

    @model_validator(mode="after")
    def default_thumbnail(self):
        if not self.thumbnail_url:
            self.thumbnail_url = youtube_thumbnail(self.youtube_id)
        return self

class VideoUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    youtube_id: Optional[str] = Field(None, min_length=1)
    thumbnail_url: Optional[str] = None
    published_at: Optional[datetime] = None
    featured: Optional[bool] = None
    visible: Optional[bool] = None
    order: Optional[int] = None

    @field_validator("title", "featured", "visible", "order")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)

    @field_validator("youtube_id")
    @classmethod
    def normalize_youtube_id(cls, value: Optional[str]) -> Optional[str]:
        return extract_youtube_id(_not_null(value))

    @model_validator(mode="after")
    def refresh_thumbnail(self):
        # a new video id without an explicit thumbnail gets the YouTube default
        if self.youtube_id and not self.thumbnail_url:
            self.thumbnail_url = youtube_thumbnail(self.youtube_id)
            self.model_fields_set.add("thumbnail_url")
        return self

class VideoResponse(VideoCreate):
    id: str
    created_at: datetime


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
