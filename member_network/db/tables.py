"""
Relational schema (SQLAlchemy Core).

    users            - account, approval state and base profile
    user_roles       - one row per (user, role)
    opportunities    - job / investment / partnership / collaboration listings
    applications     - user -> job opportunity
    investor_interests
    leaders, gallery_images, videos - static site content

Role-specific profile sections and per-type opportunity details are
JSON columns: their shape varies by role/type.
"""

from sqlalchemy import (
    JSON, Boolean, Column, DateTime, ForeignKey, Integer, MetaData, String, Table, Text,
    UniqueConstraint,
)

metadata = MetaData()

users = Table(
    "users", metadata,
    Column("id", String(36), primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("display_name", Text),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("approval_status", String(20), nullable=False, default="pending", index=True),
    Column("profile_completed", Boolean, nullable=False, default=False),
    Column("full_name", Text),
    Column("phone", String(50)),
    Column("country", String(100)),
    Column("city", String(100)),
    Column("languages", JSON),
    Column("headline", Text),
    Column("bio", Text),
    Column("linkedin_url", Text),
    Column("website_url", Text),
    Column("portfolio_url", Text),
    Column("role_data", JSON),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
    Column("last_login", DateTime),
)

user_roles = Table(
    "user_roles", metadata,
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role", String(20), primary_key=True),
)

opportunities = Table(
    "opportunities", metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("type", String(20), nullable=False),
    Column("title", Text, nullable=False),
    Column("description", Text, nullable=False),
    Column("sector", String(255)),
    Column("country", String(100)),
    Column("city", String(100)),
    Column("budget_or_salary", String(100)),
    Column("contact_preference", Text),
    Column("status", String(10), nullable=False, default="open"),
    Column("approval_status", String(20), nullable=False, default="pending", index=True),
    Column("details", JSON),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

applications = Table(
    "applications", metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("opportunity_id", String(36), ForeignKey("opportunities.id", ondelete="CASCADE"), nullable=False),
    Column("status", String(20), nullable=False, default="applied"),
    Column("cover_letter", Text),
    Column("resume", Text),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
    UniqueConstraint("user_id", "opportunity_id"),
)

investor_interests = Table(
    "investor_interests", metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("opportunity_id", String(36), ForeignKey("opportunities.id", ondelete="CASCADE"), nullable=False),
    Column("message", Text),
    Column("contact_email", String(255)),
    Column("contact_phone", String(50)),
    Column("created_at", DateTime, nullable=False),
    UniqueConstraint("user_id", "opportunity_id"),
)

leaders = Table(
    "leaders", metadata,
    Column("id", String(36), primary_key=True),
    Column("name", Text, nullable=False),
    Column("title", Text, nullable=False),
    Column("bio", Text),
    Column("image_url", Text),
    Column("linkedin_url", Text),
    Column("order", Integer, nullable=False, default=0),
    Column("visible", Boolean, nullable=False, default=True),
    Column("created_at", DateTime, nullable=False),
)

gallery_images = Table(
    "gallery_images", metadata,
    Column("id", String(36), primary_key=True),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("image_url", Text, nullable=False),
    Column("category", String(100)),
    Column("event_date", DateTime),
    Column("order", Integer, nullable=False, default=0),
    Column("visible", Boolean, nullable=False, default=True),
    Column("created_at", DateTime, nullable=False),
)

videos = Table(
    "videos", metadata,
    Column("id", String(36), primary_key=True),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("youtube_id", String(20), nullable=False),
    Column("thumbnail_url", Text),
    Column("published_at", DateTime),
    Column("featured", Boolean, nullable=False, default=False),
    Column("visible", Boolean, nullable=False, default=True),
    Column("order", Integer, nullable=False, default=0),
    Column("created_at", DateTime, nullable=False),
)

# Content kind -> table
CONTENT_TABLES = {
    "leaders": leaders,
    "gallery_images": gallery_images,
    "videos": videos,
}
