"""
Shared fixtures: an in-memory SQLite storage injected into the app and
helpers that walk a member through register -> login -> complete registration.
"""

import pytest
from fastapi.testclient import TestClient

from member_network.core.auth import hash_password
from member_network.db.sql import create_db_engine
from member_network.main import app
from member_network.repositories import get_storage
from member_network.repositories.sql import SqlStorage

PASSWORD = "s3cret-pass"

PROFILE = {
    "full_name": "Amina Osei",
    "country": "Ghana",
    "city": "Accra",
    "languages": ["English", "French"],
    "headline": "Operations lead",
}

JOB_DETAILS = {"employment_type": "full-time", "application_email": "jobs@acme.org"}


@pytest.fixture
def storage():
    store = SqlStorage(create_db_engine("sqlite://"))
    store.init()
    return store


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    # no context manager: skip the startup event (it would reach for the configured database)
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def login(client, email: str, password: str = PASSWORD) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return auth_header(response.json()["access_token"])


@pytest.fixture
def register(client):
    """Register and log in; returns the auth header."""
    def _register(email: str, display_name: str = None) -> dict:
        response = client.post("/api/auth/register", json={
            "email": email, "password": PASSWORD, "display_name": display_name,
        })
        assert response.status_code == 201, response.text
        return login(client, email)
    return _register


@pytest.fixture
def member(client, register, storage):
    """
    A member who completed registration with the given roles.
    approved=True approves them directly in storage.
    """
    def _member(email: str, roles, approved: bool = True, profile: dict = None) -> dict:
        headers = register(email)
        response = client.post("/api/auth/complete-registration", headers=headers, json={
            "roles": list(roles), "profile": profile or PROFILE,
        })
        assert response.status_code == 200, response.text
        if approved:
            storage.update_user(response.json()["id"], approval_status="approved")
        return headers
    return _member


@pytest.fixture
def admin(client, storage):
    """Auth header for a bootstrap admin (created directly, like scripts/create_admin.py)."""
    user = storage.create_user(
        email="admin@acme.org", password_hash=hash_password(PASSWORD), display_name="Admin",
        roles=["admin"], approval_status="approved", profile_completed=True,
    )
    storage.update_user(user["id"], full_name="Site Admin")
    return login(client, "admin@acme.org")


@pytest.fixture
def approved_job(client, member, storage):
    """An approved, open job posted by an employer. Returns (job, employer_headers)."""
    employer = member("hr@acme.org", ["employer"])
    response = client.post("/api/opportunities", headers=employer, json={
        "type": "job", "title": "Backend Engineer", "description": "Build APIs",
        "details": JOB_DETAILS,
    })
    assert response.status_code == 201, response.text
    job = storage.update_opportunity(response.json()["id"], approval_status="approved")
    return job, employer
