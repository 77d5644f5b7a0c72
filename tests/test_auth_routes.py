from member_network.core.config import Settings

from tests.conftest import PASSWORD, PROFILE, auth_header


def test_register_and_login(client):
    response = client.post("/api/auth/register", json={
        "email": "Kofi@Acme.org", "password": PASSWORD, "display_name": "Kofi",
    })
    assert response.status_code == 201

    response = client.post("/api/auth/login", json={"email": "kofi@acme.org", "password": PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["roles"] == []


def test_duplicate_email_rejected(client, register):
    register("kofi@acme.org")
    response = client.post("/api/auth/register", json={"email": "kofi@acme.org", "password": PASSWORD})
    assert response.status_code == 400


def test_short_password_rejected(client):
    response = client.post("/api/auth/register", json={"email": "kofi@acme.org", "password": "short"})
    assert response.status_code == 422


def test_bad_credentials(client, register):
    register("kofi@acme.org")
    response = client.post("/api/auth/login", json={"email": "kofi@acme.org", "password": "wrong-password"})
    assert response.status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers=auth_header("garbage")).status_code == 401


def test_new_account_is_unregistered(client, register):
    headers = register("kofi@acme.org")
    body = client.get("/api/auth/me", headers=headers).json()
    assert body["member_status"] == "unregistered"
    assert body["profile_completed"] is False
    assert "password_hash" not in body


def test_complete_registration_waits_for_approval(client, register):
    headers = register("kofi@acme.org")
    response = client.post("/api/auth/complete-registration", headers=headers, json={
        "roles": ["investor", "professional"], "profile": PROFILE,
    })
    assert response.status_code == 200
    body = response.json()
    assert body["roles"] == ["professional", "investor"]
    assert body["role_labels"] == ["Professional", "Investor"]
    assert body["approval_status"] == "pending"
    assert body["member_status"] == "pending"
    assert body["display_name"] == PROFILE["full_name"]

    again = client.post("/api/auth/complete-registration", headers=headers, json={
        "roles": ["investor"], "profile": PROFILE,
    })
    assert again.status_code == 400


def test_complete_registration_accepts_legacy_flags(client, register):
    headers = register("kofi@acme.org")
    response = client.post("/api/auth/complete-registration", headers=headers, json={
        "roles": {"isEmployer": True, "isInvestor": False}, "profile": PROFILE,
    })
    assert response.status_code == 200
    assert response.json()["roles"] == ["employer"]


def test_registration_needs_a_role(client, register):
    headers = register("kofi@acme.org")
    response = client.post("/api/auth/complete-registration", headers=headers, json={
        "roles": [], "profile": PROFILE,
    })
    assert response.status_code == 422


def test_admin_role_cannot_be_self_assigned(client, register):
    headers = register("kofi@acme.org")
    response = client.post("/api/auth/complete-registration", headers=headers, json={
        "roles": ["admin"], "profile": PROFILE,
    })
    assert response.status_code == 422


def test_complete_registration_keeps_granted_admin(client, register, admin):
    headers = register("kofi@acme.org")
    user_id = client.get("/api/auth/me", headers=headers).json()["id"]
    granted = client.patch(f"/api/admin/users/{user_id}/roles", headers=admin, json={"roles": ["admin"]})
    assert granted.status_code == 200

    response = client.post("/api/auth/complete-registration", headers=headers, json={
        "roles": ["employer"], "profile": PROFILE,
    })
    assert response.status_code == 200
    body = response.json()
    assert body["roles"] == ["employer", "admin"]
    assert body["profile_completed"] is True


def test_auto_approve(client, register, monkeypatch):
    monkeypatch.setattr(
        "member_network.api.routes.auth_routes.get_settings",
        lambda: Settings(auto_approve_members=True),
    )
    headers = register("kofi@acme.org")
    response = client.post("/api/auth/complete-registration", headers=headers, json={
        "roles": ["professional"], "profile": PROFILE,
    })
    assert response.json()["member_status"] == "active"


def test_member_status_endpoint(client, member):
    headers = member("kofi@acme.org", ["employer"], approved=False)
    body = client.get("/api/auth/member-status", headers=headers).json()
    assert body["status"] == "pending"
    assert body["roles"]["isEmployer"] is True
    assert body["roles"]["isInvestor"] is False


def test_navigation(client, member):
    assert client.get("/api/auth/navigation", params={"path": "/dashboard"}).json() == {
        "path": "/dashboard", "allowed": False, "redirect": "/login", "landing": "/login",
    }

    headers = member("kofi@acme.org", ["jobSeeker"])
    body = client.get("/api/auth/navigation", headers=headers, params={"path": "/dashboard/employer"}).json()
    assert body["allowed"] is False
    assert body["redirect"] == "/dashboard"
    assert body["landing"] == "/dashboard/job-seeker"


def test_deactivated_account_is_blocked(client, register, storage):
    headers = register("kofi@acme.org")
    user = storage.get_user_by_email("kofi@acme.org")
    storage.update_user(user["id"], is_active=False)

    assert client.get("/api/auth/me", headers=headers).status_code == 403
    response = client.post("/api/auth/login", json={"email": "kofi@acme.org", "password": PASSWORD})
    assert response.status_code == 403
