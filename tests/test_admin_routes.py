from tests.conftest import JOB_DETAILS


def _user_id(client, headers):
    return client.get("/api/auth/me", headers=headers).json()["id"]


def test_admin_only(client, member):
    headers = member("kofi@acme.org", ["employer"])
    assert client.get("/api/admin/stats", headers=headers).status_code == 403
    assert client.get("/api/membership-applications", headers=headers).status_code == 403
    assert client.get("/api/admin/stats").status_code == 401


def test_stats(client, admin, member, register):
    member("kofi@acme.org", ["employer", "investor"], approved=False)
    member("ama@acme.org", ["jobSeeker"])
    register("drifter@acme.org")

    stats = client.get("/api/admin/stats", headers=admin).json()
    assert stats["total_users"] == 4
    assert stats["pending_approvals"] == 1
    assert stats["approved"] == 2
    assert stats["employers"] == 1
    assert stats["investors"] == 1
    assert stats["job_seekers"] == 1
    assert stats["admins"] == 1
    assert stats["total_opportunities"] == 0


def test_membership_review(client, admin, member):
    applicant = member("kofi@acme.org", ["professional"], approved=False)
    user_id = _user_id(client, applicant)

    pending = client.get("/api/membership-applications", headers=admin, params={"status": "pending"}).json()
    assert [m["id"] for m in pending] == [user_id]
    assert pending[0]["roles"] == ["professional"]

    detail = client.get(f"/api/membership-applications/{user_id}", headers=admin).json()
    assert detail["full_name"] == "Amina Osei"

    response = client.patch(f"/api/membership-applications/{user_id}", headers=admin, json={"status": "approved"})
    assert response.json()["status"] == "approved"
    assert client.get("/api/auth/member-status", headers=applicant).json()["status"] == "active"


def test_reject_member(client, admin, member):
    applicant = member("kofi@acme.org", ["professional"], approved=False)
    user_id = _user_id(client, applicant)
    response = client.patch(f"/api/admin/users/{user_id}/status", headers=admin, json={"status": "rejected"})
    assert response.json()["member_status"] == "rejected"


def test_incomplete_registration_cannot_be_decided(client, admin, register):
    headers = register("drifter@acme.org")
    user_id = _user_id(client, headers)
    assert client.patch(f"/api/admin/users/{user_id}/status", headers=admin,
                        json={"status": "approved"}).status_code == 400
    assert client.get(f"/api/membership-applications/{user_id}", headers=admin).status_code == 404


def test_list_users_by_role(client, admin, member):
    member("kofi@acme.org", ["employer"])
    member("ama@acme.org", ["jobSeeker"])
    users = client.get("/api/admin/users", headers=admin, params={"role": "employer"}).json()
    assert [u["email"] for u in users] == ["kofi@acme.org"]


def test_grant_admin_role(client, admin, member):
    headers = member("kofi@acme.org", ["professional"])
    user_id = _user_id(client, headers)
    response = client.patch(f"/api/admin/users/{user_id}/roles", headers=admin, json={"roles": ["professional", "admin"]})
    assert response.json()["roles"] == ["professional", "admin"]
    assert client.get("/api/admin/stats", headers=headers).status_code == 200


def test_admin_cannot_remove_own_admin_role(client, admin):
    admin_id = _user_id(client, admin)
    response = client.patch(f"/api/admin/users/{admin_id}/roles", headers=admin, json={"roles": ["investor"]})
    assert response.status_code == 400


def test_deactivate_and_delete_user(client, admin, member, storage):
    headers = member("kofi@acme.org", ["professional"])
    user_id = _user_id(client, headers)

    response = client.patch(f"/api/admin/users/{user_id}/activation", headers=admin, json={"is_active": False})
    assert response.json()["is_active"] is False
    assert client.get("/api/auth/me", headers=headers).status_code == 403

    assert client.delete(f"/api/admin/users/{user_id}", headers=admin).status_code == 200
    assert storage.get_user(user_id) is None
    assert client.delete(f"/api/admin/users/{user_id}", headers=admin).status_code == 404


def test_admin_opportunity_lifecycle(client, admin, member):
    employer = member("hr@acme.org", ["employer"])
    employer_id = _user_id(client, employer)

    response = client.post("/api/admin/opportunities", headers=admin, json={
        "type": "job", "title": "Site Manager", "description": "Run the site",
        "details": JOB_DETAILS, "user_id": employer_id,
    })
    assert response.status_code == 201
    listing = response.json()
    assert listing["approval_status"] == "approved"
    assert listing["user_id"] == employer_id
    assert len(client.get("/api/opportunities").json()) == 1

    response = client.patch(f"/api/admin/opportunities/{listing['id']}", headers=admin,
                            json={"approval_status": "rejected"})
    assert response.json()["approval_status"] == "rejected"
    assert client.get("/api/opportunities").json() == []

    rejected = client.get("/api/admin/opportunities", headers=admin, params={"approval_status": "rejected"}).json()
    assert [o["id"] for o in rejected] == [listing["id"]]

    # switching type needs details that fit the new type
    response = client.patch(f"/api/admin/opportunities/{listing['id']}", headers=admin, json={"type": "investment"})
    assert response.status_code == 422

    assert client.delete(f"/api/admin/opportunities/{listing['id']}", headers=admin).status_code == 200
    assert client.delete(f"/api/admin/opportunities/{listing['id']}", headers=admin).status_code == 404


def test_approve_member_listing(client, admin, member):
    employer = member("hr@acme.org", ["employer"])
    listing = client.post("/api/opportunities", headers=employer, json={
        "type": "job", "title": "Driver", "description": "Deliveries", "details": JOB_DETAILS,
    }).json()

    pending = client.get("/api/admin/opportunities", headers=admin, params={"approval_status": "pending"}).json()
    assert [o["id"] for o in pending] == [listing["id"]]
    assert client.get("/api/admin/stats", headers=admin).json()["pending_opportunities"] == 1

    client.patch(f"/api/admin/opportunities/{listing['id']}", headers=admin, json={"approval_status": "approved"})
    assert [o["id"] for o in client.get("/api/opportunities").json()] == [listing["id"]]
