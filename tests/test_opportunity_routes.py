from tests.conftest import JOB_DETAILS


def _post(client, headers, **overrides):
    payload = {"type": "job", "title": "Data Analyst", "description": "SQL and dashboards", "details": JOB_DETAILS}
    payload.update(overrides)
    return client.post("/api/opportunities", headers=headers, json=payload)


def test_employer_posts_pending_job(client, member):
    employer = member("hr@acme.org", ["employer"])
    response = _post(client, employer)
    assert response.status_code == 201
    job = response.json()
    assert job["approval_status"] == "pending"
    assert job["status"] == "open"

    # not on the public board until approved, but visible to its owner
    assert client.get("/api/opportunities").json() == []
    assert client.get(f"/api/opportunities/{job['id']}").status_code == 404
    assert client.get(f"/api/opportunities/{job['id']}", headers=employer).status_code == 200
    assert [o["id"] for o in client.get("/api/opportunities/mine", headers=employer).json()] == [job["id"]]


def test_posting_rules_by_role(client, member):
    seeker = member("ama@acme.org", ["jobSeeker"])
    assert _post(client, seeker).status_code == 403
    assert _post(client, seeker, type="collaboration", details={}).status_code == 201

    owner = member("biz@acme.org", ["businessOwner"])
    response = _post(client, owner, type="investment", details={
        "investment_amount": "250000", "investment_type": "equity",
    })
    assert response.status_code == 201
    assert _post(client, owner, type="partnership", details={"partnership_type": "distribution"}).status_code == 201
    assert _post(client, owner).status_code == 403


def test_posting_requires_approval(client, member):
    employer = member("hr@acme.org", ["employer"], approved=False)
    assert _post(client, employer).status_code == 403


def test_details_validated_per_type(client, member):
    employer = member("hr@acme.org", ["employer"])
    assert _post(client, employer, details={"employment_type": "full-time"}).status_code == 422
    assert _post(client, employer, details={
        "employment_type": "gig", "application_email": "jobs@acme.org",
    }).status_code == 422
    assert _post(client, employer, details={
        "employment_type": "remote", "application_email": "not-an-email",
    }).status_code == 422


def test_public_board_filters(client, approved_job, member, storage):
    job, _ = approved_job
    owner = member("biz@acme.org", ["businessOwner"])
    partnership = _post(client, owner, type="partnership", details={"partnership_type": "joint venture"}).json()
    storage.update_opportunity(partnership["id"], approval_status="approved")

    assert len(client.get("/api/opportunities").json()) == 2
    jobs = client.get("/api/opportunities", params={"type": "job"}).json()
    assert [o["id"] for o in jobs] == [job["id"]]

    storage.update_opportunity(job["id"], status="closed")
    assert client.get("/api/opportunities", params={"type": "job"}).json() == []


def test_owner_edit_returns_listing_to_review(client, approved_job):
    job, employer = approved_job
    response = client.patch(f"/api/opportunities/{job['id']}", headers=employer, json={"title": "Senior Backend Engineer"})
    assert response.status_code == 200
    assert response.json()["approval_status"] == "pending"


def test_closing_keeps_approval(client, approved_job):
    job, employer = approved_job
    response = client.patch(f"/api/opportunities/{job['id']}", headers=employer, json={"status": "closed"})
    assert response.json()["approval_status"] == "approved"
    assert response.json()["status"] == "closed"


def test_only_owner_updates_or_deletes(client, approved_job, member):
    job, _ = approved_job
    other = member("rival@acme.org", ["employer"])
    assert client.patch(f"/api/opportunities/{job['id']}", headers=other, json={"title": "Mine"}).status_code == 403
    assert client.delete(f"/api/opportunities/{job['id']}", headers=other).status_code == 403


def test_update_validates_details(client, approved_job):
    job, employer = approved_job
    response = client.patch(f"/api/opportunities/{job['id']}", headers=employer, json={
        "details": {"employment_type": "contract"},
    })
    assert response.status_code == 422


def test_update_rejects_blank_text(client, approved_job):
    job, employer = approved_job
    response = client.patch(f"/api/opportunities/{job['id']}", headers=employer, json={"title": "   "})
    assert response.status_code == 422

    response = client.patch(f"/api/opportunities/{job['id']}", headers=employer, json={"title": "  Staff Engineer "})
    assert response.json()["title"] == "Staff Engineer"


def test_apply_once(client, approved_job, member):
    job, employer = approved_job
    seeker = member("ama@acme.org", ["jobSeeker"])

    response = client.post(f"/api/opportunities/{job['id']}/apply", headers=seeker, json={"cover_letter": "Hello"})
    assert response.status_code == 201
    application = response.json()
    assert application["status"] == "applied"
    assert application["opportunity_title"] == "Backend Engineer"

    again = client.post(f"/api/opportunities/{job['id']}/apply", headers=seeker, json={})
    assert again.status_code == 400
    assert client.post(f"/api/opportunities/{job['id']}/apply", headers=employer, json={}).status_code == 400

    applicants = client.get(f"/api/opportunities/{job['id']}/applications", headers=employer).json()
    assert [a["applicant_email"] for a in applicants] == ["ama@acme.org"]
    assert client.get(f"/api/opportunities/{job['id']}/applications", headers=seeker).status_code == 403


def test_cannot_apply_to_pending_or_non_job(client, member):
    employer = member("hr@acme.org", ["employer"])
    seeker = member("ama@acme.org", ["jobSeeker"])
    pending = _post(client, employer).json()
    assert client.post(f"/api/opportunities/{pending['id']}/apply", headers=seeker, json={}).status_code == 400

    collab = _post(client, seeker, type="collaboration", details={}).json()
    assert client.post(f"/api/opportunities/{collab['id']}/apply", headers=employer, json={}).status_code == 400


def test_investor_interest(client, member, storage):
    owner = member("biz@acme.org", ["businessOwner"])
    listing = _post(client, owner, type="investment", details={
        "investment_amount": "1M", "investment_type": "debt",
    }).json()
    storage.update_opportunity(listing["id"], approval_status="approved")

    investor = member("fund@acme.org", ["investor"])
    response = client.post(f"/api/opportunities/{listing['id']}/interest", headers=investor, json={"message": "Keen"})
    assert response.status_code == 201
    assert response.json()["contact_email"] == "fund@acme.org"
    assert client.post(f"/api/opportunities/{listing['id']}/interest", headers=investor, json={}).status_code == 400

    seeker = member("ama@acme.org", ["jobSeeker"])
    assert client.post(f"/api/opportunities/{listing['id']}/interest", headers=seeker, json={}).status_code == 403

    interests = client.get(f"/api/opportunities/{listing['id']}/interests", headers=owner).json()
    assert len(interests) == 1


def test_interest_not_for_jobs(client, approved_job, member):
    job, _ = approved_job
    investor = member("fund@acme.org", ["investor"])
    assert client.post(f"/api/opportunities/{job['id']}/interest", headers=investor, json={}).status_code == 400


def test_delete_removes_applications(client, approved_job, member, storage):
    job, employer = approved_job
    seeker = member("ama@acme.org", ["jobSeeker"])
    client.post(f"/api/opportunities/{job['id']}/apply", headers=seeker, json={})

    assert client.delete(f"/api/opportunities/{job['id']}", headers=employer).status_code == 200
    assert storage.get_opportunity(job["id"]) is None
    assert client.get("/api/applications/mine", headers=seeker).json() == []
