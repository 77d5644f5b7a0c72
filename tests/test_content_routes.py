def test_leaders_public_listing_is_ordered_and_visible_only(client, admin):
    client.post("/api/leaders", headers=admin, json={"name": "B. Mensah", "title": "Treasurer", "order": 2})
    client.post("/api/leaders", headers=admin, json={"name": "A. Boateng", "title": "President", "order": 1})
    client.post("/api/leaders", headers=admin, json={"name": "C. Hidden", "title": "Advisor", "visible": False})

    names = [leader["name"] for leader in client.get("/api/leaders").json()]
    assert names == ["A. Boateng", "B. Mensah"]

    # include_hidden is ignored for the public
    assert len(client.get("/api/leaders", params={"include_hidden": True}).json()) == 2
    assert len(client.get("/api/leaders", headers=admin, params={"include_hidden": True}).json()) == 3


def test_content_writes_are_admin_only(client, member):
    headers = member("kofi@acme.org", ["professional"])
    response = client.post("/api/gallery", headers=headers, json={"title": "Gala", "image_url": "https://cdn.acme.org/g.jpg"})
    assert response.status_code == 403
    assert client.post("/api/videos", json={"title": "Talk", "youtube_id": "dQw4w9WgXcQ"}).status_code == 401


def test_gallery_update_and_delete(client, admin):
    image = client.post("/api/gallery", headers=admin, json={
        "title": "Gala", "image_url": "https://cdn.acme.org/g.jpg", "category": "events",
    }).json()

    response = client.patch(f"/api/gallery/{image['id']}", headers=admin, json={"visible": False})
    assert response.status_code == 200
    assert response.json()["visible"] is False
    assert client.get("/api/gallery").json() == []

    assert client.patch(f"/api/gallery/{image['id']}", headers=admin, json={}).status_code == 400
    assert client.delete(f"/api/gallery/{image['id']}", headers=admin).status_code == 200
    assert client.delete(f"/api/gallery/{image['id']}", headers=admin).status_code == 404
    assert client.patch("/api/gallery/missing", headers=admin, json={"title": "x"}).status_code == 404


def test_video_from_url(client, admin):
    response = client.post("/api/videos", headers=admin, json={
        "title": "Annual summit", "youtube_id": "https://www.youtube.com/watch?v=dQw4w9WgXcQ", "featured": True,
    })
    assert response.status_code == 201
    video = response.json()
    assert video["youtube_id"] == "dQw4w9WgXcQ"
    assert video["thumbnail_url"] == "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"

    updated = client.patch(f"/api/videos/{video['id']}", headers=admin, json={"youtube_id": "https://youtu.be/abcdefghijk"})
    assert updated.json()["youtube_id"] == "abcdefghijk"
    assert updated.json()["thumbnail_url"] == "https://img.youtube.com/vi/abcdefghijk/maxresdefault.jpg"

    custom = client.patch(f"/api/videos/{video['id']}", headers=admin, json={
        "youtube_id": "dQw4w9WgXcQ", "thumbnail_url": "https://cdn.acme.org/summit.jpg",
    })
    assert custom.json()["thumbnail_url"] == "https://cdn.acme.org/summit.jpg"


def test_required_content_fields_cannot_be_nulled(client, admin):
    leader = client.post("/api/leaders", headers=admin, json={"name": "A. Boateng", "title": "President"}).json()

    assert client.patch(f"/api/leaders/{leader['id']}", headers=admin, json={"name": None}).status_code == 422
    assert client.patch(f"/api/leaders/{leader['id']}", headers=admin, json={"visible": None}).status_code == 422
    assert client.get("/api/leaders").json()[0]["name"] == "A. Boateng"

    # optional columns can still be cleared
    response = client.patch(f"/api/leaders/{leader['id']}", headers=admin, json={"bio": None})
    assert response.status_code == 200

    image = client.post("/api/gallery", headers=admin, json={"title": "Gala", "image_url": "https://cdn.acme.org/g.jpg"}).json()
    assert client.patch(f"/api/gallery/{image['id']}", headers=admin, json={"image_url": None}).status_code == 422

    video = client.post("/api/videos", headers=admin, json={"title": "Talk", "youtube_id": "dQw4w9WgXcQ"}).json()
    assert client.patch(f"/api/videos/{video['id']}", headers=admin, json={"youtube_id": None}).status_code == 422
    assert client.patch(f"/api/videos/{video['id']}", headers=admin, json={"order": None}).status_code == 422
