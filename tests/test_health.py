def test_root(client):
    assert client.get("/").json()["status"] == "healthy"


def test_health_reports_storage(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
