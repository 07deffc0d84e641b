from tests.conftest import PNG_BYTES


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_diagnostic_reports_database_and_uploads(client):
    body = client.get("/api/diagnostic").json()

    assert body["environment"] == "test"
    assert body["database"]["connected"] is True
    assert body["database"]["dialect"] == "sqlite"
    assert body["uploads"]["exists"] is True
    assert body["uploads"]["fileCount"] == 0
    assert body["cors"]["origins"] == ["*"]
    assert body["cors"]["allowCredentials"] is False


def test_upload_path_lists_saved_files(client):
    created = client.post(
        "/api/menu-items",
        data={"name": "Calzone", "price": "11", "category": "Classics"},
        files={"image": ("calzone.png", PNG_BYTES, "image/png")},
    ).json()

    body = client.get("/api/upload-path").json()

    assert body["urlPrefix"] == "/uploads/"
    assert body["writable"] is True
    assert created["image"].rsplit("/", 1)[-1] in body["files"]


def test_unknown_api_route_is_404(client):
    assert client.get("/api/does-not-exist").status_code == 404
