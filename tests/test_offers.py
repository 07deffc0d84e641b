import os
from datetime import date, timedelta

from tests.conftest import PNG_BYTES, uploaded_path


def _offer(**overrides):
    today = date.today()
    payload = {
        "title": "Half Price Wednesday",
        "description": "All classics",
        "discount": 50,
        "startDate": (today - timedelta(days=1)).isoformat(),
        "endDate": (today + timedelta(days=1)).isoformat(),
        "isActive": True,
    }
    payload.update(overrides)
    return payload


def test_start_after_end_is_rejected_before_persisting(client):
    response = client.post("/api/offers", json=_offer(startDate="2024-06-10", endDate="2024-06-01"))

    assert response.status_code == 400
    assert client.get("/api/offers").json() == []


def test_create_offer_defaults(client):
    response = client.post("/api/offers", json=_offer(discount=0))

    assert response.status_code == 201
    body = response.json()
    assert body["menuItemIds"] == []
    assert body["discount"] == 0
    assert body["isActive"] is True


def test_unknown_menu_item_ids_are_rejected(client):
    response = client.post("/api/offers", json=_offer(menuItemIds=[404]))

    assert response.status_code == 400
    assert "404" in response.json()["detail"]
    assert client.get("/api/offers").json() == []


def test_active_offers_filter(client):
    today = date.today()
    current = client.post("/api/offers", json=_offer(title="Current")).json()
    client.post("/api/offers", json=_offer(title="Switched off", isActive=False))
    client.post(
        "/api/offers",
        json=_offer(
            title="Expired",
            startDate=(today - timedelta(days=30)).isoformat(),
            endDate=(today - timedelta(days=1)).isoformat(),
        ),
    )
    client.post(
        "/api/offers",
        json=_offer(
            title="Upcoming",
            startDate=(today + timedelta(days=1)).isoformat(),
            endDate=(today + timedelta(days=30)).isoformat(),
        ),
    )

    active = client.get("/api/offers/active").json()

    assert [o["id"] for o in active] == [current["id"]]
    assert len(client.get("/api/offers").json()) == 4


def test_boundary_dates_count_as_active(client):
    today = date.today()
    starts_today = client.post("/api/offers", json=_offer(title="Starts", startDate=today.isoformat())).json()
    ends_today = client.post("/api/offers", json=_offer(title="Ends", endDate=today.isoformat())).json()

    ids = {o["id"] for o in client.get("/api/offers/active").json()}

    assert ids == {starts_today["id"], ends_today["id"]}


def test_update_offer_links_and_dates(client, make_menu_item):
    a = make_menu_item(name="A")
    b = make_menu_item(name="B")
    created = client.post("/api/offers", json=_offer(menuItemIds=[a["id"]])).json()

    response = client.put(f"/api/offers/{created['id']}", json={"menuItemIds": [b["id"]], "title": "Renamed"})

    assert response.status_code == 200
    assert response.json()["menuItemIds"] == [b["id"]]
    assert response.json()["title"] == "Renamed"

    # Moving only the end date before the stored start date is still invalid
    response = client.put(f"/api/offers/{created['id']}", json={"endDate": "2000-01-01"})
    assert response.status_code == 400


def test_update_rejects_blank_title(client):
    created = client.post("/api/offers", json=_offer()).json()

    response = client.put(f"/api/offers/{created['id']}", json={"title": "   "})

    assert response.status_code == 400
    assert client.get(f"/api/offers/{created['id']}").json()["title"] == created["title"]


def test_update_and_delete_missing_offer(client):
    assert client.put("/api/offers/999", json={"title": "x"}).status_code == 404
    assert client.delete("/api/offers/999").status_code == 404


def test_multipart_offer_with_image_is_cleaned_up_on_delete(client, upload_dir):
    today = date.today()
    response = client.post(
        "/api/offers",
        data={
            "title": "Family Night",
            "discount": "20",
            "menuItemIds": "[]",
            "startDate": f"{today.isoformat()}T00:00:00.000Z",
            "endDate": (today + timedelta(days=7)).isoformat(),
            "isActive": "true",
        },
        files={"image": ("family.jpeg", PNG_BYTES, "image/jpeg")},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["startDate"] == today.isoformat()

    path = uploaded_path(body["imageUrl"])
    assert client.delete(f"/api/offers/{body['id']}").json()["message"] == "Offer deleted successfully"
    assert client.get(f"/api/offers/{body['id']}").status_code == 404
    assert not os.path.exists(path)
