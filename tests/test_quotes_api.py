"""API tests for quote requests and the back-office quote workflow."""

import pytest

from quotes.pricing import VAT_RATE


@pytest.fixture
def quote_id(client, quote_payload) -> str:
    response = client.post("/quotes/", json=quote_payload)
    assert response.status_code == 201
    return response.json()["id"]


def _priced_items():
    return [
        {"id": "a", "name": "Micro Sprinkler", "quantity": 10, "unitPrice": 150},
        {"id": "b", "name": "Lateral Pipe", "quantity": 5, "unit": "meters", "unitPrice": 100},
    ]


# ─────────────────────────────── Public request ──────────────────────────────


def test_public_request_creates_pending_quote(client, quote_payload, notifier):
    response = client.post("/quotes/", json=quote_payload)
    assert response.status_code == 201

    body = response.json()
    assert body["id"]
    assert body["status"] == "pending"
    assert body["items"] == []
    assert body["total_amount"] == 0
    assert body["final_total"] == 0
    assert body["requirements"] is None
    assert body["sent_at"] is None

    assert len(notifier.received) == 1
    assert notifier.received[0].customer_email == "jane@example.com"


def test_public_request_validates_email(client, quote_payload):
    quote_payload["customer_email"] = "not-an-email"
    assert client.post("/quotes/", json=quote_payload).status_code == 422


def test_public_request_requires_core_fields(client, quote_payload):
    del quote_payload["location"]
    assert client.post("/quotes/", json=quote_payload).status_code == 422


# ─────────────────────────────── Access control ──────────────────────────────


ADMIN_CALLS = [
    ("GET", "/admin/quotes/", None),
    ("GET", "/admin/quotes/{id}", None),
    ("PUT", "/admin/quotes/{id}", {"notes": "Follow up"}),
    ("PATCH", "/admin/quotes/{id}/status", {"status": "completed"}),
    ("DELETE", "/admin/quotes/{id}", None),
    ("POST", "/admin/quotes/{id}/send", None),
    ("GET", "/admin/quotes/{id}/document", None),
    ("GET", "/admin/quotes/{id}/pdf", None),
    ("POST", "/admin/quotes/{id}/items", {}),
    ("PATCH", "/admin/quotes/{id}/items/abc", {"field": "quantity", "value": 2}),
    ("DELETE", "/admin/quotes/{id}/items/abc", None),
    ("POST", "/admin/quotes/{id}/items/abc/duplicate", None),
]


@pytest.mark.parametrize("method, path, body", ADMIN_CALLS)
def test_admin_routes_require_token(client, quote_id, notifier, method, path, body):
    response = client.request(method, path.format(id=quote_id), json=body)
    assert response.status_code == 401
    assert notifier.sent == []


@pytest.mark.parametrize("method, path, body", ADMIN_CALLS)
def test_admin_routes_reject_non_admin(client, quote_id, user_headers, notifier, method, path, body):
    response = client.request(method, path.format(id=quote_id), json=body, headers=user_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"
    assert notifier.sent == []


def test_admin_routes_reject_bad_token(client):
    headers = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/admin/quotes/", headers=headers).status_code == 401


def test_unknown_quote_is_404(client, admin_headers):
    assert client.get("/admin/quotes/missing", headers=admin_headers).status_code == 404


# ─────────────────────────────── Admin reads & updates ───────────────────────


def test_list_and_filter_by_status(client, quote_id, quote_payload, admin_headers):
    other = client.post("/quotes/", json=quote_payload).json()["id"]
    client.patch(f"/admin/quotes/{other}/status", json={"status": "completed"}, headers=admin_headers)

    assert len(client.get("/admin/quotes/", headers=admin_headers).json()) == 2

    pending = client.get("/admin/quotes/", params={"status": "pending"}, headers=admin_headers).json()
    assert [q["id"] for q in pending] == [quote_id]


def test_update_items_recomputes_totals(client, quote_id, admin_headers):
    response = client.put(
        f"/admin/quotes/{quote_id}",
        json={"items": _priced_items(), "notes": "Site visit done"},
        headers=admin_headers,
    )
    assert response.status_code == 200

    body = response.json()
    assert body["total_amount"] == 2000
    assert body["vat_amount"] == pytest.approx(2000 * VAT_RATE)
    assert body["final_total"] == pytest.approx(2320)
    assert body["notes"] == "Site visit done"
    assert [item["total"] for item in body["items"]] == [1500, 500]
    assert body["items"][0]["unitPrice"] == 150


def test_update_ignores_client_totals(client, quote_id, admin_headers):
    items = _priced_items()
    items[0]["total"] = 1
    body = client.put(f"/admin/quotes/{quote_id}", json={"items": items}, headers=admin_headers).json()
    assert body["items"][0]["total"] == 1500
    assert body["total_amount"] == 2000


def test_items_survive_unrelated_update(client, quote_id, admin_headers):
    client.put(f"/admin/quotes/{quote_id}", json={"items": _priced_items()}, headers=admin_headers)
    client.put(f"/admin/quotes/{quote_id}", json={"notes": "Call after 5pm"}, headers=admin_headers)

    body = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()
    assert body["notes"] == "Call after 5pm"
    assert [item["id"] for item in body["items"]] == ["a", "b"]
    assert sum(item["total"] for item in body["items"]) == body["total_amount"] == 2000
    assert body["final_total"] == pytest.approx(body["total_amount"] * (1 + VAT_RATE))


def test_update_rejects_invalid_quantity(client, quote_id, admin_headers):
    items = _priced_items()
    items[0]["quantity"] = -2
    response = client.put(f"/admin/quotes/{quote_id}", json={"items": items}, headers=admin_headers)
    assert response.status_code == 422

    stored = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()
    assert stored["items"] == []


def test_update_rejects_unknown_assignee(client, quote_id, admin_headers):
    response = client.put(f"/admin/quotes/{quote_id}", json={"assigned_to": "nobody"}, headers=admin_headers)
    assert response.status_code == 400


def test_update_assigns_existing_user(client, quote_id, admin_headers, staff_user):
    response = client.put(
        f"/admin/quotes/{quote_id}", json={"assigned_to": staff_user.id}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["assigned_to"] == staff_user.id


def test_empty_assignee_clears_assignment(client, quote_id, admin_headers, staff_user):
    client.put(f"/admin/quotes/{quote_id}", json={"assigned_to": staff_user.id}, headers=admin_headers)

    response = client.put(f"/admin/quotes/{quote_id}", json={"assigned_to": ""}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["assigned_to"] is None

    stored = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()
    assert stored["assigned_to"] is None


@pytest.mark.parametrize("field", ["customer_name", "customer_phone", "project_type", "area_size", "location"])
def test_update_cannot_blank_required_fields(client, quote_id, admin_headers, field):
    before = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()

    response = client.put(f"/admin/quotes/{quote_id}", json={field: ""}, headers=admin_headers)
    assert response.status_code == 422

    after = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()
    assert after[field] == before[field] != ""


def test_update_ignores_null_for_required_fields(client, quote_id, admin_headers):
    response = client.put(
        f"/admin/quotes/{quote_id}", json={"customer_name": None, "notes": "Called"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["customer_name"] == "Jane Wanjiru"
    assert response.json()["notes"] == "Called"


def test_status_update_normalizes_label(client, quote_id, admin_headers):
    response = client.patch(
        f"/admin/quotes/{quote_id}/status", json={"status": "In Progress"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"


def test_status_update_rejects_unknown_label(client, quote_id, admin_headers):
    response = client.patch(
        f"/admin/quotes/{quote_id}/status", json={"status": "archived"}, headers=admin_headers
    )
    assert response.status_code == 422


# ─────────────────────────────── Line items ──────────────────────────────────


def test_item_endpoints(client, quote_id, admin_headers):
    base = f"/admin/quotes/{quote_id}/items"

    body = client.post(base, json={}, headers=admin_headers).json()
    assert len(body["items"]) == 1
    item_id = body["items"][0]["id"]

    body = client.patch(
        f"{base}/{item_id}", json={"field": "unitPrice", "value": "250"}, headers=admin_headers
    ).json()
    body = client.patch(
        f"{base}/{item_id}", json={"field": "quantity", "value": 4}, headers=admin_headers
    ).json()
    assert body["items"][0]["total"] == 1000
    assert body["total_amount"] == 1000

    body = client.post(f"{base}/{item_id}/duplicate", headers=admin_headers).json()
    assert len(body["items"]) == 2
    assert body["items"][1]["id"] != item_id
    assert body["total_amount"] == 2000

    body = client.delete(f"{base}/{item_id}", headers=admin_headers).json()
    assert len(body["items"]) == 1
    assert body["final_total"] == pytest.approx(1000 * (1 + VAT_RATE))


def test_item_edit_errors(client, quote_id, admin_headers):
    base = f"/admin/quotes/{quote_id}/items"
    item_id = client.post(base, json={}, headers=admin_headers).json()["items"][0]["id"]

    bad = client.patch(f"{base}/{item_id}", json={"field": "quantity", "value": "zero"}, headers=admin_headers)
    assert bad.status_code == 400

    missing = client.patch(f"{base}/nope", json={"field": "quantity", "value": 2}, headers=admin_headers)
    assert missing.status_code == 404

    last = client.delete(f"{base}/{item_id}", headers=admin_headers)
    assert last.status_code == 400


def test_add_item_from_catalog_product(client, quote_id, admin_headers):
    product = client.post(
        "/admin/products/",
        json={"name": "Drip Kit", "category": "kits", "model": "DK-1", "description": "Starter", "price": 4500},
        headers=admin_headers,
    ).json()

    body = client.post(
        f"/admin/quotes/{quote_id}/items", json={"product_id": product["id"]}, headers=admin_headers
    ).json()
    assert body["items"][0]["name"] == "Drip Kit"
    assert body["total_amount"] == 4500

    missing = client.post(
        f"/admin/quotes/{quote_id}/items", json={"product_id": "missing"}, headers=admin_headers
    )
    assert missing.status_code == 404


# ─────────────────────────────── Document, PDF & send ────────────────────────


def test_document_and_pdf(client, quote_id, admin_headers, admin_user):
    client.put(f"/admin/quotes/{quote_id}", json={"items": _priced_items()}, headers=admin_headers)

    document = client.get(f"/admin/quotes/{quote_id}/document", headers=admin_headers)
    assert document.status_code == 200
    assert "text/html" in document.headers["content-type"]
    assert "KSh 2,320.00" in document.text

    pdf = client.get(f"/admin/quotes/{quote_id}/pdf", headers=admin_headers)
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")

    token = admin_headers["Authorization"].split()[1]
    via_query = client.get(f"/admin/quotes/{quote_id}/pdf", params={"token": token})
    assert via_query.status_code == 200


def test_send_quote_delivers_once_and_records_sent_at(client, quote_id, admin_headers, notifier):
    client.put(f"/admin/quotes/{quote_id}", json={"items": _priced_items()}, headers=admin_headers)

    response = client.post(f"/admin/quotes/{quote_id}/send", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["sent_at"]

    assert len(notifier.sent) == 1
    sent_quote, html = notifier.sent[0]
    assert sent_quote.customer_email == "jane@example.com"
    assert "2,320.00" in html

    stored = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()
    assert stored["sent_at"] is not None
    assert stored["status"] == "pending"


def test_send_timestamps_share_the_database_clock(client, quote_id, admin_headers):
    client.post(f"/admin/quotes/{quote_id}/send", headers=admin_headers)

    stored = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()
    assert stored["sent_at"] == stored["updated_at"]
    assert stored["sent_at"] >= stored["created_at"]


def test_send_failure_leaves_quote_unchanged(client, quote_id, admin_headers, notifier):
    before = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()
    notifier.fail = True

    response = client.post(f"/admin/quotes/{quote_id}/send", headers=admin_headers)
    assert response.status_code == 502

    after = client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).json()
    assert after["sent_at"] is None
    assert after == before


def test_send_unknown_quote(client, admin_headers, notifier):
    assert client.post("/admin/quotes/missing/send", headers=admin_headers).status_code == 404
    assert notifier.sent == []


# ─────────────────────────────── Delete ──────────────────────────────────────


def test_delete_quote(client, quote_id, admin_headers):
    assert client.delete(f"/admin/quotes/{quote_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/admin/quotes/{quote_id}", headers=admin_headers).status_code == 404


def test_delete_unknown_quote(client, admin_headers):
    assert client.delete("/admin/quotes/missing", headers=admin_headers).status_code == 404
