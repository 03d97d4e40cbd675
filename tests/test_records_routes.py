import pytest

from virasat.modules.records.families import FAMILIES

API = "/api/v1/records"

PROPERTY = {
    "type": "Residential",
    "address": "12 MG Road, Bengaluru",
    "area": "1200 sq ft",
    "value": "₹85,00,000",
    "registration_number": "KA-BLR-2019-001",
}


def test_catalog_lists_all_families(client):
    response = client.get(API)
    assert response.status_code == 200
    slugs = {family["slug"] for family in response.json()}
    assert slugs == set(FAMILIES)

    by_slug = {family["slug"]: family for family in response.json()}
    assert by_slug["bank_accounts"]["defaults"] == {"status": "Active"}
    assert by_slug["passwords"]["defaults"] == {"category": "Personal"}
    assert by_slug["vehicles"]["defaults"] == {}


def test_no_session_returns_401_with_redirect(client, fake_db):
    response = client.get(f"{API}/properties")

    assert response.status_code == 401
    assert response.json()["redirect"] == "/login"
    assert response.headers["X-Redirect-To"] == "/login"
    assert not any(table == "properties" for table, _ in fake_db.calls)


def test_invalid_token_returns_401(client):
    response = client.get(f"{API}/properties", headers={"Authorization": "Bearer bogus"})
    assert response.status_code == 401


def test_unknown_family_is_404(client, alice):
    response = client.get(f"{API}/horoscopes", headers=alice["headers"])
    assert response.status_code == 404
    assert "Unknown record type" in response.json()["detail"]


def test_create_list_and_delete(client, alice):
    created = client.post(f"{API}/properties", json=PROPERTY, headers=alice["headers"])
    assert created.status_code == 201
    body = created.json()
    assert body["user_id"] == alice["id"]
    assert body["address"] == PROPERTY["address"]

    listed = client.get(f"{API}/properties", headers=alice["headers"]).json()
    assert [row["id"] for row in listed] == [body["id"]]

    deleted = client.delete(f"{API}/properties/{body['id']}", headers=alice["headers"])
    assert deleted.status_code == 204
    assert client.get(f"{API}/properties", headers=alice["headers"]).json() == []


def test_missing_required_field_is_422_and_not_stored(client, fake_db, alice):
    response = client.post(
        f"{API}/properties",
        json={**PROPERTY, "area": ""},
        headers=alice["headers"],
    )

    assert response.status_code == 422
    assert "area" in response.json()["detail"]
    assert ("properties", "insert") not in fake_db.calls


def test_replace_record(client, alice):
    created = client.post(f"{API}/properties", json=PROPERTY, headers=alice["headers"]).json()

    response = client.put(
        f"{API}/properties/{created['id']}",
        json={**PROPERTY, "value": "₹95,00,000"},
        headers=alice["headers"],
    )

    assert response.status_code == 200
    assert response.json()["value"] == "₹95,00,000"


@pytest.mark.parametrize("slug", ["bank_accounts", "passwords", "nominees"])
def test_other_users_rows_are_invisible(client, alice, bob, slug):
    fields = {name: f"{name} of alice" for name in FAMILIES[slug].required}
    created = client.post(f"{API}/{slug}", json=fields, headers=alice["headers"]).json()

    assert client.get(f"{API}/{slug}", headers=bob["headers"]).json() == []
    assert client.delete(f"{API}/{slug}/{created['id']}", headers=bob["headers"]).status_code == 404
    assert client.put(f"{API}/{slug}/{created['id']}", json=fields, headers=bob["headers"]).status_code == 404
    assert len(client.get(f"{API}/{slug}", headers=alice["headers"]).json()) == 1


def test_delete_nonexistent_id_is_404(client, alice):
    client.post(f"{API}/properties", json=PROPERTY, headers=alice["headers"])

    response = client.delete(f"{API}/properties/424242", headers=alice["headers"])

    assert response.status_code == 404
    assert len(client.get(f"{API}/properties", headers=alice["headers"]).json()) == 1


def test_store_failure_is_502(client, fake_db, alice):
    fake_db.failing_tables.add("vehicles")
    response = client.get(f"{API}/vehicles", headers=alice["headers"])
    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to load vehicles"
