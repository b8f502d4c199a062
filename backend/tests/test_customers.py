from datetime import timedelta

from jersey_shop.models import Customer
from jersey_shop.timeutils import local_now, start_of_month


def test_create_customer_sets_equal_timestamps(client, make_customer):
    body = make_customer()
    assert body["id"] > 0
    assert body["name"] == "John Doe"
    assert body["created_at"] == body["updated_at"]


def test_create_customer_rejects_missing_fields(client):
    response = client.post("/customers/", json={"name": "Jane"})
    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_list_customers_paginates_newest_first(client, make_customer):
    for name in ("Andi", "Budi", "Citra"):
        make_customer(name=name)

    first = client.get("/customers/", params={"page": 1, "limit": 2}).json()
    assert first["total"] == 3
    assert [c["name"] for c in first["items"]] == ["Citra", "Budi"]

    second = client.get("/customers/", params={"page": 2, "limit": 2}).json()
    assert [c["name"] for c in second["items"]] == ["Andi"]

    everything = client.get("/customers/", params={"limit": -1}).json()
    assert len(everything["items"]) == everything["total"] == 3


def test_list_customers_rejects_bad_limits(client):
    for limit in (0, -2):
        response = client.get("/customers/", params={"limit": limit})
        assert response.status_code == 422
        assert response.json()["details"] == {"field": "limit"}


def test_search_customers_across_columns(client, make_customer):
    make_customer(name="Andi", city="Bandung", province="Jawa Barat", phone="0811")
    make_customer(name="Budi", city="Surabaya", province="Jawa Timur", phone="0822")

    by_city = client.get("/customers/", params={"search": "bandung"}).json()
    assert [c["name"] for c in by_city["items"]] == ["Andi"]

    by_province = client.get("/customers/", params={"search": "JAWA"}).json()
    assert by_province["total"] == 2

    by_phone = client.get("/customers/", params={"search": "0822"}).json()
    assert [c["name"] for c in by_phone["items"]] == ["Budi"]

    percent = client.get("/customers/", params={"search": "%"}).json()
    assert percent["total"] == 0


def test_get_missing_customer_returns_null(client):
    response = client.get("/customers/999")
    assert response.status_code == 200
    assert response.json() is None


def test_partial_update_only_touches_given_fields(client, make_customer):
    created = make_customer()
    response = client.put(f"/customers/{created['id']}", json={"city": "Bogor", "notes": None})
    assert response.status_code == 200
    body = response.json()
    assert body["city"] == "Bogor"
    assert body["notes"] is None
    assert body["name"] == created["name"]
    assert body["created_at"] == created["created_at"]
    assert body["updated_at"] > created["updated_at"]


def test_update_rejects_null_for_required_column(client, make_customer):
    created = make_customer()
    response = client.put(f"/customers/{created['id']}", json={"name": None})
    assert response.status_code == 422
    assert client.get(f"/customers/{created['id']}").json()["name"] == "John Doe"


def test_update_missing_customer_is_not_found(client):
    response = client.put("/customers/404", json={"name": "Ghost"})
    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "NOT_FOUND"
    assert body["path"] == "/customers/404"


def test_delete_customer(client, make_customer):
    created = make_customer()
    assert client.delete(f"/customers/{created['id']}").status_code == 204
    assert client.get(f"/customers/{created['id']}").json() is None
    assert client.delete(f"/customers/{created['id']}").status_code == 404


def test_delete_customer_with_transactions_conflicts(client, make_customer, make_transaction):
    created = make_customer()
    make_transaction(created["id"])

    response = client.delete(f"/customers/{created['id']}")
    assert response.status_code == 409
    assert response.json()["message"] == "Cannot delete customer with existing transactions"
    assert client.get(f"/customers/{created['id']}").json()["id"] == created["id"]


def test_customer_stats_counts_this_month(client, db_session, make_customer):
    make_customer(name="Fresh")
    old = Customer(
        name="Old",
        phone="0800",
        address="Jl. Lama",
        city="Medan",
        province="Sumatera Utara",
    )
    old.created_at = old.updated_at = start_of_month(local_now()) - timedelta(days=1)
    db_session.add(old)
    db_session.commit()

    stats = client.get("/customers/stats").json()
    assert stats == {"total": 2, "new_this_month": 1}
