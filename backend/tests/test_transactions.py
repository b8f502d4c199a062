from decimal import Decimal

from jersey_shop.models import Transaction


def test_create_transaction_scenario(client, make_customer, make_courier, make_transaction):
    customer = make_customer()
    courier = make_courier()

    body = make_transaction(customer["id"], courier_id=courier["id"], order_status="completed")
    assert body["order_status"] == "pending"
    assert body["price"] == 150000
    assert body["total_payment"] == 300000
    assert body["payment_method"] == "Transfer"
    assert body["created_at"] == body["updated_at"]

    detail = client.get(f"/transactions/{body['id']}").json()
    assert detail["customer"]["name"] == "John Doe"
    assert detail["courier"]["code"] == "JNE"


def test_create_transaction_with_unknown_customer(client):
    response = client.post(
        "/transactions/",
        json={
            "customer_id": 999,
            "jersey_name": "Persib Home",
            "jersey_size": "M",
            "price": 100000,
            "quantity": 1,
            "total_payment": 100000,
            "payment_method": "COD",
            "transaction_date": "2024-02-01T10:00:00",
        },
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Customer with id 999 not found"
    assert client.get("/transactions/").json()["total"] == 0


def test_create_transaction_with_unknown_courier(client, make_customer):
    customer = make_customer()
    response = client.post(
        "/transactions/",
        json={
            "customer_id": customer["id"],
            "jersey_name": "Persib Home",
            "jersey_size": "M",
            "price": 100000,
            "quantity": 1,
            "total_payment": 100000,
            "payment_method": "COD",
            "courier_id": 42,
            "transaction_date": "2024-02-01T10:00:00",
        },
    )
    assert response.status_code == 404


def test_create_transaction_validates_amounts(client, make_customer):
    customer = make_customer()
    payload = {
        "customer_id": customer["id"],
        "jersey_name": "Persib Home",
        "jersey_size": "M",
        "price": 100000,
        "quantity": 0,
        "total_payment": 100000,
        "payment_method": "COD",
        "transaction_date": "2024-02-01T10:00:00",
    }
    assert client.post("/transactions/", json=payload).status_code == 422
    payload.update(quantity=1, payment_method="Bitcoin")
    assert client.post("/transactions/", json=payload).status_code == 422


def test_money_is_stored_exactly(client, db_session, make_customer, make_transaction):
    customer = make_customer()
    body = make_transaction(customer["id"], price="19.99", quantity=3, total_payment="59.97")
    assert body["total_payment"] == 59.97

    stored = db_session.get(Transaction, body["id"])
    assert stored.total_payment == Decimal("59.97")


def test_list_transactions_search(client, make_customer, make_transaction):
    john = make_customer()
    jane = make_customer(name="Jane Roe")
    first = make_transaction(john["id"], jersey_name="Persija Away")
    make_transaction(jane["id"], jersey_name="Arsenal Home")

    by_jersey = client.get("/transactions/", params={"search": "persija"}).json()
    assert [t["id"] for t in by_jersey["items"]] == [first["id"]]

    by_customer = client.get("/transactions/", params={"search": "jane"}).json()
    assert by_customer["items"][0]["customer"]["name"] == "Jane Roe"

    by_id = client.get("/transactions/", params={"search": str(first["id"])}).json()
    assert first["id"] in [t["id"] for t in by_id["items"]]


def test_update_transaction_partial(client, make_customer, make_courier, make_transaction):
    customer = make_customer()
    courier = make_courier()
    created = make_transaction(customer["id"], courier_id=courier["id"], notes="Gift wrap")

    body = client.put(
        f"/transactions/{created['id']}",
        json={"courier_id": None, "notes": None, "order_status": "in_process"},
    ).json()
    assert body["courier_id"] is None
    assert body["courier"] is None
    assert body["notes"] is None
    assert body["order_status"] == "in_process"
    assert body["jersey_name"] == created["jersey_name"]
    assert body["updated_at"] > created["updated_at"]


def test_update_transaction_with_unknown_customer_leaves_row(client, make_customer, make_transaction):
    customer = make_customer()
    created = make_transaction(customer["id"])

    response = client.put(f"/transactions/{created['id']}", json={"customer_id": 999, "quantity": 5})
    assert response.status_code == 404
    unchanged = client.get(f"/transactions/{created['id']}").json()
    assert unchanged["customer_id"] == customer["id"]
    assert unchanged["quantity"] == 2


def test_update_missing_transaction(client):
    assert client.put("/transactions/5", json={"quantity": 1}).status_code == 404


def test_delete_transaction(client, make_customer, make_transaction):
    customer = make_customer()
    created = make_transaction(customer["id"])
    assert client.delete(f"/transactions/{created['id']}").status_code == 204
    assert client.get(f"/transactions/{created['id']}").json() is None
    assert client.delete(f"/transactions/{created['id']}").status_code == 404
