def test_courier_search_matches_name_and_code(client, make_courier):
    jne = make_courier(name="JNE Express", code="JNE")
    make_courier(name="J&T Express", code="JNT")

    express = client.get("/couriers/", params={"search": "express"}).json()
    assert express["total"] == 2

    only_jne = client.get("/couriers/", params={"search": "JNE"}).json()
    assert only_jne["total"] == 1
    assert only_jne["items"][0]["id"] == jne["id"]

    by_code = client.get("/couriers/", params={"search": "jnt"}).json()
    assert [c["name"] for c in by_code["items"]] == ["J&T Express"]


def test_list_all_couriers_sorted_by_name(client, make_courier):
    for name, code in (("SiCepat", "SCP"), ("AnterAja", "ANT"), ("JNE Express", "JNE")):
        make_courier(name=name, code=code)

    names = [c["name"] for c in client.get("/couriers/all").json()]
    assert names == ["AnterAja", "JNE Express", "SiCepat"]


def test_update_courier_clears_notes(client, make_courier):
    created = make_courier()
    body = client.put(f"/couriers/{created['id']}", json={"notes": None}).json()
    assert body["notes"] is None
    assert body["code"] == "JNE"


def test_update_courier_rejects_null_code(client, make_courier):
    created = make_courier()
    assert client.put(f"/couriers/{created['id']}", json={"code": None}).status_code == 422


def test_get_missing_courier_returns_null(client):
    assert client.get("/couriers/77").json() is None


def test_delete_courier_in_use_conflicts(client, make_customer, make_courier, make_transaction):
    customer = make_customer()
    courier = make_courier()
    make_transaction(customer["id"], courier_id=courier["id"])

    response = client.delete(f"/couriers/{courier['id']}")
    assert response.status_code == 409
    assert response.json()["message"] == "Cannot delete courier with existing transactions"


def test_delete_unused_courier(client, make_courier):
    courier = make_courier()
    assert client.delete(f"/couriers/{courier['id']}").status_code == 204
    assert client.delete(f"/couriers/{courier['id']}").status_code == 404
