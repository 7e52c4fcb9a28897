def order_body(**overrides):
    body = {
        "order_number": "ORD-101",
        "title": "50 bags cement for Sita Devi",
        "order_date": "2024-02-01",
    }
    body.update(overrides)
    return body


def test_create_order_defaults_to_pending(client):
    res = client.post("/orders", json=order_body(description="  ", notes="deliver by Friday"))
    assert res.status_code == 201
    order = res.json()
    assert order["status"] == "pending"
    assert order["description"] is None
    assert order["notes"] == "deliver by Friday"


def test_duplicate_order_number(client):
    client.post("/orders", json=order_body())
    assert client.post("/orders", json=order_body(title="other")).status_code == 409


def test_rejects_unknown_status(client):
    assert client.post("/orders", json=order_body(status="shipped")).status_code == 422


def test_list_filters(client):
    client.post("/orders", json=order_body())
    client.post("/orders", json=order_body(order_number="ORD-102", title="Steel rods", status="processing"))
    client.post("/orders", json=order_body(order_number="ORD-103", title="Paint", order_date="2024-03-10"))

    newest_first = client.get("/orders").json()
    assert [o["order_number"] for o in newest_first] == ["ORD-103", "ORD-102", "ORD-101"]

    processing = client.get("/orders", params={"status": "processing"}).json()
    assert [o["title"] for o in processing] == ["Steel rods"]

    found = client.get("/orders", params={"search": "cement"}).json()
    assert [o["order_number"] for o in found] == ["ORD-101"]

    march = client.get("/orders", params={"from_date": "2024-03-01", "to_date": "2024-03-31"}).json()
    assert [o["order_number"] for o in march] == ["ORD-103"]


def test_update_order(client):
    order = client.post("/orders", json=order_body()).json()
    other = client.post("/orders", json=order_body(order_number="ORD-102")).json()

    res = client.put(f"/orders/{order['order_id']}", json={"status": "delivered", "notes": "signed"})
    assert res.status_code == 200
    assert res.json()["status"] == "delivered"
    assert res.json()["notes"] == "signed"
    assert res.json()["title"] == order["title"]

    res = client.put(f"/orders/{other['order_id']}", json={"order_number": "ORD-101"})
    assert res.status_code == 409

    res = client.put(f"/orders/{order['order_id']}", json={"title": "  "})
    assert res.status_code == 422


def test_get_and_delete_order(client):
    order = client.post("/orders", json=order_body()).json()
    assert client.get(f"/orders/{order['order_id']}").status_code == 200

    assert client.delete(f"/orders/{order['order_id']}").status_code == 200
    assert client.get(f"/orders/{order['order_id']}").status_code == 404
    assert client.delete(f"/orders/{order['order_id']}").status_code == 404
