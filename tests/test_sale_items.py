from decimal import Decimal

from conftest import product_stock


def open_sale(client, seed, quantity=1):
    response = client.post(
        "/sales",
        json={
            "client_id": seed.alice_id,
            "items": [{"product_id": seed.leash_id, "quantity": quantity}],
            "payment_method": "cash",
        },
        headers=seed.staff_headers,
    )
    assert response.status_code == 201
    return response.json()


def sale_total(client, seed, sale_id) -> Decimal:
    return Decimal(client.get(f"/sales/{sale_id}", headers=seed.admin_headers).json()["total"])


def test_add_then_remove_item_restores_everything(client, db, seed):
    sale = open_sale(client, seed)
    total_before = sale_total(client, seed, sale["id"])

    added = client.post(
        "/sale-items",
        json={"sale_id": sale["id"], "product_id": seed.collar_id, "quantity": 2},
        headers=seed.staff_headers,
    )
    assert added.status_code == 201
    assert Decimal(added.json()["total"]) == Decimal("20.00")
    assert product_stock(db, seed.collar_id) == 3
    assert sale_total(client, seed, sale["id"]) == total_before + Decimal("20.00")

    removed = client.delete(f"/sale-items/{added.json()['id']}", headers=seed.staff_headers)
    assert removed.status_code == 204
    assert product_stock(db, seed.collar_id) == 5
    assert sale_total(client, seed, sale["id"]) == total_before


def test_increasing_quantity_takes_the_difference_from_stock(client, db, seed):
    sale = open_sale(client, seed, quantity=2)
    item_id = sale["items"][0]["id"]

    response = client.put(f"/sale-items/{item_id}", json={"quantity": 5}, headers=seed.staff_headers)
    assert response.status_code == 200
    assert response.json()["quantity"] == 5
    assert Decimal(response.json()["total"]) == Decimal("127.50")
    assert product_stock(db, seed.leash_id) == 15
    assert sale_total(client, seed, sale["id"]) == Decimal("127.50")


def test_decreasing_quantity_returns_the_difference(client, db, seed):
    sale = open_sale(client, seed, quantity=4)
    item_id = sale["items"][0]["id"]

    client.put(f"/sale-items/{item_id}", json={"quantity": 1}, headers=seed.staff_headers)
    assert product_stock(db, seed.leash_id) == 19
    assert sale_total(client, seed, sale["id"]) == Decimal("25.50")


def test_increase_beyond_stock_changes_nothing(client, db, seed):
    sale = open_sale(client, seed, quantity=18)
    item_id = sale["items"][0]["id"]

    response = client.put(f"/sale-items/{item_id}", json={"quantity": 25}, headers=seed.staff_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "INSUFFICIENT_STOCK"
    assert product_stock(db, seed.leash_id) == 2
    assert sale_total(client, seed, sale["id"]) == Decimal("459.00")


def test_items_of_cancelled_sale_are_frozen(client, seed):
    sale = open_sale(client, seed)
    client.put(f"/sales/{sale['id']}", json={"status": "cancelled"}, headers=seed.staff_headers)

    response = client.post(
        "/sale-items",
        json={"sale_id": sale["id"], "product_id": seed.collar_id, "quantity": 1},
        headers=seed.staff_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_STATE"

    item_id = sale["items"][0]["id"]
    assert client.delete(f"/sale-items/{item_id}", headers=seed.staff_headers).status_code == 400


def test_item_for_unknown_sale(client, seed):
    response = client.post(
        "/sale-items",
        json={"sale_id": 9999, "product_id": seed.collar_id, "quantity": 1},
        headers=seed.staff_headers,
    )
    assert response.status_code == 404


def test_clients_cannot_edit_items(client, seed):
    sale = open_sale(client, seed)
    response = client.post(
        "/sale-items",
        json={"sale_id": sale["id"], "product_id": seed.collar_id, "quantity": 1},
        headers=seed.alice_headers,
    )
    assert response.status_code == 403


def test_list_items_by_sale(client, seed):
    sale = open_sale(client, seed)
    open_sale(client, seed)

    response = client.get("/sale-items", params={"sale_id": sale["id"]}, headers=seed.staff_headers)
    body = response.json()
    assert body["pagination"]["total"] == 1
    assert body["items"][0]["sale_id"] == sale["id"]

    assert client.get("/sale-items", headers=seed.bob_headers).json()["pagination"]["total"] == 0
    assert client.get("/sale-items", headers=seed.alice_headers).json()["pagination"]["total"] == 2
