from decimal import Decimal

from app.domain.sales.inventory import decrement_stock, increment_stock
from app.models import Product, Sale
from conftest import product_stock


def checkout(client, seed, items, headers=None, **overrides):
    body = {
        "client_id": seed.alice_id,
        "items": items,
        "payment_method": "pix",
    }
    body.update(overrides)
    return client.post("/sales", json=body, headers=headers or seed.staff_headers)


def test_checkout_decrements_stock_and_totals(client, db, seed, email_mock):
    response = checkout(
        client,
        seed,
        [
            {"product_id": seed.collar_id, "quantity": 2},
            {"product_id": seed.leash_id, "quantity": 1, "discount": "0.50"},
        ],
        discount="5.00",
    )
    assert response.status_code == 201
    sale = response.json()

    assert sale["status"] == "completed"
    assert sale["staff_id"] == seed.groomer_id
    assert [Decimal(i["total"]) for i in sale["items"]] == [Decimal("20.00"), Decimal("25.00")]
    assert Decimal(sale["total"]) == Decimal("40.00")

    assert product_stock(db, seed.collar_id) == 3
    assert product_stock(db, seed.leash_id) == 19

    assert email_mock.await_count == 1
    assert "Purchase Confirmation" in email_mock.await_args.kwargs["subject"]


def test_insufficient_stock_rejects_whole_sale(client, db, seed):
    response = checkout(
        client,
        seed,
        [
            {"product_id": seed.leash_id, "quantity": 1},
            {"product_id": seed.collar_id, "quantity": 6},
        ],
    )
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "INSUFFICIENT_STOCK"
    assert "Available: 5" in body["message"]

    assert product_stock(db, seed.collar_id) == 5
    assert product_stock(db, seed.leash_id) == 20
    assert client.get("/sales", headers=seed.admin_headers).json()["pagination"]["total"] == 0


def test_exact_stock_can_be_sold(client, db, seed):
    response = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 5}])
    assert response.status_code == 201
    assert product_stock(db, seed.collar_id) == 0

    again = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 1}])
    assert again.status_code == 400


def test_sale_needs_at_least_one_item(client, seed):
    response = checkout(client, seed, [])
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_quantity_must_be_positive(client, seed):
    response = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 0}])
    assert response.status_code == 400


def test_discount_larger_than_subtotal_is_rejected(client, db, seed):
    response = checkout(
        client, seed, [{"product_id": seed.collar_id, "quantity": 1}], discount="11.00"
    )
    assert response.status_code == 400
    assert product_stock(db, seed.collar_id) == 5


def test_inactive_product_cannot_be_sold(client, seed):
    client.put(f"/products/{seed.collar_id}", json={"status": "inactive"}, headers=seed.admin_headers)
    response = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 1}])
    assert response.status_code == 400


def test_unknown_product_or_client(client, seed):
    assert checkout(client, seed, [{"product_id": 9999, "quantity": 1}]).status_code == 404
    response = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 1}], client_id=9999)
    assert response.status_code == 404


def test_cancel_restocks_once(client, db, seed, email_mock):
    sale = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 3}]).json()
    assert product_stock(db, seed.collar_id) == 2
    email_mock.reset_mock()

    response = client.put(
        f"/sales/{sale['id']}", json={"status": "cancelled"}, headers=seed.staff_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    assert product_stock(db, seed.collar_id) == 5
    assert email_mock.await_count == 1

    again = client.put(
        f"/sales/{sale['id']}", json={"status": "cancelled"}, headers=seed.staff_headers
    )
    assert again.status_code == 400
    assert again.json()["code"] == "INVALID_STATE"
    assert product_stock(db, seed.collar_id) == 5


def test_completed_sale_cannot_go_back_to_pending(client, seed):
    sale = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 1}]).json()
    response = client.put(f"/sales/{sale['id']}", json={"status": "pending"}, headers=seed.staff_headers)
    assert response.status_code == 400


def test_update_payment_method_and_notes(client, seed):
    sale = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 1}]).json()
    response = client.put(
        f"/sales/{sale['id']}",
        json={"payment_method": "cash", "notes": "paid at the counter"},
        headers=seed.staff_headers,
    )
    assert response.status_code == 200
    assert response.json()["payment_method"] == "cash"
    assert Decimal(response.json()["total"]) == Decimal("10.00")


def test_delete_restocks_open_sale(client, db, seed):
    sale = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 4}]).json()
    assert product_stock(db, seed.collar_id) == 1

    assert client.delete(f"/sales/{sale['id']}", headers=seed.staff_headers).status_code == 403
    response = client.delete(f"/sales/{sale['id']}", headers=seed.admin_headers)
    assert response.status_code == 204
    assert product_stock(db, seed.collar_id) == 5
    assert client.get(f"/sales/{sale['id']}", headers=seed.admin_headers).status_code == 404


def test_delete_cancelled_sale_does_not_restock_twice(client, db, seed, email_mock):
    sale = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 2}]).json()
    client.put(f"/sales/{sale['id']}", json={"status": "cancelled"}, headers=seed.staff_headers)
    assert product_stock(db, seed.collar_id) == 5
    emails_before_delete = email_mock.await_count

    response = client.delete(f"/sales/{sale['id']}", headers=seed.admin_headers)
    assert response.status_code == 204
    assert product_stock(db, seed.collar_id) == 5
    # the client already got the cancellation notice
    assert email_mock.await_count == emails_before_delete


def test_stock_helpers_refresh_loaded_product(db, seed):
    product = db.get(Product, seed.collar_id)
    assert product.stock == 5

    decrement_stock(db, seed.collar_id, 2)
    assert product.stock == 3
    increment_stock(db, seed.collar_id, 1)
    assert product.stock == 4
    db.commit()


def test_failed_email_does_not_undo_checkout(client, db, seed, email_mock):
    email_mock.side_effect = RuntimeError("smtp down")
    response = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 1}])
    assert response.status_code == 201
    assert email_mock.await_count == 1

    db.expire_all()
    assert db.get(Sale, response.json()["id"]) is not None
    assert product_stock(db, seed.collar_id) == 4


def test_client_can_buy_for_themselves_only(client, seed):
    own = checkout(
        client, seed, [{"product_id": seed.collar_id, "quantity": 1}], headers=seed.alice_headers
    )
    assert own.status_code == 201
    assert own.json()["staff_id"] is None

    other = checkout(
        client,
        seed,
        [{"product_id": seed.collar_id, "quantity": 1}],
        headers=seed.bob_headers,
    )
    assert other.status_code == 403

    assert client.get(f"/sales/{own.json()['id']}", headers=seed.bob_headers).status_code == 403
    assert client.get("/sales", headers=seed.bob_headers).json()["pagination"]["total"] == 0


def test_list_filters_by_status(client, seed):
    first = checkout(client, seed, [{"product_id": seed.collar_id, "quantity": 1}]).json()
    checkout(client, seed, [{"product_id": seed.leash_id, "quantity": 1}])
    client.put(f"/sales/{first['id']}", json={"status": "cancelled"}, headers=seed.staff_headers)

    response = client.get("/sales", params={"status": "cancelled"}, headers=seed.admin_headers)
    body = response.json()
    assert body["pagination"]["total"] == 1
    assert body["items"][0]["id"] == first["id"]
