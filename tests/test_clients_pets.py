from app.models import Pet
from conftest import future_day, make_user


def test_admin_creates_client_profile(client, db, seed):
    user = make_user(db, "Carol Tutor", "carol@petshop.test")
    response = client.post(
        "/clients",
        json={"user_id": user.id, "cpf": "333.333.333-33", "city": "Sorocaba", "state": "sp"},
        headers=seed.admin_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["state"] == "SP"
    assert body["user"]["name"] == "Carol Tutor"


def test_client_profile_conflicts(client, db, seed):
    again = client.post("/clients", json={"user_id": seed.alice_user_id}, headers=seed.admin_headers)
    assert again.status_code == 409

    user = make_user(db, "Dan", "dan@petshop.test")
    taken_cpf = client.post(
        "/clients", json={"user_id": user.id, "cpf": "111.111.111-11"}, headers=seed.admin_headers
    )
    assert taken_cpf.status_code == 409

    missing_user = client.post("/clients", json={"user_id": 9999}, headers=seed.admin_headers)
    assert missing_user.status_code == 404


def test_only_admin_creates_clients(client, db, seed):
    user = make_user(db, "Eve", "eve@petshop.test")
    response = client.post("/clients", json={"user_id": user.id}, headers=seed.staff_headers)
    assert response.status_code == 403


def test_list_clients_by_name(client, seed):
    response = client.get("/clients", params={"name": "bob"}, headers=seed.staff_headers)
    body = response.json()
    assert body["pagination"]["total"] == 1
    assert body["items"][0]["id"] == seed.bob_id

    all_clients = client.get("/clients", headers=seed.staff_headers).json()
    assert [c["user"]["name"] for c in all_clients["items"]] == ["Alice Tutor", "Bob Tutor"]


def test_client_sees_only_own_record(client, seed):
    listing = client.get("/clients", headers=seed.alice_headers).json()
    assert [c["id"] for c in listing["items"]] == [seed.alice_id]

    assert client.get(f"/clients/{seed.bob_id}", headers=seed.alice_headers).status_code == 403
    assert client.get(f"/clients/{seed.alice_id}", headers=seed.alice_headers).status_code == 200
    assert client.get(f"/clients/{seed.bob_id}/pets", headers=seed.alice_headers).status_code == 403


def test_client_updates_own_address(client, seed):
    response = client.put(
        f"/clients/{seed.alice_id}", json={"address": "Rua das Flores, 10"}, headers=seed.alice_headers
    )
    assert response.status_code == 200
    assert response.json()["address"] == "Rua das Flores, 10"

    other = client.put(f"/clients/{seed.bob_id}", json={"address": "x"}, headers=seed.alice_headers)
    assert other.status_code == 403


def test_client_sub_resources(client, seed):
    client.post(
        "/appointments",
        json={
            "client_id": seed.alice_id,
            "pet_id": seed.rex_id,
            "service_id": seed.bath_id,
            "date": future_day().isoformat(),
            "start_time": "10:00",
            "end_time": "11:00",
        },
        headers=seed.alice_headers,
    )
    client.post(
        "/sales",
        json={
            "client_id": seed.alice_id,
            "items": [{"product_id": seed.collar_id, "quantity": 1}],
            "payment_method": "debit_card",
        },
        headers=seed.alice_headers,
    )

    pets = client.get(f"/clients/{seed.alice_id}/pets", headers=seed.alice_headers).json()
    assert [p["name"] for p in pets["items"]] == ["Rex"]

    appointments = client.get(
        f"/clients/{seed.alice_id}/appointments", headers=seed.alice_headers
    ).json()
    assert appointments["pagination"]["total"] == 1

    purchases = client.get(
        f"/clients/{seed.alice_id}/purchases", params={"status": "completed"}, headers=seed.alice_headers
    ).json()
    assert purchases["pagination"]["total"] == 1
    assert purchases["items"][0]["items"][0]["product_id"] == seed.collar_id


def test_delete_client_with_history_is_blocked(client, seed):
    client.post(
        "/sales",
        json={
            "client_id": seed.bob_id,
            "items": [{"product_id": seed.collar_id, "quantity": 1}],
            "payment_method": "cash",
        },
        headers=seed.staff_headers,
    )
    assert client.delete(f"/clients/{seed.bob_id}", headers=seed.admin_headers).status_code == 400


def test_delete_client_removes_pets(client, db, seed):
    response = client.delete(f"/clients/{seed.alice_id}", headers=seed.admin_headers)
    assert response.status_code == 204

    db.expire_all()
    assert db.get(Pet, seed.rex_id) is None
    assert client.get(f"/clients/{seed.alice_id}", headers=seed.admin_headers).status_code == 404


# ============================================================================
# Pets
# ============================================================================


def test_client_registers_own_pet(client, seed):
    response = client.post(
        "/pets",
        json={"client_id": seed.alice_id, "name": "Luna", "species": "dog", "weight": "8.50", "sex": "female"},
        headers=seed.alice_headers,
    )
    assert response.status_code == 201
    assert response.json()["weight"] == "8.50"

    other = client.post(
        "/pets",
        json={"client_id": seed.bob_id, "name": "Luna", "species": "dog"},
        headers=seed.alice_headers,
    )
    assert other.status_code == 403


def test_pet_owner_must_exist(client, seed):
    response = client.post(
        "/pets", json={"client_id": 9999, "name": "Ghost", "species": "cat"}, headers=seed.staff_headers
    )
    assert response.status_code == 404


def test_pet_sex_is_validated(client, seed):
    response = client.post(
        "/pets",
        json={"client_id": seed.alice_id, "name": "Odd", "species": "dog", "sex": "unknown"},
        headers=seed.staff_headers,
    )
    assert response.status_code == 400


def test_pet_list_is_narrowed_for_clients(client, seed):
    assert client.get("/pets", headers=seed.alice_headers).json()["pagination"]["total"] == 1
    assert client.get("/pets", headers=seed.staff_headers).json()["pagination"]["total"] == 2
    assert client.get(f"/pets/{seed.mia_id}", headers=seed.alice_headers).status_code == 403

    by_species = client.get("/pets", params={"species": "cat"}, headers=seed.staff_headers).json()
    assert [p["name"] for p in by_species["items"]] == ["Mia"]


def test_pet_with_appointments_cannot_be_deleted(client, seed):
    client.post(
        "/appointments",
        json={
            "client_id": seed.bob_id,
            "pet_id": seed.mia_id,
            "service_id": seed.bath_id,
            "date": future_day().isoformat(),
            "start_time": "10:00",
            "end_time": "11:00",
        },
        headers=seed.staff_headers,
    )
    assert client.delete(f"/pets/{seed.mia_id}", headers=seed.staff_headers).status_code == 400
    history = client.get(f"/pets/{seed.mia_id}/appointments", headers=seed.staff_headers).json()
    assert history["pagination"]["total"] == 1

    assert client.delete(f"/pets/{seed.rex_id}", headers=seed.alice_headers).status_code == 204
