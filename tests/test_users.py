from conftest import PASSWORD


def test_admin_creates_user(client, seed):
    response = client.post(
        "/users",
        json={"name": "Carla", "email": "Carla@Petshop.test", "password": "123456", "role": "staff"},
        headers=seed.admin_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "carla@petshop.test"
    assert body["role"] == "staff"
    assert "password" not in body and "password_hash" not in body


def test_duplicate_email_conflicts(client, seed):
    response = client.post(
        "/users",
        json={"name": "Alice 2", "email": "alice@petshop.test", "password": "123456"},
        headers=seed.admin_headers,
    )
    assert response.status_code == 409


def test_short_password_and_bad_email(client, seed):
    short = client.post(
        "/users", json={"name": "X", "email": "x@petshop.test", "password": "123"}, headers=seed.admin_headers
    )
    assert short.status_code == 400
    bad_email = client.post(
        "/users", json={"name": "X", "email": "not-an-email", "password": "123456"}, headers=seed.admin_headers
    )
    assert bad_email.status_code == 400


def test_non_admin_cannot_create_or_list(client, seed):
    body = {"name": "X", "email": "x@petshop.test", "password": "123456"}
    assert client.post("/users", json=body, headers=seed.staff_headers).status_code == 403
    assert client.get("/users", headers=seed.alice_headers).status_code == 403


def test_list_users_filters_by_role(client, seed):
    response = client.get("/users", params={"role": "staff"}, headers=seed.admin_headers)
    names = [u["name"] for u in response.json()["items"]]
    assert names == ["Gabriel Groomer", "Gina Groomer"]


def test_users_see_only_themselves(client, seed):
    assert client.get(f"/users/{seed.alice_user_id}", headers=seed.alice_headers).status_code == 200
    assert client.get(f"/users/{seed.bob_user_id}", headers=seed.alice_headers).status_code == 403
    assert client.get(f"/users/{seed.bob_user_id}", headers=seed.admin_headers).status_code == 200
    assert client.get("/users/9999", headers=seed.admin_headers).status_code == 404


def test_user_updates_own_profile_but_not_role(client, seed):
    own = client.put(
        f"/users/{seed.alice_user_id}", json={"phone": "11 99999-0000"}, headers=seed.alice_headers
    )
    assert own.status_code == 200
    assert own.json()["phone"] == "11 99999-0000"

    promote = client.put(
        f"/users/{seed.alice_user_id}", json={"role": "admin"}, headers=seed.alice_headers
    )
    assert promote.status_code == 403


def test_change_password(client, seed):
    wrong = client.put(
        f"/users/{seed.alice_user_id}/password",
        json={"current_password": "nope", "new_password": "new-secret"},
        headers=seed.alice_headers,
    )
    assert wrong.status_code == 400

    ok = client.put(
        f"/users/{seed.alice_user_id}/password",
        json={"current_password": PASSWORD, "new_password": "new-secret"},
        headers=seed.alice_headers,
    )
    assert ok.status_code == 204

    login = client.post("/auth/login", json={"email": "alice@petshop.test", "password": "new-secret"})
    assert login.status_code == 200


def test_cannot_change_someone_elses_password(client, seed):
    response = client.put(
        f"/users/{seed.bob_user_id}/password",
        json={"current_password": PASSWORD, "new_password": "new-secret"},
        headers=seed.alice_headers,
    )
    assert response.status_code == 403


def test_delete_user_linked_to_client_is_blocked(client, seed):
    assert client.delete(f"/users/{seed.alice_user_id}", headers=seed.admin_headers).status_code == 400

    created = client.post(
        "/users",
        json={"name": "Temp", "email": "temp@petshop.test", "password": "123456"},
        headers=seed.admin_headers,
    ).json()
    assert client.delete(f"/users/{created['id']}", headers=seed.admin_headers).status_code == 204
