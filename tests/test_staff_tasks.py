from conftest import future_day, make_user


def create_task(client, seed, headers=None, **fields):
    body = {"title": "Clean kennels", "date": future_day().isoformat(), "time": "08:00"}
    body.update(fields)
    return client.post("/tasks", json=body, headers=headers or seed.staff_headers)


# ============================================================================
# Staff
# ============================================================================


def test_admin_hires_staff(client, db, seed):
    user = make_user(db, "Vera Vet", "vera@petshop.test", role="staff")
    response = client.post(
        "/staff",
        json={"user_id": user.id, "position": "Veterinarian", "salary": "5500.00", "specialty": "Dermatology"},
        headers=seed.admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["salary"] == "5500.00"
    assert response.json()["user"]["email"] == "vera@petshop.test"

    again = client.post(
        "/staff", json={"user_id": user.id, "position": "Vet"}, headers=seed.admin_headers
    )
    assert again.status_code == 409


def test_staff_management_is_admin_only(client, seed):
    assert client.get("/staff", headers=seed.staff_headers).status_code == 403
    assert client.put(
        f"/staff/{seed.groomer_id}", json={"position": "Head groomer"}, headers=seed.staff_headers
    ).status_code == 403

    response = client.put(
        f"/staff/{seed.groomer_id}", json={"position": "Head groomer"}, headers=seed.admin_headers
    )
    assert response.json()["position"] == "Head groomer"


def test_list_staff_filters(client, seed):
    response = client.get("/staff", params={"specialty": "bath"}, headers=seed.admin_headers)
    assert [s["id"] for s in response.json()["items"]] == [seed.groomer_id]


def test_staff_with_tasks_cannot_be_deleted(client, seed):
    create_task(client, seed, staff_id=seed.groomer_id)
    response = client.delete(f"/staff/{seed.groomer_id}", headers=seed.admin_headers)
    assert response.status_code == 400
    assert "tasks" in response.json()["message"]

    assert client.delete(f"/staff/{seed.second_groomer_id}", headers=seed.admin_headers).status_code == 204


def test_staff_agenda(client, seed):
    client.post(
        "/appointments",
        json={
            "client_id": seed.alice_id,
            "pet_id": seed.rex_id,
            "service_id": seed.bath_id,
            "staff_id": seed.groomer_id,
            "date": future_day().isoformat(),
            "start_time": "10:00",
            "end_time": "11:00",
        },
        headers=seed.staff_headers,
    )
    response = client.get(
        f"/staff/{seed.groomer_id}/appointments",
        params={"date": future_day().isoformat()},
        headers=seed.staff_headers,
    )
    assert response.json()["pagination"]["total"] == 1

    other_day = client.get(
        f"/staff/{seed.groomer_id}/appointments",
        params={"date": future_day(2).isoformat()},
        headers=seed.staff_headers,
    )
    assert other_day.json()["pagination"]["total"] == 0


# ============================================================================
# Tasks
# ============================================================================


def test_tasks_ordered_by_date_time_then_priority(client, seed):
    create_task(client, seed, title="low at 8", priority="low")
    create_task(client, seed, title="high at 8", priority="high")
    create_task(client, seed, title="medium at 8")
    create_task(client, seed, title="early", time="07:30", priority="low")
    create_task(client, seed, title="tomorrow", date=future_day(8).isoformat(), time="06:00", priority="high")

    titles = [t["title"] for t in client.get("/tasks", headers=seed.staff_headers).json()["items"]]
    assert titles == ["early", "high at 8", "medium at 8", "low at 8", "tomorrow"]


def test_task_time_is_normalised(client, seed):
    response = create_task(client, seed, time="9:05")
    assert response.status_code == 400

    response = create_task(client, seed, time="09:05:30")
    assert response.status_code == 201
    assert response.json()["time"] == "09:05"


def test_task_staff_must_exist_and_be_active(client, seed):
    assert create_task(client, seed, staff_id=9999).status_code == 404

    client.put(
        f"/users/{seed.groomer_user_id}", json={"status": "inactive"}, headers=seed.admin_headers
    )
    assert create_task(client, seed, staff_id=seed.groomer_id, headers=seed.admin_headers).status_code == 400


def test_staff_task_list_filters(client, seed):
    create_task(client, seed, staff_id=seed.groomer_id, priority="high")
    create_task(client, seed, staff_id=seed.groomer_id, priority="low", status="completed")
    create_task(client, seed, staff_id=seed.second_groomer_id)

    response = client.get(
        f"/staff/{seed.groomer_id}/tasks", params={"status": "pending"}, headers=seed.staff_headers
    )
    items = response.json()["items"]
    assert len(items) == 1
    assert items[0]["priority"] == "high"


def test_task_update_and_unassign(client, seed):
    task = create_task(client, seed, staff_id=seed.groomer_id).json()
    response = client.put(
        f"/tasks/{task['id']}",
        json={"status": "in_progress", "staff_id": None},
        headers=seed.staff_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"
    assert response.json()["staff_id"] is None

    assert client.delete(f"/tasks/{task['id']}", headers=seed.staff_headers).status_code == 204
    assert client.get(f"/tasks/{task['id']}", headers=seed.staff_headers).status_code == 404
