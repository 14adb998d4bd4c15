from datetime import date, timedelta

from app.models import Appointment
from conftest import future_day


def book(client, seed, start, end, headers=None, **overrides):
    body = {
        "client_id": seed.alice_id,
        "pet_id": seed.rex_id,
        "service_id": seed.bath_id,
        "staff_id": seed.groomer_id,
        "date": future_day().isoformat(),
        "start_time": start,
        "end_time": end,
    }
    body.update(overrides)
    return client.post("/appointments", json=body, headers=headers or seed.staff_headers)


def test_book_appointment(client, seed, email_mock):
    response = book(client, seed, "14:00", "15:00")
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "scheduled"
    assert data["start_time"] == "14:00:00"
    assert data["staff_id"] == seed.groomer_id

    # confirmation email goes out after the response
    assert email_mock.await_count == 1
    assert email_mock.await_args.kwargs["to"] == "alice@petshop.test"


def test_failed_email_does_not_undo_booking(client, db, seed, email_mock):
    email_mock.side_effect = RuntimeError("smtp down")
    response = book(client, seed, "14:00", "15:00")
    assert response.status_code == 201
    assert email_mock.await_count == 1

    db.expire_all()
    assert db.get(Appointment, response.json()["id"]) is not None


def test_touching_slots_do_not_conflict(client, seed):
    assert book(client, seed, "14:00", "15:00").status_code == 201
    assert book(client, seed, "15:00", "16:00").status_code == 201
    assert book(client, seed, "13:00", "14:00").status_code == 201


def test_overlapping_slot_is_rejected(client, seed):
    assert book(client, seed, "14:00", "15:00").status_code == 201

    response = book(client, seed, "14:30", "15:30")
    assert response.status_code == 409
    assert response.json()["code"] == "SCHEDULE_CONFLICT"


def test_overlap_only_counts_for_the_same_staff_member(client, seed):
    assert book(client, seed, "14:00", "15:00").status_code == 201
    response = book(client, seed, "14:30", "15:30", staff_id=seed.second_groomer_id)
    assert response.status_code == 201


def test_overlap_only_counts_on_the_same_day(client, seed):
    assert book(client, seed, "14:00", "15:00").status_code == 201
    response = book(client, seed, "14:00", "15:00", date=future_day(8).isoformat())
    assert response.status_code == 201


def test_cancelled_appointment_frees_the_slot(client, seed):
    first = book(client, seed, "14:00", "15:00").json()
    response = client.put(
        f"/appointments/{first['id']}", json={"status": "cancelled"}, headers=seed.staff_headers
    )
    assert response.status_code == 200

    assert book(client, seed, "14:30", "15:30").status_code == 201


def test_completed_appointment_does_not_block(client, seed):
    assert book(client, seed, "10:00", "11:00", status="completed").status_code == 201
    assert book(client, seed, "10:00", "11:00").status_code == 201


def test_unassigned_appointments_never_conflict(client, seed):
    assert book(client, seed, "14:00", "15:00", staff_id=None).status_code == 201
    assert book(client, seed, "14:00", "15:00", staff_id=None).status_code == 201


def test_start_must_be_before_end(client, seed):
    response = book(client, seed, "15:00", "14:00")
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_TIME_RANGE"

    assert book(client, seed, "15:00", "15:00").status_code == 400


def test_past_date_is_rejected(client, seed):
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    response = book(client, seed, "10:00", "11:00", date=yesterday)
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_DATE"


def test_malformed_time_is_a_validation_error(client, seed):
    response = book(client, seed, "25:00", "26:00")
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_pet_must_belong_to_client(client, seed):
    response = book(client, seed, "10:00", "11:00", pet_id=seed.mia_id)
    assert response.status_code == 400


def test_missing_references_are_not_found(client, seed):
    assert book(client, seed, "10:00", "11:00", service_id=9999).status_code == 404
    assert book(client, seed, "10:00", "11:00", staff_id=9999).status_code == 404
    assert book(client, seed, "10:00", "11:00", client_id=9999).status_code == 404


def test_reschedule_into_a_taken_slot_conflicts(client, seed):
    book(client, seed, "09:00", "10:00")
    second = book(client, seed, "11:00", "12:00").json()

    response = client.put(
        f"/appointments/{second['id']}",
        json={"start_time": "09:30", "end_time": "10:30"},
        headers=seed.staff_headers,
    )
    assert response.status_code == 409


def test_reschedule_within_own_slot_is_allowed(client, seed):
    appointment = book(client, seed, "09:00", "10:00").json()
    response = client.put(
        f"/appointments/{appointment['id']}",
        json={"start_time": "09:30", "end_time": "10:30"},
        headers=seed.staff_headers,
    )
    assert response.status_code == 200
    assert response.json()["start_time"] == "09:30:00"


def test_reopening_a_cancelled_appointment_checks_the_slot(client, seed):
    first = book(client, seed, "14:00", "15:00").json()
    client.put(f"/appointments/{first['id']}", json={"status": "cancelled"}, headers=seed.staff_headers)
    assert book(client, seed, "14:00", "15:00").status_code == 201

    response = client.put(
        f"/appointments/{first['id']}", json={"status": "scheduled"}, headers=seed.staff_headers
    )
    assert response.status_code == 409


def test_status_change_to_completed_sends_email(client, seed, email_mock):
    appointment = book(client, seed, "14:00", "15:00").json()
    email_mock.reset_mock()

    client.put(
        f"/appointments/{appointment['id']}", json={"status": "completed"}, headers=seed.staff_headers
    )
    assert email_mock.await_count == 1


def test_client_only_sees_own_appointments(client, seed):
    book(client, seed, "09:00", "10:00")
    book(
        client,
        seed,
        "11:00",
        "12:00",
        client_id=seed.bob_id,
        pet_id=seed.mia_id,
    )

    alice_view = client.get("/appointments", headers=seed.alice_headers).json()
    assert alice_view["pagination"]["total"] == 1
    assert alice_view["items"][0]["client_id"] == seed.alice_id

    staff_view = client.get("/appointments", headers=seed.staff_headers).json()
    assert staff_view["pagination"]["total"] == 2


def test_client_cannot_book_for_someone_else(client, seed):
    response = book(
        client,
        seed,
        "09:00",
        "10:00",
        headers=seed.bob_headers,
    )
    assert response.status_code == 403


def test_list_filters_by_date_and_orders_by_time(client, seed):
    book(client, seed, "11:00", "12:00")
    book(client, seed, "09:00", "10:00")
    book(client, seed, "09:00", "10:00", date=future_day(9).isoformat())

    response = client.get(
        "/appointments", params={"date": future_day().isoformat()}, headers=seed.staff_headers
    )
    items = response.json()["items"]
    assert [a["start_time"] for a in items] == ["09:00:00", "11:00:00"]


def test_only_staff_can_delete(client, seed, email_mock):
    appointment = book(client, seed, "09:00", "10:00").json()

    denied = client.delete(f"/appointments/{appointment['id']}", headers=seed.alice_headers)
    assert denied.status_code == 403

    email_mock.reset_mock()
    response = client.delete(f"/appointments/{appointment['id']}", headers=seed.staff_headers)
    assert response.status_code == 204
    assert email_mock.await_count == 1
    assert client.get(f"/appointments/{appointment['id']}", headers=seed.staff_headers).status_code == 404
