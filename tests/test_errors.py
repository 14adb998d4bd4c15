def test_unknown_route_uses_error_envelope(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "code": "NOT_FOUND", "message": "Not Found"}


def test_wrong_method_is_405(client):
    response = client.patch("/health")
    assert response.status_code == 405
    assert response.json()["code"] == "METHOD_NOT_ALLOWED"


def test_validation_errors_list_fields(client, seed):
    response = client.post("/users", json={"name": "X"}, headers=seed.admin_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["code"] == "VALIDATION_ERROR"
    fields = {error["field"] for error in body["errors"]}
    assert {"email", "password"} <= fields


def test_not_found_from_service_layer(client, seed):
    response = client.get("/clients/9999", headers=seed.admin_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
    assert response.json()["message"] == "Client not found"


def test_protected_routes_require_a_token(client):
    response = client.get("/products")
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_wrong_role_is_403(client, seed):
    response = client.get("/users", headers=seed.staff_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


def test_security_headers(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_health_reports_database(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}
