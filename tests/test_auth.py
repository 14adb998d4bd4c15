import asyncio
import re
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
import redis
from fastapi import HTTPException

from app.models import PasswordResetToken
from app.rate_limiter import check_rate_limit, rate_limit_dependency
from app.security_utils import create_jwt_token, hash_token
from conftest import PASSWORD, make_user


def login(client, email, password=PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})


def reset_token_from_email(email_mock) -> str:
    content = email_mock.await_args.kwargs["mjml_content"]
    return re.search(r"reset-password\?token=([A-Za-z0-9_\-]+)", content).group(1)


def test_login_returns_token_usable_on_me(client, seed):
    response = login(client, "alice@petshop.test")
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "alice@petshop.test"
    assert body["token_type"] == "bearer"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == seed.alice_user_id
    assert me.json()["last_access"] is not None


def test_login_email_is_case_insensitive(client, seed):
    assert login(client, "Alice@PetShop.test").status_code == 200


@pytest.mark.parametrize(
    "email, password",
    [("alice@petshop.test", "wrong-password"), ("nobody@petshop.test", PASSWORD)],
)
def test_bad_credentials_are_401(client, seed, email, password):
    response = login(client, email, password)
    assert response.status_code == 401
    assert response.json()["status"] == "error"


def test_inactive_user_cannot_login(client, db, seed):
    make_user(db, "Old Account", "old@petshop.test", status="inactive")
    assert login(client, "old@petshop.test").status_code == 401


def test_missing_and_malformed_tokens(client, seed):
    assert client.get("/auth/me").status_code == 401

    malformed = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert malformed.status_code == 401
    assert malformed.json()["code"] == "INVALID_TOKEN"

    expired = create_jwt_token({"sub": str(seed.alice_user_id)}, expires_delta=timedelta(minutes=-1))
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401


def test_token_of_deactivated_user_is_rejected(client, seed):
    client.put(f"/users/{seed.bob_user_id}", json={"status": "inactive"}, headers=seed.admin_headers)
    assert client.get("/auth/me", headers=seed.bob_headers).status_code == 401


def test_password_reset_flow(client, db, seed, email_mock):
    response = client.post("/auth/forgot-password", json={"email": "alice@petshop.test"})
    assert response.status_code == 200
    assert email_mock.await_count == 1
    token = reset_token_from_email(email_mock)

    stored = db.query(PasswordResetToken).one()
    assert stored.token == hash_token(token)
    assert stored.token != token

    reset = client.post("/auth/reset-password", json={"token": token, "password": "brand-new"})
    assert reset.status_code == 200
    assert login(client, "alice@petshop.test", "brand-new").status_code == 200
    assert login(client, "alice@petshop.test").status_code == 401

    reused = client.post("/auth/reset-password", json={"token": token, "password": "another1"})
    assert reused.status_code == 400
    assert reused.json()["code"] == "INVALID_TOKEN"


def test_forgot_password_unknown_email(client, seed, email_mock):
    response = client.post("/auth/forgot-password", json={"email": "ghost@petshop.test"})
    assert response.status_code == 404
    assert email_mock.await_count == 0


def test_expired_reset_token_is_rejected(client, db, seed, email_mock):
    client.post("/auth/forgot-password", json={"email": "alice@petshop.test"})
    token = reset_token_from_email(email_mock)

    stored = db.query(PasswordResetToken).one()
    stored.expires_at = datetime.utcnow() - timedelta(minutes=1)
    db.commit()

    response = client.post("/auth/reset-password", json={"token": token, "password": "brand-new"})
    assert response.status_code == 400


def test_reset_password_requires_six_characters(client, seed):
    response = client.post("/auth/reset-password", json={"token": "abc", "password": "12345"})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_email_failure_does_not_fail_the_request(client, seed, email_mock):
    email_mock.side_effect = RuntimeError("smtp down")
    response = client.post("/auth/forgot-password", json={"email": "alice@petshop.test"})
    assert response.status_code == 200


# ============================================================================
# Rate limiting
# ============================================================================


def fake_redis(count: int, ttl: int):
    client = MagicMock()
    client.pipeline.return_value.execute.return_value = [count, ttl]
    return client


def test_first_hit_starts_the_window():
    client = fake_redis(count=1, ttl=-1)
    allowed, count, ttl = check_rate_limit("login:1.2.3.4", 10, 60, client)
    assert allowed and count == 1 and ttl == 60
    client.expire.assert_called_once_with("login:1.2.3.4", 60)


def test_hits_over_the_limit_are_denied():
    client = fake_redis(count=11, ttl=42)
    allowed, _, ttl = check_rate_limit("login:1.2.3.4", 10, 60, client)
    assert not allowed
    assert ttl == 42
    client.expire.assert_not_called()


def make_request(ip="10.0.0.1"):
    request = MagicMock()
    request.headers = {}
    request.client.host = ip
    return request


async def _call_limiter(monkeypatch, redis_client):
    monkeypatch.setattr("app.rate_limiter.get_redis_client", lambda: redis_client)
    await rate_limit_dependency(make_request(), limit=10, window_seconds=60, key_prefix="login")


def test_limiter_dependency_returns_429(monkeypatch):
    with pytest.raises(HTTPException) as exc:
        asyncio.run(_call_limiter(monkeypatch, fake_redis(count=11, ttl=30)))
    assert exc.value.status_code == 429
    assert exc.value.headers["Retry-After"] == "30"


def test_limiter_fails_closed_when_redis_is_down(monkeypatch):
    broken = MagicMock()
    broken.pipeline.return_value.execute.side_effect = redis.ConnectionError("down")
    with pytest.raises(HTTPException) as exc:
        asyncio.run(_call_limiter(monkeypatch, broken))
    assert exc.value.status_code == 503
