import os

# Must be set before the app modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ENVIRONMENT"] = "test"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.domain.auth.router import rate_limit_login, rate_limit_password_reset
from app.main import app
from app.models import (
    Client,
    Pet,
    Product,
    ProductCategory,
    Service,
    ServiceCategory,
    Staff,
    Supplier,
    User,
)
from app.security_utils import create_access_token, hash_password_bcrypt

PASSWORD = "secret123"
PASSWORD_HASH = hash_password_bcrypt(PASSWORD)


def future_day(days: int = 7) -> date:
    return date.today() + timedelta(days=days)


def auth_header(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine, "connect")
    def enable_foreign_keys(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def email_mock():
    with patch("app.email_service.send_email", new_callable=AsyncMock) as mock:
        mock.return_value = {"id": "test-message"}
        yield mock


@pytest.fixture
def client(session_factory, email_mock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[rate_limit_login] = lambda: None
    app.dependency_overrides[rate_limit_password_reset] = lambda: None

    # No context manager: the lifespan (create_all on the real engine, Redis ping) is skipped
    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()


def make_user(db, name: str, email: str, role: str = "client", status: str = "active") -> User:
    user = User(name=name, email=email, password_hash=PASSWORD_HASH, role=role, status=status)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def seed(db):
    """
    A small shop: one admin, one groomer, two clients with a pet each, a bath
    service and a product with barcode "123" and five units in stock.

    Only ids are exposed so tests always read fresh state through the API or `db`.
    """
    admin = make_user(db, "Ana Admin", "admin@petshop.test", role="admin")
    groomer_user = make_user(db, "Gabriel Groomer", "groomer@petshop.test", role="staff")
    second_groomer_user = make_user(db, "Gina Groomer", "gina@petshop.test", role="staff")
    alice_user = make_user(db, "Alice Tutor", "alice@petshop.test")
    bob_user = make_user(db, "Bob Tutor", "bob@petshop.test")

    groomer = Staff(user_id=groomer_user.id, position="Groomer", specialty="Bath and grooming")
    second_groomer = Staff(user_id=second_groomer_user.id, position="Groomer")
    alice = Client(user_id=alice_user.id, cpf="111.111.111-11", city="Campinas", state="SP")
    bob = Client(user_id=bob_user.id, cpf="222.222.222-22", city="Santos", state="SP")
    db.add_all([groomer, second_groomer, alice, bob])
    db.commit()

    rex = Pet(client_id=alice.id, name="Rex", species="dog", breed="Beagle", sex="male")
    mia = Pet(client_id=bob.id, name="Mia", species="cat", sex="female")
    grooming = ServiceCategory(name="Grooming")
    accessories = ProductCategory(name="Accessories")
    supplier = Supplier(name="Pet Supplies Ltda", cnpj="12.345.678/0001-90")
    db.add_all([rex, mia, grooming, accessories, supplier])
    db.commit()

    bath = Service(
        name="Bath", price=Decimal("50.00"), duration=60, category_id=grooming.id, status="active"
    )
    collar = Product(
        name="Collar",
        price=Decimal("10.00"),
        cost_price=Decimal("4.00"),
        stock=5,
        min_stock=2,
        category_id=accessories.id,
        supplier_id=supplier.id,
        barcode="123",
        status="active",
    )
    leash = Product(
        name="Leash",
        price=Decimal("25.50"),
        stock=20,
        min_stock=3,
        category_id=accessories.id,
        barcode="456",
        status="active",
    )
    db.add_all([bath, collar, leash])
    db.commit()

    return SimpleNamespace(
        admin_id=admin.id,
        groomer_user_id=groomer_user.id,
        groomer_id=groomer.id,
        second_groomer_id=second_groomer.id,
        alice_user_id=alice_user.id,
        alice_id=alice.id,
        bob_user_id=bob_user.id,
        bob_id=bob.id,
        rex_id=rex.id,
        mia_id=mia.id,
        grooming_id=grooming.id,
        bath_id=bath.id,
        accessories_id=accessories.id,
        supplier_id=supplier.id,
        collar_id=collar.id,
        leash_id=leash.id,
        admin_headers=auth_header(admin.id),
        staff_headers=auth_header(groomer_user.id),
        alice_headers=auth_header(alice_user.id),
        bob_headers=auth_header(bob_user.id),
    )


def product_stock(db, product_id: int) -> int:
    db.expire_all()
    return db.get(Product, product_id).stock
