# tests/conftest.py

"""Shared fixtures: in-memory database, app with overridden session, admin token."""

import os
import tempfile

# Configure before config.Settings is first imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="storefront-uploads-")
os.environ["SECRET_KEY"] = "test-secret"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_db, init_db
from main import create_app
from models.product import Product
from models.users import User
from utils.hashing import get_password_hash
from utils.tokenJWT import create_access_token

ADMIN_EMAIL = "owner@akwholesale.in"
ADMIN_PASSWORD = "fresh-veg-123"


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory):
    app = create_app(lifespan_handler=None)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_user(db_session) -> User:
    user = User(email=ADMIN_EMAIL, password_hash=get_password_hash(ADMIN_PASSWORD), role="admin")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin_user) -> dict:
    token = create_access_token({"sub": admin_user.email, "role": admin_user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def catalog(db_session) -> dict:
    """Three products keyed by short name; garlic is sold out."""
    rows = {
        "onion": Product(name="Red Onion", slug="red-onion", price_per_kg=40, unit="kg",
                         category="Vegetables", images=["/uploads/onion.jpg"]),
        "tomato": Product(name="Tomato", slug="tomato", price_per_kg=30, unit="kg",
                          category="Vegetables", images=[]),
        "garlic": Product(name="Garlic", slug="garlic", price_per_kg=180, unit="kg",
                          category="Spices", in_stock=False, stock_quantity=0, low_stock_threshold=5),
    }
    db_session.add_all(rows.values())
    db_session.commit()
    for row in rows.values():
        db_session.refresh(row)
    return {key: row.id for key, row in rows.items()}
