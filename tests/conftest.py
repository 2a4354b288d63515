import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gamestore.api.deps import get_metadata_client
from gamestore.data.database import Base, get_db
from gamestore.data.models import ProductModel
from gamestore.main import create_app


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng, "connect")
    def _fk_on(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(session_factory):
    application = create_app(with_lifespan=False)

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = _get_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def products(db):
    items = [
        ProductModel(id=1, title="The Witcher 3", price=Decimal("50.00"), platforms=["pc", "ps4"],
                     image="witcher.jpg", popularity=900),
        ProductModel(id=2, title="Elden Ring", price=Decimal("30.00"), platforms=["pc"],
                     image="elden.jpg", popularity=1200),
        ProductModel(id=3, title="Witcher 2", price=Decimal("20.00"), platforms=["pc"],
                     image=None, popularity=900),
        ProductModel(id=4, title="XBOX Gamepass 3 meses", price=Decimal("89.90"), platforms=["xbox"],
                     image="gp.jpg", popularity=10, subscription=True),
    ]
    db.add_all(items)
    db.commit()
    return items


def register(client, username="ana", email="ana@example.com", password="secret1", display_name="Ana Souza"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password, "displayName": display_name},
    )


def login(client, identifier="ana", password="secret1"):
    return client.post("/api/auth/login", json={"identifier": identifier, "password": password})


@pytest.fixture
def auth_headers(client):
    assert register(client).status_code == 201
    token = login(client).json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def metadata_override(app):
    def _install(fake):
        app.dependency_overrides[get_metadata_client] = lambda: fake
        return fake
    return _install
