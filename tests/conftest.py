import os
import tempfile
from typing import Generator

# Keep the app's module-level engine and upload dir away from the working tree
os.environ.setdefault("CAFEPOS_DATABASE_URL", "sqlite://")
os.environ.setdefault("CAFEPOS_PUBLIC_DIR", tempfile.mkdtemp(prefix="cafepos-public-"))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cafepos import config
from cafepos.db import init_schema, seed_admin
from cafepos.main import app, get_db, get_settings

ADMIN_USERNAME = "Admin"
ADMIN_PASSWORD = "1722"


@pytest.fixture(scope="function")
def db_session() -> Generator:
    # Use in-memory SQLite with a single connection
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    init_schema(engine)

    db = TestingSessionLocal()
    seed_admin(db, ADMIN_USERNAME, ADMIN_PASSWORD)
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture(scope="function")
def settings(tmp_path) -> config.Settings:
    public_dir = tmp_path / "public"
    pages_dir = tmp_path / "pages"
    public_dir.mkdir()
    pages_dir.mkdir()
    return config.state._replace(public_dir=str(public_dir), pages_dir=str(pages_dir))


@pytest.fixture(scope="function")
def client(db_session, settings):
    # Override dependencies to use the same session and temp directories
    def override_get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_token(client) -> str:
    r = client.post("/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return r.json()["token"]


@pytest.fixture
def auth_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}
