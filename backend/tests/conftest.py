import os
import tempfile

# must be set before quiz_app.config is imported
_DB_DIR = tempfile.mkdtemp(prefix="quiz-app-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ["DATABASE_SSL"] = "0"
os.environ["GEMINI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from quiz_app.app import app
from quiz_app.db import Base, engine


async def _reset_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture(scope="session")
def app_client():
    # one lifespan (and one event loop) for the whole run
    with TestClient(app) as c:
        yield c


@pytest.fixture
def client(app_client):
    app_client.portal.call(_reset_tables)
    yield app_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_id(client):
    r = client.post("/api/register", json={"email": "owner@example.com", "password": "secret"})
    assert r.status_code == 201
    return r.json()["user"]["id"]


async def _execute(sql):
    async with engine.begin() as conn:
        await conn.execute(text(sql))


async def _count(table):
    async with engine.connect() as conn:
        res = await conn.execute(text(f"SELECT COUNT(*) FROM {table}"))
        return res.scalar_one()


@pytest.fixture
def run_sql(client):
    """Run a raw statement on the test database inside the app's event loop."""
    return lambda sql: client.portal.call(_execute, sql)


@pytest.fixture
def count_rows(client):
    return lambda table: client.portal.call(_count, table)
