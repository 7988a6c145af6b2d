import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from bookcircle.app import create_app
from bookcircle.database import Base, enable_sqlite_foreign_keys, get_session
import bookcircle.models  # noqa: F401

TEST_DB_URL = "sqlite+aiosqlite://"  # in-memory

engine = create_async_engine(TEST_DB_URL, echo=False)
enable_sqlite_foreign_keys(engine.sync_engine)
TestSession = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
async def setup_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def session():
    async with TestSession() as s:
        yield s


@pytest.fixture
async def client():
    app = create_app()

    async def override_session():
        async with TestSession() as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def login(client):
    """Register a user and return (user_id, auth headers)."""

    async def _login(email="reader@example.com", password="secret123"):
        resp = await client.post("/auth/register", json={"email": email, "password": password})
        assert resp.status_code == 201
        resp = await client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200
        data = resp.json()
        return data["userId"], {"Authorization": f"Bearer {data['token']}"}

    return _login
