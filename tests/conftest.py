import os
import tempfile

# Настройки читаются при импорте приложения
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="blog-api-uploads-")

import uuid  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import blog_api.db.models  # noqa: E402,F401
from blog_api.core.db import Base, get_db  # noqa: E402
from blog_api.db.repositories import UserRepository  # noqa: E402
from blog_api.domains.identity.entities import User, ROLE_ADMIN  # noqa: E402
from blog_api.domains.identity.services import IdentityService  # noqa: E402
from blog_api.main import app  # noqa: E402

PASSWORD = "password123"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def register(client: AsyncClient, name: str, email: str) -> dict:
    response = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": PASSWORD},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def author(client):
    return await register(client, "Jane Author", "jane@example.com")


@pytest.fixture
def author_headers(author):
    return bearer(author["token"])


@pytest.fixture
async def other_headers(client):
    other = await register(client, "Other Reader", "other@example.com")
    return bearer(other["token"])


@pytest.fixture
async def admin_headers(session_factory):
    async with session_factory() as session:
        user = await UserRepository(session).create(
            User.create_user("Admin User", "admin@example.com", PASSWORD, role=ROLE_ADMIN)
        )
        token = IdentityService(session).issue_token(user)
    return bearer(token)


async def create_category(client: AsyncClient, headers: dict, name: str, **fields) -> dict:
    response = await client.post("/api/categories", json={"name": name, **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
async def category(client, admin_headers):
    return await create_category(client, admin_headers, "Web Development", color="#F59E0B")


async def create_post(client: AsyncClient, headers: dict, category_id: str, title: str,
                      content: str = "Some content", **fields) -> dict:
    response = await client.post(
        "/api/posts",
        data={"title": title, "content": content, "category": category_id, **fields},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def random_id() -> str:
    return str(uuid.uuid4())
