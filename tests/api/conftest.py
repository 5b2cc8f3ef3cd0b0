"""Fixtures for API tests: a throwaway SQLite database per test."""

import asyncio
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import app.domain  # noqa: F401
from app.db.base import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.services.email_delivery import EmailDeliveryService, get_email_delivery
from app.services.email_generator import EmailGenerator, get_email_generator


async def _create_schema(url: str) -> None:
    engine = create_async_engine(url, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


@pytest.fixture
def database_url(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    asyncio.run(_create_schema(url))
    return url


@pytest.fixture
def transport():
    """Stand-in for resend.Emails.send."""
    return MagicMock(return_value={"id": "msg_123"})


@pytest.fixture
def delivery():
    """Email delivery without an API key: workflow steps are logged, not sent."""
    return EmailDeliveryService(api_key="", send_delay_ms=0)


@pytest.fixture
def generator():
    """Email generator without an OpenAI client: drafts come from templates."""
    return EmailGenerator(client=None)


@pytest.fixture
def client(database_url, delivery, generator):
    """Create a test client bound to the per-test database."""
    engine = create_async_engine(database_url, poolclass=NullPool)
    enable_sqlite_foreign_keys(engine)
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_delivery] = lambda: delivery
    app.dependency_overrides[get_email_generator] = lambda: generator
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def category(client):
    """A Florist category with a $4,000 budget."""
    response = client.post("/api/v1/categories", json={"name": "Florist", "budget": 4000})
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def vendor(client, category):
    """An uncontacted vendor in the Florist category."""
    response = client.post(
        "/api/v1/vendors",
        json={
            "categoryId": category["id"],
            "name": "Bloom & Petal",
            "contactEmail": "hello@bloomandpetal.com",
            "price": 3500,
        },
    )
    assert response.status_code == 201
    return response.json()["data"]
