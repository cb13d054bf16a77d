"""Shared fixtures: a throwaway SQLite database per test and an API client bound to it."""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Keep the development-only startup behaviour out of tests
os.environ.setdefault("APP_ENV", "test")

import vendorcomply.domain  # noqa: E402,F401
from vendorcomply.core.config import settings  # noqa: E402
from vendorcomply.db.base import Base, get_db  # noqa: E402
from vendorcomply.domain.enums import PlanTier  # noqa: E402
from vendorcomply.domain.organization import Organization  # noqa: E402
from vendorcomply.main import create_app  # noqa: E402
from tests.factories import ORG_ID  # noqa: E402


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def plan():
    """Plan tier of the test organization; override in a module to exercise ceilings."""
    return PlanTier.PRO_PLUS


@pytest_asyncio.fixture
async def organization(session_factory, plan):
    async with session_factory() as s:
        org = Organization(id=ORG_ID, name="Acme", plan=plan.value)
        s.add(org)
        await s.commit()
    return org


@pytest_asyncio.fixture
async def session(session_factory, organization):
    async with session_factory() as s:
        yield s


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", path)
    return path


@pytest_asyncio.fixture
async def client(session_factory, organization):
    app = create_app()

    async def _get_db():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
