import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ecommerce.adapters.orm import metadata, start_mappers


@pytest.fixture(scope="session", autouse=True)
def mapper():
    start_mappers()


# for in-memory test

@pytest_asyncio.fixture
async def in_memory_db():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def create_db(in_memory_db):
    async with in_memory_db.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield
    async with in_memory_db.begin() as conn:
        await conn.run_sync(metadata.drop_all)


@pytest.fixture
def sqlite_session_factory(in_memory_db, create_db):
    yield async_sessionmaker(
        bind=in_memory_db,
        expire_on_commit=False,
        class_=AsyncSession,
    )
