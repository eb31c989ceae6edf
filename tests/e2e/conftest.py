import httpx
import pytest_asyncio
from asgi_lifespan import LifespanManager
from dependency_injector import providers

from ecommerce.adapters.database import AsyncSQLAlchemy


@pytest_asyncio.fixture(name="container")
async def app_container(tmp_path):
    from ecommerce.entrypoints.app import app, container

    container.db.override(
        providers.Singleton(
            AsyncSQLAlchemy,
            db_uri=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        )
    )
    # 주문 서비스의 재고 호출을 같은 앱으로 돌려보낸다
    container.http_client.override(
        providers.Object(
            httpx.AsyncClient(
                transport=httpx.ASGITransport(app=app),
                base_url="http://inventory",
            )
        )
    )

    yield container

    container.http_client.reset_override()
    container.db.reset_override()


@pytest_asyncio.fixture(name="client")
async def test_client(container) -> httpx.AsyncClient:
    from ecommerce.entrypoints.app import app

    async with LifespanManager(app):
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://localhost:13370",
        ) as client:
            yield client
