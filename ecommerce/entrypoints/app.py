import logging

from fastapi import FastAPI

from ecommerce.adapters import orm
from ecommerce.config import Settings
from ecommerce.container import Container
from ecommerce.entrypoints import inventory, orders


settings = Settings()

app = FastAPI(
    title=settings.desc.REST_SERVICE_NAME,
    description=settings.desc.REST_SERVICE_DESCRIPTION,
    version=settings.desc.REST_SERVICE_VERSION,
    openapi_url=settings.desc.OPENAPI_URL,
)

container = Container()
container.config.from_pydantic(settings)

app.container = container
app.include_router(inventory.router)
app.include_router(orders.router)


@app.on_event("startup")
async def on_startup():
    logging.basicConfig(
        level=logging.DEBUG if container.config.DEBUG() else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    orm.start_mappers()

    db = container.db()
    await db.connect(echo=container.config.DEBUG())
    await db.create_database()
    db.init_session_factory()


@app.on_event("shutdown")
async def on_shutdown():
    await container.http_client().aclose()
    await container.db().disconnect()
