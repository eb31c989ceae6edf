import httpx
from dependency_injector import containers, providers

from ecommerce.config import Settings
from ecommerce.adapters.inventory_client import HttpInventoryClient
from ecommerce.adapters.database import AsyncSQLAlchemy
from ecommerce.service_layer import unit_of_work


class Container(containers.DeclarativeContainer):
    config = providers.Configuration()
    config.from_pydantic(Settings())

    wiring_config = containers.WiringConfiguration(
        modules=[
            "ecommerce.entrypoints.inventory",
            "ecommerce.entrypoints.orders",
        ]
    )

    db = providers.Singleton(
        AsyncSQLAlchemy,
        db_uri=config.data.DB_URI,
    )

    uow = providers.Factory(
        unit_of_work.SqlAlchemyUnitOfWork,
        session_factory=db.provided.session_factory,
    )

    http_client = providers.Singleton(
        httpx.AsyncClient,
        base_url=config.inventory.SERVICE_URL,
        timeout=config.inventory.TIMEOUT,
    )

    inventory_client = providers.Factory(
        HttpInventoryClient,
        client=http_client,
    )
