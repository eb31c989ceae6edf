from sqlalchemy.orm import registry

from sqlalchemy import (
    Column,
    Date,
    Enum,
    Integer,
    String,
    Table,
)

from ecommerce.domain import model


mapper_registry = registry()
metadata = mapper_registry.metadata

inventory_batches = Table(
    "inventory_batch",
    metadata,
    Column("batch_id", Integer, primary_key=True, autoincrement=True),
    Column("product_id", Integer, nullable=False, index=True),
    Column("product_name", String(255), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("expiry_date", Date, nullable=False),
)

orders = Table(
    "orders",
    metadata,
    Column("order_id", Integer, primary_key=True, autoincrement=True),
    Column("product_id", Integer, nullable=False, index=True),
    Column("product_name", String(255), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column(
        "status",
        Enum(model.OrderStatus, native_enum=False, length=20),
        nullable=False,
    ),
    Column("order_date", Date, nullable=False),
    # 배치 테이블과 FK 로 묶지 않는다. 주문 시점의 스냅샷일 뿐이다.
    Column("reserved_batch_ids", String(1024), nullable=False, server_default=""),
)


def start_mappers():
    if mapper_registry.mappers:
        return

    mapper_registry.map_imperatively(model.Batch, inventory_batches)
    mapper_registry.map_imperatively(model.Order, orders)
