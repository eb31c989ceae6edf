from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ecommerce.domain import model


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BatchRequest(CamelModel):
    product_id: int
    product_name: str
    quantity: int
    expiry_date: date


class InventoryUpdateRequest(CamelModel):
    product_id: int
    quantity_to_reduce: int
    batch_ids: str


class BatchResponse(CamelModel):
    batch_id: int
    quantity: int
    expiry_date: date


class InventoryResponse(CamelModel):
    product_id: int
    product_name: str
    batches: List[BatchResponse]
    total_quantity: int

    @classmethod
    def from_domain(cls, inventory: model.ProductInventory) -> "InventoryResponse":
        return cls(
            product_id=inventory.product_id,
            product_name=inventory.product_name,
            batches=[
                BatchResponse(
                    batch_id=batch.batch_id,
                    quantity=batch.quantity,
                    expiry_date=batch.expiry_date,
                )
                for batch in inventory.batches
            ],
            total_quantity=inventory.total_quantity,
        )


class OrderRequest(CamelModel):
    product_id: int
    quantity: int


class OrderResponse(CamelModel):
    order_id: int
    product_id: int
    product_name: str
    quantity: int
    status: model.OrderStatus
    reserved_from_batch_ids: List[int]
    message: str


class OrderView(CamelModel):
    order_id: int
    product_id: int
    product_name: str
    quantity: int
    status: model.OrderStatus
    order_date: date
    reserved_batch_ids: List[int]

    @classmethod
    def from_domain(cls, order: model.Order) -> "OrderView":
        return cls(
            order_id=order.order_id,
            product_id=order.product_id,
            product_name=order.product_name,
            quantity=order.quantity,
            status=order.status,
            order_date=order.order_date,
            reserved_batch_ids=order.batch_ids,
        )
