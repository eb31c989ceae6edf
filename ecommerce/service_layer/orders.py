from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, TYPE_CHECKING

from ecommerce.adapters import inventory_client
from ecommerce.domain import allocation, model

if TYPE_CHECKING:
    from . import unit_of_work


logger = logging.getLogger(__name__)

ORDER_PLACED_MESSAGE = "Order placed. Inventory reserved."


class InvalidOrderRequest(Exception):
    ...


class InsufficientInventory(InvalidOrderRequest):
    ...


@dataclass
class PlacedOrder:
    order: model.Order
    reserved_from_batch_ids: List[int]
    message: str = ORDER_PLACED_MESSAGE


async def place_order(
        product_id: int,
        quantity: int,
        uow: unit_of_work.AbstractUnitOfWork,
        inventory: inventory_client.AbstractInventoryClient,
        today: Optional[date] = None,
) -> PlacedOrder:
    """ 재고를 확인하고 주문을 저장한 뒤 재고 차감을 요청한다.

    주문 저장과 재고 차감은 하나의 트랜잭션이 아니다. 차감 호출이 실패해도
    이미 저장된 주문은 되돌리지 않고 InventoryUnavailable 이 그대로 올라간다.

    """
    logger.info(f'Placing order for product {product_id} with quantity {quantity}')

    if quantity <= 0:
        raise InvalidOrderRequest(f'Invalid quantity {quantity} for product {product_id}')

    snapshot = await inventory.get_inventory(product_id)
    if snapshot.total_quantity < quantity:
        logger.warning(
            f'Insufficient inventory for product {product_id}. '
            f'Required: {quantity}, Available: {snapshot.total_quantity}'
        )
        raise InsufficientInventory(f'Insufficient inventory for product {product_id}')

    # 위에서 받아온 스냅샷으로 계획을 세운다. 다시 조회하지 않는다.
    reserved = allocation.plan_reservation(snapshot.batches, quantity)
    if not reserved:
        logger.warning(f'Failed to reserve batches for product {product_id}')
        raise InvalidOrderRequest(f'Failed to reserve inventory for product {product_id}')

    async with uow:
        order = model.Order.place(
            product_id=product_id,
            product_name=snapshot.product_name,
            quantity=quantity,
            batch_ids=reserved,
            today=today,
        )
        await uow.orders.add(order)
        await uow.commit()

    logger.info(f'Order placed successfully with id {order.order_id}')

    await inventory.update_inventory(product_id, quantity, reserved)

    return PlacedOrder(order=order, reserved_from_batch_ids=reserved)


async def get_order(
        order_id: int,
        uow: unit_of_work.AbstractUnitOfWork,
) -> Optional[model.Order]:
    async with uow:
        order = await uow.orders.get(order_id)
        return None if order is None else _detached(order)


async def list_orders(
        uow: unit_of_work.AbstractUnitOfWork,
        product_id: Optional[int] = None,
) -> List[model.Order]:
    async with uow:
        if product_id is None:
            results = await uow.orders.list()
        else:
            results = await uow.orders.list_by_product(product_id)
        return [_detached(order) for order in results]


def _detached(order: model.Order) -> model.Order:
    # uow 가 끝나면 세션에 붙은 인스턴스는 expire 된다. 필드를 복사한 사본을 돌려준다.
    return dataclasses.replace(order)
