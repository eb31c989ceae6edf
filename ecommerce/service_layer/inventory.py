from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, TYPE_CHECKING

from ecommerce.domain import allocation, model
from ecommerce.domain.allocation import StrategyType

if TYPE_CHECKING:
    from . import unit_of_work


logger = logging.getLogger(__name__)


class InvalidQuantity(Exception):
    ...


class InvalidBatchIds(Exception):
    ...


def parse_batch_ids(raw: str) -> List[int]:
    try:
        return [int(ref.strip()) for ref in raw.split(",")]
    except ValueError as ex:
        raise InvalidBatchIds(f'Invalid batch ids {raw!r}') from ex


async def add_batch(
        product_id: int,
        product_name: str,
        quantity: int,
        expiry_date: date,
        uow: unit_of_work.AbstractUnitOfWork,
) -> int:
    if quantity < 0:
        raise InvalidQuantity(f'Invalid quantity {quantity} for product {product_id}')

    async with uow:
        batch = model.Batch(product_id, product_name, quantity, expiry_date)
        await uow.batches.add(batch)
        await uow.commit()

    logger.info(f'Added batch {batch.batch_id} for product {product_id}')
    return batch.batch_id


async def get_inventory(
        product_id: int,
        uow: unit_of_work.AbstractUnitOfWork,
        strategy: StrategyType = StrategyType.DEFAULT,
        today: Optional[date] = None,
) -> model.ProductInventory:
    logger.info(f'Fetching inventory for product {product_id}')

    inventory_strategy = allocation.get_strategy(strategy)

    # uow 를 빠져나가면 rollback 으로 인스턴스가 expire 되므로 안에서 다 읽어둔다.
    async with uow:
        batches = await uow.batches.list_by_product(product_id)
        if not batches:
            logger.warning(f'No inventory found for product {product_id}')
            return model.ProductInventory.unknown(product_id)

        available = inventory_strategy.available(batches, today)

        return model.ProductInventory(
            product_id=product_id,
            product_name=batches[0].product_name,
            batches=[
                model.BatchStock(b.batch_id, b.quantity, b.expiry_date)
                for b in available
            ],
            total_quantity=inventory_strategy.total_quantity(available),
        )


async def check_availability(
        product_id: int,
        required_quantity: int,
        uow: unit_of_work.AbstractUnitOfWork,
        today: Optional[date] = None,
) -> bool:
    inventory_strategy = allocation.get_strategy(StrategyType.DEFAULT)

    async with uow:
        batches = await uow.batches.list_by_product(product_id)
        total = inventory_strategy.total_quantity(
            inventory_strategy.available(batches, today)
        )

    sufficient = total >= required_quantity
    logger.info(
        f'Checking inventory for product {product_id}. '
        f'Required: {required_quantity}, Available: {total}, Sufficient: {sufficient}'
    )
    return sufficient


async def reserve_batches(
        product_id: int,
        required_quantity: int,
        uow: unit_of_work.AbstractUnitOfWork,
) -> List[int]:
    # 만료일 필터 없이 모든 배치를 대상으로 계획만 세운다. 수량을 잡아두지 않는다.
    async with uow:
        batches = await uow.batches.list_by_product(product_id)
        reserved = allocation.plan_reservation(batches, required_quantity)

    logger.info(
        f'Reserved batches {reserved} for product {product_id} '
        f'with quantity {required_quantity}'
    )
    return reserved


async def reduce_inventory(
        product_id: int,
        quantity_to_reduce: int,
        batch_ids: List[int],
        uow: unit_of_work.AbstractUnitOfWork,
) -> bool:
    """ 주어진 배치 순서대로 수량을 차감한다.

    모르는 배치 id 는 경고만 남기고 건너뛴다. 다 차감하지 못하면 False 를 돌려주지만
    이미 차감한 배치는 그대로 commit 된다 (롤백 없음).

    """
    if quantity_to_reduce < 0:
        raise InvalidQuantity(
            f'Invalid quantity {quantity_to_reduce} to reduce for product {product_id}'
        )

    logger.info(
        f'Updating inventory for product {product_id} '
        f'with quantity {quantity_to_reduce}'
    )
    remaining = quantity_to_reduce

    async with uow:
        for batch_id in batch_ids:
            batch = await uow.batches.get(batch_id)
            if batch is None:
                logger.warning(f'Batch {batch_id} not found')
                continue

            remaining = batch.reduce(remaining)
            if remaining == 0:
                logger.info(f'Reduced batch {batch_id}, order fully covered')
                break
            logger.info(
                f'Exhausted batch {batch_id}, remaining quantity to reduce: {remaining}'
            )

        await uow.commit()

    if remaining > 0:
        logger.warning(f'Could not reduce all quantity. Remaining: {remaining}')
        return False

    return True
