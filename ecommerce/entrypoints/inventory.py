import logging

from dependency_injector.wiring import inject, Provide
from fastapi import APIRouter, Depends, HTTPException, status

from ecommerce.container import Container
from ecommerce.domain.allocation import StrategyType
from ecommerce.entrypoints import (
    BatchRequest,
    InventoryResponse,
    InventoryUpdateRequest,
)
from ecommerce.service_layer import inventory, unit_of_work


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["Inventory Service"])


@router.get(
    "/{product_id}",
    response_model=InventoryResponse,
)
@inject
async def get_inventory_endpoint(
        product_id: int,
        strategy: StrategyType = StrategyType.DEFAULT,
        uow: unit_of_work.AbstractUnitOfWork = Depends(Provide[Container.uow]),
):
    logger.info(f'GET request for inventory of product {product_id}')
    result = await inventory.get_inventory(product_id, uow, strategy=strategy)
    return InventoryResponse.from_domain(result)


@router.post(
    "/update",
    status_code=status.HTTP_200_OK,
)
@inject
async def update_inventory_endpoint(
        update: InventoryUpdateRequest,
        uow: unit_of_work.AbstractUnitOfWork = Depends(Provide[Container.uow]),
):
    logger.info(f'POST request to update inventory for product {update.product_id}')

    try:
        batch_ids = inventory.parse_batch_ids(update.batch_ids)
        updated = await inventory.reduce_inventory(
            update.product_id,
            update.quantity_to_reduce,
            batch_ids,
            uow,
        )

    except (inventory.InvalidBatchIds, inventory.InvalidQuantity) as e:
        raise HTTPException(
            detail=str(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        ) from e

    if not updated:
        raise HTTPException(
            detail="Failed to update inventory - insufficient quantity in specified batches",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return {"message": "Inventory updated successfully"}


@router.get(
    "/check/{product_id}/{quantity}",
    response_model=bool,
)
@inject
async def check_availability_endpoint(
        product_id: int,
        quantity: int,
        uow: unit_of_work.AbstractUnitOfWork = Depends(Provide[Container.uow]),
):
    logger.info(f'Checking availability for product {product_id} with quantity {quantity}')
    return await inventory.check_availability(product_id, quantity, uow)


@router.post(
    "/batches",
    status_code=status.HTTP_201_CREATED,
)
@inject
async def add_batch_endpoint(
        batch: BatchRequest,
        uow: unit_of_work.AbstractUnitOfWork = Depends(Provide[Container.uow]),
):
    try:
        batch_id = await inventory.add_batch(
            batch.product_id,
            batch.product_name,
            batch.quantity,
            batch.expiry_date,
            uow,
        )

    except inventory.InvalidQuantity as e:
        raise HTTPException(
            detail=str(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        ) from e

    return {"message": f"Batch added: {batch_id}", "batchId": batch_id}
