import logging
from typing import List, Optional

from dependency_injector.wiring import inject, Provide
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ecommerce.adapters import inventory_client
from ecommerce.container import Container
from ecommerce.entrypoints import OrderRequest, OrderResponse, OrderView
from ecommerce.service_layer import orders, unit_of_work


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/order", tags=["Order Service"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=OrderResponse,
)
@inject
async def place_order_endpoint(
        order_request: OrderRequest,
        uow: unit_of_work.AbstractUnitOfWork = Depends(Provide[Container.uow]),
        inventory: inventory_client.AbstractInventoryClient = Depends(
            Provide[Container.inventory_client]
        ),
):
    logger.info(
        f'POST request to place order for product {order_request.product_id} '
        f'with quantity {order_request.quantity}'
    )

    try:
        placed = await orders.place_order(
            order_request.product_id,
            order_request.quantity,
            uow,
            inventory,
        )

    except orders.InvalidOrderRequest as e:
        logger.error(f'Invalid order request: {e}')
        raise HTTPException(
            detail=str(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        ) from e

    except inventory_client.InventoryUnavailable as e:
        raise HTTPException(
            detail=str(e),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ) from e

    return OrderResponse(
        order_id=placed.order.order_id,
        product_id=placed.order.product_id,
        product_name=placed.order.product_name,
        quantity=placed.order.quantity,
        status=placed.order.status,
        reserved_from_batch_ids=placed.reserved_from_batch_ids,
        message=placed.message,
    )


@router.get(
    "",
    response_model=List[OrderView],
)
@inject
async def list_orders_endpoint(
        product_id: Optional[int] = Query(default=None, alias="productId"),
        uow: unit_of_work.AbstractUnitOfWork = Depends(Provide[Container.uow]),
):
    results = await orders.list_orders(uow, product_id=product_id)
    return [OrderView.from_domain(order) for order in results]


@router.get(
    "/{order_id}",
    response_model=OrderView,
)
@inject
async def get_order_endpoint(
        order_id: int,
        uow: unit_of_work.AbstractUnitOfWork = Depends(Provide[Container.uow]),
):
    order = await orders.get_order(order_id, uow)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return OrderView.from_domain(order)
