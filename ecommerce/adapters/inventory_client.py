import logging
from datetime import date
from typing import List, Protocol

import httpx

from ecommerce.domain import model


logger = logging.getLogger(__name__)


class InventoryUnavailable(Exception):
    ...


class AbstractInventoryClient(Protocol):
    async def get_inventory(self, product_id: int) -> model.ProductInventory:
        raise NotImplementedError

    async def update_inventory(
            self,
            product_id: int,
            quantity_to_reduce: int,
            batch_ids: List[int],
    ) -> None:
        raise NotImplementedError


class HttpInventoryClient(AbstractInventoryClient):
    """ 재고 서비스를 HTTP 로 호출한다. 재시도는 하지 않는다. """

    def __init__(
            self,
            client: httpx.AsyncClient,
    ):
        self._client = client

    async def get_inventory(self, product_id: int) -> model.ProductInventory:
        url = f"/inventory/{product_id}"
        logger.debug(f'Calling inventory service: {url}')

        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as ex:
            logger.exception(f'Failed to check inventory for product {product_id}')
            raise InventoryUnavailable("Inventory service unavailable") from ex

        try:
            inventory = to_product_inventory(response.json())
        except (KeyError, TypeError, ValueError) as ex:
            logger.exception(f'Malformed inventory reply for product {product_id}')
            raise InventoryUnavailable("Inventory service unavailable") from ex

        logger.info(f'Inventory check successful for product {product_id}')
        return inventory

    async def update_inventory(
            self,
            product_id: int,
            quantity_to_reduce: int,
            batch_ids: List[int],
    ) -> None:
        payload = {
            "productId": product_id,
            "quantityToReduce": quantity_to_reduce,
            "batchIds": model.join_batch_ids(batch_ids),
        }
        logger.debug(f'Updating inventory with {payload}')

        try:
            response = await self._client.post("/inventory/update", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as ex:
            logger.exception(f'Failed to update inventory for product {product_id}')
            raise InventoryUnavailable("Failed to update inventory") from ex

        logger.info(f'Inventory updated successfully for product {product_id}')


def to_product_inventory(body: dict) -> model.ProductInventory:
    return model.ProductInventory(
        product_id=body["productId"],
        product_name=body["productName"],
        batches=[
            model.BatchStock(
                batch_id=batch["batchId"],
                quantity=batch["quantity"],
                expiry_date=date.fromisoformat(batch["expiryDate"]),
            )
            for batch in body["batches"]
        ],
        total_quantity=body["totalQuantity"],
    )
