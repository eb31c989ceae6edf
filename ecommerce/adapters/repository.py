from typing import List, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ecommerce.domain import model


class AbstractBatchRepository(Protocol):
    async def add(self, batch: model.Batch):
        raise NotImplementedError

    async def get(self, batch_id: int) -> Optional[model.Batch]:
        raise NotImplementedError

    async def list_by_product(self, product_id: int) -> List[model.Batch]:
        """ 만료일 오름차순으로 정렬해서 돌려줘야 한다. """
        raise NotImplementedError


class AbstractOrderRepository(Protocol):
    async def add(self, order: model.Order):
        raise NotImplementedError

    async def get(self, order_id: int) -> Optional[model.Order]:
        raise NotImplementedError

    async def list(self) -> List[model.Order]:
        raise NotImplementedError

    async def list_by_product(self, product_id: int) -> List[model.Order]:
        raise NotImplementedError


class SqlAlchemyBatchRepository(AbstractBatchRepository):
    def __init__(
            self,
            session: AsyncSession,
    ):
        self.session = session

    async def add(self, batch: model.Batch):
        self.session.add(batch)

    async def get(self, batch_id: int) -> Optional[model.Batch]:
        return await self.session.get(model.Batch, batch_id)

    async def list_by_product(self, product_id: int) -> List[model.Batch]:
        return (
            (
                await self.session.scalars(
                    select(model.Batch)
                    .filter(model.Batch.product_id == product_id)
                    .order_by(model.Batch.expiry_date, model.Batch.batch_id)
                )
            )
            .all()
        )


class SqlAlchemyOrderRepository(AbstractOrderRepository):
    def __init__(
            self,
            session: AsyncSession,
    ):
        self.session = session

    async def add(self, order: model.Order):
        self.session.add(order)

    async def get(self, order_id: int) -> Optional[model.Order]:
        return await self.session.get(model.Order, order_id)

    async def list(self) -> List[model.Order]:
        return (
            (
                await self.session.scalars(
                    select(model.Order)
                    .order_by(model.Order.order_id)
                )
            )
            .all()
        )

    async def list_by_product(self, product_id: int) -> List[model.Order]:
        return (
            (
                await self.session.scalars(
                    select(model.Order)
                    .filter(model.Order.product_id == product_id)
                    .order_by(model.Order.order_id)
                )
            )
            .all()
        )
