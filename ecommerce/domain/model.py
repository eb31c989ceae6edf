import enum
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


UNKNOWN_PRODUCT_NAME = "Unknown"


class OrderStatus(str, enum.Enum):
    NEW = "NEW"
    PLACED = "PLACED"


@dataclass
class Batch:
    product_id: int
    product_name: str
    quantity: int
    expiry_date: date
    batch_id: Optional[int] = None

    def __repr__(self):
        return f"<Batch {self.batch_id} of product {self.product_id}>"

    def reduce(self, qty: int) -> int:
        """ 배치에서 최대 qty 만큼 차감하고, 아직 차감하지 못한 수량을 돌려준다.

        수량은 음수가 되지 않는다. 모자란 만큼은 다음 배치에서 가져가야 한다.

        """
        if qty < 0:
            raise ValueError(f"Cannot reduce batch {self.batch_id} by {qty}")

        taken = min(self.quantity, qty)
        self.quantity -= taken
        return qty - taken


@dataclass(frozen=True)
class BatchStock:
    batch_id: int
    quantity: int
    expiry_date: date


@dataclass
class ProductInventory:
    product_id: int
    product_name: str
    batches: List[BatchStock] = field(default_factory=list)
    total_quantity: int = 0

    @classmethod
    def unknown(cls, product_id: int) -> "ProductInventory":
        return cls(product_id=product_id, product_name=UNKNOWN_PRODUCT_NAME)


@dataclass
class Order:
    product_id: int
    product_name: str
    quantity: int
    status: OrderStatus = OrderStatus.NEW
    order_date: Optional[date] = None
    # DB 컬럼 형식 그대로 "2,1" 처럼 쉼표로 구분해서 들고 있는다.
    reserved_batch_ids: str = ""
    order_id: Optional[int] = None

    def __repr__(self):
        return f"<Order {self.order_id} {self.status.value}>"

    @classmethod
    def place(
            cls,
            product_id: int,
            product_name: str,
            quantity: int,
            batch_ids: List[int],
            today: Optional[date] = None,
    ) -> "Order":
        return cls(
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            status=OrderStatus.PLACED,
            order_date=today or date.today(),
            reserved_batch_ids=join_batch_ids(batch_ids),
        )

    @property
    def batch_ids(self) -> List[int]:
        if not self.reserved_batch_ids:
            return []
        return [int(ref) for ref in self.reserved_batch_ids.split(",")]


def join_batch_ids(batch_ids: List[int]) -> str:
    return ",".join(str(batch_id) for batch_id in batch_ids)
