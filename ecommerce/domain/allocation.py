import abc
import enum
from datetime import date
from typing import Dict, List, Optional, Protocol, Sequence


EXPIRY_THRESHOLD_DAYS = 30


class StockLike(Protocol):
    batch_id: int
    quantity: int
    expiry_date: date


class StrategyType(str, enum.Enum):
    DEFAULT = "DEFAULT"
    EXPIRY_PRIORITY = "EXPIRY_PRIORITY"


class InventoryStrategy(abc.ABC):
    @abc.abstractmethod
    def available(
            self,
            batches: Sequence[StockLike],
            today: Optional[date] = None,
    ) -> List[StockLike]:
        raise NotImplementedError

    def total_quantity(self, batches: Sequence[StockLike]) -> int:
        return sum(batch.quantity for batch in batches)


class DefaultStrategy(InventoryStrategy):
    """ 오늘 이후(오늘 포함) 만료되는 배치를 들어온 순서 그대로 남긴다. """

    def available(self, batches, today=None):
        today = today or date.today()
        return [batch for batch in batches if batch.expiry_date >= today]


class ExpiryPriorityStrategy(InventoryStrategy):
    """ FEFO 용 전략.

    오늘 만료되는 배치까지 빼고, 만료가 EXPIRY_THRESHOLD_DAYS 안쪽인 배치를
    바깥쪽 배치보다 먼저, 각 그룹 안에서는 만료가 빠른 순서로 정렬한다.

    """

    def __init__(self, threshold_days: int = EXPIRY_THRESHOLD_DAYS):
        self.threshold_days = threshold_days

    def available(self, batches, today=None):
        today = today or date.today()

        def priority(batch):
            days_to_expiry = (batch.expiry_date - today).days
            return days_to_expiry > self.threshold_days, days_to_expiry

        return sorted(
            (batch for batch in batches if batch.expiry_date > today),
            key=priority,
        )


STRATEGIES = {
    StrategyType.DEFAULT: DefaultStrategy(),
    StrategyType.EXPIRY_PRIORITY: ExpiryPriorityStrategy(),
}   # type: Dict[StrategyType, InventoryStrategy]


def get_strategy(strategy_type: StrategyType) -> InventoryStrategy:
    return STRATEGIES[strategy_type]


def plan_reservation(
        batches: Sequence[StockLike],
        required_quantity: int,
) -> List[int]:
    """ 만료 순으로 정렬된 배치를 앞에서부터 훑으며 필요한 수량을 채울 배치 id 목록을 만든다.

    수량을 실제로 잡아두지는 않는다. 재고가 모자라면 비어있지 않은 배치를 모두 돌려준다.

    """
    reserved = []
    remaining = required_quantity

    for batch in batches:
        if remaining <= 0:
            break
        if batch.quantity > 0:
            reserved.append(batch.batch_id)
            remaining -= min(batch.quantity, remaining)

    return reserved
