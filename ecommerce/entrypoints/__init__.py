from ecommerce.entrypoints.schemas import (
    BatchRequest,
    InventoryResponse,
    InventoryUpdateRequest,
    OrderRequest,
    OrderResponse,
    OrderView,
)
