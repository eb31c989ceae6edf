from datetime import date, timedelta

import httpx
import pytest
from dependency_injector import providers

from ecommerce.adapters.inventory_client import HttpInventoryClient
from tests.e2e.api_client import get_inventory, post_to_add_batch, post_to_place_order


today = date.today()
in_two_weeks = today + timedelta(days=14)
in_three_months = today + timedelta(days=90)
yesterday = today - timedelta(days=1)


@pytest.mark.asyncio
async def test_inventory_lists_batches_by_expiry(client):
    later = await post_to_add_batch(client, 1001, "Laptop", 50, in_three_months)
    sooner = await post_to_add_batch(client, 1001, "Laptop", 30, in_two_weeks)

    body = await get_inventory(client, 1001)

    assert body == {
        "productId": 1001,
        "productName": "Laptop",
        "batches": [
            {"batchId": sooner, "quantity": 30, "expiryDate": in_two_weeks.isoformat()},
            {"batchId": later, "quantity": 50, "expiryDate": in_three_months.isoformat()},
        ],
        "totalQuantity": 80,
    }


@pytest.mark.asyncio
async def test_unknown_product_returns_empty_inventory(client):
    body = await get_inventory(client, 9999)

    assert body == {
        "productId": 9999,
        "productName": "Unknown",
        "batches": [],
        "totalQuantity": 0,
    }


@pytest.mark.asyncio
async def test_expired_batches_are_not_available(client):
    await post_to_add_batch(client, 1001, "Laptop", 100, yesterday)
    fresh = await post_to_add_batch(client, 1001, "Laptop", 10, in_two_weeks)

    body = await get_inventory(client, 1001)
    assert [b["batchId"] for b in body["batches"]] == [fresh]
    assert body["totalQuantity"] == 10

    r = await client.get("/inventory/check/1001/10")
    assert r.json() is True
    r = await client.get("/inventory/check/1001/11")
    assert r.json() is False


@pytest.mark.asyncio
async def test_expiry_priority_strategy_drops_batches_expiring_today(client):
    await post_to_add_batch(client, 1001, "Laptop", 5, today)
    soon = await post_to_add_batch(client, 1001, "Laptop", 10, in_two_weeks)
    later = await post_to_add_batch(client, 1001, "Laptop", 20, in_three_months)

    default = await get_inventory(client, 1001)
    priority = await get_inventory(client, 1001, strategy="EXPIRY_PRIORITY")

    assert default["totalQuantity"] == 35
    assert [b["batchId"] for b in priority["batches"]] == [soon, later]
    assert priority["totalQuantity"] == 30


@pytest.mark.asyncio
async def test_place_order_reserves_and_reduces_inventory(client):
    later = await post_to_add_batch(client, 1001, "Laptop", 50, in_three_months)
    sooner = await post_to_add_batch(client, 1001, "Laptop", 30, in_two_weeks)

    r = await post_to_place_order(client, 1001, 40)

    body = r.json()
    assert body["productId"] == 1001
    assert body["productName"] == "Laptop"
    assert body["quantity"] == 40
    assert body["status"] == "PLACED"
    assert body["reservedFromBatchIds"] == [sooner, later]
    assert body["message"] == "Order placed. Inventory reserved."

    inventory = await get_inventory(client, 1001)
    assert [b["quantity"] for b in inventory["batches"]] == [0, 40]
    assert inventory["totalQuantity"] == 40

    r = await client.get(f"/order/{body['orderId']}")
    assert r.status_code == 200
    assert r.json()["reservedBatchIds"] == [sooner, later]
    assert r.json()["orderDate"] == today.isoformat()


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -1])
async def test_non_positive_quantity_is_rejected(client, quantity):
    await post_to_add_batch(client, 1001, "Laptop", 10, in_two_weeks)

    r = await post_to_place_order(client, 1001, quantity, expect_success=False)

    assert r.status_code == 400
    assert (await client.get("/order")).json() == []
    assert (await get_inventory(client, 1001))["totalQuantity"] == 10


@pytest.mark.asyncio
async def test_insufficient_inventory_is_rejected(client):
    await post_to_add_batch(client, 1001, "Laptop", 10, in_two_weeks)

    r = await post_to_place_order(client, 1001, 11, expect_success=False)

    assert r.status_code == 400
    assert r.json()["detail"] == "Insufficient inventory for product 1001"
    assert (await client.get("/order")).json() == []


@pytest.mark.asyncio
async def test_orders_can_be_listed_by_product(client):
    await post_to_add_batch(client, 1001, "Laptop", 10, in_two_weeks)
    await post_to_add_batch(client, 1002, "Phone", 10, in_two_weeks)
    await post_to_place_order(client, 1001, 1)
    await post_to_place_order(client, 1002, 2)

    all_orders = (await client.get("/order")).json()
    phone_orders = (await client.get("/order", params={"productId": 1002})).json()

    assert [o["productId"] for o in all_orders] == [1001, 1002]
    assert [o["quantity"] for o in phone_orders] == [2]


@pytest.mark.asyncio
async def test_unknown_order_is_404(client):
    r = await client.get("/order/404")

    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_inventory_reports_shortfall(client):
    batch_id = await post_to_add_batch(client, 1001, "Laptop", 10, in_two_weeks)

    r = await client.post(
        "/inventory/update",
        json={"productId": 1001, "quantityToReduce": 15, "batchIds": f"{batch_id}"},
    )

    assert r.status_code == 500
    assert (await get_inventory(client, 1001))["totalQuantity"] == 0


@pytest.mark.asyncio
async def test_update_inventory_rejects_malformed_batch_ids(client):
    r = await client.post(
        "/inventory/update",
        json={"productId": 1001, "quantityToReduce": 1, "batchIds": "1,x"},
    )

    assert r.status_code == 400


@pytest.mark.asyncio
async def test_inventory_service_down_is_a_server_error(container, client):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    container.inventory_client.override(
        providers.Object(
            HttpInventoryClient(httpx.AsyncClient(transport=httpx.MockTransport(refuse)))
        )
    )
    try:
        r = await post_to_place_order(client, 1001, 1, expect_success=False)
    finally:
        container.inventory_client.reset_override()

    assert r.status_code == 500
    assert r.json()["detail"] == "Inventory service unavailable"


@pytest.mark.asyncio
async def test_openapi_schema_is_served_under_api_prefix(client):
    r = await client.get("/v1/openapi.json")

    assert r.status_code == 200
    assert "/order" in r.json()["paths"]
    assert (await client.get("/openapi.json")).status_code == 404
