"""API tests for order, scan and sync endpoints."""

import datetime as dt

from httpx import AsyncClient

from stocksync.application.services import StockServices
from stocksync.core.entities import Order, Product


async def _seed(services: StockServices, order: Order) -> None:
    await services.products.save(Product(id="A1", name="Cable 3x2.5mm", qty=10), is_new=True)
    await services.orders.save(order, is_new=True)


class TestOrdersAPI:
    async def test_save_and_get(self, client: AsyncClient):
        response = await client.post(
            "/api/orders",
            json={
                "order_number": "101",
                "customer_name": "ACME",
                "items": [{"product_id": "A1", "product_name": "Cable", "qty_requested": 2}],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_new"] is True
        assert data["order"]["status"] == "pending"
        assert data["order"]["shipping"] == "Pending"

        fetched = await client.get(f"/api/orders/{data['order']['id']}")
        assert fetched.status_code == 200

    async def test_order_without_items_is_400(self, client: AsyncClient):
        response = await client.post("/api/orders", json={"order_number": "1", "customer_name": "A"})
        assert response.status_code == 400

    async def test_import(self, client: AsyncClient):
        response = await client.post(
            "/api/orders/import",
            json={"content": "101;ACME;01;007;2024-05-01;A1;2\n102;Globex;;;;B2;1\n"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["orders_created"] == 2
        assert data["items_imported"] == 2
        assert data["notifications"][0]["message"] == "2 orders imported!"

    async def test_pick_and_ship(self, client: AsyncClient, services: StockServices, sample_order: Order):
        await _seed(services, sample_order)

        for _ in range(2):
            picked = await client.post(f"/api/orders/{sample_order.id}/pick", json={"product_id": "A1"})
            assert picked.status_code == 200
            assert picked.json()["picked"] is True

        shipped = await client.post(f"/api/orders/{sample_order.id}/shipping", json={"method": "malote"})

        assert shipped.status_code == 200
        order = shipped.json()["order"]
        assert order["status"] == "completed"
        assert order["shipping"] == "Malote"
        assert (await services.products.get("A1")).qty == 8

        completed = await client.get("/api/orders", params={"status": "completed"})
        assert completed.json()["total"] == 1

    async def test_pick_foreign_product_is_404(
        self, client: AsyncClient, services: StockServices, sample_order: Order
    ):
        await _seed(services, sample_order)

        response = await client.post(f"/api/orders/{sample_order.id}/pick", json={"product_id": "B2"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "ORDER_ITEM_NOT_FOUND"

    async def test_edit_items(self, client: AsyncClient, services: StockServices, sample_order: Order):
        await _seed(services, sample_order)
        await services.products.save(Product(id="B2", name="Plug", qty=3), is_new=True)

        added = await client.post(f"/api/orders/{sample_order.id}/items", json={"product_id": "B2"})

        assert added.status_code == 200
        assert [i["product_id"] for i in added.json()["order"]["items"]] == ["A1", "B2"]

        changed = await client.patch(
            f"/api/orders/{sample_order.id}/items/A1", json={"qty_requested": 5}
        )

        assert changed.status_code == 200
        assert changed.json()["is_new"] is False
        assert changed.json()["order"]["items"][0]["qty_requested"] == 5

        removed = await client.patch(
            f"/api/orders/{sample_order.id}/items/B2", json={"qty_requested": 0}
        )

        assert [i["product_id"] for i in removed.json()["order"]["items"]] == ["A1"]

    async def test_add_unknown_product_is_404(
        self, client: AsyncClient, services: StockServices, sample_order: Order
    ):
        await _seed(services, sample_order)

        response = await client.post(f"/api/orders/{sample_order.id}/items", json={"product_id": "Z9"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    async def test_put_without_date_keeps_date(
        self, client: AsyncClient, services: StockServices, sample_order: Order
    ):
        sample_order.date = dt.date(2024, 1, 15)
        await _seed(services, sample_order)

        response = await client.put(
            f"/api/orders/{sample_order.id}",
            json={
                "order_number": "101",
                "customer_name": "ACME Ltd",
                "items": [{"product_id": "A1", "product_name": "Cable", "qty_requested": 2}],
            },
        )

        assert response.status_code == 200
        assert response.json()["order"]["date"] == "2024-01-15"

    async def test_delete(self, client: AsyncClient, services: StockServices, sample_order: Order):
        await _seed(services, sample_order)

        response = await client.delete(f"/api/orders/{sample_order.id}")

        assert response.status_code == 204
        assert (await client.get(f"/api/orders/{sample_order.id}")).status_code == 404


class TestScanAPI:
    async def test_global_scan(self, client: AsyncClient, services: StockServices, sample_order: Order):
        await _seed(services, sample_order)

        known = await client.post("/api/scan", json={"code": "A1"})
        unknown = await client.post("/api/scan", json={"code": "Z9"})

        assert known.json()["action"] == "transaction"
        assert unknown.json()["action"] == "register"

    async def test_order_scan(self, client: AsyncClient, services: StockServices, sample_order: Order):
        await _seed(services, sample_order)

        response = await client.post("/api/scan", json={"code": "A1", "order_id": sample_order.id})

        assert response.json()["action"] == "picked"
        assert response.json()["order"]["items"][0]["qty_picked"] == 1


class TestSyncAPI:
    async def test_status_lists_pending(self, offline_client: AsyncClient):
        await offline_client.post("/api/products", json={"id": "A1", "name": "Cable", "qty": 1})

        response = await offline_client.get("/api/sync")

        data = response.json()
        assert data["online"] is False
        assert data["pending"] == 1
        assert data["items"][0]["kind"] == "PRODUCT"
        assert data["items"][0]["command"] == "insert"

    async def test_drain_offline(self, offline_client: AsyncClient):
        response = await offline_client.post("/api/sync/drain")

        assert response.status_code == 200
        assert response.json()["drain"]["status"] == "offline"

    async def test_reconnect_drains(self, offline_client: AsyncClient):
        await offline_client.post("/api/products", json={"id": "A1", "name": "Cable", "qty": 1})

        response = await offline_client.post("/api/sync/reconnect")

        data = response.json()
        assert data["online"] is True
        assert data["pending"] == 0
        assert data["drain"]["synced"] == 1


class TestHealthAPI:
    async def test_online_is_healthy(self, client: AsyncClient):
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_offline_is_degraded(self, offline_client: AsyncClient):
        response = await offline_client.get("/api/health")

        data = response.json()
        assert data["status"] == "degraded"
        assert data["remote"]["available"] is False
        assert data["pending"] == 0
