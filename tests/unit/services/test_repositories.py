"""Tests for the write-through repositories."""

from unittest.mock import AsyncMock

import pytest
from fakes import FakeGateway, MemoryLocalStore

from stocksync.application.services import StockServices
from stocksync.core.entities import (
    Collection,
    EntityKind,
    Movement,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    RemoteCommand,
)
from stocksync.core.exceptions import (
    DuplicateError,
    InsufficientStockError,
    OrderNotFoundError,
    ProductNotFoundError,
    RemoteError,
    RemoteErrorReason,
    ValidationError,
)


class TestProductRepository:
    async def test_online_insert_writes_remote_then_cache(
        self, services: StockServices, gateway: FakeGateway, product_a1: Product
    ):
        await services.products.save(product_a1, is_new=True)

        assert gateway.operations() == ["insert"]
        assert gateway.tables[Collection.PRODUCTS]["A1"]["qty"] == 10
        assert await services.products.get("A1") == product_a1
        assert await services.engine.pending_count() == 0

    async def test_online_update_is_upsert(
        self, services: StockServices, gateway: FakeGateway, product_a1: Product
    ):
        await services.products.save(product_a1, is_new=True)
        await services.products.save(product_a1.with_qty(4), is_new=False)

        assert gateway.operations() == ["insert", "upsert"]
        assert [p.qty for p in await services.products.list_all()] == [4]

    async def test_remote_failure_leaves_cache_untouched(
        self, services: StockServices, gateway: FakeGateway, product_a1: Product
    ):
        gateway.fail_identities["A1"] = RemoteError(RemoteErrorReason.REQUEST_FAILED, "rejected")

        with pytest.raises(RemoteError):
            await services.products.save(product_a1, is_new=True)

        assert await services.products.list_all() == []
        assert await services.engine.pending_count() == 0

    async def test_offline_save_caches_and_queues(
        self, offline_services: StockServices, product_a1: Product
    ):
        await offline_services.products.save(product_a1, is_new=True)

        assert await offline_services.products.get("A1") == product_a1
        (mutation,) = await offline_services.engine.pending()
        assert mutation.kind == EntityKind.PRODUCT
        assert mutation.command == RemoteCommand.INSERT
        assert mutation.is_new is True
        assert mutation.payload == {"id": "A1", "name": "Cable 3x2.5mm", "qty": 10}

    async def test_offline_duplicate_is_rejected(
        self, offline_services: StockServices, product_a1: Product
    ):
        await offline_services.products.save(product_a1, is_new=True)

        with pytest.raises(DuplicateError):
            await offline_services.products.save(
                Product(id="A1", name="Other", qty=1), is_new=True
            )

        assert await offline_services.engine.pending_count() == 1
        assert (await offline_services.products.get("A1")).name == "Cable 3x2.5mm"

    async def test_offline_update_merges_in_place(self, offline_services: StockServices):
        await offline_services.products.save(Product(id="A1", name="Cable", qty=1), is_new=True)
        await offline_services.products.save(Product(id="B2", name="Switch", qty=1), is_new=True)

        await offline_services.products.save(Product(id="A1", name="Cable", qty=9), is_new=False)

        products = await offline_services.products.list_all()
        assert [(p.id, p.qty) for p in products] == [("B2", 1), ("A1", 9)]
        commands = [m.command for m in await offline_services.engine.pending()]
        assert commands == [RemoteCommand.INSERT, RemoteCommand.INSERT, RemoteCommand.UPSERT]

    async def test_update_of_unknown_identity_inserts_first(self, offline_services: StockServices):
        await offline_services.products.save(Product(id="A1", name="Cable", qty=1), is_new=True)
        await offline_services.products.save(Product(id="Z9", name="Late", qty=1), is_new=False)

        assert [p.id for p in await offline_services.products.list_all()] == ["Z9", "A1"]

    @pytest.mark.parametrize(
        "product",
        [
            Product(id="", name="Cable", qty=1),
            Product(id="A1", name="  ", qty=1),
            Product(id="A1", name="Cable", qty=-1),
        ],
    )
    async def test_validation_has_no_side_effects(
        self, services: StockServices, gateway: FakeGateway, product: Product
    ):
        with pytest.raises(ValidationError):
            await services.products.save(product, is_new=True)

        assert gateway.calls == []
        assert await services.products.list_all() == []

    async def test_adjust_quantity(self, services: StockServices, product_a1: Product):
        await services.products.save(product_a1, is_new=True)

        updated = await services.products.adjust_quantity("A1", -3)

        assert updated.qty == 7
        assert (await services.products.get("A1")).qty == 7

    async def test_adjust_below_zero_is_rejected(
        self, services: StockServices, gateway: FakeGateway, product_a1: Product
    ):
        await services.products.save(product_a1, is_new=True)

        with pytest.raises(InsufficientStockError) as exc_info:
            await services.products.adjust_quantity("A1", -11)

        assert exc_info.value.details == {"product_id": "A1", "requested": 11, "available": 10}
        assert gateway.operations() == ["insert"]
        assert (await services.products.get("A1")).qty == 10

    async def test_adjust_unknown_product(self, services: StockServices):
        with pytest.raises(ProductNotFoundError):
            await services.products.adjust_quantity("nope", 1)

    async def test_replay_dispatches_queued_command(
        self, offline_services: StockServices, offline_gateway: FakeGateway, product_a1: Product
    ):
        await offline_services.products.save(product_a1, is_new=True)
        (mutation,) = await offline_services.engine.pending()
        offline_gateway.available = True

        await offline_services.products.replay(mutation)

        assert offline_gateway.operations() == ["insert"]
        assert offline_gateway.tables[Collection.PRODUCTS]["A1"]["name"] == "Cable 3x2.5mm"

    async def test_replay_overwrites_newer_online_save(
        self, offline_services: StockServices, offline_gateway: FakeGateway, product_a1: Product
    ):
        """A queued snapshot replayed after an online save wins remotely."""
        await offline_services.products.save(product_a1, is_new=False)
        (mutation,) = await offline_services.engine.pending()
        offline_gateway.available = True
        await offline_services.products.save(product_a1.with_qty(4), is_new=False)

        await offline_services.products.replay(mutation)

        assert offline_gateway.tables[Collection.PRODUCTS]["A1"]["qty"] == 10
        assert (await offline_services.products.get("A1")).qty == 4

    async def test_refresh_replaces_cache(self, services: StockServices, gateway: FakeGateway):
        await services.products.save(Product(id="OLD", name="Gone", qty=1), is_new=True)
        gateway.tables[Collection.PRODUCTS] = {
            "B2": {"id": "B2", "name": "Switch", "qty": 2},
            "A1": {"id": "A1", "name": "Cable", "qty": 5},
        }

        await services.products.refresh()

        assert [p.id for p in await services.products.list_all()] == ["A1", "B2"]

    async def test_refresh_keeps_pending_local_version(
        self, local_store: MemoryLocalStore, offline_services: StockServices, offline_gateway: FakeGateway
    ):
        await offline_services.products.save(Product(id="A1", name="Cable", qty=3), is_new=False)
        await offline_services.products.save(Product(id="N1", name="New", qty=1), is_new=True)
        offline_gateway.tables[Collection.PRODUCTS] = {
            "A1": {"id": "A1", "name": "Cable", "qty": 50},
            "B2": {"id": "B2", "name": "Switch", "qty": 2},
        }
        offline_gateway.available = True

        await offline_services.products.refresh()

        products = {p.id: p.qty for p in await offline_services.products.list_all()}
        assert products == {"N1": 1, "A1": 3, "B2": 2}

    async def test_refresh_failure_keeps_cache(
        self, services: StockServices, gateway: FakeGateway, product_a1: Product
    ):
        await services.products.save(product_a1, is_new=True)
        gateway.fail_queries[Collection.PRODUCTS] = RemoteError(RemoteErrorReason.NETWORK, "down")

        with pytest.raises(RemoteError):
            await services.products.refresh()

        assert await services.products.get("A1") == product_a1


class TestMovementRepository:
    async def test_record_inserts(self, services: StockServices, gateway: FakeGateway):
        movement = Movement(prod_id="A1", prod_name="Cable", qty=-2)

        await services.movements.record(movement)

        assert gateway.operations(Collection.MOVEMENTS) == ["insert"]
        assert (await services.movements.list_all())[0].id == movement.id

    async def test_offline_record_queues_insert(self, offline_services: StockServices):
        await offline_services.movements.record(Movement(prod_id="A1", prod_name="Cable", qty=1))

        (mutation,) = await offline_services.engine.pending()
        assert mutation.kind == EntityKind.MOVEMENT
        assert mutation.command == RemoteCommand.INSERT

    async def test_newest_first(self, services: StockServices):
        first = await services.movements.record(Movement(prod_id="A1", prod_name="Cable", qty=1))
        second = await services.movements.record(Movement(prod_id="A1", prod_name="Cable", qty=2))

        assert [m.id for m in await services.movements.list_all()] == [second.id, first.id]

    async def test_name_required(self, services: StockServices):
        with pytest.raises(ValidationError):
            await services.movements.record(Movement(prod_id="A1", prod_name="", qty=1))

    async def test_clear_history_online(self, services: StockServices, gateway: FakeGateway):
        await services.movements.record(Movement(prod_id="A1", prod_name="Cable", qty=1))

        await services.movements.clear_history()

        assert await services.movements.list_all() == []
        assert gateway.tables[Collection.MOVEMENTS] == {}
        assert "delete_up_to" in gateway.operations(Collection.MOVEMENTS)

    async def test_clear_history_offline_is_local_only(
        self, offline_services: StockServices, offline_gateway: FakeGateway
    ):
        await offline_services.movements.record(Movement(prod_id="A1", prod_name="Cable", qty=1))

        await offline_services.movements.clear_history()

        assert await offline_services.movements.list_all() == []
        assert offline_gateway.calls == []
        assert await offline_services.engine.pending_count() == 1

    async def test_clear_history_remote_failure_keeps_local(
        self, services: StockServices, gateway: FakeGateway
    ):
        await services.movements.record(Movement(prod_id="A1", prod_name="Cable", qty=1))

        gateway.delete_up_to = AsyncMock(side_effect=RemoteError(RemoteErrorReason.NETWORK, "down"))

        with pytest.raises(RemoteError):
            await services.movements.clear_history()

        assert len(await services.movements.list_all()) == 1


class TestOrderRepository:
    async def test_new_order_is_upserted(
        self, services: StockServices, gateway: FakeGateway, sample_order: Order
    ):
        await services.orders.save(sample_order, is_new=True)

        assert gateway.operations() == ["upsert"]
        assert sample_order.id in gateway.tables[Collection.ORDERS]

    async def test_existing_order_is_updated(
        self, services: StockServices, gateway: FakeGateway, sample_order: Order
    ):
        await services.orders.save(sample_order, is_new=True)
        sample_order.customer_name = "ACME Ltd"

        await services.orders.save(sample_order, is_new=False)

        assert gateway.operations() == ["upsert", "update"]
        assert gateway.tables[Collection.ORDERS][sample_order.id]["customer_name"] == "ACME Ltd"

    async def test_status_is_recomputed_on_save(self, services: StockServices, sample_order: Order):
        sample_order.status = OrderStatus.COMPLETED

        saved = await services.orders.save(sample_order, is_new=True)

        assert saved.status == OrderStatus.PENDING

        sample_order.items[0].qty_picked = 2
        sample_order.envio_malote = True
        saved = await services.orders.save(sample_order, is_new=False)

        assert saved.status == OrderStatus.COMPLETED
        assert (await services.orders.get(sample_order.id)).status == OrderStatus.COMPLETED

    async def test_stale_cached_status_is_normalized_on_read(
        self, services: StockServices, local_store: MemoryLocalStore
    ):
        local_store.data[Collection.ORDERS.value] = [
            {
                "id": "o-1",
                "order_number": "101",
                "customer_name": "ACME",
                "date": "2024-01-15",
                "status": "completed",
                "items": [
                    {"product_id": "A1", "product_name": "Cable", "qty_requested": 2, "qty_picked": 2}
                ],
                "envio_malote": False,
                "entrega_matriz": False,
            }
        ]

        assert (await services.orders.get("o-1")).status == OrderStatus.PENDING
        (listed,) = await services.orders.list_all()
        assert listed.status == OrderStatus.PENDING

    @pytest.mark.parametrize(
        "changes",
        [{"order_number": ""}, {"customer_name": " "}, {"items": []}],
    )
    async def test_validation(self, services: StockServices, sample_order: Order, changes):
        with pytest.raises(ValidationError):
            await services.orders.save(sample_order.model_copy(update=changes), is_new=True)

    async def test_online_delete(
        self, services: StockServices, gateway: FakeGateway, sample_order: Order
    ):
        await services.orders.save(sample_order, is_new=True)

        await services.orders.delete(sample_order.id)

        assert await services.orders.list_all() == []
        assert gateway.tables[Collection.ORDERS] == {}

    async def test_delete_unknown_order(self, services: StockServices):
        with pytest.raises(OrderNotFoundError):
            await services.orders.delete("missing")

    async def test_offline_delete_is_queued_and_replayed(
        self, offline_services: StockServices, offline_gateway: FakeGateway, sample_order: Order
    ):
        offline_gateway.tables[Collection.ORDERS][sample_order.id] = sample_order.model_dump(mode="json")
        await offline_services.orders._store([sample_order])

        await offline_services.orders.delete(sample_order.id)

        (mutation,) = await offline_services.engine.pending()
        assert mutation.kind == EntityKind.DELETE_ORDER
        assert mutation.command == RemoteCommand.DELETE
        assert mutation.payload == sample_order.id

        await offline_gateway.connect()
        result = await offline_services.engine.drain()

        assert result.synced == 1
        assert offline_gateway.tables[Collection.ORDERS] == {}

    async def test_refresh_hides_queued_deletion(
        self, offline_services: StockServices, offline_gateway: FakeGateway, sample_order: Order
    ):
        other = Order(
            order_number="102",
            customer_name="Globex",
            items=[OrderItem(product_id="B2", product_name="Switch", qty_requested=1)],
        )
        for order in (sample_order, other):
            offline_gateway.tables[Collection.ORDERS][order.id] = order.model_dump(mode="json")
        await offline_services.orders._store([sample_order, other])
        await offline_services.orders.delete(sample_order.id)
        offline_gateway.available = True

        await offline_services.orders.refresh()

        assert [o.id for o in await offline_services.orders.list_all()] == [other.id]
