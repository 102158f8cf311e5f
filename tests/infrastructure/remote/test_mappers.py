"""Tests for entity <-> row mapping."""

from datetime import UTC, date, datetime

from stocksync.core.entities import Collection, Movement, Order, OrderItem, OrderStatus, Product
from stocksync.infrastructure.remote.mappers import (
    column_for,
    decode_operator_note,
    decode_row,
    encode_fields,
    encode_operator_note,
    encode_record,
    movement_to_row,
    order_to_row,
    row_to_movement,
    row_to_order,
    row_to_product,
    unwrap_scalar,
    wrap_array,
)


class TestOperatorNote:
    def test_encode_with_note(self):
        assert encode_operator_note("007", "Out for repair") == "[Mat: 007] Out for repair"

    def test_encode_without_note(self):
        assert encode_operator_note("007", None) == "[Mat: 007]"

    def test_encode_without_operator_keeps_note(self):
        assert encode_operator_note(None, "plain") == "plain"
        assert encode_operator_note("", None) is None

    def test_decode_splits_operator(self):
        assert decode_operator_note("[Mat: 007] Out for repair") == ("007", "Out for repair")

    def test_decode_operator_only(self):
        assert decode_operator_note("[Mat: 007]") == ("007", None)

    def test_decode_without_prefix(self):
        assert decode_operator_note("just a note") == (None, "just a note")
        assert decode_operator_note(None) == (None, None)

    def test_decode_reverses_encode(self):
        note = encode_operator_note("A-12", "Order #7 picking")
        assert decode_operator_note(note) == ("A-12", "Order #7 picking")

    def test_note_whitespace_is_not_preserved(self):
        note = encode_operator_note("007", "  two spaces ")
        assert decode_operator_note(note) == ("007", "two spaces")


class TestScalars:
    def test_unwrap_array(self):
        assert unwrap_scalar(["A1"]) == "A1"
        assert unwrap_scalar([]) is None

    def test_unwrap_plain_value(self):
        assert unwrap_scalar("A1") == "A1"
        assert unwrap_scalar(None) is None

    def test_wrap_array(self):
        assert wrap_array("A1") == ["A1"]
        assert wrap_array(None) == []


class TestProductRows:
    def test_row_with_array_id(self):
        product = row_to_product({"id": ["A1"], "name": "Cable", "qty": 4})
        assert product == Product(id="A1", name="Cable", qty=4)

    def test_missing_values_default(self):
        product = row_to_product({"id": "A1", "name": None, "qty": None})
        assert product.name == ""
        assert product.qty == 0


class TestMovementRows:
    def test_row_has_no_id_and_uses_created_at(self):
        movement = Movement(
            id=1700000000000,
            date=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
            prod_id="A1",
            prod_name="Cable",
            qty=-3,
            obs="Out",
            matricula="007",
        )

        row = movement_to_row(movement)

        assert "id" not in row
        assert "date" not in row
        assert row["created_at"] == "2024-05-01T12:00:00+00:00"
        assert row["obs"] == "[Mat: 007] Out"
        assert row["qty"] == -3

    def test_row_decodes_operator_from_note(self):
        movement = row_to_movement(
            {
                "id": 42,
                "created_at": "2024-05-01T12:00:00Z",
                "prod_id": ["A1"],
                "prod_name": "Cable",
                "qty": -3,
                "obs": "[Mat: 007] Out",
            }
        )

        assert movement.id == 42
        assert movement.prod_id == "A1"
        assert movement.matricula == "007"
        assert movement.obs == "Out"
        assert movement.date == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def test_explicit_matricula_column_wins(self):
        movement = row_to_movement(
            {"id": 1, "prod_name": "x", "qty": 0, "obs": "[Mat: 1] y", "matricula": "9"}
        )
        assert movement.matricula == "9"
        assert movement.obs == "[Mat: 1] y"

    def test_system_event_has_no_product(self):
        movement = row_to_movement({"id": 5, "prod_id": None, "prod_name": "Order #1 shipment", "qty": 0})
        assert movement.prod_id is None
        assert movement.is_system_event

    def test_non_numeric_id_falls_back_to_timestamp(self):
        movement = row_to_movement(
            {"id": "abc", "created_at": "2024-05-01T12:00:00+00:00", "prod_name": "x", "qty": 1}
        )
        assert movement.id == int(datetime(2024, 5, 1, 12, 0, tzinfo=UTC).timestamp() * 1000)


class TestOrderRows:
    def test_items_travel_camel_case(self, sample_order: Order):
        row = order_to_row(sample_order)

        assert "id" not in row
        assert row["items"] == [
            {
                "productId": "A1",
                "productName": "Cable 3x2.5mm",
                "qtyRequested": 2,
                "qtyPicked": 0,
            }
        ]
        assert row["date"] == sample_order.date.isoformat()

    def test_status_is_rederived(self):
        order = row_to_order(
            {
                "id": "o1",
                "order_number": 101,
                "customer_name": "ACME",
                "date": "2024-05-01",
                "status": "pending",
                "items": [{"productId": "A1", "productName": "Cable", "qtyRequested": 1, "qtyPicked": 1}],
                "envio_malote": True,
            }
        )

        assert order.order_number == "101"
        assert order.status == OrderStatus.COMPLETED
        assert order.date == date(2024, 5, 1)

    def test_stale_completed_status_is_corrected(self):
        order = row_to_order(
            {
                "id": "o1",
                "order_number": "1",
                "customer_name": "ACME",
                "status": "completed",
                "items": [{"productId": "A1", "productName": "Cable", "qtyRequested": 2, "qtyPicked": 1}],
                "entrega_matriz": True,
            }
        )
        assert order.status == OrderStatus.PENDING

    def test_snake_case_items_accepted(self):
        order = row_to_order(
            {
                "id": "o1",
                "order_number": "1",
                "customer_name": "ACME",
                "items": [{"product_id": "A1", "product_name": "Cable", "qty_requested": 3}],
            }
        )
        assert order.items == [OrderItem(product_id="A1", product_name="Cable", qty_requested=3)]

    def test_shipping_flags_require_true(self):
        order = row_to_order(
            {"id": "o1", "order_number": "1", "customer_name": "A", "envio_malote": None}
        )
        assert order.envio_malote is False
        assert order.entrega_matriz is False


class TestCollectionCodec:
    def test_column_for_movement_date(self):
        assert column_for(Collection.MOVEMENTS, "date") == "created_at"
        assert column_for(Collection.MOVEMENTS, "prod_id") == "prod_id"
        assert column_for(Collection.ORDERS, "date") == "date"

    def test_encode_order_record_keeps_id(self, sample_order: Order):
        row = encode_record(Collection.ORDERS, sample_order.model_dump(mode="json"))
        assert row["id"] == sample_order.id
        assert row["items"][0]["productId"] == "A1"

    def test_encode_fields_reencodes_full_order(self, sample_order: Order):
        fields = encode_fields(Collection.ORDERS, sample_order.model_dump(mode="json"))
        assert "id" not in fields
        assert fields["items"][0]["qtyRequested"] == 2

    def test_encode_partial_fields(self):
        assert encode_fields(Collection.PRODUCTS, {"qty": 3}) == {"qty": 3}
        assert encode_fields(Collection.MOVEMENTS, {"date": "x"}) == {"created_at": "x"}

    def test_decode_row_returns_cache_shape(self):
        record = decode_row(Collection.PRODUCTS, {"id": ["A1"], "name": "Cable", "qty": 2})
        assert record == {"id": "A1", "name": "Cable", "qty": 2}

    def test_decode_movement_row(self):
        record = decode_row(
            Collection.MOVEMENTS,
            {"id": 7, "created_at": "2024-05-01T12:00:00+00:00", "prod_id": "A1", "prod_name": "Cable", "qty": 1},
        )
        assert record["id"] == 7
        assert record["date"].startswith("2024-05-01T12:00:00")
        assert record["matricula"] is None
