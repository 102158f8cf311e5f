"""
Mapping between domain entities and remote rows.

Remote columns are snake_case; order items travel as a JSON array with
camelCase keys, the format other clients of the same backend write. Some
deployments declare identifier columns as arrays, so every identifier read
back is unwrapped to its first element.
"""

import re
from datetime import UTC, date, datetime
from typing import Any

from stocksync.core.entities.movement import Movement
from stocksync.core.entities.order import Order, OrderItem, OrderStatus
from stocksync.core.entities.product import Product
from stocksync.core.entities.sync import Collection

OPERATOR_NOTE_PATTERN = re.compile(r"^\[Mat: (.+?)\]\s*(.*)$", re.DOTALL)


def unwrap_scalar(value: Any) -> Any:
    """First element of an array-typed value, the value itself otherwise."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def wrap_array(value: Any) -> list[Any]:
    """Single-element array for the schema-mismatch retry; [] for null."""
    if value is None:
        return []
    return [value]


# Operator identifier encoding


def encode_operator_note(matricula: str | None, obs: str | None) -> str | None:
    """Prefix the note with the operator identifier: "[Mat: <id>] <note>"."""
    if not matricula:
        return obs
    return f"[Mat: {matricula}] {obs or ''}".strip()


def decode_operator_note(note: str | None) -> tuple[str | None, str | None]:
    """
    Split an encoded note back into (matricula, obs).

    The round trip is exact only for an operator id without "]" and a note
    without leading or trailing whitespace; encoding strips the note.
    """
    if not note or not note.startswith("[Mat:"):
        return None, note
    match = OPERATOR_NOTE_PATTERN.match(note)
    if match is None:
        return None, note
    return match.group(1), match.group(2) or None


# Products


def product_to_row(product: Product) -> dict[str, Any]:
    return {"id": product.id, "name": product.name, "qty": product.qty}


def row_to_product(row: dict[str, Any]) -> Product:
    return Product(
        id=str(unwrap_scalar(row["id"])),
        name=row.get("name") or "",
        qty=int(row.get("qty") or 0),
    )


# Movements


def movement_to_row(movement: Movement) -> dict[str, Any]:
    """Row for insertion; the server assigns its own id."""
    return {
        "prod_id": movement.prod_id,
        "prod_name": movement.prod_name,
        "qty": movement.qty,
        "obs": encode_operator_note(movement.matricula, movement.obs),
        "created_at": movement.date.isoformat(),
    }


def row_to_movement(row: dict[str, Any]) -> Movement:
    created_at = _parse_datetime(row.get("created_at"))

    matricula = row.get("matricula")
    obs = row.get("obs")
    if not matricula:
        matricula, obs = decode_operator_note(obs)

    prod_id = unwrap_scalar(row.get("prod_id"))

    return Movement(
        id=_movement_id(row.get("id"), created_at),
        date=created_at,
        prod_id=str(prod_id) if prod_id else None,
        prod_name=row.get("prod_name") or "",
        qty=int(row.get("qty") or 0),
        obs=obs,
        matricula=matricula,
    )


def _movement_id(raw: Any, created_at: datetime) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return int(created_at.timestamp() * 1000)


# Orders


def order_to_row(order: Order) -> dict[str, Any]:
    """Row without the id; callers add it where the command needs it."""
    return {
        "order_number": order.order_number,
        "customer_name": order.customer_name,
        "filial": order.filial,
        "matricula": order.matricula,
        "date": order.date.isoformat(),
        "status": order.status.value,
        "items": [
            {
                "productId": item.product_id,
                "productName": item.product_name,
                "qtyRequested": item.qty_requested,
                "qtyPicked": item.qty_picked,
            }
            for item in order.items
        ],
        "obs": order.obs,
        "envio_malote": order.envio_malote,
        "entrega_matriz": order.entrega_matriz,
    }


def row_to_order(row: dict[str, Any]) -> Order:
    """Build an order from a row; status is re-derived, never trusted."""
    items = [_item_from_json(raw) for raw in row.get("items") or []]
    order = Order(
        id=str(row["id"]),
        order_number=str(row.get("order_number") or ""),
        customer_name=row.get("customer_name") or "",
        filial=row.get("filial") or "",
        matricula=row.get("matricula") or "",
        date=_parse_date(row.get("date")),
        status=OrderStatus.PENDING,
        items=items,
        obs=row.get("obs"),
        envio_malote=row.get("envio_malote") is True,
        entrega_matriz=row.get("entrega_matriz") is True,
    )
    return order.refresh_status()


def _item_from_json(raw: dict[str, Any]) -> OrderItem:
    return OrderItem(
        product_id=str(raw.get("productId", raw.get("product_id", ""))),
        product_name=raw.get("productName", raw.get("product_name", "")) or "",
        qty_requested=int(raw.get("qtyRequested", raw.get("qty_requested", 0)) or 0),
        qty_picked=int(raw.get("qtyPicked", raw.get("qty_picked", 0)) or 0),
    )


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if value:
        try:
            return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            pass
    return datetime.now(UTC)


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if value:
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            pass
    return date.today()


# Collection-level codec used by the gateway

FIELD_COLUMNS: dict[Collection, dict[str, str]] = {
    Collection.PRODUCTS: {},
    Collection.MOVEMENTS: {"date": "created_at"},
    Collection.ORDERS: {},
}


def column_for(collection: Collection, field: str) -> str:
    """Wire column backing a domain field."""
    return FIELD_COLUMNS[collection].get(field, field)


def encode_record(collection: Collection, record: dict[str, Any]) -> dict[str, Any]:
    """Domain record (as cached) to wire row."""
    if collection == Collection.PRODUCTS:
        return product_to_row(Product.model_validate(record))
    if collection == Collection.MOVEMENTS:
        return movement_to_row(Movement.model_validate(record))
    order = Order.model_validate(record)
    return {"id": order.id, **order_to_row(order)}


def encode_fields(collection: Collection, fields: dict[str, Any]) -> dict[str, Any]:
    """Partial domain fields to wire columns; full orders are re-encoded."""
    if collection == Collection.ORDERS and "order_number" in fields:
        row = encode_record(collection, fields)
        row.pop("id", None)
        return row
    return {column_for(collection, k): v for k, v in fields.items()}


def decode_row(collection: Collection, row: dict[str, Any]) -> dict[str, Any]:
    """Wire row to domain record (as cached)."""
    if collection == Collection.PRODUCTS:
        return row_to_product(row).model_dump(mode="json")
    if collection == Collection.MOVEMENTS:
        return row_to_movement(row).model_dump(mode="json")
    return row_to_order(row).model_dump(mode="json")
