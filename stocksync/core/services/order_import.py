"""
Bulk order import.

Parses semicolon-delimited order lines:

    orderNumber;customerName;branch;operatorId;date;productCode;quantity

Rows sharing an order number become one order; repeated product codes in
the same order are summed into one item.
"""

import csv
import datetime as dt
import io
from dataclasses import dataclass, field

from stocksync.config import get_logger
from stocksync.core.entities.order import Order, OrderItem
from stocksync.core.entities.product import Product

logger = get_logger(__name__)

DEFAULT_CUSTOMER = "Imported"
IMPORT_NOTE = "Imported via CSV"


@dataclass
class ParsedImport:
    """Orders built from one import file."""

    orders: list[Order] = field(default_factory=list)
    rows_read: int = 0
    rows_skipped: int = 0

    @property
    def item_count(self) -> int:
        return sum(len(o.items) for o in self.orders)


def placeholder_name(product_code: str) -> str:
    """Display name for a product code missing from the catalogue."""
    return f"Product {product_code}"


def is_header(fields: list[str]) -> bool:
    """A first row whose leading field has no digit is header text."""
    first = fields[0].strip() if fields else ""
    return not any(ch.isdigit() for ch in first)


def parse_quantity(raw: str | None) -> int:
    """Leading integer of the field; unparseable or non-positive means 1."""
    text = (raw or "").strip()
    digits = ""
    for i, ch in enumerate(text):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
        else:
            break
    try:
        qty = int(digits)
    except ValueError:
        return 1
    return qty if qty > 0 else 1


def parse_date(raw: str | None) -> dt.date:
    text = (raw or "").strip()
    if not text:
        return dt.date.today()
    try:
        return dt.date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return dt.datetime.strptime(text, "%d/%m/%Y").date()
    except ValueError:
        logger.warning("import_date_invalid", value=text)
        return dt.date.today()


def parse_orders(text: str, products: list[Product]) -> ParsedImport:
    """
    Build new orders from import text.

    Args:
        text: Raw file content
        products: Cached catalogue, used for item display names

    Returns:
        ParsedImport with orders in first-seen order
    """
    names = {p.id: p.name for p in products}
    orders: dict[str, Order] = {}
    result = ParsedImport()

    reader = csv.reader(io.StringIO(text), delimiter=";")
    for index, row in enumerate(reader):
        fields = [value.strip() for value in row]
        if not any(fields):
            continue
        if index == 0 and is_header(fields):
            continue

        result.rows_read += 1
        fields += [""] * (7 - len(fields))
        number, customer, branch, operator, date_text, code, qty_text = fields[:7]

        if not number or not code:
            result.rows_skipped += 1
            continue

        qty = parse_quantity(qty_text)

        order = orders.get(number)
        if order is None:
            order = Order(
                order_number=number,
                customer_name=customer or DEFAULT_CUSTOMER,
                filial=branch,
                matricula=operator,
                date=parse_date(date_text),
                obs=IMPORT_NOTE,
            )
            orders[number] = order

        item = order.find_item(code)
        if item is None:
            order.items.append(
                OrderItem(
                    product_id=code,
                    product_name=names.get(code) or placeholder_name(code),
                    qty_requested=qty,
                )
            )
        else:
            item.qty_requested += qty

    result.orders = [o.refresh_status() for o in orders.values()]
    logger.info(
        "import_parsed",
        orders=len(result.orders),
        rows=result.rows_read,
        skipped=result.rows_skipped,
    )
    return result
