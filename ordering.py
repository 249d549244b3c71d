"""
Order pricing, validation and status lifecycle.

The server-side totals are authoritative: subtotal is the sum of
price x quantity over the line items, tax is TAX_RATE of the subtotal and
total adds the delivery fee, both rounded half-up to 2 decimals. Whatever the client
previewed (see client.PREVIEW_TAX_RATE) is ignored.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Iterable, Mapping, NamedTuple, Optional

from pydantic import ValidationError

from errors import ApiError, ErrorKind, bad_request
from schemas import Order, OrderItem, OrderStatus

log = logging.getLogger(__name__)

TAX_RATE = 0.08
CENT = Decimal("0.01")

REQUIRED_FIELDS = ("customer", "restaurant", "items", "deliveryFee")

# delivered and cancelled are terminal
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.PICKED_UP},
    OrderStatus.PICKED_UP: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


class OrderTotals(NamedTuple):
    subtotal: float
    tax: float
    total: float


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _is_positive(value: Any) -> bool:
    return _is_number(value) and _is_finite(value) and value > 0


def _round_cents(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def validate_order_payload(payload: Any) -> None:
    """Raise a bad_request ApiError unless the payload can be priced."""
    if not isinstance(payload, Mapping):
        raise bad_request("Order payload must be a JSON object")

    if any(payload.get(field) in (None, "") for field in REQUIRED_FIELDS):
        raise bad_request("Missing required fields: customer, restaurant, items, or deliveryFee")

    items = payload["items"]
    if not isinstance(items, list) or len(items) == 0:
        raise bad_request("Order must include at least one item")

    for item in items:
        if not isinstance(item, Mapping) or not _is_positive(item.get("price")) \
                or not _is_positive(item.get("quantity")):
            raise bad_request("Each item must include price and quantity")
        if float(item["quantity"]) != int(item["quantity"]):
            raise bad_request("Item quantity must be a whole number")

    fee = payload["deliveryFee"]
    if not _is_number(fee) or not _is_finite(fee) or fee < 0:
        raise bad_request("deliveryFee must be a non-negative number")


def price_order(items: Iterable[Mapping], delivery_fee: float) -> OrderTotals:
    """Totals rounded half-up to the cent; raises bad_request if they overflow."""
    subtotal = sum(item["price"] * item["quantity"] for item in items)
    if not _is_finite(subtotal):
        raise bad_request("Order amount is too large")
    exact = Decimal(str(subtotal))
    tax = _round_cents(exact * Decimal(str(TAX_RATE)))
    total = _round_cents(exact + Decimal(str(delivery_fee)) + Decimal(str(tax)))
    if not _is_finite(total):
        raise bad_request("Order amount is too large")
    return OrderTotals(subtotal=subtotal, tax=tax, total=total)


def parse_status(value: Optional[str]) -> OrderStatus:
    if not value:
        raise bad_request("Missing status in request body")
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise bad_request(f"Unknown status '{value}', expected one of: {allowed}")


def build_order(payload: Mapping) -> Order:
    """Validate, price and wrap an incoming order payload."""
    validate_order_payload(payload)
    status = parse_status(payload.get("status") or OrderStatus.PENDING.value)

    totals = price_order(payload["items"], payload["deliveryFee"])
    try:
        order = Order(
            customer=str(payload["customer"]),
            restaurant=str(payload["restaurant"]),
            items=[OrderItem.model_validate(item) for item in payload["items"]],
            delivery_fee=payload["deliveryFee"],
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=totals.total,
            status=status,
        )
    except ValidationError as e:
        raise ApiError(ErrorKind.BAD_REQUEST, "Invalid order", error=str(e))
    return order


def check_transition(current: Optional[str], new: OrderStatus) -> None:
    """Raise a conflict ApiError when an order cannot move from current to new."""
    if current == new.value:
        return
    try:
        current_status = OrderStatus(current)
    except ValueError:
        # legacy free-form value written before the lifecycle was enforced
        log.warning("Order has unknown status %r, allowing move to %s", current, new.value)
        return
    if new not in ALLOWED_TRANSITIONS[current_status]:
        raise ApiError(
            ErrorKind.CONFLICT,
            f"Cannot change order status from '{current_status.value}' to '{new.value}'",
        )
