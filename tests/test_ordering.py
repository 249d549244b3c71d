import pytest

from errors import ApiError, ErrorKind
from ordering import (
    ALLOWED_TRANSITIONS,
    TAX_RATE,
    build_order,
    check_transition,
    parse_status,
    price_order,
    validate_order_payload,
)
from schemas import OrderStatus


def payload(**overrides):
    data = {
        "customer": "c1",
        "restaurant": "r1",
        "items": [{"menuItem": "m1", "price": 350, "quantity": 2}, {"menuItem": "m2", "price": 220, "quantity": 1}],
        "deliveryFee": 49,
    }
    data.update(overrides)
    return data


def test_price_order_sample_cart():
    totals = price_order(payload()["items"], 49)
    assert totals.subtotal == 920
    assert totals.tax == 73.6
    assert totals.total == 1042.6


@pytest.mark.parametrize("items,fee,tax,total", [
    ([{"price": 9.99, "quantity": 3}], 2.5, 2.40, 34.87),
    ([{"price": 100, "quantity": 1}, {"price": 12.5, "quantity": 2}], 0, 10.0, 135.0),
    ([{"price": 1, "quantity": 1}], 39, 0.08, 40.08),
    # half-cent ties round up
    ([{"price": 1.5625, "quantity": 1}], 0, 0.13, 1.69),
    ([{"price": 3.125, "quantity": 1}], 0.75, 0.25, 4.13),
])
def test_price_order_formula(items, fee, tax, total):
    totals = price_order(items, fee)
    assert totals.tax == tax
    assert totals.total == total


def test_tax_rate_is_eight_percent():
    assert TAX_RATE == 0.08


@pytest.mark.parametrize("missing", ["customer", "restaurant", "items", "deliveryFee"])
def test_missing_required_field(missing):
    data = payload()
    del data[missing]
    with pytest.raises(ApiError) as exc:
        validate_order_payload(data)
    assert exc.value.kind is ErrorKind.BAD_REQUEST
    assert "Missing required fields" in exc.value.message


def test_empty_items_rejected():
    with pytest.raises(ApiError) as exc:
        validate_order_payload(payload(items=[]))
    assert exc.value.message == "Order must include at least one item"


def test_items_must_be_a_list():
    with pytest.raises(ApiError) as exc:
        validate_order_payload(payload(items={"price": 1, "quantity": 1}))
    assert exc.value.status_code == 400


@pytest.mark.parametrize("item", [
    {"menuItem": "m1", "quantity": 1},
    {"menuItem": "m1", "price": 10},
    {"menuItem": "m1", "price": 0, "quantity": 1},
    {"menuItem": "m1", "price": 10, "quantity": -1},
    {"menuItem": "m1", "price": "10", "quantity": 1},
    {"menuItem": "m1", "price": 10, "quantity": True},
])
def test_bad_line_item_rejected(item):
    with pytest.raises(ApiError) as exc:
        validate_order_payload(payload(items=[item]))
    assert exc.value.message == "Each item must include price and quantity"


@pytest.mark.parametrize("item", [
    {"price": float("inf"), "quantity": 1},
    {"price": 10, "quantity": float("inf")},
    {"price": float("nan"), "quantity": 1},
    {"price": 10, "quantity": 10 ** 400},
])
def test_non_finite_line_item_rejected(item):
    with pytest.raises(ApiError) as exc:
        validate_order_payload(payload(items=[item]))
    assert exc.value.status_code == 400


@pytest.mark.parametrize("fee", [float("inf"), float("nan")])
def test_non_finite_delivery_fee_rejected(fee):
    with pytest.raises(ApiError):
        validate_order_payload(payload(deliveryFee=fee))


def test_overflowing_subtotal_rejected():
    with pytest.raises(ApiError) as exc:
        build_order(payload(items=[{"price": 1e308, "quantity": 2}]))
    assert exc.value.message == "Order amount is too large"


def test_overflowing_total_rejected():
    with pytest.raises(ApiError):
        price_order([{"price": 1.7e308, "quantity": 1}], 0)


def test_fractional_quantity_rejected():
    with pytest.raises(ApiError):
        validate_order_payload(payload(items=[{"price": 10, "quantity": 1.5}]))


def test_free_delivery_is_allowed():
    order = build_order(payload(deliveryFee=0))
    assert order.delivery_fee == 0
    assert order.total == 993.6


def test_negative_delivery_fee_rejected():
    with pytest.raises(ApiError):
        validate_order_payload(payload(deliveryFee=-1))


def test_build_order_defaults_to_pending():
    order = build_order(payload())
    assert order.status == "pending"
    assert order.subtotal == 920
    assert order.items[0].menu_item == "m1"
    doc = order.model_dump(by_alias=True)
    assert doc["deliveryFee"] == 49
    assert doc["items"][0]["menuItem"] == "m1"


def test_build_order_ignores_client_totals():
    order = build_order(payload(subtotal=1, tax=0, total=1))
    assert order.total == 1042.6


def test_build_order_rejects_unknown_status():
    with pytest.raises(ApiError):
        build_order(payload(status="teleported"))


def test_parse_status():
    assert parse_status("picked-up") is OrderStatus.PICKED_UP
    with pytest.raises(ApiError) as exc:
        parse_status(None)
    assert exc.value.message == "Missing status in request body"


def test_lifecycle_happy_path():
    path = ["pending", "confirmed", "preparing", "ready", "picked-up", "delivered"]
    for current, new in zip(path, path[1:]):
        check_transition(current, OrderStatus(new))


@pytest.mark.parametrize("current", ["pending", "confirmed", "preparing"])
def test_cancel_from_early_states(current):
    check_transition(current, OrderStatus.CANCELLED)


@pytest.mark.parametrize("current,new", [
    ("ready", "cancelled"),
    ("delivered", "pending"),
    ("cancelled", "confirmed"),
    ("pending", "delivered"),
])
def test_disallowed_transition(current, new):
    with pytest.raises(ApiError) as exc:
        check_transition(current, OrderStatus(new))
    assert exc.value.kind is ErrorKind.CONFLICT


def test_same_status_is_noop():
    check_transition("ready", OrderStatus.READY)


def test_terminal_states_have_no_exits():
    assert not ALLOWED_TRANSITIONS[OrderStatus.DELIVERED]
    assert not ALLOWED_TRANSITIONS[OrderStatus.CANCELLED]
