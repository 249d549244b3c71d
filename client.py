"""
Python client for the Foodie API plus a local shopping cart.

The cart mirrors the storefront's cart page: it keeps line items locally
and shows an advisory price preview with a 5% tax on a whole-rupee basis.
Orders are priced by the server at 8%, so the two totals can differ; the
server value is the one that counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

import requests

log = logging.getLogger(__name__)

PREVIEW_TAX_RATE = Decimal("0.05")
PREVIEW_DELIVERY_FEE = 49
DEFAULT_TIMEOUT = 10  # seconds
CHECKOUT_CURRENCY = "INR"
CHECKOUT_PAYMENT_METHOD = "card"


class StorefrontError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class CheckoutError(Exception):
    pass


# ---------- Cart ----------

@dataclass
class CartLine:
    item: Dict[str, Any]
    quantity: int

    @property
    def item_id(self) -> str:
        return self.item["id"]

    @property
    def line_total(self) -> float:
        return self.item["price"] * self.quantity


@dataclass(frozen=True)
class CartPreview:
    subtotal: float
    delivery_fee: float
    tax: int
    total: float


@dataclass
class Cart:
    lines: Dict[str, CartLine] = field(default_factory=dict)

    def add(self, item: Dict[str, Any], quantity: int = 1) -> None:
        line = self.lines.get(item["id"])
        if line:
            line.quantity += quantity
        else:
            self.lines[item["id"]] = CartLine(item=item, quantity=quantity)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove(item_id)
        elif item_id in self.lines:
            self.lines[item_id].quantity = quantity

    def remove(self, item_id: str) -> None:
        self.lines.pop(item_id, None)

    def clear(self) -> None:
        self.lines.clear()

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self.lines.values())

    def preview(self, delivery_fee: float = PREVIEW_DELIVERY_FEE) -> CartPreview:
        subtotal = self.subtotal
        tax = int((Decimal(str(subtotal)) * PREVIEW_TAX_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return CartPreview(subtotal=subtotal, delivery_fee=delivery_fee, tax=tax,
                           total=subtotal + delivery_fee + tax)


# ---------- API client ----------

@dataclass
class CheckoutResult:
    payment: Dict[str, Any]
    orders: List[Dict[str, Any]]


class StorefrontClient:
    """Thin wrapper over the REST routes; any requests-compatible session works."""

    def __init__(self, base_url: str, session=None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, params: Optional[dict] = None, json: Any = None):
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        response = self.session.request(method, f"{self.base_url}{path}", params=params or None,
                                        json=json, timeout=self.timeout)
        if response.status_code >= 400:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            raise StorefrontError(response.status_code, message)
        return response.json()

    def health(self) -> dict:
        return self._request("GET", "/health")

    def list_restaurants(self, cuisine=None, search=None, sort_by=None) -> List[dict]:
        return self._request("GET", "/api/restaurants",
                             params={"cuisine": cuisine, "search": search, "sortBy": sort_by})

    def get_restaurant(self, restaurant_id: str) -> dict:
        return self._request("GET", f"/api/restaurants/{restaurant_id}")

    def get_restaurant_menu(self, restaurant_id: str, category=None) -> List[dict]:
        return self._request("GET", f"/api/restaurants/{restaurant_id}/menu", params={"category": category})

    def list_menu(self, restaurant=None, category=None, search=None) -> List[dict]:
        return self._request("GET", "/api/menu",
                             params={"restaurant": restaurant, "category": category, "search": search})

    def get_menu_item(self, item_id: str) -> dict:
        return self._request("GET", f"/api/menu/{item_id}")

    def create_order(self, payload: dict) -> dict:
        return self._request("POST", "/api/orders", json=payload)

    def list_orders(self, customer=None, restaurant=None, status=None) -> List[dict]:
        return self._request("GET", "/api/orders",
                             params={"customer": customer, "restaurant": restaurant, "status": status})

    def get_order(self, order_id: str) -> dict:
        return self._request("GET", f"/api/orders/{order_id}")

    def update_order_status(self, order_id: str, status: str) -> dict:
        return self._request("PATCH", f"/api/orders/{order_id}/status", json={"status": status})

    def process_payment(self, payload: dict) -> dict:
        return self._request("POST", "/api/payment/process", json=payload)

    def checkout(self, cart: Cart, user: Optional[dict]) -> CheckoutResult:
        """
        Pay for the cart through the payment simulation, then clear it and
        reload the user's orders. No order is created here: the storefront's
        checkout never called POST /api/orders.
        """
        if not user:
            raise CheckoutError("Sign in to check out")
        if not len(cart):
            raise CheckoutError("Cart is empty")

        preview = cart.preview()
        payload = {
            "amount": preview.total,
            "currency": CHECKOUT_CURRENCY,
            "paymentMethod": CHECKOUT_PAYMENT_METHOD,
            "customerInfo": {"id": user["id"], "name": user.get("name"), "email": user.get("email")},
            "orderData": {
                "items": [
                    {
                        "id": line.item_id,
                        "name": line.item.get("name"),
                        "price": line.item["price"],
                        "quantity": line.quantity,
                        "total": line.line_total,
                    }
                    for line in cart.lines.values()
                ],
                "subtotal": preview.subtotal,
                "deliveryFee": preview.delivery_fee,
                "tax": preview.tax,
                "total": preview.total,
                "itemCount": len(cart),
            },
        }

        result = self.process_payment(payload)
        if not result.get("success"):
            raise CheckoutError("Payment failed. Please try again.")

        log.info("Checkout paid, transaction id %s", result["payment"]["transactionId"])
        cart.clear()
        orders = self.list_orders(customer=user["id"])
        return CheckoutResult(payment=result["payment"], orders=orders)
