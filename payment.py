"""
Payment simulation.

No gateway is contacted: every request "succeeds" with a locally generated
transaction id. Replace simulate_payment before taking real money.
"""

import logging
import random
import time
from datetime import datetime, timezone

from schemas import PaymentRequest

log = logging.getLogger(__name__)


def generate_transaction_id() -> str:
    return f"TXN{int(time.time() * 1000)}{random.randint(0, 999)}"


def simulate_payment(request: PaymentRequest) -> dict:
    log.info("Payment request: amount=%s %s method=%s customer=%s",
             request.amount, request.currency, request.payment_method, request.customer_info)

    payment = {
        "success": True,
        "transactionId": generate_transaction_id(),
        "amount": request.amount,
        "currency": request.currency,
        "paymentMethod": request.payment_method,
        "status": "completed",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "customerInfo": request.customer_info,
        "orderData": request.order_data,
    }

    log.info("Payment simulated, transaction id %s", payment["transactionId"])
    return {
        "success": True,
        "message": "Payment processed successfully",
        "payment": payment,
    }
