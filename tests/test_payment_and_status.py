"""
The payment endpoint is a simulation: it never talks to a gateway and
always reports success. These tests pin that artifact, not a real payment
contract.
"""

import payment
from schemas import PaymentRequest


def test_simulated_payment_always_succeeds(client):
    res = client.post("/api/payment/process", json={
        "amount": 1042.6,
        "currency": "INR",
        "paymentMethod": "card",
        "customerInfo": {"id": "u1", "name": "Asha"},
        "orderData": {"total": 1042.6, "itemCount": 2},
    })
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["payment"]["transactionId"].startswith("TXN")
    assert body["payment"]["status"] == "completed"
    assert body["payment"]["amount"] == 1042.6
    assert body["payment"]["orderData"] == {"total": 1042.6, "itemCount": 2}


def test_simulated_payment_accepts_minimal_payload(client):
    body = client.post("/api/payment/process", json={}).json()
    assert body["success"] is True
    assert body["payment"]["transactionId"]
    assert body["payment"]["currency"] == "INR"


def test_transaction_id_shape(monkeypatch):
    monkeypatch.setattr(payment.time, "time", lambda: 1700000000.5)
    monkeypatch.setattr(payment.random, "randint", lambda a, b: 42)
    assert payment.generate_transaction_id() == "TXN170000000050042"


def test_simulate_payment_echoes_request():
    result = payment.simulate_payment(PaymentRequest(amount=10, payment_method="upi"))
    assert result["payment"]["paymentMethod"] == "upi"
    assert result["message"] == "Payment processed successfully"


def test_routes_unavailable_without_database(offline_client):
    for path in ("/api/restaurants", "/api/menu", "/api/orders"):
        res = offline_client.get(path)
        assert res.status_code == 503
        assert res.json()["kind"] == "service_unavailable"
    assert offline_client.post("/api/payment/process", json={"amount": 1}).status_code == 503
    assert offline_client.post("/api/seed").status_code == 503


def test_health_reports_connected(client):
    assert client.get("/health").json()["database"] == "Connected"


def test_health_reports_offline(offline_client):
    body = offline_client.get("/health").json()
    assert body["status"] == "OK"
    assert body["database"] == "Not Connected"


def test_setup_and_root_never_gated(offline_client):
    setup = offline_client.get("/api/setup")
    assert setup.status_code == 200
    assert setup.json()["currentStatus"] == "Not Connected"
    assert offline_client.get("/").json()["message"] == "Foodie API is running!"


def test_seed_endpoint(client, db):
    body = client.post("/api/seed").json()
    assert body["restaurants"] == 6
    assert body["menuItems"] == 24
    assert db["user"].count_documents({}) == 6
