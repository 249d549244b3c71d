import mongomock
import pytest
from fastapi.testclient import TestClient

from database import DatabaseState, create_document
from main import app
from schemas import MenuItem, Restaurant, User
from seed import seed_database


@pytest.fixture
def state():
    st = DatabaseState(name="foodie_test")
    st.attach(mongomock.MongoClient())
    return st


@pytest.fixture
def db(state):
    return state.db


@pytest.fixture
def client(state, monkeypatch):
    monkeypatch.setattr(app.state, "database", state)
    return TestClient(app)


@pytest.fixture
def offline_client(monkeypatch):
    monkeypatch.setattr(app.state, "database", DatabaseState())
    return TestClient(app)


@pytest.fixture
def seeded(db):
    return seed_database(db)


@pytest.fixture
def customer_id(db):
    return create_document(db, "user", User(name="Asha Verma", email="asha@example.com", phone="+91-90000-00001"))


@pytest.fixture
def restaurant_id(db):
    return create_document(db, "restaurant", Restaurant(
        name="Bella Italia", cuisine=["Italian"], delivery_fee=49,
        address={"street": "Sector 17, Plaza", "city": "Chandigarh"},
        contact={"phone": "+91-172-2701234", "email": "info@bellaitalia.com"},
    ))


@pytest.fixture
def menu_ids(db, restaurant_id):
    pizza = create_document(db, "menuitem", MenuItem(
        restaurant=restaurant_id, name="Margherita Pizza", description="Wood-fired pizza",
        price=350, category="main", ingredients=["Mozzarella", "Basil"],
    ))
    tiramisu = create_document(db, "menuitem", MenuItem(
        restaurant=restaurant_id, name="Tiramisu", description="Coffee dessert",
        price=220, category="dessert",
    ))
    return pizza, tiramisu


@pytest.fixture
def order_payload(customer_id, restaurant_id, menu_ids):
    pizza, tiramisu = menu_ids
    return {
        "customer": customer_id,
        "restaurant": restaurant_id,
        "items": [
            {"menuItem": pizza, "name": "Margherita Pizza", "price": 350, "quantity": 2},
            {"menuItem": tiramisu, "name": "Tiramisu", "price": 220, "quantity": 1},
        ],
        "deliveryFee": 49,
    }
