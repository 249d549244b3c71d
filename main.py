import logging
import os
import re
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, List, Optional

from dotenv import load_dotenv
from fastapi import Body, Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError

from database import (
    DatabaseState,
    create_document,
    expand,
    expand_line_items,
    get_db,
    get_documents,
    serialize,
    to_object_id,
)
from errors import ApiError, ErrorKind, not_found
from ordering import build_order, check_transition, parse_status
from payment import simulate_payment
from schemas import MenuItem, OrderStatusUpdate, PaymentRequest, Restaurant
from seed import seed_database, seed_if_empty

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

# Fields exposed when a reference is expanded, per endpoint.
OWNER_FIELDS = ("name", "email")
MENU_RESTAURANT_FIELDS = ("name", "rating", "deliveryTime")
MENU_DETAIL_RESTAURANT_FIELDS = ("name", "rating", "deliveryTime", "address")
ORDER_CUSTOMER_FIELDS = ("name", "email", "phone")
ORDER_RESTAURANT_FIELDS = ("name", "address", "contact")
ORDER_MENU_ITEM_FIELDS = ("name", "price", "image")

MENU_SORT = [("category", 1), ("name", 1)]
ORDER_SORT = [("createdAt", -1), ("_id", -1)]
RESTAURANT_SORTS = {
    "rating": [("rating", -1)],
    "deliveryTime": [("deliveryTime.min", 1)],
}
RESTAURANT_DEFAULT_SORT = [("createdAt", -1), ("_id", -1)]


@asynccontextmanager
async def lifespan(app: FastAPI):
    state: DatabaseState = app.state.database
    if not state.connected and state.connect():
        if os.getenv("SEED_ON_STARTUP", "1") != "0":
            seed_if_empty(state.db)
    if not state.connected:
        log.warning("Database not connected - API routes will return 503 errors, see /api/setup")
    yield
    state.close()


app = FastAPI(title="Foodie API", lifespan=lifespan)
app.state.database = DatabaseState.from_env()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Error handlers ----------

@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = ApiError(ErrorKind.BAD_REQUEST, "Invalid request", error=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    log.exception("Database error on %s %s", request.method, request.url.path)
    error = ApiError(ErrorKind.SERVER_ERROR, "Server error", error=str(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# ---------- Status ----------

@app.get("/")
def read_root(request: Request):
    return {
        "message": "Foodie API is running!",
        "database": request.app.state.database.status(),
        "status": "OK",
    }


@app.get("/health")
def health(request: Request):
    return {
        "status": "OK",
        "database": request.app.state.database.status(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": os.getenv("ENVIRONMENT", "development"),
    }


@app.get("/api/setup")
def setup_instructions(request: Request):
    state: DatabaseState = request.app.state.database
    return {
        "message": "Database Setup Instructions",
        "steps": [
            "1. Create a free MongoDB Atlas account at https://www.mongodb.com/atlas",
            "2. Create a new cluster and database",
            "3. Get your connection string from Atlas",
            "4. Add DATABASE_URL=your_connection_string (and optionally DATABASE_NAME) to .env",
            "5. Restart the server",
        ],
        "currentStatus": state.status(),
        "lastError": state.error,
    }


# ---------- Helpers ----------

def search_filter(text: str, fields: List[str]) -> dict:
    pattern = re.escape(text)
    return {"$or": [{f: {"$regex": pattern, "$options": "i"}} for f in fields]}


def find_one_or_404(db: Database, collection: str, doc_id: str, what: str) -> dict:
    doc = db[collection].find_one({"_id": to_object_id(doc_id)})
    if not doc:
        raise not_found(what)
    return serialize(doc)


def expand_orders(db: Database, orders: List[dict]) -> List[dict]:
    expand(db, orders, "customer", "user", ORDER_CUSTOMER_FIELDS)
    expand(db, orders, "restaurant", "restaurant", ORDER_RESTAURANT_FIELDS)
    expand_line_items(db, orders, ORDER_MENU_ITEM_FIELDS)
    return orders


def ensure_restaurant(db: Database, restaurant_id: str) -> None:
    if not db["restaurant"].find_one({"_id": to_object_id(restaurant_id)}, {"_id": 1}):
        raise not_found("Restaurant")


# ---------- Seed Sample Data ----------

@app.post("/api/seed", response_model=dict)
async def seed_sample_data(db: Database = Depends(get_db)):
    summary = seed_database(db)
    return {"status": "ok", "message": "Database seeded successfully!", **summary}


# ---------- Restaurants ----------

@app.get("/api/restaurants", response_model=List[dict])
async def list_restaurants(
    cuisine: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    db: Database = Depends(get_db),
):
    query: dict = {}
    if cuisine:
        query["cuisine"] = {"$in": [cuisine]}
    if search:
        query.update(search_filter(search, ["name", "description", "cuisine"]))

    sort = RESTAURANT_SORTS.get(sort_by, RESTAURANT_DEFAULT_SORT)
    docs = [serialize(d) for d in get_documents(db, "restaurant", query, sort=sort)]
    return expand(db, docs, "owner", "user", OWNER_FIELDS)


@app.post("/api/restaurants", response_model=dict, status_code=201)
async def create_restaurant(restaurant: Restaurant, db: Database = Depends(get_db)):
    if restaurant.owner and not db["user"].find_one({"_id": to_object_id(restaurant.owner)}, {"_id": 1}):
        raise not_found("Owner")
    inserted_id = create_document(db, "restaurant", restaurant)
    log.info("Created restaurant %s (%s)", inserted_id, restaurant.name)
    return {"id": inserted_id}


@app.get("/api/restaurants/{restaurant_id}", response_model=dict)
async def get_restaurant(restaurant_id: str, db: Database = Depends(get_db)):
    doc = find_one_or_404(db, "restaurant", restaurant_id, "Restaurant")
    return expand(db, [doc], "owner", "user", OWNER_FIELDS)[0]


@app.get("/api/restaurants/{restaurant_id}/menu", response_model=List[dict])
async def get_restaurant_menu(restaurant_id: str, category: Optional[str] = None,
                              db: Database = Depends(get_db)):
    query = {"restaurant": restaurant_id}
    if category:
        query["category"] = category
    return [serialize(d) for d in get_documents(db, "menuitem", query, sort=MENU_SORT)]


# ---------- Menu Items ----------

@app.get("/api/menu", response_model=List[dict])
async def list_menu(
    restaurant: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    db: Database = Depends(get_db),
):
    query: dict = {}
    if restaurant:
        query["restaurant"] = restaurant
    if category:
        query["category"] = category
    if search:
        query.update(search_filter(search, ["name", "description", "ingredients"]))

    docs = [serialize(d) for d in get_documents(db, "menuitem", query, sort=MENU_SORT)]
    return expand(db, docs, "restaurant", "restaurant", MENU_RESTAURANT_FIELDS)


@app.post("/api/menu", response_model=dict, status_code=201)
async def create_menu_item(item: MenuItem, db: Database = Depends(get_db)):
    ensure_restaurant(db, item.restaurant)
    inserted_id = create_document(db, "menuitem", item)
    return {"id": inserted_id}


@app.get("/api/menu/{item_id}", response_model=dict)
async def get_menu_item(item_id: str, db: Database = Depends(get_db)):
    doc = find_one_or_404(db, "menuitem", item_id, "Menu item")
    return expand(db, [doc], "restaurant", "restaurant", MENU_DETAIL_RESTAURANT_FIELDS)[0]


@app.put("/api/menu/{item_id}", response_model=dict)
async def replace_menu_item(item_id: str, item: MenuItem, db: Database = Depends(get_db)):
    oid = to_object_id(item_id)
    existing = db["menuitem"].find_one({"_id": oid}, {"createdAt": 1})
    if not existing:
        raise not_found("Menu item")
    ensure_restaurant(db, item.restaurant)

    data = item.model_dump(by_alias=True)
    data["createdAt"] = existing.get("createdAt")
    data["updatedAt"] = datetime.now(timezone.utc)
    db["menuitem"].replace_one({"_id": oid}, data)
    return await get_menu_item(item_id, db)


# ---------- Orders ----------

@app.post("/api/orders", response_model=dict, status_code=201)
async def create_order(payload: Any = Body(None), db: Database = Depends(get_db)):
    log.info("Received order: %s", payload)
    order = build_order(payload)

    inserted_id = create_document(db, "order", order)
    log.info("Saved order %s: subtotal=%s tax=%s total=%s",
             inserted_id, order.subtotal, order.tax, order.total)

    doc = find_one_or_404(db, "order", inserted_id, "Order")
    return expand_orders(db, [doc])[0]


@app.get("/api/orders", response_model=List[dict])
async def list_orders(
    customer: Optional[str] = None,
    restaurant: Optional[str] = None,
    status: Optional[str] = None,
    db: Database = Depends(get_db),
):
    query = {}
    if customer:
        query["customer"] = customer
    if restaurant:
        query["restaurant"] = restaurant
    if status:
        query["status"] = status

    docs = [serialize(d) for d in get_documents(db, "order", query, sort=ORDER_SORT)]
    return expand_orders(db, docs)


@app.get("/api/orders/{order_id}", response_model=dict)
async def get_order(order_id: str, db: Database = Depends(get_db)):
    doc = find_one_or_404(db, "order", order_id, "Order")
    return expand_orders(db, [doc])[0]


@app.patch("/api/orders/{order_id}/status", response_model=dict)
async def update_order_status(order_id: str, body: Optional[OrderStatusUpdate] = None,
                              db: Database = Depends(get_db)):
    new_status = parse_status(body.status if body else None)
    oid = to_object_id(order_id)

    current = db["order"].find_one({"_id": oid}, {"status": 1})
    if not current:
        raise not_found("Order")
    check_transition(current.get("status"), new_status)

    db["order"].update_one(
        {"_id": oid},
        {"$set": {"status": new_status.value, "updatedAt": datetime.now(timezone.utc)}},
    )
    log.info("Order %s status %s -> %s", order_id, current.get("status"), new_status.value)
    return await get_order(order_id, db)


# ---------- Payment (simulation) ----------

@app.post("/api/payment/process", response_model=dict, dependencies=[Depends(get_db)])
async def process_payment(payment_request: PaymentRequest):
    return simulate_payment(payment_request)


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
