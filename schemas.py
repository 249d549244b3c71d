"""
Database Schemas for the Foodie storefront

Each Pydantic model represents a collection in MongoDB. The collection name is the
lowercased class name by convention in this project.

Collections:
- user
- restaurant
- menuitem
- order

Documents are stored and served with camelCase keys (deliveryFee, isOpen, ...);
the Python attributes stay snake_case.
"""

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


# ---------- Users ----------

class User(Document):
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    phone: Optional[str] = Field(None, description="Contact phone")
    role: Literal["customer", "restaurant"] = Field("customer", description="customer | restaurant owner")


# ---------- Restaurants ----------

class Coordinates(Document):
    lat: float
    lng: float


class Address(Document):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    coordinates: Optional[Coordinates] = None


class Contact(Document):
    phone: Optional[str] = None
    email: Optional[str] = None


class DeliveryTime(Document):
    min: int = Field(30, ge=0, description="Fastest delivery estimate in minutes")
    max: int = Field(45, ge=0, description="Slowest delivery estimate in minutes")


class OpeningHours(Document):
    open: str = Field(..., description="HH:MM")
    close: str = Field(..., description="HH:MM")


Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


class Restaurant(Document):
    name: str = Field(..., description="Restaurant name")
    description: Optional[str] = Field(None, description="Short profile")
    cuisine: List[str] = Field(default_factory=list, description="Cuisines served, e.g. Italian")
    address: Optional[Address] = None
    contact: Optional[Contact] = None
    image: Optional[str] = Field(None, description="Cover image URL")
    rating: float = Field(0, ge=0, le=5, description="Average rating")
    review_count: int = Field(0, ge=0)
    delivery_time: DeliveryTime = Field(default_factory=DeliveryTime)
    delivery_fee: float = Field(0, ge=0, description="Delivery fee")
    minimum_order: float = Field(0, ge=0, description="Minimum order value")
    is_open: bool = Field(True)
    operating_hours: Optional[Dict[Weekday, OpeningHours]] = None
    owner: Optional[str] = Field(None, description="Owning user id as string")


# ---------- Menu ----------

MenuCategory = Literal["appetizer", "main", "dessert", "beverage", "special"]
DietaryTag = Literal["vegetarian", "vegan", "gluten-free", "dairy-free", "keto", "halal"]


class NutritionInfo(Document):
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None


class MenuItem(Document):
    restaurant: str = Field(..., description="Linked restaurant id as string")
    name: str = Field(..., description="Dish name")
    description: str = Field(..., description="Dish description")
    price: float = Field(..., ge=0, description="Price")
    category: MenuCategory
    image: str = Field("", description="Dish image URL")
    ingredients: List[str] = Field(default_factory=list)
    nutrition_info: Optional[NutritionInfo] = None
    dietary: List[DietaryTag] = Field(default_factory=list)
    is_available: bool = Field(True)
    rating: float = Field(0, ge=0, le=5)
    review_count: int = Field(0, ge=0)


# ---------- Orders ----------

class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    PICKED_UP = "picked-up"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderItem(Document):
    """Line item: a snapshot of price and quantity at order time."""
    menu_item: Optional[str] = Field(None, description="MenuItem id as string")
    name: Optional[str] = Field(None, description="Snapshot of the item name")
    price: float = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class Order(Document):
    customer: str = Field(..., description="Customer user id as string")
    restaurant: str = Field(..., description="Restaurant id as string")
    items: List[OrderItem] = Field(..., min_length=1)
    delivery_fee: float = Field(..., ge=0)
    subtotal: float = Field(..., ge=0)
    tax: float = Field(..., ge=0)
    total: float = Field(..., ge=0)
    status: OrderStatus = Field(OrderStatus.PENDING)


class OrderStatusUpdate(Document):
    status: Optional[str] = None


# ---------- Payment (simulation) ----------

class PaymentRequest(Document):
    amount: Optional[float] = None
    currency: str = Field("INR")
    payment_method: Optional[str] = None
    customer_info: Optional[dict] = None
    order_data: Optional[dict] = None
