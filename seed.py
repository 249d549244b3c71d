"""
Sample data for the Foodie storefront.

seed_database wipes users, restaurants and menu items (orders are kept) and
inserts six owners, their restaurants and four menu items per restaurant.
"""

import logging
from typing import Dict

from pymongo.database import Database

from database import create_document
from schemas import MenuItem, Restaurant, User

log = logging.getLogger(__name__)

ITEMS_PER_RESTAURANT = 4

_WEEKDAY_HOURS = {"open": "11:00", "close": "22:00"}
_WEEKEND_HOURS = {"open": "11:00", "close": "23:00"}


def _chandigarh(street: str, zip_code: str) -> dict:
    return {
        "street": street,
        "city": "Chandigarh",
        "state": "Punjab",
        "zip_code": zip_code,
        "coordinates": {"lat": 30.7333, "lng": 76.7794},
    }


SAMPLE_USERS = [
    User(name="Mario Rossi", email="mario@italianfood.com", phone="+91-98765-43210", role="restaurant"),
    User(name="Chen Wei", email="chen@chinesedelight.com", phone="+91-98765-43211", role="restaurant"),
    User(name="Carlos Rodriguez", email="carlos@mexicanfiesta.com", phone="+91-98765-43212", role="restaurant"),
    User(name="Priya Sharma", email="priya@spicepalace.com", phone="+91-98765-43213", role="restaurant"),
    User(name="Somchai Tanaka", email="somchai@thaigarden.com", phone="+91-98765-43214", role="restaurant"),
    User(name="John Smith", email="john@americangrill.com", phone="+91-98765-43215", role="restaurant"),
]

SAMPLE_RESTAURANTS = [
    dict(
        name="Bella Italia",
        description="Authentic Italian cuisine with fresh pasta, wood-fired pizzas, and traditional recipes passed down through generations.",
        cuisine=["Italian"],
        address=_chandigarh("Sector 17, Plaza", "160017"),
        contact={"phone": "+91-172-2701234", "email": "info@bellaitalia.com"},
        rating=4.8, review_count=245,
        delivery_time={"min": 25, "max": 35}, delivery_fee=49, minimum_order=250,
        operating_hours={
            "monday": _WEEKDAY_HOURS, "tuesday": _WEEKDAY_HOURS, "wednesday": _WEEKDAY_HOURS,
            "thursday": _WEEKDAY_HOURS, "friday": _WEEKEND_HOURS, "saturday": _WEEKEND_HOURS,
            "sunday": {"open": "12:00", "close": "21:00"},
        },
    ),
    dict(
        name="Golden Dragon",
        description="Traditional Chinese restaurant serving authentic Szechuan and Cantonese dishes with the finest ingredients.",
        cuisine=["Chinese"],
        address=_chandigarh("Sector 22, Market", "160022"),
        contact={"phone": "+91-172-2702345", "email": "info@goldendragon.com"},
        rating=4.6, review_count=189,
        delivery_time={"min": 30, "max": 45}, delivery_fee=59, minimum_order=300,
    ),
    dict(
        name="Casa Mexico",
        description="Vibrant Mexican restaurant offering fresh tacos, burritos, and traditional dishes with authentic flavors.",
        cuisine=["Mexican"],
        address=_chandigarh("Sector 35, Main Market", "160035"),
        contact={"phone": "+91-172-2703456", "email": "hola@casamexico.com"},
        rating=4.7, review_count=156,
        delivery_time={"min": 20, "max": 30}, delivery_fee=39, minimum_order=200,
    ),
    dict(
        name="Spice Palace",
        description="Exquisite Indian cuisine featuring aromatic curries, tandoor specialties, and traditional biryanis.",
        cuisine=["Indian"],
        address=_chandigarh("Sector 8, City Centre", "160008"),
        contact={"phone": "+91-172-2704567", "email": "namaste@spicepalace.com"},
        rating=4.9, review_count=298,
        delivery_time={"min": 35, "max": 50}, delivery_fee=69, minimum_order=350,
    ),
    dict(
        name="Thai Garden",
        description="Fresh and flavorful Thai cuisine with authentic pad thai, green curry, and traditional soups.",
        cuisine=["Thai"],
        address=_chandigarh("Sector 26, Shopping Complex", "160026"),
        contact={"phone": "+91-172-2705678", "email": "hello@thaigarden.com"},
        rating=4.5, review_count=167,
        delivery_time={"min": 25, "max": 40}, delivery_fee=49, minimum_order=250,
    ),
    dict(
        name="American Grill House",
        description="Classic American comfort food with juicy burgers, crispy fries, and hearty steaks.",
        cuisine=["American"],
        address=_chandigarh("Sector 17, Central Plaza", "160017"),
        contact={"phone": "+91-172-2706789", "email": "info@americangrill.com"},
        rating=4.4, review_count=203,
        delivery_time={"min": 20, "max": 35}, delivery_fee=39, minimum_order=180,
    ),
]

# Grouped ITEMS_PER_RESTAURANT at a time, in SAMPLE_RESTAURANTS order.
SAMPLE_MENU_ITEMS = [
    # Bella Italia
    dict(name="Margherita Pizza", description="Classic wood-fired pizza with fresh mozzarella, basil, and San Marzano tomatoes",
         price=350, category="main", ingredients=["Mozzarella", "Basil", "Tomatoes", "Olive Oil"],
         dietary=["vegetarian"], rating=4.8, review_count=45),
    dict(name="Spaghetti Carbonara", description="Traditional Roman pasta with eggs, pecorino cheese, pancetta, and black pepper",
         price=420, category="main", ingredients=["Spaghetti", "Eggs", "Pecorino", "Pancetta"],
         rating=4.9, review_count=38),
    dict(name="Caesar Salad", description="Crisp romaine lettuce with parmesan, croutons, and our signature Caesar dressing",
         price=250, category="appetizer", ingredients=["Romaine", "Parmesan", "Croutons", "Caesar Dressing"],
         dietary=["vegetarian"], rating=4.6, review_count=29),
    dict(name="Tiramisu", description="Classic Italian dessert with coffee-soaked ladyfingers and mascarpone cream",
         price=220, category="dessert", ingredients=["Mascarpone", "Coffee", "Ladyfingers", "Cocoa"],
         dietary=["vegetarian"], rating=4.7, review_count=52),
    # Golden Dragon
    dict(name="Kung Pao Chicken", description="Spicy Szechuan dish with chicken, peanuts, vegetables, and chili peppers",
         price=320, category="main", ingredients=["Chicken", "Peanuts", "Bell Peppers", "Chili"],
         rating=4.7, review_count=34),
    dict(name="Sweet and Sour Pork", description="Crispy pork with pineapple, bell peppers in tangy sweet and sour sauce",
         price=380, category="main", ingredients=["Pork", "Pineapple", "Bell Peppers", "Sweet & Sour Sauce"],
         rating=4.5, review_count=28),
    dict(name="Spring Rolls", description="Crispy vegetable spring rolls served with sweet chili dipping sauce",
         price=180, category="appetizer", ingredients=["Cabbage", "Carrots", "Bean Sprouts", "Wrapper"],
         dietary=["vegetarian"], rating=4.4, review_count=41),
    dict(name="Fried Rice", description="Wok-fried rice with eggs, vegetables, and your choice of protein",
         price=280, category="main", ingredients=["Rice", "Eggs", "Mixed Vegetables", "Soy Sauce"],
         rating=4.6, review_count=33),
    # Casa Mexico
    dict(name="Chicken Tacos", description="Three soft tacos with grilled chicken, onions, cilantro, and lime",
         price=300, category="main", ingredients=["Chicken", "Tortillas", "Onions", "Cilantro", "Lime"],
         rating=4.8, review_count=67),
    dict(name="Beef Burrito", description="Large flour tortilla filled with seasoned beef, rice, beans, and cheese",
         price=340, category="main", ingredients=["Rice", "Beans", "Cheese", "Tortilla"],
         rating=4.7, review_count=45),
    dict(name="Guacamole & Chips", description="Fresh avocado dip with lime, cilantro, and jalapeños served with tortilla chips",
         price=200, category="appetizer", ingredients=["Avocado", "Lime", "Cilantro", "Jalapeños", "Chips"],
         dietary=["vegetarian", "vegan"], rating=4.9, review_count=78),
    dict(name="Churros", description="Crispy fried dough sticks rolled in cinnamon sugar, served with chocolate sauce",
         price=160, category="dessert", ingredients=["Flour", "Cinnamon", "Sugar", "Chocolate"],
         dietary=["vegetarian"], rating=4.6, review_count=34),
    # Spice Palace
    dict(name="Chicken Tikka Masala", description="Tender chicken in creamy tomato-based curry sauce with aromatic spices",
         price=380, category="main", ingredients=["Chicken", "Tomatoes", "Cream", "Spices"],
         rating=4.9, review_count=89),
    dict(name="Vegetable Biryani", description="Fragrant basmati rice with mixed vegetables, saffron, and traditional spices",
         price=320, category="main", ingredients=["Basmati Rice", "Mixed Vegetables", "Saffron", "Spices"],
         dietary=["vegetarian"], rating=4.7, review_count=56),
    dict(name="Samosas", description="Crispy pastries filled with spiced potatoes and peas, served with chutney",
         price=140, category="appetizer", ingredients=["Potatoes", "Peas", "Pastry", "Spices"],
         dietary=["vegetarian"], rating=4.8, review_count=43),
    dict(name="Mango Lassi", description="Refreshing yogurt drink blended with sweet mango and cardamom",
         price=90, category="beverage", ingredients=["Yogurt", "Mango", "Cardamom", "Sugar"],
         dietary=["vegetarian"], rating=4.6, review_count=29),
    # Thai Garden
    dict(name="Pad Thai", description="Stir-fried rice noodles with shrimp, tofu, bean sprouts, and tamarind sauce",
         price=320, category="main", ingredients=["Rice Noodles", "Shrimp", "Tofu", "Bean Sprouts", "Tamarind"],
         rating=4.8, review_count=72),
    dict(name="Green Curry", description="Spicy coconut curry with chicken, Thai basil, and vegetables",
         price=360, category="main", ingredients=["Chicken", "Coconut Milk", "Green Curry Paste", "Thai Basil"],
         rating=4.7, review_count=48),
    dict(name="Tom Yum Soup", description="Hot and sour soup with shrimp, mushrooms, lemongrass, and lime leaves",
         price=220, category="appetizer", ingredients=["Shrimp", "Mushrooms", "Lemongrass", "Lime Leaves"],
         rating=4.6, review_count=35),
    dict(name="Mango Sticky Rice", description="Sweet sticky rice topped with fresh mango slices and coconut cream",
         price=180, category="dessert", ingredients=["Sticky Rice", "Mango", "Coconut Cream", "Sugar"],
         dietary=["vegetarian", "vegan"], rating=4.9, review_count=41),
    # American Grill House
    dict(name="Classic Cheeseburger", description="Juicy patty with cheddar cheese, lettuce, tomato, and special sauce",
         price=300, category="main", ingredients=["Patty", "Cheddar", "Lettuce", "Tomato", "Bun"],
         rating=4.5, review_count=67),
    dict(name="BBQ Ribs", description="Slow-cooked pork ribs with tangy BBQ sauce and coleslaw",
         price=480, category="main", ingredients=["Pork Ribs", "BBQ Sauce", "Coleslaw", "Spices"],
         rating=4.7, review_count=54),
    dict(name="Chicken Wings", description="Crispy chicken wings tossed in spicy sauce with ranch dip",
         price=250, category="appetizer", ingredients=["Chicken Wings", "Sauce", "Ranch", "Celery"],
         rating=4.6, review_count=43),
    dict(name="Apple Pie", description="Classic American apple pie with cinnamon and vanilla ice cream",
         price=160, category="dessert", ingredients=["Apples", "Cinnamon", "Pie Crust", "Vanilla Ice Cream"],
         dietary=["vegetarian"], rating=4.8, review_count=38),
]


def seed_database(db: Database) -> Dict[str, int]:
    log.info("Seeding database %s", db.name)

    for collection in ("user", "restaurant", "menuitem"):
        db[collection].delete_many({})

    owner_ids = [create_document(db, "user", user) for user in SAMPLE_USERS]

    restaurant_ids = [
        create_document(db, "restaurant", Restaurant(owner=owner_id, **data))
        for owner_id, data in zip(owner_ids, SAMPLE_RESTAURANTS)
    ]

    menu_count = 0
    for index, data in enumerate(SAMPLE_MENU_ITEMS):
        restaurant_index = index // ITEMS_PER_RESTAURANT
        if restaurant_index >= len(restaurant_ids):
            break
        create_document(db, "menuitem", MenuItem(restaurant=restaurant_ids[restaurant_index], **data))
        menu_count += 1

    summary = {"users": len(owner_ids), "restaurants": len(restaurant_ids), "menuItems": menu_count}
    log.info("Seeding complete: %s", summary)
    return summary


def seed_if_empty(db: Database) -> bool:
    count = db["restaurant"].count_documents({})
    if count > 0:
        log.info("Found %s restaurants, skipping seed", count)
        return False
    log.info("Database appears to be empty, seeding with sample data")
    seed_database(db)
    return True
