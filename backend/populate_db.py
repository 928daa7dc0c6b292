import os
import sys

# Add 'backend' folder to Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from sqlalchemy.orm import Session

from config import Settings
from database import build_engine, build_session_factory, init_db
from models.users import User
from models.restaurant import Restaurant
from models.menu import Menu
from utils.hashing import get_password_hash

# Demo catalogue: restaurant name, address, [(dish, price)]
SAMPLE_RESTAURANTS = [
    ("La Cocina de Ana", "Calle Mayor 12", [("Paella valenciana", 14.5), ("Gazpacho", 6.0), ("Tortilla espanola", 7.25)]),
    ("Taqueria El Sol", "Avenida Reforma 221", [("Tacos al pastor", 9.0), ("Quesadilla", 7.5)]),
    ("Trattoria Roma", "Via Appia 3", [("Carbonara", 12.0), ("Margherita", 10.5), ("Tiramisu", 5.5)]),
]


def seed(session: Session, admin_email: str, admin_password: str) -> dict:
    """Ensure an admin account and the demo restaurants exist.

    Safe to run repeatedly: existing rows (matched by email / restaurant
    name) are left untouched.
    """
    created = {"admin": False, "restaurants": 0, "menus": 0}

    admin = session.query(User).filter(User.email == admin_email.lower()).first()
    if not admin:
        admin = User(email=admin_email.lower(), password_hash=get_password_hash(admin_password), role="admin")
        session.add(admin)
        created["admin"] = True

    for name, address, dishes in SAMPLE_RESTAURANTS:
        if session.query(Restaurant).filter(Restaurant.name == name).first():
            continue
        restaurant = Restaurant(name=name, address=address)
        restaurant.menus = [Menu(dish=dish, price=price) for dish, price in dishes]
        session.add(restaurant)
        created["restaurants"] += 1
        created["menus"] += len(dishes)

    session.commit()
    return created


if __name__ == "__main__":
    settings = Settings()
    engine = build_engine(settings)
    init_db(engine)

    session = build_session_factory(engine)()
    try:
        result = seed(
            session,
            admin_email=os.getenv("SEED_ADMIN_EMAIL", "admin@example.com"),
            admin_password=os.getenv("SEED_ADMIN_PASSWORD", "admin123"),
        )
    finally:
        session.close()

    print(f"Admin created: {result['admin']}, restaurants: {result['restaurants']}, menus: {result['menus']}")
