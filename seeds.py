"""
Seed reference data.

Usage:
     python seeds.py
"""
import logging

from sqlalchemy.orm import Session

from database import get_session_context, init_db
from models import RestaurantCategory
from utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
     "Main Course",
     "Appetizer",
     "Dessert",
     "Beverage",
     "Snack",
     "Breakfast",
     "Lunch",
     "Dinner",
     "Salad",
     "Soup",
     "Side Dish",
     "Kids Menu",
     "Vegetarian",
     "Vegan",
     "Seafood",
     "Grill",
     "Pasta",
     "Pizza",
     "Asian",
     "Western",
     "Other",
]


def seed_restaurant_categories(db: Session, names=DEFAULT_CATEGORIES) -> int:
     """Insert the categories that do not exist yet. Returns how many were added."""
     existing = {name for (name,) in db.query(RestaurantCategory.name).all()}
     added = 0
     for name in names:
          if name not in existing:
               db.add(RestaurantCategory(name=name))
               existing.add(name)
               added += 1
     db.flush()
     return added


if __name__ == "__main__":
     configure_logging()
     init_db()
     with get_session_context() as db:
          count = seed_restaurant_categories(db)
     logger.info("Seeded %d restaurant categories", count)
