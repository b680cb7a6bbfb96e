# models/restaurant.py
import enum
from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, Enum, Table
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, enum_values


class MenuItemStatus(str, enum.Enum):
     """Whether a menu entry is offered to guests."""
     ENABLED = "enabled"
     DISABLED = "disabled"


# Composite primary key: assigning the same category twice is a no-op
menu_item_categories = Table(
     "restaurant_category_menu_items",
     Base.metadata,
     Column(
          "restaurant_category_id",
          Integer,
          ForeignKey("restaurant_categories.id", ondelete="CASCADE"),
          primary_key=True,
     ),
     Column(
          "restaurant_menu_item_id",
          Integer,
          ForeignKey("restaurant_menu_items.id", ondelete="CASCADE"),
          primary_key=True,
     ),
)


class RestaurantCategory(TimestampMixin, Base):
     """
     RestaurantCategory model - a tag shared by many menu items.
     """
     __tablename__ = "restaurant_categories"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False, unique=True)

     menu_items = relationship(
          "RestaurantMenuItem",
          secondary=menu_item_categories,
          back_populates="categories",
     )

     def __repr__(self):
          return f"<RestaurantCategory(id={self.id}, name='{self.name}')>"


class RestaurantMenuItem(TimestampMixin, Base):
     """
     RestaurantMenuItem model - an entry on a property's restaurant menu.
     """
     __tablename__ = "restaurant_menu_items"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     name = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     image = Column(String(500), nullable=True)
     price = Column(Numeric(10, 2), nullable=False)
     status = Column(
          Enum(MenuItemStatus, name="menu_item_status", values_callable=enum_values, create_constraint=True),
          default=MenuItemStatus.ENABLED,
          nullable=False,
     )

     # Relationships
     property = relationship("Property", back_populates="menu_items")
     categories = relationship(
          "RestaurantCategory",
          secondary=menu_item_categories,
          back_populates="menu_items",
          order_by="RestaurantCategory.name",
     )

     def __repr__(self):
          return f"<RestaurantMenuItem(id={self.id}, name='{self.name}', price={self.price})>"
