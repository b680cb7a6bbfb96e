# models/property.py
import enum
from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, enum_values


class HotelCategory(str, enum.Enum):
     """Price segment of a hotel."""
     BUDGET = "budget"
     MID_RANGE = "mid-range"
     LUXURY = "luxury"


class Property(TimestampMixin, Base):
     """
     Property model - a hotel listing owned by a single user.

     ``user_id`` is set on creation and never changes afterwards; every
     mutation of the property or its children is checked against it.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     name = Column(String(255), nullable=False)
     description = Column(String(255), nullable=True)

     # Contact / address
     phone = Column(String(255), nullable=True)
     address = Column(Text, nullable=True)
     city = Column(String(255), nullable=True)
     state = Column(String(255), nullable=True)
     zip = Column(String(255), nullable=True)
     country = Column(String(255), nullable=True)
     latitude = Column(Numeric(10, 7), nullable=True)
     longitude = Column(Numeric(10, 7), nullable=True)

     # Hotel details
     star_rating = Column(Integer, nullable=True)
     total_rooms = Column(Integer, nullable=True)
     hotel_category = Column(
          Enum(HotelCategory, name="hotel_category", values_callable=enum_values, create_constraint=True),
          nullable=True,
     )

     # Relationships
     user = relationship("User", back_populates="properties")
     images = relationship(
          "PropertyImage",
          back_populates="property",
          cascade="all, delete-orphan",
          order_by="PropertyImage.id",
     )
     menu_items = relationship("RestaurantMenuItem", back_populates="property", cascade="all, delete-orphan")
     guest_records = relationship("GuestRecord", back_populates="property", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}')>"
