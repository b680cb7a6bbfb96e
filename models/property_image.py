# models/property_image.py
import enum
from sqlalchemy import Column, Integer, String, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, enum_values


class ImageType(str, enum.Enum):
     """What a property photo shows."""
     EXTERIOR = "exterior"
     INTERIOR = "interior"
     ROOM = "room"
     FACILITY = "facility"


class PropertyImage(TimestampMixin, Base):
     """
     PropertyImage model - one uploaded photo of a property.
     ``image`` holds the blob key, never the bytes.
     """
     __tablename__ = "property_images"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     image = Column(String(500), nullable=False)
     caption = Column(String(255), nullable=True)
     type = Column(
          Enum(ImageType, name="property_image_type", values_callable=enum_values, create_constraint=True),
          default=ImageType.INTERIOR,
          nullable=False,
     )

     # Relationships
     property = relationship("Property", back_populates="images")

     def __repr__(self):
          return f"<PropertyImage(id={self.id}, property_id={self.property_id}, image='{self.image}')>"
