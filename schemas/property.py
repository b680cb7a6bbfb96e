"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.property import HotelCategory
from models.property_image import ImageType


class PropertyFields(BaseModel):
     """Constraints shared by create and update."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = Field(None, max_length=255)
     address: Optional[str] = None
     city: Optional[str] = Field(None, max_length=255)
     state: Optional[str] = Field(None, max_length=255)
     zip: Optional[str] = Field(None, max_length=255)
     country: Optional[str] = Field(None, max_length=255)
     latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
     longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
     star_rating: Optional[int] = Field(None, ge=1, le=5)
     total_rooms: Optional[int] = Field(None, ge=1)
     hotel_category: Optional[HotelCategory] = None


class PropertyCreate(PropertyFields):
     """Schema for creating a hotel listing."""
     name: str = Field(..., min_length=1, max_length=255)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Hotel Grand Jakarta",
                    "city": "Jakarta",
                    "country": "Indonesia",
                    "star_rating": 5,
                    "total_rooms": 200,
                    "hotel_category": "luxury",
               }
          }
     )


class PropertyUpdate(PropertyFields):
     """Schema for a partial update. Only provided fields are applied."""

     @field_validator("name")
     @classmethod
     def name_not_null(cls, value):
          if value is None:
               raise ValueError("The name field is required.")
          return value


class PropertyImageResponse(BaseModel):
     id: int
     property_id: int
     image: str
     url: str
     caption: Optional[str] = None
     type: ImageType


class PropertyResponse(BaseModel):
     """Schema for property response."""
     id: int
     user_id: int
     name: str
     description: Optional[str] = None
     phone: Optional[str] = None
     address: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     zip: Optional[str] = None
     country: Optional[str] = None
     latitude: Optional[Decimal] = None
     longitude: Optional[Decimal] = None
     star_rating: Optional[int] = None
     total_rooms: Optional[int] = None
     hotel_category: Optional[HotelCategory] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
     images: List[PropertyImageResponse] = Field(default_factory=list)

     model_config = ConfigDict(from_attributes=True)


class PropertyOption(BaseModel):
     """Compact property entry for select inputs."""
     id: int
     name: str
     hotel_category: Optional[HotelCategory] = None

     model_config = ConfigDict(from_attributes=True)
