"""
Pydantic schemas for restaurant menu items and categories.
"""
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.restaurant import MenuItemStatus
from schemas.common import PageMeta
from schemas.property import PropertyOption


class MenuItemFields(BaseModel):
     property_id: Optional[int] = Field(None, gt=0)
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = None
     price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
     status: Optional[MenuItemStatus] = None


class MenuItemCreate(MenuItemFields):
     """Schema for creating a menu item."""
     property_id: int = Field(..., gt=0)
     name: str = Field(..., min_length=1, max_length=255)
     price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
     status: MenuItemStatus = MenuItemStatus.ENABLED

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "name": "Nasi Goreng",
                    "price": 45000.00,
                    "status": "enabled",
               }
          }
     )


class MenuItemUpdate(MenuItemFields):
     """Schema for a partial menu item update."""

     @field_validator("property_id", "name", "price", "status")
     @classmethod
     def not_null(cls, value, info):
          if value is None:
               raise ValueError(f"The {info.field_name} field is required.")
          return value


class CategorySync(BaseModel):
     """Replace a menu item's categories with exactly this set."""
     category_ids: List[int] = Field(default_factory=list)


class CategoryResponse(BaseModel):
     id: int
     name: str

     model_config = ConfigDict(from_attributes=True)


class MenuItemResponse(BaseModel):
     id: int
     property_id: int
     name: str
     description: Optional[str] = None
     image: Optional[str] = None
     image_url: Optional[str] = None
     price: Decimal
     status: MenuItemStatus
     categories: List[CategoryResponse] = Field(default_factory=list)


class MenuItemPage(PageMeta):
     data: List[MenuItemResponse] = Field(default_factory=list)


class RestaurantIndexResponse(BaseModel):
     """Page data for the restaurant menu screen."""
     properties: List[PropertyOption]
     selected_property: Optional[PropertyOption] = None
     menu_items: MenuItemPage
     categories: List[CategoryResponse]
     filters: dict
