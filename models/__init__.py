from .base import Base
from .user import User
from .property import Property, HotelCategory
from .property_image import PropertyImage, ImageType
from .restaurant import RestaurantCategory, RestaurantMenuItem, MenuItemStatus, menu_item_categories
from .guest_record import GuestRecord, GuestStatus

__all__ = [
     "Base",
     "User",
     "Property",
     "HotelCategory",
     "PropertyImage",
     "ImageType",
     "RestaurantCategory",
     "RestaurantMenuItem",
     "MenuItemStatus",
     "menu_item_categories",
     "GuestRecord",
     "GuestStatus",
]
