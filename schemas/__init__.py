from .common import PageMeta, ImageChangeResponse, MessageResponse
from .property import (
     PropertyCreate,
     PropertyUpdate,
     PropertyResponse,
     PropertyImageResponse,
     PropertyOption,
)
from .restaurant import (
     MenuItemCreate,
     MenuItemUpdate,
     MenuItemResponse,
     MenuItemPage,
     CategorySync,
     CategoryResponse,
     RestaurantIndexResponse,
)
from .guest import (
     GuestCreate,
     GuestUpdate,
     GuestResponse,
     GuestPage,
     TvManagerIndexResponse,
)

__all__ = [
     "PageMeta",
     "ImageChangeResponse",
     "MessageResponse",
     "PropertyCreate",
     "PropertyUpdate",
     "PropertyResponse",
     "PropertyImageResponse",
     "PropertyOption",
     "MenuItemCreate",
     "MenuItemUpdate",
     "MenuItemResponse",
     "MenuItemPage",
     "CategorySync",
     "CategoryResponse",
     "RestaurantIndexResponse",
     "GuestCreate",
     "GuestUpdate",
     "GuestResponse",
     "GuestPage",
     "TvManagerIndexResponse",
]
