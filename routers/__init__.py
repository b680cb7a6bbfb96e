from .properties import router as properties_router, images_router as property_images_router
from .restaurants import router as restaurants_router, categories_router as restaurant_categories_router
from .tv_managers import router as tv_managers_router

all_routers = [
     properties_router,
     property_images_router,
     restaurants_router,
     restaurant_categories_router,
     tv_managers_router,
]

__all__ = [
     "properties_router",
     "property_images_router",
     "restaurants_router",
     "restaurant_categories_router",
     "tv_managers_router",
     "all_routers",
]
