"""
Presentation helpers: content negotiation and entity -> schema mapping.

Form posts from the browser get a 303 redirect carrying a flash message;
XHR / JSON clients get the same data as a JSON body.
"""
from typing import Callable, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse

from blob_storage import BlobStore
from models import GuestRecord, Property, PropertyImage, RestaurantMenuItem
from schemas import (
     CategoryResponse,
     GuestResponse,
     MenuItemResponse,
     PropertyImageResponse,
     PropertyOption,
     PropertyResponse,
)
from services.pagination import Page


def wants_json(request: Request) -> bool:
     accept = request.headers.get("accept", "")
     requested_with = request.headers.get("x-requested-with", "")
     return "application/json" in accept or requested_with.lower() == "xmlhttprequest"


def respond(request: Request, payload, redirect_to: str, message: str, status_code: int = 200):
     """JSON body for API callers, redirect-with-flash-message for form posts."""
     if wants_json(request):
          return JSONResponse(content=jsonable_encoder(payload), status_code=status_code)
     separator = "&" if "?" in redirect_to else "?"
     return RedirectResponse(
          url=f"{redirect_to}{separator}{urlencode({'success': message})}",
          status_code=303,
     )


def image_response(image: PropertyImage, blob_store: BlobStore) -> PropertyImageResponse:
     return PropertyImageResponse(
          id=image.id,
          property_id=image.property_id,
          image=image.image,
          url=blob_store.url(image.image),
          caption=image.caption,
          type=image.type,
     )


def property_response(property_obj: Property, blob_store: BlobStore, with_images: bool = True) -> PropertyResponse:
     fields = {name: getattr(property_obj, name) for name in PropertyResponse.model_fields if name != "images"}
     images = [image_response(image, blob_store) for image in property_obj.images] if with_images else []
     return PropertyResponse(**fields, images=images)


def property_option(property_obj: Optional[Property]) -> Optional[PropertyOption]:
     if property_obj is None:
          return None
     return PropertyOption.model_validate(property_obj)


def menu_item_response(item: RestaurantMenuItem, blob_store: BlobStore) -> MenuItemResponse:
     return MenuItemResponse(
          id=item.id,
          property_id=item.property_id,
          name=item.name,
          description=item.description,
          image=item.image,
          image_url=blob_store.url(item.image) if item.image else None,
          price=item.price,
          status=item.status,
          categories=[CategoryResponse.model_validate(category) for category in item.categories],
     )


def guest_response(guest: GuestRecord, blob_store: BlobStore) -> GuestResponse:
     return GuestResponse(
          id=guest.id,
          property_id=guest.property_id,
          guest_name=guest.guest_name,
          area_name=guest.area_name,
          room_number=guest.room_number,
          birth_date=guest.birth_date,
          image=guest.image,
          image_url=blob_store.url(guest.image) if guest.image else None,
          check_in_date=guest.check_in_date,
          check_out_date=guest.check_out_date,
          status=guest.status,
     )


def page_fields(page: Page, serialize: Callable) -> dict:
     return {
          "data": [serialize(item) for item in page.items],
          "current_page": page.page,
          "per_page": page.per_page,
          "total": page.total,
          "last_page": page.last_page,
     }
