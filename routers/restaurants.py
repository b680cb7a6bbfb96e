"""
Restaurant menu API routes.

Menu items belong to a property; the index lists the items of one selected
property with category / free-text filters, 12 per page.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from blob_storage import BlobStore, get_blob_store
from dependencies import get_current_user_id, get_menu_service
from exceptions import ValidationError
from routers.responses import menu_item_response, page_fields, property_option, respond
from schemas import (
     CategoryResponse,
     CategorySync,
     MenuItemCreate,
     MenuItemResponse,
     MenuItemUpdate,
     MessageResponse,
     RestaurantIndexResponse,
)
from services import MenuItemService, Page, clean_form, validate_payload
from utils.uploads import read_upload

router = APIRouter(prefix="/restaurants", tags=["restaurants"])
categories_router = APIRouter(prefix="/restaurant-categories", tags=["restaurants"])


def _index_url(property_id: int) -> str:
     return f"/restaurants?property_id={property_id}"


@router.get("", response_model=RestaurantIndexResponse, summary="Menu items of a property")
def index(
     property_id: Optional[int] = Query(None, description="Selected property"),
     categories: Optional[List[int]] = Query(None, description="Category ids"),
     categories_array: Optional[List[int]] = Query(None, alias="categories[]"),
     search: Optional[str] = Query(None, description="Name / description contains"),
     page: int = Query(1, ge=1, description="Page number"),
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     """
     Page data for the menu screen.

     Without a ``property_id`` (or with one the user does not own) no
     property is selected and the item list is empty.
     """
     category_ids = list(categories or []) + list(categories_array or [])
     properties = service.list_owned_properties(user_id)
     selected = service.find_owned_property(user_id, property_id)

     if selected is not None:
          items = service.list_menu_items(user_id, selected.id, category_ids, search, page)
     else:
          items = Page()

     return {
          "properties": [property_option(p) for p in properties],
          "selected_property": property_option(selected),
          "menu_items": page_fields(items, lambda item: menu_item_response(item, blob_store)),
          "categories": [CategoryResponse.model_validate(c) for c in service.list_categories()],
          "filters": {
               "property_id": property_id,
               "categories": category_ids,
               "search": search or "",
          },
     }


@router.get("/create", summary="Menu item form data")
def create_form(
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
):
     return {
          "properties": [property_option(p) for p in service.list_owned_properties(user_id)],
          "categories": [CategoryResponse.model_validate(c) for c in service.list_categories()],
     }


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a menu item")
async def store(
     request: Request,
     property_id: Optional[str] = Form(None),
     name: Optional[str] = Form(None),
     description: Optional[str] = Form(None),
     price: Optional[str] = Form(None),
     status_value: Optional[str] = Form(None, alias="status"),
     categories: List[int] = Form([]),
     image: Optional[UploadFile] = File(None),
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     result = validate_payload(MenuItemCreate, clean_form(
          property_id=property_id, name=name, description=description,
          price=price, status=status_value,
     ))
     if not result.ok:
          raise ValidationError(result.errors)

     upload = await read_upload(image)
     item = service.create_menu_item(user_id, result.value, upload, categories)

     message = "Menu item added successfully"
     payload = {"success": True, "message": message, "menu_item": menu_item_response(item, blob_store)}
     return respond(request, payload, _index_url(item.property_id), message, status_code=status.HTTP_201_CREATED)


@router.get("/{item_id}/edit", summary="Menu item edit form data")
def edit(
     item_id: int,
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     item = service.get_menu_item(user_id, item_id)
     return {
          "menu_item": menu_item_response(item, blob_store),
          "properties": [property_option(p) for p in service.list_owned_properties(user_id)],
          "categories": [CategoryResponse.model_validate(c) for c in service.list_categories()],
     }


@router.put("/{item_id}", summary="Update a menu item")
async def update(
     request: Request,
     item_id: int,
     property_id: Optional[str] = Form(None),
     name: Optional[str] = Form(None),
     description: Optional[str] = Form(None),
     price: Optional[str] = Form(None),
     status_value: Optional[str] = Form(None, alias="status"),
     categories: List[int] = Form([]),
     image: Optional[UploadFile] = File(None),
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     """
     Update the submitted fields of a menu item.

     The category multi-select submits nothing when empty, so the item's
     categories are always synced to the submitted list.
     """
     result = validate_payload(MenuItemUpdate, clean_form(
          property_id=property_id, name=name, description=description,
          price=price, status=status_value,
     ))
     if not result.ok:
          raise ValidationError(result.errors)

     upload = await read_upload(image)
     item = service.update_menu_item(user_id, item_id, result.value, upload, categories)

     message = "Menu item updated successfully"
     payload = {"success": True, "message": message, "menu_item": menu_item_response(item, blob_store)}
     return respond(request, payload, _index_url(item.property_id), message)


@router.post("/{item_id}/image", summary="Replace a menu item image")
async def update_image(
     request: Request,
     item_id: int,
     image: UploadFile = File(...),
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     upload = await read_upload(image)
     if upload is None:
          raise ValidationError({"image": "The image field is required."})
     item = service.replace_image(user_id, item_id, upload)

     message = "Menu item photo updated successfully"
     payload = {"success": True, "message": message, "menu_item": menu_item_response(item, blob_store)}
     return respond(request, payload, _index_url(item.property_id), message)


@router.put("/{item_id}/categories", response_model=MenuItemResponse, summary="Sync menu item categories")
def sync_categories(
     item_id: int,
     body: CategorySync,
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     """Replace the item's categories with exactly ``category_ids``."""
     item = service.sync_categories(user_id, item_id, body.category_ids)
     return menu_item_response(item, blob_store)


@router.delete("/{item_id}", summary="Delete a menu item")
def destroy(
     request: Request,
     item_id: int,
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
):
     property_id = service.delete_menu_item(user_id, item_id)
     message = "Menu item deleted successfully"
     return respond(request, MessageResponse(message=message), _index_url(property_id), message)


@categories_router.get("", response_model=List[CategoryResponse], summary="List restaurant categories")
def list_categories(
     user_id: int = Depends(get_current_user_id),
     service: MenuItemService = Depends(get_menu_service),
):
     return [CategoryResponse.model_validate(c) for c in service.list_categories()]
