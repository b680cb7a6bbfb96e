"""
Property API routes.

Owners list, create, show and update their hotel listings and manage the
photo gallery of each one. Every route is scoped to the authenticated user.
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, Request, UploadFile, status

from blob_storage import BlobStore, get_blob_store
from dependencies import get_current_user_id, get_property_service
from exceptions import ValidationError
from models import HotelCategory, ImageType
from routers.responses import property_option, property_response, respond
from schemas import (
     ImageChangeResponse,
     MessageResponse,
     PropertyCreate,
     PropertyOption,
     PropertyResponse,
     PropertyUpdate,
)
from services import PropertyService, clean_form, validate_payload
from utils.uploads import read_uploads

router = APIRouter(prefix="/properties", tags=["properties"])
images_router = APIRouter(prefix="/property-images", tags=["properties"])


@router.get("", response_model=List[PropertyResponse], summary="List own properties")
def list_properties(
     user_id: int = Depends(get_current_user_id),
     service: PropertyService = Depends(get_property_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     return [
          property_response(property_obj, blob_store, with_images=False)
          for property_obj in service.list_properties(user_id)
     ]


@router.get("/options", response_model=List[PropertyOption], summary="Property select options")
def property_options(
     user_id: int = Depends(get_current_user_id),
     service: PropertyService = Depends(get_property_service),
):
     """Id, name and category of each own property, for select inputs."""
     return [property_option(property_obj) for property_obj in service.list_properties(user_id)]


@router.get("/create", summary="Property form data")
def create_form(user_id: int = Depends(get_current_user_id)):
     return {
          "hotel_categories": [category.value for category in HotelCategory],
          "image_types": [image_type.value for image_type in ImageType],
     }


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a property")
async def create_property(
     request: Request,
     name: Optional[str] = Form(None),
     description: Optional[str] = Form(None),
     phone: Optional[str] = Form(None),
     address: Optional[str] = Form(None),
     city: Optional[str] = Form(None),
     state: Optional[str] = Form(None),
     zip: Optional[str] = Form(None),
     country: Optional[str] = Form(None),
     latitude: Optional[str] = Form(None),
     longitude: Optional[str] = Form(None),
     star_rating: Optional[str] = Form(None),
     total_rooms: Optional[str] = Form(None),
     hotel_category: Optional[str] = Form(None),
     images: List[UploadFile] = File([]),
     user_id: int = Depends(get_current_user_id),
     service: PropertyService = Depends(get_property_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     """
     Create a hotel listing with optional photos.

     Photos are stored as ``interior`` images (jpeg/png/gif, max 5MB each).
     """
     result = validate_payload(PropertyCreate, clean_form(
          name=name, description=description, phone=phone, address=address,
          city=city, state=state, zip=zip, country=country,
          latitude=latitude, longitude=longitude, star_rating=star_rating,
          total_rooms=total_rooms, hotel_category=hotel_category,
     ))
     if not result.ok:
          raise ValidationError(result.errors)

     uploads = await read_uploads(images)
     property_obj = service.create_property(user_id, result.value, uploads)

     message = "Hotel added successfully"
     payload = {"success": True, "message": message, "property": property_response(property_obj, blob_store)}
     return respond(request, payload, "/properties", message, status_code=status.HTTP_201_CREATED)


@router.get("/{property_id}", response_model=PropertyResponse, summary="Show a property")
def show_property(
     property_id: int,
     user_id: int = Depends(get_current_user_id),
     service: PropertyService = Depends(get_property_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     return property_response(service.get_property(user_id, property_id), blob_store)


@router.patch("/{property_id}", summary="Update a property")
def update_property(
     request: Request,
     property_id: int,
     payload: dict = Body(...),
     user_id: int = Depends(get_current_user_id),
     service: PropertyService = Depends(get_property_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     """Partial update: only the fields present in the body are changed."""
     result = validate_payload(PropertyUpdate, payload)
     if not result.ok:
          raise ValidationError(result.errors)

     property_obj = service.update_property(user_id, property_id, result.value)

     message = "Property updated successfully"
     body = {"success": True, "message": message, "property": property_response(property_obj, blob_store)}
     return respond(request, body, f"/properties/{property_id}", message)


@router.api_route("/{property_id}/images", methods=["POST", "PATCH"], summary="Replace property images")
async def update_images(
     request: Request,
     property_id: int,
     new_images: List[UploadFile] = File([]),
     images_to_delete: List[int] = Form([]),
     user_id: int = Depends(get_current_user_id),
     service: PropertyService = Depends(get_property_service),
):
     """
     Delete the photos listed in ``images_to_delete`` and upload ``new_images``.

     Ids that are not photos of this property are ignored.
     """
     uploads = await read_uploads(new_images)
     diff = service.replace_images(user_id, property_id, images_to_delete, uploads)

     body = ImageChangeResponse(
          success=not diff.failed_phases,
          message=diff.message,
          uploaded_count=diff.added_count,
          deleted_count=diff.deleted_count,
          failed_phases=diff.failed_phases,
     )
     return respond(request, body, f"/properties/{property_id}", diff.message)


@router.delete("/{property_id}", summary="Delete a property")
def delete_property(
     request: Request,
     property_id: int,
     user_id: int = Depends(get_current_user_id),
     service: PropertyService = Depends(get_property_service),
):
     """Delete a property with its photos, menu items and guest records."""
     service.delete_property(user_id, property_id)
     message = "Property deleted successfully"
     return respond(request, MessageResponse(message=message), "/properties", message)


@images_router.delete("/{image_id}", summary="Delete a property image")
def delete_image(
     image_id: int,
     user_id: int = Depends(get_current_user_id),
     service: PropertyService = Depends(get_property_service),
):
     service.delete_image(user_id, image_id)
     return {"success": True}

