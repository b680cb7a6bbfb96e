"""
TV manager API routes - guest records shown on in-room televisions.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from blob_storage import BlobStore, get_blob_store
from dependencies import get_current_user_id, get_guest_service
from exceptions import ValidationError
from models import GuestStatus
from routers.responses import guest_response, page_fields, property_option, respond
from schemas import GuestCreate, GuestUpdate, MessageResponse, TvManagerIndexResponse
from services import GuestRecordService, Page, clean_form, validate_payload
from utils.uploads import read_upload

router = APIRouter(prefix="/tv-managers", tags=["tv-managers"])


def _index_url(property_id: int) -> str:
     return f"/tv-managers?property_id={property_id}"


@router.get("", response_model=TvManagerIndexResponse, summary="Guests of a property")
def index(
     property_id: Optional[int] = Query(None, description="Selected property"),
     search: Optional[str] = Query(None, description="Guest / area name contains"),
     page: int = Query(1, ge=1, description="Page number"),
     user_id: int = Depends(get_current_user_id),
     service: GuestRecordService = Depends(get_guest_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     properties = service.list_owned_properties(user_id)
     selected = service.find_owned_property(user_id, property_id)
     guests = service.list_guests(user_id, selected.id, search, page) if selected is not None else Page()

     return {
          "properties": [property_option(p) for p in properties],
          "selected_property": property_option(selected),
          "tv_managers": page_fields(guests, lambda guest: guest_response(guest, blob_store)),
          "filters": {"property_id": property_id, "search": search or ""},
     }


@router.get("/create", summary="Guest form data")
def create_form(
     user_id: int = Depends(get_current_user_id),
     service: GuestRecordService = Depends(get_guest_service),
):
     return {
          "properties": [property_option(p) for p in service.list_owned_properties(user_id)],
          "statuses": [guest_status.value for guest_status in GuestStatus],
     }


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add a guest")
async def store(
     request: Request,
     property_id: Optional[str] = Form(None),
     guest_name: Optional[str] = Form(None),
     area_name: Optional[str] = Form(None),
     room_number: Optional[str] = Form(None),
     birth_date: Optional[str] = Form(None),
     check_in_date: Optional[str] = Form(None),
     check_out_date: Optional[str] = Form(None),
     status_value: Optional[str] = Form(None, alias="status"),
     image: Optional[UploadFile] = File(None),
     user_id: int = Depends(get_current_user_id),
     service: GuestRecordService = Depends(get_guest_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     result = validate_payload(GuestCreate, clean_form(
          property_id=property_id, guest_name=guest_name, area_name=area_name,
          room_number=room_number, birth_date=birth_date,
          check_in_date=check_in_date, check_out_date=check_out_date, status=status_value,
     ))
     if not result.ok:
          raise ValidationError(result.errors)

     upload = await read_upload(image)
     guest = service.create_guest(user_id, result.value, upload)

     message = "Guest added successfully"
     payload = {"success": True, "message": message, "tv_manager": guest_response(guest, blob_store)}
     return respond(request, payload, _index_url(guest.property_id), message, status_code=status.HTTP_201_CREATED)


@router.get("/{guest_id}/edit", summary="Guest edit form data")
def edit(
     guest_id: int,
     user_id: int = Depends(get_current_user_id),
     service: GuestRecordService = Depends(get_guest_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     guest = service.get_guest(user_id, guest_id)
     return {
          "tv_manager": guest_response(guest, blob_store),
          "properties": [property_option(p) for p in service.list_owned_properties(user_id)],
     }


@router.put("/{guest_id}", summary="Update a guest")
async def update(
     request: Request,
     guest_id: int,
     property_id: Optional[str] = Form(None),
     guest_name: Optional[str] = Form(None),
     area_name: Optional[str] = Form(None),
     room_number: Optional[str] = Form(None),
     birth_date: Optional[str] = Form(None),
     check_in_date: Optional[str] = Form(None),
     check_out_date: Optional[str] = Form(None),
     status_value: Optional[str] = Form(None, alias="status"),
     user_id: int = Depends(get_current_user_id),
     service: GuestRecordService = Depends(get_guest_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     result = validate_payload(GuestUpdate, clean_form(
          property_id=property_id, guest_name=guest_name, area_name=area_name,
          room_number=room_number, birth_date=birth_date,
          check_in_date=check_in_date, check_out_date=check_out_date, status=status_value,
     ))
     if not result.ok:
          raise ValidationError(result.errors)

     guest = service.update_guest(user_id, guest_id, result.value)

     message = "Guest data updated successfully"
     payload = {"success": True, "message": message, "tv_manager": guest_response(guest, blob_store)}
     return respond(request, payload, _index_url(guest.property_id), message)


@router.post("/{guest_id}/image", summary="Replace a guest photo")
async def update_image(
     request: Request,
     guest_id: int,
     image: UploadFile = File(...),
     user_id: int = Depends(get_current_user_id),
     service: GuestRecordService = Depends(get_guest_service),
     blob_store: BlobStore = Depends(get_blob_store),
):
     upload = await read_upload(image)
     if upload is None:
          raise ValidationError({"image": "The image field is required."})
     guest = service.replace_image(user_id, guest_id, upload)

     message = "Guest photo updated successfully"
     payload = {"success": True, "message": message, "tv_manager": guest_response(guest, blob_store)}
     return respond(request, payload, _index_url(guest.property_id), message)


@router.delete("/{guest_id}", summary="Delete a guest")
def destroy(
     request: Request,
     guest_id: int,
     user_id: int = Depends(get_current_user_id),
     service: GuestRecordService = Depends(get_guest_service),
):
     property_id = service.delete_guest(user_id, guest_id)
     message = "Guest data deleted successfully"
     return respond(request, MessageResponse(message=message), _index_url(property_id), message)
