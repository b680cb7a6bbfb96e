"""
Guest Record Service - TV manager welcome-screen data per room.
"""
import logging
from typing import Optional

from sqlalchemy import or_

from blob_storage import BlobUpload
from exceptions import NotFoundError
from models import GuestRecord
from schemas.guest import GuestCreate, GuestUpdate
from services.lifecycle import EntityLifecycleManager
from services.ownership import ensure_owner
from services.pagination import LIKE_ESCAPE, Page, contains_pattern, paginate
from services.validation import ensure_valid
from utils.uploads import ITEM_IMAGE_MAX_SIZE

logger = logging.getLogger(__name__)

GUEST_IMAGE_FOLDER = "tv-managers"


class GuestRecordService(EntityLifecycleManager):
     """Service class for guest records shown on in-room TVs."""

     def get_guest(self, acting_user_id: int, guest_id: int) -> GuestRecord:
          guest = self.db.get(GuestRecord, guest_id)
          if guest is None:
               raise NotFoundError(f"Guest record {guest_id} not found")
          ensure_owner(acting_user_id, guest.property.user_id, f"guest record {guest_id}")
          return guest

     def list_guests(
          self,
          acting_user_id: int,
          property_id: int,
          search: Optional[str] = None,
          page: int = 1,
     ) -> Page:
          """Guests of one owned property; ``search`` matches guest or area name."""
          property_obj = self.get_owned_property(acting_user_id, property_id)
          query = self.db.query(GuestRecord).filter(GuestRecord.property_id == property_obj.id)

          if search:
               pattern = contains_pattern(search)
               query = query.filter(
                    or_(
                         GuestRecord.guest_name.ilike(pattern, escape=LIKE_ESCAPE),
                         GuestRecord.area_name.ilike(pattern, escape=LIKE_ESCAPE),
                    )
               )

          query = query.order_by(GuestRecord.guest_name, GuestRecord.id)
          return paginate(query, page)

     def create_guest(self, acting_user_id: int, fields, image: Optional[BlobUpload] = None) -> GuestRecord:
          data = ensure_valid(GuestCreate, fields)
          if image is not None:
               self.check_images("image", [image], ITEM_IMAGE_MAX_SIZE)
          property_obj = self.get_owned_property(acting_user_id, data.property_id)

          context = {"operation": "create_guest", "property_id": property_obj.id, "user_id": acting_user_id}
          with self.unit_of_work(context) as written:
               guest = GuestRecord(property=property_obj, **data.model_dump(exclude={"property_id"}))
               if image is not None:
                    guest.image = self._store_blob(image, GUEST_IMAGE_FOLDER, written, context)
               self.db.add(guest)

          logger.info("Guest record %s created on property %s", guest.id, property_obj.id)
          return guest

     def update_guest(
          self,
          acting_user_id: int,
          guest_id: int,
          fields,
          image: Optional[BlobUpload] = None,
     ) -> GuestRecord:
          """Partially update a guest record; status may be set to any value."""
          guest = self.get_guest(acting_user_id, guest_id)
          data = ensure_valid(GuestUpdate, fields)
          changes = data.model_dump(exclude_unset=True)

          new_property = None
          target_id = changes.pop("property_id", guest.property_id)
          if target_id != guest.property_id:
               new_property = self.get_owned_property(acting_user_id, target_id)

          if image is not None:
               self.check_images("image", [image], ITEM_IMAGE_MAX_SIZE)

          context = {"operation": "update_guest", "guest_id": guest_id, "user_id": acting_user_id}
          previous_image = guest.image
          with self.unit_of_work(context) as written:
               for name, value in changes.items():
                    setattr(guest, name, value)
               if new_property is not None:
                    guest.property = new_property
               if image is not None:
                    guest.image = self._store_blob(image, GUEST_IMAGE_FOLDER, written, context)

          if image is not None and previous_image:
               self._delete_blob_quietly(previous_image, context)
          return guest

     def replace_image(self, acting_user_id: int, guest_id: int, image: BlobUpload) -> GuestRecord:
          guest = self.get_guest(acting_user_id, guest_id)
          self.check_images("image", [image], ITEM_IMAGE_MAX_SIZE)
          context = {"operation": "replace_guest_image", "guest_id": guest_id, "user_id": acting_user_id}
          return self._replace_single_image(guest, image, GUEST_IMAGE_FOLDER, context)

     def delete_guest(self, acting_user_id: int, guest_id: int) -> int:
          """Delete a guest record and its photo. Returns the property id."""
          guest = self.get_guest(acting_user_id, guest_id)
          property_id = guest.property_id
          context = {"operation": "delete_guest", "guest_id": guest_id, "user_id": acting_user_id}
          with self.unit_of_work(context):
               self._delete_blob_quietly(guest.image, context)
               self.db.delete(guest)
          logger.info("Guest record %s deleted from property %s", guest_id, property_id)
          return property_id
