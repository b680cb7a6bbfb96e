"""
Property Service - hotel listings and their photo galleries.
"""
import logging
from typing import Iterable, List, Optional

from blob_storage import BlobUpload
from exceptions import NotFoundError, StorageError
from models import Property, PropertyImage, ImageType
from schemas.property import PropertyCreate, PropertyUpdate
from services.lifecycle import AttachmentDiff, EntityLifecycleManager
from services.ownership import ensure_owner
from services.validation import ensure_valid
from utils.uploads import PROPERTY_IMAGE_MAX_SIZE

logger = logging.getLogger(__name__)

PROPERTY_IMAGE_FOLDER = "property-images"


class PropertyService(EntityLifecycleManager):
     """Service class for property-related business logic."""

     def list_properties(self, acting_user_id: int) -> List[Property]:
          return self.list_owned_properties(acting_user_id)

     def get_property(self, acting_user_id: int, property_id: int) -> Property:
          return self.get_owned_property(acting_user_id, property_id)

     def create_property(
          self,
          acting_user_id: int,
          fields,
          images: Optional[Iterable[BlobUpload]] = None,
     ) -> Property:
          """
          Create a property owned by ``acting_user_id`` with its initial photos.

          Args:
               acting_user_id: Owner of the new property
               fields: PropertyCreate or a dict accepted by it
               images: Uploaded photos, stored as ``interior`` images

          Returns:
               Created Property object

          Raises:
               ValidationError: If a field or upload is invalid
               StorageError: If a blob or the record could not be written
          """
          data = ensure_valid(PropertyCreate, fields)
          uploads = list(images or [])
          self.check_images("images", uploads, PROPERTY_IMAGE_MAX_SIZE)

          context = {"operation": "create_property", "user_id": acting_user_id}
          with self.unit_of_work(context) as written:
               property_obj = Property(user_id=acting_user_id, **data.model_dump())
               self.db.add(property_obj)
               for upload in uploads:
                    key = self._store_blob(upload, PROPERTY_IMAGE_FOLDER, written, context)
                    property_obj.images.append(PropertyImage(image=key, type=ImageType.INTERIOR))

          logger.info(
               "Property %s created by user %s with %d image(s)",
               property_obj.id, acting_user_id, len(uploads),
          )
          return property_obj

     def update_property(self, acting_user_id: int, property_id: int, fields) -> Property:
          """Apply the supplied fields only; ``user_id`` can never change."""
          property_obj = self.get_owned_property(acting_user_id, property_id)
          data = ensure_valid(PropertyUpdate, fields)
          changes = data.model_dump(exclude_unset=True)

          context = {"operation": "update_property", "property_id": property_id, "user_id": acting_user_id}
          with self.unit_of_work(context):
               for name, value in changes.items():
                    setattr(property_obj, name, value)

          logger.info("Property %s updated fields %s", property_id, sorted(changes))
          return property_obj

     def replace_images(
          self,
          acting_user_id: int,
          property_id: int,
          to_delete: Optional[Iterable[int]] = None,
          to_add: Optional[Iterable[BlobUpload]] = None,
     ) -> AttachmentDiff:
          """
          Delete some of a property's photos and add new ones in one request.

          Ids in ``to_delete`` that are not photos of this property are
          ignored. Deletions run first, each removing the blob before the
          record; a failing blob delete stops the remaining deletions but the
          uploads are still attempted. Both halves are committed together.
          """
          property_obj = self.get_owned_property(acting_user_id, property_id)
          uploads = list(to_add or [])
          self.check_images("new_images", uploads, PROPERTY_IMAGE_MAX_SIZE)
          delete_ids = {int(image_id) for image_id in (to_delete or [])}

          context = {"operation": "replace_images", "property_id": property_id, "user_id": acting_user_id}
          diff = AttachmentDiff()
          with self.unit_of_work(context) as written:
               doomed = [image for image in property_obj.images if image.id in delete_ids]
               try:
                    for image in doomed:
                         self._delete_blob(image.image, {**context, "image_id": image.id})
                         property_obj.images.remove(image)
                         diff.deleted_count += 1
               except StorageError:
                    diff.failed_phases.append("delete")
                    logger.error(
                         "Image delete phase aborted after %d of %d deletion(s) (%s)",
                         diff.deleted_count, len(doomed), context,
                    )

               try:
                    for upload in uploads:
                         key = self._store_blob(upload, PROPERTY_IMAGE_FOLDER, written, context)
                         property_obj.images.append(PropertyImage(image=key, type=ImageType.INTERIOR))
                         diff.added_count += 1
               except StorageError:
                    diff.failed_phases.append("add")
                    logger.error(
                         "Image upload phase aborted after %d of %d upload(s) (%s)",
                         diff.added_count, len(uploads), context,
                    )

          logger.info(
               "Images of property %s replaced: %d uploaded, %d deleted",
               property_id, diff.added_count, diff.deleted_count,
          )
          return diff

     def delete_image(self, acting_user_id: int, image_id: int) -> int:
          """Delete one photo (blob first, then record). Returns the property id."""
          image = self.db.get(PropertyImage, image_id)
          if image is None:
               raise NotFoundError(f"Property image {image_id} not found")
          property_obj = image.property
          ensure_owner(acting_user_id, property_obj.user_id, f"property image {image_id}")

          context = {
               "operation": "delete_image",
               "property_id": property_obj.id,
               "image_id": image_id,
               "user_id": acting_user_id,
          }
          with self.unit_of_work(context):
               self._delete_blob(image.image, context)
               property_obj.images.remove(image)
          return property_obj.id

     def delete_property(self, acting_user_id: int, property_id: int) -> None:
          """
          Delete a property together with its photos, menu items and guest records.

          Every blob is attempted; a blob that cannot be deleted is logged and
          does not stop the records from being removed.
          """
          property_obj = self.get_owned_property(acting_user_id, property_id)
          context = {"operation": "delete_property", "property_id": property_id, "user_id": acting_user_id}

          keys = [image.image for image in property_obj.images]
          keys += [item.image for item in property_obj.menu_items if item.image]
          keys += [guest.image for guest in property_obj.guest_records if guest.image]

          with self.unit_of_work(context):
               for key in keys:
                    self._delete_blob_quietly(key, context)
               self.db.delete(property_obj)

          logger.info("Property %s deleted with %d blob(s)", property_id, len(keys))
