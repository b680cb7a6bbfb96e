"""
Entity Lifecycle Manager - shared machinery for owner-scoped records that
carry uploaded images.

A service call is one unit of work: blobs are written first, records are
staged in the session, and everything is committed once at the end. If
anything fails after a blob was written, the session is rolled back and the
freshly written blobs are removed again so no orphaned files remain.

Blob deletions are ordered before the record deletion they belong to.
Deleting a blob that is already gone counts as success.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blob_storage import BlobStore, BlobUpload
from exceptions import NotFoundError, StorageError, ValidationError
from models import Property
from services.ownership import authorize, ensure_owner
from utils.uploads import image_errors

logger = logging.getLogger(__name__)


@dataclass
class AttachmentDiff:
     """Result of an image replacement: counts plus the phases that failed."""
     added_count: int = 0
     deleted_count: int = 0
     failed_phases: List[str] = field(default_factory=list)

     @property
     def message(self) -> str:
          if self.added_count and self.deleted_count:
               return (
                    f"Uploaded {self.added_count} image(s) and deleted "
                    f"{self.deleted_count} image(s)."
               )
          if self.added_count:
               return f"Uploaded {self.added_count} image(s)."
          if self.deleted_count:
               return f"Deleted {self.deleted_count} image(s)."
          return "No image changes."


class EntityLifecycleManager:
     """Base class for the property, menu item and guest record services."""

     def __init__(self, db: Session, blob_store: BlobStore):
          self.db = db
          self.blob_store = blob_store

     # ------------------------------------------------------------------
     # Ownership
     # ------------------------------------------------------------------

     def list_owned_properties(self, acting_user_id: int) -> List[Property]:
          return (
               self.db.query(Property)
               .filter(Property.user_id == acting_user_id)
               .order_by(Property.name, Property.id)
               .all()
          )

     def find_owned_property(self, acting_user_id: int, property_id) -> Optional[Property]:
          """Return the property when it exists and belongs to the user, else None."""
          if property_id is None:
               return None
          property_obj = self.db.get(Property, int(property_id))
          if property_obj is None or not authorize(acting_user_id, property_obj.user_id):
               return None
          return property_obj

     def get_owned_property(self, acting_user_id: int, property_id: int) -> Property:
          property_obj = self.db.get(Property, property_id)
          if property_obj is None:
               raise NotFoundError(f"Property {property_id} not found")
          ensure_owner(acting_user_id, property_obj.user_id, f"property {property_id}")
          return property_obj

     # ------------------------------------------------------------------
     # Uploads and blobs
     # ------------------------------------------------------------------

     @staticmethod
     def check_images(field_name: str, uploads: Iterable[BlobUpload], max_size: int) -> None:
          errors = image_errors(field_name, uploads, max_size)
          if errors:
               raise ValidationError(errors)

     def _store_blob(self, upload: BlobUpload, folder: str, written: list, context: dict) -> str:
          key = self.blob_store.save(upload, folder)
          written.append(key)
          logger.info("Stored blob %s (%s)", key, context)
          return key

     def _delete_blob(self, key: Optional[str], context: dict) -> bool:
          """Delete a blob, raising StorageError on failure. Absent blobs are fine."""
          if not key:
               return False
          try:
               removed = self.blob_store.delete(key)
          except StorageError:
               logger.error("Failed to delete blob %s (%s)", key, context)
               raise
          if not removed:
               logger.info("Blob %s was already absent (%s)", key, context)
          return removed

     def _delete_blob_quietly(self, key: Optional[str], context: dict) -> bool:
          """Delete a blob whose record is going away regardless; failures are only logged."""
          try:
               return self._delete_blob(key, context)
          except StorageError:
               return False

     def _discard_blobs(self, keys: Iterable[str], context: dict) -> None:
          for key in keys:
               try:
                    self.blob_store.delete(key)
                    logger.info("Removed orphaned blob %s (%s)", key, context)
               except StorageError:
                    logger.error("Could not remove orphaned blob %s (%s)", key, context)

     # ------------------------------------------------------------------
     # Transactions
     # ------------------------------------------------------------------

     @contextmanager
     def unit_of_work(self, context: dict):
          """
          Scope one multi-step write.

          Yields a list that collects the keys of blobs written inside the
          block. The session is committed on exit; on failure it is rolled
          back and the collected blobs are deleted before the error
          propagates. Database errors surface as StorageError.
          """
          written = []
          try:
               yield written
               self.db.flush()
               self.db.commit()
          except SQLAlchemyError as e:
               self._abort(written, context)
               logger.error("Database write failed (%s): %s", context, e)
               raise StorageError("Failed to save changes", details=context) from e
          except Exception as e:
               self._abort(written, context)
               if isinstance(e, StorageError):
                    logger.error("Storage operation failed (%s): %s %s", context, e.message, e.details)
               raise

     def _abort(self, written: list, context: dict) -> None:
          self.db.rollback()
          if written:
               logger.warning("Rolling back %d written blob(s) (%s)", len(written), context)
               self._discard_blobs(written, context)

     def _replace_single_image(self, entity, upload: BlobUpload, folder: str, context: dict):
          """
          Point ``entity.image`` at a newly stored blob.

          The new blob is committed first; the previous blob is deleted only
          afterwards, so a failed save leaves the entity with its old image.
          """
          previous = entity.image
          with self.unit_of_work(context) as written:
               entity.image = self._store_blob(upload, folder, written, context)
          if previous and previous != entity.image:
               self._delete_blob_quietly(previous, context)
          return entity
