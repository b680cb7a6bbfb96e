"""
Tests for the Property service.
"""
import unittest
from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError

from exceptions import AuthorizationError, NotFoundError, StorageError, ValidationError
from models import GuestRecord, ImageType, Property, PropertyImage, RestaurantMenuItem
from services import PropertyService
from services.lifecycle import AttachmentDiff
from tests.support import BackofficeTestCase, image


class TestPropertyService(BackofficeTestCase):
    def setUp(self):
        super().setUp()
        self.service = PropertyService(self.db, self.blob_store)

    def create_with_images(self, *filenames):
        return self.service.create_property(
            self.owner.id,
            {"name": "Hotel Grand", "city": "Jakarta"},
            [image(filename) for filename in filenames],
        )

    def test_create_property_with_images(self):
        property_obj = self.create_with_images("lobby.jpg", "pool.png")

        self.assertIsNotNone(property_obj.id)
        self.assertEqual(property_obj.user_id, self.owner.id)
        self.assertEqual(len(property_obj.images), 2)
        self.assertTrue(all(img.type == ImageType.INTERIOR for img in property_obj.images))
        self.assertEqual(self.stored_files(), sorted(img.image for img in property_obj.images))

    def test_create_rejects_bad_upload_before_writing(self):
        with self.assertRaises(ValidationError) as ctx:
            self.create_with_images("lobby.jpg", "brochure.pdf")

        self.assertIn("images.1", ctx.exception.errors)
        self.assertEqual(self.db.query(Property).count(), 0)
        self.assertEqual(self.stored_files(), [])

    def test_create_rejects_missing_name(self):
        with self.assertRaises(ValidationError):
            self.service.create_property(self.owner.id, {"city": "Jakarta"})

    def test_failed_commit_removes_written_blobs(self):
        with patch.object(self.db, "commit", side_effect=SQLAlchemyError("disk full")):
            with self.assertRaises(StorageError):
                self.create_with_images("lobby.jpg", "pool.png")

        self.assertEqual(self.stored_files(), [])
        self.assertEqual(self.db.query(Property).count(), 0)
        self.assertEqual(self.db.query(PropertyImage).count(), 0)

    def test_update_applies_supplied_fields_only(self):
        property_obj = self.create_with_images()
        updated = self.service.update_property(self.owner.id, property_obj.id, {"city": "Bandung"})

        self.assertEqual(updated.city, "Bandung")
        self.assertEqual(updated.name, "Hotel Grand")
        self.assertEqual(updated.user_id, self.owner.id)

    def test_update_by_stranger_is_refused(self):
        property_obj = self.create_with_images()

        with self.assertRaises(AuthorizationError):
            self.service.update_property(self.stranger.id, property_obj.id, {"name": "Taken"})

        self.db.refresh(property_obj)
        self.assertEqual(property_obj.name, "Hotel Grand")

    def test_update_cannot_null_the_name(self):
        property_obj = self.create_with_images()
        with self.assertRaises(ValidationError):
            self.service.update_property(self.owner.id, property_obj.id, {"name": None})

    def test_get_unknown_property(self):
        with self.assertRaises(NotFoundError):
            self.service.get_property(self.owner.id, 999)

    def test_list_is_scoped_to_owner(self):
        self.create_with_images()
        self.add_property(self.stranger, name="Elsewhere")

        names = [p.name for p in self.service.list_properties(self.owner.id)]
        self.assertEqual(names, ["Hotel Grand"])

    def test_replace_images(self):
        property_obj = self.create_with_images("a.jpg", "b.jpg", "c.jpg")
        a, b, c = property_obj.images

        diff = self.service.replace_images(self.owner.id, property_obj.id, [a.id, b.id], [image("new.jpg")])

        self.assertEqual((diff.added_count, diff.deleted_count, diff.failed_phases), (1, 2, []))
        self.assertEqual(diff.message, "Uploaded 1 image(s) and deleted 2 image(s).")
        remaining = self.db.query(PropertyImage).filter_by(property_id=property_obj.id).all()
        self.assertEqual(len(remaining), 2)
        self.assertIn(c.image, [img.image for img in remaining])
        self.assertEqual(self.stored_files(), sorted(img.image for img in remaining))

    def test_replace_images_ignores_foreign_ids(self):
        mine = self.create_with_images("a.jpg")
        theirs = self.service.create_property(self.stranger.id, {"name": "Other"}, [image("x.jpg")])
        foreign_id = theirs.images[0].id

        diff = self.service.replace_images(self.owner.id, mine.id, [foreign_id], [])

        self.assertEqual(diff.deleted_count, 0)
        self.assertIsNotNone(self.db.get(PropertyImage, foreign_id))
        self.assertIn(theirs.images[0].image, self.stored_files())

    def test_replace_images_by_stranger_touches_nothing(self):
        property_obj = self.create_with_images("a.jpg")
        before = self.stored_files()

        with self.assertRaises(AuthorizationError):
            self.service.replace_images(
                self.stranger.id, property_obj.id, [property_obj.images[0].id], [image("new.jpg")]
            )

        self.assertEqual(self.stored_files(), before)
        self.assertEqual(len(property_obj.images), 1)

    def test_failed_blob_delete_stops_deletes_but_not_uploads(self):
        property_obj = self.create_with_images("a.jpg")
        kept_id = property_obj.images[0].id

        with patch.object(self.blob_store, "delete", side_effect=StorageError("unavailable")):
            diff = self.service.replace_images(self.owner.id, property_obj.id, [kept_id], [image("new.jpg")])

        self.assertEqual(diff.failed_phases, ["delete"])
        self.assertEqual((diff.added_count, diff.deleted_count), (1, 0))
        self.assertIsNotNone(self.db.get(PropertyImage, kept_id))
        self.assertEqual(self.db.query(PropertyImage).filter_by(property_id=property_obj.id).count(), 2)

    def test_delete_image(self):
        property_obj = self.create_with_images("a.jpg", "b.jpg")
        doomed = property_obj.images[0]

        self.assertEqual(self.service.delete_image(self.owner.id, doomed.id), property_obj.id)

        self.assertIsNone(self.db.get(PropertyImage, doomed.id))
        self.assertNotIn(doomed.image, self.stored_files())

    def test_delete_image_keeps_record_when_blob_delete_fails(self):
        property_obj = self.create_with_images("a.jpg")
        image_id = property_obj.images[0].id

        with patch.object(self.blob_store, "delete", side_effect=StorageError("unavailable")):
            with self.assertRaises(StorageError):
                self.service.delete_image(self.owner.id, image_id)

        self.assertIsNotNone(self.db.get(PropertyImage, image_id))

    def test_delete_image_of_stranger(self):
        property_obj = self.create_with_images("a.jpg")
        with self.assertRaises(AuthorizationError):
            self.service.delete_image(self.stranger.id, property_obj.images[0].id)

    def test_delete_property_removes_children_and_blobs(self):
        property_obj = self.create_with_images("a.jpg")
        menu_key = self.blob_store.save(image("soup.jpg"), "restaurant-menu")
        self.db.add(RestaurantMenuItem(property_id=property_obj.id, name="Soup", price=5, image=menu_key))
        self.db.add(GuestRecord(property_id=property_obj.id, guest_name="Budi"))
        self.db.commit()

        self.service.delete_property(self.owner.id, property_obj.id)

        self.assertEqual(self.db.query(Property).count(), 0)
        self.assertEqual(self.db.query(PropertyImage).count(), 0)
        self.assertEqual(self.db.query(RestaurantMenuItem).count(), 0)
        self.assertEqual(self.db.query(GuestRecord).count(), 0)
        self.assertEqual(self.stored_files(), [])

    def failing_delete_for(self, failing_key):
        """Blob delete that raises for ``failing_key`` and works for every other key."""
        real_delete = self.blob_store.delete

        def delete(key):
            if key == failing_key:
                raise StorageError("unavailable")
            return real_delete(key)

        return delete

    def test_one_failing_blob_does_not_stop_the_other_deletes(self):
        property_obj = self.create_with_images("a.jpg", "b.jpg", "c.jpg")
        failing_key = property_obj.images[0].image

        with patch.object(self.blob_store, "delete", side_effect=self.failing_delete_for(failing_key)) as delete:
            self.service.delete_property(self.owner.id, property_obj.id)

        self.assertEqual(delete.call_count, 3)
        self.assertEqual(self.stored_files(), [failing_key])
        self.assertEqual(self.db.query(PropertyImage).count(), 0)
        self.assertEqual(self.db.query(Property).count(), 0)

    def test_failed_blob_delete_skips_remaining_deletes(self):
        property_obj = self.create_with_images("a.jpg", "b.jpg")
        first, second = property_obj.images

        with patch.object(self.blob_store, "delete", side_effect=self.failing_delete_for(first.image)) as delete:
            diff = self.service.replace_images(self.owner.id, property_obj.id, [first.id, second.id], [])

        self.assertEqual(delete.call_count, 1)
        self.assertEqual(diff.deleted_count, 0)
        self.assertEqual(diff.failed_phases, ["delete"])
        self.assertIsNotNone(self.db.get(PropertyImage, first.id))
        self.assertIsNotNone(self.db.get(PropertyImage, second.id))
        self.assertIn(second.image, self.stored_files())

    def test_failed_blob_save_is_logged_with_context(self):
        with patch.object(self.blob_store, "save", side_effect=StorageError("unavailable")):
            with self.assertLogs("services.lifecycle", level="ERROR") as logs:
                with self.assertRaises(StorageError):
                    self.create_with_images("a.jpg")

        self.assertTrue(any("create_property" in line and f"'user_id': {self.owner.id}" in line for line in logs.output))
        self.assertEqual(self.db.query(Property).count(), 0)

    def test_blob_failure_does_not_block_property_delete(self):
        property_obj = self.create_with_images("a.jpg")

        with patch.object(self.blob_store, "delete", side_effect=StorageError("unavailable")):
            self.service.delete_property(self.owner.id, property_obj.id)

        self.assertEqual(self.db.query(Property).count(), 0)


class TestAttachmentDiff(unittest.TestCase):
    def test_messages(self):
        self.assertEqual(AttachmentDiff().message, "No image changes.")
        self.assertEqual(AttachmentDiff(added_count=2).message, "Uploaded 2 image(s).")
        self.assertEqual(AttachmentDiff(deleted_count=1).message, "Deleted 1 image(s).")


if __name__ == "__main__":
    unittest.main()
