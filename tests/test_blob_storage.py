"""
Tests for the local blob store.
"""
import tempfile
import unittest
from pathlib import Path

from blob_storage import BlobStore, LocalBlobStore
from exceptions import StorageError
from tests.support import image


class TestLocalBlobStore(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = LocalBlobStore(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_save_writes_under_folder(self):
        key = self.store.save(image("Lobby.JPG", data=b"lobby"), "property-images")
        self.assertTrue(key.startswith("property-images/"))
        self.assertTrue(key.endswith(".jpg"))
        self.assertEqual((Path(self.tmp.name) / key).read_bytes(), b"lobby")
        self.assertTrue(self.store.exists(key))

    def test_keys_are_unique(self):
        first = self.store.save(image("a.jpg"), "restaurant-menu")
        second = self.store.save(image("a.jpg"), "restaurant-menu")
        self.assertNotEqual(first, second)

    def test_delete(self):
        key = self.store.save(image(), "tv-managers")
        self.assertTrue(self.store.delete(key))
        self.assertFalse(self.store.exists(key))

    def test_deleting_absent_blob_is_not_an_error(self):
        self.assertFalse(self.store.delete("tv-managers/missing.jpg"))

    def test_key_cannot_escape_root(self):
        with self.assertRaises(StorageError):
            self.store.delete("../outside.jpg")

    def test_url(self):
        self.assertEqual(self.store.url("restaurant-menu/x.png"), "/uploads/restaurant-menu/x.png")

    def test_build_key_without_extension(self):
        key = BlobStore.build_key("property-images", "noext")
        self.assertRegex(key, r"^property-images/[0-9a-f]{32}$")


if __name__ == "__main__":
    unittest.main()
