"""
Shared fixtures for the service and API tests.
"""
import tempfile
import unittest
from decimal import Decimal
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blob_storage import BlobUpload, LocalBlobStore
from models import Base, Property, RestaurantMenuItem, User


def make_session():
    """Fresh in-memory database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()


def image(filename="photo.jpg", data=b"\x89PNG fake image bytes", content_type="image/jpeg"):
    return BlobUpload(filename=filename, data=data, content_type=content_type)


class BackofficeTestCase(unittest.TestCase):
    """Database session, temporary blob store and two users: an owner and a stranger."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.blob_store = LocalBlobStore(self.tmp.name)
        self.db = make_session()

        self.owner = User(email="owner@example.com", name="Owner")
        self.stranger = User(email="stranger@example.com", name="Stranger")
        self.db.add_all([self.owner, self.stranger])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.tmp.cleanup()

    def stored_files(self):
        """Store-relative keys of every blob currently on disk."""
        root = Path(self.tmp.name)
        return sorted(str(path.relative_to(root)).replace("\\", "/") for path in root.rglob("*") if path.is_file())

    def add_property(self, user, name="Hotel Grand"):
        property_obj = Property(user_id=user.id, name=name)
        self.db.add(property_obj)
        self.db.commit()
        return property_obj

    def add_menu_item(self, property_obj, name, description=None, price="10.00", categories=()):
        item = RestaurantMenuItem(
            property_id=property_obj.id,
            name=name,
            description=description,
            price=Decimal(price),
        )
        item.categories.extend(categories)
        self.db.add(item)
        self.db.commit()
        return item
