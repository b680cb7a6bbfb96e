"""
Tests for the Menu Item service: category sync, search and pagination.
"""
import unittest
from decimal import Decimal
from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError

from exceptions import AuthorizationError, StorageError, ValidationError
from models import MenuItemStatus, RestaurantCategory, RestaurantMenuItem, menu_item_categories
from seeds import seed_restaurant_categories
from services import MenuItemService
from tests.support import BackofficeTestCase, image


class TestMenuItemService(BackofficeTestCase):
    def setUp(self):
        super().setUp()
        self.service = MenuItemService(self.db, self.blob_store)
        self.property = self.add_property(self.owner)
        seed_restaurant_categories(self.db, ["Appetizer", "Beverage", "Dessert"])
        self.db.commit()
        self.appetizer, self.beverage, self.dessert = (
            self.db.query(RestaurantCategory).filter_by(name=name).one()
            for name in ("Appetizer", "Beverage", "Dessert")
        )

    def category_names(self, item):
        self.db.refresh(item)
        return sorted(category.name for category in item.categories)

    def test_create_menu_item(self):
        item = self.service.create_menu_item(
            self.owner.id,
            {"property_id": self.property.id, "name": "Nasi Goreng", "price": "45000"},
            image("nasi.jpg"),
            [self.appetizer.id, self.dessert.id],
        )

        self.assertEqual(item.property_id, self.property.id)
        self.assertEqual(item.status, MenuItemStatus.ENABLED)
        self.assertEqual(item.price, Decimal("45000"))
        self.assertEqual(self.category_names(item), ["Appetizer", "Dessert"])
        self.assertEqual(self.stored_files(), [item.image])
        self.assertTrue(item.image.startswith("restaurant-menu/"))

    def test_price_must_not_be_negative(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_menu_item(
                self.owner.id, {"property_id": self.property.id, "name": "Tea", "price": "-1"}
            )
        self.assertIn("price", ctx.exception.errors)

        item = self.service.create_menu_item(
            self.owner.id, {"property_id": self.property.id, "name": "Tea", "price": "0"}
        )
        self.assertEqual(item.price, Decimal("0"))

    def test_create_on_strangers_property(self):
        foreign = self.add_property(self.stranger, name="Elsewhere")

        with self.assertRaises(AuthorizationError):
            self.service.create_menu_item(
                self.owner.id, {"property_id": foreign.id, "name": "Tea", "price": "1"}, image()
            )

        self.assertEqual(self.db.query(RestaurantMenuItem).count(), 0)
        self.assertEqual(self.stored_files(), [])

    def test_unknown_category_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_menu_item(
                self.owner.id,
                {"property_id": self.property.id, "name": "Tea", "price": "1"},
                category_ids=[self.beverage.id, 999],
            )
        self.assertIn("categories", ctx.exception.errors)

    def test_sync_categories(self):
        item = self.add_menu_item(self.property, "Es Teh", categories=[self.appetizer, self.beverage])

        self.service.sync_categories(self.owner.id, item.id, [self.beverage.id, self.dessert.id])

        self.assertEqual(self.category_names(item), ["Beverage", "Dessert"])
        links = self.db.query(menu_item_categories).filter_by(restaurant_menu_item_id=item.id).count()
        self.assertEqual(links, 2)

    def test_sync_categories_with_duplicates_and_empty(self):
        item = self.add_menu_item(self.property, "Es Teh")

        self.service.sync_categories(self.owner.id, item.id, [self.beverage.id, self.beverage.id])
        self.assertEqual(self.category_names(item), ["Beverage"])

        self.service.sync_categories(self.owner.id, item.id, [])
        self.assertEqual(self.category_names(item), [])

    def test_sync_unknown_category_leaves_item_unchanged(self):
        item = self.add_menu_item(self.property, "Es Teh", categories=[self.beverage])

        with self.assertRaises(ValidationError):
            self.service.sync_categories(self.owner.id, item.id, [999])

        self.assertEqual(self.category_names(item), ["Beverage"])

    def test_sync_by_stranger(self):
        item = self.add_menu_item(self.property, "Es Teh", categories=[self.beverage])

        with self.assertRaises(AuthorizationError):
            self.service.sync_categories(self.stranger.id, item.id, [self.dessert.id])

        self.assertEqual(self.category_names(item), ["Beverage"])

    def test_search_is_case_insensitive_over_name_and_description(self):
        self.add_menu_item(self.property, "Nasi Goreng")
        self.add_menu_item(self.property, "Mie Ayam", description="Noodles with goreng shallots")
        self.add_menu_item(self.property, "Es Teh", description="Sweet iced tea")

        page = self.service.list_menu_items(self.owner.id, self.property.id, search="GORENG")

        self.assertEqual([item.name for item in page.items], ["Mie Ayam", "Nasi Goreng"])
        self.assertEqual(page.total, 2)

    def test_search_treats_wildcards_literally(self):
        self.add_menu_item(self.property, "Nasi Goreng")
        self.add_menu_item(self.property, "Promo 50% off")

        page = self.service.list_menu_items(self.owner.id, self.property.id, search="_")
        self.assertEqual(page.items, [])

        page = self.service.list_menu_items(self.owner.id, self.property.id, search="50%")
        self.assertEqual([item.name for item in page.items], ["Promo 50% off"])

        page = self.service.list_menu_items(self.owner.id, self.property.id, search="%")
        self.assertEqual([item.name for item in page.items], ["Promo 50% off"])

    def test_search_stays_within_property(self):
        foreign = self.add_property(self.stranger, name="Elsewhere")
        self.add_menu_item(foreign, "Nasi Goreng Spesial")
        self.add_menu_item(foreign, "Soto", description="goreng")
        self.add_menu_item(self.property, "Nasi Goreng")

        page = self.service.list_menu_items(self.owner.id, self.property.id, search="goreng")

        self.assertEqual([item.name for item in page.items], ["Nasi Goreng"])

    def test_category_filter_matches_any(self):
        self.add_menu_item(self.property, "Lumpia", categories=[self.appetizer])
        self.add_menu_item(self.property, "Es Teh", categories=[self.beverage])
        self.add_menu_item(self.property, "Puding", categories=[self.dessert, self.appetizer])

        page = self.service.list_menu_items(
            self.owner.id, self.property.id, category_ids=[self.appetizer.id, self.beverage.id]
        )

        self.assertEqual([item.name for item in page.items], ["Es Teh", "Lumpia", "Puding"])

    def test_pagination(self):
        for index in range(13):
            self.add_menu_item(self.property, f"Item {index:02d}")

        first = self.service.list_menu_items(self.owner.id, self.property.id)
        second = self.service.list_menu_items(self.owner.id, self.property.id, page=2)

        self.assertEqual(len(first.items), 12)
        self.assertEqual([item.name for item in second.items], ["Item 12"])
        self.assertEqual((first.total, first.last_page), (13, 2))

    def test_list_for_strangers_property(self):
        foreign = self.add_property(self.stranger, name="Elsewhere")
        with self.assertRaises(AuthorizationError):
            self.service.list_menu_items(self.owner.id, foreign.id)

    def test_update_replaces_image_after_save(self):
        item = self.service.create_menu_item(
            self.owner.id, {"property_id": self.property.id, "name": "Tea", "price": "1"}, image("old.jpg")
        )
        old_key = item.image

        updated = self.service.update_menu_item(
            self.owner.id, item.id, {"name": "Iced Tea", "status": "disabled"}, image("new.png")
        )

        self.assertEqual(updated.name, "Iced Tea")
        self.assertEqual(updated.status, MenuItemStatus.DISABLED)
        self.assertNotEqual(updated.image, old_key)
        self.assertEqual(self.stored_files(), [updated.image])

    def test_update_without_category_ids_keeps_tags(self):
        item = self.add_menu_item(self.property, "Tea", categories=[self.beverage])

        self.service.update_menu_item(self.owner.id, item.id, {"price": "2.50"})

        self.assertEqual(self.category_names(item), ["Beverage"])
        self.assertEqual(item.price, Decimal("2.50"))

    def test_update_cannot_move_to_strangers_property(self):
        item = self.add_menu_item(self.property, "Tea")
        foreign = self.add_property(self.stranger, name="Elsewhere")

        with self.assertRaises(AuthorizationError):
            self.service.update_menu_item(self.owner.id, item.id, {"property_id": foreign.id})

        self.db.refresh(item)
        self.assertEqual(item.property_id, self.property.id)

    def test_failed_image_replace_keeps_old_image(self):
        item = self.service.create_menu_item(
            self.owner.id, {"property_id": self.property.id, "name": "Tea", "price": "1"}, image("old.jpg")
        )
        old_key = item.image

        with patch.object(self.db, "commit", side_effect=SQLAlchemyError("locked")):
            with self.assertRaises(StorageError):
                self.service.replace_image(self.owner.id, item.id, image("new.jpg"))

        self.db.refresh(item)
        self.assertEqual(item.image, old_key)
        self.assertEqual(self.stored_files(), [old_key])

    def test_replace_image(self):
        item = self.service.create_menu_item(
            self.owner.id, {"property_id": self.property.id, "name": "Tea", "price": "1"}, image("old.jpg")
        )
        old_key = item.image

        self.service.replace_image(self.owner.id, item.id, image("new.gif"))

        self.assertNotEqual(item.image, old_key)
        self.assertEqual(self.stored_files(), [item.image])

    def test_delete_menu_item(self):
        item = self.service.create_menu_item(
            self.owner.id,
            {"property_id": self.property.id, "name": "Tea", "price": "1"},
            image(),
            [self.beverage.id],
        )
        item_id = item.id

        self.assertEqual(self.service.delete_menu_item(self.owner.id, item_id), self.property.id)

        self.assertEqual(self.db.query(RestaurantMenuItem).count(), 0)
        self.assertEqual(self.db.query(menu_item_categories).count(), 0)
        self.assertEqual(self.db.query(RestaurantCategory).count(), 3)
        self.assertEqual(self.stored_files(), [])

    def test_delete_by_stranger(self):
        item = self.add_menu_item(self.property, "Tea")
        with self.assertRaises(AuthorizationError):
            self.service.delete_menu_item(self.stranger.id, item.id)
        self.assertEqual(self.db.query(RestaurantMenuItem).count(), 1)


if __name__ == "__main__":
    unittest.main()
