"""
Menu Item Service - restaurant menus of a property and their category tags.
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy import or_

from blob_storage import BlobUpload
from exceptions import NotFoundError, ValidationError
from models import RestaurantCategory, RestaurantMenuItem
from schemas.restaurant import MenuItemCreate, MenuItemUpdate
from services.lifecycle import EntityLifecycleManager
from services.ownership import ensure_owner
from services.pagination import LIKE_ESCAPE, Page, contains_pattern, paginate
from services.validation import ensure_valid
from utils.uploads import ITEM_IMAGE_MAX_SIZE

logger = logging.getLogger(__name__)

MENU_IMAGE_FOLDER = "restaurant-menu"


class MenuItemService(EntityLifecycleManager):
     """Service class for restaurant menu items."""

     def list_categories(self) -> List[RestaurantCategory]:
          return self.db.query(RestaurantCategory).order_by(RestaurantCategory.name).all()

     def get_menu_item(self, acting_user_id: int, item_id: int) -> RestaurantMenuItem:
          item = self.db.get(RestaurantMenuItem, item_id)
          if item is None:
               raise NotFoundError(f"Menu item {item_id} not found")
          ensure_owner(acting_user_id, item.property.user_id, f"menu item {item_id}")
          return item

     def list_menu_items(
          self,
          acting_user_id: int,
          property_id: int,
          category_ids: Optional[Iterable[int]] = None,
          search: Optional[str] = None,
          page: int = 1,
     ) -> Page:
          """
          Menu items of one owned property, ordered by name.

          ``search`` is a case-insensitive substring match on name or
          description; ``category_ids`` keeps items tagged with any of them.
          """
          property_obj = self.get_owned_property(acting_user_id, property_id)
          query = self.db.query(RestaurantMenuItem).filter(
               RestaurantMenuItem.property_id == property_obj.id
          )

          if search:
               pattern = contains_pattern(search)
               query = query.filter(
                    or_(
                         RestaurantMenuItem.name.ilike(pattern, escape=LIKE_ESCAPE),
                         RestaurantMenuItem.description.ilike(pattern, escape=LIKE_ESCAPE),
                    )
               )

          ids = {int(category_id) for category_id in (category_ids or [])}
          if ids:
               query = query.filter(
                    RestaurantMenuItem.categories.any(RestaurantCategory.id.in_(ids))
               )

          query = query.order_by(RestaurantMenuItem.name, RestaurantMenuItem.id)
          return paginate(query, page)

     def _resolve_categories(self, category_ids: Iterable[int]) -> List[RestaurantCategory]:
          ids = {int(category_id) for category_id in category_ids}
          if not ids:
               return []
          categories = self.db.query(RestaurantCategory).filter(RestaurantCategory.id.in_(ids)).all()
          missing = ids - {category.id for category in categories}
          if missing:
               raise ValidationError(
                    {"categories": f"Unknown category id(s): {', '.join(str(i) for i in sorted(missing))}"}
               )
          return categories

     @staticmethod
     def _apply_categories(item: RestaurantMenuItem, categories: List[RestaurantCategory]) -> None:
          """Make ``item.categories`` exactly ``categories``, leaving unchanged tags alone."""
          wanted = {category.id: category for category in categories}
          for category in list(item.categories):
               if category.id not in wanted:
                    item.categories.remove(category)
          current = {category.id for category in item.categories}
          for category_id, category in wanted.items():
               if category_id not in current:
                    item.categories.append(category)

     def create_menu_item(
          self,
          acting_user_id: int,
          fields,
          image: Optional[BlobUpload] = None,
          category_ids: Optional[Iterable[int]] = None,
     ) -> RestaurantMenuItem:
          """
          Create a menu item on a property the user owns.

          The image blob is written before the record; categories are
          attached once the item exists.
          """
          data = ensure_valid(MenuItemCreate, fields)
          if image is not None:
               self.check_images("image", [image], ITEM_IMAGE_MAX_SIZE)
          categories = self._resolve_categories(category_ids or [])
          property_obj = self.get_owned_property(acting_user_id, data.property_id)

          context = {"operation": "create_menu_item", "property_id": property_obj.id, "user_id": acting_user_id}
          with self.unit_of_work(context) as written:
               values = data.model_dump(exclude={"property_id"})
               item = RestaurantMenuItem(property=property_obj, **values)
               if image is not None:
                    item.image = self._store_blob(image, MENU_IMAGE_FOLDER, written, context)
               self.db.add(item)
               self.db.flush()
               self._apply_categories(item, categories)

          logger.info("Menu item %s created on property %s", item.id, property_obj.id)
          return item

     def update_menu_item(
          self,
          acting_user_id: int,
          item_id: int,
          fields,
          image: Optional[BlobUpload] = None,
          category_ids: Optional[Iterable[int]] = None,
     ) -> RestaurantMenuItem:
          """
          Partially update a menu item.

          ``category_ids`` of None leaves the tags untouched; any iterable
          (including an empty one) replaces them. A new ``image`` replaces
          the current one, whose blob is deleted after the save.
          """
          item = self.get_menu_item(acting_user_id, item_id)
          data = ensure_valid(MenuItemUpdate, fields)
          changes = data.model_dump(exclude_unset=True)

          new_property = None
          target_id = changes.pop("property_id", item.property_id)
          if target_id != item.property_id:
               new_property = self.get_owned_property(acting_user_id, target_id)

          if image is not None:
               self.check_images("image", [image], ITEM_IMAGE_MAX_SIZE)
          categories = self._resolve_categories(category_ids) if category_ids is not None else None

          context = {"operation": "update_menu_item", "menu_item_id": item_id, "user_id": acting_user_id}
          previous_image = item.image
          with self.unit_of_work(context) as written:
               for name, value in changes.items():
                    setattr(item, name, value)
               if new_property is not None:
                    item.property = new_property
               if categories is not None:
                    self._apply_categories(item, categories)
               if image is not None:
                    item.image = self._store_blob(image, MENU_IMAGE_FOLDER, written, context)

          if image is not None and previous_image:
               self._delete_blob_quietly(previous_image, context)
          return item

     def replace_image(self, acting_user_id: int, item_id: int, image: BlobUpload) -> RestaurantMenuItem:
          item = self.get_menu_item(acting_user_id, item_id)
          self.check_images("image", [image], ITEM_IMAGE_MAX_SIZE)
          context = {"operation": "replace_menu_image", "menu_item_id": item_id, "user_id": acting_user_id}
          return self._replace_single_image(item, image, MENU_IMAGE_FOLDER, context)

     def sync_categories(self, acting_user_id: int, item_id: int, category_ids: Iterable[int]) -> RestaurantMenuItem:
          """Replace the item's categories with exactly ``category_ids``."""
          item = self.get_menu_item(acting_user_id, item_id)
          categories = self._resolve_categories(category_ids)
          context = {"operation": "sync_categories", "menu_item_id": item_id, "user_id": acting_user_id}
          with self.unit_of_work(context):
               self._apply_categories(item, categories)
          return item

     def delete_menu_item(self, acting_user_id: int, item_id: int) -> int:
          """Delete a menu item and its image blob. Returns the property id."""
          item = self.get_menu_item(acting_user_id, item_id)
          property_id = item.property_id
          context = {"operation": "delete_menu_item", "menu_item_id": item_id, "user_id": acting_user_id}
          with self.unit_of_work(context):
               self._delete_blob_quietly(item.image, context)
               self.db.delete(item)
          logger.info("Menu item %s deleted from property %s", item_id, property_id)
          return property_id
