from .lifecycle import AttachmentDiff, EntityLifecycleManager
from .property_service import PropertyService
from .menu_service import MenuItemService
from .guest_service import GuestRecordService
from .ownership import authorize, ensure_owner
from .pagination import Page, paginate
from .validation import ValidationResult, validate_payload, ensure_valid, clean_form

__all__ = [
     "AttachmentDiff",
     "EntityLifecycleManager",
     "PropertyService",
     "MenuItemService",
     "GuestRecordService",
     "authorize",
     "ensure_owner",
     "Page",
     "paginate",
     "ValidationResult",
     "validate_payload",
     "ensure_valid",
     "clean_form",
]
