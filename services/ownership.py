"""
Ownership guard.

Every mutation of a property, or of a record hanging off a property, must
pass ``ensure_owner`` before any record or blob is touched.
"""
import logging

from exceptions import AuthorizationError

logger = logging.getLogger(__name__)


def authorize(acting_user_id, owner_user_id) -> bool:
     """Return True when the acting user owns the resource. Pure, no I/O."""
     if acting_user_id is None or owner_user_id is None:
          return False
     return int(acting_user_id) == int(owner_user_id)


def ensure_owner(acting_user_id, owner_user_id, resource: str = "resource") -> None:
     if not authorize(acting_user_id, owner_user_id):
          logger.warning("User %s denied access to %s", acting_user_id, resource)
          raise AuthorizationError()
