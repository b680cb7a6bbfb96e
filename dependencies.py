"""
FastAPI dependencies shared by the routers: token auth and service wiring.
"""
from fastapi import Depends, HTTPException, Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from blob_storage import BlobStore, get_blob_store
from config import settings
from database import get_session
from services import GuestRecordService, MenuItemService, PropertyService


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=401, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
          return payload
     except JWTError:
          raise HTTPException(status_code=403, detail="Invalid token")


def get_current_user_id(token: dict = Depends(verify_token)) -> int:
     """Acting user identity, passed explicitly into every service call."""
     user_id = token.get("id")
     if user_id is None:
          raise HTTPException(status_code=403, detail="Invalid token")
     try:
          return int(user_id)
     except (TypeError, ValueError):
          raise HTTPException(status_code=403, detail="Invalid token")


def get_property_service(
     db: Session = Depends(get_session),
     blob_store: BlobStore = Depends(get_blob_store),
) -> PropertyService:
     return PropertyService(db, blob_store)


def get_menu_service(
     db: Session = Depends(get_session),
     blob_store: BlobStore = Depends(get_blob_store),
) -> MenuItemService:
     return MenuItemService(db, blob_store)


def get_guest_service(
     db: Session = Depends(get_session),
     blob_store: BlobStore = Depends(get_blob_store),
) -> GuestRecordService:
     return GuestRecordService(db, blob_store)
