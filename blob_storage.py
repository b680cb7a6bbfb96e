"""
Blob storage for uploaded images.

Blobs are addressed by a store-relative key such as
``property-images/3f2c...e1.jpg``; only that key is persisted in the
database. Two backends are available: the local disk (served by the app
under /uploads) and an Azure Blob Storage container.
"""
import logging
import os
import uuid
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from config import settings
from exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass
class BlobUpload:
     """An uploaded file waiting to be stored."""
     filename: str
     data: bytes
     content_type: Optional[str] = None

     @property
     def extension(self) -> str:
          return os.path.splitext(self.filename or "")[1].lower()

     @property
     def size(self) -> int:
          return len(self.data)


class BlobStore:
     """Interface shared by the storage backends."""

     def save(self, upload: BlobUpload, folder: str) -> str:
          raise NotImplementedError

     def delete(self, key: str) -> bool:
          """Delete a blob. Returns False when it was already absent."""
          raise NotImplementedError

     def url(self, key: str) -> str:
          raise NotImplementedError

     @staticmethod
     def build_key(folder: str, filename: str) -> str:
          ext = os.path.splitext(filename or "")[1].lower()
          return f"{folder}/{uuid.uuid4().hex}{ext}"


class LocalBlobStore(BlobStore):
     """Stores blobs on the local file system below ``root``."""

     def __init__(self, root: str, url_prefix: str = "/uploads"):
          self.root = Path(root).resolve()
          self.url_prefix = url_prefix.rstrip("/")
          self.root.mkdir(parents=True, exist_ok=True)

     def _path(self, key: str) -> Path:
          path = (self.root / key).resolve()
          if self.root not in path.parents:
               raise StorageError(f"Blob key escapes storage root: {key}", details={"key": key})
          return path

     def save(self, upload: BlobUpload, folder: str) -> str:
          key = self.build_key(folder, upload.filename)
          path = self._path(key)
          try:
               path.parent.mkdir(parents=True, exist_ok=True)
               with open(path, "wb") as buffer:
                    buffer.write(upload.data)
          except OSError as e:
               raise StorageError(f"Failed to write blob {key}", details={"key": key}) from e
          return key

     def delete(self, key: str) -> bool:
          path = self._path(key)
          try:
               path.unlink()
          except FileNotFoundError:
               return False
          except OSError as e:
               raise StorageError(f"Failed to delete blob {key}", details={"key": key}) from e
          return True

     def exists(self, key: str) -> bool:
          return self._path(key).is_file()

     def url(self, key: str) -> str:
          return f"{self.url_prefix}/{key}"


class AzureBlobStore(BlobStore):
     """Stores blobs in a single Azure Blob Storage container."""

     def __init__(self, account: str, key: str, container: str):
          self.account = account
          self.container = container
          self._service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={account};"
               f"AccountKey={key};"
               f"EndpointSuffix=core.windows.net"
          )

     def save(self, upload: BlobUpload, folder: str) -> str:
          key = self.build_key(folder, upload.filename)
          blob_client = self._service.get_blob_client(container=self.container, blob=key)
          try:
               blob_client.upload_blob(
                    upload.data,
                    overwrite=True,
                    content_settings=ContentSettings(
                         content_type=upload.content_type or "application/octet-stream"
                    ),
               )
          except AzureError as e:
               raise StorageError(f"Failed to upload blob {key}", details={"key": key}) from e
          return key

     def delete(self, key: str) -> bool:
          blob_client = self._service.get_blob_client(container=self.container, blob=key)
          try:
               blob_client.delete_blob()
          except ResourceNotFoundError:
               return False
          except AzureError as e:
               raise StorageError(f"Failed to delete blob {key}", details={"key": key}) from e
          return True

     def url(self, key: str) -> str:
          return f"https://{self.account}.blob.core.windows.net/{self.container}/{key}"


@lru_cache()
def get_blob_store() -> BlobStore:
     """FastAPI dependency returning the configured blob store."""
     if settings.blob_backend == "azure":
          logger.info("Using Azure blob container %s", settings.azure_blob_container)
          return AzureBlobStore(
               settings.azure_storage_account,
               settings.azure_storage_key,
               settings.azure_blob_container,
          )
     return LocalBlobStore(settings.upload_dir)
