from typing import Iterable, List, Optional

from fastapi import UploadFile

from blob_storage import BlobUpload

# Allowed file extensions
ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}
PROPERTY_IMAGE_MAX_SIZE = 5 * 1024 * 1024  # 5MB
ITEM_IMAGE_MAX_SIZE = 2 * 1024 * 1024  # 2MB


def image_errors(field: str, uploads: Iterable[BlobUpload], max_size: int) -> dict:
     """Return field errors for uploads that are not acceptable images."""
     errors = {}
     for index, upload in enumerate(uploads):
          key = f"{field}.{index}"
          if upload.extension not in ALLOWED_IMAGE_EXTENSIONS:
               errors[key] = (
                    f"File type not allowed. Use: {', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))}"
               )
          elif upload.size > max_size:
               errors[key] = f"File too large. Maximum {max_size // (1024 * 1024)}MB"
     return errors


async def read_upload(file: Optional[UploadFile]) -> Optional[BlobUpload]:
     """Read a multipart file into memory; empty file inputs count as absent."""
     if file is None or not file.filename:
          return None
     contents = await file.read()
     return BlobUpload(filename=file.filename, data=contents, content_type=file.content_type)


async def read_uploads(files: Optional[List[UploadFile]]) -> List[BlobUpload]:
     uploads = []
     for file in files or []:
          upload = await read_upload(file)
          if upload is not None:
               uploads.append(upload)
     return uploads
