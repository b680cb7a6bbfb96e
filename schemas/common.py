"""
Shared response schemas.
"""
from typing import List
from pydantic import BaseModel, Field, ConfigDict


class PageMeta(BaseModel):
     """Pagination details attached to every list page."""
     current_page: int = 1
     per_page: int = 12
     total: int = 0
     last_page: int = 1


class ImageChangeResponse(BaseModel):
     """JSON acknowledgement of an image diff."""
     success: bool = True
     message: str
     uploaded_count: int = 0
     deleted_count: int = 0
     failed_phases: List[str] = Field(default_factory=list)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "success": True,
                    "message": "Uploaded 1 image(s) and deleted 2 image(s).",
                    "uploaded_count": 1,
                    "deleted_count": 2,
                    "failed_phases": [],
               }
          }
     )


class MessageResponse(BaseModel):
     success: bool = True
     message: str
