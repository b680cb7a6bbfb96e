"""
Pydantic schemas for TV manager guest records.
"""
from datetime import date
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from models.guest_record import GuestStatus
from schemas.common import PageMeta
from schemas.property import PropertyOption


class GuestFields(BaseModel):
     property_id: Optional[int] = Field(None, gt=0)
     guest_name: Optional[str] = Field(None, min_length=1, max_length=255)
     area_name: Optional[str] = Field(None, max_length=255)
     room_number: Optional[str] = Field(None, max_length=50)
     birth_date: Optional[date] = None
     check_in_date: Optional[date] = None
     check_out_date: Optional[date] = None
     status: Optional[GuestStatus] = None


class GuestCreate(GuestFields):
     property_id: int = Field(..., gt=0)
     guest_name: str = Field(..., min_length=1, max_length=255)
     status: GuestStatus = GuestStatus.CHECKED_IN


class GuestUpdate(GuestFields):

     @field_validator("property_id", "guest_name", "status")
     @classmethod
     def not_null(cls, value, info):
          if value is None:
               raise ValueError(f"The {info.field_name} field is required.")
          return value


class GuestResponse(BaseModel):
     id: int
     property_id: int
     guest_name: str
     area_name: Optional[str] = None
     room_number: Optional[str] = None
     birth_date: Optional[date] = None
     image: Optional[str] = None
     image_url: Optional[str] = None
     check_in_date: Optional[date] = None
     check_out_date: Optional[date] = None
     status: GuestStatus


class GuestPage(PageMeta):
     data: List[GuestResponse] = Field(default_factory=list)


class TvManagerIndexResponse(BaseModel):
     """Page data for the TV manager screen."""
     properties: List[PropertyOption]
     selected_property: Optional[PropertyOption] = None
     tv_managers: GuestPage
     filters: dict
