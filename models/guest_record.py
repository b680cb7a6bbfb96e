# models/guest_record.py
import enum
from sqlalchemy import Column, Integer, String, Date, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, enum_values


class GuestStatus(str, enum.Enum):
     """Stay status. Any value may be set at any time."""
     CHECKED_IN = "checked_in"
     CHECKED_OUT = "checked_out"


class GuestRecord(TimestampMixin, Base):
     """
     GuestRecord model - the in-room TV welcome screen data for a guest.
     Maps to the 'tv_managers' table.
     """
     __tablename__ = "tv_managers"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     guest_name = Column(String(255), nullable=False)
     area_name = Column(String(255), nullable=True)
     room_number = Column(String(50), nullable=True)
     birth_date = Column(Date, nullable=True)
     image = Column(String(500), nullable=True)

     # Stay
     check_in_date = Column(Date, nullable=True)
     check_out_date = Column(Date, nullable=True)
     status = Column(
          Enum(GuestStatus, name="guest_status", values_callable=enum_values, create_constraint=True),
          default=GuestStatus.CHECKED_IN,
          nullable=False,
     )

     # Relationships
     property = relationship("Property", back_populates="guest_records")

     def __repr__(self):
          return f"<GuestRecord(id={self.id}, guest_name='{self.guest_name}', status='{self.status}')>"
