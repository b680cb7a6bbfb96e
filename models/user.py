# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class User(Base):
     """
     User model - property owners signing in to the back office.
     Authentication lives outside this service; only identity is stored.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     name = Column(String(255), nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     properties = relationship("Property", back_populates="user")

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
