# resto_backend/models/platform.py
# type: ignore

from uuid import uuid4

from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from resto_backend.database import Base
from resto_backend.models.auth import utcnow


# ***************************************************************
# 1. Company (tenant, controlled by exactly one manager)
# ***************************************************************
class Company(Base):
    """
    A company on the platform. Only its manager may edit or delete it.
    """
    __tablename__ = "companies"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    tax_id = Column(String(14), unique=True, index=True, nullable=False)
    manager_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    manager = relationship("User", back_populates="managed_companies")
    restaurants = relationship("Restaurant", back_populates="company", cascade="all, delete-orphan")


# ***************************************************************
# 2. Restaurant (belongs to one Company, has one creator)
# ***************************************************************
class Restaurant(Base):
    """
    A restaurant under a Company. Its creator and the company's current
    manager may both edit or delete it.
    """
    __tablename__ = "restaurants"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    place = Column(String(500), nullable=False)
    creator_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    company_id = Column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    creator = relationship("User", back_populates="created_restaurants", foreign_keys=[creator_id])
    company = relationship("Company", back_populates="restaurants")
    # Deleting a restaurant through the session nulls users.restaurant_id
    staff = relationship("User", back_populates="restaurant", foreign_keys="User.restaurant_id")
