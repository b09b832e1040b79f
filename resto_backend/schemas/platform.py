# resto_backend/schemas/platform.py
# type: ignore
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from resto_backend.schemas.auth import NonEmptyStr, UserPublic

TAX_ID_MAX_LENGTH = 14


# ***************************************************************
# 1. Schemas for RESTAURANT
# ***************************************************************
class RestaurantBase(BaseModel):
    """Shared fields for creating and reading restaurants."""
    name: NonEmptyStr = Field(..., max_length=255)
    place: NonEmptyStr = Field(..., max_length=500)


class RestaurantCreate(RestaurantBase):
    """Input schema to create a restaurant under an existing company."""
    company_id: UUID

    model_config = ConfigDict(extra="forbid")


class RestaurantUpdate(BaseModel):
    """Patch body. Only name and place can change; company and creator are fixed."""
    name: Optional[NonEmptyStr] = Field(None, max_length=255)
    place: Optional[NonEmptyStr] = Field(None, max_length=500)

    model_config = ConfigDict(extra="forbid")


class RestaurantInDB(RestaurantBase):
    """Immutable snapshot of a stored restaurant."""
    id: UUID
    creator_id: UUID
    company_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


# ***************************************************************
# 2. Schemas for COMPANY
# ***************************************************************
class CompanyBase(BaseModel):
    """Shared fields for creating and reading companies."""
    name: NonEmptyStr = Field(..., max_length=255)
    tax_id: NonEmptyStr = Field(..., max_length=TAX_ID_MAX_LENGTH)


class CompanyCreate(CompanyBase):
    """Input schema to create a company. The caller becomes its manager."""
    model_config = ConfigDict(extra="forbid")


class CompanyUpdate(BaseModel):
    """Patch body (all optional)."""
    name: Optional[NonEmptyStr] = Field(None, max_length=255)
    tax_id: Optional[NonEmptyStr] = Field(None, max_length=TAX_ID_MAX_LENGTH)

    model_config = ConfigDict(extra="forbid")


class CompanyInDB(CompanyBase):
    """Immutable snapshot of a stored company."""
    id: UUID
    manager_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class CompanyWithRestaurants(CompanyInDB):
    """A company together with its restaurants."""
    restaurants: List[RestaurantInDB] = []


# ***************************************************************
# 3. Read models with related records
#    Nested users are always UserPublic, never the ORM row.
# ***************************************************************
class CompanyDetail(CompanyWithRestaurants):
    """A company with its manager and its restaurants."""
    manager: UserPublic


class RestaurantDetail(RestaurantInDB):
    """A restaurant with its creator, owning company and staff."""
    creator: UserPublic
    company: CompanyInDB
    staff: List[UserPublic] = []


class UserDetail(UserPublic):
    """A user with the restaurant they work at and the companies they manage."""
    restaurant: Optional[RestaurantInDB] = None
    managed_companies: List[CompanyInDB] = []
