# resto_backend/core/ownership.py
# type: ignore
#
# Ownership rules for companies and restaurants:
#   - any authenticated user may create a company and becomes its manager
#   - only the manager may update or delete a company, or add restaurants to it
#   - a restaurant may be updated or deleted by its creator OR the current manager
# The acting user id is always passed in and rules read current stored values.
# Lookups run before permission checks (404 before 403).

import logging
from typing import Any, Dict, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from resto_backend.core.exceptions import ConflictError, NotFoundError, PermissionError
from resto_backend.models.platform import Company, Restaurant
from resto_backend.repository import Repository
from resto_backend.schemas.platform import (
    CompanyCreate,
    CompanyInDB,
    RestaurantCreate,
    RestaurantInDB,
)

logger = logging.getLogger(__name__)

SnapshotT = TypeVar("SnapshotT", bound=BaseModel)

TAX_ID_IN_USE = "tax_id in use"


# ***************************************************************
# 1. Lookups (existence before permission)
# ***************************************************************
def get_company_or_404(db: Session, company_id: UUID) -> Company:
    company = Repository(db, Company).find_by_id(company_id)
    if company is None:
        raise NotFoundError("Company not found")
    return company


def get_restaurant_or_404(db: Session, restaurant_id: UUID) -> Restaurant:
    restaurant = Repository(db, Restaurant).find_by_id(restaurant_id)
    if restaurant is None:
        raise NotFoundError("Restaurant not found")
    return restaurant


def ensure_tax_id_available(db: Session, tax_id: str, exclude_company_id: Optional[UUID] = None) -> None:
    """Raise ConflictError if another company already uses `tax_id`."""
    existing = Repository(db, Company).find_one_by(tax_id=tax_id)
    if existing is not None and existing.id != exclude_company_id:
        logger.warning(f"Rejected duplicate tax_id {tax_id!r}")
        raise ConflictError(TAX_ID_IN_USE)


# ***************************************************************
# 2. Company rules
# ***************************************************************
def authorize_company_create(db: Session, acting_user_id: UUID, company_in: CompanyCreate) -> Dict[str, Any]:
    """Return the draft column values for a new company managed by the caller."""
    ensure_tax_id_available(db, company_in.tax_id)
    return {**company_in.model_dump(), "manager_id": acting_user_id}


def can_mutate_company(acting_user_id: UUID, company) -> bool:
    return company.manager_id == acting_user_id


def authorize_company_mutate(acting_user_id: UUID, company) -> None:
    """Same rule for update and delete: the manager, nobody else."""
    if not can_mutate_company(acting_user_id, company):
        logger.warning(f"User {acting_user_id} denied mutation of company {company.id}")
        raise PermissionError("You are not allowed to modify this company")


def get_company_for_mutation(db: Session, company_id: UUID, acting_user_id: UUID) -> Company:
    company = get_company_or_404(db, company_id)
    authorize_company_mutate(acting_user_id, company)
    return company


# ***************************************************************
# 3. Restaurant rules
# ***************************************************************
def authorize_restaurant_create(db: Session, acting_user_id: UUID, restaurant_in: RestaurantCreate) -> Dict[str, Any]:
    """
    The target company must exist (404) and be managed by the caller (403).
    Returns the draft column values with the caller as creator.
    """
    company = get_company_or_404(db, restaurant_in.company_id)
    if company.manager_id != acting_user_id:
        logger.warning(
            f"User {acting_user_id} denied restaurant creation in company {company.id}"
        )
        raise PermissionError("You are not allowed to create restaurants in this company")

    return {
        **restaurant_in.model_dump(),
        "creator_id": acting_user_id,
        "company_id": restaurant_in.company_id,
    }


def can_mutate_restaurant(acting_user_id: UUID, restaurant, company) -> bool:
    """Creator authority OR the owning company's manager authority."""
    return acting_user_id == restaurant.creator_id or acting_user_id == company.manager_id


def authorize_restaurant_mutate(db: Session, acting_user_id: UUID, restaurant) -> None:
    """Same rule for update and delete. Loads the owning company explicitly."""
    company = get_company_or_404(db, restaurant.company_id)
    if not can_mutate_restaurant(acting_user_id, restaurant, company):
        logger.warning(
            f"User {acting_user_id} denied mutation of restaurant {restaurant.id}"
        )
        raise PermissionError("You are not allowed to modify this restaurant")


def get_restaurant_for_mutation(db: Session, restaurant_id: UUID, acting_user_id: UUID) -> Restaurant:
    restaurant = get_restaurant_or_404(db, restaurant_id)
    authorize_restaurant_mutate(db, acting_user_id, restaurant)
    return restaurant


# ***************************************************************
# 4. Patch semantics
# ***************************************************************
def patch_values(patch: BaseModel) -> Dict[str, Any]:
    """Fields the client actually sent; explicit nulls are ignored."""
    return patch.model_dump(exclude_unset=True, exclude_none=True)


def apply_patch(snapshot: SnapshotT, patch: BaseModel) -> SnapshotT:
    """Return a new snapshot with the patch applied; `snapshot` is left untouched."""
    return snapshot.model_copy(update=patch_values(patch))


def company_snapshot(company: Company) -> CompanyInDB:
    return CompanyInDB.model_validate(company)


def restaurant_snapshot(restaurant: Restaurant) -> RestaurantInDB:
    return RestaurantInDB.model_validate(restaurant)
