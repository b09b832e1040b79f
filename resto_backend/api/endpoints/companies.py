# resto_backend/api/endpoints/companies.py
# type: ignore
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from resto_backend.api.endpoints.auth import get_current_user
from resto_backend.core.ownership import (
    TAX_ID_IN_USE,
    apply_patch,
    authorize_company_create,
    company_snapshot,
    ensure_tax_id_available,
    get_company_for_mutation,
    get_company_or_404,
    patch_values,
)
from resto_backend.database import get_db
from resto_backend.models.auth import User
from resto_backend.models.platform import Company
from resto_backend.repository import Repository
from resto_backend.schemas.platform import (
    CompanyCreate,
    CompanyDetail,
    CompanyInDB,
    CompanyUpdate,
    CompanyWithRestaurants,
)

logger = logging.getLogger(__name__)

# Every company route requires an authenticated caller
router = APIRouter(dependencies=[Depends(get_current_user)])


# ***************************************************************
# 1. Create
# ***************************************************************
@router.post("", response_model=CompanyInDB, status_code=status.HTTP_201_CREATED)
def create_company(
    company_in: CompanyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a company managed by the caller. tax_id must be unused (409)."""
    values = authorize_company_create(db, current_user.id, company_in)
    company = Repository(db, Company).insert(values, conflict_detail=TAX_ID_IN_USE)
    logger.info(f"User {current_user.id} created company {company.id}")
    return company


# ***************************************************************
# 2. Reads (no ownership required)
# ***************************************************************
@router.get("", response_model=List[CompanyDetail])
def read_companies(db: Session = Depends(get_db)):
    """Every company with its manager and restaurants."""
    return [CompanyDetail.model_validate(c) for c in Repository(db, Company).find_all()]


@router.get("/my-companies", response_model=List[CompanyWithRestaurants])
def read_my_companies(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    """Companies managed by the caller, with their restaurants."""
    companies = Repository(db, Company).find_all_by(manager_id=current_user.id)
    return [CompanyWithRestaurants.model_validate(c) for c in companies]


@router.get("/{company_id}", response_model=CompanyDetail)
def read_company(company_id: UUID, db: Session = Depends(get_db)):
    """One company with its manager and restaurants."""
    return CompanyDetail.model_validate(get_company_or_404(db, company_id))


# ***************************************************************
# 3. Update / delete (manager only)
# ***************************************************************
@router.patch("/{company_id}", response_model=CompanyInDB)
def update_company(
    company_id: UUID,
    company_in: CompanyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Patch name and/or tax_id. 404 before 403; a taken tax_id is 409."""
    company = get_company_for_mutation(db, company_id, current_user.id)
    current = company_snapshot(company)

    changes = patch_values(company_in)
    if "tax_id" in changes and changes["tax_id"] != current.tax_id:
        ensure_tax_id_available(db, changes["tax_id"], exclude_company_id=current.id)

    updated = apply_patch(current, company_in)
    return Repository(db, Company).patch(
        current.id,
        updated.model_dump(include=set(changes)),
        conflict_detail=TAX_ID_IN_USE,
    )


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_company(
    company_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a company and, by cascade, its restaurants."""
    company = get_company_for_mutation(db, company_id, current_user.id)
    Repository(db, Company).delete(company)
    logger.info(f"User {current_user.id} deleted company {company_id}")
