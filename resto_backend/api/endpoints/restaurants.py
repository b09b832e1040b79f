# resto_backend/api/endpoints/restaurants.py
# type: ignore
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from resto_backend.api.endpoints.auth import get_current_user
from resto_backend.core.ownership import (
    apply_patch,
    authorize_restaurant_create,
    get_restaurant_for_mutation,
    get_restaurant_or_404,
    patch_values,
    restaurant_snapshot,
)
from resto_backend.database import get_db
from resto_backend.models.auth import User
from resto_backend.models.platform import Restaurant
from resto_backend.repository import Repository
from resto_backend.schemas.platform import (
    RestaurantCreate,
    RestaurantDetail,
    RestaurantInDB,
    RestaurantUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])


def _details(restaurants: List[Restaurant]) -> List[RestaurantDetail]:
    return [RestaurantDetail.model_validate(r) for r in restaurants]


# ***************************************************************
# 1. Create (manager of the target company only)
# ***************************************************************
@router.post("", response_model=RestaurantInDB, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    restaurant_in: RestaurantCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a restaurant. 404 if the company is missing, 403 if the caller does not manage it."""
    values = authorize_restaurant_create(db, current_user.id, restaurant_in)
    restaurant = Repository(db, Restaurant).insert(values)
    logger.info(
        f"User {current_user.id} created restaurant {restaurant.id} in company {restaurant.company_id}"
    )
    return restaurant


# ***************************************************************
# 2. Reads (no ownership required)
# ***************************************************************
@router.get("", response_model=List[RestaurantDetail])
def read_restaurants(db: Session = Depends(get_db)):
    return _details(Repository(db, Restaurant).find_all())


@router.get("/my-restaurants", response_model=List[RestaurantDetail])
def read_my_restaurants(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    """Restaurants created by the caller."""
    return _details(Repository(db, Restaurant).find_all_by(creator_id=current_user.id))


@router.get("/company/{company_id}", response_model=List[RestaurantDetail])
def read_company_restaurants(company_id: UUID, db: Session = Depends(get_db)):
    """Restaurants of a company; an unknown company simply yields []."""
    return _details(Repository(db, Restaurant).find_all_by(company_id=company_id))


@router.get("/{restaurant_id}", response_model=RestaurantDetail)
def read_restaurant(restaurant_id: UUID, db: Session = Depends(get_db)):
    """One restaurant with its creator, company and staff."""
    return RestaurantDetail.model_validate(get_restaurant_or_404(db, restaurant_id))


# ***************************************************************
# 3. Update / delete (creator OR company manager)
# ***************************************************************
@router.patch("/{restaurant_id}", response_model=RestaurantInDB)
def update_restaurant(
    restaurant_id: UUID,
    restaurant_in: RestaurantUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    restaurant = get_restaurant_for_mutation(db, restaurant_id, current_user.id)
    current = restaurant_snapshot(restaurant)

    updated = apply_patch(current, restaurant_in)
    changed = set(patch_values(restaurant_in))
    return Repository(db, Restaurant).patch(current.id, updated.model_dump(include=changed))


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_restaurant(
    restaurant_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a restaurant; its staff keep their accounts with restaurant_id cleared."""
    restaurant = get_restaurant_for_mutation(db, restaurant_id, current_user.id)
    Repository(db, Restaurant).delete(restaurant)
    logger.info(f"User {current_user.id} deleted restaurant {restaurant_id}")
