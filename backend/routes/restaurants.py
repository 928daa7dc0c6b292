# backend/routes/restaurants.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.restaurant import Restaurant
from schemas.restaurant import (
    RestaurantCreate, RestaurantEnvelope, RestaurantList, RestaurantOut, RestaurantRead, RestaurantUpdate
)
from schemas.user import TokenData
from utils.access import commit_or_404, delete_or_404, ensure_admin, get_or_404
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user, require_admin

router = APIRouter(prefix="/restaurants", tags=["Restaurants"])

# Public reads, admin-only writes


@router.post("", response_model=RestaurantEnvelope, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    payload: RestaurantCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    restaurant = Restaurant(name=payload.name, address=payload.address)
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)

    write_log(db, user_id=current_user.id, action="RESTAURANT_CREATE", resource="restaurants",
              ip=client_ip(request), meta={"restaurant_id": restaurant.id})

    return {"message": "Restaurant created", "restaurant": RestaurantOut.model_validate(restaurant)}


@router.get("", response_model=RestaurantList)
def list_restaurants(db: Session = Depends(get_db)):
    restaurants = db.query(Restaurant).order_by(Restaurant.id).all()
    return {"restaurants": [RestaurantOut.model_validate(r) for r in restaurants]}


@router.get("/{restaurant_id}", response_model=RestaurantRead)
def get_restaurant(restaurant_id: int, db: Session = Depends(get_db)):
    restaurant = get_or_404(db, Restaurant, restaurant_id, "Restaurant not found")
    return {"restaurant": RestaurantOut.model_validate(restaurant)}


@router.put("/{restaurant_id}", response_model=RestaurantEnvelope)
def update_restaurant(
    restaurant_id: int,
    payload: RestaurantUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    restaurant = get_or_404(db, Restaurant, restaurant_id, "Restaurant not found")
    ensure_admin(current_user)

    # Update fields if provided in the payload
    if payload.name is not None:
        restaurant.name = payload.name
    if payload.address is not None:
        restaurant.address = payload.address

    commit_or_404(db, "Restaurant not found")
    db.refresh(restaurant)

    write_log(db, user_id=current_user.id, action="RESTAURANT_UPDATE", resource="restaurants",
              ip=client_ip(request), meta={"restaurant_id": restaurant.id})

    return {"message": "Restaurant updated", "restaurant": RestaurantOut.model_validate(restaurant)}


@router.delete("/{restaurant_id}")
def delete_restaurant(
    restaurant_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    restaurant = get_or_404(db, Restaurant, restaurant_id, "Restaurant not found")
    ensure_admin(current_user)

    # Menus, reservations and orders of the restaurant go with it
    delete_or_404(db, restaurant, "Restaurant not found")

    write_log(db, user_id=current_user.id, action="RESTAURANT_DELETE", resource="restaurants",
              ip=client_ip(request), meta={"restaurant_id": restaurant_id})

    return {"message": "Restaurant deleted"}
