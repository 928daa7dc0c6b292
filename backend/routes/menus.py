# backend/routes/menus.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.menu import Menu
from models.restaurant import Restaurant
from schemas.menu import MenuCreate, MenuEnvelope, MenuList, MenuOut, MenuRead, MenuUpdate
from schemas.user import TokenData
from utils.access import commit_or_404, delete_or_404, ensure_admin, get_or_404
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user, require_admin

# Menu items are created and listed through their restaurant
# and read or modified directly by id
restaurant_menus_router = APIRouter(prefix="/restaurants/{restaurant_id}/menus", tags=["Menus"])
router = APIRouter(prefix="/menus", tags=["Menus"])


@restaurant_menus_router.post("", response_model=MenuEnvelope, status_code=status.HTTP_201_CREATED)
def create_menu(
    restaurant_id: int,
    payload: MenuCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    get_or_404(db, Restaurant, restaurant_id, "Restaurant not found")

    menu = Menu(dish=payload.dish, price=payload.price, restaurant_id=restaurant_id)
    db.add(menu)
    db.commit()
    db.refresh(menu)

    write_log(db, user_id=current_user.id, action="MENU_CREATE", resource="menus",
              ip=client_ip(request), meta={"menu_id": menu.id, "restaurant_id": restaurant_id})

    return {"message": "Menu created", "menu": MenuOut.model_validate(menu)}


@restaurant_menus_router.get("", response_model=MenuList)
def list_restaurant_menus(restaurant_id: int, db: Session = Depends(get_db)):
    # An unknown restaurant simply has no menus
    menus = db.query(Menu).filter(Menu.restaurant_id == restaurant_id).order_by(Menu.id).all()
    return {"menus": [MenuOut.model_validate(m) for m in menus]}


@router.get("/{menu_id}", response_model=MenuRead)
def get_menu(menu_id: int, db: Session = Depends(get_db)):
    menu = get_or_404(db, Menu, menu_id, "Menu not found")
    return {"menu": MenuOut.model_validate(menu)}


@router.put("/{menu_id}", response_model=MenuEnvelope)
def update_menu(
    menu_id: int,
    payload: MenuUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    menu = get_or_404(db, Menu, menu_id, "Menu not found")
    ensure_admin(current_user)

    if payload.dish is not None:
        menu.dish = payload.dish
    if payload.price is not None:
        menu.price = payload.price

    commit_or_404(db, "Menu not found")
    db.refresh(menu)

    write_log(db, user_id=current_user.id, action="MENU_UPDATE", resource="menus",
              ip=client_ip(request), meta={"menu_id": menu.id})

    return {"message": "Menu updated", "menu": MenuOut.model_validate(menu)}


@router.delete("/{menu_id}")
def delete_menu(
    menu_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    menu = get_or_404(db, Menu, menu_id, "Menu not found")
    ensure_admin(current_user)

    delete_or_404(db, menu, "Menu not found")

    write_log(db, user_id=current_user.id, action="MENU_DELETE", resource="menus",
              ip=client_ip(request), meta={"menu_id": menu_id})

    return {"message": "Menu deleted"}
