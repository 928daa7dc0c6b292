# backend/routes/orders.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.menu import Menu
from models.order import Order
from models.reservation import Reservation
from models.users import User
from schemas.order import OrderCreate, OrderEnvelope, OrderList, OrderOut, OrderRead, OrderUpdate
from schemas.user import TokenData
from utils.access import commit_or_404, delete_or_404, ensure_owner_or_admin, get_or_404
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger(__name__)


# Resolve an optional reservation reference; it must belong to the order's owner
def _reservation_for(db: Session, reservation_id: Optional[int], owner_id: int, restaurant_id: int) -> Optional[int]:
    if reservation_id is None:
        return None
    reservation = get_or_404(db, Reservation, reservation_id, "Reservation not found")
    if reservation.user_id != owner_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Reservation belongs to another user")
    if reservation.restaurant_id != restaurant_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Reservation is for a different restaurant")
    return reservation.id


# Place an order owned by the caller
@router.post("", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    # The token may outlive the account it was issued for
    get_or_404(db, User, current_user.id, "User not found")
    menu = get_or_404(db, Menu, payload.menu_id, "Menu not found")

    restaurant_id = payload.restaurant_id if payload.restaurant_id is not None else menu.restaurant_id
    if restaurant_id != menu.restaurant_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Menu item is not served by this restaurant")

    order = Order(
        user_id=current_user.id,
        menu_id=menu.id,
        restaurant_id=restaurant_id,
        reservation_id=_reservation_for(db, payload.reservation_id, current_user.id, restaurant_id),
        quantity=payload.quantity,
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Order %s placed by user %s", order.id, current_user.id)

    write_log(db, user_id=current_user.id, action="ORDER_CREATE", resource="orders",
              ip=client_ip(request), meta={"order_id": order.id, "menu_id": menu.id, "quantity": order.quantity})

    return {"message": "Order created", "order": OrderOut.model_validate(order)}


# Callers see their own orders, admins see all
@router.get("", response_model=OrderList)
def list_orders(db: Session = Depends(get_db), current_user: TokenData = Depends(get_current_user)):
    query = db.query(Order)
    if not current_user.is_admin:
        query = query.filter(Order.user_id == current_user.id)
    orders = query.order_by(Order.id.desc()).all()
    return {"orders": [OrderOut.model_validate(o) for o in orders]}


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    order = get_or_404(db, Order, order_id, "Order not found")
    ensure_owner_or_admin(order.user_id, current_user, "You cannot view this order")
    return {"order": OrderOut.model_validate(order)}


@router.put("/{order_id}", response_model=OrderEnvelope)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    order = get_or_404(db, Order, order_id, "Order not found")
    ensure_owner_or_admin(order.user_id, current_user, "You cannot modify this order")

    changes = payload.model_dump(exclude_unset=True)

    if changes.get("menu_id") is not None:
        menu = get_or_404(db, Menu, changes["menu_id"], "Menu not found")
        # Switching dishes never moves an order to another restaurant
        if menu.restaurant_id != order.restaurant_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Menu item is not served by this restaurant")
        order.menu_id = menu.id

    if changes.get("quantity") is not None:
        order.quantity = changes["quantity"]

    # An explicit null detaches the order from its reservation
    if "reservation_id" in changes:
        order.reservation_id = _reservation_for(db, changes["reservation_id"], order.user_id, order.restaurant_id)

    commit_or_404(db, "Order not found")
    db.refresh(order)

    write_log(db, user_id=current_user.id, action="ORDER_UPDATE", resource="orders",
              ip=client_ip(request), meta={"order_id": order.id, "fields": sorted(changes)})

    return {"message": "Order updated", "order": OrderOut.model_validate(order)}


@router.delete("/{order_id}", response_model=OrderEnvelope)
def delete_order(
    order_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    order = get_or_404(db, Order, order_id, "Order not found")
    ensure_owner_or_admin(order.user_id, current_user, "You cannot delete this order")

    out = OrderOut.model_validate(order)
    delete_or_404(db, order, "Order not found")

    write_log(db, user_id=current_user.id, action="ORDER_DELETE", resource="orders",
              ip=client_ip(request), meta={"order_id": order_id})

    return {"message": "Order deleted", "order": out}
