# backend/routes/reservations.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.reservation import Reservation
from models.restaurant import Restaurant
from models.users import User
from schemas.reservation import ReservationCreate, ReservationEnvelope, ReservationList, ReservationOut, ReservationRead
from schemas.user import TokenData
from utils.access import commit_or_404, delete_or_404, ensure_owner_or_admin, get_or_404
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/reservations", tags=["Reservations"])

# No overlap detection: two users may book the same slot


# Book a table for the caller
@router.post("", response_model=ReservationEnvelope, status_code=status.HTTP_201_CREATED)
def create_reservation(
    payload: ReservationCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    # The token may outlive the account it was issued for
    get_or_404(db, User, current_user.id, "User not found")
    get_or_404(db, Restaurant, payload.restaurant_id, "Restaurant not found")

    reservation = Reservation(
        date=payload.date,
        time=payload.time,
        user_id=current_user.id,
        restaurant_id=payload.restaurant_id,
    )
    db.add(reservation)
    db.commit()
    db.refresh(reservation)

    write_log(db, user_id=current_user.id, action="RESERVATION_CREATE", resource="reservations",
              ip=client_ip(request), meta={"reservation_id": reservation.id})

    return {"message": "Reservation created", "reservation": ReservationOut.model_validate(reservation)}


# Callers see their own reservations, admins see all
@router.get("", response_model=ReservationList)
def list_reservations(db: Session = Depends(get_db), current_user: TokenData = Depends(get_current_user)):
    query = db.query(Reservation)
    if not current_user.is_admin:
        query = query.filter(Reservation.user_id == current_user.id)
    reservations = query.order_by(Reservation.date, Reservation.time, Reservation.id).all()
    return {"reservations": [ReservationOut.model_validate(r) for r in reservations]}


@router.get("/{reservation_id}", response_model=ReservationRead)
def get_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    reservation = get_or_404(db, Reservation, reservation_id, "Reservation not found")
    ensure_owner_or_admin(reservation.user_id, current_user, "You cannot view this reservation")
    return {"reservation": ReservationOut.model_validate(reservation)}


# Cancel a reservation (owner or admin)
@router.delete("/{reservation_id}", response_model=ReservationEnvelope)
def delete_reservation(
    reservation_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    reservation = get_or_404(db, Reservation, reservation_id, "Reservation not found")
    ensure_owner_or_admin(reservation.user_id, current_user, "You cannot cancel this reservation")

    out = ReservationOut.model_validate(reservation)
    delete_or_404(db, reservation, "Reservation not found")

    write_log(db, user_id=current_user.id, action="RESERVATION_DELETE", resource="reservations",
              ip=client_ip(request), meta={"reservation_id": reservation_id})

    return {"message": "Reservation cancelled", "reservation": out}
