# backend/models/reservation.py
from sqlalchemy import Column, Integer, Date, Time, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


# A table booking made by a user at a restaurant
class Reservation(Base):
    __tablename__ = "reservations"
    # Never hand a deleted row's id to a new row
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), index=True, nullable=False)

    user = relationship("User", back_populates="reservations")
    restaurant = relationship("Restaurant", back_populates="reservations")
    # Orders outlive a cancelled reservation; their reservation_id is cleared
    orders = relationship("Order", back_populates="reservation")
