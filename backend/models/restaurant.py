# backend/models/restaurant.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database import Base


# A restaurant; menus, reservations and orders hang off it and go with it
class Restaurant(Base):
    __tablename__ = "restaurants"
    # Never hand a deleted row's id to a new row
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    address = Column(String, nullable=False)

    menus = relationship("Menu", back_populates="restaurant", cascade="all, delete")
    reservations = relationship("Reservation", back_populates="restaurant", cascade="all, delete")
    orders = relationship("Order", back_populates="restaurant", cascade="all, delete")
