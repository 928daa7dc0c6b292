# backend/models/order.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


class Order(Base):
    __tablename__ = "orders"
    # Never hand a deleted row's id to a new row
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    menu_id = Column(Integer, ForeignKey("menus.id"), index=True, nullable=False)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), index=True, nullable=False)
    reservation_id = Column(Integer, ForeignKey("reservations.id"), nullable=True)
    quantity = Column(Integer, CheckConstraint("quantity > 0", name="ck_orders_quantity"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="orders")
    menu = relationship("Menu", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")
    reservation = relationship("Reservation", back_populates="orders")
