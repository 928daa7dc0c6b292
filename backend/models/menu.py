# backend/models/menu.py
from sqlalchemy import Column, Integer, String, Float, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base


# A single dish offered by a restaurant
class Menu(Base):
    __tablename__ = "menus"
    # Never hand a deleted row's id to a new row
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    dish = Column(String, nullable=False)
    price = Column(Float, CheckConstraint("price >= 0", name="ck_menus_price"), nullable=False)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), index=True, nullable=False)

    restaurant = relationship("Restaurant", back_populates="menus")
    orders = relationship("Order", back_populates="menu", cascade="all, delete")
