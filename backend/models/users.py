# backend/models/users.py
from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

ROLES = ("customer", "admin")


# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"
    # Never hand a deleted row's id to a new row
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, CheckConstraint("role IN ('customer', 'admin')", name="ck_users_role"),
                  nullable=False, default="customer")

    # Removing an account removes everything it owns
    reservations = relationship("Reservation", back_populates="user", cascade="all, delete")
    orders = relationship("Order", back_populates="user", cascade="all, delete")
