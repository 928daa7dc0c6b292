from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime


# Input schema for placing an order; the restaurant defaults to the menu item's
class OrderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    menu_id: int
    quantity: int = Field(alias="cantidad", gt=0)
    restaurant_id: Optional[int] = Field(default=None, alias="restaurante_id")
    reservation_id: Optional[int] = Field(default=None, alias="reserva_id")


# Schema for partial order updates
class OrderUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    menu_id: Optional[int] = None
    quantity: Optional[int] = Field(default=None, alias="cantidad", gt=0)
    reservation_id: Optional[int] = Field(default=None, alias="reserva_id")


# Output schema representing a stored order
class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    menu_id: int
    quantity: int = Field(alias="cantidad")
    user_id: int = Field(alias="usuario_id")
    restaurant_id: int = Field(alias="restaurante_id")
    reservation_id: Optional[int] = Field(default=None, alias="reserva_id")
    created_at: Optional[datetime] = None


# Read responses carry only the resource
class OrderRead(BaseModel):
    order: OrderOut


class OrderEnvelope(OrderRead):
    message: str


class OrderList(BaseModel):
    orders: List[OrderOut]
