import datetime as dt
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ReservationCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: dt.date = Field(alias="fecha")
    time: dt.time = Field(alias="hora")
    restaurant_id: int = Field(alias="restaurante_id")


class ReservationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    date: dt.date = Field(alias="fecha")
    time: dt.time = Field(alias="hora")
    user_id: int = Field(alias="usuario_id")
    restaurant_id: int = Field(alias="restaurante_id")


# Read responses carry only the resource
class ReservationRead(BaseModel):
    reservation: ReservationOut


class ReservationEnvelope(ReservationRead):
    message: str


class ReservationList(BaseModel):
    reservations: List[ReservationOut]
