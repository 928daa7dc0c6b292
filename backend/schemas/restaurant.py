from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


# Input schema for creating a restaurant
class RestaurantCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="nombre", min_length=1)
    address: str = Field(alias="direccion", min_length=1)


# Input schema for partial restaurant updates
class RestaurantUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, alias="nombre", min_length=1)
    address: Optional[str] = Field(default=None, alias="direccion", min_length=1)


# Schema for displaying restaurant details
class RestaurantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str = Field(alias="nombre")
    address: str = Field(alias="direccion")


# Read responses carry only the resource
class RestaurantRead(BaseModel):
    restaurant: RestaurantOut


class RestaurantEnvelope(RestaurantRead):
    message: str


class RestaurantList(BaseModel):
    restaurants: List[RestaurantOut]
