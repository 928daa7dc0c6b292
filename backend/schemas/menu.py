from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class MenuCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dish: str = Field(alias="platillo", min_length=1)
    price: float = Field(alias="precio", ge=0)


class MenuUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dish: Optional[str] = Field(default=None, alias="platillo", min_length=1)
    price: Optional[float] = Field(default=None, alias="precio", ge=0)


class MenuOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    dish: str = Field(alias="platillo")
    price: float = Field(alias="precio")
    restaurant_id: int = Field(alias="restaurante_id")


# Read responses carry only the resource
class MenuRead(BaseModel):
    menu: MenuOut


class MenuEnvelope(MenuRead):
    message: str


class MenuList(BaseModel):
    menus: List[MenuOut]
