from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from shopcart.models.cart import MAX_LINE_QUANTITY


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: Decimal
    stock_quantity: int
    is_active: bool


class ProductSeed(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=160)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(ge=0, le=MAX_LINE_QUANTITY)
    active: bool = True
