from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class CartItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    quantity: int
    unit_price_at_add: Decimal
    line_total: Decimal


class CartRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    items: list[CartItemRead] = []
    subtotal: Decimal = Decimal("0.00")
