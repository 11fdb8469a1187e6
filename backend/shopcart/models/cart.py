import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shopcart.core.errors import ErrorKind, ShopError
from shopcart.db.base import Base

# Upper bound of the 32-bit quantity column.
MAX_LINE_QUANTITY = 2_147_483_647


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Cart(Base):
    __tablename__ = "carts"

    MAX_ITEMS: ClassVar[int] = 10

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    items: Mapped[list["CartItem"]] = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CartItem.position",
    )

    __mapper_args__ = {"version_id_col": version}

    def find_item(self, product_id: str) -> "CartItem | None":
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_item(self, item: "CartItem") -> None:
        if len(self.items) >= self.MAX_ITEMS:
            raise ShopError(ErrorKind.cart_full, "Cart has reached maximum item limit")
        item.position = max((existing.position or 0 for existing in self.items), default=-1) + 1
        self.items.append(item)

    def remove_items(self, product_id: str) -> int:
        """Drop every line for ``product_id``; returns how many were removed."""
        matching = [item for item in self.items if item.product_id == product_id]
        for item in matching:
            self.items.remove(item)
        return len(matching)


class CartItem(Base):
    __tablename__ = "cart_items"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    cart_user_id: Mapped[str] = mapped_column(String(64), ForeignKey("carts.user_id"), nullable=False, index=True)
    # Logical reference only; catalog rows may disappear independently of carts.
    product_id: Mapped[str] = mapped_column(String(64), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    unit_price_at_add: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    cart: Mapped[Cart] = relationship("Cart", back_populates="items")
