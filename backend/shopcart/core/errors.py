from __future__ import annotations

import enum

from fastapi import status


class ErrorKind(str, enum.Enum):
    invalid_argument = "invalid_argument"
    invalid_quantity = "invalid_quantity"
    product_not_found = "product_not_found"
    product_not_available = "product_not_available"
    out_of_stock = "out_of_stock"
    cart_full = "cart_full"
    arithmetic_overflow = "arithmetic_overflow"
    cart_not_found = "cart_not_found"
    persistence_failure = "persistence_failure"
    service_failure = "service_failure"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.invalid_argument: status.HTTP_400_BAD_REQUEST,
    ErrorKind.invalid_quantity: status.HTTP_400_BAD_REQUEST,
    ErrorKind.arithmetic_overflow: status.HTTP_400_BAD_REQUEST,
    ErrorKind.product_not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.cart_not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.product_not_available: status.HTTP_409_CONFLICT,
    ErrorKind.out_of_stock: status.HTTP_409_CONFLICT,
    ErrorKind.cart_full: status.HTTP_409_CONFLICT,
    ErrorKind.persistence_failure: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.service_failure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ShopError(Exception):
    """Domain failure tagged with an ErrorKind; callers branch on ``kind``."""

    def __init__(self, kind: ErrorKind, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"ShopError(kind={self.kind.value!r}, message={self.message!r})"


def invalid_argument(message: str) -> ShopError:
    return ShopError(ErrorKind.invalid_argument, message)


def require_id(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise invalid_argument(f"{label} cannot be null or empty")
    return value
