# app/domain/errors.py
"""
Typowane bledy domeny koszyka.
Kazdy blad niesie status HTTP i kod, router zamienia je na HTTPException.
"""


class CartError(Exception):
    status_code = 400
    code = "CartError"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    @classmethod
    def default_message(cls) -> str:
        return cls.code

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


# 404
class NotFoundError(CartError):
    status_code = 404
    code = "NotFound"


class CartNotFound(NotFoundError):
    code = "CartNotFound"

    @classmethod
    def default_message(cls) -> str:
        return "Active cart not found"


class ItemNotFound(NotFoundError):
    code = "ItemNotFound"

    @classmethod
    def default_message(cls) -> str:
        return "Item not found"


class PricingUnavailable(NotFoundError):
    code = "PricingUnavailable"

    @classmethod
    def default_message(cls) -> str:
        return "No active pricing found for the requested currency"


# 409
class ConflictError(CartError):
    status_code = 409
    code = "Conflict"


class DuplicateItem(ConflictError):
    code = "DuplicateItem"

    @classmethod
    def default_message(cls) -> str:
        return "Item already exists in cart"


class ConcurrentCartUpdate(ConflictError):
    code = "ConcurrentCartUpdate"

    @classmethod
    def default_message(cls) -> str:
        return "Cart was modified by another request"


class EmptyCart(ConflictError):
    code = "EmptyCart"

    @classmethod
    def default_message(cls) -> str:
        return "Cannot checkout empty cart"


# 400
class BadRequestError(CartError):
    status_code = 400
    code = "BadRequest"


class CurrencyMismatch(BadRequestError):
    code = "CurrencyMismatch"


class InvalidQuantity(BadRequestError):
    code = "InvalidQuantity"

    @classmethod
    def default_message(cls) -> str:
        return "Quantity must be a positive integer"


class InvalidCurrency(BadRequestError):
    code = "InvalidCurrency"


# 5xx
class InternalError(CartError):
    status_code = 500
    code = "Internal"


class PersistenceError(InternalError):
    code = "PersistenceError"

    @classmethod
    def default_message(cls) -> str:
        return "Cart could not be saved"


class CatalogUnavailable(InternalError):
    status_code = 503
    code = "CatalogUnavailable"

    @classmethod
    def default_message(cls) -> str:
        return "Catalog service is unavailable"
