# museum/domain/errors.py
from typing import Dict, List


class NotFoundError(LookupError):
    """Koszyk, pozycja lub produkt nie istnieje."""


class MissingCartToken(ValueError):
    pass


class FieldValidationError(ValueError):
    """Blad walidacji przypisany do konkretnych pol formularza."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        first = next(iter(errors.values()))[0]
        super().__init__(first)


class EmptyCart(ValueError):
    pass


class InsufficientInventory(ValueError):
    def __init__(self, message: str, product_id: int | None = None, available: int | None = None):
        super().__init__(message)
        self.product_id = product_id
        self.available = available


class ConcurrencyConflict(RuntimeError):
    pass


class OrderNumberCollision(ConcurrencyConflict):
    pass
