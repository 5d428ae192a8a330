from decimal import Decimal
from typing import Dict, Any
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from museum.data.models.cart import CartModel
from museum.data.models.cart_item import CartItemModel
from museum.data.models.product import ProductModel
from museum.domain.errors import (
    ConcurrencyConflict,
    InsufficientInventory,
    MissingCartToken,
    NotFoundError,
)
from museum.repos.cart_repo import CartRepo
from museum.repos.product_repo import ProductRepo
from museum.utils.retry import conflict_retry
from museum.utils.settings import CART_CURRENCY
from museum.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_token(token: str | None) -> str | None:
    if token is None:
        return None
    token = token.strip()
    return token or None


class CartService:
    """
    Koszyk anonimowy identyfikowany tokenem.
    Kazda komenda (ensure, add, update, remove) przelicza subtotal i items_count
    od zera z aktualnych pozycji, query (get) tylko odczyt.
    """

    def __init__(self, db: Session, currency: str = CART_CURRENCY):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.currency = currency

    #query - odczyt
    def get_cart(self, token: str | None) -> Dict[str, Any]:
        cart = self.resolve_cart(token)
        return self._to_dict(cart)

    def resolve_cart(self, token: str | None, create_if_missing: bool = False) -> CartModel:
        token = normalize_token(token)

        if token:
            cart = self.repo.get_cart_by_token(token)
            if cart:
                return cart
            if not create_if_missing:
                raise NotFoundError("Cart not found.")

        if not create_if_missing:
            raise MissingCartToken("Missing cart token.")

        #nowy koszyk z nowym tokenem, rowniez gdy klient podal nieznany token
        cart = self.repo.create_cart(
            CartModel(
                token=str(uuid4()),
                currency=self.currency,
                items_count=0,
                subtotal=Decimal("0.00"),
            )
        )
        logger.info(f"Created cart {cart.id}")
        return cart

    #commands
    def ensure_cart(self, token: str | None) -> Dict[str, Any]:
        cart = self.resolve_cart(token, create_if_missing=True)
        self.repo.commit()
        return self._to_dict(cart)

    def add_item(self, token: str | None, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity < 1:
            raise ValueError("Quantity must be at least 1.")

        return self._add_with_retry(token, product_id, quantity)

    @conflict_retry()
    def _add_with_retry(self, token: str | None, product_id: int, quantity: int) -> Dict[str, Any]:
        cart = self.resolve_cart(token, create_if_missing=True)

        try:
            return self._add_to_cart(cart, product_id, quantity)
        except IntegrityError as e:
            # rownolegle pierwsze dodanie tego produktu (u_cart_product), ponowna proba robi merge
            logger.warning(f"Cart {cart.id} line for product {product_id} created concurrently, retrying")
            self.repo.rollback()
            raise ConcurrencyConflict("The cart was updated at the same time. Please try again.") from e
        except Exception as e:
            logger.error(f"Failed to add product {product_id} to cart {cart.id}: {e}")
            self.repo.rollback()
            raise

    def _add_to_cart(self, cart: CartModel, product_id: int, quantity: int) -> Dict[str, Any]:
        product = self.products.get_active(product_id)
        if not product:
            raise NotFoundError("Product not found.")

        existing_item = self.repo.get_cart_item(cart.id, product.id)
        new_quantity = existing_item.quantity + quantity if existing_item else quantity

        self.assert_inventory(product, new_quantity)

        # snapshot ceny przy kazdej zmianie
        unit_price = product.price

        if existing_item:
            logger.info(
                f"Product {product.id} already in cart {cart.id}, "
                f"merging quantity {existing_item.quantity} -> {new_quantity}"
            )
            existing_item.quantity = new_quantity
            existing_item.unit_price = unit_price
            existing_item.line_total = unit_price * new_quantity
            self.repo.add_cart_item(existing_item)
        else:
            logger.info(f"Adding product {product.id} x{quantity} to cart {cart.id}")
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=unit_price,
                    line_total=unit_price * quantity,
                )
            )

        self.refresh_totals(cart)
        self.repo.commit()

        return self._to_dict(cart)

    def update_item(self, token: str | None, item_id: int, quantity: int) -> Dict[str, Any]:
        if quantity < 1:
            raise ValueError("Quantity must be at least 1.")

        cart = self.resolve_cart(token)
        item = self._owned_item(cart, item_id)

        product = self.products.get_product(item.product_id)
        if not product:
            raise NotFoundError("Product not found.")

        self.assert_inventory(product, quantity)

        item.quantity = quantity
        item.unit_price = product.price
        item.line_total = product.price * quantity
        self.repo.add_cart_item(item)

        self.refresh_totals(cart)
        self.repo.commit()

        logger.info(f"Cart {cart.id} item {item_id} quantity set to {quantity}")

        return self._to_dict(cart)

    def remove_item(self, token: str | None, item_id: int) -> Dict[str, Any]:
        cart = self.resolve_cart(token)
        item = self._owned_item(cart, item_id)

        self.repo.delete_item(item)

        self.refresh_totals(cart)
        self.repo.commit()

        logger.info(f"Removed item {item_id} from cart {cart.id}")

        return self._to_dict(cart)

    def refresh_totals(self, cart: CartModel) -> None:
        """Przelicza sumy od zera ze wszystkich pozycji koszyka."""
        items = self.repo.get_cart_items(cart.id)
        cart.subtotal = sum((i.line_total for i in items), Decimal("0.00"))
        cart.items_count = sum(i.quantity for i in items)
        self.repo.db.flush()

    @staticmethod
    def assert_inventory(product: ProductModel, requested_quantity: int) -> None:
        if product.inventory_count < requested_quantity:
            raise InsufficientInventory(
                f"Only {product.inventory_count} units available.",
                product_id=product.id,
                available=product.inventory_count,
            )

    def _owned_item(self, cart: CartModel, item_id: int) -> CartItemModel:
        item = self.repo.get_item(item_id)

        if not item:
            raise NotFoundError("Cart item not found.")

        if item.cart_id != cart.id:
            raise PermissionError("Cart item does not belong to this cart.")

        return item

    def _to_dict(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)
        return {
            "id": cart.id,
            "token": cart.token,
            "currency": cart.currency,
            "items_count": cart.items_count,
            "subtotal": cart.subtotal,
            "items": [
                {
                    "id": i.id,
                    "product_id": i.product_id,
                    "product_name": i.product.name if i.product else None,
                    "sku": i.product.sku if i.product else None,
                    "product_slug": i.product.slug if i.product else None,
                    "quantity": i.quantity,
                    "unit_price": i.unit_price,
                    "line_total": i.line_total,
                }
                for i in items
            ],
        }
