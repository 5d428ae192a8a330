# museum/services/order_service.py
import secrets
import string
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from museum.data.models.order import OrderModel
from museum.data.models.order_item import OrderItemModel
from museum.domain.errors import (
    ConcurrencyConflict,
    EmptyCart,
    InsufficientInventory,
    NotFoundError,
    OrderNumberCollision,
)
from museum.domain.schemas import CheckoutIn
from museum.repos.cart_repo import CartRepo
from museum.repos.order_repo import OrderRepo
from museum.repos.product_repo import ProductRepo
from museum.services.cart_service import CartService
from museum.utils.retry import order_number_retry
from museum.utils.settings import ORDER_NUMBER_PREFIX
from museum.utils.logging import get_logger

logger = get_logger(__name__)

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def _random_code(length: int = 5) -> str:
    return "".join(secrets.choice(_CODE_ALPHABET) for _ in range(length))


class OrderService:
    """
    Checkout: zamiana koszyka w zamowienie.
    Cala operacja w jednej transakcji, blad = rollback i koszyk bez zmian.
    """

    def __init__(self, db: Session, prefix: str = ORDER_NUMBER_PREFIX):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.prefix = prefix

    def checkout(self, payload: CheckoutIn, token: str | None = None) -> OrderModel:
        """
        Use Case: Zlozenie zamowienia z koszyka.

        1. Blokuje koszyk, pozycje czytane ponownie pod lockiem (koszyk nie moze byc pusty)
        2. Blokuje produkty i sprawdza stany dla kazdej pozycji
        3. Tworzy zamowienie ze snapshotem pozycji
        4. Zmniejsza stany magazynowe
        5. Czysci koszyk
        """
        cart = CartService(self.db).resolve_cart(token or payload.cart_token)

        try:
            order = self._place_order(cart, payload)
            self.db.commit()
        except EmptyCart:
            self.db.rollback()
            raise
        except Exception as e:
            logger.error(f"Checkout of cart {cart.id} rolled back: {e}")
            self.db.rollback()
            raise

        logger.info(
            f"Order {order.order_number} placed from cart {cart.id}: "
            f"{len(order.items)} lines, total {order.grand_total}"
        )

        return order

    def _place_order(self, cart, payload: CheckoutIn) -> OrderModel:
        cart = self.carts.lock_cart(cart.id)
        if not cart:
            raise NotFoundError("Cart not found.")

        # rownolegly checkout mogl juz oproznic koszyk
        items = self.carts.get_cart_items(cart.id, fresh=True)
        if not items:
            raise EmptyCart("Your cart is empty.")

        locked = {p.id: p for p in self.products.lock_products(sorted({i.product_id for i in items}))}

        for item in items:
            product = locked.get(item.product_id)
            available = product.inventory_count if product else 0
            if available < item.quantity:
                name = product.name if product else f"Product {item.product_id}"
                raise InsufficientInventory(
                    f"{name} has only {available} units left.",
                    product_id=item.product_id,
                    available=available,
                )

        subtotal = sum((i.line_total for i in items), Decimal("0.00"))
        shipping = Decimal("0.00")
        tax = Decimal("0.00")

        order = OrderModel(
            order_number=self.generate_order_number(),
            cart_token=cart.token,
            status="pending",
            payment_status="unpaid",
            currency=cart.currency,
            subtotal=subtotal,
            tax_total=tax,
            shipping_total=shipping,
            grand_total=subtotal + shipping + tax,
            customer_name=payload.customer_name,
            email=str(payload.email),
            phone=payload.phone,
            country_code=payload.country_code,
            address_line1=payload.address_line1,
            address_line2=payload.address_line2,
            city=payload.city,
            state=payload.state,
            postal_code=payload.postal_code,
            notes=payload.notes,
        )

        for item in items:
            product = locked[item.product_id]
            order.items.append(
                OrderItemModel(
                    product_id=item.product_id,
                    product_name=product.name,
                    sku=product.sku,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
            )

        self.repo.create_order(order)

        for item in items:
            # warunek inventory_count >= qty w samym UPDATE
            if self.products.decrement_inventory(item.product_id, item.quantity) == 0:
                raise InsufficientInventory(
                    f"{locked[item.product_id].name} is no longer available in the requested quantity.",
                    product_id=item.product_id,
                )

        if self.carts.clear_items(cart.id) != len(items):
            raise ConcurrencyConflict(f"Cart {cart.id} changed during checkout")
        cart.items_count = 0
        cart.subtotal = Decimal("0.00")
        self.db.flush()

        return order

    def generate_order_number(self, today: date | None = None) -> str:
        """PREFIX-YYYYMMDD-XXXXX, losowany ponownie dopoki numer jest zajety."""
        today = today or date.today()

        @order_number_retry()
        def _attempt() -> str:
            number = f"{self.prefix}-{today:%Y%m%d}-{_random_code()}"
            if self.repo.order_number_exists(number):
                logger.warning(f"Order number {number} already taken, retrying")
                raise OrderNumberCollision(f"Order number {number} already exists")
            return number

        return _attempt()
