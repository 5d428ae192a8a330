# museum/repos/cart_repo.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from museum.data.models.cart import CartModel
from museum.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_token(self, token: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.token == token)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def lock_cart(self, cart_id: int) -> CartModel | None:
        # SELECT ... FOR UPDATE, drugi checkout tego samego koszyka czeka tutaj
        return self.db.execute(
            select(CartModel)
            .where(CartModel.id == cart_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_cart_items(self, cart_id: int, fresh: bool = False) -> List[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .options(selectinload(CartItemModel.product))
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.id)
        )
        if fresh:
            stmt = stmt.execution_options(populate_existing=True)
        return list(self.db.execute(stmt).scalars().all())

    def get_item(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
