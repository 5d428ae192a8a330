# museum/repos/product_repo.py
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from museum.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, status: str = "active", featured: bool = False) -> List[ProductModel]:
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.images))
            .where(ProductModel.status == status)
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        )
        if featured:
            stmt = stmt.where(ProductModel.is_featured.is_(True))
        return list(self.db.execute(stmt).scalars().all())

    def get_by_slug(self, slug: str) -> ProductModel | None:
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.images))
            .where(ProductModel.slug == slug)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_active(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(
                ProductModel.id == product_id,
                ProductModel.status == "active",
            )
        ).scalar_one_or_none()

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def slug_exists(self, slug: str) -> bool:
        return self.db.execute(
            select(ProductModel.id).where(ProductModel.slug == slug)
        ).first() is not None

    def lock_products(self, product_ids: List[int]) -> List[ProductModel]:
        # SELECT ... FOR UPDATE (sqlite ignoruje, postgres blokuje wiersze)
        stmt = (
            select(ProductModel)
            .where(ProductModel.id.in_(product_ids))
            .order_by(ProductModel.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars().all())

    def decrement_inventory(self, product_id: int, quantity: int) -> int:
        """
        Warunkowe zmniejszenie stanu.
        Zwraca rowcount, 0 oznacza ze stan jest za maly.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.inventory_count >= quantity,
            )
            .values(inventory_count=ProductModel.inventory_count - quantity)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product
