# museum/services/catalog_service.py
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from museum.data.models.product import ProductModel, ProductImageModel
from museum.domain.errors import NotFoundError
from museum.repos.product_repo import ProductRepo
from museum.utils.text import random_string, slugify
from museum.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self, status: str | None = None, featured: bool = False) -> List[ProductModel]:
        return self.repo.list_products(status=status or "active", featured=featured)

    def get_product(self, slug: str) -> ProductModel:
        product = self.repo.get_by_slug(slug)
        if not product:
            raise NotFoundError("Product not found.")
        return product

    def create_product(self, data: Dict[str, Any], image_urls: Iterable[str] = ()) -> ProductModel:
        """
        Dodaje produkt do katalogu (seed/admin).
        Pusty slug generowany z nazwy i 6 losowych znakow.
        """
        slug = data.get("slug") or self._unique_slug(data["name"])

        product = ProductModel(
            sku=data["sku"],
            name=data["name"],
            slug=slug,
            summary=data.get("summary"),
            description=data.get("description"),
            price=Decimal(str(data["price"])),
            compare_at_price=(
                Decimal(str(data["compare_at_price"]))
                if data.get("compare_at_price") is not None
                else None
            ),
            inventory_count=int(data.get("inventory_count", 0)),
            is_featured=bool(data.get("is_featured", False)),
            status=data.get("status", "active"),
            extra_metadata=data.get("metadata"),
        )
        for position, url in enumerate(image_urls):
            product.images.append(
                ProductImageModel(
                    file_url=url,
                    alt_text=f"{data['name']} image {position + 1}",
                    is_primary=position == 0,
                    sort_order=position,
                )
            )

        self.repo.add_product(product)
        logger.info(f"Catalog product {product.sku} stored as {product.slug}")
        return product

    def _unique_slug(self, name: str) -> str:
        while True:
            slug = slugify(f"{name}-{random_string(6)}")
            if not self.repo.slug_exists(slug):
                return slug
