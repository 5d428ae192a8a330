# museum/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from museum.data.database import get_db
from museum.domain.errors import NotFoundError
from museum.domain.schemas import ProductOut
from museum.services.catalog_service import CatalogService

router = APIRouter(prefix="/shop/products", tags=["catalog"])


@router.get("", response_model=List[ProductOut])
def list_products(
    status: str | None = Query(default=None),
    featured: bool = Query(default=False),
    db: Session = Depends(get_db),
):
    return CatalogService(db).list_products(status=status, featured=featured)


@router.get("/{slug}", response_model=ProductOut)
def get_product(slug: str, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).get_product(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
