# museum/api/__init__.py
from fastapi import APIRouter

from museum.api.routers import about, admin, carts, health, orders, products, tours

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(products.router)
api_router.include_router(carts.router)
api_router.include_router(orders.router)
api_router.include_router(tours.router)
api_router.include_router(admin.router)
api_router.include_router(about.router)
