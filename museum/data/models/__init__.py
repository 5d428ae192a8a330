#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from museum.data.models.product import ProductModel, ProductImageModel
from museum.data.models.cart import CartModel
from museum.data.models.cart_item import CartItemModel
from museum.data.models.order import OrderModel
from museum.data.models.order_item import OrderItemModel
from museum.data.models.tour_registration import TourRegistrationModel
from museum.data.models.tour_slot import TourSlotModel
from museum.data.models.about import AboutContentModel

__all__ = [
    "ProductModel",
    "ProductImageModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "TourRegistrationModel",
    "TourSlotModel",
    "AboutContentModel",
]
