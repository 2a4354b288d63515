#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from gamestore.data.models.user import UserModel
from gamestore.data.models.product import ProductModel
from gamestore.data.models.order import OrderModel
from gamestore.data.models.order_item import OrderItemModel
from gamestore.data.models.session import SessionModel

__all__ = ["UserModel", "ProductModel", "OrderModel", "OrderItemModel", "SessionModel"]
