from .directory import Supplier, Agent, SalesRep, Shop
from .catalog import Product, PriceHistory
from .inventory import InventoryRecord
from .orders import Payment, Order, OrderLine, PAYMENT_METHODS, ORDER_STATUSES, ORDER_STATUS_PROCESSING

__all__ = [
    'Supplier', 'Agent', 'SalesRep', 'Shop',
    'Product', 'PriceHistory',
    'InventoryRecord',
    'Payment', 'Order', 'OrderLine',
    'PAYMENT_METHODS', 'ORDER_STATUSES', 'ORDER_STATUS_PROCESSING',
]
