"""
Init file for the SQLAlchemy models.
"""

from .order_details import OrderDetail
from .orders import Order

__all__ = [
    "Order",
    "OrderDetail",
]
