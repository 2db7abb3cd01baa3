"""
OrderDetail model for the line items of an order.
"""

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from src.db.mysql_bootstrap import SCHEMA, Base


class OrderDetail(Base):
    """
    OrderDetail SQLAlchemy model.
    """

    __tablename__ = "order_details"
    __table_args__ = {"schema": SCHEMA}

    order_detail_id = Column(Integer, primary_key=True, autoincrement=True)
    item_description = Column(Text)
    order_id = Column(
        Integer,
        ForeignKey(f"{SCHEMA}.order.order_id", ondelete="CASCADE", name="FK_ORDERID"),
        nullable=True,
    )

    order = relationship("Order", back_populates="details")

    def __repr__(self):
        return f"<OrderDetail(order_detail_id={self.order_detail_id}, order_id={self.order_id}, item_description={self.item_description!r})>"
