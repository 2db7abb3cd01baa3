"""
Orders SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import relationship

from src.db.mysql_bootstrap import SCHEMA, Base


class Order(Base):
    """
    Order SQLAlchemy model.
    """

    __tablename__ = "order"
    __table_args__ = {"schema": SCHEMA}

    order_id = Column(Integer, primary_key=True, autoincrement=True)
    order_date = Column(DateTime, nullable=False)

    details = relationship("OrderDetail", back_populates="order", passive_deletes=True)

    def __repr__(self):
        return f"<Order(order_id={self.order_id}, order_date={self.order_date})>"
