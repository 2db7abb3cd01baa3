"""Order creation and removal on the storefront tables."""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import bindparam, delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from src.db.mysql_client import transaction
from src.models import Order, OrderDetail

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self):
        self.orders = Order.__table__
        self.details = OrderDetail.__table__

    def create_order(self, conn, items: list[str]) -> dict[str, Any]:
        """
        Create an order with one detail row per item.

        Args:
            conn: Open SQLAlchemy connection
            items: Item descriptions, at least one

        Returns:
            Dict with operation result and the new order ID. Either the order
            and all its details are committed, or nothing is.
        """
        if not items:
            return {"success": False, "message": "Order must contain at least one item", "order_id": None, "items_inserted": 0}

        order_date = datetime.now().replace(microsecond=0)

        try:
            with transaction(conn) as trans:
                result = conn.execute(insert(self.orders), {"order_date": order_date})
                order_id = result.inserted_primary_key[0] if result.rowcount == 1 else None
                if not order_id:
                    trans.rollback()
                    logger.error("Order insert did not return a generated key")
                    return {"success": False, "message": "Failed to create order", "order_id": None, "items_inserted": 0}

                inserted = 0
                for item in items:
                    result = conn.execute(insert(self.details), {"order_id": order_id, "item_description": item})
                    inserted += result.rowcount

                if inserted != len(items):
                    trans.rollback()
                    logger.warning(f"Number of records inserted ({inserted}) does not equal items received ({len(items)})")
                    return {
                        "success": False,
                        "message": "Number of records inserted does not equal items received",
                        "order_id": None,
                        "items_inserted": 0,
                    }

        except SQLAlchemyError as e:
            logger.error(f"Error creating order: {e}")
            raise

        logger.info(f"Created order {order_id} dated {order_date} with {inserted} items")
        return {"success": True, "message": "Order created successfully", "order_id": order_id, "items_inserted": inserted}

    def remove_orders(self, conn, items: list[str]) -> dict[str, Any]:
        """
        Delete the orders owning the given item descriptions, in one transaction.

        A description matched by more than one order is ambiguous: the whole
        batch is rolled back. Descriptions with no match are reported in
        ``not_found`` without failing the batch.

        Args:
            conn: Open SQLAlchemy connection
            items: Item descriptions to look up

        Returns:
            Dict with operation result, removed order IDs keyed by description
            and the descriptions not found
        """
        find_orders = (
            select(self.details.c.order_id)
            .where(self.details.c.item_description == bindparam("item_description"))
            .where(self.details.c.order_id.is_not(None))
            .distinct()
        )
        delete_order = delete(self.orders).where(self.orders.c.order_id == bindparam("target_order_id"))

        removed = {}
        not_found = []

        try:
            with transaction(conn) as trans:
                for item in items:
                    order_ids = conn.execute(find_orders, {"item_description": item}).scalars().all()

                    if len(order_ids) > 1:
                        trans.rollback()
                        logger.warning(f"Item '{item}' belongs to {len(order_ids)} orders, nothing removed")
                        return {
                            "success": False,
                            "message": f"Item '{item}' matches more than one order",
                            "removed": {},
                            "not_found": [],
                        }

                    changes = 0
                    if order_ids:
                        changes = conn.execute(delete_order, {"target_order_id": order_ids[0]}).rowcount

                    if changes == 1:
                        removed[item] = order_ids[0]
                        logger.info(f"Deleted order of order_id: {order_ids[0]}")
                    else:
                        not_found.append(item)
                        logger.info(f"No changes found for item: {item}")

        except SQLAlchemyError as e:
            logger.error(f"Error removing orders: {e}")
            raise

        return {
            "success": True,
            "message": f"Removed {len(removed)} order(s), {len(not_found)} item(s) not found",
            "removed": removed,
            "not_found": not_found,
        }

    def delete_order(self, conn, order_id: int) -> dict[str, Any]:
        """
        Delete an order and its details by order ID.

        Details are deleted explicitly before the order, so this works even
        without the cascading foreign key. Commits only if exactly one order
        row was removed.
        """
        delete_details = delete(self.details).where(self.details.c.order_id == bindparam("target_order_id"))
        delete_parent = delete(self.orders).where(self.orders.c.order_id == bindparam("target_order_id"))

        try:
            with transaction(conn) as trans:
                details_removed = conn.execute(delete_details, {"target_order_id": order_id}).rowcount
                logger.info(f"Removed {details_removed} records")

                changes = conn.execute(delete_parent, {"target_order_id": order_id}).rowcount
                if changes != 1:
                    trans.rollback()
                    logger.warning(f"Something went wrong with removing OrderID: {order_id}")
                    return {
                        "success": False,
                        "message": f"Order {order_id} does not match a unique existing order",
                        "order_id": order_id,
                        "details_removed": 0,
                    }

        except SQLAlchemyError as e:
            logger.error(f"Error deleting order {order_id}: {e}")
            raise

        logger.info(f"Removed OrderID: {order_id}")
        return {"success": True, "message": "Order deleted", "order_id": order_id, "details_removed": details_removed}

    def get_order_items(self, conn, order_id: int) -> list[str]:
        """Get the item descriptions of an order, in insertion order."""
        query = (
            select(self.details.c.item_description)
            .where(self.details.c.order_id == bindparam("target_order_id"))
            .order_by(self.details.c.order_detail_id)
        )
        with transaction(conn):
            return list(conn.execute(query, {"target_order_id": order_id}).scalars().all())


# Singleton instance
order_service = OrderService()
