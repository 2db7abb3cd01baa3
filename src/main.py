"""Demo runner for the storefront order operations."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from src.db.mysql_client import MySQLConnection, db
from src.exceptions import StorefrontConnectionError, StorefrontError
from src.services.order_service import OrderService, order_service
from src.services.schema_service import SchemaService, schema_service

logger = logging.getLogger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_SETUP_FAILURE = 1
EXIT_BUSINESS_FAILURE = 2
EXIT_DATABASE_ERROR = 3

DEMO_ITEMS = ["shoes", "shirt", "socks"]
DEMO_ORDER_ID = 6


def demo_create(conn, orders: OrderService) -> dict[str, Any]:
    result = orders.create_order(conn, DEMO_ITEMS)
    logger.info(f"New Order = {result['order_id']}")
    return result


def demo_remove(conn, orders: OrderService) -> dict[str, Any]:
    return orders.remove_orders(conn, DEMO_ITEMS)


def demo_delete(conn, orders: OrderService) -> dict[str, Any]:
    return orders.delete_order(conn, DEMO_ORDER_ID)


DEMOS = {
    "create": demo_create,
    "remove": demo_remove,
    "delete": demo_delete,
}


def main(
    demo: str = "delete",
    connection: MySQLConnection | None = None,
    schema: SchemaService | None = None,
    orders: OrderService | None = None,
) -> int:
    """
    Connect, make sure the storefront schema exists and run one demo operation.

    Returns:
        Process exit code
    """
    if demo not in DEMOS:
        raise ValueError(f"Unknown demo: {demo}. Available: {sorted(DEMOS)}")

    connection = connection or db
    schema = schema or schema_service
    orders = orders or order_service

    try:
        with connection.get_connection() as conn:
            try:
                schema.ensure_schema(conn)
            except (StorefrontError, SQLAlchemyError) as e:
                logger.error(f"❌ Schema setup failed: {e}")
                return EXIT_SETUP_FAILURE

            try:
                result = DEMOS[demo](conn, orders)
            except SQLAlchemyError as e:
                logger.error(f"❌ Database error while running '{demo}': {e}")
                return EXIT_DATABASE_ERROR
    except StorefrontConnectionError as e:
        logger.error(f"❌ Database connection failed: {e}")
        return EXIT_SETUP_FAILURE
    finally:
        connection.dispose()

    if not result["success"]:
        logger.warning(f"⚠️ {result['message']}")
        return EXIT_BUSINESS_FAILURE

    logger.info(f"✅ {result['message']}")
    return EXIT_OK
