"""Storefront schema existence check and provisioning."""

import logging

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.schema import CreateSchema

from src.config import MYSQL_CONFIG, StorefrontConfig
from src.db.mysql_client import transaction
from src.exceptions import SchemaProvisioningError
from src.models import Order, OrderDetail

logger = logging.getLogger(__name__)

# MySQL ER_BAD_DB_ERROR: "Unknown database"
MYSQL_DB_NOT_FOUND = 1049


def vendor_error_code(error: DBAPIError) -> int | None:
    """Return the driver's numeric error code, if it reported one."""
    args = getattr(error.orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


class SchemaService:
    def __init__(self, config: StorefrontConfig | None = None):
        self.config = config or MYSQL_CONFIG
        # Parents before children
        self.tables = [Order.__table__, OrderDetail.__table__]

    def schema_exists(self, conn) -> bool:
        """
        Check whether the storefront schema exists by selecting it.

        Args:
            conn: Open SQLAlchemy connection

        Returns:
            False if MySQL reports an unknown database, True if the schema
            could be selected. Any other error is re-raised.
        """
        schema = conn.dialect.identifier_preparer.quote_identifier(self.config.schema_name)

        try:
            with transaction(conn):
                conn.execute(text(f"USE {schema}"))
        except DBAPIError as e:
            code = vendor_error_code(e)
            logger.warning(
                f"Schema probe failed. SQLState: {getattr(e.orig, 'sqlstate', None)} "
                f"Error Code: {code} Message: {e.orig}"
            )
            if conn.dialect.name == "mysql" and code == MYSQL_DB_NOT_FOUND:
                return False
            raise

        return True

    def provision_schema(self, conn) -> None:
        """Create the schema, then the order and order_details tables."""
        schema = self.config.schema_name
        logger.info(f"Creating {schema} database...")

        try:
            with transaction(conn):
                conn.execute(CreateSchema(schema))
        except SQLAlchemyError as e:
            logger.error(f"Error creating schema {schema}: {e}")
            raise SchemaProvisioningError(f"Could not create schema {schema}: {e}") from e

        if not self.schema_exists(conn):
            logger.error(f"Schema {schema} still missing after creation")
            raise SchemaProvisioningError(f"Schema {schema} does not exist after creation")

        for table in self.tables:
            try:
                with transaction(conn):
                    table.create(conn)
            except SQLAlchemyError as e:
                logger.error(f"Error creating table {table.name}: {e}")
                raise SchemaProvisioningError(f"Could not create table {table.name}: {e}") from e
            logger.info(f"Successfully created {table.name}")

    def ensure_schema(self, conn) -> bool:
        """
        Provision the schema only if it is missing.

        Returns:
            True if the schema had to be provisioned
        """
        if self.schema_exists(conn):
            logger.info(f"{self.config.schema_name} schema already exists")
            return False

        logger.info(f"{self.config.schema_name} schema does not exist")
        self.provision_schema(conn)
        return True


# Singleton instance
schema_service = SchemaService()
