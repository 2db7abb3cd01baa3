"""Tests for SchemaService."""

from unittest.mock import patch

import pytest
from sqlalchemy import Table
from sqlalchemy.exc import OperationalError
from sqlalchemy.schema import CreateSchema

from src.config import StorefrontConfig
from src.exceptions import SchemaProvisioningError
from src.services.schema_service import MYSQL_DB_NOT_FOUND, SchemaService, vendor_error_code


class TestSchemaService:
    @pytest.fixture
    def schema_service(self):
        return SchemaService(StorefrontConfig(user="test_user", password="test_pass"))

    @pytest.fixture
    def mock_table_create(self):
        with patch.object(Table, "create") as mock_create:
            yield mock_create

    def test_schema_exists(self, schema_service, mock_conn):
        """Test the probe succeeds when the schema can be selected."""
        assert schema_service.schema_exists(mock_conn) is True

        statement = mock_conn.execute.call_args.args[0]
        assert str(statement) == "USE `storefront`"
        assert mock_conn.transactions[0].committed is True

    def test_schema_missing(self, schema_service, mock_conn, mysql_error):
        """Test unknown database error means the schema is absent."""
        mock_conn.execute.side_effect = mysql_error(MYSQL_DB_NOT_FOUND, "Unknown database 'storefront'")

        assert schema_service.schema_exists(mock_conn) is False
        assert mock_conn.transactions[0].rolled_back is True

    def test_schema_probe_other_error(self, schema_service, mock_conn, mysql_error):
        """Test unrelated errors are not treated as schema absence."""
        mock_conn.execute.side_effect = mysql_error(1045, "Access denied for user 'test_user'")

        with pytest.raises(OperationalError):
            schema_service.schema_exists(mock_conn)

    def test_schema_probe_other_dialect(self, schema_service, mock_conn, mysql_error):
        """Test error code 1049 is only trusted from MySQL."""
        mock_conn.dialect.name = "sqlite"
        mock_conn.execute.side_effect = mysql_error(MYSQL_DB_NOT_FOUND, "Unknown database 'storefront'")

        with pytest.raises(OperationalError):
            schema_service.schema_exists(mock_conn)

    def test_custom_schema_name(self, mock_conn):
        """Test the probe uses the configured schema name."""
        service = SchemaService(StorefrontConfig(schema_name="shop_test"))

        service.schema_exists(mock_conn)

        assert str(mock_conn.execute.call_args.args[0]) == "USE `shop_test`"

    def test_provision_schema(self, schema_service, mock_conn, mock_table_create):
        """Test provisioning creates the schema, then order, then order_details."""
        schema_service.provision_schema(mock_conn)

        create_schema, use_schema = (call.args[0] for call in mock_conn.execute.call_args_list)
        assert isinstance(create_schema, CreateSchema)
        assert create_schema.element == "storefront"
        assert str(use_schema) == "USE `storefront`"
        assert [table.name for table in schema_service.tables] == ["order", "order_details"]
        assert mock_table_create.call_count == 2
        assert all(t.committed for t in mock_conn.transactions)

    def test_provision_schema_create_fails(self, schema_service, mock_conn, mock_table_create, mysql_error):
        """Test a failed CREATE SCHEMA aborts provisioning."""
        mock_conn.execute.side_effect = mysql_error(1044, "Access denied to database 'storefront'")

        with pytest.raises(SchemaProvisioningError):
            schema_service.provision_schema(mock_conn)

        mock_table_create.assert_not_called()

    def test_provision_schema_still_missing(self, schema_service, mock_conn, mock_table_create, mysql_error):
        """Test provisioning aborts when the schema cannot be selected afterwards."""
        mock_conn.execute.side_effect = [None, mysql_error(MYSQL_DB_NOT_FOUND, "Unknown database 'storefront'")]

        with pytest.raises(SchemaProvisioningError):
            schema_service.provision_schema(mock_conn)

        mock_table_create.assert_not_called()

    def test_provision_table_create_fails(self, schema_service, mock_conn, mock_table_create):
        """Test a failed CREATE TABLE aborts provisioning."""
        mock_table_create.side_effect = [None, OperationalError("CREATE TABLE", {}, Exception("disk full"))]

        with pytest.raises(SchemaProvisioningError, match="order_details"):
            schema_service.provision_schema(mock_conn)

        assert mock_conn.transactions[-1].rolled_back is True

    def test_ensure_schema_existing(self, schema_service, mock_conn, mock_table_create):
        """Test an existing schema is not provisioned again."""
        assert schema_service.ensure_schema(mock_conn) is False

        assert mock_conn.execute.call_count == 1
        mock_table_create.assert_not_called()

    def test_ensure_schema_missing(self, schema_service, mock_conn, mock_table_create, mysql_error):
        """Test a missing schema is provisioned, then found."""
        mock_conn.execute.side_effect = [
            mysql_error(MYSQL_DB_NOT_FOUND, "Unknown database 'storefront'"),
            None,
            None,
        ]

        assert schema_service.ensure_schema(mock_conn) is True
        assert mock_table_create.call_count == 2

    def test_vendor_error_code(self, mysql_error):
        """Test extracting the driver error code."""
        assert vendor_error_code(mysql_error(1049, "Unknown database")) == 1049
        assert vendor_error_code(OperationalError("USE", {}, Exception("no code"))) is None
