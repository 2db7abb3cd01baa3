"""Shared fixtures for the storefront tests."""

from unittest.mock import MagicMock

import pymysql
import pytest
from sqlalchemy.exc import OperationalError


class FakeTransaction:
    """Stand-in for a SQLAlchemy Transaction that records how it ended."""

    def __init__(self):
        self.is_active = True
        self.committed = False
        self.rolled_back = False

    def commit(self):
        self.is_active = False
        self.committed = True

    def rollback(self):
        self.is_active = False
        self.rolled_back = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.is_active:
            if exc_type:
                self.rollback()
            else:
                self.commit()
        return False


@pytest.fixture
def mock_conn():
    """Mocked MySQL connection; ``mock_conn.transactions`` lists every begin()."""
    conn = MagicMock()
    conn.dialect.name = "mysql"
    conn.dialect.identifier_preparer.quote_identifier.side_effect = lambda name: f"`{name}`"
    conn.transactions = []

    def begin():
        trans = FakeTransaction()
        conn.transactions.append(trans)
        return trans

    conn.begin.side_effect = begin
    return conn


def _make_result(rowcount=1, primary_key=None, scalars=None):
    result = MagicMock()
    result.rowcount = rowcount
    result.inserted_primary_key = (primary_key,)
    result.scalars.return_value.all.return_value = scalars or []
    return result


def _mysql_error(code, message):
    return OperationalError("USE `storefront`", {}, pymysql.err.OperationalError(code, message))


@pytest.fixture
def make_result():
    """Factory for mocked statement results."""
    return _make_result


@pytest.fixture
def mysql_error():
    """Factory for SQLAlchemy errors wrapping a PyMySQL error code."""
    return _mysql_error
