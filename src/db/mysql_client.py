"""MySQL connection and utilities."""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from src.config import MYSQL_CONFIG, StorefrontConfig
from src.db.mysql_bootstrap import SCHEMA
from src.exceptions import StorefrontConnectionError

logger = logging.getLogger(__name__)


class MySQLConnection:
    def __init__(self, config: StorefrontConfig | None = None):
        self.config = config or MYSQL_CONFIG
        self._engine = None

    @property
    def url(self) -> URL:
        # No default database: the schema may not exist yet.
        return URL.create(
            "mysql+pymysql",
            username=self.config.user,
            password=self.config.password,
            host=self.config.host,
            port=self.config.port,
            query={"charset": self.config.charset},
        )

    @property
    def engine(self):
        if not self._engine:
            self._engine = create_engine(
                self.url,
                echo=self.config.echo,
                pool_pre_ping=True,
                execution_options={"schema_translate_map": {SCHEMA: self.config.schema_name}},
            )
        return self._engine

    @contextmanager
    def get_connection(self):
        """Open a single connection, closed again on every exit path."""
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            logger.error(f"Failed to connect to MySQL at {self.config.host}:{self.config.port}: {e}")
            raise StorefrontConnectionError(f"MySQL connection failed: {e}") from e

        try:
            version = ".".join(str(part) for part in conn.dialect.server_version_info or ())
            logger.info(f"Connected to {conn.dialect.name} {version} at {self.config.host}:{self.config.port}")
            yield conn
        finally:
            conn.close()

    def dispose(self):
        """Release pooled connections."""
        if self._engine:
            self._engine.dispose()
            self._engine = None


@contextmanager
def transaction(conn):
    """
    Run a block inside an explicit transaction on ``conn``.

    Commits when the block finishes, unless the block already ended the
    transaction itself (e.g. a business-rule rollback). Any exception rolls
    the transaction back and is re-raised, so the connection is never left
    with an open transaction.
    """
    trans = conn.begin()
    try:
        yield trans
    except Exception:
        if trans.is_active:
            trans.rollback()
        raise
    else:
        if trans.is_active:
            trans.commit()


# Singleton instance
db = MySQLConnection()
