"""Configuration for the storefront MySQL connection."""

import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3306
DEFAULT_SCHEMA = "storefront"


class StorefrontConfig(BaseModel):
    """Connection and schema settings."""

    host: str = Field(default=DEFAULT_HOST, description="MySQL server host")
    port: int = Field(default=DEFAULT_PORT, description="MySQL server port")
    user: str | None = Field(default=None, description="MySQL username")
    password: str | None = Field(default=None, description="MySQL password")
    schema_name: str = Field(default=DEFAULT_SCHEMA, description="Schema holding the order tables")
    charset: str = Field(default="utf8mb4", description="Connection character set")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v


def load_config() -> StorefrontConfig:
    """Build the config from MYSQLUSER / MYSQLPASS (plus optional host/port overrides)."""
    return StorefrontConfig(
        host=os.getenv("MYSQLHOST", DEFAULT_HOST),
        port=int(os.getenv("MYSQLPORT", DEFAULT_PORT)),
        user=os.getenv("MYSQLUSER"),
        password=os.getenv("MYSQLPASS"),
    )


MYSQL_CONFIG = load_config()
