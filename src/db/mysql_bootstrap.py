"""
This file defines the declarative base shared by the storefront models.
To prevent circular imports when creating all the tables."""

from sqlalchemy.orm.decl_api import declarative_base

from src.config import DEFAULT_SCHEMA

# Models are declared in this schema; the engine remaps it to the configured one.
SCHEMA = DEFAULT_SCHEMA

Base = declarative_base()
