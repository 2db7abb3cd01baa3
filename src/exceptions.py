"""Exceptions raised by the storefront database layer."""


class StorefrontError(Exception):
    """Base class for storefront errors."""


class StorefrontConnectionError(StorefrontError):
    """Raised when a connection to the MySQL server cannot be opened."""


class SchemaProvisioningError(StorefrontError):
    """Raised when the storefront schema or its tables could not be created."""
