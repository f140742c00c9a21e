"""Exceptions shared across bounded contexts."""


class StorefrontError(Exception):
    """Base class for storefront errors."""


class StorageError(StorefrontError):
    """A key-value store could not be read or written.

    Services treat this as "no stored data" and fall back to defaults.
    """

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key
