"""Exception classes for pgreconcile."""


class ReconcileError(Exception):
    """Base exception for all pgreconcile errors."""


class ConfigError(ReconcileError):
    """Raised when the configuration file or options are invalid."""


class CatalogError(ReconcileError):
    """Raised when a catalog query fails. Aborts the whole comparison."""


class UnsupportedVersionError(ReconcileError):
    """Raised when a server version cannot be compared safely."""
