"""Infrastructure-specific exceptions for The Good Corner application."""


class InfrastructureException(Exception):  # noqa: N818
    """Base exception for all infrastructure-related errors."""

    pass


class CacheError(InfrastructureException):
    """Raised when the cache backend cannot serve a read or a write."""

    pass
