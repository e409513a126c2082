"""
Custom exceptions for The Good Corner application.

This module defines domain-specific exceptions that can be raised
throughout the application and handled consistently at the API layer.
"""

from typing import Any

from .infrastructure_exceptions import CacheError, InfrastructureException


class GoodCornerException(Exception):
    """Base exception for all Good Corner custom exceptions."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: User-friendly error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ResourceNotFoundError(GoodCornerException):
    """Raised when an identifier does not resolve to a stored entity."""

    def __init__(self, resource: str, identifier: Any, error_code: str) -> None:
        """
        Initialize ResourceNotFoundError.

        Args:
            resource: Human-readable resource name (e.g. "Ad")
            identifier: The identifier that was not found
            error_code: Machine-readable error code
        """
        super().__init__(
            message=f"{resource} with ID {identifier} does not exist.",
            error_code=error_code,
            details={"resource": resource.lower(), "identifier": str(identifier)},
        )


class AdNotFoundError(ResourceNotFoundError):
    """Raised when an ad cannot be found."""

    def __init__(self, ad_id: Any) -> None:
        super().__init__("Ad", ad_id, "AD_NOT_FOUND")


class CategoryNotFoundError(ResourceNotFoundError):
    """Raised when a category cannot be found."""

    def __init__(self, category_id: Any) -> None:
        super().__init__("Category", category_id, "CATEGORY_NOT_FOUND")


class TagNotFoundError(ResourceNotFoundError):
    """Raised when a tag cannot be found."""

    def __init__(self, tag_id: Any) -> None:
        super().__init__("Tag", tag_id, "TAG_NOT_FOUND")


class UserNotFoundError(ResourceNotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: Any) -> None:
        super().__init__("User", user_id, "USER_NOT_FOUND")


class DuplicateEntityError(GoodCornerException):
    """Raised when attempting to create an entity that already exists."""

    def __init__(self, resource: str, field: str, value: str) -> None:
        """
        Initialize DuplicateEntityError.

        Args:
            resource: Human-readable resource name
            field: The field holding the conflicting value
            value: The conflicting value
        """
        super().__init__(
            message=f"{resource} with {field} '{value}' already exists",
            error_code="DUPLICATE_ENTITY",
            details={"resource": resource.lower(), "field": field, "value": value},
        )


class SearchServiceError(GoodCornerException):
    """Raised when the search service encounters an error."""

    def __init__(self, operation: str, reason: str) -> None:
        """
        Initialize SearchServiceError.

        Args:
            operation: The search operation that failed
            reason: Reason for the failure
        """
        super().__init__(
            message=f"Search operation '{operation}' failed: {reason}",
            error_code="SEARCH_SERVICE_ERROR",
            details={"operation": operation, "reason": reason},
        )


__all__ = [
    "GoodCornerException",
    "ResourceNotFoundError",
    "AdNotFoundError",
    "CategoryNotFoundError",
    "TagNotFoundError",
    "UserNotFoundError",
    "DuplicateEntityError",
    "SearchServiceError",
    "InfrastructureException",
    "CacheError",
]
