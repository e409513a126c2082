"""Port interface for User repository."""

from abc import ABC, abstractmethod
from uuid import UUID

from src.domain.entities.user import User


class UserRepositoryPort(ABC):
    """Abstract interface for User persistence operations."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find a user by ID.

        Args:
            user_id: The UUID of the user

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Find a user by e-mail address.

        Args:
            email: Normalized (lower-case) e-mail address

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist a new user and return it with its generated ID."""
        pass
