"""User registration and lookup."""

from uuid import UUID

import structlog

from src.application.ports import UserRepositoryPort
from src.domain.entities import User
from src.shared.exceptions import DuplicateEntityError, UserNotFoundError

logger = structlog.get_logger(__name__)


class CreateUserUseCase:
    """Use case for registering a user by e-mail address."""

    def __init__(self, user_repository: UserRepositoryPort):
        self._user_repository = user_repository

    async def execute(self, email: str) -> User:
        """Register a new user.

        Args:
            email: E-mail address, normalized to lower case

        Returns:
            The saved user

        Raises:
            DuplicateEntityError: If the address is already registered
        """
        user = User(email=email)
        if await self._user_repository.find_by_email(user.email) is not None:
            raise DuplicateEntityError("User", "email", user.email)

        saved = await self._user_repository.save(user)
        logger.info("user_registered", user_id=str(saved.id))
        return saved


class GetUserUseCase:
    """Use case for fetching one user."""

    def __init__(self, user_repository: UserRepositoryPort):
        self._user_repository = user_repository

    async def execute(self, user_id: UUID) -> User:
        """Return the user or raise UserNotFoundError."""
        user = await self._user_repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
