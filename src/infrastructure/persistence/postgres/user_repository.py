"""SQLAlchemy implementation of UserRepositoryPort."""

from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports.user_repository import UserRepositoryPort
from src.domain.entities import User
from src.infrastructure.persistence.postgres.models import UserModel
from src.shared.exceptions import DuplicateEntityError

logger = structlog.get_logger(__name__)


class PostgresUserRepository(UserRepositoryPort):
    """SQLAlchemy implementation of User repository."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Args:
            session: AsyncSession instance for database operations
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        db_user = await self.session.get(UserModel, user_id)
        return db_user.to_domain_entity() if db_user else None

    async def find_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return db_user.to_domain_entity() if db_user else None

    async def save(self, user: User) -> User:
        """Persist a new user.

        Raises:
            DuplicateEntityError: If the e-mail address is already registered
        """
        db_user = UserModel(email=user.email)
        if user.id is not None:
            db_user.id = user.id

        self.session.add(db_user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.warning("duplicate_user_attempt", email=user.email)
            raise DuplicateEntityError("User", "email", user.email) from e

        logger.info("user_saved", user_id=str(db_user.id))
        return db_user.to_domain_entity()
