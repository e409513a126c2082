"""User API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.application.ports import UserRepositoryPort
from src.application.use_cases import CreateUserUseCase, GetUserUseCase
from src.interfaces.api.dependencies import get_user_repository
from src.interfaces.api.v1.schemas import CreateUserRequest, UserResponse

router = APIRouter()


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
async def create_user(
    request: CreateUserRequest,
    repository: UserRepositoryPort = Depends(get_user_repository),  # noqa: B008
) -> UserResponse:
    user = await CreateUserUseCase(repository).execute(request.email)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(
    user_id: UUID,
    repository: UserRepositoryPort = Depends(get_user_repository),  # noqa: B008
) -> UserResponse:
    user = await GetUserUseCase(repository).execute(user_id)
    return UserResponse.model_validate(user)
